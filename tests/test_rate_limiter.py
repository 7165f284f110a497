"""Tests for rate limiter module."""

import time

import httpx
import pytest

from github_paginator.context import Context
from github_paginator.exceptions import RateLimitHeaderError
from github_paginator.models.response import Rate, Response
from github_paginator.utils.rate_limiter import (
    LOW_REMAINING_THRESHOLD,
    HeaderRateLimiter,
    RateLimitState,
    check_and_report_rate_limit,
    check_rate_limit_from_api,
    format_reset_time,
    format_time_remaining,
)


def _response(remaining, limit=5000, reset=None):
    reset = reset if reset is not None else time.time() + 600
    return Response(
        headers={
            "x-ratelimit-limit": str(limit),
            "x-ratelimit-remaining": str(remaining),
            "x-ratelimit-reset": str(int(reset)),
        }
    )


class TestFormatTimeRemaining:
    """Tests for format_time_remaining function."""

    def test_zero_seconds(self):
        """Test formatting 0 seconds."""
        assert format_time_remaining(0) == "now"

    def test_negative_seconds(self):
        """Test formatting negative seconds."""
        assert format_time_remaining(-10) == "now"

    def test_seconds_only(self):
        """Test formatting seconds under a minute."""
        assert format_time_remaining(30) == "30 seconds"
        assert format_time_remaining(1) == "1 second"

    def test_minutes(self):
        """Test formatting minutes with and without seconds."""
        assert format_time_remaining(120) == "2 minutes"
        assert format_time_remaining(90) == "1 min 30 sec"

    def test_hours(self):
        """Test formatting hours with and without minutes."""
        assert format_time_remaining(3600) == "1 hour"
        assert format_time_remaining(5400) == "1 hr 30 min"


class TestFormatResetTime:
    """Tests for format_reset_time function."""

    def test_formats_timestamp(self):
        """Test that timestamp is formatted as HH:MM:SS."""
        result = format_reset_time(1700000000)
        assert len(result.split(":")) == 3


class TestRateLimitState:
    """Tests for RateLimitState header parsing."""

    def test_update_from_headers(self):
        """Test state is read from x-ratelimit headers."""
        state = RateLimitState()
        seen = state.update_from_headers(
            {"X-RateLimit-Limit": "60", "X-RateLimit-Remaining": "12", "X-RateLimit-Reset": "1700000000"}
        )

        assert seen is True
        assert state.limit == 60
        assert state.remaining == 12
        assert state.reset_time == 1700000000.0

    def test_no_headers(self):
        """Test missing headers leave state alone."""
        state = RateLimitState(limit=10, remaining=10)

        assert state.update_from_headers({}) is False
        assert state.remaining == 10

    def test_malformed_header_raises(self):
        """Test a non-numeric header raises RateLimitHeaderError."""
        state = RateLimitState()

        with pytest.raises(RateLimitHeaderError) as exc_info:
            state.update_from_headers({"x-ratelimit-remaining": "lots"})
        assert exc_info.value.header == "x-ratelimit-remaining"

    def test_snapshot(self):
        state = RateLimitState(limit=60, remaining=3, reset_time=100.0)
        assert state.snapshot() == Rate(limit=60, remaining=3, reset=100.0)


class TestHeaderRateLimiter:
    """Tests for the header-driven rate limiter capability."""

    @pytest.mark.asyncio
    async def test_continues_with_budget(self):
        limiter = HeaderRateLimiter()
        assert await limiter(Context.background(), _response(remaining=4000)) is True
        assert limiter.state.remaining == 4000

    @pytest.mark.asyncio
    async def test_stops_when_exhausted(self):
        limiter = HeaderRateLimiter()
        assert await limiter(Context.background(), _response(remaining=0)) is False

    @pytest.mark.asyncio
    async def test_stops_at_floor(self):
        limiter = HeaderRateLimiter(min_remaining=50)
        assert await limiter(Context.background(), _response(remaining=50)) is False
        assert await limiter(Context.background(), _response(remaining=51)) is True

    @pytest.mark.asyncio
    async def test_low_budget_still_continues(self):
        limiter = HeaderRateLimiter()
        response = _response(remaining=LOW_REMAINING_THRESHOLD - 1, limit=60)
        assert await limiter(Context.background(), response) is True

    @pytest.mark.asyncio
    async def test_no_headers_continues(self):
        limiter = HeaderRateLimiter(min_remaining=10)
        assert await limiter(Context.background(), Response()) is True

    @pytest.mark.asyncio
    async def test_prefers_parsed_rate(self):
        limiter = HeaderRateLimiter()
        response = Response(rate=Rate(limit=60, remaining=0, reset=time.time() + 60))
        assert await limiter(Context.background(), response) is False

    @pytest.mark.asyncio
    async def test_malformed_headers_raise(self):
        limiter = HeaderRateLimiter()
        response = Response(headers={"x-ratelimit-remaining": "n/a"})
        with pytest.raises(RateLimitHeaderError):
            await limiter(Context.background(), response)


class TestCheckAndReportRateLimit:
    """Tests for check_and_report_rate_limit function."""

    def test_returns_true_when_remaining(self):
        """Test returns True when requests remaining."""
        rate_info = {"core": {"remaining": 100, "limit": 5000, "reset": time.time() + 3600}}
        assert check_and_report_rate_limit(rate_info, is_authenticated=True) is True

    def test_returns_false_when_exhausted(self):
        """Test returns False when rate limit exhausted."""
        rate_info = {"core": {"remaining": 0, "limit": 60, "reset": time.time() + 3600}}
        assert check_and_report_rate_limit(rate_info, is_authenticated=False) is False

    def test_returns_true_when_low_but_not_exhausted(self):
        """Test returns True when running low but not exhausted."""
        rate_info = {"core": {"remaining": 5, "limit": 60, "reset": time.time() + 3600}}
        assert check_and_report_rate_limit(rate_info, is_authenticated=False) is True


class TestCheckRateLimitFromApi:
    """Tests for check_rate_limit_from_api."""

    @pytest.mark.asyncio
    async def test_reads_core_resource(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/rate_limit"
            assert request.headers["Authorization"] == "Bearer tok"
            return httpx.Response(
                200,
                json={"resources": {"core": {"limit": 5000, "remaining": 4321, "reset": 1}}},
            )

        info = await check_rate_limit_from_api(
            token="tok", transport=httpx.MockTransport(handler)
        )

        assert info["core"] == {"limit": 5000, "remaining": 4321, "reset": 1}

    @pytest.mark.asyncio
    async def test_falls_back_on_error_status(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(500))

        info = await check_rate_limit_from_api(transport=transport)

        assert info["core"]["limit"] == 60
