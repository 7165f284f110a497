"""Rate limit gate for paginated GitHub API requests."""

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import httpx
from rich.console import Console

from github_paginator.context import Context
from github_paginator.exceptions import RateLimitHeaderError
from github_paginator.models.response import Rate, Response

logger = logging.getLogger(__name__)

console = Console(stderr=True)

# Warn once remaining requests drop below this
LOW_REMAINING_THRESHOLD = 10

_LIMIT_HEADER = "x-ratelimit-limit"
_REMAINING_HEADER = "x-ratelimit-remaining"
_RESET_HEADER = "x-ratelimit-reset"


def format_time_remaining(seconds: float) -> str:
    """Format seconds into a human-friendly string."""
    if seconds <= 0:
        return "now"

    seconds = int(seconds)

    if seconds < 60:
        return f"{seconds} second{'s' if seconds != 1 else ''}"
    elif seconds < 3600:
        minutes = seconds // 60
        secs = seconds % 60
        if secs > 0:
            return f"{minutes} min {secs} sec"
        return f"{minutes} minute{'s' if minutes != 1 else ''}"
    else:
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        if minutes > 0:
            return f"{hours} hr {minutes} min"
        return f"{hours} hour{'s' if hours != 1 else ''}"


def format_reset_time(reset_timestamp: float) -> str:
    """Format reset timestamp to a human-readable local time."""
    return datetime.fromtimestamp(reset_timestamp).strftime("%H:%M:%S")


def _parse_header(headers: Mapping[str, str], name: str, cast):
    value = headers[name]
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise RateLimitHeaderError(name, value) from e


@dataclass
class RateLimitState:
    """Track rate limit state for an API."""

    limit: int = 5000
    remaining: int = 5000
    reset_time: float = field(default_factory=lambda: time.time() + 3600)

    @property
    def seconds_until_reset(self) -> float:
        """Get seconds until rate limit resets."""
        return max(0, self.reset_time - time.time())

    def update_from_headers(self, headers: Mapping[str, str]) -> bool:
        """Update state from GitHub API response headers.

        Returns:
            True if any rate limit header was present

        Raises:
            RateLimitHeaderError: If a rate limit header is not numeric
        """
        lowered = {k.lower(): v for k, v in headers.items()}
        seen = False
        if _LIMIT_HEADER in lowered:
            self.limit = _parse_header(lowered, _LIMIT_HEADER, int)
            seen = True
        if _REMAINING_HEADER in lowered:
            self.remaining = _parse_header(lowered, _REMAINING_HEADER, int)
            seen = True
        if _RESET_HEADER in lowered:
            self.reset_time = _parse_header(lowered, _RESET_HEADER, float)
            seen = True
        return seen

    def update_from_rate(self, rate: Rate) -> None:
        """Update state from a pre-parsed rate snapshot."""
        self.limit = rate.limit
        self.remaining = rate.remaining
        self.reset_time = rate.reset

    def snapshot(self) -> Rate:
        return Rate(limit=self.limit, remaining=self.remaining, reset=self.reset_time)


class HeaderRateLimiter:
    """Rate limiter capability that reads the budget from each page response.

    Paging continues while ``remaining`` stays above ``min_remaining``. A page
    without rate limit headers does not change the decision.
    """

    def __init__(self, min_remaining: int = 0, state: RateLimitState | None = None):
        self.min_remaining = min_remaining
        self.state = state or RateLimitState()

    async def __call__(self, ctx: Context, response: Response) -> bool:
        if response.rate is not None:
            self.state.update_from_rate(response.rate)
        elif not self.state.update_from_headers(response.headers):
            return True

        remaining = self.state.remaining
        if remaining <= self.min_remaining:
            human_time = format_time_remaining(self.state.seconds_until_reset)
            reset_at = format_reset_time(self.state.reset_time)
            logger.info(
                "Rate limit floor reached (%d/%d remaining), stopping pagination",
                remaining,
                self.state.limit,
            )
            console.print(
                f"[yellow]Rate limit reached ({remaining}/{self.state.limit} remaining). "
                f"Resets in: {human_time} (at {reset_at})[/yellow]"
            )
            return False

        if remaining < LOW_REMAINING_THRESHOLD:
            console.print(
                f"[yellow]Warning: Only {remaining}/{self.state.limit} API requests remaining[/yellow]"
            )

        return True


async def check_rate_limit_from_api(
    api_url: str = "https://api.github.com",
    token: Optional[str] = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict:
    """Check current rate limit status from GitHub API.

    Args:
        api_url: GitHub API base URL
        token: Optional GitHub token for authentication
        transport: Optional httpx transport (for testing)

    Returns:
        Dict with core rate limit info including remaining and reset time
    """
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": "github-paginator/0.1.0",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        async with httpx.AsyncClient(transport=transport) as client:
            response = await client.get(f"{api_url}/rate_limit", headers=headers)

            if response.status_code == 200:
                core = response.json().get("resources", {}).get("core", {})
                return {
                    "core": {
                        "limit": core.get("limit", 60),
                        "remaining": core.get("remaining", 0),
                        "reset": core.get("reset", time.time() + 3600),
                    },
                }
    except httpx.HTTPError as e:
        console.print(f"[dim]Could not check rate limit: {e}[/dim]")

    # Return defaults if we can't check
    return {"core": {"limit": 60, "remaining": 60, "reset": time.time() + 3600}}


def check_and_report_rate_limit(rate_info: dict, is_authenticated: bool) -> bool:
    """Check rate limit and report status to user.

    Returns:
        True if OK to proceed, False if rate limit exhausted
    """
    core = rate_info["core"]
    remaining = core["remaining"]
    limit = core["limit"]
    reset_time = core["reset"]

    if remaining == 0:
        human_time = format_time_remaining(reset_time - time.time())
        reset_at = format_reset_time(reset_time)

        console.print(f"\n[red]Rate limit exhausted[/red] (0/{limit} requests remaining)")
        console.print(f"[yellow]  Resets in: {human_time} (at {reset_at})[/yellow]")

        if not is_authenticated:
            console.print(
                "[dim]  Tip: Set GITHUB_PAGINATOR_TOKEN for 5,000 requests/hour instead of 60[/dim]"
            )

        console.print()
        return False

    if remaining < LOW_REMAINING_THRESHOLD:
        console.print(
            f"[yellow]Warning: Only {remaining}/{limit} API requests remaining[/yellow]"
        )

    return True
