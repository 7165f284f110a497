"""GitHub REST API client and lister capability."""

import asyncio
import logging
from typing import Any, Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from github_paginator.config import Config, get_config
from github_paginator.context import Context
from github_paginator.exceptions import (
    DeadlineExceededError,
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from github_paginator.models.options import ListOptions
from github_paginator.models.response import Response
from github_paginator.utils.pagination import build_paginated_url

logger = logging.getLogger(__name__)


class GitHubRestClient:
    """Async client for GitHub REST API."""

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or get_config()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> dict[str, str]:
        """Get headers for API requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "github-paginator/0.1.0",
        }
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.github_api_url,
                headers=self._get_headers(),
                timeout=self.config.request_timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "GitHubRestClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @retry(
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def _request(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        """Make an API request with retries on transport errors."""
        client = await self._get_client()
        response = await client.request(method, endpoint, **kwargs)

        if response.status_code == 404:
            raise GitHubNotFoundError(
                f"Resource not found: {endpoint}",
                response_body=_json_body(response),
            )
        elif response.status_code == 403:
            body = _json_body(response) or {}
            if "rate limit" in body.get("message", "").lower():
                reset = response.headers.get("x-ratelimit-reset")
                raise GitHubRateLimitError(
                    "Rate limit exceeded",
                    response_body=body,
                    reset_time=float(reset) if reset and reset.isdigit() else None,
                )
            raise GitHubAPIError(
                f"Forbidden: {body.get('message', 'Unknown error')}",
                status_code=403,
                response_body=body,
            )
        elif response.status_code >= 500:
            raise GitHubAPIError(
                f"Server error: {response.status_code}",
                status_code=response.status_code,
            )
        elif response.status_code >= 400:
            body = _json_body(response) or {}
            raise GitHubAPIError(
                f"API error: {body.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_body=body,
            )

        return response

    async def list_page(
        self,
        endpoint: str,
        opts: ListOptions,
    ) -> tuple[list[dict[str, Any]], Response]:
        """Fetch a single page of a paginated endpoint.

        Args:
            endpoint: API endpoint, may already carry query parameters
            opts: Page number and page size to request

        Returns:
            Items on the page and the page's continuation metadata
        """
        url = build_paginated_url(endpoint, opts.page, opts.per_page)
        response = await self._request("GET", url)
        data = response.json()
        page = Response.from_headers(response.headers, status_code=response.status_code)

        # Search results are nested in 'items'
        if isinstance(data, dict) and "items" in data:
            items = data["items"]
        elif isinstance(data, list):
            items = data
        else:
            # Single object or other envelope, not pageable
            items = [data]
            page.next_page = 0

        logger.debug("GET %s page=%d -> %d items", endpoint, opts.page, len(items))
        return items, page


class RestLister:
    """Lister capability that fetches pages of one REST endpoint.

    The request is abandoned once ``ctx`` is cancelled or its deadline passes.
    """

    def __init__(self, client: GitHubRestClient, endpoint: str):
        self.client = client
        self.endpoint = endpoint

    async def __call__(
        self, ctx: Context, opts: ListOptions
    ) -> tuple[list[dict[str, Any]], Response]:
        err = ctx.err()
        if err is not None:
            raise err

        remaining = ctx.remaining()
        if remaining is None:
            return await self.client.list_page(self.endpoint, opts)

        try:
            return await asyncio.wait_for(
                self.client.list_page(self.endpoint, opts), timeout=remaining
            )
        except asyncio.TimeoutError as e:
            raise DeadlineExceededError() from e


def _json_body(response: httpx.Response) -> Optional[dict]:
    if not response.content:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None
