"""Exceptions for GitHub Paginator.

Exception Hierarchy:
    GitHubPaginatorError (base)
    ├── PaginationCancelledError (context cancelled before the next page fetch)
    │   └── DeadlineExceededError (context deadline passed)
    ├── RateLimitHeaderError (malformed x-ratelimit-* headers)
    └── GitHubAPIError (HTTP API errors with status codes)
        ├── GitHubRateLimitError (403 rate limit from API response)
        └── GitHubNotFoundError (404 not found)

Usage:
    - PaginationCancelledError / DeadlineExceededError: returned in
      PaginationResult.error when the governing Context fires
    - RateLimitHeaderError: raised by the header rate limiter when it cannot
      evaluate the page's rate budget (distinct from "stop paging")
    - GitHubAPIError family: raised by the REST lister on error responses
"""

__all__ = [
    "GitHubPaginatorError",
    "PaginationCancelledError",
    "DeadlineExceededError",
    "RateLimitHeaderError",
    "GitHubAPIError",
    "GitHubRateLimitError",
    "GitHubNotFoundError",
]


class GitHubPaginatorError(Exception):
    """Base exception for all GitHub Paginator errors."""

    pass


class PaginationCancelledError(GitHubPaginatorError):
    """Raised when the pagination context has been cancelled."""

    def __init__(self, message: str = "context canceled"):
        super().__init__(message)


class DeadlineExceededError(PaginationCancelledError):
    """Raised when the pagination context deadline has passed."""

    def __init__(self, message: str = "context deadline exceeded"):
        super().__init__(message)


class RateLimitHeaderError(GitHubPaginatorError):
    """Raised when rate limit headers on a page response cannot be parsed."""

    def __init__(self, header: str, value: str):
        super().__init__(f"Malformed rate limit header {header}: {value!r}")
        self.header = header
        self.value = value


class GitHubAPIError(GitHubPaginatorError):
    """Base exception for GitHub API errors (HTTP responses with error status codes)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: dict | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class GitHubRateLimitError(GitHubAPIError):
    """Raised when GitHub API returns a rate limit error (HTTP 403).

    For stopping before the budget runs out, see HeaderRateLimiter.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = 403,
        response_body: dict | None = None,
        reset_time: float | None = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)
        self.reset_time = reset_time


class GitHubNotFoundError(GitHubAPIError):
    """Raised when a GitHub resource is not found (HTTP 404)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = 404,
        response_body: dict | None = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)
