"""GitHub Paginator - Walk every page of a paged API under a rate budget.

The core driver takes three async capabilities: a lister that fetches one
page, a processor called for every item, and a rate limiter consulted once
per page. It returns everything processed so far along with the error, if
any, that stopped the walk.

Example usage:
    ```python
    from github_paginator import (
        Context,
        GitHubRestClient,
        HeaderRateLimiter,
        RestLister,
        noop_processor,
        paginate,
    )

    async with GitHubRestClient() as client:
        result = await paginate(
            Context.with_timeout(60),
            RestLister(client, "/users/torvalds/repos"),
            noop_processor,
            HeaderRateLimiter(min_remaining=10),
        )
        repos = result.raise_for_error()
    ```
"""

from importlib.metadata import PackageNotFoundError, version

from github_paginator.config import Config
from github_paginator.context import Context
from github_paginator.exceptions import (
    DeadlineExceededError,
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubPaginatorError,
    GitHubRateLimitError,
    PaginationCancelledError,
    RateLimitHeaderError,
)
from github_paginator.models import (
    ListOptions,
    PaginationResult,
    PaginatorOpts,
    Rate,
    Response,
)
from github_paginator.paginator import (
    always_continue,
    collect_into,
    list_opts,
    noop_processor,
    paginate,
)
from github_paginator.services.github_rest_client import GitHubRestClient, RestLister
from github_paginator.utils.rate_limiter import HeaderRateLimiter

try:
    __version__ = version("github-paginator")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"

__all__ = [
    # Core driver
    "paginate",
    "list_opts",
    "always_continue",
    "noop_processor",
    "collect_into",
    "Context",
    # Configuration
    "Config",
    # Capabilities
    "GitHubRestClient",
    "RestLister",
    "HeaderRateLimiter",
    # Exceptions
    "GitHubPaginatorError",
    "PaginationCancelledError",
    "DeadlineExceededError",
    "RateLimitHeaderError",
    "GitHubAPIError",
    "GitHubRateLimitError",
    "GitHubNotFoundError",
    # Models
    "ListOptions",
    "PaginatorOpts",
    "Rate",
    "Response",
    "PaginationResult",
]
