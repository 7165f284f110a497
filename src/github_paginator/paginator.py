"""Generic pagination driver.

Walks every page of a source, hands each item to a processor and consults a
rate-limit gate once per page. The three concerns are injected as async
callables so the loop knows nothing about HTTP, headers or storage.
"""

import logging
from typing import Any, Awaitable, Callable, TypeVar

from github_paginator.config import DEFAULT_PER_PAGE
from github_paginator.context import Context
from github_paginator.models.options import ListOptions, PaginatorOpts
from github_paginator.models.response import Response
from github_paginator.models.result import PaginationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

Lister = Callable[[Context, ListOptions], Awaitable[tuple[list[T], Response]]]
Processor = Callable[[Context, T], Awaitable[None]]
RateLimiter = Callable[[Context, Response], Awaitable[bool]]


def list_opts(opts: PaginatorOpts | None) -> ListOptions:
    """Fill in default page and page size.

    When ``opts.list_options`` exists it is updated in place and returned, so
    callers holding that object see the defaulted ``per_page``. Otherwise a
    fresh ``ListOptions(page=1, per_page=100)`` is returned.
    """
    if opts is None or opts.list_options is None:
        return ListOptions(page=1, per_page=DEFAULT_PER_PAGE)

    options = opts.list_options
    if options.per_page == 0:
        options.per_page = DEFAULT_PER_PAGE
    return options


async def paginate(
    ctx: Context,
    lister: Lister[T],
    processor: Processor[T],
    rate_limiter: RateLimiter,
    opts: PaginatorOpts | None = None,
) -> PaginationResult[T]:
    """Walk all pages from ``lister`` and process every item.

    Pages are fetched and processed strictly one at a time. The run stops on
    the first lister, processor or rate limiter error, when the rate limiter
    says not to continue, when the source reports no next page, or when
    ``ctx`` is cancelled. Whatever was processed successfully up to that point
    is returned in the result together with the error, if any.

    Args:
        ctx: Cancellation context, checked before every page fetch
        lister: Fetches one page for the given ListOptions
        processor: Called once per item, in order
        rate_limiter: Called once per page after its items are processed
        opts: Starting page, page size and optional max_pages bound

    Returns:
        PaginationResult with the accumulated items and the stopping error
    """
    options = list_opts(opts)
    max_pages = opts.max_pages if opts is not None else None
    result: PaginationResult[T] = PaginationResult()

    while True:
        err = ctx.err()
        if err is not None:
            logger.debug("Pagination cancelled before page %d: %s", options.page, err)
            result.error = err
            return result

        try:
            items, response = await lister(ctx, options)
        except Exception as e:
            logger.debug("Lister failed on page %d: %s", options.page, e)
            result.error = e
            return result
        result.pages_fetched += 1

        logger.debug(
            "Fetched page %d (%d items, next_page=%s)",
            options.page,
            len(items),
            response.next_page,
        )

        for item in items:
            try:
                await processor(ctx, item)
            except Exception as e:
                logger.debug("Processor failed on page %d: %s", options.page, e)
                result.error = e
                return result
            result.items.append(item)

        try:
            should_continue = await rate_limiter(ctx, response)
        except Exception as e:
            logger.debug("Rate limiter failed on page %d: %s", options.page, e)
            result.error = e
            return result

        if not should_continue:
            logger.debug("Rate limiter stopped pagination after page %d", options.page)
            return result

        if not response.next_page:
            logger.debug("No more pages after page %d", options.page)
            return result

        if max_pages is not None and result.pages_fetched >= max_pages:
            logger.info("Stopping after max_pages=%d", max_pages)
            return result

        options.page = response.next_page


async def always_continue(ctx: Context, response: Response) -> bool:
    """Rate limiter that never stops pagination."""
    return True


async def noop_processor(ctx: Context, item: Any) -> None:
    """Processor that accepts every item unchanged."""
    return None


def collect_into(sink: list) -> Processor:
    """Build a processor that appends each item to ``sink``."""

    async def _collect(ctx: Context, item: Any) -> None:
        sink.append(item)

    return _collect
