"""Pagination option models."""

from pydantic import BaseModel, Field


class ListOptions(BaseModel):
    """Page request sent to a lister.

    Zero values mean "unset", mirroring the GitHub API query parameters
    ``page`` and ``per_page``.
    """

    page: int = 0
    per_page: int = 0


class PaginatorOpts(BaseModel):
    """Options accepted by the paginator."""

    list_options: ListOptions | None = None
    # optional safety bound, None means unbounded
    max_pages: int | None = Field(default=None, ge=1)
