"""Page response metadata models."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from github_paginator.utils.pagination import get_page_number, parse_link_header


class Rate(BaseModel):
    """Rate limit snapshot taken from a single response."""

    limit: int = 0
    remaining: int = 0
    reset: float = 0.0  # Unix timestamp


class Response(BaseModel):
    """Continuation metadata for one fetched page.

    ``next_page`` is the sole exhaustion signal: 0 means there are no
    further pages.
    """

    next_page: int = 0
    prev_page: int = 0
    first_page: int = 0
    last_page: int = 0
    status_code: int = 200
    headers: dict[str, str] = Field(default_factory=dict)
    rate: Rate | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str], status_code: int = 200) -> "Response":
        """Build from HTTP response headers, reading the Link header for page numbers."""
        lowered = {k.lower(): v for k, v in headers.items()}
        links = parse_link_header(lowered.get("link"))

        return cls(
            next_page=_page_of(links.get("next")),
            prev_page=_page_of(links.get("prev")),
            first_page=_page_of(links.get("first")),
            last_page=_page_of(links.get("last")),
            status_code=status_code,
            headers=lowered,
        )

    @property
    def has_next(self) -> bool:
        """Whether the source reported another page."""
        return bool(self.next_page)


def _page_of(url: Any) -> int:
    if not url:
        return 0
    return get_page_number(url) or 0
