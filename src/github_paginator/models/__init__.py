"""Data models for GitHub Paginator."""

from github_paginator.models.options import ListOptions, PaginatorOpts
from github_paginator.models.response import Rate, Response
from github_paginator.models.result import PaginationResult

__all__ = [
    "ListOptions",
    "PaginatorOpts",
    "Rate",
    "Response",
    "PaginationResult",
]
