"""Utility modules for GitHub Paginator."""

from github_paginator.utils.pagination import (
    build_paginated_url,
    get_page_number,
    parse_link_header,
)

__all__ = [
    "parse_link_header",
    "get_page_number",
    "build_paginated_url",
]
