"""Link header helpers for GitHub-style pagination."""

import re
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlparse

_LINK_PATTERN = re.compile(r'<([^>]+)>;\s*rel="([^"]+)"')


def parse_link_header(link_header: Optional[str]) -> dict[str, str]:
    """Parse GitHub's Link header into a dictionary of rel -> url.

    Example Link header:
    <https://api.github.com/users/torvalds/repos?page=2>; rel="next",
    <https://api.github.com/users/torvalds/repos?page=5>; rel="last"

    Returns:
        dict: {"next": "url", "last": "url", "prev": "url", "first": "url"}
    """
    if not link_header:
        return {}

    links = {}
    for match in _LINK_PATTERN.finditer(link_header):
        url, rel = match.groups()
        links[rel] = url

    return links


def get_page_number(url: str) -> Optional[int]:
    """Extract the ``page`` query parameter from a URL."""
    page_values = parse_qs(urlparse(url).query).get("page", [])
    if not page_values:
        return None
    try:
        return int(page_values[0])
    except ValueError:
        return None


def build_paginated_url(base_url: str, page: int, per_page: int = 100) -> str:
    """Build a URL with pagination parameters.

    Args:
        base_url: The base URL (may already have query parameters)
        page: Page number (1-indexed)
        per_page: Items per page (max 100 for most GitHub APIs)

    Returns:
        URL with page and per_page query parameters
    """
    parsed = urlparse(base_url)
    params = parse_qs(parsed.query, keep_blank_values=True)
    params["page"] = [str(page)]
    params["per_page"] = [str(per_page)]

    query = urlencode(params, doseq=True)
    return parsed._replace(query=query).geturl()
