"""Tests for utility modules."""

from github_paginator.models.response import Response
from github_paginator.utils.pagination import (
    build_paginated_url,
    get_page_number,
    parse_link_header,
)


class TestParseLinkHeader:
    """Tests for Link header parsing."""

    def test_parse_single_link(self):
        """Test parsing a single link."""
        header = '<https://api.github.com/users?page=2>; rel="next"'
        links = parse_link_header(header)

        assert links["next"] == "https://api.github.com/users?page=2"

    def test_parse_multiple_links(self):
        """Test parsing multiple links."""
        header = (
            '<https://api.github.com/users?page=2>; rel="next", '
            '<https://api.github.com/users?page=5>; rel="last", '
            '<https://api.github.com/users?page=1>; rel="first"'
        )
        links = parse_link_header(header)

        assert links["next"] == "https://api.github.com/users?page=2"
        assert links["last"] == "https://api.github.com/users?page=5"
        assert links["first"] == "https://api.github.com/users?page=1"

    def test_parse_empty_header(self):
        """Test parsing empty header."""
        assert parse_link_header(None) == {}
        assert parse_link_header("") == {}


class TestGetPageNumber:
    """Tests for extracting page numbers from URLs."""

    def test_page_with_other_params(self):
        assert get_page_number("https://api.github.com/repos?per_page=100&page=7") == 7

    def test_missing_page(self):
        assert get_page_number("https://api.github.com/repos") is None

    def test_non_numeric_page(self):
        assert get_page_number("https://api.github.com/repos?page=abc") is None


class TestBuildPaginatedUrl:
    """Tests for building paginated URLs."""

    def test_simple_url(self):
        """Test adding pagination to simple URL."""
        url = build_paginated_url("https://api.github.com/users", 2, 100)
        assert url.startswith("https://api.github.com/users?")
        assert "page=2" in url
        assert "per_page=100" in url

    def test_url_with_existing_params(self):
        """Test adding pagination to URL with existing params."""
        url = build_paginated_url("https://api.github.com/users?sort=updated", 3, 50)
        assert "page=3" in url
        assert "per_page=50" in url
        assert "sort=updated" in url

    def test_replaces_existing_page(self):
        """Test an existing page parameter is replaced."""
        url = build_paginated_url("/users/octocat/repos?page=9", 1)
        assert get_page_number(url) == 1

    def test_keeps_relative_path_and_search_query(self):
        """Test a relative endpoint keeps its path and search query."""
        url = build_paginated_url("/search/issues?q=author:octocat&sort=updated", 2, 30)
        assert url.startswith("/search/issues?")
        assert "q=author%3Aoctocat" in url
        assert "sort=updated" in url
        assert get_page_number(url) == 2


class TestResponseFromHeaders:
    """Tests for building page metadata from HTTP headers."""

    def test_link_header_pages(self):
        """Test next, prev, first and last pages are read from the Link header."""
        headers = {
            "Link": (
                '<https://api.github.com/users/x/repos?page=3>; rel="next", '
                '<https://api.github.com/users/x/repos?page=1>; rel="prev", '
                '<https://api.github.com/users/x/repos?page=1>; rel="first", '
                '<https://api.github.com/users/x/repos?page=6>; rel="last"'
            )
        }
        response = Response.from_headers(headers)

        assert response.next_page == 3
        assert response.prev_page == 1
        assert response.first_page == 1
        assert response.last_page == 6
        assert response.has_next is True

    def test_no_link_header_means_last_page(self):
        """Test a response without a Link header has no next page."""
        response = Response.from_headers({"Content-Type": "application/json"})

        assert response.next_page == 0
        assert response.has_next is False

    def test_headers_are_lowercased(self):
        """Test header names are stored lowercased."""
        response = Response.from_headers({"X-RateLimit-Remaining": "5"}, status_code=200)

        assert response.headers == {"x-ratelimit-remaining": "5"}
