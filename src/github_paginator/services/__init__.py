"""Service modules for GitHub Paginator."""

from github_paginator.services.github_rest_client import GitHubRestClient, RestLister

__all__ = ["GitHubRestClient", "RestLister"]
