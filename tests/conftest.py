"""Pytest configuration and fixtures."""

import pytest

from github_paginator.config import Config, set_config


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset global state before each test."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def test_config():
    """Create a test configuration."""
    config = Config(
        github_token="test_token",
        github_api_url="https://api.github.com",
        request_timeout=5.0,
    )
    set_config(config)
    return config
