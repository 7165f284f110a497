"""Configuration management for GitHub Paginator."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_PER_PAGE = 100


def _int_env(name: str, default: int | None) -> int | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


@dataclass
class Config:
    """Application configuration."""

    github_token: str | None = None
    github_api_url: str = "https://api.github.com"

    # Pagination
    default_per_page: int = DEFAULT_PER_PAGE
    max_pages: int | None = None  # None keeps paging until the source is exhausted

    # Rate limits
    min_remaining: int = 0  # stop paging once remaining requests drop to this floor

    # Timeouts
    request_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        # override=False ensures environment variables take precedence over .env
        load_dotenv(override=False)

        # Support both GITHUB_PAGINATOR_TOKEN (preferred) and GITHUB_TOKEN (fallback)
        token = os.getenv("GITHUB_PAGINATOR_TOKEN") or os.getenv("GITHUB_TOKEN")

        return cls(
            github_token=token,
            github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
            default_per_page=_int_env("GITHUB_PAGINATOR_PER_PAGE", DEFAULT_PER_PAGE),
            max_pages=_int_env("GITHUB_PAGINATOR_MAX_PAGES", None),
            min_remaining=_int_env("GITHUB_PAGINATOR_MIN_REMAINING", 0),
            request_timeout=float(os.getenv("GITHUB_PAGINATOR_TIMEOUT", "30")),
        )

    @property
    def is_authenticated(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def set_config(config: Config | None) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config
