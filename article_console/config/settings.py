"""
Article Console Configuration.

Frozen dataclass for immutable configuration with environment overrides.
All magic numbers and configuration values should be defined here.

Environment variables can override defaults (read at module import time):
- API_BASE_URL: Backend API URL
- API_TIMEOUT_SECONDS: Override API timeout
- TRANSPORT_RETRIES: Transport-level retries for idempotent requests
- MAX_RETRY_ATTEMPTS / RETRY_DELAY_SECONDS: fetch_with_retry defaults
- PAGE_SIZE: Items per page on listing views
- MAX_IMAGE_SIZE_MB: Upload size limit
"""

import os
from dataclasses import dataclass, field
from typing import FrozenSet

DEFAULT_API_BASE_URL = "https://test-fe.mysellerpintar.com/api"


def _get_int_env(name: str, default: int) -> int:
    """Get integer environment variable or return default."""
    val = os.getenv(name)
    if val is not None:
        try:
            return int(val)
        except ValueError:
            pass
    return default


def _get_float_env(name: str, default: float) -> float:
    """Get float environment variable or return default."""
    val = os.getenv(name)
    if val is not None:
        try:
            return float(val)
        except ValueError:
            pass
    return default


def _get_str_env(name: str, default: str) -> str:
    """Get string environment variable or return default.

    An empty value counts as unset so a blank line in .env falls back.
    """
    return os.getenv(name) or default


@dataclass(frozen=True)
class ConsoleConfig:
    """Immutable console configuration.

    frozen=True ensures config values cannot be accidentally modified.
    Environment variables are read when the instance is created.
    """

    # Application
    APP_NAME: str = "Article Console"
    APP_ICON: str = "📰"

    # Backend API
    API_BASE_URL: str = field(
        default_factory=lambda: _get_str_env('API_BASE_URL', DEFAULT_API_BASE_URL)
    )
    API_TIMEOUT_SECONDS: int = field(
        default_factory=lambda: _get_int_env('API_TIMEOUT_SECONDS', 30)
    )
    TRANSPORT_RETRIES: int = field(
        default_factory=lambda: _get_int_env('TRANSPORT_RETRIES', 2)
    )

    # fetch_with_retry defaults
    MAX_RETRY_ATTEMPTS: int = field(
        default_factory=lambda: _get_int_env('MAX_RETRY_ATTEMPTS', 3)
    )
    RETRY_DELAY_SECONDS: float = field(
        default_factory=lambda: _get_float_env('RETRY_DELAY_SECONDS', 1.0)
    )

    # Listing views
    PAGE_SIZE: int = field(
        default_factory=lambda: _get_int_env('PAGE_SIZE', 10)
    )
    RELATED_ARTICLES_LIMIT: int = 3

    # Redirect timing
    ROLE_GATE_DELAY_SECONDS: float = 1.0
    LOGIN_REDIRECT_DELAY_SECONDS: float = 1.2
    NAVIGATION_DELAY_SECONDS: float = 0.4

    # Image upload
    MAX_IMAGE_SIZE_MB: int = field(
        default_factory=lambda: _get_int_env('MAX_IMAGE_SIZE_MB', 5)
    )
    ALLOWED_IMAGE_EXTENSIONS: FrozenSet[str] = frozenset(
        {'.jpg', '.jpeg', '.png', '.gif', '.webp'}
    )

    # Form limits
    MIN_PASSWORD_LENGTH: int = 6
    MIN_USERNAME_LENGTH: int = 3
    MAX_USERNAME_LENGTH: int = 20
    MIN_CATEGORY_NAME_LENGTH: int = 3

    @property
    def MAX_IMAGE_SIZE_BYTES(self) -> int:
        """Get maximum upload size in bytes."""
        return self.MAX_IMAGE_SIZE_MB * 1024 * 1024


# Global immutable config instance
config = ConsoleConfig()

# Roles the backend issues
ROLE_ADMIN = "Admin"
ROLE_USER = "User"
