"""
Unit tests for console configuration.

Tests:
- Default values
- Environment variable overrides
- Immutability
"""
import dataclasses
import os
import pytest
from unittest.mock import patch

from article_console.config.settings import ConsoleConfig, DEFAULT_API_BASE_URL


class TestConfigDefaults:
    """Tests for default configuration values."""

    def test_default_base_url(self):
        """Test the backend URL falls back to the hosted API."""
        with patch.dict(os.environ, {}, clear=True):
            settings = ConsoleConfig()

        assert settings.API_BASE_URL == DEFAULT_API_BASE_URL == "https://test-fe.mysellerpintar.com/api"

    def test_default_retry(self):
        """Test retry defaults: three retries, one second apart."""
        with patch.dict(os.environ, {}, clear=True):
            settings = ConsoleConfig()

        assert settings.MAX_RETRY_ATTEMPTS == 3
        assert settings.RETRY_DELAY_SECONDS == 1.0

    def test_default_page_size(self):
        """Test listings show ten items."""
        with patch.dict(os.environ, {}, clear=True):
            settings = ConsoleConfig()

        assert settings.PAGE_SIZE == 10
        assert settings.RELATED_ARTICLES_LIMIT == 3

    def test_redirect_delays(self):
        """Test role gate and login redirect delays."""
        settings = ConsoleConfig()
        assert settings.ROLE_GATE_DELAY_SECONDS == 1.0
        assert settings.LOGIN_REDIRECT_DELAY_SECONDS == 1.2

    def test_image_size_bytes(self):
        """Test the derived byte limit."""
        with patch.dict(os.environ, {}, clear=True):
            settings = ConsoleConfig()

        assert settings.MAX_IMAGE_SIZE_BYTES == 5 * 1024 * 1024


class TestConfigOverrides:
    """Tests for environment overrides."""

    def test_base_url_override(self):
        """Test API_BASE_URL is honored."""
        with patch.dict(os.environ, {"API_BASE_URL": "http://localhost:4000/api"}, clear=True):
            settings = ConsoleConfig()

        assert settings.API_BASE_URL == "http://localhost:4000/api"

    def test_blank_base_url_falls_back(self):
        """Test an empty value counts as unset."""
        with patch.dict(os.environ, {"API_BASE_URL": ""}, clear=True):
            settings = ConsoleConfig()

        assert settings.API_BASE_URL == DEFAULT_API_BASE_URL

    def test_numeric_overrides(self):
        """Test integer and float overrides."""
        env = {"MAX_RETRY_ATTEMPTS": "5", "RETRY_DELAY_SECONDS": "0.25", "PAGE_SIZE": "20"}
        with patch.dict(os.environ, env, clear=True):
            settings = ConsoleConfig()

        assert settings.MAX_RETRY_ATTEMPTS == 5
        assert settings.RETRY_DELAY_SECONDS == 0.25
        assert settings.PAGE_SIZE == 20

    def test_invalid_numbers_fall_back(self):
        """Test unparseable values use the defaults."""
        env = {"MAX_RETRY_ATTEMPTS": "lots", "RETRY_DELAY_SECONDS": "soon"}
        with patch.dict(os.environ, env, clear=True):
            settings = ConsoleConfig()

        assert settings.MAX_RETRY_ATTEMPTS == 3
        assert settings.RETRY_DELAY_SECONDS == 1.0


class TestConfigImmutable:
    """Tests for frozen configuration."""

    def test_cannot_modify(self):
        """Test assignment raises."""
        settings = ConsoleConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.PAGE_SIZE = 99
