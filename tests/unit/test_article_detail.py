"""
Unit tests for loading the article detail bundle.
"""
import pytest
from unittest.mock import MagicMock, patch

import requests

from article_console.services.api_client import ConsoleAPIClient
from article_console.ui.pages.article_detail import fetch_article_bundle
from article_console.utils.exceptions import ApiError


@pytest.fixture
def client():
    return MagicMock(spec=ConsoleAPIClient)


@pytest.fixture(autouse=True)
def no_sleep():
    with patch('article_console.services.request_lifecycle.time.sleep'):
        yield


class TestFetchArticleBundle:
    """Tests for article plus related articles."""

    def test_article_and_related(self, client):
        """Test related articles come from the article's category."""
        client.get_article.return_value = {"id": "a1", "category": {"id": "c1"}}
        client.get_related_articles.return_value = [{"id": "a2"}]

        article, related = fetch_article_bundle(client, "a1")

        assert article["id"] == "a1"
        assert related == [{"id": "a2"}]
        client.get_related_articles.assert_called_once_with("c1", "a1")

    def test_related_failure_ignored(self, client):
        """Test a failing related fetch still shows the article."""
        client.get_article.return_value = {"id": "a1", "category": {"id": "c1"}}
        client.get_related_articles.side_effect = requests.exceptions.Timeout()

        article, related = fetch_article_bundle(client, "a1")

        assert article["id"] == "a1"
        assert related == []

    def test_no_category_no_related_call(self, client):
        """Test uncategorized articles skip the related fetch."""
        client.get_article.return_value = {"id": "a1"}

        _, related = fetch_article_bundle(client, "a1")

        assert related == []
        client.get_related_articles.assert_not_called()

    def test_main_fetch_retried(self, client):
        """Test the article fetch is retried before giving up."""
        client.get_article.side_effect = [ApiError("busy", status=503), {"id": "a1"}]

        article, _ = fetch_article_bundle(client, "a1")

        assert article["id"] == "a1"
        assert client.get_article.call_count == 2

    def test_main_fetch_exhausted(self, client):
        """Test the last error propagates after four attempts."""
        client.get_article.side_effect = ApiError("Article not found", status=404)

        with pytest.raises(ApiError):
            fetch_article_bundle(client, "missing")

        assert client.get_article.call_count == 4
