"""
Shared test fixtures for Article Console tests.
"""
import os
import pytest
from unittest.mock import MagicMock
from pathlib import Path

import requests

# Load .env file FIRST before any console imports
from dotenv import load_dotenv
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

# Tests never hit a real backend and never wait
os.environ["API_BASE_URL"] = "http://cms.test/api"
os.environ["RETRY_DELAY_SECONDS"] = "0"

from article_console.utils.session_state import SessionState


@pytest.fixture
def session_store():
    """Back SessionState with a plain dict for the duration of a test."""
    store = {}
    SessionState.bind(store)
    SessionState.init_defaults()
    yield store
    SessionState.bind(None)


@pytest.fixture
def make_response():
    """Build a fake requests.Response.

    Usage:
        make_response(200, {"data": []})
        make_response(500, text="<html>oops</html>")
    """
    def _make(status_code=200, json_data=None, text=None, url="http://cms.test/api/x"):
        response = MagicMock(spec=requests.Response)
        response.status_code = status_code
        response.ok = 200 <= status_code < 300
        response.url = url
        if json_data is not None:
            response.json.return_value = json_data
            response.content = b"{}"
        else:
            response.json.side_effect = ValueError("No JSON object could be decoded")
            response.content = (text or "").encode()
        return response

    return _make


@pytest.fixture
def sample_articles():
    """Sample articles as the backend returns them."""
    return [
        {
            "id": "a1",
            "title": "First",
            "content": "Hello",
            "imageUrl": "",
            "category": {"id": "c1", "name": "News"},
            "createdAt": "2025-06-05T10:00:00.000Z",
        },
        {
            "id": "a2",
            "title": "Second",
            "content": "World",
            "imageUrl": "https://img.test/2.png",
            "category": {"id": "c1", "name": "News"},
            "createdAt": "2025-06-06T10:00:00.000Z",
        },
    ]
