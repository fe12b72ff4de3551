"""
Backend API Client for the Article Console.

The single chokepoint for every call to the content backend:
- attaches ``Authorization: Bearer <token>`` when a token is stored
- turns every error response into one ApiError shape
- lets transport failures through untouched
- honours cancellation tokens from the listing controllers
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, List, Any, Callable

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from article_console.config.settings import config, ROLE_ADMIN, ROLE_USER
from article_console.services.request_lifecycle import CancellationToken
from article_console.utils.exceptions import ApiError, UploadError, DEFAULT_ERROR_MESSAGE
from article_console.utils.pagination import compute_total_pages
from article_console.utils.session_state import SessionState

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


@dataclass
class PageResult:
    """One page of a listing response."""
    items: List[dict] = field(default_factory=list)
    total: int = 0
    total_pages: int = 1


def normalize_error(response: requests.Response) -> ApiError:
    """Reshape an error response into an ApiError.

    The backend's ``message`` field wins when it is a non-empty string;
    anything else falls back to the generic message.
    """
    message = DEFAULT_ERROR_MESSAGE
    try:
        body = response.json()
    except (json.JSONDecodeError, ValueError):
        body = None
    if isinstance(body, dict):
        candidate = body.get('message')
        if isinstance(candidate, str) and candidate.strip():
            message = candidate
    return ApiError(message, status=response.status_code, response=response)


def _json_body(response: requests.Response) -> Any:
    """Decode a success body, treating bad JSON as an API error."""
    if response.status_code == 204 or not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, ValueError) as e:
        logger.error(f"Invalid JSON in response from {response.url}: {e}")
        raise ApiError("Invalid response from server", status=response.status_code, response=response)


def _list_payload(body: Any) -> List[dict]:
    """Pull the item list out of a list response."""
    data = body.get('data') if isinstance(body, dict) else body
    if not isinstance(data, list):
        raise ApiError("Invalid data format")
    return data


def _omit_empty(params: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset query parameters so the backend never sees ``search=``."""
    return {k: v for k, v in params.items() if v not in (None, "")}


class ConsoleAPIClient:
    """Client for the content backend with auth and error normalization."""

    def __init__(
        self,
        base_url: str = None,
        timeout: int = None,
        transport_retries: int = None,
        token_provider: TokenProvider = None
    ):
        """Initialize API client.

        Args:
            base_url: Backend API URL (default from config)
            timeout: Request timeout in seconds
            transport_retries: Retries for idempotent requests on gateway errors
            token_provider: Returns the current bearer token, read on every request
        """
        self.base_url = (base_url or config.API_BASE_URL).rstrip('/')
        self.timeout = timeout or config.API_TIMEOUT_SECONDS
        if transport_retries is None:
            transport_retries = config.TRANSPORT_RETRIES
        self.token_provider = token_provider or SessionState.get_token

        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

        # Gateway hiccups on GETs only; the final response is still normalized
        retry_strategy = Retry(
            total=transport_retries,
            backoff_factor=0.5,
            status_forcelist=[502, 503, 504],
            allowed_methods=frozenset({"GET", "HEAD"}),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers, with the bearer token when one is stored."""
        headers = {}
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(
        self,
        method: str,
        endpoint: str,
        cancel_token: Optional[CancellationToken] = None,
        **kwargs
    ) -> requests.Response:
        """Make an HTTP request.

        Raises:
            RequestCancelledError: cancel_token fired before or during the call
            ApiError: the backend answered with a non-2xx status
            requests.exceptions.RequestException: no response was received
        """
        url = f"{self.base_url}{endpoint}"
        kwargs.setdefault('timeout', self.timeout)

        headers = self._get_headers()
        if 'headers' in kwargs:
            headers.update(kwargs['headers'])
        kwargs['headers'] = headers

        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            logger.error(f"Request failed: {method} {url} - {e}")
            raise

        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        if not response.ok:
            error = normalize_error(response)
            logger.error(f"{method} {url} returned {error.status}: {error.message}")
            raise error

        return response

    # Health check
    def health_check(self) -> bool:
        """Check if the backend answers at all."""
        try:
            self._request('GET', '/categories', params={'limit': 1})
            return True
        except (ApiError, requests.exceptions.RequestException):
            return False

    # Authentication
    def login(self, username: str, password: str) -> Dict[str, Any]:
        """Exchange credentials for a token.

        Returns:
            Dict with 'token' and 'role'
        """
        response = self._request(
            'POST', '/auth/login',
            json={"username": username, "password": password}
        )
        data = _json_body(response) or {}
        if not data.get('token'):
            raise ApiError("Login response did not include a token", status=response.status_code, response=response)
        return data

    def register(
        self,
        username: str,
        email: str,
        password: str,
        is_admin: bool = False,
        admin_code: Optional[str] = None
    ) -> requests.Response:
        """Create an account.

        The admin code is only sent for admin registrations.

        Returns:
            The raw response; callers check for 201
        """
        payload = {
            "username": username,
            "email": email,
            "password": password,
            "role": ROLE_ADMIN if is_admin else ROLE_USER,
        }
        if is_admin:
            payload["adminCode"] = admin_code
        return self._request('POST', '/auth/register', json=payload)

    # Articles
    def list_articles(
        self,
        page: int = 1,
        limit: int = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> PageResult:
        """List articles with optional filters.

        Args:
            page: Page number (1-indexed)
            limit: Items per page
            category: Category id filter
            search: Title search
            cancel_token: Token from the view's ListingController

        Returns:
            PageResult with articles
        """
        limit = limit or config.PAGE_SIZE
        params = _omit_empty({
            'page': page,
            'limit': limit,
            'category': category,
            'search': search,
        })
        response = self._request('GET', '/articles', params=params, cancel_token=cancel_token)
        body = _json_body(response) or {}
        items = _list_payload(body)
        total = body.get('total', len(items)) if isinstance(body, dict) else len(items)
        last_page = body.get('last_page') if isinstance(body, dict) else None
        return PageResult(
            items=items,
            total=total or 0,
            total_pages=compute_total_pages(total, limit, last_page),
        )

    def get_article(self, article_id: str, cancel_token: Optional[CancellationToken] = None) -> Dict[str, Any]:
        """Fetch one article by id."""
        response = self._request('GET', f'/articles/{article_id}', cancel_token=cancel_token)
        data = _json_body(response)
        if not isinstance(data, dict):
            raise ApiError("Invalid data format", status=response.status_code, response=response)
        return data

    def get_related_articles(
        self,
        category_id: str,
        current_article_id: str,
        limit: int = None
    ) -> List[dict]:
        """Other articles from the same category, never the current one."""
        limit = limit or config.RELATED_ARTICLES_LIMIT
        response = self._request(
            'GET', '/articles',
            params={'category': category_id, 'limit': limit + 1, 'exclude': current_article_id}
        )
        items = _list_payload(_json_body(response) or {})
        related = [a for a in items if str(a.get('id')) != str(current_article_id)]
        return related[:limit]

    def create_article(
        self,
        title: str,
        content: str,
        category_id: str,
        image_url: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create an article."""
        payload = {
            "title": title,
            "content": content,
            "categoryId": category_id,
            "imageUrl": image_url or "",
        }
        response = self._request('POST', '/articles', json=payload)
        return _json_body(response) or {}

    def update_article(
        self,
        article_id: str,
        title: str,
        content: str,
        category_id: str,
        image_url: Optional[str] = None
    ) -> Dict[str, Any]:
        """Replace an article's fields."""
        payload = {
            "title": title,
            "content": content,
            "categoryId": category_id,
            "imageUrl": image_url or "",
        }
        response = self._request('PUT', f'/articles/{article_id}', json=payload)
        return _json_body(response) or {}

    def delete_article(self, article_id: str) -> None:
        """Delete an article."""
        self._request('DELETE', f'/articles/{article_id}')
        logger.info(f"Deleted article {article_id}")

    # Categories
    def list_categories(
        self,
        page: int = 1,
        limit: int = None,
        search: Optional[str] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> PageResult:
        """List categories for the admin table."""
        limit = limit or config.PAGE_SIZE
        params = _omit_empty({'search': search, 'page': page, 'limit': limit})
        response = self._request('GET', '/categories', params=params, cancel_token=cancel_token)
        body = _json_body(response) or {}
        items = _list_payload(body)
        total = body.get('totalData', len(items)) if isinstance(body, dict) else len(items)
        total_pages = body.get('totalPages') if isinstance(body, dict) else None
        return PageResult(
            items=items,
            total=total or 0,
            total_pages=compute_total_pages(total, limit, total_pages),
        )

    def get_all_categories(self) -> List[dict]:
        """Every category, for filter and form dropdowns."""
        response = self._request('GET', '/categories')
        return _list_payload(_json_body(response) or {})

    def create_category(self, name: str) -> Dict[str, Any]:
        """Create a category."""
        response = self._request('POST', '/categories', json={"name": name})
        return _json_body(response) or {}

    def update_category(self, category_id: str, name: str) -> Dict[str, Any]:
        """Rename a category."""
        response = self._request('PUT', f'/categories/{category_id}', json={"name": name})
        return _json_body(response) or {}

    def delete_category(self, category_id: str) -> None:
        """Delete a category."""
        if not category_id or not str(category_id).strip():
            raise ApiError("Cannot delete: invalid category id")
        self._request('DELETE', f'/categories/{category_id}')
        logger.info(f"Deleted category {category_id}")

    # Upload
    def upload_image(self, filename: str, content: bytes, content_type: str = None) -> str:
        """Upload an image as multipart field 'image'.

        Returns:
            Public URL of the stored image

        Raises:
            UploadError: the response carried no URL
        """
        files = {"image": (filename, content, content_type or "application/octet-stream")}
        # None removes the session's JSON content type so requests sets the boundary
        response = self._request('POST', '/upload', files=files, headers={"Content-Type": None})
        data = _json_body(response) or {}
        url = data.get('url') or data.get('imageUrl')
        if not url and isinstance(data.get('data'), dict):
            url = data['data'].get('url')
        if not url:
            raise UploadError(filename=filename)
        logger.info(f"Uploaded {filename}")
        return url


def get_api_client() -> ConsoleAPIClient:
    """Get this browser session's API client, creating it on first use."""
    client = SessionState.get('api_client')
    if client is None:
        client = ConsoleAPIClient()
        SessionState.set('api_client', client)
    return client
