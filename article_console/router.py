"""Path-based routing for the Article Console.

Streamlit has no URL routing for dynamic ids, so the app keeps a path
string in session state and maps it to a page here.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
from urllib.parse import parse_qs, urlsplit

from article_console.services.access import resolve_route_gate
from article_console.utils.session_state import SessionCredential

logger = logging.getLogger(__name__)

# Route names
ROUTE_ARTICLES = "articles"
ROUTE_ARTICLE_DETAIL = "article_detail"
ROUTE_LOGIN = "login"
ROUTE_REGISTER = "register"
ROUTE_ADMIN_ARTICLES = "admin_articles"
ROUTE_ADMIN_ARTICLE_CREATE = "admin_article_create"
ROUTE_ADMIN_ARTICLE_EDIT = "admin_article_edit"
ROUTE_ADMIN_CATEGORIES = "admin_categories"
ROUTE_ADMIN_CATEGORY_CREATE = "admin_category_create"
ROUTE_ADMIN_CATEGORY_EDIT = "admin_category_edit"

# Order matters: literal segments before {id} patterns
_ROUTES = [
    (re.compile(r'^/?$'), ROUTE_ARTICLES),
    (re.compile(r'^/articles/?$'), ROUTE_ARTICLES),
    (re.compile(r'^/articles/(?P<id>[^/]+)/?$'), ROUTE_ARTICLE_DETAIL),
    (re.compile(r'^/login/?$'), ROUTE_LOGIN),
    (re.compile(r'^/register/?$'), ROUTE_REGISTER),
    (re.compile(r'^/admin/?$'), ROUTE_ADMIN_ARTICLES),
    (re.compile(r'^/admin/articles/?$'), ROUTE_ADMIN_ARTICLES),
    (re.compile(r'^/admin/articles/create/?$'), ROUTE_ADMIN_ARTICLE_CREATE),
    (re.compile(r'^/admin/articles/(?P<id>[^/]+)/?$'), ROUTE_ADMIN_ARTICLE_EDIT),
    (re.compile(r'^/admin/categories/?$'), ROUTE_ADMIN_CATEGORIES),
    (re.compile(r'^/admin/categories/create/?$'), ROUTE_ADMIN_CATEGORY_CREATE),
    (re.compile(r'^/admin/categories/(?P<id>[^/]+)/edit/?$'), ROUTE_ADMIN_CATEGORY_EDIT),
]


@dataclass(frozen=True)
class Route:
    """A matched path."""
    name: str
    params: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)

    def query_value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.query.get(key, default)


def match_route(path: str) -> Optional[Route]:
    """Match a path (query string allowed) against the route table.

    Example:
        >>> match_route("/articles/42").params
        {'id': '42'}
        >>> match_route("/articles?success=login").query
        {'success': 'login'}
    """
    parts = urlsplit(path or "/")
    query = {k: v[-1] for k, v in parse_qs(parts.query).items()}
    for pattern, name in _ROUTES:
        match = pattern.match(parts.path)
        if match:
            return Route(name=name, params=match.groupdict(), query=query)
    return None


def resolve(path: str, credential: SessionCredential) -> Tuple[Optional[Route], Optional[str]]:
    """Apply the route gate, then match.

    Returns:
        (route, None) when the path may render, or (None, redirect_path)
        when the user must go elsewhere. Unknown paths redirect home.
    """
    redirect = resolve_route_gate(path, credential)
    if redirect:
        logger.info(f"Route gate redirected {path} -> {redirect}")
        return None, redirect

    route = match_route(path)
    if route is None:
        logger.warning(f"Unknown path {path!r}, sending home")
        return None, "/articles"
    return route, None
