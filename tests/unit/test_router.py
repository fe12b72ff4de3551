"""
Unit tests for path routing.
"""
import pytest

from article_console import router
from article_console.utils.session_state import SessionCredential, ANONYMOUS

ADMIN = SessionCredential(token="t", role="Admin", username="root")


class TestMatchRoute:
    """Tests for the route table."""

    @pytest.mark.parametrize("path, name, params", [
        ("/", router.ROUTE_ARTICLES, {}),
        ("/articles", router.ROUTE_ARTICLES, {}),
        ("/articles/a1", router.ROUTE_ARTICLE_DETAIL, {"id": "a1"}),
        ("/login", router.ROUTE_LOGIN, {}),
        ("/register", router.ROUTE_REGISTER, {}),
        ("/admin", router.ROUTE_ADMIN_ARTICLES, {}),
        ("/admin/articles", router.ROUTE_ADMIN_ARTICLES, {}),
        ("/admin/articles/create", router.ROUTE_ADMIN_ARTICLE_CREATE, {}),
        ("/admin/articles/a1", router.ROUTE_ADMIN_ARTICLE_EDIT, {"id": "a1"}),
        ("/admin/categories", router.ROUTE_ADMIN_CATEGORIES, {}),
        ("/admin/categories/create", router.ROUTE_ADMIN_CATEGORY_CREATE, {}),
        ("/admin/categories/c1/edit", router.ROUTE_ADMIN_CATEGORY_EDIT, {"id": "c1"}),
    ])
    def test_known_paths(self, path, name, params):
        """Test each page path."""
        route = router.match_route(path)
        assert route.name == name
        assert route.params == params

    def test_create_is_not_an_id(self):
        """Test the literal 'create' segment wins over the id pattern."""
        assert router.match_route("/admin/articles/create").params == {}

    def test_query_string_parsed(self):
        """Test query values are exposed."""
        route = router.match_route("/login?registered=true&email=a%40x.io")
        assert route.query_value('registered') == "true"
        assert route.query_value('email') == "a@x.io"
        assert route.query_value('missing', "default") == "default"

    def test_unknown_path(self):
        """Test unknown paths do not match."""
        assert router.match_route("/nope/deeper/still") is None


class TestResolve:
    """Tests for gate-then-match resolution."""

    def test_public_page(self):
        """Test public pages render for anyone."""
        route, redirect = router.resolve("/articles/a1", ANONYMOUS)
        assert redirect is None
        assert route.params["id"] == "a1"

    def test_admin_page_anonymous(self):
        """Test the gate runs before matching."""
        route, redirect = router.resolve("/admin/articles", ANONYMOUS)
        assert route is None
        assert redirect == "/login"

    def test_admin_page_admin(self):
        """Test admins reach admin pages."""
        route, redirect = router.resolve("/admin/categories/create", ADMIN)
        assert redirect is None
        assert route.name == router.ROUTE_ADMIN_CATEGORY_CREATE

    def test_unknown_goes_home(self):
        """Test unknown paths redirect to the article list."""
        assert router.resolve("/nope/deeper/still", ANONYMOUS) == (None, "/articles")
