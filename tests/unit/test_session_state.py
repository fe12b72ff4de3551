"""
Unit tests for the session store.
"""
import io

from article_console.utils.session_state import (
    SessionState,
    SessionCredential,
    ANONYMOUS,
    VIEW_ARTICLES,
)


class TestDefaults:
    """Tests for default initialization."""

    def test_init_defaults(self, session_store):
        """Test expected keys exist after init."""
        assert session_store["current_path"] == "/articles"
        assert session_store["flash"] is None
        assert session_store[f"{VIEW_ARTICLES}_filters"] == {'page': 1, 'category': "", 'search': ""}

    def test_defaults_not_shared(self, session_store):
        """Test mutable defaults are copied per view."""
        SessionState.set_filter(VIEW_ARTICLES, 'search', "python")
        assert SessionState.get_filters("admin_articles")['search'] == ""

    def test_init_does_not_overwrite(self, session_store):
        """Test re-running init keeps existing values."""
        SessionState.navigate("/login")
        SessionState.init_defaults()
        assert SessionState.get_current_path() == "/login"


class TestCredential:
    """Tests for the credential lifecycle."""

    def test_anonymous_when_empty(self, session_store):
        """Test no token means anonymous."""
        assert SessionState.load_credential() == ANONYMOUS
        assert SessionState.get_token() is None

    def test_role_without_token_is_anonymous(self, session_store):
        """Test a leftover role does not authenticate."""
        session_store["role"] = "Admin"
        credential = SessionState.load_credential()
        assert not credential.is_authenticated
        assert not credential.is_admin

    def test_store_and_load(self, session_store):
        """Test a stored credential round-trips."""
        SessionState.store_credential(SessionCredential(token="t1", role="User", username="alice"))

        credential = SessionState.load_credential()
        assert credential.token == "t1"
        assert credential.role == "User"
        assert credential.username == "alice"
        assert credential.initial == "A"
        assert SessionState.get_token() == "t1"

    def test_remove_token(self, session_store):
        """Test removing only the token."""
        SessionState.store_credential(SessionCredential(token="t1", role="Admin", username="root"))
        SessionState.remove_token()

        assert SessionState.get_token() is None
        assert SessionState.get("role") == "Admin"

    def test_logout_clears_store(self, session_store):
        """Test logout wipes everything and restores defaults."""
        SessionState.store_credential(SessionCredential(token="t1", role="Admin", username="root"))
        SessionState.set("api_client", object())
        SessionState.logout()

        assert SessionState.get_token() is None
        assert not SessionState.has("api_client")
        assert SessionState.get_current_path() == "/articles"


class TestFlash:
    """Tests for one-shot notices."""

    def test_pop_once(self, session_store):
        """Test a flash is shown exactly once."""
        SessionState.flash('success', "Saved")
        assert SessionState.pop_flash() == ('success', "Saved")
        assert SessionState.pop_flash() is None


class TestFilters:
    """Tests for per-view filters."""

    def test_change_resets_page(self, session_store):
        """Test changing search or category goes back to page 1."""
        SessionState.set_filter(VIEW_ARTICLES, 'page', 3)
        assert SessionState.set_filter(VIEW_ARTICLES, 'category', "c1") is True
        assert SessionState.get_filters(VIEW_ARTICLES)['page'] == 1

    def test_page_change_keeps_filters(self, session_store):
        """Test paging keeps search and category."""
        SessionState.set_filter(VIEW_ARTICLES, 'search', "python")
        SessionState.set_filter(VIEW_ARTICLES, 'page', 2)

        filters = SessionState.get_filters(VIEW_ARTICLES)
        assert filters == {'page': 2, 'category': "", 'search': "python"}

    def test_unchanged_value_reports_false(self, session_store):
        """Test setting the same value is a no-op."""
        SessionState.set_filter(VIEW_ARTICLES, 'page', 2)
        assert SessionState.set_filter(VIEW_ARTICLES, 'page', 2) is False

    def test_reset(self, session_store):
        """Test filters go back to defaults."""
        SessionState.set_filter(VIEW_ARTICLES, 'search', "python")
        SessionState.reset_filters(VIEW_ARTICLES)
        assert SessionState.get_filters(VIEW_ARTICLES)['search'] == ""


class TestFileChanged:
    """Tests for upload change detection."""

    def test_same_file_seen_once(self, session_store):
        """Test the same bytes only count as new the first time."""
        upload = io.BytesIO(b"image bytes")
        assert SessionState.file_changed(upload, key="img") is True
        assert SessionState.file_changed(upload, key="img") is False

    def test_different_file(self, session_store):
        """Test different bytes are detected."""
        SessionState.file_changed(io.BytesIO(b"one"), key="img")
        assert SessionState.file_changed(io.BytesIO(b"two"), key="img") is True

    def test_none(self, session_store):
        """Test no file is never a change."""
        assert SessionState.file_changed(None) is False
