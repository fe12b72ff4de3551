"""Session state management for the Article Console.

This module provides centralized session state management for Streamlit,
with features like:
- Default value initialization
- Session credential lifecycle (load, store, logout)
- Path-based navigation
- Per-view listing filters
- Flash messages that survive a rerun
"""

import copy
import hashlib
import logging
from dataclasses import dataclass
from typing import Any, Optional, Dict, Callable, MutableMapping

import streamlit as st

from article_console.config.settings import ROLE_ADMIN

logger = logging.getLogger(__name__)


def _default_factory(value: Any) -> Callable[[], Any]:
    """Create a factory function that returns a deep copy of the value.

    This prevents mutable default values from being shared across sessions.
    """
    if isinstance(value, (list, dict, set)):
        return lambda: copy.deepcopy(value)
    return lambda: value


# Path constants
PATH_HOME = "/articles"
PATH_LOGIN = "/login"
PATH_REGISTER = "/register"
PATH_ADMIN_ARTICLES = "/admin/articles"
PATH_ADMIN_CATEGORIES = "/admin/categories"

# Credential keys
TOKEN_KEY = "token"
ROLE_KEY = "role"
USERNAME_KEY = "username"

# Listing views with their own filters
VIEW_ARTICLES = "articles"
VIEW_ADMIN_ARTICLES = "admin_articles"
VIEW_ADMIN_CATEGORIES = "admin_categories"

_FILTER_DEFAULTS: Dict[str, Any] = {
    'page': 1,
    'category': "",
    'search': "",
}


@dataclass(frozen=True)
class SessionCredential:
    """Token/role/username of the current user.

    A credential without a token is anonymous, whatever the other fields say.
    """
    token: Optional[str] = None
    role: Optional[str] = None
    username: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.role == ROLE_ADMIN

    @property
    def initial(self) -> str:
        """First letter of the username, upper-cased, for the avatar."""
        return self.username[0].upper() if self.username else ""


ANONYMOUS = SessionCredential()


class SessionState:
    """Centralized session state management for the Article Console.

    This class provides a clean interface for managing Streamlit session state.
    It is the browser session's persisted store: the credential written at
    login lives here until logout.

    Example:
        >>> from article_console.utils import SessionState
        >>> SessionState.init_defaults()
        >>> SessionState.set('my_key', 'my_value')
        >>> value = SessionState.get('my_key')
    """

    _DEFAULT_FACTORIES: Dict[str, Callable[[], Any]] = {
        # Navigation state
        'current_path': lambda: PATH_HOME,

        # Transient notices
        'flash': lambda: None,

        # Listing filters, one dict per view
        f'{VIEW_ARTICLES}_filters': _default_factory(_FILTER_DEFAULTS),
        f'{VIEW_ADMIN_ARTICLES}_filters': _default_factory(_FILTER_DEFAULTS),
        f'{VIEW_ADMIN_CATEGORIES}_filters': _default_factory(_FILTER_DEFAULTS),

        # Listing request controllers, created lazily per view
        'listing_controllers': lambda: {},

        # Category picked for the edit form
        'edit_category': lambda: None,
    }

    _storage: Optional[MutableMapping] = None

    @classmethod
    def bind(cls, storage: Optional[MutableMapping]) -> None:
        """Back the session store with an explicit mapping.

        Pass None to go back to ``st.session_state``. Used by tests and by
        scripts running outside ``streamlit run``.
        """
        cls._storage = storage

    @classmethod
    def _get_session_state(cls) -> MutableMapping:
        """Get the backing store."""
        if cls._storage is not None:
            return cls._storage
        return st.session_state

    @classmethod
    def init_defaults(cls) -> None:
        """Initialize default session state values.

        Call this at the start of your Streamlit app to ensure
        all expected keys exist with sensible defaults.
        """
        session_state = cls._get_session_state()

        for key, factory in cls._DEFAULT_FACTORIES.items():
            if key not in session_state:
                session_state[key] = factory()
                logger.debug(f"Initialized session state key: {key}")

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get a value from session state."""
        session_state = cls._get_session_state()
        return session_state.get(key, default)

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        """Set a value in session state."""
        session_state = cls._get_session_state()
        session_state[key] = value
        logger.debug(f"Set session state: {key} = {type(value).__name__}")

    @classmethod
    def clear(cls, key: str) -> None:
        """Clear a session state key."""
        session_state = cls._get_session_state()
        if key in session_state:
            del session_state[key]
            logger.debug(f"Cleared session state key: {key}")

    @classmethod
    def has(cls, key: str) -> bool:
        """Check if a key exists in session state."""
        session_state = cls._get_session_state()
        return key in session_state

    @classmethod
    def get_or_set(cls, key: str, default: Any) -> Any:
        """Get value if exists, otherwise set and return default."""
        if not cls.has(key):
            cls.set(key, default)
        return cls.get(key)

    # Credential lifecycle
    @classmethod
    def get_token(cls) -> Optional[str]:
        """Read the bearer token, or None when nobody is logged in."""
        return cls.get(TOKEN_KEY) or None

    @classmethod
    def load_credential(cls) -> SessionCredential:
        """Snapshot the stored credential.

        Called once per app run; the result is handed to pages instead of
        each page reading the store on its own.
        """
        token = cls.get(TOKEN_KEY)
        if not token:
            return ANONYMOUS
        return SessionCredential(
            token=token,
            role=cls.get(ROLE_KEY),
            username=cls.get(USERNAME_KEY),
        )

    @classmethod
    def store_credential(cls, credential: SessionCredential) -> None:
        """Persist a credential after a successful login."""
        cls.set(TOKEN_KEY, credential.token)
        cls.set(ROLE_KEY, credential.role)
        cls.set(USERNAME_KEY, credential.username)
        logger.info(f"Stored session for {credential.username} ({credential.role})")

    @classmethod
    def remove_token(cls) -> None:
        """Drop only the token, leaving the rest of the session intact."""
        cls.clear(TOKEN_KEY)

    @classmethod
    def logout(cls) -> None:
        """Wipe the whole store and start over with defaults."""
        session_state = cls._get_session_state()
        for key in list(session_state.keys()):
            del session_state[key]
        cls.init_defaults()
        logger.info("Session cleared")

    # Navigation helpers
    @classmethod
    def get_current_path(cls) -> str:
        """Get the current path, including any query string."""
        return cls.get('current_path', PATH_HOME)

    @classmethod
    def navigate(cls, path: str) -> None:
        """Set the path the router renders on the next run."""
        cls.set('current_path', path)

    # Flash messages
    @classmethod
    def flash(cls, kind: str, message: str) -> None:
        """Queue a notice to show after the next rerun.

        Args:
            kind: 'success', 'error' or 'info'
            message: Text to display
        """
        cls.set('flash', (kind, message))

    @classmethod
    def pop_flash(cls) -> Optional[tuple]:
        """Return and forget the queued notice, if any."""
        notice = cls.get('flash')
        cls.set('flash', None)
        return notice

    # File change detection
    @classmethod
    def file_changed(cls, file, key: str = 'uploaded_file_hash') -> bool:
        """Check if an uploaded file differs from the last one seen under key."""
        if file is None:
            return False

        try:
            current_hash = hashlib.sha256(file.getvalue()).hexdigest()
        except (AttributeError, OSError) as e:
            logger.warning(f"Error checking file change: {e}")
            return True

        if current_hash != cls.get(key):
            cls.set(key, current_hash)
            return True
        return False

    # Listing filter helpers
    @classmethod
    def get_filters(cls, view: str) -> Dict[str, Any]:
        """Get the filter dict for a listing view."""
        return cls.get_or_set(f'{view}_filters', copy.deepcopy(_FILTER_DEFAULTS))

    @classmethod
    def set_filter(cls, view: str, key: str, value: Any) -> bool:
        """Update one filter of a listing view.

        Changing anything other than the page sends the view back to page 1.

        Returns:
            True if the value changed
        """
        filters = cls.get_filters(view)
        if filters.get(key) == value:
            return False
        filters[key] = value
        if key != 'page':
            filters['page'] = 1
        cls.set(f'{view}_filters', filters)
        return True

    @classmethod
    def reset_filters(cls, view: str) -> None:
        """Restore a listing view's filters to their defaults."""
        cls.set(f'{view}_filters', copy.deepcopy(_FILTER_DEFAULTS))
