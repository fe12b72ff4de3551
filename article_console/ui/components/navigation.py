"""Navigation helpers and the admin role gate for pages."""

import time
import logging
from typing import Callable

import streamlit as st

from article_console.config.settings import ROLE_ADMIN
from article_console.services import check_role, auth_service
from article_console.utils import SessionState, SessionCredential, ApiError
from article_console.ui.components.notifications import show_error

logger = logging.getLogger(__name__)


def go_to(path: str, delay: float = 0.0) -> None:
    """Navigate to path, optionally after a short pause, and rerun."""
    if delay > 0:
        time.sleep(delay)
    SessionState.navigate(path)
    st.rerun()


def require_role(
    credential: SessionCredential,
    required_role: str = ROLE_ADMIN,
    sleep: Callable[[float], None] = None
) -> bool:
    """Gate a protected page on the stored role.

    Returns True when the page may render. Otherwise shows the denial,
    waits the fixed delay and redirects; the caller must not make any
    admin call when this returns False.
    """
    decision = check_role(credential, required_role)
    if decision.allowed:
        return True

    st.error(decision.message)
    (sleep or time.sleep)(decision.delay_seconds)
    SessionState.navigate(decision.redirect_to)
    st.rerun()
    return False


def handle_write_error(exc: BaseException, action: str) -> None:
    """Report a failed admin write.

    A 401 means the token is no longer accepted: drop it and go to login.
    """
    if isinstance(exc, ApiError) and exc.status == 401:
        logger.warning(f"{action} rejected with 401, expiring session")
        go_to(auth_service.expire_session())
        return
    show_error(exc, prefix=f"Failed to {action}")
