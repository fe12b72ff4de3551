"""Sidebar component for the Article Console.

Admin pages get the user badge, navigation between the two admin areas
and logout. Public pages get a slimmer version with login/logout.
"""

import logging

import streamlit as st

from article_console.config.settings import config
from article_console.services import auth_service, get_api_client
from article_console.utils import (
    SessionState,
    SessionCredential,
    escape_text,
    PATH_HOME,
    PATH_LOGIN,
    PATH_REGISTER,
    PATH_ADMIN_ARTICLES,
    PATH_ADMIN_CATEGORIES,
)
from article_console.ui.components.navigation import go_to

logger = logging.getLogger(__name__)

_ADMIN_NAV = [
    ("Articles", PATH_ADMIN_ARTICLES),
    ("Categories", PATH_ADMIN_CATEGORIES),
]


def render_user_badge(credential: SessionCredential) -> None:
    """Avatar initial, username and role."""
    initial = escape_text(credential.initial or "?")
    username = escape_text(credential.username or "")
    role = escape_text(credential.role or "")
    st.markdown(
        f"""<div style='display: flex; align-items: center; gap: 10px; margin-bottom: 8px;'>
            <div style='width: 36px; height: 36px; border-radius: 50%; background: #2563eb; color: white;
                display: flex; align-items: center; justify-content: center; font-weight: 700;'>{initial}</div>
            <div><b>{username}</b><br><span style='color: #888; font-size: 0.8rem;'>{role}</span></div>
        </div>""",
        unsafe_allow_html=True
    )


def render_admin_sidebar(credential: SessionCredential) -> None:
    """Render the admin sidebar."""
    current = SessionState.get_current_path().split('?', 1)[0]

    with st.sidebar:
        st.markdown(f"## {config.APP_NAME}")
        render_user_badge(credential)

        st.divider()

        for label, path in _ADMIN_NAV:
            active = current.startswith(path)
            if st.button(
                label,
                key=f"nav_{path}",
                type="primary" if active else "secondary",
                disabled=active,
                width='stretch',
            ):
                go_to(path)

        if st.button("View public site", key="nav_public", width='stretch'):
            go_to(PATH_HOME)

        st.divider()

        if st.button("Logout", key="nav_logout", width='stretch'):
            go_to(auth_service.logout(), delay=config.NAVIGATION_DELAY_SECONDS)

        st.divider()
        render_backend_status()


def render_public_sidebar(credential: SessionCredential) -> None:
    """Render the public sidebar."""
    with st.sidebar:
        st.markdown(f"## {config.APP_NAME}")

        if credential.is_authenticated:
            render_user_badge(credential)
            if credential.is_admin and st.button("Admin dashboard", key="nav_admin", width='stretch'):
                go_to(PATH_ADMIN_ARTICLES)
            if st.button("Logout", key="nav_logout", width='stretch'):
                go_to(auth_service.logout(), delay=config.NAVIGATION_DELAY_SECONDS)
        else:
            col1, col2 = st.columns(2)
            with col1:
                if st.button("Login", key="nav_login", width='stretch'):
                    go_to(PATH_LOGIN)
            with col2:
                if st.button("Register", key="nav_register", width='stretch'):
                    go_to(PATH_REGISTER)


def render_backend_status() -> None:
    """Render backend health status."""
    if get_api_client().health_check():
        st.caption("🟢 Backend connected")
    else:
        st.caption("🔴 Backend unavailable")
