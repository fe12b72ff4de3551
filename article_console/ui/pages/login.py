"""Login page."""

import logging

import requests
import streamlit as st

from article_console.config.settings import config
from article_console.router import Route
from article_console.services import auth_service, get_api_client
from article_console.utils import ApiError, FormValidator, PATH_REGISTER, escape_markdown
from article_console.ui.components import (
    go_to,
    show_error,
    show_toast,
    render_field_errors,
)

logger = logging.getLogger(__name__)

_LABELS = {'username': "Username", 'password': "Password"}


def render_login_page(route: Route) -> None:
    """Render the login form."""
    st.title("Login")

    if route.query_value('registered') == "true":
        email = route.query_value('email', "")
        st.success(f"Account registered! Please log in with email {escape_markdown(email)}")
    if route.query_value('error') == "Unauthorized":
        st.warning("Please log in with an admin account to continue.")

    with st.form("login_form"):
        username = st.text_input("Username", placeholder="Enter username")
        password = st.text_input("Password", type="password", placeholder="Enter password")
        submitted = st.form_submit_button("Sign in", type="primary", width='stretch')

    if submitted:
        _handle_login(username.strip(), password)

    st.caption("Don't have an account yet?")
    if st.button("Register here", key="login_to_register"):
        go_to(PATH_REGISTER, delay=config.NAVIGATION_DELAY_SECONDS)


def _handle_login(username: str, password: str) -> None:
    validation = FormValidator.validate_login(username, password)
    if not validation:
        render_field_errors(validation, _LABELS)
        return

    try:
        with st.spinner("Signing in..."):
            result = auth_service.login(get_api_client(), username, password)
    except (ApiError, requests.exceptions.RequestException) as e:
        logger.info(f"Login failed for {username}: {e}")
        show_error(e)
        return

    show_toast('success', result.message)
    go_to(result.redirect, delay=config.LOGIN_REDIRECT_DELAY_SECONDS)
