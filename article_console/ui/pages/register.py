"""Registration page."""

import logging

import requests
import streamlit as st

from article_console.config.settings import config
from article_console.router import Route
from article_console.services import auth_service, get_api_client
from article_console.utils import ApiError, FormValidator, PATH_LOGIN
from article_console.ui.components import (
    go_to,
    show_error,
    render_field_errors,
)

logger = logging.getLogger(__name__)

_LABELS = {
    'username': "Username",
    'email': "Email",
    'password': "Password",
    'admin_code': "Admin code",
}


def render_register_page(route: Route) -> None:
    """Render the registration form."""
    st.title("Create an account")

    # Outside the form so toggling shows the admin code field immediately
    is_admin = st.checkbox("Register as admin", key="register_is_admin")

    with st.form("register_form"):
        username = st.text_input("Username", placeholder="Enter username")
        email = st.text_input("Email", placeholder="Enter email")
        password = st.text_input("Password", type="password", placeholder="Enter password")
        admin_code = None
        if is_admin:
            st.warning("Admin verification: enter the admin code you were given.")
            admin_code = st.text_input("Admin code", placeholder="Admin verification code")
        submitted = st.form_submit_button("Register", type="primary", width='stretch')

    if submitted:
        _handle_register(username.strip(), email.strip(), password, is_admin, admin_code)

    st.caption("Already have an account?")
    if st.button("Log in here", key="register_to_login"):
        go_to(PATH_LOGIN, delay=config.NAVIGATION_DELAY_SECONDS)


def _handle_register(username, email, password, is_admin, admin_code) -> None:
    validation = FormValidator.validate_register(username, email, password, is_admin, admin_code)
    if not validation:
        render_field_errors(validation, _LABELS)
        return

    try:
        with st.spinner("Creating account..."):
            redirect = auth_service.register(
                get_api_client(),
                username=username,
                email=email,
                password=password,
                is_admin=is_admin,
                admin_code=admin_code,
            )
    except (ApiError, requests.exceptions.RequestException) as e:
        logger.info(f"Registration failed for {username}: {e}")
        show_error(e)
        return

    go_to(redirect)
