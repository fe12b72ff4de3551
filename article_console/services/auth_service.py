"""Login, registration and logout flows.

Pages call these and only deal with the returned redirect target and
message; storage writes happen here.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from article_console.config.settings import ROLE_ADMIN
from article_console.services.api_client import ConsoleAPIClient
from article_console.utils.exceptions import ApiError
from article_console.utils.session_state import (
    SessionState,
    SessionCredential,
    PATH_HOME,
    PATH_LOGIN,
    PATH_ADMIN_ARTICLES,
)

logger = logging.getLogger(__name__)

LOGIN_SUCCESS_QUERY = "success=login"


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful login."""
    credential: SessionCredential
    redirect: str
    message: str


def login(client: ConsoleAPIClient, username: str, password: str) -> LoginResult:
    """Log in and persist the session credential.

    The stored username is the one the user typed, not the backend's echo.

    Raises:
        ApiError: wrong credentials or backend failure
        requests.exceptions.RequestException: backend unreachable
    """
    data = client.login(username, password)

    credential = SessionCredential(
        token=data['token'],
        role=data.get('role'),
        username=username,
    )
    SessionState.store_credential(credential)

    if credential.role == ROLE_ADMIN:
        redirect = f"{PATH_ADMIN_ARTICLES}?{LOGIN_SUCCESS_QUERY}"
        message = "Admin login successful! Welcome back"
    else:
        redirect = f"{PATH_HOME}?{LOGIN_SUCCESS_QUERY}"
        message = "User login successful! Welcome back"

    return LoginResult(credential=credential, redirect=redirect, message=message)


def register(
    client: ConsoleAPIClient,
    username: str,
    email: str,
    password: str,
    is_admin: bool = False,
    admin_code: Optional[str] = None
) -> str:
    """Register an account.

    Returns:
        The login path carrying the registered email

    Raises:
        ApiError: the backend refused, or answered with something other than 201
    """
    response = client.register(
        username=username,
        email=email,
        password=password,
        is_admin=is_admin,
        admin_code=admin_code,
    )
    if response.status_code != 201:
        raise ApiError("Registration failed", status=response.status_code, response=response)

    logger.info(f"Registered {username} ({'admin' if is_admin else 'user'})")
    return f"{PATH_LOGIN}?registered=true&email={quote(email, safe='')}"


def logout() -> str:
    """Clear the session. Returns the login path."""
    SessionState.logout()
    return PATH_LOGIN


def expire_session() -> str:
    """Handle a 401 on an admin write.

    Drops the token and queues a notice for the login page.
    """
    SessionState.remove_token()
    SessionState.flash('error', "Session expired, please log in again")
    return PATH_LOGIN
