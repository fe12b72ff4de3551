"""User-facing notices: flash messages and error display.

Cancellations never reach the user; everything else becomes a transient,
dismissable message.
"""

import logging
from typing import Optional

import requests
import streamlit as st

from article_console.utils import (
    SessionState,
    ApiError,
    ConsoleError,
    DEFAULT_ERROR_MESSAGE,
    is_cancelled,
)

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Cannot reach the server. Check your connection and try again."

_ICONS = {
    'success': "✅",
    'error': "⚠️",
    'info': "ℹ️",
}


def describe_error(exc: BaseException, fallback: str = None) -> Optional[str]:
    """Message to show for an exception, or None if it should stay silent.

    Args:
        exc: The exception raised by a service call
        fallback: Message for errors that carry nothing useful
    """
    if is_cancelled(exc):
        return None
    if isinstance(exc, ApiError):
        return exc.message
    if isinstance(exc, requests.exceptions.RequestException):
        return NETWORK_ERROR_MESSAGE
    if isinstance(exc, ConsoleError):
        return exc.message
    return fallback or DEFAULT_ERROR_MESSAGE


def show_error(exc: BaseException, prefix: str = None) -> None:
    """Render an exception as an inline error, unless it is a cancellation."""
    message = describe_error(exc)
    if message is None:
        logger.debug(f"Suppressed cancellation: {exc}")
        return
    st.error(f"{prefix}: {message}" if prefix else message)


def render_field_errors(result, labels: dict = None) -> None:
    """Show a ValidationResult's field errors under the form."""
    labels = labels or {}
    for field_name, message in result.errors.items():
        label = labels.get(field_name, field_name.replace('_', ' ').capitalize())
        st.error(f"**{label}:** {message}")


def show_toast(kind: str, message: str) -> None:
    """Show a transient toast."""
    st.toast(message, icon=_ICONS.get(kind, _ICONS['info']))


def render_flash() -> None:
    """Show the queued flash message, if any, exactly once."""
    notice = SessionState.pop_flash()
    if notice:
        kind, message = notice
        show_toast(kind, message)
