"""Utilities for the Article Console."""
import html
from datetime import datetime
from typing import Optional

from article_console.utils.session_state import (
    SessionState,
    SessionCredential,
    ANONYMOUS,
    PATH_HOME,
    PATH_LOGIN,
    PATH_REGISTER,
    PATH_ADMIN_ARTICLES,
    PATH_ADMIN_CATEGORIES,
    VIEW_ARTICLES,
    VIEW_ADMIN_ARTICLES,
    VIEW_ADMIN_CATEGORIES,
)


def escape_text(value) -> str:
    """Escape any value for interpolation into HTML markdown."""
    return html.escape("" if value is None else str(value))


def truncate(text: Optional[str], length: int = 120) -> str:
    """Shorten text for previews, adding an ellipsis when cut."""
    text = (text or "").strip()
    if len(text) <= length:
        return text
    return text[:length - 3].rstrip() + "..."


def format_date(value: Optional[str]) -> str:
    """Render an ISO timestamp as e.g. '5 June 2025'.

    Unparseable values are returned unchanged; missing ones become ''.
    """
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return str(value)
    return f"{parsed.day} {parsed:%B %Y}"


from article_console.utils.content import (
    sanitize_html,
    html_to_text,
    escape_markdown,
)
from article_console.utils.exceptions import (
    DEFAULT_ERROR_MESSAGE,
    ConsoleError,
    ApiError,
    RequestCancelledError,
    UploadError,
    FormValidationError,
    AccessDeniedError,
    is_cancelled,
)
from article_console.utils.validators import (
    ValidationResult,
    FormValidator,
    ImageFileValidator,
    validate_or_raise,
)
from article_console.utils.pagination import (
    compute_total_pages,
    clamp_page,
    page_numbers,
    row_number,
    page_after_delete,
)

__all__ = [
    # Utilities
    "escape_text",
    "truncate",
    "format_date",
    # Article content
    "sanitize_html",
    "html_to_text",
    "escape_markdown",
    # Session state
    "SessionState",
    "SessionCredential",
    "ANONYMOUS",
    "PATH_HOME",
    "PATH_LOGIN",
    "PATH_REGISTER",
    "PATH_ADMIN_ARTICLES",
    "PATH_ADMIN_CATEGORIES",
    "VIEW_ARTICLES",
    "VIEW_ADMIN_ARTICLES",
    "VIEW_ADMIN_CATEGORIES",
    # Exceptions
    "DEFAULT_ERROR_MESSAGE",
    "ConsoleError",
    "ApiError",
    "RequestCancelledError",
    "UploadError",
    "FormValidationError",
    "AccessDeniedError",
    "is_cancelled",
    # Validators
    "ValidationResult",
    "FormValidator",
    "ImageFileValidator",
    "validate_or_raise",
    # Pagination
    "compute_total_pages",
    "clamp_page",
    "page_numbers",
    "row_number",
    "page_after_delete",
]
