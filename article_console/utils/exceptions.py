"""Custom exceptions for the Article Console.

This module defines a hierarchy of exceptions for better error handling
and more informative error messages.

Exception Hierarchy:
    ConsoleError (base)
    ├── ApiError
    ├── RequestCancelledError
    ├── UploadError
    ├── FormValidationError
    └── AccessDeniedError

Transport failures (no response at all) are not wrapped: they surface as
``requests.exceptions.RequestException`` so callers can tell them apart
from backend errors and from cancellations.
"""

from typing import Any, Dict, Optional

DEFAULT_ERROR_MESSAGE = "An error occurred"


class ConsoleError(Exception):
    """Base exception for the Article Console.

    All custom exceptions in this application should inherit from this class.
    This allows catching all application-specific errors with a single except clause.

    Example:
        >>> try:
        ...     risky_operation()
        ... except ConsoleError as e:
        ...     handle_error(e)
    """

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGE):
        self.message = message
        super().__init__(self.message)


class ApiError(ConsoleError):
    """Normalized backend error response.

    Every non-2xx response from the backend is reshaped into this single
    form by the API client.

    Attributes:
        status: HTTP status code
        message: Backend-supplied message, or the generic fallback
        response: The original ``requests.Response``

    Example:
        >>> raise ApiError("Article not found", status=404)
    """

    def __init__(
        self,
        message: str = DEFAULT_ERROR_MESSAGE,
        status: int = None,
        response: Any = None
    ):
        self.status = status
        self.response = response
        super().__init__(message or DEFAULT_ERROR_MESSAGE)

    def __repr__(self) -> str:
        return f"ApiError(status={self.status!r}, message={self.message!r})"


class RequestCancelledError(ConsoleError):
    """Raised when a request was superseded before its result was used.

    Not a failure: views discard it silently.
    """

    def __init__(self, message: str = "Request was cancelled"):
        super().__init__(message)


class UploadError(ConsoleError):
    """Raised when an image upload succeeds but returns no usable URL.

    Attributes:
        filename: Name of the uploaded file (optional)
    """

    def __init__(self, message: str = "Image URL not found in response", filename: str = None):
        self.filename = filename
        super().__init__(message)


class FormValidationError(ConsoleError):
    """Raised when form input fails validation before any network call.

    Attributes:
        errors: Mapping of field name to message

    Example:
        >>> raise FormValidationError({"title": "Title is required"})
    """

    def __init__(self, errors: Optional[Dict[str, str]] = None, message: str = "Please fix the highlighted fields"):
        self.errors = dict(errors or {})
        super().__init__(message)


class AccessDeniedError(ConsoleError):
    """Raised when the stored role does not grant access to a view.

    Attributes:
        required_role: Role the view requires
        redirect_to: Where the caller should send the user
    """

    def __init__(
        self,
        message: str = "Access denied",
        required_role: str = None,
        redirect_to: str = None
    ):
        self.required_role = required_role
        self.redirect_to = redirect_to
        super().__init__(message)


def is_cancelled(exc: BaseException) -> bool:
    """Return True when an exception only signals a superseded request."""
    return isinstance(exc, RequestCancelledError)
