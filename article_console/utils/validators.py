"""Input validation utilities.

This module validates form input before anything is sent to the backend:
- Login and registration forms
- Article and category forms
- Uploaded image files

All validators return ValidationResult objects for consistent error handling.
Errors are keyed by field so pages can show them next to the widget.
"""

import re
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from article_console.config.settings import config
from article_console.utils.exceptions import FormValidationError

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        errors: Field name to error message (empty if valid)

    Example:
        >>> result = ValidationResult(is_valid=True)
        >>> if result.is_valid:
        ...     submit()
    """
    is_valid: bool = True
    errors: Dict[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.is_valid

    def add_error(self, field_name: str, error: str) -> None:
        """Add an error and mark as invalid.

        Only the first error per field is kept.
        """
        self.errors.setdefault(field_name, error)
        self.is_valid = False


def validate_or_raise(result: ValidationResult) -> None:
    """Raise FormValidationError when a result is invalid."""
    if not result.is_valid:
        raise FormValidationError(result.errors)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class FormValidator:
    """Validates the console's forms.

    Mirrors the backend's own rules closely enough that most bad input
    never costs a round trip.
    """

    EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

    @classmethod
    def validate_login(cls, username: str, password: str) -> ValidationResult:
        """Validate the login form.

        Example:
            >>> FormValidator.validate_login('alice', 'secret1').is_valid
            True
            >>> FormValidator.validate_login('', 'x').errors['username']
            'Username is required'
        """
        result = ValidationResult()

        if _is_blank(username):
            result.add_error('username', "Username is required")

        if not password or len(password) < config.MIN_PASSWORD_LENGTH:
            result.add_error(
                'password',
                f"Password must be at least {config.MIN_PASSWORD_LENGTH} characters"
            )

        return result

    @classmethod
    def validate_register(
        cls,
        username: str,
        email: str,
        password: str,
        is_admin: bool = False,
        admin_code: Optional[str] = None
    ) -> ValidationResult:
        """Validate the registration form.

        Performs the following checks:
        1. Username length within bounds
        2. Email shape
        3. Password length, one uppercase letter and one digit
        4. Admin code present when registering as admin
        """
        result = ValidationResult()

        username = (username or "").strip()
        if len(username) < config.MIN_USERNAME_LENGTH:
            result.add_error(
                'username',
                f"Username must be at least {config.MIN_USERNAME_LENGTH} characters"
            )
        elif len(username) > config.MAX_USERNAME_LENGTH:
            result.add_error(
                'username',
                f"Username must be at most {config.MAX_USERNAME_LENGTH} characters"
            )

        if not cls.EMAIL_PATTERN.match((email or "").strip()):
            result.add_error('email', "Invalid email address")

        password = password or ""
        if len(password) < config.MIN_PASSWORD_LENGTH:
            result.add_error(
                'password',
                f"Password must be at least {config.MIN_PASSWORD_LENGTH} characters"
            )
        elif not re.search(r'[A-Z]', password):
            result.add_error('password', "Password must contain an uppercase letter")
        elif not re.search(r'[0-9]', password):
            result.add_error('password', "Password must contain a number")

        if is_admin and _is_blank(admin_code):
            result.add_error('admin_code', "Admin verification code is required")

        return result

    @classmethod
    def validate_article(cls, title: str, content: str, category_id: str) -> ValidationResult:
        """Validate the article form."""
        result = ValidationResult()

        if _is_blank(title):
            result.add_error('title', "Title is required")
        if _is_blank(content):
            result.add_error('content', "Content is required")
        if _is_blank(category_id):
            result.add_error('category_id', "Please choose a category")

        return result

    @classmethod
    def validate_category(cls, name: str) -> ValidationResult:
        """Validate the category form."""
        result = ValidationResult()

        if len((name or "").strip()) < config.MIN_CATEGORY_NAME_LENGTH:
            result.add_error(
                'name',
                f"Category name must be at least {config.MIN_CATEGORY_NAME_LENGTH} characters"
            )

        return result


class ImageFileValidator:
    """Validates image files before upload."""

    @staticmethod
    def validate(filename: str, size_bytes: int) -> ValidationResult:
        """Check extension and size of an image.

        Args:
            filename: Original file name
            size_bytes: File size in bytes

        Returns:
            ValidationResult with any errors under 'image'
        """
        result = ValidationResult()

        if not filename:
            result.add_error('image', "No file selected")
            return result

        ext = Path(filename).suffix.lower()
        if ext not in config.ALLOWED_IMAGE_EXTENSIONS:
            allowed = ", ".join(sorted(config.ALLOWED_IMAGE_EXTENSIONS))
            result.add_error('image', f"Unsupported file type '{ext}'. Allowed: {allowed}")
            return result

        if size_bytes <= 0:
            result.add_error('image', "File is empty")
        elif size_bytes > config.MAX_IMAGE_SIZE_BYTES:
            result.add_error(
                'image',
                f"File exceeds maximum size of {config.MAX_IMAGE_SIZE_MB}MB"
            )

        return result
