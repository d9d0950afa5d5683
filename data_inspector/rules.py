"""Reusable `ValidationRule` factories for `validate_custom`."""
from __future__ import annotations

import re
from typing import Pattern, Union
from urllib.parse import urlsplit

from .text_utils import is_numeric_text
from .validation import ValidationRule

_EMAIL = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def min_length(minimum: int) -> ValidationRule:
    return ValidationRule(
        validate=lambda value: len(value) >= minimum,
        message=f"Must be at least {minimum} characters long",
    )


def max_length(maximum: int) -> ValidationRule:
    return ValidationRule(
        validate=lambda value: len(value) <= maximum,
        message=f"Must be no more than {maximum} characters long",
    )


def pattern(regex: Union[str, Pattern], message: str) -> ValidationRule:
    compiled = re.compile(regex) if isinstance(regex, str) else regex
    return ValidationRule(validate=lambda value: compiled.search(value) is not None, message=message)


def numeric() -> ValidationRule:
    return ValidationRule(validate=is_numeric_text, message="Must be a valid number")


def email() -> ValidationRule:
    return ValidationRule(
        validate=lambda value: _EMAIL.match(value) is not None,
        message="Must be a valid email address",
    )


def _is_url(value: str) -> bool:
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if not parts.scheme or ' ' in value:
        return False
    return bool(parts.netloc or parts.path)


def url() -> ValidationRule:
    return ValidationRule(validate=_is_url, message="Must be a valid URL")
