"""Structural and heuristic sanity checks on raw text input.

Every check returns a `ValidationResult`; nothing here raises on user input.
Errors are accumulated in detection order so a user sees every problem with
their input in one pass.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from .config import settings
from .errors import ParseError, ValidationError
from .io_utils import load_json_text
from .text_utils import byte_length, non_blank_lines

_JSON_LITERAL = re.compile(r'^(true|false|null|-?\d+(\.\d+)?([eE][+-]?\d+)?)$')
_TRAILING_COMMA = re.compile(r',\s*[}\]]')


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    def raise_for_errors(self) -> None:
        if not self.is_valid:
            raise ValidationError(self.errors)


@dataclass
class ValidationRule:
    """A predicate over a string plus the message shown when it fails."""
    validate: Callable[[str], bool]
    message: str


def _result(errors: List[str]) -> ValidationResult:
    return ValidationResult(is_valid=not errors, errors=errors)


def validate_json(text: str) -> ValidationResult:
    errors: List[str] = []

    if text is None or not text.strip():
        errors.append('JSON input cannot be empty')
        return _result(errors)

    trimmed = text.strip()
    if not (
        (trimmed.startswith('{') and trimmed.endswith('}'))
        or (trimmed.startswith('[') and trimmed.endswith(']'))
        or trimmed.startswith('"')
        or _JSON_LITERAL.match(trimmed)
    ):
        errors.append('Input must be valid JSON (object, array, string, number, boolean, or null)')

    try:
        load_json_text(text)
    except ParseError as exc:
        errors.append(str(exc))

    if "'" in text:
        errors.append('JSON strings must use double quotes ("), not single quotes (\')')

    if _TRAILING_COMMA.search(text):
        errors.append('Remove trailing commas before closing brackets')

    return _result(errors)


def count_csv_columns(line: str) -> int:
    """Count columns in one line; commas inside quotes do not split."""
    count = 1
    in_quotes = False
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == '"':
            if i + 1 < len(line) and line[i + 1] == '"':
                i += 1  # escaped quote
            else:
                in_quotes = not in_quotes
        elif ch == ',' and not in_quotes:
            count += 1
        i += 1
    return count


def has_unclosed_quotes(text: str) -> bool:
    in_quotes = False
    i = 0
    while i < len(text):
        if text[i] == '"':
            if i + 1 < len(text) and text[i + 1] == '"':
                i += 1
            else:
                in_quotes = not in_quotes
        i += 1
    return in_quotes


def validate_csv(text: str) -> ValidationResult:
    errors: List[str] = []

    if text is None or not text.strip():
        errors.append('CSV input cannot be empty')
        return _result(errors)

    lines = non_blank_lines(text)
    if not lines:
        errors.append('CSV must contain at least one row of data')
        return _result(errors)

    column_counts = [count_csv_columns(line) for line in lines]
    expected = column_counts[0]
    for index, count in enumerate(column_counts[1:], start=1):
        if count != expected:
            errors.append(f"Row {index + 1} has {count} columns, but expected {expected}")
            break

    if has_unclosed_quotes(text):
        errors.append('CSV contains unclosed quotes')

    return _result(errors)


def validate_file_size(content: str, max_size_kb: Optional[float] = None) -> ValidationResult:
    if max_size_kb is None:
        max_size_kb = settings.MAX_FILE_SIZE_KB
    errors: List[str] = []
    size_kb = byte_length(content or '') / 1024

    if size_kb > max_size_kb:
        errors.append(
            f"File size ({size_kb:.1f}KB) exceeds maximum allowed size ({max_size_kb}KB)"
        )

    return _result(errors)


def validate_required(text: str) -> ValidationResult:
    errors: List[str] = []
    if not text or not text.strip():
        errors.append('This field is required')
    return _result(errors)


def validate_custom(text: str, rules: Iterable[ValidationRule]) -> ValidationResult:
    """Evaluate every rule; failing messages are collected in rule order."""
    errors = [rule.message for rule in rules if not rule.validate(text)]
    return _result(errors)
