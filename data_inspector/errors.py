"""Exceptions and user-facing error formatting for Data Inspector"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional


class DataInspectorError(Exception):
    """Base exception for all Data Inspector errors"""
    pass


class ValidationError(DataInspectorError):
    """Structural or heuristic input failure"""
    def __init__(self, errors: List[str]):
        super().__init__(". ".join(errors))
        self.errors = list(errors)


class ParseError(DataInspectorError):
    """Native parser rejected the input"""
    def __init__(self, message: str, details: str = None):
        super().__init__(message)
        self.details = details


class SizeLimitError(DataInspectorError):
    """Content is too large to process"""
    def __init__(self, size_kb: float, limit_kb: float):
        super().__init__(
            f"Content too large: {size_kb:.1f}KB exceeds the {limit_kb}KB limit"
        )
        self.size_kb = size_kb
        self.limit_kb = limit_kb


class ClipboardError(DataInspectorError):
    """Clipboard collaborator failed"""
    pass


class ShareDecodeError(DataInspectorError):
    """Shared link is malformed or its state token is corrupt"""
    pass


class ChunkingCancelled(DataInspectorError):
    """A chunked run was cancelled between chunks"""
    def __init__(self, processed: int, total: int):
        super().__init__(f"Chunked processing cancelled after {processed} of {total} items")
        self.processed = processed
        self.total = total


@dataclass
class ErrorInfo:
    message: str
    type: str = 'error'  # 'error' | 'warning' | 'info'
    code: Optional[str] = None
    details: Optional[str] = None


def _message_of(error) -> str:
    return str(error)


def format_error(error) -> ErrorInfo:
    """Route any error to the most specific formatter based on its text."""
    if isinstance(error, Exception):
        message = _message_of(error)
        if 'JSON' in message:
            return get_json_error(error)
        if 'CSV' in message:
            return get_csv_error(error)
        if 'clipboard' in message.lower():
            return get_clipboard_error(error)
    return get_generic_error(error)


def get_json_error(error) -> ErrorInfo:
    message = _message_of(error)

    if 'Unexpected token' in message or 'Expecting value' in message:
        match = re.search(r'Unexpected token (.+?) in JSON', message)
        token = match.group(1) if match else 'character'
        return ErrorInfo(
            message=f"Invalid JSON: Unexpected {token}. Check for missing quotes, commas, or brackets.",
            code='JSON_SYNTAX_ERROR',
            details=message,
        )

    if 'Unexpected end of JSON input' in message or 'Unterminated string' in message:
        return ErrorInfo(
            message="Invalid JSON: The input appears to be incomplete. Check for missing closing brackets or quotes.",
            code='JSON_INCOMPLETE',
            details=message,
        )

    if 'Expected property name' in message or 'Expecting property name' in message:
        return ErrorInfo(
            message="Invalid JSON: Property names must be enclosed in double quotes.",
            code='JSON_PROPERTY_NAME',
            details=message,
        )

    if 'Duplicate key' in message:
        return ErrorInfo(
            message="Invalid JSON: Duplicate property names are not allowed.",
            code='JSON_DUPLICATE_KEY',
            details=message,
        )

    return ErrorInfo(
        message="Invalid JSON format. Please check your syntax and try again.",
        code='JSON_PARSE_ERROR',
        details=message,
    )


def get_csv_error(error) -> ErrorInfo:
    message = _message_of(error)

    if 'Empty' in message or 'cannot be empty' in message:
        return ErrorInfo(
            message="No CSV data provided. Please paste or upload CSV content.",
            type='warning',
            code='CSV_EMPTY',
            details=message,
        )

    if 'parsing failed' in message:
        return ErrorInfo(
            message="Unable to parse CSV data. Please check the format and try again.",
            code='CSV_PARSE_ERROR',
            details=message,
        )

    if 'too large' in message or 'exceeds maximum allowed size' in message or isinstance(error, SizeLimitError):
        return ErrorInfo(
            message="CSV file is too large to process. Try reducing the file size or number of rows.",
            code='CSV_TOO_LARGE',
            details=message,
        )

    return ErrorInfo(
        message="Error processing CSV data. Please check the format and try again.",
        code='CSV_ERROR',
        details=message,
    )


def get_clipboard_error(error) -> ErrorInfo:
    message = _message_of(error)

    if 'not supported' in message or 'NotSupportedError' in message:
        return ErrorInfo(
            message="Clipboard access is not supported in this browser or context. Try using a secure (HTTPS) connection.",
            type='warning',
            code='CLIPBOARD_NOT_SUPPORTED',
            details=message,
        )

    if 'permission' in message or 'NotAllowedError' in message:
        return ErrorInfo(
            message="Clipboard access was denied. Please allow clipboard permissions and try again.",
            type='warning',
            code='CLIPBOARD_PERMISSION_DENIED',
            details=message,
        )

    if 'failed' in message:
        return ErrorInfo(
            message="Failed to copy to clipboard. You can manually select and copy the text.",
            type='warning',
            code='CLIPBOARD_COPY_FAILED',
            details=message,
        )

    return ErrorInfo(
        message="Clipboard operation failed. Please try copying manually.",
        type='warning',
        code='CLIPBOARD_ERROR',
        details=message,
    )


def get_generic_error(error) -> ErrorInfo:
    message = _message_of(error)

    if 'Network' in message:
        return ErrorInfo(
            message="Network error occurred. Please check your connection and try again.",
            code='NETWORK_ERROR',
            details=message,
        )

    if 'timeout' in message:
        return ErrorInfo(
            message="Operation timed out. Please try again.",
            code='TIMEOUT_ERROR',
            details=message,
        )

    if 'memory' in message.lower() or isinstance(error, MemoryError):
        return ErrorInfo(
            message="Not enough memory to complete the operation. Try with smaller data.",
            code='MEMORY_ERROR',
            details=message,
        )

    return ErrorInfo(
        message="An unexpected error occurred. Please try again.",
        code='UNKNOWN_ERROR',
        details=message,
    )
