from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Optional

from .errors import ParseError


@dataclass
class ParsedJSON:
    data: Any = None
    is_valid: bool = False
    error: Optional[str] = None


def _decode(content) -> str:
    if isinstance(content, bytes):
        content = content.decode('utf-8-sig')
    elif content.startswith('\ufeff'):
        content = content[1:]
    return content


def read_text_content(file_obj) -> str:
    """Read text content from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        return _decode(file_obj.read())

    if isinstance(file_obj, (str, os.PathLike)):
        path = file_obj
    else:
        path = file_obj.name
    try:
        with open(path, 'r', encoding='utf-8-sig') as f:
            return f.read()
    except UnicodeDecodeError as exc:
        raise ParseError("File is not valid UTF-8 text.", details=str(exc)) from exc


def _reject_constant(name: str):
    # NaN and Infinity are not JSON even though the stdlib decoder accepts them.
    raise ValueError(f"Unexpected token {name} in JSON")


def load_json_text(content: str) -> Any:
    """Parse JSON text strictly, raising `ParseError` with the decoder message."""
    try:
        return json.loads(content, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise ParseError(f"JSON parsing error: {exc}", details=str(exc)) from exc


def parse_json(content: str) -> ParsedJSON:
    if content is None or not content.strip():
        return ParsedJSON(error='Empty input')

    try:
        return ParsedJSON(data=load_json_text(content), is_valid=True)
    except ParseError as exc:
        return ParsedJSON(error=exc.details)
