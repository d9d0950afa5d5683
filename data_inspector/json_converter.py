from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Optional

from .io_utils import load_json_text
from .validation import validate_json

OUTER_DELIMITERS = ('"', "'")


@dataclass
class ConversionResult:
    output: str = ''
    error: Optional[str] = None


def convert_json(text: str, is_formatted: bool = True, outer_delimiter: str = '"') -> ConversionResult:
    """Validate JSON and re-emit it as a quoted string literal.

    With a double-quote delimiter the inner double quotes are backslash
    escaped; with a single-quote delimiter the text is wrapped as is.
    """
    if outer_delimiter not in OUTER_DELIMITERS:
        raise ValueError(f"Unsupported outer delimiter: {outer_delimiter!r}")

    if text is None or not text.strip():
        return ConversionResult()

    validation = validate_json(text)
    if not validation.is_valid:
        return ConversionResult(error=". ".join(validation.errors))

    parsed = load_json_text(text)
    if is_formatted:
        stringified = json.dumps(parsed, indent=2, ensure_ascii=False)
    else:
        stringified = json.dumps(parsed, separators=(',', ':'), ensure_ascii=False)

    if outer_delimiter == '"':
        stringified = '"' + stringified.replace('"', '\\"') + '"'
    else:
        stringified = "'" + stringified + "'"

    return ConversionResult(output=stringified)
