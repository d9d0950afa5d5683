from __future__ import annotations

import math
import re
from typing import List

_LINE_BREAK = re.compile(r'\r?\n')


def split_lines(text: str) -> List[str]:
    """Split on CRLF or LF line boundaries."""
    if text is None:
        return []
    return _LINE_BREAK.split(text)


def non_blank_lines(text: str) -> List[str]:
    return [line for line in split_lines(text) if line.strip()]


def is_numeric_text(value: str) -> bool:
    """True when a non-blank cell reads as a finite or infinite number.

    Underscore digit grouping is rejected even though `float` accepts it.
    """
    if value is None:
        return False
    text = value.strip()
    if not text or '_' in text:
        return False
    try:
        number = float(text)
    except ValueError:
        return False
    return not math.isnan(number)


def byte_length(text: str) -> int:
    """Size of the text once encoded as UTF-8."""
    return len(text.encode('utf-8', errors='surrogatepass'))
