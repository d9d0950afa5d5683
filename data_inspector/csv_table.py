"""Delimited-text parsing into an in-memory table.

The parser is tolerant: ragged rows are kept as they are and flagging them is
left to `validation.validate_csv`.
"""
from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .text_utils import is_numeric_text, non_blank_lines

HeaderDetector = Callable[[List[List[str]]], bool]


@dataclass
class ParsedTable:
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    total_rows: int = 0
    has_headers: bool = False

    @classmethod
    def empty(cls) -> "ParsedTable":
        return cls()

    @property
    def column_count(self) -> int:
        widths = [len(row) for row in self.rows]
        return max([len(self.headers)] + widths)


def parse_csv_line(line: str) -> List[str]:
    """Split one line into stripped fields; `""` inside quotes is a literal quote."""
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0

    while i < len(line):
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == ',' and not in_quotes:
            fields.append(''.join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1

    fields.append(''.join(current).strip())
    return fields


def assume_header_row(rows: List[List[str]]) -> bool:
    """Default rule: the first row is the header row whenever there is one."""
    return bool(rows)


def detect_csv_headers(rows: List[List[str]]) -> bool:
    """Heuristic header check.

    The first row counts as a header when it has at least one non-blank,
    non-numeric cell and the second row has at least one numeric cell.
    """
    if len(rows) < 2:
        return False

    first_row, second_row = rows[0], rows[1]
    first_has_text = any(cell.strip() and not is_numeric_text(cell) for cell in first_row)
    second_has_numbers = any(is_numeric_text(cell) for cell in second_row)
    return first_has_text and second_has_numbers


def detect_csv_headers_in_text(content: str) -> bool:
    rows = [parse_csv_line(line) for line in non_blank_lines(content)[:2]]
    return detect_csv_headers(rows)


def generate_column_names(count: int) -> List[str]:
    return [f"Column {i + 1}" for i in range(count)]


def parse_csv(
    content: str,
    has_headers: Optional[bool] = None,
    header_detector: HeaderDetector = assume_header_row,
) -> ParsedTable:
    """Parse delimited text into a `ParsedTable`.

    `has_headers=None` defers to `header_detector`, which sees the parsed rows.
    """
    if content is None or not content.strip():
        return ParsedTable.empty()

    lines = [line.strip() for line in non_blank_lines(content)]
    parsed_rows = [parse_csv_line(line) for line in lines]

    use_headers = header_detector(parsed_rows) if has_headers is None else bool(has_headers)

    if use_headers and parsed_rows:
        headers = parsed_rows[0]
        data_rows = parsed_rows[1:]
    else:
        width = max(len(row) for row in parsed_rows)
        headers = generate_column_names(width)
        data_rows = parsed_rows

    return ParsedTable(
        headers=headers,
        rows=data_rows,
        total_rows=len(data_rows),
        has_headers=use_headers,
    )


def table_to_csv(table: ParsedTable, include_headers: Optional[bool] = None) -> str:
    """Serialise a table back to delimited text for copying."""
    if include_headers is None:
        include_headers = table.has_headers

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    if include_headers and table.headers:
        writer.writerow(table.headers)
    writer.writerows(table.rows)
    return buffer.getvalue()
