from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import gradio as gr
import pandas as pd

from .csv_table import ParsedTable, assume_header_row, detect_csv_headers, table_to_csv
from .csv_viewer import TOOL_ID, TOOL_PATH, CSVLoadResult, ProcessingState, default_viewer_state, load_csv
from .errors import ParseError, get_csv_error
from .io_utils import read_text_content
from .pagination import paginate, visible_rows
from .performance import PerformanceMonitor
from .share import generate_shareable_url, prune_empty_values
from .state_store import merge_tool_state

HEADER_MODES = ["Auto-detect", "Yes", "No"]

# One monitor per process for the viewer; metrics never leave the server.
viewer_monitor = PerformanceMonitor()


def header_mode_to_flag(mode: str) -> Optional[bool]:
    if mode == "Yes":
        return True
    if mode == "No":
        return False
    return None


def header_flag_to_mode(flag: Optional[bool]) -> str:
    if flag is True:
        return "Yes"
    if flag is False:
        return "No"
    return "Auto-detect"


def merge_state(state: Optional[Dict[str, Any]], patch: Dict[str, Any]) -> Dict[str, Any]:
    return merge_tool_state(TOOL_ID, default_viewer_state(), state, patch)


def table_to_dataframe(table: Optional[ParsedTable], rows: List[List[str]]) -> pd.DataFrame:
    if table is None or not table.headers:
        return pd.DataFrame()
    width = max([len(table.headers)] + [len(row) for row in rows])
    headers = list(table.headers) + [f"Column {i + 1}" for i in range(len(table.headers), width)]
    padded = [list(row) + [""] * (width - len(row)) for row in rows]
    return pd.DataFrame(padded, columns=headers)


def render_page(table: Optional[ParsedTable], state: Dict[str, Any]):
    """Return (dataframe, page label, normalised state) for the current page."""
    if table is None or table.total_rows == 0:
        return table_to_dataframe(table, []), "No rows", merge_state(state, {"current_page": 1})

    row_limit = int(state.get("row_limit") or default_viewer_state()["row_limit"])
    window = paginate(table.total_rows, int(state.get("current_page") or 1), row_limit)
    rows = visible_rows(table.rows, window)
    label = (
        f"Rows {window.start_index + 1}-{window.end_index} of {table.total_rows} "
        f"(page {window.current_page} of {window.total_pages})"
    )
    return table_to_dataframe(table, rows), label, merge_state(state, {"current_page": window.current_page})


async def parse_csv_handler(raw_input, header_mode, state, progress=gr.Progress()):
    has_headers = header_mode_to_flag(header_mode)

    def on_progress(processing: ProcessingState):
        if processing.is_processing:
            progress(processing.progress / 100, desc=f"Processing CSV ({processing.progress}%)")

    result: CSVLoadResult = await load_csv(
        raw_input or "",
        has_headers,
        header_detector=detect_csv_headers if has_headers is None else assume_header_row,
        monitor=viewer_monitor,
        on_progress=on_progress,
    )

    state = merge_state(state, {"raw_input": raw_input or "", "has_headers": has_headers, "current_page": 1})

    if not result.ok:
        info = get_csv_error(". ".join(result.errors))
        status = f"{info.message} ({'; '.join(result.errors)})"
        df, label, state = render_page(None, state)
        return None, state, df, label, status, ""

    table = result.table
    df, label, state = render_page(table, state)
    status = f"Parsed {table.total_rows} rows, {len(table.headers)} columns." if table.total_rows else ""
    return table, state, df, label, status, result.warning or ""


def change_page_handler(table, state, delta: int):
    current = int((state or {}).get("current_page") or 1)
    df, label, state = render_page(table, merge_state(state, {"current_page": current + delta}))
    return state, df, label


def previous_page_handler(table, state):
    return change_page_handler(table, state, -1)


def next_page_handler(table, state):
    return change_page_handler(table, state, 1)


def row_limit_handler(table, state, row_limit):
    df, label, state = render_page(table, merge_state(state, {"row_limit": int(row_limit), "current_page": 1}))
    return state, df, label


def upload_csv_handler(file_obj):
    if file_obj is None:
        return gr.update(), "No file uploaded."

    name = file_obj.name if hasattr(file_obj, "name") else str(file_obj)
    if not name.lower().endswith(".csv"):
        return gr.update(), "Please select a CSV file"

    try:
        content = read_text_content(file_obj)
    except (OSError, ValueError, ParseError) as exc:
        return gr.update(), f"Failed to read file: {exc}"
    return gr.update(value=content), f"Loaded {os.path.basename(name)}."


def clear_csv_handler(state):
    state = merge_state(state, {"raw_input": "", "current_page": 1})
    df, label, state = render_page(None, state)
    return "", None, state, df, label, "", ""


def copy_table_handler(table):
    if table is None or table.total_rows == 0:
        return gr.update(value="", visible=False), "Nothing to copy."
    return gr.update(value=table_to_csv(table), visible=True), "Table data ready to copy."


def share_csv_handler(state):
    url = generate_shareable_url(TOOL_PATH, prune_empty_values(merge_state(state, {})))
    return gr.update(value=url, visible=True)


def restore_csv_state(state):
    """Values for (input, header mode, row limit) from a persisted state."""
    state = merge_state(state, {})
    return state["raw_input"], header_flag_to_mode(state["has_headers"]), state["row_limit"]
