from __future__ import annotations

import gradio as gr

from . import handlers_csv, handlers_json
from .share import parse_shared_url

KNOWN_TOOLS = {
    handlers_csv.TOOL_PATH: "csv",
    handlers_json.TOOL_PATH: "json",
}


def open_shared_link_handler(url, csv_state, json_state):
    """Apply a shared link to the matching tool.

    Returns (status, decoded state, csv state, json state, csv input,
    header mode, row limit, json input, formatted flag, outer delimiter, tab).
    """
    unchanged = (gr.update(),) * 6
    link = parse_shared_url(url or "")

    if not link.tool_path:
        return ("Not a valid shared link.", None, csv_state, json_state) + unchanged + (gr.update(),)

    tool = KNOWN_TOOLS.get(link.tool_path)
    if tool is None:
        return (f"Unknown tool: {link.tool_path}", None, csv_state, json_state) + unchanged + (gr.update(),)

    if link.state is None:
        return (
            f"Link for {link.tool_path} carries no readable state.",
            None, csv_state, json_state,
        ) + unchanged + (gr.update(selected=tool),)

    if tool == "csv":
        csv_state = handlers_csv.merge_state(link.state, {"current_page": 1})
        raw, mode, limit = handlers_csv.restore_csv_state(csv_state)
        updates = (raw, mode, limit, gr.update(), gr.update(), gr.update())
    else:
        json_state = handlers_json.merge_state(link.state, {})
        text, formatted, delimiter = handlers_json.restore_json_state(json_state)
        updates = (gr.update(), gr.update(), gr.update(), text, formatted, delimiter)

    status = f"Opened shared {link.tool_path} state."
    return (status, link.state, csv_state, json_state) + updates + (gr.update(selected=tool),)
