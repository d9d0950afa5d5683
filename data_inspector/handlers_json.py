from __future__ import annotations

from typing import Any, Dict, Optional

import gradio as gr

from .errors import ParseError, get_json_error
from .io_utils import read_text_content
from .json_converter import convert_json
from .share import generate_shareable_url, prune_empty_values
from .state_store import merge_tool_state

TOOL_ID = "json-converter"
TOOL_PATH = "/json-converter"


def default_converter_state() -> Dict[str, Any]:
    return {"input": "", "is_formatted": True, "outer_delimiter": '"'}


def merge_state(state: Optional[Dict[str, Any]], patch: Dict[str, Any]) -> Dict[str, Any]:
    return merge_tool_state(TOOL_ID, default_converter_state(), state, patch)


def convert_json_handler(text, is_formatted, outer_delimiter, state):
    state = merge_state(state, {
        "input": text or "",
        "is_formatted": bool(is_formatted),
        "outer_delimiter": outer_delimiter or '"',
    })
    result = convert_json(state["input"], state["is_formatted"], state["outer_delimiter"])
    return result.output, result.error or "", state


def upload_json_handler(file_obj):
    if file_obj is None:
        return gr.update(), "No file uploaded."
    try:
        content = read_text_content(file_obj)
    except (OSError, ValueError, ParseError) as exc:
        info = get_json_error(exc)
        return gr.update(), info.message
    return gr.update(value=content), "File loaded."


def clear_json_handler(state):
    return "", "", "", merge_state(state, {"input": ""})


def share_json_handler(state):
    url = generate_shareable_url(TOOL_PATH, prune_empty_values(merge_state(state, {})))
    return gr.update(value=url, visible=True)


def restore_json_state(state):
    state = merge_state(state, {})
    return state["input"], state["is_formatted"], state["outer_delimiter"]
