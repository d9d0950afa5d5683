import logging

import gradio as gr

from data_inspector.config import settings
from data_inspector.csv_viewer import TOOL_ID as CSV_TOOL_ID, default_viewer_state
from data_inspector.handlers_csv import (
    HEADER_MODES,
    clear_csv_handler,
    copy_table_handler,
    next_page_handler,
    parse_csv_handler,
    previous_page_handler,
    restore_csv_state,
    row_limit_handler,
    share_csv_handler,
    upload_csv_handler,
)
from data_inspector.handlers_json import (
    TOOL_ID as JSON_TOOL_ID,
    clear_json_handler,
    convert_json_handler,
    default_converter_state,
    restore_json_state,
    share_json_handler,
    upload_json_handler,
)
from data_inspector.handlers_share import open_shared_link_handler
from data_inspector.state_store import storage_key_for

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

# --- UI Definition ---
with gr.Blocks(title="Data Inspector") as demo:
    gr.Markdown("# Data Inspector")
    gr.Markdown("Inspect CSV tables, convert JSON into string literals, and share tool state as a link.")

    # State (persisted per tool in the browser)
    csv_table_state = gr.State()
    csv_viewer_state = gr.BrowserState(default_viewer_state(), storage_key=storage_key_for(CSV_TOOL_ID))
    json_converter_state = gr.BrowserState(default_converter_state(), storage_key=storage_key_for(JSON_TOOL_ID))

    with gr.Tabs() as tabs:
        with gr.Tab("CSV Viewer", id="csv"):
            with gr.Row():
                # Left Panel: Input
                with gr.Column(scale=1):
                    gr.Markdown("### 1. Input")
                    csv_file = gr.File(label="Upload CSV File", file_types=[".csv"])
                    csv_input = gr.Textbox(label="CSV Data", lines=12, placeholder="Name,Age\nAda,36")
                    header_mode = gr.Radio(choices=HEADER_MODES, value="Auto-detect", label="First Row Is Header")
                    row_limit = gr.Dropdown(
                        label="Rows Per Page",
                        choices=settings.get_row_limit_choices(),
                        value=settings.DEFAULT_ROW_LIMIT,
                        interactive=True,
                    )
                    with gr.Row():
                        csv_clear_btn = gr.Button("Clear")
                        csv_share_btn = gr.Button("Share")
                    csv_share_url = gr.Textbox(label="Shareable Link", visible=False, show_copy_button=True)
                    csv_status = gr.Textbox(label="Status", interactive=False)
                    csv_warning = gr.Textbox(label="Performance", interactive=False)

                # Right Panel: Table
                with gr.Column(scale=2):
                    gr.Markdown("### 2. Table")
                    page_label = gr.Markdown("No rows")
                    csv_table_view = gr.Dataframe(interactive=False, wrap=True)
                    with gr.Row():
                        prev_btn = gr.Button("Previous")
                        next_btn = gr.Button("Next")
                    copy_table_btn = gr.Button("Copy Table Data")
                    copy_table_text = gr.Textbox(label="Table Data", visible=False, show_copy_button=True, lines=6)

        with gr.Tab("JSON Converter", id="json"):
            with gr.Row():
                with gr.Column(scale=1):
                    json_file = gr.File(label="Upload JSON File", file_types=[".json"])
                    json_input = gr.Textbox(label="JSON Input", lines=14, placeholder='{"key": "value"}')
                    is_formatted = gr.Checkbox(label="Pretty Print", value=True)
                    outer_delimiter = gr.Radio(choices=['"', "'"], value='"', label="Outer Delimiter")
                    with gr.Row():
                        json_clear_btn = gr.Button("Clear")
                        json_share_btn = gr.Button("Share")
                    json_share_url = gr.Textbox(label="Shareable Link", visible=False, show_copy_button=True)
                with gr.Column(scale=1):
                    json_output = gr.Textbox(label="String Literal", lines=14, show_copy_button=True)
                    json_error = gr.Textbox(label="Errors", interactive=False)

        with gr.Tab("Open Shared Link", id="share"):
            shared_url = gr.Textbox(label="Shared Link", placeholder="http://host/#/csv-viewer?state=...")
            open_link_btn = gr.Button("Open", variant="primary")
            share_status = gr.Textbox(label="Status", interactive=False)
            share_preview = gr.JSON(label="Decoded State")

    csv_outputs = [csv_table_state, csv_viewer_state, csv_table_view, page_label, csv_status, csv_warning]

    csv_input.change(
        fn=parse_csv_handler,
        inputs=[csv_input, header_mode, csv_viewer_state],
        outputs=csv_outputs,
        trigger_mode="always_last",
    )

    header_mode.change(
        fn=parse_csv_handler,
        inputs=[csv_input, header_mode, csv_viewer_state],
        outputs=csv_outputs,
    )

    csv_file.upload(fn=upload_csv_handler, inputs=[csv_file], outputs=[csv_input, csv_status])

    row_limit.change(
        fn=row_limit_handler,
        inputs=[csv_table_state, csv_viewer_state, row_limit],
        outputs=[csv_viewer_state, csv_table_view, page_label],
    )

    prev_btn.click(
        fn=previous_page_handler,
        inputs=[csv_table_state, csv_viewer_state],
        outputs=[csv_viewer_state, csv_table_view, page_label],
    )

    next_btn.click(
        fn=next_page_handler,
        inputs=[csv_table_state, csv_viewer_state],
        outputs=[csv_viewer_state, csv_table_view, page_label],
    )

    csv_clear_btn.click(
        fn=clear_csv_handler,
        inputs=[csv_viewer_state],
        outputs=[csv_input, csv_table_state, csv_viewer_state, csv_table_view, page_label, csv_status, csv_warning],
    )

    copy_table_btn.click(fn=copy_table_handler, inputs=[csv_table_state], outputs=[copy_table_text, csv_status])
    csv_share_btn.click(fn=share_csv_handler, inputs=[csv_viewer_state], outputs=[csv_share_url])

    json_inputs = [json_input, is_formatted, outer_delimiter, json_converter_state]
    json_outputs = [json_output, json_error, json_converter_state]
    json_input.change(fn=convert_json_handler, inputs=json_inputs, outputs=json_outputs, trigger_mode="always_last")
    is_formatted.change(fn=convert_json_handler, inputs=json_inputs, outputs=json_outputs)
    outer_delimiter.change(fn=convert_json_handler, inputs=json_inputs, outputs=json_outputs)

    json_file.upload(fn=upload_json_handler, inputs=[json_file], outputs=[json_input, json_error])
    json_clear_btn.click(
        fn=clear_json_handler,
        inputs=[json_converter_state],
        outputs=[json_input, json_output, json_error, json_converter_state],
    )
    json_share_btn.click(fn=share_json_handler, inputs=[json_converter_state], outputs=[json_share_url])

    open_link_btn.click(
        fn=open_shared_link_handler,
        inputs=[shared_url, csv_viewer_state, json_converter_state],
        outputs=[
            share_status,
            share_preview,
            csv_viewer_state,
            json_converter_state,
            csv_input,
            header_mode,
            row_limit,
            json_input,
            is_formatted,
            outer_delimiter,
            tabs,
        ],
    )

    # Load once at mount; the input change events re-run parsing.
    demo.load(fn=restore_csv_state, inputs=[csv_viewer_state], outputs=[csv_input, header_mode, row_limit])
    demo.load(fn=restore_json_state, inputs=[json_converter_state], outputs=[json_input, is_formatted, outer_delimiter])

if __name__ == "__main__":
    demo.launch()
