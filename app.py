import logging

import gradio as gr

from json_keyvalue.config import DEFAULT_SEPARATOR
from json_keyvalue.handlers import (
    export_panels_handler,
    load_json_upload,
    preview_panels_handler,
    separator_change_handler,
)

# --- UI Definition ---
with gr.Blocks(title="JSON to Key/Value") as demo:
    gr.Markdown("# JSON to Key/Value Panels")
    gr.Markdown("Upload JSON, choose which fields to show and how to label them, and preview the resulting panels.")

    # State
    json_data_state = gr.State()

    with gr.Row():
        # Left Panel: Input & Options
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            file_input = gr.File(label="Upload JSON File", file_types=[".json"])
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### 2. Fields")
            field_name = gr.Textbox(label="Field Name", value="Data")
            item_label = gr.Textbox(label="Item Label (optional)", placeholder="defaults to the field name")
            skip_keys = gr.Textbox(label="Skip Keys (comma separated)", placeholder="password, user → token")
            exclude_suffixes = gr.Textbox(label="Exclude Suffixes", value="_error")
            exclude_prefixes = gr.Textbox(label="Exclude Prefixes", placeholder="_internal")

            gr.Markdown("### 3. Structure")
            flatten_nested = gr.Checkbox(label="Flatten nested objects", value=True)
            nested_separator = gr.Textbox(label="Nested Separator", value=DEFAULT_SEPARATOR)
            skip_indices = gr.Checkbox(label="Hide item numbers", value=False)
            max_size = gr.Number(label="Max items (0 = no limit)", value=0, precision=0)

        # Right Panel: Labels & Output
        with gr.Column(scale=1):
            gr.Markdown("### 4. Labels")
            gr.Markdown("Rename labels if needed.")
            label_table = gr.Dataframe(
                headers=["Key", "Label"],
                datatype=["str", "str"],
                col_count=(2, "fixed"),
                interactive=True,
                label="Labels",
            )

            gr.Markdown("### 5. Output")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="panels")
            preview_btn = gr.Button("Preview")
            export_btn = gr.Button("Export Panels", variant="primary")
            download_output = gr.File(label="Download Result")
            panel_preview = gr.JSON(label="Panels")

    option_inputs = [
        json_data_state,
        field_name,
        skip_keys,
        exclude_suffixes,
        exclude_prefixes,
        nested_separator,
        item_label,
        label_table,
        flatten_nested,
        skip_indices,
        max_size,
    ]

    file_input.upload(
        fn=load_json_upload,
        inputs=[file_input, nested_separator],
        outputs=[json_data_state, label_table, status_msg],
    )

    nested_separator.change(
        fn=separator_change_handler,
        inputs=[json_data_state, nested_separator],
        outputs=[label_table],
    )

    preview_btn.click(
        fn=preview_panels_handler,
        inputs=option_inputs,
        outputs=[panel_preview, status_msg],
    )

    export_btn.click(
        fn=export_panels_handler,
        inputs=option_inputs + [output_filename],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    demo.launch()
