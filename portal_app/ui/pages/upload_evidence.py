"""Upload Evidence page — record file metadata and list previous uploads."""
import gradio as gr

from core import config


def build():
    gr.Markdown("## Upload Evidence")
    gr.Markdown(
        "Upload digital evidence files. Supported formats: "
        + ", ".join(ext.lstrip(".").upper() for ext in config.ACCEPTED_FILE_TYPES)
        + f". Maximum file size: {config.MAX_UPLOAD_MB}MB."
    )
    file_input = gr.File(label="Select file", file_types=config.ACCEPTED_FILE_TYPES, type="filepath")
    last_upload = gr.Markdown()

    evidence_table = gr.HTML()
    refresh_btn = gr.Button("Refresh", size="sm")
    return {
        "file_input": file_input,
        "last_upload": last_upload,
        "evidence_table": evidence_table,
        "refresh_btn": refresh_btn,
    }
