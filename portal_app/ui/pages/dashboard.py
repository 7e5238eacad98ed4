"""Dashboard: welcome, quick navigation and profile summary."""
import gradio as gr


def build():
    welcome = gr.HTML()
    with gr.Row():
        with gr.Column():
            gr.Markdown("### Upload Evidence\nUpload and manage digital evidence files securely")
            upload_btn = gr.Button("Open Upload Evidence", variant="primary")
        with gr.Column():
            gr.Markdown("### Predict Attack\nThreat analysis and attack prediction (mock)")
            predict_btn = gr.Button("Open Predict Attack", variant="primary")
    summary = gr.HTML()
    return {
        "welcome": welcome,
        "upload_btn": upload_btn,
        "predict_btn": predict_btn,
        "summary": summary,
    }
