"""Predict Attack page. The analysis behind it is a mock."""
import gradio as gr


def build():
    gr.Markdown("## Threat Analysis")
    gr.HTML(
        '<div class="mcp-alert mcp-alert-info"><strong>Mock feature.</strong> '
        "Results are randomly generated placeholders, not a real threat analysis.</div>"
    )
    predict_btn = gr.Button("Predict Attack", variant="primary", size="lg")
    results = gr.HTML()
    return {
        "predict_btn": predict_btn,
        "results": results,
    }
