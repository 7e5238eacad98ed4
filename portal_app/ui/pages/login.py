"""Sign-in page."""
import gradio as gr


def build():
    gr.Markdown("## Sign In")
    email = gr.Textbox(label="Email", placeholder="name@example.com")
    password = gr.Textbox(label="Password", type="password")
    submit_btn = gr.Button("Sign In", variant="primary")
    with gr.Row():
        signup_btn = gr.Button("Don't have an account? Sign up here", size="sm")
        back_btn = gr.Button("Back", size="sm")
    return {
        "email": email,
        "password": password,
        "submit_btn": submit_btn,
        "signup_btn": signup_btn,
        "back_btn": back_btn,
    }
