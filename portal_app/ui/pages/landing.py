"""Public landing page."""
import gradio as gr


def build():
    gr.HTML('''
    <div style="text-align:center;padding:40px 0 16px 0;">
      <h1 class="mcp-title" style="font-size:2rem;">Military Community Portal</h1>
      <p class="mcp-subtitle">Serving personnel, veterans, their families and the civilian community</p>
    </div>''')
    with gr.Row():
        login_btn = gr.Button("Sign In", variant="primary", size="lg")
        signup_btn = gr.Button("Create Account", size="lg")
    return {
        "login_btn": login_btn,
        "signup_btn": signup_btn,
    }
