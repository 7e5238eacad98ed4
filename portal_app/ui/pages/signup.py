"""Create Account page with role-specific identifier fields."""
import gradio as gr

from core.accounts.roles import ROLE_DESCRIPTIONS, ROLE_DISPLAY_NAMES, Role

ROLE_CHOICES = [(ROLE_DISPLAY_NAMES[r], r.value) for r in Role]


def build():
    gr.Markdown("## Create Account\nJoin our military community platform")
    role = gr.Radio(
        choices=ROLE_CHOICES,
        value=Role.PERSONNEL.value,
        label="I am a",
        info=" · ".join(f"{ROLE_DISPLAY_NAMES[r]}: {ROLE_DESCRIPTIONS[r]}" for r in Role),
    )
    name = gr.Textbox(label="Full Name *", placeholder="Enter your full name")
    email = gr.Textbox(label="Email *", placeholder="Enter your email address")
    password = gr.Textbox(label="Password *", type="password", placeholder="Create a secure password")

    service_number = gr.Textbox(label="Service Number *", placeholder="Enter your service number")
    ppo_number = gr.Textbox(label="PPO Number *", placeholder="Enter your PPO number", visible=False)
    sponsor_service_number = gr.Textbox(
        label="Sponsor's Service Number / Veteran PPO Number *",
        placeholder="Enter sponsor's service number or PPO number",
        visible=False,
    )

    submit_btn = gr.Button("Create Account", variant="primary")
    login_btn = gr.Button("Already have an account? Sign in here", size="sm")
    return {
        "role": role,
        "name": name,
        "email": email,
        "password": password,
        "service_number": service_number,
        "ppo_number": ppo_number,
        "sponsor_service_number": sponsor_service_number,
        "submit_btn": submit_btn,
        "login_btn": login_btn,
    }


def role_field_updates(role: str) -> tuple:
    """Show only the identifier field that belongs to the selected role."""
    return (
        gr.update(visible=role == Role.PERSONNEL.value),
        gr.update(visible=role == Role.VETERAN.value),
        gr.update(visible=role == Role.FAMILY.value),
    )
