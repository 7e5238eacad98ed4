"""
Military Community Portal — Gradio application.

Main entrypoint for the portal web application. One Blocks app serves all
views; navigation uses gr.Group visibility toggling with a persistent top
navigation bar for signed-in views.

Views (named after their browser paths):
  - /                : public landing, forwards signed-in users to the dashboard
  - /login           : email / password sign-in
  - /signup          : role-conditioned account creation
  - /dashboard       : welcome, quick links and profile summary
  - /upload-evidence : record evidence file metadata, list past uploads
  - /predict-attack  : mock threat analysis with a session-local result log

Every view is entered through a SessionGate (see portal_app.clients), which
redirects to /login when a protected view has no session.
"""
import logging
from typing import Optional

import gradio as gr

from core import config, routes
from core.accounts.login import submit_login
from core.accounts.signup import SignupForm, submit_signup
from core.auth.identity import IdentityProvider
from core.db.db import init_db
from core.errors import BusyError
from core.evidence.registry import SelectedFile
from core.notify import Notification, info
from core.util.files import format_file_size
from portal_app.clients import ClientRegistry, PortalClient
from portal_app.ui import components as ui
from portal_app.ui.pages import dashboard, landing, login, predict_attack, signup, upload_evidence

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

APP_TITLE = "Military Community Portal"

VIEW_ROUTES = [
    routes.HOME, routes.LOGIN, routes.SIGNUP,
    routes.DASHBOARD, routes.UPLOAD_EVIDENCE, routes.PREDICT_ATTACK,
]

PAGE_DESCRIPTIONS = {
    routes.DASHBOARD: ("Dashboard", "Your account at a glance"),
    routes.UPLOAD_EVIDENCE: ("Upload Evidence", "Record and review digital evidence"),
    routes.PREDICT_ATTACK: ("Predict Attack", "Mock threat analysis"),
}


# ─────────────────────────── CSS Design System ───────────────────────────────

PORTAL_CSS = """
.gradio-container {
    max-width: 1100px !important;
    margin: 0 auto !important;
    background: linear-gradient(180deg, #f4f6f8 0%, #e9edf1 100%) !important;
}

/* Navigation Bar */
.mcp-nav-bar { gap: 4px !important; padding: 6px 12px !important; border-radius: 8px !important; }
.mcp-page-info { font-size: 0.85rem; color: #4b5563; padding: 4px 12px; }
.mcp-page-name { font-weight: 600; color: #1f2a44; margin-right: 6px; }

/* Typography */
.mcp-title { color: #1f2a44; font-weight: 700; margin: 0; }
.mcp-subtitle { color: #4b5563; font-size: 1.05rem; margin-top: 4px; }
.mcp-muted { color: #6b7280; }

/* Alerts */
.mcp-alert { padding: 12px 16px; border-radius: 8px; font-size: 0.875rem; margin: 8px 0; }
.mcp-alert summary { cursor: pointer; list-style: none; }
.mcp-alert-info { background: #e8f0fe; color: #1e3a8a; border: 1px solid #d2e3fc; }
.mcp-alert-error { background: #fce8e6; color: #b91c1c; border: 1px solid #f5c6cb; }

/* Cards */
.mcp-card { background: #ffffff; border: 1px solid #e5e7eb; border-radius: 12px; padding: 16px 20px; margin: 8px 0; }
.mcp-summary { display: flex; gap: 12px; }
.mcp-summary-item { flex: 1; text-align: center; background: #f3f4f6; border-radius: 8px; padding: 12px; }
.mcp-summary-label { font-size: 0.8rem; color: #6b7280; }
.mcp-summary-value { font-weight: 600; color: #1f2a44; }
.mcp-result-card { background: #ffffff; border: 1px solid #e5e7eb; border-radius: 10px; padding: 12px 16px; margin: 8px 0; }
.mcp-status-found { color: #b91c1c; font-weight: 600; }
.mcp-status-clear { color: #15803d; font-weight: 600; }

/* Criticality badges */
.mcp-badge { display: inline-block; padding: 2px 10px; border-radius: 12px; font-size: 0.75rem; font-weight: 600; border: 1px solid; }
.mcp-badge-low { background: #dcfce7; color: #166534; border-color: #bbf7d0; }
.mcp-badge-medium { background: #fef9c3; color: #854d0e; border-color: #fef08a; }
.mcp-badge-high { background: #fee2e2; color: #991b1b; border-color: #fecaca; }
.mcp-badge-unknown { background: #f3f4f6; color: #374151; border-color: #e5e7eb; }

/* Tables */
.mcp-table { width: 100%; border-collapse: collapse; font-size: 0.875rem; }
.mcp-th { padding: 10px 12px; text-align: left; font-weight: 600; color: #4b5563; font-size: 0.8rem; text-transform: uppercase; }
.mcp-td { padding: 10px 12px; border-bottom: 1px solid #f1f3f4; color: #1f2937; }
"""

portal_theme = gr.themes.Base(
    primary_hue=gr.themes.colors.slate,
    neutral_hue=gr.themes.colors.gray,
)


# ─────────────────────────── View helpers ─────────────────────────────────

def _page_info_html(route: str) -> str:
    name, desc = PAGE_DESCRIPTIONS.get(route, ("", ""))
    if not name:
        return ""
    return f'<div class="mcp-page-info"><span class="mcp-page-name">{name}</span> {desc}</div>'


def _render(client: PortalClient, route: str, note: Notification | None = None) -> tuple:
    """Updates for the nav bar, banner, every view group and the view contents."""
    state = client.gate.state if client.gate else None
    profile = state.profile if state else None
    return (
        gr.update(visible=route in routes.PROTECTED),
        gr.update(value=_page_info_html(route)),
        gr.update(value=ui.alert_html(note)),
    ) + tuple(gr.update(visible=(route == r)) for r in VIEW_ROUTES) + (
        ui.welcome_html(profile),
        ui.profile_summary_html(profile),
        ui.evidence_table_html(client.registry.evidences),
        client.last_upload,
        ui.predictions_html(client.predictor.results),
    )


def _current(client: PortalClient) -> str:
    """Route to show now; re-enters the view if the gate asked for a redirect."""
    if client.gate is None or client.gate.state.redirect_to:
        route, _ = client.enter(client.page)
        return route
    return client.page


# ─────────────────────────── Event handlers ──────────────────────────────
# Each takes the caller's PortalClient and returns the updates for
# `view_outputs` (plus any extra outputs noted per handler).

def handle_nav(client: PortalClient, route: str) -> tuple:
    shown, _ = client.enter(route)
    return _render(client, shown)


def handle_login(client: PortalClient, email: str, password: str) -> tuple:
    """Extra output: the password box, always cleared."""
    result = submit_login(email, password, client.auth)
    route = result.redirect_to if result.ok else routes.LOGIN
    shown, _ = client.enter(route)
    return _render(client, shown, result.notification) + (gr.update(value=""),)


def handle_signup(client: PortalClient, role, name, email, password, service_number, ppo_number, sponsor) -> tuple:
    form = SignupForm(
        role=role, email=email or "", password=password or "", name=name or "",
        service_number=service_number or "", ppo_number=ppo_number or "",
        sponsor_service_number=sponsor or "",
    )
    result = submit_signup(form, client.auth)
    if result.ok:
        shown, _ = client.enter(result.redirect_to)
    else:
        shown = client.page
    return _render(client, shown, result.notification)


def handle_logout(client: PortalClient) -> tuple:
    if client.gate is None:
        client.enter(client.page)
    note = client.gate.logout()
    shown = _current(client)
    return _render(client, shown, note)


def handle_upload(client: PortalClient, file_path: Optional[str]) -> tuple:
    """Extra output: the file control, always reset so the same file can be picked again."""
    try:
        selected = SelectedFile.from_path(file_path) if file_path else None
    except OSError:
        logger.exception("Could not stat uploaded file")
        selected = None
    note = client.registry.submit(selected)
    if selected is not None and note is not None and not note.is_error:
        size = format_file_size(selected.size or 0)
        client.last_upload = f"Last file: **{selected.name}** ({size})"
    shown = _current(client)
    return _render(client, shown, note) + (gr.update(value=None),)


def handle_refresh_evidence(client: PortalClient) -> tuple:
    shown = _current(client)
    note = None
    session = client.auth.get_session()
    if session is not None:
        note = client.registry.fetch_evidences(session.user.id)
    return _render(client, shown, note)


def handle_predict(client: PortalClient) -> tuple:
    shown = _current(client)
    if shown != routes.PREDICT_ATTACK:
        return _render(client, shown)
    try:
        _, note = client.predictor.predict()
    except BusyError:
        note = info("Analysis In Progress", "Please wait for the current analysis to finish.")
    return _render(client, _current(client), note)


# ─────────────────────────── Main Blocks app ─────────────────────────────

def main() -> gr.Blocks:
    init_db(config.DB_PATH, config.SCHEMA_PATH)
    provider = IdentityProvider(config.DB_PATH)
    clients = ClientRegistry(provider, config.DB_PATH)

    with gr.Blocks(title=APP_TITLE, theme=portal_theme, css=PORTAL_CSS) as demo:

        # ═══════════════════════════════════════════════════════════════════
        # PERSISTENT NAVIGATION BAR (signed-in views only)
        # ═══════════════════════════════════════════════════════════════════
        nav_group = gr.Group(visible=False)
        with nav_group:
            with gr.Row(elem_classes=["mcp-nav-bar"]):
                nav_dashboard = gr.Button("Dashboard", size="sm")
                nav_upload = gr.Button("Upload Evidence", size="sm")
                nav_predict = gr.Button("Predict Attack", size="sm")
                gr.HTML('<span style="flex:1;"></span>')
                nav_logout = gr.Button("Logout", size="sm")
            nav_page_info = gr.HTML()

        banner = gr.HTML()

        # ═══════════════════════════════════════════════════════════════════
        # VIEWS
        # ═══════════════════════════════════════════════════════════════════
        landing_view = gr.Group(visible=True)
        with landing_view:
            landing_c = landing.build()

        login_view = gr.Group(visible=False)
        with login_view:
            login_c = login.build()

        signup_view = gr.Group(visible=False)
        with signup_view:
            signup_c = signup.build()

        dashboard_view = gr.Group(visible=False)
        with dashboard_view:
            dash_c = dashboard.build()

        upload_view = gr.Group(visible=False)
        with upload_view:
            upload_c = upload_evidence.build()

        predict_view = gr.Group(visible=False)
        with predict_view:
            predict_c = predict_attack.build()

        all_views = [landing_view, login_view, signup_view, dashboard_view, upload_view, predict_view]
        view_outputs = [nav_group, nav_page_info, banner] + all_views + [
            dash_c["welcome"], dash_c["summary"],
            upload_c["evidence_table"], upload_c["last_upload"],
            predict_c["results"],
        ]

        # ═══════════════════════════════════════════════════════════════════
        # EVENT HANDLERS (resolve the caller's client, then delegate)
        # ═══════════════════════════════════════════════════════════════════

        def nav(route: str):
            def handler(request: gr.Request):
                return handle_nav(clients.get(request.session_hash), route)
            return handler

        def do_login(email: str, password: str, request: gr.Request):
            return handle_login(clients.get(request.session_hash), email, password)

        def do_signup(role, name, email, password, service_number, ppo_number, sponsor, request: gr.Request):
            return handle_signup(
                clients.get(request.session_hash),
                role, name, email, password, service_number, ppo_number, sponsor,
            )

        def do_logout(request: gr.Request):
            return handle_logout(clients.get(request.session_hash))

        def do_upload(file_path, request: gr.Request):
            return handle_upload(clients.get(request.session_hash), file_path)

        def do_refresh_evidence(request: gr.Request):
            return handle_refresh_evidence(clients.get(request.session_hash))

        def do_predict(request: gr.Request):
            return handle_predict(clients.get(request.session_hash))

        def drop_client(request: gr.Request):
            clients.drop(request.session_hash)

        # ═══════════════════════════════════════════════════════════════════
        # WIRE UP BUTTONS
        # ═══════════════════════════════════════════════════════════════════

        landing_c["login_btn"].click(nav(routes.LOGIN), outputs=view_outputs)
        landing_c["signup_btn"].click(nav(routes.SIGNUP), outputs=view_outputs)
        login_c["signup_btn"].click(nav(routes.SIGNUP), outputs=view_outputs)
        login_c["back_btn"].click(nav(routes.HOME), outputs=view_outputs)
        signup_c["login_btn"].click(nav(routes.LOGIN), outputs=view_outputs)

        nav_dashboard.click(nav(routes.DASHBOARD), outputs=view_outputs)
        nav_upload.click(nav(routes.UPLOAD_EVIDENCE), outputs=view_outputs)
        nav_predict.click(nav(routes.PREDICT_ATTACK), outputs=view_outputs)
        dash_c["upload_btn"].click(nav(routes.UPLOAD_EVIDENCE), outputs=view_outputs)
        dash_c["predict_btn"].click(nav(routes.PREDICT_ATTACK), outputs=view_outputs)
        nav_logout.click(do_logout, outputs=view_outputs)

        login_c["submit_btn"].click(
            do_login,
            inputs=[login_c["email"], login_c["password"]],
            outputs=view_outputs + [login_c["password"]],
        )

        signup_c["role"].change(
            signup.role_field_updates,
            inputs=[signup_c["role"]],
            outputs=[signup_c["service_number"], signup_c["ppo_number"], signup_c["sponsor_service_number"]],
        )
        signup_c["submit_btn"].click(
            do_signup,
            inputs=[
                signup_c["role"], signup_c["name"], signup_c["email"], signup_c["password"],
                signup_c["service_number"], signup_c["ppo_number"], signup_c["sponsor_service_number"],
            ],
            outputs=view_outputs,
        )

        upload_c["file_input"].upload(
            do_upload,
            inputs=[upload_c["file_input"]],
            outputs=view_outputs + [upload_c["file_input"]],
        )
        upload_c["refresh_btn"].click(do_refresh_evidence, outputs=view_outputs)

        predict_btn = predict_c["predict_btn"]
        predict_btn.click(
            lambda: gr.update(interactive=False, value="Analyzing..."), outputs=[predict_btn],
        ).then(
            do_predict, outputs=view_outputs, concurrency_limit=None,
        ).then(
            lambda: gr.update(interactive=True, value="Predict Attack"), outputs=[predict_btn],
        )

        # Initial view on load, teardown on tab close
        demo.load(nav(routes.HOME), outputs=view_outputs)
        demo.unload(drop_client)

    return demo


def launch() -> None:
    app = main()
    app.launch(
        server_name=config.SERVER_NAME,
        server_port=config.SERVER_PORT,
        max_file_size=f"{config.MAX_UPLOAD_MB}mb",
    )


if __name__ == "__main__":
    launch()
