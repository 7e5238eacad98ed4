"""Gradio event handlers: the update tuples they hand back to the Blocks app."""
import gradio as gr
import pytest

from core import routes
from portal_app import app
from portal_app.clients import ClientRegistry

BANNER = 2
VIEWS = slice(3, 3 + len(app.VIEW_ROUTES))


@pytest.fixture
def client(provider, db_path):
    client = ClientRegistry(provider, db_path).get("tab-1")
    client.predictor._sleep = lambda seconds: None
    return client


def _shown(out):
    visible = [r for r, update in zip(app.VIEW_ROUTES, out[VIEWS]) if update["visible"]]
    assert len(visible) == 1
    return visible[0]


def _sign_up(client):
    client.auth.sign_up("pat@example.com", "password1", {
        "name": "Pat", "role": "personnel", "service_number": "SN-3",
    })


def test_failed_signup_stays_on_signup(client):
    app.handle_nav(client, routes.SIGNUP)
    out = app.handle_signup(client, "family", "Fran", "fran@example.com", "password1", "", "", "   ")
    assert _shown(out) == routes.SIGNUP
    assert "Sponsor" in out[BANNER]["value"]
    assert "mcp-alert-error" in out[BANNER]["value"]
    assert client.auth.get_session() is None


def test_successful_signup_lands_on_dashboard(client):
    app.handle_nav(client, routes.SIGNUP)
    out = app.handle_signup(client, "veteran", "Val", "val@example.com", "password1", "", "P-77", "")
    assert _shown(out) == routes.DASHBOARD
    assert "Account Created Successfully" in out[BANNER]["value"]


def test_upload_resets_file_control(client, tmp_path):
    _sign_up(client)
    app.handle_nav(client, routes.UPLOAD_EVIDENCE)
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF" + b"0" * 1020)

    out = app.handle_upload(client, str(path))
    assert out[-1] == gr.update(value=None)
    assert _shown(out) == routes.UPLOAD_EVIDENCE
    assert "report.pdf" in client.last_upload
    assert "1 KB" in client.last_upload


def test_upload_without_file_still_resets_control(client):
    _sign_up(client)
    app.handle_nav(client, routes.UPLOAD_EVIDENCE)
    out = app.handle_upload(client, None)
    assert out[-1] == gr.update(value=None)
    assert out[BANNER]["value"] == ""


def test_upload_when_signed_out_redirects(client, tmp_path):
    path = tmp_path / "x.txt"
    path.write_text("x")
    app.handle_nav(client, routes.UPLOAD_EVIDENCE)
    out = app.handle_upload(client, str(path))
    assert _shown(out) == routes.LOGIN
    assert out[-1] == gr.update(value=None)
    assert client.registry.evidences == []


def test_overlapping_predict_reports_in_progress(client):
    _sign_up(client)
    app.handle_nav(client, routes.PREDICT_ATTACK)
    # Hold the predictor's single-flight lock as a running analysis would.
    assert client.predictor._lock.acquire(blocking=False)
    try:
        out = app.handle_predict(client)
    finally:
        client.predictor._lock.release()
    assert _shown(out) == routes.PREDICT_ATTACK
    assert "Analysis In Progress" in out[BANNER]["value"]
    assert "mcp-alert-info" in out[BANNER]["value"]
    assert client.predictor.results == []


def test_predict_adds_one_result(client):
    _sign_up(client)
    app.handle_nav(client, routes.PREDICT_ATTACK)
    out = app.handle_predict(client)
    assert len(client.predictor.results) == 1
    assert "Prediction Results (1)" in out[-1]


def test_logout_returns_to_login(client):
    _sign_up(client)
    app.handle_nav(client, routes.DASHBOARD)
    out = app.handle_logout(client)
    assert _shown(out) == routes.LOGIN
    assert "Logged Out" in out[BANNER]["value"]


def test_login_clears_password_box(client):
    _sign_up(client)
    client.auth.sign_out()
    out = app.handle_login(client, "pat@example.com", "wrong-password")
    assert _shown(out) == routes.LOGIN
    assert out[-1] == gr.update(value="")
    assert "Invalid login credentials" in out[BANNER]["value"]
