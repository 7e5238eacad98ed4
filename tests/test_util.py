"""Small helpers: sizes, media types, timestamps, roles, HTML components."""
from datetime import datetime, timezone

import pytest

from core.accounts.roles import Role, role_display_name
from core.notify import error, info
from core.predict.mock_predictor import PredictionResult
from core.util.files import declared_media_type, format_file_size
from core.util.time import fmt_date, utcnow_iso
from portal_app.ui import components as ui


@pytest.mark.parametrize("size,expected", [
    (0, "0 Bytes"),
    (512, "512 Bytes"),
    (1536, "1.5 KB"),
    (100 * 1024 * 1024, "100 MB"),
    (3 * 1024 ** 3, "3 GB"),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_declared_media_type():
    assert declared_media_type("a.pdf", "application/x-custom") == "application/x-custom"
    assert declared_media_type("a.pdf") == "application/pdf"
    assert declared_media_type("noext") == "unknown"


def test_timestamps_sort_in_time_order():
    a = utcnow_iso()
    b = utcnow_iso()
    assert a <= b
    assert a.endswith("Z")


def test_fmt_date_tolerates_garbage():
    assert fmt_date("2026-10-19T08:00:00.000000Z") == "Oct 19, 2026"
    assert fmt_date("yesterday") == "yesterday"


def test_role_display_names():
    assert role_display_name("veteran") == "Ex-Servicemen (Veteran)"
    assert role_display_name(Role.FAMILY) == "Family Member"
    assert role_display_name("legacy") == "legacy"


def test_alert_html_escapes_and_styles():
    assert ui.alert_html(None) == ""
    html = ui.alert_html(error("Upload Failed", "<script>x</script>"))
    assert "mcp-alert-error" in html
    assert "<script>" not in html
    assert "mcp-alert-info" in ui.alert_html(info("Success", "ok"))


def test_evidence_table_escapes_file_names():
    html = ui.evidence_table_html([{
        "file_name": "<b>evil</b>.pdf", "file_type": "application/pdf",
        "cid": "CIDABCDEFGHI", "criticality": "high", "upload_time": utcnow_iso(),
    }])
    assert "&lt;b&gt;evil&lt;/b&gt;.pdf" in html
    assert "mcp-badge-high" in html


def test_profile_views_guard_missing_profile():
    assert "could not be loaded" in ui.welcome_html(None)
    assert ui.profile_summary_html(None) == ""
    summary = ui.profile_summary_html({
        "name": "Sam", "role": "personnel", "email": "sam@example.com",
        "created_at": "2026-01-02T03:04:05.000000Z",
    })
    assert "Serving Personnel" in summary
    assert "Jan 02, 2026" in summary


def test_predictions_html_marks_outcomes():
    now = datetime.now(timezone.utc)
    html = ui.predictions_html([
        PredictionResult(id="a1", status="found", details="Malware signature found in evidence",
                         timestamp=now, criticality="low"),
        PredictionResult(id="b2", status="not_found", details="No security concerns found", timestamp=now),
    ])
    assert html.index("Threat Found") < html.index("No Threat")
    assert "mcp-badge-low" in html


def test_list_headers_show_counts():
    assert "Uploaded Evidence (0)" in ui.evidence_table_html([])
    row = {"file_name": "a.txt", "file_type": "text/plain", "cid": "CIDABCDEFGHI",
           "criticality": "low", "upload_time": utcnow_iso()}
    assert "Uploaded Evidence (2)" in ui.evidence_table_html([row, row])
    assert "Prediction Results (0)" in ui.predictions_html([])
    result = PredictionResult(id="c3", status="not_found", details="All clear",
                              timestamp=datetime.now(timezone.utc))
    assert "Prediction Results (1)" in ui.predictions_html([result])
