"""
Reusable HTML components for the Military Community Portal UI.

Alert banners, criticality badges, the evidence and prediction tables and
the dashboard profile cards. User-supplied strings are always escaped.
"""
from html import escape
from typing import Optional

from core.accounts.roles import role_display_name
from core.notify import Notification
from core.predict.mock_predictor import PredictionResult
from core.util.time import fmt_date, fmt_display

_BADGE_CLASS = {
    "low": "mcp-badge-low",
    "medium": "mcp-badge-medium",
    "high": "mcp-badge-high",
}


def alert_html(notification: Optional[Notification]) -> str:
    """Render a dismissible banner, or nothing."""
    if notification is None:
        return ""
    kind = "error" if notification.is_error else "info"
    return (
        f'<div class="mcp-alert mcp-alert-{kind}">'
        f'<details open><summary><strong>{escape(notification.title)}</strong></summary>'
        f'{escape(notification.description)}</details></div>'
    )


def criticality_badge_html(criticality: Optional[str]) -> str:
    if not criticality:
        return ""
    cls = _BADGE_CLASS.get(criticality, "mcp-badge-unknown")
    return f'<span class="mcp-badge {cls}">{escape(criticality.upper())}</span>'


def welcome_html(profile: Optional[dict]) -> str:
    if not profile:
        return (
            '<div class="mcp-card"><p>Your profile could not be loaded. '
            "Try signing out and back in.</p></div>"
        )
    return f'''
    <div style="text-align:center;margin:8px 0 16px 0;">
      <h2 class="mcp-title">Welcome {escape(profile.get("name") or "")}</h2>
      <p class="mcp-subtitle">({escape(role_display_name(profile.get("role") or ""))})</p>
    </div>'''


def profile_summary_html(profile: Optional[dict]) -> str:
    if not profile:
        return ""
    items = [
        ("Role", role_display_name(profile.get("role") or "")),
        ("Email", profile.get("email") or ""),
        ("Member Since", fmt_date(profile.get("created_at") or "")),
    ]
    cells = "".join(
        f'<div class="mcp-summary-item"><div class="mcp-summary-label">{label}</div>'
        f'<div class="mcp-summary-value">{escape(value)}</div></div>'
        for label, value in items
    )
    return f'<div class="mcp-card"><h3>Profile Summary</h3><div class="mcp-summary">{cells}</div></div>'


def evidence_table_html(evidences: list[dict]) -> str:
    """Evidence list in the order given (the registry keeps it newest-first)."""
    header = f"<h3>Uploaded Evidence ({len(evidences)})</h3>"
    if not evidences:
        return header + "<p class='mcp-muted'>No evidence uploaded yet.</p>"
    rows = []
    for ev in evidences:
        rows.append(f'''
        <tr>
          <td class="mcp-td">{escape(ev.get("file_name", ""))}</td>
          <td class="mcp-td mcp-muted">{escape(ev.get("file_type", ""))}</td>
          <td class="mcp-td"><code>{escape(ev.get("cid", ""))}</code></td>
          <td class="mcp-td">{criticality_badge_html(ev.get("criticality"))}</td>
          <td class="mcp-td mcp-muted">{escape(fmt_display(ev.get("upload_time", "")))}</td>
        </tr>''')
    return header + f'''
    <table class="mcp-table">
      <thead>
        <tr>
          <th class="mcp-th">File</th>
          <th class="mcp-th">Type</th>
          <th class="mcp-th">CID</th>
          <th class="mcp-th">Criticality</th>
          <th class="mcp-th">Uploaded</th>
        </tr>
      </thead>
      <tbody>{"".join(rows)}</tbody>
    </table>'''


def predictions_html(results: list[PredictionResult]) -> str:
    header = f"<h3>Prediction Results ({len(results)})</h3>"
    if not results:
        return header + "<p class='mcp-muted'>No analyses run yet.</p>"
    cards = []
    for r in results:
        status = "Threat Found" if r.found else "No Threat"
        status_cls = "mcp-status-found" if r.found else "mcp-status-clear"
        cards.append(f'''
        <div class="mcp-result-card">
          <div><span class="{status_cls}">{status}</span> {criticality_badge_html(r.criticality)}</div>
          <div style="margin:6px 0;">{escape(r.details)}</div>
          <div class="mcp-muted" style="font-size:0.8rem;">#{escape(r.id)} &middot; {r.timestamp.strftime("%H:%M:%S UTC")}</div>
        </div>''')
    return header + "".join(cards)
