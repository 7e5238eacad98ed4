"""Timestamp helpers."""
from datetime import datetime, timezone


def utcnow_iso() -> str:
    """Return current UTC time as ISO-8601 string with microseconds.

    Microsecond resolution keeps lexicographic order equal to upload order.
    """
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _parse(iso: str) -> datetime:
    return datetime.fromisoformat(iso.replace("Z", "+00:00"))


def fmt_display(iso: str) -> str:
    """Convert ISO timestamp to human-readable display format."""
    try:
        return _parse(iso).strftime("%b %d, %Y %H:%M UTC")
    except (TypeError, ValueError):
        return iso or ""


def fmt_date(iso: str) -> str:
    """Date only, used for 'Member Since'."""
    try:
        return _parse(iso).strftime("%b %d, %Y")
    except (TypeError, ValueError):
        return iso or ""
