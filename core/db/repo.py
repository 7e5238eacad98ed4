"""CRUD operations for the record store: auth_users, users, evidences."""
import json
import sqlite3
from typing import Optional

from core.util.ids import new_evidence_id
from core.util.time import utcnow_iso


# ─────────────────────────── AUTH USERS ───────────────────────────────────

def insert_auth_user(
    conn: sqlite3.Connection,
    *,
    user_id: str,
    email: str,
    password_hash: str,
    user_metadata: dict,
    created_at: str,
) -> None:
    conn.execute(
        "INSERT INTO auth_users (id, email, password_hash, user_metadata, created_at) VALUES (?,?,?,?,?)",
        (user_id, email, password_hash, json.dumps(user_metadata), created_at),
    )


def get_auth_user_by_email(conn: sqlite3.Connection, email: str) -> Optional[dict]:
    row = conn.execute("SELECT * FROM auth_users WHERE email=?", (email,)).fetchone()
    if row is None:
        return None
    d = dict(row)
    d["user_metadata"] = json.loads(d["user_metadata"])
    return d


def get_auth_user(conn: sqlite3.Connection, user_id: str) -> Optional[dict]:
    row = conn.execute(
        "SELECT id, email, user_metadata, created_at FROM auth_users WHERE id=?", (user_id,)
    ).fetchone()
    if row is None:
        return None
    d = dict(row)
    d["user_metadata"] = json.loads(d["user_metadata"])
    return d


# ─────────────────────────────── USERS ────────────────────────────────────

def insert_profile(
    conn: sqlite3.Connection,
    *,
    user_id: str,
    name: str,
    email: str,
    role: str,
    service_number: Optional[str] = None,
    ppo_number: Optional[str] = None,
    sponsor_service_number: Optional[str] = None,
    created_at: str,
) -> None:
    conn.execute(
        """INSERT INTO users
        (id, name, email, role, service_number, ppo_number, sponsor_service_number, created_at)
        VALUES (?,?,?,?,?,?,?,?)""",
        (user_id, name, email, role, service_number, ppo_number, sponsor_service_number, created_at),
    )


def get_profile(conn: sqlite3.Connection, user_id: str) -> Optional[dict]:
    row = conn.execute("SELECT * FROM users WHERE id=?", (user_id,)).fetchone()
    return dict(row) if row else None


# ─────────────────────────────── EVIDENCES ────────────────────────────────

def insert_evidence(
    conn: sqlite3.Connection,
    *,
    user_id: str,
    file_name: str,
    file_type: str,
    cid: str,
    criticality: str,
) -> str:
    evidence_id = new_evidence_id()
    conn.execute(
        """INSERT INTO evidences
        (id, user_id, file_name, file_type, cid, criticality, upload_time)
        VALUES (?,?,?,?,?,?,?)""",
        (evidence_id, user_id, file_name, file_type, cid, criticality, utcnow_iso()),
    )
    conn.commit()
    return evidence_id


def list_evidences_for_user(conn: sqlite3.Connection, user_id: str) -> list[dict]:
    """All evidence rows owned by user_id, newest upload first."""
    rows = conn.execute(
        "SELECT * FROM evidences WHERE user_id=? ORDER BY upload_time DESC, rowid DESC",
        (user_id,),
    ).fetchall()
    return [dict(r) for r in rows]
