"""Thread-safe SQLite connection management for the portal record store."""
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

_local = threading.local()


def get_conn(db_path: Path) -> sqlite3.Connection:
    """Return a thread-local connection to the SQLite database."""
    key = str(db_path)
    conn = getattr(_local, key, None)
    if conn is None:
        conn = sqlite3.connect(str(db_path), check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        setattr(_local, key, conn)
    return conn


def init_db(db_path: Path, schema_path: Path) -> None:
    """Create the storage directory and the portal tables if they don't exist."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = get_conn(db_path)
    with open(schema_path, "r", encoding="utf-8") as f:
        conn.executescript(f.read())
    conn.commit()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Commit on success, roll back and re-raise on any error."""
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
