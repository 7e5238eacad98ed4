"""
Create the portal's writable storage area and SQLite tables.

Usage:
  python scripts/init_portal_storage.py
"""
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from core import config  # noqa: E402
from core.db.db import init_db  # noqa: E402
from core.util.files import ensure_dir  # noqa: E402


def ensure_portal_storage(storage_dir: Path, db_path: Path) -> None:
    ensure_dir(storage_dir)
    init_db(db_path, config.SCHEMA_PATH)


if __name__ == "__main__":
    ensure_portal_storage(config.STORAGE_DIR, config.DB_PATH)
    print(f"Storage ready: {config.DB_PATH}")
