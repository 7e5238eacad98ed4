"""Central configuration loaded from environment variables / .env file."""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

ROOT = Path(__file__).resolve().parent.parent

# ── Logging ────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("PORTAL_LOG_LEVEL", "INFO").upper()

# ── Storage ────────────────────────────────────────────────────────────────
_storage_env = os.getenv("PORTAL_STORAGE_DIR", "")
STORAGE_DIR: Path = Path(_storage_env) if _storage_env else ROOT / "portal_app" / "storage"

_db_env = os.getenv("PORTAL_DB_PATH", "")
DB_PATH: Path = Path(_db_env) if _db_env else STORAGE_DIR / "portal.db"

SCHEMA_PATH: Path = ROOT / "core" / "db" / "schema.sql"
SCHEMAS_DIR: Path = ROOT / "core" / "schemas"

# ── Identity provider ──────────────────────────────────────────────────────
MIN_PASSWORD_LENGTH: int = int(os.getenv("PORTAL_MIN_PASSWORD_LENGTH", "6"))

# ── Evidence ───────────────────────────────────────────────────────────────
ACCEPTED_FILE_TYPES: list[str] = [".txt", ".pdf", ".docx", ".jpg", ".jpeg", ".png", ".mp4", ".mp3", ".eml"]
MAX_UPLOAD_MB: int = 100

# ── Mock predictor ─────────────────────────────────────────────────────────
PREDICT_DELAY_MIN: float = float(os.getenv("PREDICT_DELAY_MIN", "2.0"))
PREDICT_DELAY_MAX: float = float(os.getenv("PREDICT_DELAY_MAX", "5.0"))

# ── Server ─────────────────────────────────────────────────────────────────
SERVER_NAME: str = os.getenv("PORTAL_SERVER_NAME", "127.0.0.1")
SERVER_PORT: int = int(os.getenv("PORTAL_SERVER_PORT", "7860"))
