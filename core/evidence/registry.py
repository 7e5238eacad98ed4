"""
Evidence registry: records metadata for files picked by a signed-in account.

Only metadata is persisted (name, declared media type, a random content
identifier and a random criticality label). File bytes are never read.
"""
import logging
import os
import random
import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from core.auth.context import AuthContext
from core.db.db import get_conn
from core.db.repo import insert_evidence, list_evidences_for_user
from core.errors import ProviderError
from core.notify import UNEXPECTED_ERROR, Notification, error, info
from core.util.files import declared_media_type
from core.util.ids import new_cid
from core.util.validation import named_schema, validate

logger = logging.getLogger(__name__)

CRITICALITY_LEVELS = ("low", "medium", "high")


@dataclass(frozen=True)
class SelectedFile:
    """What the browser tells us about a picked file."""
    name: str
    media_type: Optional[str] = None
    size: Optional[int] = None

    @classmethod
    def from_path(cls, path: str, media_type: Optional[str] = None) -> "SelectedFile":
        """Describe an uploaded temp file from its name and size only."""
        # Gradio passes no browser File.type, so media_type stays None and
        # declared_media_type guesses it from the name instead.
        p = Path(path)
        return cls(name=p.name, media_type=media_type, size=os.path.getsize(p))


def random_criticality(rng: Optional[random.Random] = None) -> str:
    """Uniform over low / medium / high, independent of the file."""
    return (rng or random).choice(CRITICALITY_LEVELS)


class EvidenceRegistry:
    """Per-client evidence list plus a single-flight upload action."""

    def __init__(self, db_path: Path, auth: AuthContext, rng: Optional[random.Random] = None):
        self._db_path = db_path
        self._auth = auth
        self._rng = rng or random.Random()
        self._upload_lock = threading.Lock()
        self.evidences: list[dict] = []

    @property
    def busy(self) -> bool:
        return self._upload_lock.locked()

    def clear(self) -> None:
        self.evidences = []

    def fetch_evidences(self, account_id: str) -> Optional[Notification]:
        """Reload the list newest-first. On failure the previous list is kept."""
        try:
            rows = list_evidences_for_user(get_conn(self._db_path), account_id)
        except Exception:
            logger.exception("Failed to fetch evidences for %s", account_id)
            return error("Error", "Failed to fetch evidences")
        self.evidences = rows
        return None

    def submit(self, selected: Optional[SelectedFile]) -> Optional[Notification]:
        """Record metadata for `selected`; returns the banner to show, if any."""
        session = self._auth.get_session()
        if selected is None or session is None:
            return None

        if not self._upload_lock.acquire(blocking=False):
            return info("Upload In Progress", "Please wait for the current upload to finish.")
        try:
            record = {
                "user_id": session.user.id,
                "file_name": selected.name,
                "file_type": declared_media_type(selected.name, selected.media_type),
                "cid": new_cid(self._rng),
                "criticality": random_criticality(self._rng),
            }
            self._insert(record)
            logger.info(
                "Recorded evidence %s for %s (criticality=%s)",
                record["cid"], session.user.id, record["criticality"],
            )
            refresh_error = self.fetch_evidences(session.user.id)
            return refresh_error or info("Success", "Evidence uploaded successfully")
        except ProviderError as e:
            logger.warning("Evidence rejected: %s", e.message)
            return error("Upload Failed", e.message)
        except Exception:
            logger.exception("Evidence upload failed")
            return error("Upload Error", UNEXPECTED_ERROR)
        finally:
            self._upload_lock.release()

    def _insert(self, record: dict) -> str:
        errors = validate(record, named_schema("evidence"))
        if errors:
            raise ProviderError(f"Invalid evidence record: {errors[0]}")
        try:
            return insert_evidence(get_conn(self._db_path), **record)
        except sqlite3.IntegrityError as e:
            raise ProviderError(str(e)) from e
