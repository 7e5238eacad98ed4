"""Unique ID generation for accounts, evidences, predictions and sessions."""
import random
import secrets
import string
import time
import uuid

_BASE36 = string.digits + string.ascii_lowercase


def new_id(prefix: str = "") -> str:
    """Return a collision-resistant ID with an optional prefix."""
    ts = int(time.time() * 1000)
    uid = uuid.uuid4().hex[:12]
    if prefix:
        return f"{prefix}_{ts}_{uid}"
    return f"{ts}_{uid}"


def new_user_id() -> str:
    """Generate an authentication subject identifier (e.g. usr_1700000000000_abc123)."""
    return new_id("usr")


def new_evidence_id() -> str:
    """Generate a unique evidence row identifier."""
    return new_id("evd")


def new_cid(rng: random.Random | None = None) -> str:
    """Opaque content identifier: 'CID' + 9 upper-case alphanumerics.

    Random, not derived from the file content.
    """
    rng = rng or random
    return "CID" + "".join(rng.choice(_BASE36) for _ in range(9)).upper()


def new_prediction_id(rng: random.Random | None = None) -> str:
    """Nine lower-case base-36 characters."""
    rng = rng or random
    return "".join(rng.choice(_BASE36) for _ in range(9))


def new_access_token() -> str:
    """Opaque bearer token for a signed-in session."""
    return secrets.token_urlsafe(32)
