"""File helpers for evidence uploads. Only metadata is ever inspected."""
import mimetypes
from pathlib import Path
from typing import Optional

UNKNOWN_FILE_TYPE = "unknown"

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def ensure_dir(path: Path) -> Path:
    """Create directory (and parents) if it doesn't exist, then return the path."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def declared_media_type(file_name: str, declared: Optional[str] = None) -> str:
    """Return the client-declared media type, guessing from the name when absent."""
    if declared:
        return declared
    guessed, _ = mimetypes.guess_type(file_name)
    return guessed or UNKNOWN_FILE_TYPE


def format_file_size(num_bytes: int) -> str:
    """Human readable size with 1024-based units, e.g. 1536 -> '1.5 KB'."""
    if num_bytes <= 0:
        return "0 Bytes"
    value = float(num_bytes)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[unit]}"
