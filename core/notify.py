"""User-facing notifications (dismissible alert banners in the UI)."""
from dataclasses import dataclass
from typing import Literal, Optional

Variant = Literal["default", "destructive"]


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: Variant = "default"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


def error(title: str, description: str) -> Notification:
    return Notification(title, description, "destructive")


def info(title: str, description: str) -> Notification:
    return Notification(title, description, "default")


UNEXPECTED_ERROR = "An unexpected error occurred"


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a form action: the banner to show and where to go next."""
    ok: bool
    notification: Notification
    redirect_to: Optional[str] = None
