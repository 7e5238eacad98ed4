"""Email / password sign-in."""
import logging

from core import routes
from core.auth.context import AuthContext
from core.errors import ProviderError
from core.notify import UNEXPECTED_ERROR, ActionResult, error, info

logger = logging.getLogger(__name__)


def submit_login(email: str, password: str, auth: AuthContext) -> ActionResult:
    if not (email or "").strip() or not password:
        return ActionResult(False, error("Missing Information", "Please enter your email and password."))
    try:
        auth.sign_in(email.strip(), password)
    except ProviderError as e:
        return ActionResult(False, error("Login Failed", e.message))
    except Exception:
        logger.exception("Login failed unexpectedly")
        return ActionResult(False, error("Login Error", UNEXPECTED_ERROR))
    return ActionResult(True, info("Welcome Back", "You have been signed in."), redirect_to=routes.DASHBOARD)
