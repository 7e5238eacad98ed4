"""
Session gate for portal views.

On mount the gate subscribes to auth-state changes and resolves the current
session to a profile row. Every later SIGNED_IN / SIGNED_OUT notification
re-runs the same resolution; the most recent notification wins, so a profile
fetch that completes after a sign-out is discarded.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from core import routes
from core.auth.context import AuthContext, Subscription
from core.auth.identity import Session
from core.errors import ProviderError
from core.notify import UNEXPECTED_ERROR, Notification, error, info

logger = logging.getLogger(__name__)

ProfileLoader = Callable[[str], Optional[dict]]


@dataclass
class GateState:
    loading: bool = True
    session: Optional[Session] = None
    profile: Optional[dict] = None
    redirect_to: Optional[str] = None

    @property
    def ready(self) -> bool:
        """Signed in and the profile row was found."""
        return self.session is not None and self.profile is not None


class SessionGate:
    """
    Args:
        auth: the client's AuthContext
        load_profile: callable(user_id) -> profile dict or None
        require_session: redirect to sign-in when there is no session
        signed_in_redirect: where to send a signed-in user with a profile
            (the public landing view forwards to the dashboard)
    """

    def __init__(
        self,
        auth: AuthContext,
        load_profile: ProfileLoader,
        *,
        require_session: bool = True,
        signed_in_redirect: Optional[str] = None,
    ):
        self._auth = auth
        self._load_profile = load_profile
        self._require_session = require_session
        self._signed_in_redirect = signed_in_redirect
        self._subscription: Optional[Subscription] = None
        self._generation = 0
        self._lock = threading.Lock()
        self.state = GateState()

    @property
    def mounted(self) -> bool:
        return self._subscription is not None

    def mount(self) -> GateState:
        if self._subscription is None:
            self._subscription = self._auth.on_auth_state_change(self._on_auth_change)
        self._resolve(self._auth.get_session())
        return self.state

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def logout(self) -> Notification:
        """Sign out. Local state is cleared even when the provider errors."""
        try:
            self._auth.sign_out()
        except ProviderError as e:
            logger.warning("Logout rejected by provider: %s", e.message)
            return error("Logout Error", e.message)
        except Exception:
            logger.exception("Logout failed")
            return error("Logout Error", UNEXPECTED_ERROR)
        return info("Logged Out", "You have been successfully logged out.")

    def _on_auth_change(self, event: str, session: Optional[Session]) -> None:
        logger.debug("Gate received %s", event)
        self._resolve(session)

    def _resolve(self, session: Optional[Session]) -> None:
        with self._lock:
            self._generation += 1
            generation = self._generation
            self.state.session = session
            if session is None:
                self.state.profile = None
                self.state.loading = False
                self.state.redirect_to = routes.LOGIN if self._require_session else None
                return

        profile = self._fetch_profile(session.user.id)

        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding stale profile fetch for %s", session.user.id)
                return
            self.state.profile = profile
            self.state.loading = False
            self.state.redirect_to = self._signed_in_redirect if profile is not None else None

    def _fetch_profile(self, user_id: str) -> Optional[dict]:
        try:
            return self._load_profile(user_id)
        except Exception:
            logger.exception("Profile fetch failed for %s", user_id)
            return None
