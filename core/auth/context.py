"""
Per-client authentication context.

Holds the current session of one browser client and broadcasts changes
(SIGNED_IN / SIGNED_OUT) to subscribed views. Views receive the context
instead of re-deriving the session themselves.
"""
import logging
import threading
from typing import Callable, Optional

from core.auth.identity import IdentityProvider, Session

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

AuthCallback = Callable[[str, Optional[Session]], None]


class Subscription:
    """Handle returned by AuthContext.on_auth_state_change."""

    def __init__(self, context: "AuthContext", callback: AuthCallback):
        self._context = context
        self._callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._context._remove_subscriber(self._callback)
            self.active = False


class AuthContext:
    def __init__(self, provider: IdentityProvider):
        self._provider = provider
        self._session: Optional[Session] = None
        self._subscribers: list[AuthCallback] = []
        self._lock = threading.RLock()

    def get_session(self) -> Optional[Session]:
        return self._session

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        with self._lock:
            self._subscribers.append(callback)
        return Subscription(self, callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def sign_up(self, email: str, password: str, metadata: dict) -> Session:
        session = self._provider.sign_up(email, password, metadata)
        self._set_session(session, SIGNED_IN)
        return session

    def sign_in(self, email: str, password: str) -> Session:
        session = self._provider.sign_in_with_password(email, password)
        self._set_session(session, SIGNED_IN)
        return session

    def sign_out(self) -> None:
        """Clear the local session, then revoke it with the provider.

        Provider errors propagate to the caller after local state is cleared.
        """
        session = self._session
        self._set_session(None, SIGNED_OUT)
        if session is not None:
            self._provider.revoke_session(session.access_token)

    def _set_session(self, session: Optional[Session], event: str) -> None:
        with self._lock:
            self._session = session
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(event, session)
            except Exception:
                logger.exception("Auth state subscriber failed on %s", event)

    def _remove_subscriber(self, callback: AuthCallback) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)
