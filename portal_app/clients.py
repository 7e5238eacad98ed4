"""
Per-browser client state and view navigation.

Each browser session gets its own AuthContext, EvidenceRegistry and
MockPredictor. Entering a view mounts a fresh SessionGate for it and unmounts
the previous one, so auth-state subscriptions live exactly as long as the view.
The evidence list, prediction log and last-upload note belong to the
signed-in account and are dropped whenever that account changes.
"""
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from core import routes
from core.auth.context import AuthContext, Subscription
from core.auth.identity import IdentityProvider, Session
from core.auth.session_gate import GateState, SessionGate
from core.db.db import get_conn
from core.db.repo import get_profile
from core.errors import ProviderError
from core.evidence.registry import EvidenceRegistry
from core.predict.mock_predictor import MockPredictor

logger = logging.getLogger(__name__)


@dataclass
class PortalClient:
    auth: AuthContext
    registry: EvidenceRegistry
    predictor: MockPredictor
    db_path: Path
    gate: Optional[SessionGate] = None
    page: str = routes.HOME
    last_upload: str = ""
    _nav_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _owner_id: Optional[str] = field(default=None, repr=False)
    _subscription: Optional[Subscription] = field(default=None, repr=False)

    def __post_init__(self):
        session = self.auth.get_session()
        self._owner_id = session.user.id if session else None
        self._subscription = self.auth.on_auth_state_change(self._on_auth_change)

    def _on_auth_change(self, event: str, session: Optional[Session]) -> None:
        user_id = session.user.id if session else None
        if user_id != self._owner_id:
            self.registry.clear()
            self.predictor.clear()
            self.last_upload = ""
            self._owner_id = user_id

    def load_profile(self, user_id: str) -> Optional[dict]:
        return get_profile(get_conn(self.db_path), user_id)

    def enter(self, route: str) -> tuple[str, GateState]:
        """Show `route`, following gate redirects. Returns (shown route, gate state)."""
        with self._nav_lock:
            return self._enter(route, hops=0)

    def _enter(self, route: str, hops: int) -> tuple[str, GateState]:
        if self.gate is not None:
            self.gate.unmount()
        gate = SessionGate(
            self.auth,
            self.load_profile,
            require_session=route in routes.PROTECTED,
            signed_in_redirect=routes.DASHBOARD if route == routes.HOME else None,
        )
        state = gate.mount()
        self.gate = gate
        if state.redirect_to and state.redirect_to != route and hops < len(routes.ALL):
            logger.debug("Redirecting %s -> %s", route, state.redirect_to)
            return self._enter(state.redirect_to, hops + 1)
        self.page = route
        if route == routes.UPLOAD_EVIDENCE and state.session is not None:
            self.registry.fetch_evidences(state.session.user.id)
        return route, state

    def close(self) -> None:
        """Tear down on tab close: unmount the view and revoke the session token."""
        if self.gate is not None:
            self.gate.unmount()
            self.gate = None
        if self.auth.get_session() is not None:
            try:
                self.auth.sign_out()
            except ProviderError as e:
                logger.warning("Session revoke on close failed: %s", e.message)
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None


class ClientRegistry:
    """Maps a browser session id to its PortalClient."""

    def __init__(self, provider: IdentityProvider, db_path: Path):
        self._provider = provider
        self._db_path = db_path
        self._clients: dict[str, PortalClient] = {}
        self._lock = threading.Lock()

    def get(self, client_id: str) -> PortalClient:
        with self._lock:
            client = self._clients.get(client_id)
            if client is None:
                auth = AuthContext(self._provider)
                client = PortalClient(
                    auth=auth,
                    registry=EvidenceRegistry(self._db_path, auth),
                    predictor=MockPredictor(),
                    db_path=self._db_path,
                )
                self._clients[client_id] = client
            return client

    def drop(self, client_id: str) -> None:
        with self._lock:
            client = self._clients.pop(client_id, None)
        if client is not None:
            client.close()
            logger.debug("Dropped client %s", client_id)

    def __len__(self) -> int:
        return len(self._clients)
