import enum
import json
import logging
from dataclasses import dataclass, field

from errors import DashboardError
from schemas import AdminIdentity
from storage import KeyValueStore
from validation import validate_login

logger = logging.getLogger(__name__)

TOKEN_KEY = "authToken"
ADMIN_KEY = "adminData"
SESSION_EXPIRED = "Session expired. Please log in again."


class GateState(str, enum.Enum):
    UNCHECKED = "unchecked"
    CHECKING = "checking"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass
class SessionContext:
    """Auth token and cached admin identity, backed by durable storage."""

    store: KeyValueStore

    @property
    def token(self) -> str | None:
        return self.store.get(TOKEN_KEY) or None

    @property
    def admin(self) -> AdminIdentity | None:
        raw = self.store.get(ADMIN_KEY)
        if not raw:
            return None
        try:
            return AdminIdentity.model_validate(json.loads(raw))
        except (ValueError, TypeError):
            return None

    def save(self, token: str, admin: AdminIdentity | None) -> None:
        self.store.set(TOKEN_KEY, token)
        self.save_admin(admin)

    def save_admin(self, admin: AdminIdentity | None) -> None:
        if admin is None:
            self.store.remove(ADMIN_KEY)
        else:
            self.store.set(ADMIN_KEY, admin.model_dump_json())

    def clear(self) -> None:
        self.store.remove(TOKEN_KEY, ADMIN_KEY)


@dataclass
class SessionGate:
    context: SessionContext
    api: object
    state: GateState = GateState.UNCHECKED
    admin: AdminIdentity | None = None
    error: str | None = None
    _listeners: list = field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return self.state == GateState.AUTHENTICATED

    @property
    def is_resolved(self) -> bool:
        return self.state in (GateState.AUTHENTICATED, GateState.UNAUTHENTICATED)

    def on_change(self, listener) -> None:
        """Register ``listener(state)``; called after every transition."""
        self._listeners.append(listener)

    def _transition(self, state: GateState) -> None:
        if state == self.state:
            return
        logger.info("[auth] %s -> %s", self.state.value, state.value)
        self.state = state
        for listener in list(self._listeners):
            listener(state)

    def check(self) -> GateState:
        token = self.context.token
        if not token:
            self.admin = None
            self._transition(GateState.UNAUTHENTICATED)
            return self.state

        self._transition(GateState.CHECKING)
        try:
            verified = self.api.verify(token)
        except Exception as exc:
            logger.info("[auth] stored token rejected: %s", exc)
            self._sign_out()
            return self.state
        self.admin = verified.admin
        self.context.save_admin(verified.admin)
        self._transition(GateState.AUTHENTICATED)
        return self.state

    def login(self, username: str, password: str) -> AdminIdentity:
        username = validate_login(username, password)
        self.error = None
        try:
            result = self.api.login(username, password)
        except DashboardError as exc:
            self.error = exc.message
            raise
        self.context.save(result.token, result.admin)
        self.admin = result.admin
        self._transition(GateState.AUTHENTICATED)
        return result.admin

    def expire(self) -> None:
        """Handle a 401 from any authenticated call."""
        self.error = SESSION_EXPIRED
        self._sign_out()

    def logout(self) -> None:
        self.error = None
        self._sign_out()

    def _sign_out(self) -> None:
        self.context.clear()
        self.admin = None
        self._transition(GateState.UNAUTHENTICATED)
