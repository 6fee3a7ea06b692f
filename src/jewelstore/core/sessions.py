"""Role-scoped auth sessions.

Admins and customers authenticate against the backend separately and hold
separate bearer tokens. Both are kept by the same ``SessionContext``,
parameterised by ``Role``, on top of one persisted-state interface over the
Django session.
"""

import logging
from dataclasses import asdict, dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class Role(str, Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


STORAGE_KEYS = {
    Role.ADMIN: "va_admin_auth",
    Role.CUSTOMER: "va_user_token",
}


class PersistedState:
    """One key of the browser session: read on init, written through on change."""

    def __init__(self, session, key):
        self.session = session
        self.key = key

    def load(self):
        return self.session.get(self.key)

    def save(self, value):
        self.session[self.key] = value

    def clear(self):
        if self.key in self.session:
            del self.session[self.key]


@dataclass
class AuthState:
    token: str | None = None
    name: str | None = None
    email: str | None = None


class SessionContext:
    """Auth state for one role, backed by a ``PersistedState``."""

    def __init__(self, role: Role, session):
        self.role = role
        self.store = PersistedState(session, STORAGE_KEYS[role])
        self.state = self._restore()

    def _restore(self) -> AuthState:
        raw = self.store.load()
        # A bare string is a token saved without profile details
        if isinstance(raw, str) and raw:
            return AuthState(token=raw)
        if isinstance(raw, dict) and isinstance(raw.get("token"), str):
            return AuthState(
                token=raw["token"] or None,
                name=raw.get("name"),
                email=raw.get("email"),
            )
        if raw is not None:
            logger.warning("Ignoring unreadable %s session state", self.role.value)
        return AuthState()

    @property
    def token(self) -> str | None:
        return self.state.token

    @property
    def name(self) -> str | None:
        return self.state.name

    @property
    def email(self) -> str | None:
        return self.state.email

    @property
    def is_authenticated(self) -> bool:
        return bool(self.state.token)

    def set(self, token: str | None, name: str | None = None, email: str | None = None):
        """Replace the auth state; a falsy token logs out."""
        if not token:
            self.logout()
            return
        self.state = AuthState(token=token, name=name, email=email)
        self.store.save(asdict(self.state))

    def logout(self):
        self.state = AuthState()
        self.store.clear()

    def __bool__(self):
        return self.is_authenticated

    def __repr__(self):
        return f"<SessionContext role={self.role.value} authenticated={self.is_authenticated}>"
