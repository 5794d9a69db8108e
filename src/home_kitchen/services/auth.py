"""Admin authentication backed by the remote auth service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from home_kitchen.domain.auth import ANONYMOUS, AuthSession
from home_kitchen.domain.errors import AuthenticationError

logger = logging.getLogger(__name__)

SessionListener = Callable[[AuthSession], None]


@dataclass(frozen=True)
class AuthIdentity:
    """Identity and credential returned by the auth provider."""

    user_id: str
    email: str | None
    access_token: str


class AuthClient(Protocol):
    """Interface for the remote auth provider."""

    def sign_in_with_password(self, email: str, password: str) -> AuthIdentity:
        """Verify credentials and return the identity with its access token."""

    def sign_out(self, access_token: str) -> None:
        """Revoke the given access token."""

    def get_identity(self, access_token: str) -> AuthIdentity | None:
        """Return the identity for a token, or None when it is not valid."""


@dataclass
class AuthService:
    """Resolves sessions from remote credentials and broadcasts changes."""

    client: AuthClient
    admin_emails: set[str] | None = None
    _listeners: list[SessionListener] = field(default_factory=list)

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with e-mail and password."""
        try:
            identity = self.client.sign_in_with_password(email, password)
        except Exception as exc:
            logger.warning(
                "Admin sign-in rejected",
                extra={"email": email, "error": type(exc).__name__},
            )
            raise AuthenticationError() from exc
        session = self._to_session(identity)
        if not session.is_admin:
            logger.warning("Non-admin sign-in refused", extra={"email": email})
            self.client.sign_out(identity.access_token)
            raise AuthenticationError()
        self._emit(session)
        return session

    def sign_out(self, session: AuthSession) -> None:
        """Sign the current credential out."""
        if session.access_token:
            self.client.sign_out(session.access_token)
        self._emit(ANONYMOUS)

    def resolve(self, access_token: str | None) -> AuthSession:
        """Return the session a token stands for, anonymous when unknown."""
        if not access_token:
            return ANONYMOUS
        try:
            identity = self.client.get_identity(access_token)
        except Exception as exc:
            logger.warning(
                "Access token rejected", extra={"error": type(exc).__name__}
            )
            return ANONYMOUS
        if identity is None:
            return ANONYMOUS
        return self._to_session(identity)

    def on_change(self, listener: SessionListener) -> Callable[[], None]:
        """Register a sign-in/sign-out listener and return its remover."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _to_session(self, identity: AuthIdentity) -> AuthSession:
        return AuthSession(
            user_id=identity.user_id,
            email=identity.email,
            access_token=identity.access_token,
            is_admin=_is_admin(identity.email, self.admin_emails),
        )

    def _emit(self, session: AuthSession) -> None:
        for listener in list(self._listeners):
            listener(session)


def _is_admin(email: str | None, allowed: set[str] | None) -> bool:
    """Every authenticated user is an admin unless an allow-list is set."""
    if allowed is None:
        return True
    return email is not None and email.lower() in allowed
