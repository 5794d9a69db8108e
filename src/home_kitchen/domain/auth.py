"""Authentication session models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthSession:
    """Current credential as reported by the auth service."""

    user_id: str | None = None
    email: str | None = None
    access_token: str | None = None
    is_admin: bool = False

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


ANONYMOUS = AuthSession()
