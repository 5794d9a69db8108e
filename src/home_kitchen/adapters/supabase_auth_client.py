"""Supabase Auth adapter."""

from dataclasses import dataclass

from supabase import Client

from home_kitchen.services.auth import AuthClient, AuthIdentity


@dataclass
class SupabaseAuthClient(AuthClient):
    """Password sign-in and token checks through Supabase Auth."""

    client: Client

    def sign_in_with_password(self, email: str, password: str) -> AuthIdentity:
        """Sign in and return the user with the session access token."""
        response = self.client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
        if response.user is None or response.session is None:
            raise RuntimeError("Supabase returned no session")
        return AuthIdentity(
            user_id=str(response.user.id),
            email=response.user.email,
            access_token=response.session.access_token,
        )

    def sign_out(self, access_token: str) -> None:
        """Revoke an access token."""
        self.client.auth.admin.sign_out(access_token)

    def get_identity(self, access_token: str) -> AuthIdentity | None:
        """Return the user for a token, or None when Supabase rejects it."""
        response = self.client.auth.get_user(access_token)
        if response is None or response.user is None:
            return None
        return AuthIdentity(
            user_id=str(response.user.id),
            email=response.user.email,
            access_token=access_token,
        )
