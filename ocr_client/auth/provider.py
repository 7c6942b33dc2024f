from typing import Any

from ocr_client.auth.models import AuthResult
from ocr_client.logging.logger import Log
from ocr_client.session.client import SessionClient
from ocr_client.session.exceptions import ApiError


class AuthProvider:
    """Login, registration and logout against the auth endpoints.

    Form-level validation happens before any request; failures come back
    as an AuthResult with a message suitable for an inline field error.
    """

    def __init__(
        self,
        client: SessionClient,
        *,
        home_path: str = "/dashboard",
        min_password_length: int = 6,
    ) -> None:
        self._client = client
        self._home_path = home_path
        self._min_password_length = min_password_length

    async def login(self, email: str, password: str) -> AuthResult:
        if not email or not password:
            return AuthResult(success=False, message="Please fill in all fields")
        return await self._authenticate(
            "/auth/login",
            {"email": email, "password": password},
            fallback_message="Login failed",
        )

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> AuthResult:
        if not username or not email or not password:
            return AuthResult(success=False, message="Please fill in all required fields")
        if password != confirm_password:
            return AuthResult(success=False, message="Passwords do not match")
        if len(password) < self._min_password_length:
            return AuthResult(
                success=False,
                message=(
                    f"Password must be at least {self._min_password_length} "
                    "characters long"
                ),
            )
        return await self._authenticate(
            "/auth/register",
            {"username": username, "email": email, "password": password},
            fallback_message="Registration failed",
        )

    async def current_user(self) -> dict[str, Any] | None:
        """Return the authenticated user profile, or None without a valid session."""
        if not self._client.session.is_authenticated:
            return None
        try:
            body = await self._client.request("GET", "/auth/me")
        except ApiError as exc:
            Log.warning(f"Could not load current user: {exc.message}")
            return None
        if not isinstance(body, dict):
            return None
        user = body.get("user", body)
        return user if isinstance(user, dict) else None

    def logout(self) -> None:
        self._client.session.clear()
        Log.info("Logged out")

    async def _authenticate(
        self,
        path: str,
        payload: dict[str, str],
        *,
        fallback_message: str,
    ) -> AuthResult:
        try:
            body = await self._client.request("POST", path, json=payload)
        except ApiError as exc:
            Log.warning(f"{fallback_message}: {exc.message}")
            return AuthResult(success=False, message=exc.server_message or fallback_message)

        token = body.get("token") if isinstance(body, dict) else None
        if not token:
            return AuthResult(success=False, message=fallback_message)
        self._client.session.set_token(token)
        user = body.get("user") or {}
        Log.info(f"Authenticated as {user.get('email', payload.get('email'))}")
        return AuthResult(success=True, user=user, redirect_to=self._home_path)
