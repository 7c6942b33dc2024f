from collections.abc import Callable
from pathlib import Path

from ocr_client.logging.logger import Log

RedirectListener = Callable[[str], None]


class SessionContext:
    """Owns the bearer credential shared by every component.

    The token is read before each request and written by the auth provider
    (login, register, logout) or by the session client when a 401 arrives.
    All mutation happens on the event loop thread.
    """

    def __init__(self, login_path: str = "/login", token_file: Path | None = None) -> None:
        self._login_path = login_path
        self._token_file = token_file
        self._token: str | None = self._load_token()
        self._redirect_listeners: list[RedirectListener] = []

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def set_token(self, token: str) -> None:
        self._token = token
        if self._token_file is not None:
            self._token_file.parent.mkdir(parents=True, exist_ok=True)
            self._token_file.write_text(token, encoding="utf-8")

    def clear(self) -> None:
        self._token = None
        if self._token_file is not None and self._token_file.exists():
            self._token_file.unlink()

    def on_redirect(self, listener: RedirectListener) -> None:
        """Register a callback invoked with the login path on forced logout."""
        self._redirect_listeners.append(listener)

    def expire(self) -> None:
        """Drop the credential and send every listener to the login entry point."""
        Log.warning(f"Session expired, redirecting to {self._login_path}")
        self.clear()
        for listener in self._redirect_listeners:
            listener(self._login_path)

    def _load_token(self) -> str | None:
        if self._token_file is None or not self._token_file.exists():
            return None
        token = self._token_file.read_text(encoding="utf-8").strip()
        return token or None
