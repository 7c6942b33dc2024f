from typing import Any

import httpx

from ocr_client.logging.logger import Log
from ocr_client.session.context import SessionContext
from ocr_client.session.exceptions import (
    ApiResponseError,
    ApiTransportError,
    AuthorizationError,
    InvalidResponseError,
)


class SessionClient:
    """Single gateway for HTTP calls to the OCR service.

    Attaches the current bearer token to every request. A 401 response
    expires the session and is still raised to the caller; no call is retried.
    """

    def __init__(self, http: httpx.AsyncClient, session: SessionContext) -> None:
        self._http = http
        self._session = session

    @property
    def session(self) -> SessionContext:
        return self._session

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (None if empty).

        Raises:
            AuthorizationError: on 401, after the credential is cleared.
            ApiResponseError: on any other non-2xx status.
            ApiTransportError: when no response was received.
            InvalidResponseError: when a 2xx body is not valid JSON.
        """
        headers = self._auth_headers()
        Log.debug(f"{method} {path} params={params}")
        try:
            response = await self._http.request(
                method,
                path,
                json=json,
                params=params,
                data=data,
                files=files,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise ApiTransportError(f"Network error on {method} {path}: {exc}") from exc

        if response.status_code == httpx.codes.UNAUTHORIZED:
            self._session.expire()
            server_message = _error_message(response)
            raise AuthorizationError(
                server_message or "Not authorized",
                status_code=response.status_code,
                server_message=server_message,
            )
        if response.is_error:
            server_message = _error_message(response)
            raise ApiResponseError(
                server_message or f"HTTP {response.status_code}",
                status_code=response.status_code,
                server_message=server_message,
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidResponseError(
                f"Malformed JSON from {method} {path}",
                status_code=response.status_code,
            ) from exc

    def _auth_headers(self) -> dict[str, str]:
        token = self._session.token
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}


def _error_message(response: httpx.Response) -> str | None:
    """Extract the server-provided `message` field, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None
