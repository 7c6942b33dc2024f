class ApiError(Exception):
    """Base exception for every failed call to the OCR service.

    `server_message` is the `message` field of the error body when the
    server sent one, else None.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        server_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.server_message = server_message


class AuthorizationError(ApiError):
    """Raised on HTTP 401, after the session credential has been discarded."""


class ApiResponseError(ApiError):
    """Raised when the server answers with a non-2xx status other than 401."""


class ApiTransportError(ApiError):
    """Raised when the request never produced an HTTP response."""


class InvalidResponseError(ApiError):
    """Raised when a 2xx body does not have the expected shape."""
