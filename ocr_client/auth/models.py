from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a login or registration attempt."""

    success: bool
    message: str = ""
    user: dict[str, Any] = field(default_factory=dict)
    redirect_to: str | None = None
