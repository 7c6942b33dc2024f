from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class Variant(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class Notification:
    """A transient, dismissible message shown to the user."""

    id: int
    message: str
    variant: Variant


class BaseNotifier(ABC):
    """Contract for surfacing user-facing notifications."""

    @abstractmethod
    def notify(self, message: str, variant: Variant = Variant.INFO) -> Notification:
        """Emit one notification and return the recorded entry."""
