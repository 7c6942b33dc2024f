import asyncio
from collections.abc import Callable

ProgressListener = Callable[[str, int], None]


class UploadProgress:
    """Per-file progress approximation.

    Values are not byte counts: after the server accepts a file, its row is
    stepped from 0 to 100 so the user sees it complete before the outcome
    is reported.
    """

    def __init__(self, step: int = 20, interval_seconds: float = 0.1) -> None:
        if step <= 0:
            raise ValueError("progress step must be positive")
        self._step = step
        self._interval_seconds = interval_seconds
        self._percent: dict[str, int] = {}
        self._listeners: list[ProgressListener] = []

    def listen(self, listener: ProgressListener) -> None:
        self._listeners.append(listener)

    def percent(self, key: str) -> int:
        return self._percent.get(key, 0)

    @property
    def overall(self) -> int:
        if not self._percent:
            return 0
        return sum(self._percent.values()) // len(self._percent)

    def start(self, keys: list[str]) -> None:
        self._percent = {key: 0 for key in keys}

    def reset(self) -> None:
        self._percent = {}

    async def complete(self, key: str) -> None:
        """Step `key` up to 100, yielding to the event loop between ticks."""
        value = 0
        while True:
            self._set(key, value)
            if value >= 100:
                return
            await asyncio.sleep(self._interval_seconds)
            value = min(value + self._step, 100)

    def _set(self, key: str, value: int) -> None:
        self._percent[key] = value
        for listener in self._listeners:
            listener(key, value)
