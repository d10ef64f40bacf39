from __future__ import annotations

import time
from threading import Lock


class RequestIdGenerator:
    """Thread-safe, process-local request id sequence (resets on restart)."""

    def __init__(self, prefix: str = "showcase") -> None:
        self._lock = Lock()
        self._prefix = prefix
        self._counter = 0

    def next_id(self) -> str:
        with self._lock:
            self._counter += 1
            count = self._counter
        return f"{self._prefix}-{int(time.time() * 1000)}-{count}"

    @property
    def issued(self) -> int:
        with self._lock:
            return self._counter

    def reset(self) -> None:
        with self._lock:
            self._counter = 0


_REQUEST_IDS: RequestIdGenerator | None = None


def get_request_ids() -> RequestIdGenerator:
    global _REQUEST_IDS
    if _REQUEST_IDS is None:
        _REQUEST_IDS = RequestIdGenerator()
    return _REQUEST_IDS


def reset_request_ids() -> None:
    """Reset the sequence (used by tests)."""

    get_request_ids().reset()
