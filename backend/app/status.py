from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from time import time
from typing import Any, Dict, List

RECENT_LIMIT = 50


@dataclass
class DispatchStatus:
    launches: int = 0
    errors: int = 0
    recent_launches: List[Dict[str, Any]] = field(default_factory=list)
    # Keep a small rolling window of recent errors for UI visibility.
    recent_errors: List[Dict[str, Any]] = field(default_factory=list)
    updated_at: float = field(default_factory=time)


class DispatchStatusStore:
    def __init__(self) -> None:
        self._lock = Lock()
        self._status = DispatchStatus()

    def record(self, event: str, payload: Dict[str, Any]) -> None:
        # Lock ensures status polling sees consistent snapshots across threads.
        with self._lock:
            entry = {"event": event, "at": time(), **payload}
            if event == "launch":
                self._status.launches += 1
                # Keep newest first and cap memory/response size.
                self._status.recent_launches = ([entry] + self._status.recent_launches)[:RECENT_LIMIT]
            elif event == "error":
                self._status.errors += 1
                self._status.recent_errors = ([entry] + self._status.recent_errors)[:RECENT_LIMIT]
            self._status.updated_at = time()

    def snapshot(self) -> Dict[str, Any]:
        # Return a copy to avoid mutation by callers.
        with self._lock:
            return {
                "launches": self._status.launches,
                "errors": self._status.errors,
                "recent_launches": list(self._status.recent_launches),
                "recent_errors": list(self._status.recent_errors),
                "updated_at": self._status.updated_at,
            }
