"""Bounded in-memory log of recent sync events, served to the DevTools panel."""

from __future__ import annotations

import threading
from collections import deque
from datetime import datetime, timezone
from typing import Any

from csssync.events.types import ChangeApplied, ChangeFailed, FilesIndexed, ProjectConfigured


class ActivityLog:
    def __init__(self, maxlen: int = 100) -> None:
        self._entries: deque[dict[str, Any]] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def __call__(self, event: Any) -> None:
        entry = _describe(event)
        if entry is None:
            return
        entry["timestamp"] = datetime.now(timezone.utc).isoformat()
        with self._lock:
            self._entries.append(entry)

    def entries(self, limit: int | None = None) -> list[dict[str, Any]]:
        """Newest first."""
        with self._lock:
            items = list(reversed(self._entries))
        return items[:limit] if limit else items


def _describe(event: Any) -> dict[str, Any] | None:
    if isinstance(event, ChangeApplied):
        return {"type": "success", **event.result.to_dict()}
    if isinstance(event, ChangeFailed):
        return {"type": "error", "selector": event.selector, "error": event.error}
    if isinstance(event, ProjectConfigured):
        return {"type": "info", "message": f"Project path set to {event.root_path}"}
    if isinstance(event, FilesIndexed):
        return {"type": "info", "message": f"Loaded {event.count} CSS files from {event.root_path}"}
    return None
