"""csssync: write live DevTools CSS edits back to source stylesheets."""
from __future__ import annotations

__version__ = "0.3.0"

from csssync.config import SyncConfig
from csssync.service import SyncService

__all__ = [
    "SyncConfig",
    "SyncService",
    "__version__",
]
