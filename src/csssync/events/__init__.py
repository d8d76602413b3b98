from csssync.events.bus import EventBus
from csssync.events.types import ChangeApplied, ChangeFailed, FilesIndexed, ProjectConfigured

__all__ = [
    "EventBus",
    "ChangeApplied",
    "ChangeFailed",
    "FilesIndexed",
    "ProjectConfigured",
]
