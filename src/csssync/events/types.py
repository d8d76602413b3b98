"""Events emitted by the sync service."""

from dataclasses import dataclass, field

from csssync.model.result import PatchResult


@dataclass(frozen=True)
class ProjectConfigured:
    root_path: str
    domain_mappings: dict[str, str] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class FilesIndexed:
    root_path: str
    count: int


@dataclass(frozen=True)
class ChangeApplied:
    selector: str
    result: PatchResult


@dataclass(frozen=True)
class ChangeFailed:
    selector: str
    error: str
