"""Result models for matching and patching."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from csssync.model.rule import Rule


@dataclass(frozen=True)
class MatchResult:
    file: str
    rule: Rule
    matched_variation_selector: str
    score: int


@dataclass(frozen=True)
class PatchOutcome:
    """What the patcher wrote: one rule updated or appended."""

    file_path: str
    selector: str
    changed_properties: tuple[str, ...]
    created: bool = False


class FailureReason(StrEnum):
    INVALID_EVENT = "invalid_event"
    NOT_CONFIGURED = "not_configured"
    STALE_INDEX = "stale_index"
    WRITE_FAILURE = "write_failure"
    PARSE_FAILURE = "parse_failure"
    NO_PROPERTIES = "no_properties"
    INTERNAL = "internal"


@dataclass(frozen=True)
class PatchResult:
    """Outcome of one ``apply_change`` call, success or failure."""

    success: bool
    file: str = ""
    selector: str = ""
    changed_properties: list[str] = field(default_factory=list)
    created: bool = False
    error: str = ""
    reason: FailureReason | None = None

    @classmethod
    def ok(cls, outcome: PatchOutcome, relative_file: str) -> PatchResult:
        return cls(
            success=True,
            file=relative_file,
            selector=outcome.selector,
            changed_properties=list(outcome.changed_properties),
            created=outcome.created,
        )

    @classmethod
    def failure(cls, error: str, reason: FailureReason = FailureReason.INTERNAL) -> PatchResult:
        return cls(success=False, error=error, reason=reason)

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        data: dict[str, Any] = {
            "success": True,
            "file": self.file,
            "selector": self.selector,
            "changedProperties": list(self.changed_properties),
        }
        if self.created:
            data["created"] = True
        return data
