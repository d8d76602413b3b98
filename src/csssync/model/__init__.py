from __future__ import annotations

from csssync.model.change import (
    DELETED,
    ChangeEvent,
    PropertyChange,
    SelectorVariation,
    VariationKind,
)
from csssync.model.result import FailureReason, MatchResult, PatchOutcome, PatchResult
from csssync.model.rule import Rule, StylesheetFile

__all__ = [
    # rule
    "Rule",
    "StylesheetFile",
    # change
    "DELETED",
    "PropertyChange",
    "ChangeEvent",
    "VariationKind",
    "SelectorVariation",
    # result
    "MatchResult",
    "PatchOutcome",
    "FailureReason",
    "PatchResult",
]
