"""Stylesheet model: Rule and StylesheetFile dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Rule:
    """One selector plus its declaration block.

    ``source_start``/``source_end`` delimit the whole block (selector through
    closing brace) inside the exact content string the rule was parsed from.
    They are meaningless against any other version of that content.
    """

    selector: str
    properties: dict[str, str] = field(hash=False)  # declaration order preserved
    source_start: int
    source_end: int

    def __post_init__(self) -> None:
        if self.source_start >= self.source_end:
            raise ValueError(
                f"Rule offsets out of order: {self.source_start} >= {self.source_end}"
            )


@dataclass(frozen=True)
class StylesheetFile:
    """A parsed stylesheet held by the file index."""

    path: str  # absolute
    raw_content: str
    rules: tuple[Rule, ...]
    last_loaded: str  # ISO 8601

    @property
    def size(self) -> int:
        return len(self.raw_content)
