"""Change event model: what the browser reports and the variations derived from it."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from csssync.errors import InvalidChangeEvent

# Marker the browser side uses for a removed declaration.
DELETED = "(deleted)"


class VariationKind(StrEnum):
    ORIGINAL = "original"
    INDIVIDUAL_CLASS = "individual_class"
    COMBINED_CLASSES = "combined_classes"
    ELEMENT_CLASS = "element_class"


@dataclass(frozen=True)
class SelectorVariation:
    selector: str
    priority: int
    kind: VariationKind

    def to_dict(self) -> dict[str, Any]:
        return {"selector": self.selector, "priority": self.priority, "type": self.kind.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SelectorVariation:
        selector = data.get("selector")
        if not isinstance(selector, str) or not selector.strip():
            raise InvalidChangeEvent("Selector variation without a selector")
        try:
            kind = VariationKind(data.get("type", data.get("kind", "original")))
        except ValueError:
            kind = VariationKind.ORIGINAL
        try:
            priority = int(data.get("priority", 1))
        except (TypeError, ValueError) as exc:
            raise InvalidChangeEvent(
                "Selector variation priority must be an integer", cause=exc
            ) from exc
        return cls(selector=selector, priority=priority, kind=kind)


@dataclass(frozen=True)
class PropertyChange:
    """New value for one property; ``to`` of None or DELETED removes it."""

    to: str | None
    from_: str | None = None

    @property
    def is_deletion(self) -> bool:
        return self.to is None or self.to == DELETED

    @classmethod
    def from_value(cls, value: Any) -> PropertyChange:
        """Build from a bare value or a ``{"from": ..., "to": ...}`` mapping."""
        if isinstance(value, Mapping):
            if "to" not in value:
                raise InvalidChangeEvent(f"Change mapping without 'to': {dict(value)!r}")
            to = value["to"]
            old = value.get("from")
            return cls(
                to=None if to is None else str(to),
                from_=None if old is None else str(old),
            )
        if value is None:
            return cls(to=None)
        return cls(to=str(value))

    def to_wire(self) -> Any:
        if self.from_ is None and not self.is_deletion:
            return self.to
        return {"from": self.from_, "to": DELETED if self.to is None else self.to}


@dataclass(frozen=True)
class ChangeEvent:
    """A single observed style change on one DOM element."""

    selector: str
    changes: dict[str, PropertyChange] = field(hash=False)
    class_list: tuple[str, ...] = ()
    domain: str | None = None
    target_path: str | None = None
    selector_variations: tuple[SelectorVariation, ...] = ()

    @property
    def changed_properties(self) -> list[str]:
        return list(self.changes)

    @classmethod
    def from_dict(cls, data: Any) -> ChangeEvent:
        """Validate and convert the JSON payload sent by the browser side."""
        if not isinstance(data, Mapping):
            raise InvalidChangeEvent("Invalid change data")

        raw_changes = data.get("changes")
        if not isinstance(raw_changes, Mapping) or not raw_changes:
            raise InvalidChangeEvent("Invalid change data: 'changes' is required")

        raw_variations = data.get("selectorVariations") or ()
        if not isinstance(raw_variations, (list, tuple)):
            raise InvalidChangeEvent("Invalid change data: 'selectorVariations' must be a list")
        variations = tuple(SelectorVariation.from_dict(v) for v in raw_variations)

        selector = data.get("selector")
        if not isinstance(selector, str) or not selector.strip():
            if not variations:
                raise InvalidChangeEvent("Invalid change data: 'selector' is required")
            selector = variations[0].selector

        class_list = data.get("classList") or ()
        if isinstance(class_list, str):
            class_list = class_list.split()

        changes = {
            str(prop).strip(): PropertyChange.from_value(value)
            for prop, value in raw_changes.items()
            if str(prop).strip()
        }
        if not changes:
            raise InvalidChangeEvent("Invalid change data: 'changes' is required")

        return cls(
            selector=selector.strip(),
            changes=changes,
            class_list=tuple(str(c) for c in class_list if str(c)),
            domain=data.get("domain") or None,
            target_path=data.get("targetPath") or None,
            selector_variations=variations,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "selector": self.selector,
            "classList": list(self.class_list),
            "changes": {prop: change.to_wire() for prop, change in self.changes.items()},
        }
        if self.domain:
            data["domain"] = self.domain
        if self.target_path:
            data["targetPath"] = self.target_path
        if self.selector_variations:
            data["selectorVariations"] = [v.to_dict() for v in self.selector_variations]
        return data
