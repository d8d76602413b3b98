"""Turn two versions of a style into change maps the patcher understands."""

from __future__ import annotations

import re
from typing import Any

from csssync.model.change import DELETED, ChangeEvent, PropertyChange
from csssync.stylesheet.parser import parse_stylesheet_map

_CLASS_RE = re.compile(r"\.(-?[_a-zA-Z][\w-]*)")
_PX_RE = re.compile(r"^\s*(-?\d*\.?\d+)px\s*$")


def is_significant_change(old: str, new: str, min_px_delta: float = 0.5) -> bool:
    """False for sub-pixel jitter between two pixel values, True otherwise."""
    old_px = _PX_RE.match(old)
    new_px = _PX_RE.match(new)
    if old_px and new_px:
        return abs(float(old_px.group(1)) - float(new_px.group(1))) >= min_px_delta
    return True


def compare_styles(
    old_styles: dict[str, str],
    new_styles: dict[str, str],
    min_px_delta: float = 0.5,
) -> dict[str, dict[str, Any]]:
    """Diff two computed-style snapshots of one element.

    Properties that are empty on either side are ignored, browsers report
    those for values they could not resolve.
    """
    changes: dict[str, dict[str, Any]] = {}
    for prop, new_value in new_styles.items():
        old_value = old_styles.get(prop)
        if old_value is None or old_value == new_value:
            continue
        if not old_value or not new_value:
            continue
        if is_significant_change(old_value, new_value, min_px_delta):
            changes[prop] = {"from": old_value, "to": new_value}
    return changes


def diff_stylesheets(old_text: str, new_text: str) -> dict[str, dict[str, Any]]:
    """Per-selector changes between two versions of a stylesheet.

    Removed declarations are reported with ``to`` set to the deletion
    marker. Selectors without changes are omitted.
    """
    old_rules = parse_stylesheet_map(old_text)
    new_rules = parse_stylesheet_map(new_text)
    result: dict[str, dict[str, Any]] = {}

    for selector, new_props in new_rules.items():
        old_props = old_rules.get(selector, {})
        changes: dict[str, Any] = {}
        for prop, value in new_props.items():
            if old_props.get(prop) != value:
                changes[prop] = {"from": old_props.get(prop), "to": value}
        for prop, value in old_props.items():
            if prop not in new_props:
                changes[prop] = {"from": value, "to": DELETED}
        if changes:
            result[selector] = changes

    for selector, old_props in old_rules.items():
        if selector not in new_rules:
            result[selector] = {prop: {"from": value, "to": DELETED} for prop, value in old_props.items()}

    return result


def extract_classes(selector: str) -> list[str]:
    """Class names mentioned in a selector, in order of appearance, without repeats."""
    seen: list[str] = []
    for name in _CLASS_RE.findall(selector):
        if name not in seen:
            seen.append(name)
    return seen


def change_events_from_diff(old_text: str, new_text: str) -> list[ChangeEvent]:
    """One change event per selector that differs between the two texts."""
    events: list[ChangeEvent] = []
    for selector, changes in diff_stylesheets(old_text, new_text).items():
        events.append(
            ChangeEvent(
                selector=selector,
                changes={prop: PropertyChange.from_value(c) for prop, c in changes.items()},
                class_list=tuple(extract_classes(selector)),
            )
        )
    return events
