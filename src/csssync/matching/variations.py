"""Candidate selectors derived from a changed DOM element."""

from __future__ import annotations

import re
from collections.abc import Sequence

from csssync.model.change import ChangeEvent, SelectorVariation, VariationKind

_TAG_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9]*)")


def generate_variations(selector: str, class_list: Sequence[str]) -> list[SelectorVariation]:
    """Expand a reported selector and class list into candidate selectors.

    Priorities:
        1      the reported selector (often an auto-generated DOM path)
        10 - i ``.cls`` for the i-th class
        5      ``.a.b`` all classes combined, when there is more than one
        8 - i  ``tag.cls`` when the reported selector starts with a tag name

    Priority only orders the candidates; the scorer picks the winner.
    Returns highest priority first, duplicates removed.
    """
    variations = [SelectorVariation(selector, 1, VariationKind.ORIGINAL)]
    classes = [c for c in class_list if c]

    for index, name in enumerate(classes):
        variations.append(SelectorVariation(f".{name}", 10 - index, VariationKind.INDIVIDUAL_CLASS))

    if len(classes) > 1:
        variations.append(
            SelectorVariation("." + ".".join(classes), 5, VariationKind.COMBINED_CLASSES)
        )

    tag = _TAG_RE.match(selector)
    if tag and classes:
        for index, name in enumerate(classes):
            variations.append(
                SelectorVariation(f"{tag.group(1)}.{name}", 8 - index, VariationKind.ELEMENT_CLASS)
            )

    return dedupe(sorted(variations, key=lambda v: -v.priority))


def dedupe(variations: Sequence[SelectorVariation]) -> list[SelectorVariation]:
    """Keep the first occurrence of every selector string."""
    seen: set[str] = set()
    unique: list[SelectorVariation] = []
    for variation in variations:
        if variation.selector in seen:
            continue
        seen.add(variation.selector)
        unique.append(variation)
    return unique


def variations_for_event(event: ChangeEvent) -> list[SelectorVariation]:
    """Variations supplied by the sender, or generated from the event."""
    if event.selector_variations:
        return dedupe(sorted(event.selector_variations, key=lambda v: -v.priority))
    return generate_variations(event.selector, event.class_list)
