"""Tests for selector variation generation."""
from __future__ import annotations

from csssync.matching.variations import dedupe, generate_variations, variations_for_event
from csssync.model.change import ChangeEvent, PropertyChange, SelectorVariation, VariationKind


def _pairs(variations):
    return [(v.selector, v.priority) for v in variations]


class TestGenerateVariations:
    def test_tag_with_two_classes(self):
        variations = generate_variations("div > button.btn", ["btn", "btn-primary"])
        assert _pairs(variations) == [
            (".btn", 10),
            (".btn-primary", 9),
            ("div.btn", 8),
            ("div.btn-primary", 7),
            (".btn.btn-primary", 5),
            ("div > button.btn", 1),
        ]

    def test_kinds(self):
        variations = generate_variations("div.a", ["a", "b"])
        kinds = {v.selector: v.kind for v in variations}
        assert kinds[".a"] == VariationKind.INDIVIDUAL_CLASS
        assert kinds[".a.b"] == VariationKind.COMBINED_CLASSES
        assert kinds["div.b"] == VariationKind.ELEMENT_CLASS
        # "div.a" is both the reported selector and a tag variation; the latter wins.
        assert kinds["div.a"] == VariationKind.ELEMENT_CLASS

    def test_no_classes_keeps_only_original(self):
        assert _pairs(generate_variations("main > section", [])) == [("main > section", 1)]

    def test_single_class_has_no_combined_variation(self):
        variations = generate_variations(".card", ["card"])
        assert all(v.kind != VariationKind.COMBINED_CLASSES for v in variations)

    def test_no_tag_variations_without_leading_tag(self):
        for selector in (".nav .item", "#main .item"):
            variations = generate_variations(selector, ["item"])
            assert all(v.kind != VariationKind.ELEMENT_CLASS for v in variations)

    def test_duplicates_keep_highest_priority(self):
        variations = generate_variations(".btn", ["btn"])
        assert _pairs(variations) == [(".btn", 10)]

    def test_empty_class_names_ignored(self):
        assert _pairs(generate_variations("p", ["", "lead"])) == [
            (".lead", 10),
            ("p.lead", 8),
            ("p", 1),
        ]


class TestDedupe:
    def test_keeps_first(self):
        first = SelectorVariation(".a", 10, VariationKind.INDIVIDUAL_CLASS)
        second = SelectorVariation(".a", 1, VariationKind.ORIGINAL)
        assert dedupe([first, second]) == [first]


class TestVariationsForEvent:
    def test_generated_when_not_supplied(self):
        event = ChangeEvent(selector="a.link", changes={"color": PropertyChange("red")}, class_list=("link",))
        assert _pairs(variations_for_event(event))[0] == (".link", 10)

    def test_supplied_variations_used(self):
        supplied = (
            SelectorVariation(".low", 2, VariationKind.ORIGINAL),
            SelectorVariation(".high", 9, VariationKind.INDIVIDUAL_CLASS),
        )
        event = ChangeEvent(
            selector="a.link",
            changes={"color": PropertyChange("red")},
            class_list=("link",),
            selector_variations=supplied,
        )
        assert _pairs(variations_for_event(event)) == [(".high", 9), (".low", 2)]
