"""Write property changes back into stylesheet files.

Exactly one rule block is touched per call: either the matched rule's
``[source_start, source_end)`` span is replaced, or a new block is appended
to the end of a file. Every other byte of the file is left as it was.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from csssync.errors import NoPropertiesError, StaleIndexError, WriteFailure
from csssync.index.file_index import FileIndex, absolute_path
from csssync.model.change import PropertyChange
from csssync.model.result import PatchOutcome
from csssync.model.rule import Rule
from csssync.stylesheet.parser import format_declarations, serialize_rule

logger = logging.getLogger(__name__)

NEW_FILE_NAME = "main.css"
NEW_FILE_HEADER = "/* CSS DevTools Sync */\n"


def apply_property_changes(
    properties: Mapping[str, str], changes: Mapping[str, PropertyChange]
) -> dict[str, str]:
    """Merge *changes* into a copy of *properties*.

    Existing properties keep their position, new ones are appended and
    deletions drop the property altogether.
    """
    merged = dict(properties)
    for name, change in changes.items():
        if change.is_deletion:
            merged.pop(name, None)
        else:
            merged[name] = change.to  # type: ignore[assignment]
    return merged


def write_stylesheet(path: str, content: str) -> None:
    """Overwrite *path* with *content* verbatim, line endings included; not atomic."""
    try:
        Path(path).write_text(content, encoding="utf-8", newline="")
    except OSError as exc:
        raise WriteFailure(f"Failed to write {path}: {exc.strerror or exc}", path=path, cause=exc) from exc


class RulePatcher:
    """Applies changes to rules held in a :class:`FileIndex`.

    The cache entry of a file is only refreshed after its write succeeded,
    so a failed write leaves the index exactly as it was.
    """

    def __init__(self, index: FileIndex) -> None:
        self.index = index

    def update_rule(
        self, path: str, rule: Rule, changes: Mapping[str, PropertyChange]
    ) -> PatchOutcome:
        """Rewrite *rule* in place with *changes* merged into its declarations."""
        entry = self.index.get(path)
        if entry is None:
            raise StaleIndexError(f"File data not found: {path}")
        if rule not in entry.rules:
            raise StaleIndexError(f"Rule {rule.selector!r} is no longer in {path}")

        content = entry.raw_content
        new_rule = serialize_rule(rule.selector, apply_property_changes(rule.properties, changes))
        updated = content[: rule.source_start] + new_rule + content[rule.source_end :]

        write_stylesheet(entry.path, updated)
        self.index.invalidate(entry.path)

        logger.info("Updated CSS rule in %s: %s", entry.path, rule.selector)
        return PatchOutcome(
            file_path=entry.path,
            selector=rule.selector,
            changed_properties=tuple(changes),
        )

    def create_rule(
        self, selector: str, changes: Mapping[str, PropertyChange], target_path: str
    ) -> PatchOutcome:
        """Append a new rule for *selector* to the best file under *target_path*."""
        properties = apply_property_changes({}, changes)
        if not properties:
            raise NoPropertiesError(f"No properties to write for new rule {selector!r}")

        path = self.target_file(target_path)
        entry = self.index.get(path)
        if entry is None:
            raise StaleIndexError(f"File data not found: {path}")

        block = f"\n\n{selector} {{\n{format_declarations(properties)}}}"
        write_stylesheet(entry.path, entry.raw_content + block)
        self.index.invalidate(entry.path)

        logger.info("Created new CSS rule in %s: %s", entry.path, selector)
        return PatchOutcome(
            file_path=entry.path,
            selector=selector,
            changed_properties=tuple(changes),
            created=True,
        )

    def target_file(self, target_path: str) -> str:
        """The largest indexed stylesheet under *target_path*.

        When none is indexed a ``main.css`` is created there and indexed.
        """
        largest = self.index.largest_file(target_path)
        if largest is not None:
            return largest.path

        path = os.path.join(absolute_path(target_path), NEW_FILE_NAME)
        if not os.path.exists(path):
            write_stylesheet(path, NEW_FILE_HEADER)
            logger.info("Created stylesheet %s", path)
        self.index.load_file(path)
        return path
