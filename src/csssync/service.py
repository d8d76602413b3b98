"""SyncService: orchestrates index, matcher and patcher for one project."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

from csssync.config import SyncConfig
from csssync.errors import (
    ConfigurationError,
    CSSSyncError,
    InvalidChangeEvent,
    NoPropertiesError,
    ParseSkip,
    StaleIndexError,
    WriteFailure,
)
from csssync.events.bus import EventBus
from csssync.events.types import ChangeApplied, ChangeFailed, FilesIndexed, ProjectConfigured
from csssync.index.file_index import FileIndex, absolute_path
from csssync.matching.scorer import find_best_match
from csssync.matching.variations import variations_for_event
from csssync.model.change import ChangeEvent
from csssync.model.result import FailureReason, PatchResult
from csssync.patch.patcher import RulePatcher

logger = logging.getLogger(__name__)

_FAILURE_REASONS: dict[type[CSSSyncError], FailureReason] = {
    InvalidChangeEvent: FailureReason.INVALID_EVENT,
    ConfigurationError: FailureReason.NOT_CONFIGURED,
    StaleIndexError: FailureReason.STALE_INDEX,
    WriteFailure: FailureReason.WRITE_FAILURE,
    ParseSkip: FailureReason.PARSE_FAILURE,
    NoPropertiesError: FailureReason.NO_PROPERTIES,
}


def validate_directory(path: str, what: str = "Path") -> str:
    """Return *path* made absolute, or raise ConfigurationError."""
    if not path or not str(path).strip():
        raise ConfigurationError(f"{what} is required")
    resolved = absolute_path(path)
    if not os.path.exists(resolved):
        raise ConfigurationError(f"{what} does not exist: {resolved}")
    if not os.path.isdir(resolved):
        raise ConfigurationError(f"{what} must be a directory: {resolved}")
    if not os.access(resolved, os.R_OK | os.X_OK):
        raise ConfigurationError(f"{what} is not readable: {resolved}")
    return resolved


class SyncService:
    """Applies browser-side style changes to the stylesheets of a project.

    All state lives on the instance: its own :class:`FileIndex`, the
    configured root and the domain-to-root overrides. Calls are expected to
    arrive one at a time (see :class:`csssync.queue.ChangeQueue`).
    """

    def __init__(
        self,
        config: SyncConfig | None = None,
        *,
        index: FileIndex | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or SyncConfig()
        self.index = index or FileIndex(max_workers=self.config.scan_workers)
        self.patcher = RulePatcher(self.index)
        self.event_bus = event_bus or EventBus()
        self._root_path: str | None = None
        self._domain_mappings: dict[str, str] = {}

    @property
    def root_path(self) -> str | None:
        return self._root_path

    @property
    def domain_mappings(self) -> dict[str, str]:
        return dict(self._domain_mappings)

    # --- configuration ----------------------------------------------------------

    def configure(
        self, root_path: str, domain_mappings: Mapping[str, str] | None = None
    ) -> int:
        """Point the service at a project root and index it.

        Previous state is kept if validation fails. Returns the number of
        stylesheets indexed under the root.
        """
        root = validate_directory(root_path, "Project path")
        mappings = {
            str(domain): validate_directory(path, f"Path for {domain}")
            for domain, path in (domain_mappings or {}).items()
        }

        self.index.clear()
        self._root_path = root
        self._domain_mappings = mappings
        self.event_bus.emit(ProjectConfigured(root_path=root, domain_mappings=dict(mappings)))

        count = self.index.load_root(root)
        self.event_bus.emit(FilesIndexed(root_path=root, count=count))
        logger.info("Project path set to %s (%d CSS files)", root, count)
        return count

    def resolve_root(self, domain: str | None = None, target_path: str | None = None) -> str:
        """Root to search: explicit target path, then the domain's mapping, then the project root."""
        if target_path:
            return validate_directory(target_path, "Target path")
        if domain and domain in self._domain_mappings:
            return self._domain_mappings[domain]
        if self._root_path is None:
            raise ConfigurationError("Project path not set")
        return self._root_path

    # --- changes ----------------------------------------------------------------

    def apply_change(self, event: ChangeEvent | Mapping[str, Any]) -> PatchResult:
        """Apply one change event. Never raises; failures come back as results."""
        selector = ""
        try:
            if not isinstance(event, ChangeEvent):
                event = ChangeEvent.from_dict(event)
            selector = event.selector
            result = self._apply(event)
        except CSSSyncError as exc:
            reason = _FAILURE_REASONS.get(type(exc), FailureReason.INTERNAL)
            logger.warning("Change for %r failed (%s): %s", selector, reason, exc)
            result = PatchResult.failure(str(exc), reason)
        except Exception as exc:
            logger.exception("Unexpected error applying change for %r", selector)
            result = PatchResult.failure(str(exc) or type(exc).__name__, FailureReason.INTERNAL)

        if result.success:
            self.event_bus.emit(ChangeApplied(selector=selector, result=result))
        else:
            self.event_bus.emit(ChangeFailed(selector=selector, error=result.error))
        return result

    def _apply(self, event: ChangeEvent) -> PatchResult:
        root = self.resolve_root(event.domain, event.target_path)
        if self.index.ensure_loaded(root):
            self.event_bus.emit(FilesIndexed(root_path=root, count=len(self.index.files_under(root))))

        variations = variations_for_event(event)
        logger.info(
            "Applying CSS change: %d variations, properties %s",
            len(variations),
            ", ".join(event.changes),
        )

        match = find_best_match(
            variations, event.class_list, self.index.rules_under(root), self.config.weights
        )
        if match is None:
            outcome = self.patcher.create_rule(variations[0].selector, event.changes, root)
        else:
            outcome = self.patcher.update_rule(match.file, match.rule, event.changes)

        return PatchResult.ok(outcome, os.path.relpath(outcome.file_path, root))

    # --- status -------------------------------------------------------------------

    def status(self) -> dict[str, Any]:
        return {
            "rootPath": self._root_path,
            "filesIndexed": len(self.index),
            "domainMappings": dict(self._domain_mappings),
        }
