"""In-memory index of the stylesheets under one or more project roots."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path

from csssync.errors import ParseSkip
from csssync.model.rule import Rule, StylesheetFile
from csssync.stylesheet.parser import parse_rules

logger = logging.getLogger(__name__)

DEFAULT_SKIP_DIRS = frozenset(
    {
        "node_modules",
        ".git",
        ".vscode",
        ".idea",
        "dist",
        "build",
        ".next",
        ".cache",
        "coverage",
        "__pycache__",
        ".venv",
    }
)


def absolute_path(path: str | Path) -> str:
    return os.path.abspath(os.path.expanduser(str(path)))


def is_under(path: str, root: str) -> bool:
    """True when *path* is *root* itself or lives below it."""
    if path == root:
        return True
    return path.startswith(root.rstrip(os.sep) + os.sep)


class FileIndex:
    """Cache of parsed stylesheets keyed by absolute path.

    Entries are only ever replaced wholesale: after any write the file is
    re-read and re-parsed so rule offsets always match ``raw_content``.
    There is no eviction; entries live as long as the index.
    """

    def __init__(
        self,
        *,
        skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS,
        max_workers: int = 4,
        parser: Callable[[str], list[Rule]] = parse_rules,
    ) -> None:
        self._files: dict[str, StylesheetFile] = {}
        self._skip_dirs = skip_dirs
        self._max_workers = max(1, max_workers)
        self._parser = parser

    # --- loading ----------------------------------------------------------------

    def discover(self, root: str | Path) -> list[str]:
        """List ``.css`` files under *root*, skipping build and VCS directories."""
        found: list[str] = []
        for dirpath, dirnames, filenames in os.walk(absolute_path(root)):
            dirnames[:] = sorted(d for d in dirnames if d not in self._skip_dirs)
            for name in sorted(filenames):
                if name.endswith(".css"):
                    found.append(os.path.join(dirpath, name))
        return found

    def load_root(self, root: str | Path) -> int:
        """Scan *root* recursively and (re)load every stylesheet found.

        Files that cannot be read or parsed are logged and left out. Cached
        entries below *root* that no longer exist on disk are dropped.
        Returns the number of files indexed under *root*.
        """
        root = absolute_path(root)
        paths = self.discover(root)
        on_disk = set(paths)

        def _load(path: str) -> StylesheetFile | ParseSkip:
            try:
                return self._read(path)
            except ParseSkip as exc:
                return exc

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            loaded = list(pool.map(_load, paths))

        for path in [p for p in self._files if is_under(p, root) and p not in on_disk]:
            logger.info("Dropping stylesheet no longer on disk: %s", path)
            del self._files[path]

        count = 0
        for path, entry in zip(paths, loaded):
            if isinstance(entry, ParseSkip):
                logger.warning("Skipping %s: %s", path, entry)
                self._files.pop(path, None)
                continue
            self._files[path] = entry
            count += 1
            logger.debug("Loaded CSS file: %s (%d rules)", os.path.relpath(path, root), len(entry.rules))

        logger.info("Indexed %d CSS files under %s", count, root)
        return count

    def ensure_loaded(self, root: str | Path) -> bool:
        """Load *root* unless something below it is already cached.

        Returns True when a scan was performed.
        """
        root = absolute_path(root)
        if any(is_under(path, root) for path in self._files):
            return False
        self.load_root(root)
        return True

    def load_file(self, path: str | Path) -> StylesheetFile:
        """Read and parse one file, replacing any cached entry for it."""
        entry = self._read(absolute_path(path))
        self._files[entry.path] = entry
        return entry

    def invalidate(self, path: str | Path) -> StylesheetFile:
        """Force a full re-read of *path*; used after every write."""
        return self.load_file(path)

    def _read(self, path: str) -> StylesheetFile:
        try:
            # newline="" keeps CRLF intact so offsets match the bytes on disk.
            with open(path, encoding="utf-8", newline="") as fh:
                content = fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseSkip(f"Cannot read {path}: {exc}", path=path, cause=exc) from exc
        try:
            rules = tuple(self._parser(content))
        except Exception as exc:
            raise ParseSkip(f"Cannot parse {path}: {exc}", path=path, cause=exc) from exc
        return StylesheetFile(
            path=path,
            raw_content=content,
            rules=rules,
            last_loaded=datetime.now(timezone.utc).isoformat(),
        )

    # --- queries ----------------------------------------------------------------

    def get(self, path: str | Path) -> StylesheetFile | None:
        return self._files.get(absolute_path(path))

    def paths(self) -> list[str]:
        return list(self._files)

    def files_under(self, root: str | Path) -> list[StylesheetFile]:
        """Cached files below *root*, in insertion order."""
        root = absolute_path(root)
        return [entry for path, entry in self._files.items() if is_under(path, root)]

    def rules_under(self, root: str | Path) -> Iterator[tuple[str, Rule]]:
        """Every ``(path, rule)`` pair below *root*: file order, then rule order."""
        for entry in self.files_under(root):
            for rule in entry.rules:
                yield entry.path, rule

    def largest_file(self, root: str | Path) -> StylesheetFile | None:
        """The cached file below *root* with the most content, first one on ties."""
        best: StylesheetFile | None = None
        for entry in self.files_under(root):
            if best is None or entry.size > best.size:
                best = entry
        return best

    # --- mutation -----------------------------------------------------------------

    def remove(self, path: str | Path) -> None:
        self._files.pop(absolute_path(path), None)

    def clear(self) -> None:
        self._files.clear()

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return absolute_path(path) in self._files
