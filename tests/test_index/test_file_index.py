"""Tests for the stylesheet file index."""
from __future__ import annotations

import logging
import os

import pytest

from csssync.errors import ParseSkip
from csssync.index.file_index import FileIndex, is_under


# ---------------------------------------------------------------------------
# Directory scanning
# ---------------------------------------------------------------------------


class TestLoadRoot:
    def test_skips_node_modules(self, index, project, write_css):
        write_css(project, "node_modules/ignored.css", ".x { color: red; }")
        real = write_css(project, "src/real.css", ".y { color: blue; }")

        count = index.load_root(project)

        assert count == 1
        assert index.paths() == [str(real)]

    @pytest.mark.parametrize("skipped", [".git", ".vscode", "dist", "build"])
    def test_skips_build_and_vcs_dirs(self, index, project, write_css, skipped):
        write_css(project, f"{skipped}/out.css", ".x { color: red; }")
        assert index.load_root(project) == 0
        assert len(index) == 0

    def test_only_css_files(self, index, project, write_css):
        write_css(project, "a.css", ".a { color: red; }")
        write_css(project, "b.scss", ".b { color: red; }")
        write_css(project, "c.css.map", "{}")
        assert index.load_root(project) == 1

    def test_nested_directories(self, index, project, write_css):
        write_css(project, "a.css", ".a {}")
        write_css(project, "deep/er/b.css", ".b {}")
        assert index.load_root(project) == 2
        assert str(project / "deep" / "er" / "b.css") in index

    def test_entry_holds_content_and_rules(self, index, project, write_css):
        path = write_css(project, "main.css", ".a { color: red; }\n.b { margin: 0; }")
        index.load_root(project)
        entry = index.get(path)
        assert entry is not None
        assert entry.path == str(path)
        assert entry.raw_content == ".a { color: red; }\n.b { margin: 0; }"
        assert [r.selector for r in entry.rules] == [".a", ".b"]
        assert entry.last_loaded

    def test_keeps_crlf_in_raw_content(self, index, project):
        path = project / "a.css"
        path.write_bytes(b".a { color: red; }\r\n.b { top: 0; }\r\n")
        index.load_root(project)
        entry = index.get(path)
        assert entry.raw_content == ".a { color: red; }\r\n.b { top: 0; }\r\n"
        assert [r.source_start for r in entry.rules] == [0, 20]

    def test_unreadable_file_is_skipped(self, index, project, write_css, caplog):
        (project / "bad.css").write_bytes(b"\xff\xfe\xfa not utf-8")
        write_css(project, "good.css", ".ok { color: red; }")

        with caplog.at_level(logging.WARNING, logger="csssync.index.file_index"):
            count = index.load_root(project)

        assert count == 1
        assert str(project / "bad.css") not in index
        assert "bad.css" in caplog.text

    def test_parser_failure_is_skipped(self, project, write_css):
        def boom(content):
            if "boom" in content:
                raise RuntimeError("cannot parse")
            return []

        write_css(project, "a.css", "/* boom */")
        write_css(project, "b.css", ".b {}")
        index = FileIndex(parser=boom)
        assert index.load_root(project) == 1
        assert index.paths() == [str(project / "b.css")]

    def test_rescan_drops_deleted_files(self, index, project, write_css):
        gone = write_css(project, "gone.css", ".a {}")
        write_css(project, "kept.css", ".b {}")
        index.load_root(project)
        assert len(index) == 2

        os.remove(gone)
        index.load_root(project)

        assert str(gone) not in index
        assert len(index) == 1

    def test_deleted_file_stays_until_rescan(self, index, project, write_css):
        gone = write_css(project, "gone.css", ".a {}")
        index.load_root(project)
        os.remove(gone)
        assert str(gone) in index

    def test_missing_root_indexes_nothing(self, index, tmp_path):
        assert index.load_root(tmp_path / "nope") == 0


# ---------------------------------------------------------------------------
# ensure_loaded / invalidate
# ---------------------------------------------------------------------------


class TestEnsureLoaded:
    def test_loads_once(self, index, project, write_css):
        write_css(project, "a.css", ".a {}")
        assert index.ensure_loaded(project) is True
        write_css(project, "b.css", ".b {}")
        assert index.ensure_loaded(project) is False
        assert len(index) == 1

    def test_loads_other_root(self, index, tmp_path, write_css):
        write_css(tmp_path / "one", "a.css", ".a {}")
        write_css(tmp_path / "two", "b.css", ".b {}")
        index.ensure_loaded(tmp_path / "one")
        assert index.ensure_loaded(tmp_path / "two") is True
        assert len(index) == 2


class TestInvalidate:
    def test_reparses_whole_file(self, index, project, write_css):
        path = write_css(project, "a.css", ".a { color: red; }")
        index.load_root(project)
        before = index.get(path)

        path.write_text(".b { margin: 0; }\n.a { color: blue; }", encoding="utf-8")
        after = index.invalidate(path)

        assert after is index.get(path)
        assert after is not before
        assert [r.selector for r in after.rules] == [".b", ".a"]
        rule = after.rules[1]
        assert after.raw_content[rule.source_start : rule.source_end] == ".a { color: blue; }"

    def test_missing_file_raises_parse_skip(self, index, project):
        with pytest.raises(ParseSkip):
            index.invalidate(project / "missing.css")


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestQueries:
    def test_files_under_uses_path_boundaries(self, index, tmp_path, write_css):
        write_css(tmp_path / "app", "a.css", ".a {}")
        write_css(tmp_path / "app2", "b.css", ".b {}")
        index.load_root(tmp_path)

        under = index.files_under(tmp_path / "app")

        assert [f.path for f in under] == [str(tmp_path / "app" / "a.css")]

    def test_rules_under_in_file_then_rule_order(self, index, project, write_css):
        write_css(project, "a.css", ".a1 {}\n.a2 {}")
        write_css(project, "b.css", ".b1 {}")
        index.load_root(project)

        pairs = [(os.path.basename(path), rule.selector) for path, rule in index.rules_under(project)]

        assert pairs == [("a.css", ".a1"), ("a.css", ".a2"), ("b.css", ".b1")]

    def test_largest_file(self, index, project, write_css):
        write_css(project, "small.css", ".a {}")
        big = write_css(project, "big.css", ".b { color: red; margin: 0; padding: 0; }")
        index.load_root(project)
        assert index.largest_file(project).path == str(big)

    def test_largest_file_none_when_empty(self, index, project):
        assert index.largest_file(project) is None

    def test_independent_indices(self, project, write_css):
        write_css(project, "a.css", ".a {}")
        first, second = FileIndex(), FileIndex()
        first.load_root(project)
        assert len(first) == 1
        assert len(second) == 0

    def test_clear_and_remove(self, index, project, write_css):
        path = write_css(project, "a.css", ".a {}")
        write_css(project, "b.css", ".b {}")
        index.load_root(project)
        index.remove(path)
        assert path not in index
        index.clear()
        assert len(index) == 0


class TestIsUnder:
    def test_same_path(self):
        assert is_under("/srv/app", "/srv/app")

    def test_child(self):
        assert is_under("/srv/app/css/a.css", "/srv/app")

    def test_sibling_prefix(self):
        assert not is_under("/srv/app2/a.css", "/srv/app")

    def test_trailing_separator(self):
        assert is_under("/srv/app/a.css", "/srv/app/")
