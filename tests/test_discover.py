"""Tests for the tree scanner."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from path2enum.core.discover import has_allowed_extension, iter_entries, scan
from path2enum.model.entry import Entry

ASSETS = Path(__file__).resolve().parent / "fixtures" / "assets"


def _as_set(entries) -> set[tuple[str, bool]]:
    return {(e.logical_path, e.is_dir) for e in entries}


def _make_tree(root: Path, files: list[str]) -> Path:
    for rel in files:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("x", encoding="utf-8")
    return root


class TestHasAllowedExtension:
    def test_plain_suffix(self):
        assert has_allowed_extension("icon.svg", ["svg"])
        assert not has_allowed_extension("icon.png", ["svg"])

    def test_multi_extension(self):
        assert has_allowed_extension("a.tar.gz", ["gz"])
        assert has_allowed_extension("a.tar.gz", ["tar.gz"])
        assert not has_allowed_extension("a.tar.gz", ["tar"])

    def test_case_sensitive(self):
        assert not has_allowed_extension("ICON.SVG", ["svg"])

    def test_requires_dot(self):
        assert not has_allowed_extension("svg", ["svg"])
        assert not has_allowed_extension("foosvg", ["svg"])


class TestIterEntries:
    def test_fixture_tree(self):
        entries = list(iter_entries(ASSETS, ["svg"]))
        assert _as_set(entries) == {
            ("11-test", True),
            ("11-test/11.svg", False),
            ("arrow-left.svg", False),
            ("home.svg", False),
            ("nested_dir", True),
            ("nested_dir/icon.svg", False),
            ("nested_dir/deep_dir", True),
            ("nested_dir/deep_dir/deep-icon.svg", False),
        }

    def test_extension_filter(self):
        paths = {e.logical_path for e in iter_entries(ASSETS, ["toml"])}
        assert "icons.toml" in paths
        assert "home.svg" not in paths
        assert "nested_dir/notes.txt" not in paths

    def test_directories_emitted_without_matching_files(self):
        """Every scanned directory gets an entry, matching files or not."""
        entries = _as_set(iter_entries(ASSETS, ["toml"]))
        assert ("nested_dir/deep_dir", True) in entries

    def test_prefix_is_prepended(self):
        paths = {e.logical_path for e in iter_entries(ASSETS, ["svg"], "assets")}
        assert "assets/home.svg" in paths
        assert "assets/11-test/11.svg" in paths
        assert "assets" not in paths

    def test_prefix_slashes_are_normalized(self):
        paths = {e.logical_path for e in iter_entries(ASSETS, ["svg"], "/static/img/")}
        assert "static/img/home.svg" in paths

    def test_logical_paths_have_no_edge_slashes(self):
        for e in iter_entries(ASSETS, ["svg", "toml"], "p"):
            assert not e.logical_path.startswith("/")
            assert not e.logical_path.endswith("/")
            assert "\\" not in e.logical_path

    def test_generator_is_restartable(self):
        first = list(iter_entries(ASSETS, ["svg"]))
        second = list(iter_entries(ASSETS, ["svg"]))
        assert _as_set(first) == _as_set(second)
        assert len(first) == len(second)

    def test_shared_seen_set_suppresses_repeats(self):
        seen: set[str] = set()
        first = list(iter_entries(ASSETS, ["svg"], seen=seen))
        second = list(iter_entries(ASSETS, ["svg"], seen=seen))
        assert first
        assert second == []
        assert seen == {e.logical_path for e in first}

    def test_entries_are_immutable(self):
        entry = next(iter(iter_entries(ASSETS, ["svg"])))
        assert isinstance(entry, Entry)
        with pytest.raises(AttributeError):
            entry.logical_path = "other"  # type: ignore[misc]

    def test_scan_returns_list(self):
        assert len(scan(ASSETS, ["svg"])) == 8


class TestInaccessibleSubtrees:
    """Unreadable directories are skipped, never raised."""

    def test_missing_root_yields_nothing(self, tmp_path: Path):
        assert list(iter_entries(tmp_path / "nope", ["svg"])) == []

    def test_file_root_yields_nothing(self, tmp_path: Path):
        f = tmp_path / "file.svg"
        f.write_text("x", encoding="utf-8")
        assert list(iter_entries(f, ["svg"])) == []

    def test_unreadable_subdirectory_is_omitted(self, tmp_path: Path, monkeypatch):
        _make_tree(tmp_path, ["ok/a.svg", "locked/secret.svg", "top.svg"])
        real_iterdir = Path.iterdir

        def guarded_iterdir(self):
            if self.name == "locked":
                raise PermissionError(13, "Permission denied", str(self))
            return real_iterdir(self)

        monkeypatch.setattr(Path, "iterdir", guarded_iterdir)
        entries = _as_set(iter_entries(tmp_path, ["svg"]))

        assert ("ok/a.svg", False) in entries
        assert ("top.svg", False) in entries
        # The directory itself was listed by its readable parent.
        assert ("locked", True) in entries
        assert ("locked/secret.svg", False) not in entries

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced here",
    )
    def test_chmod_protected_directory(self, tmp_path: Path):
        _make_tree(tmp_path, ["ok/a.svg", "locked/secret.svg"])
        locked = tmp_path / "locked"
        locked.chmod(0)
        try:
            entries = _as_set(iter_entries(tmp_path, ["svg"]))
        finally:
            locked.chmod(0o755)
        assert ("ok/a.svg", False) in entries
        assert ("locked/secret.svg", False) not in entries


class TestSymlinks:
    @staticmethod
    def _symlink(link: Path, target: Path) -> None:
        try:
            link.symlink_to(target, target_is_directory=target.is_dir())
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

    def test_symlinks_skipped_by_default(self, tmp_path: Path):
        _make_tree(tmp_path, ["real/a.svg"])
        self._symlink(tmp_path / "alias", tmp_path / "real")
        self._symlink(tmp_path / "b.svg", tmp_path / "real" / "a.svg")

        paths = {e.logical_path for e in iter_entries(tmp_path, ["svg"])}
        assert paths == {"real", "real/a.svg"}

    def test_symlinks_followed_when_requested(self, tmp_path: Path):
        _make_tree(tmp_path, ["real/a.svg"])
        self._symlink(tmp_path / "alias", tmp_path / "real")

        paths = {
            e.logical_path
            for e in iter_entries(tmp_path, ["svg"], follow_symlinks=True)
        }
        assert {"alias", "alias/a.svg", "real", "real/a.svg"} <= paths

    def test_cycle_terminates(self, tmp_path: Path):
        _make_tree(tmp_path, ["a/x.svg"])
        self._symlink(tmp_path / "a" / "loop", tmp_path / "a")

        paths = {
            e.logical_path
            for e in iter_entries(tmp_path, ["svg"], follow_symlinks=True)
        }
        assert "a/loop" in paths
        assert "a/loop/x.svg" not in paths


class TestUndecodableNames:
    @staticmethod
    def _bad_file(root: Path) -> None:
        try:
            with open(os.path.join(os.fsencode(root), b"bad\xff.svg"), "wb") as f:
                f.write(b"x")
        except OSError:
            pytest.skip("filesystem rejects non-UTF-8 names")

    def test_bad_bytes_become_replacement_character(self, tmp_path: Path):
        self._bad_file(tmp_path)
        (tmp_path / "ok.svg").write_text("x", encoding="utf-8")

        paths = {e.logical_path for e in iter_entries(tmp_path, ["svg"])}

        assert paths == {"bad\ufffd.svg", "ok.svg"}
        for path in paths:
            path.encode("utf-8")
