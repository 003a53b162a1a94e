"""Tests for workspace entry discovery and classification.

Covers date-prefix parsing, marker-file flags, worktree detection, and
catalog ordering. Unreadable roots must yield an empty catalog.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from datetime import date, datetime
from pathlib import Path

from trydir.catalog.entries import (
    build_catalog,
    build_entry,
    extract_prefix_date,
    generate_prefix_date,
    matching_folders,
    remove_entry,
)


def _make_dir(root: Path, name: str, mtime: float | None = None) -> Path:
    path = root / name
    path.mkdir()
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


class ExtractPrefixDateTests(unittest.TestCase):
    def test_valid_prefix_splits_date_and_display_name(self) -> None:
        parsed = extract_prefix_date("2024-01-15 my-project")

        self.assertIsNotNone(parsed)
        prefix_date, display_name = parsed
        self.assertEqual(display_name, "my-project")
        self.assertEqual(prefix_date, datetime(2024, 1, 15))

    def test_non_date_token_is_not_split(self) -> None:
        self.assertIsNone(extract_prefix_date("not-a-date project"))

    def test_invalid_calendar_date_is_not_split(self) -> None:
        self.assertIsNone(extract_prefix_date("2024-02-30 project"))
        self.assertIsNone(extract_prefix_date("2024-13-01 project"))

    def test_name_without_space_or_remainder_is_not_split(self) -> None:
        self.assertIsNone(extract_prefix_date("2024-01-15"))
        self.assertIsNone(extract_prefix_date("2024-01-15 "))
        self.assertIsNone(extract_prefix_date("plain"))

    def test_remainder_keeps_inner_spaces(self) -> None:
        parsed = extract_prefix_date("2023-12-31 my new idea")

        self.assertEqual(parsed[1], "my new idea")

    def test_generate_prefix_date_formats_given_day(self) -> None:
        self.assertEqual(generate_prefix_date(date(2025, 3, 7)), "2025-03-07")


class BuildEntryTests(unittest.TestCase):
    def test_plain_directory_has_no_flags(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = _make_dir(Path(tmp), "scratch")

            entry = build_entry(path)

            self.assertEqual(entry.name, "scratch")
            self.assertEqual(entry.display_name, "scratch")
            self.assertEqual(entry.score, 0)
            self.assertFalse(entry.is_git)
            self.assertFalse(entry.is_worktree)
            self.assertFalse(entry.is_python)

    def test_date_prefixed_directory_uses_prefix_as_created(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = _make_dir(Path(tmp), "2024-01-01 alpha")

            entry = build_entry(path)

            self.assertEqual(entry.name, "2024-01-01 alpha")
            self.assertEqual(entry.display_name, "alpha")
            self.assertEqual(entry.created, datetime(2024, 1, 1).timestamp())

    def test_marker_files_set_capability_flags(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = _make_dir(Path(tmp), "poly")
            for marker in ("Cargo.toml", "pom.xml", "pubspec.yaml", "go.mod", "requirements.txt", "mise.toml"):
                (path / marker).write_text("", encoding="utf-8")
            (path / ".gitmodules").write_text("", encoding="utf-8")

            entry = build_entry(path)

            self.assertTrue(entry.is_cargo)
            self.assertTrue(entry.is_maven)
            self.assertTrue(entry.is_flutter)
            self.assertTrue(entry.is_go)
            self.assertTrue(entry.is_python)
            self.assertTrue(entry.is_mise)
            self.assertTrue(entry.is_gitmodules)

    def test_git_directory_is_repository_not_worktree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = _make_dir(Path(tmp), "repo")
            (path / ".git").mkdir()

            entry = build_entry(path)

            self.assertTrue(entry.is_git)
            self.assertFalse(entry.is_worktree)
            self.assertFalse(entry.is_worktree_locked)

    def test_git_file_marks_worktree_and_lock(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            admin = root / "admin" / "worktrees" / "feature"
            admin.mkdir(parents=True)
            (admin / "locked").write_text("", encoding="utf-8")
            path = _make_dir(root, "feature")
            (path / ".git").write_text(f"gitdir: {admin}\n", encoding="utf-8")

            entry = build_entry(path)

            self.assertTrue(entry.is_git)
            self.assertTrue(entry.is_worktree)
            self.assertTrue(entry.is_worktree_locked)

    def test_unlocked_worktree_is_not_locked(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            admin = root / "admin"
            admin.mkdir()
            path = _make_dir(root, "feature")
            (path / ".git").write_text(f"gitdir: {admin}\n", encoding="utf-8")

            entry = build_entry(path)

            self.assertTrue(entry.is_worktree)
            self.assertFalse(entry.is_worktree_locked)

    def test_missing_directory_is_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(build_entry(Path(tmp) / "gone"))


class BuildCatalogTests(unittest.TestCase):
    def test_entries_sorted_by_modified_descending(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_dir(root, "old", mtime=1_000_000)
            _make_dir(root, "newest", mtime=3_000_000)
            _make_dir(root, "middle", mtime=2_000_000)

            names = [entry.name for entry in build_catalog(root)]

            self.assertEqual(names, ["newest", "middle", "old"])

    def test_files_and_symlinked_directories_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            real = _make_dir(root, "real")
            (root / "notes.txt").write_text("x", encoding="utf-8")
            (root / "link").symlink_to(real, target_is_directory=True)

            names = [entry.name for entry in build_catalog(root)]

            self.assertEqual(names, ["real"])

    def test_out_of_range_date_prefix_does_not_abort_scan(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_dir(root, "0001-01-01 ancient", mtime=2_000_000)
            _make_dir(root, "beta", mtime=1_000_000)

            entries = build_catalog(root)

            self.assertEqual([entry.name for entry in entries], ["0001-01-01 ancient", "beta"])
            self.assertEqual(entries[0].display_name, "ancient")
            self.assertIsInstance(entries[0].created, float)

    def test_missing_root_yields_empty_catalog(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(build_catalog(Path(tmp) / "missing"), [])

    def test_remove_entry_keeps_relative_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_dir(root, "a", mtime=3_000_000)
            _make_dir(root, "b", mtime=2_000_000)
            _make_dir(root, "c", mtime=1_000_000)
            entries = build_catalog(root)

            remaining = remove_entry(entries, "b")

            self.assertEqual([entry.name for entry in remaining], ["a", "c"])
            self.assertEqual(len(entries), 3)


class MatchingFoldersTests(unittest.TestCase):
    def test_matches_raw_and_date_stripped_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_dir(root, "demo")
            _make_dir(root, "2024-05-01 demo")
            _make_dir(root, "2024-05-02 demo-two")
            _make_dir(root, "other")

            self.assertEqual(matching_folders("demo", root), ["2024-05-01 demo", "demo"])
            self.assertEqual(matching_folders("demo-two", root), ["2024-05-02 demo-two"])
            self.assertEqual(matching_folders("nothing", root), [])

    def test_missing_root_has_no_matches(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(matching_folders("demo", Path(tmp) / "missing"), [])


if __name__ == "__main__":
    unittest.main()
