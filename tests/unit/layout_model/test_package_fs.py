"""Tests for package directory walking."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from msfslayout.errors import DirectoryReadError
from msfslayout.layout_model import list_package_files


class PackageFsTests(unittest.TestCase):
    def test_lists_every_file_recursively_and_skips_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "sub" / "deeper").mkdir(parents=True)
            (root / "empty").mkdir()
            (root / "a.txt").write_text("a", encoding="utf-8")
            (root / "sub" / "b.txt").write_text("b", encoding="utf-8")
            (root / "sub" / "deeper" / "c.bin").write_bytes(b"c")

            files = list_package_files(root)

            self.assertCountEqual(
                files,
                [root / "a.txt", root / "sub" / "b.txt", root / "sub" / "deeper" / "c.bin"],
            )
            self.assertTrue(all(path.is_absolute() for path in files))

    def test_ignored_paths_are_left_out(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "layout.json").write_text("{}", encoding="utf-8")
            (root / "manifest.json").write_text("{}", encoding="utf-8")
            (root / "sub").mkdir()
            (root / "sub" / "layout.json").write_text("{}", encoding="utf-8")

            files = list_package_files(root, ignore=(root / "layout.json", root / "manifest.json"))

            self.assertEqual(files, [root / "sub" / "layout.json"])

    def test_empty_root_yields_no_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(list_package_files(Path(tmp)), [])

    def test_directory_symlink_cycles_are_not_followed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "sub").mkdir()
            (root / "sub" / "file.txt").write_text("x", encoding="utf-8")
            try:
                os.symlink(root, root / "sub" / "loop", target_is_directory=True)
            except (OSError, NotImplementedError):
                self.skipTest("symlinks are not supported here")

            files = list_package_files(root)

            self.assertEqual(files, [root / "sub" / "file.txt"])

    def test_unlistable_directory_raises_with_offending_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            locked = root / "locked"
            locked.mkdir()
            (locked / "secret.txt").write_text("x", encoding="utf-8")
            real_scandir = os.scandir

            def fake_scandir(path):
                if Path(path) == locked:
                    raise PermissionError(13, "Permission denied")
                return real_scandir(path)

            with mock.patch("msfslayout.layout_model.fs.os.scandir", side_effect=fake_scandir):
                with self.assertRaises(DirectoryReadError) as ctx:
                    list_package_files(root)

            self.assertEqual(ctx.exception.path, locked)
            self.assertIn("Permission denied", str(ctx.exception))
            self.assertIn(str(locked), str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
