"""Tests for the content exclusion policy."""

from __future__ import annotations

import unittest

from msfslayout.layout_model import is_excluded


class ExclusionTests(unittest.TestCase):
    def test_conversion_directory_is_excluded_case_insensitively(self) -> None:
        self.assertTrue(is_excluded("_CVT_/texture.dds"))
        self.assertTrue(is_excluded("_cvt_/nested/deep/file.bin"))
        self.assertTrue(is_excluded("_Cvt_/x"))

    def test_conversion_directory_only_matches_first_segment(self) -> None:
        self.assertFalse(is_excluded("SimObjects/_CVT_/texture.dds"))
        self.assertFalse(is_excluded("_CVT_extra/texture.dds"))

    def test_root_file_named_like_conversion_directory_is_kept(self) -> None:
        self.assertFalse(is_excluded("_CVT_"))

    def test_housekeeping_file_names_are_excluded_anywhere(self) -> None:
        self.assertTrue(is_excluded("Thumbs.db"))
        self.assertTrue(is_excluded("textures/THUMBS.DB"))
        self.assertTrue(is_excluded("a/b/desktop.ini"))
        self.assertTrue(is_excluded(".DS_Store"))

    def test_regular_files_are_included(self) -> None:
        self.assertFalse(is_excluded("a.txt"))
        self.assertFalse(is_excluded("SimObjects/Airplanes/plane/aircraft.cfg"))
        self.assertFalse(is_excluded("thumbs.db.bak"))


if __name__ == "__main__":
    unittest.main()
