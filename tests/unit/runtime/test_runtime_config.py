"""Tests for persisted watch defaults and their sanitization."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from msfslayout.runtime import config


class RuntimeConfigTests(unittest.TestCase):
    def test_missing_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "missing" / "config.json"
            with mock.patch("msfslayout.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_debounce_ms(), 300)
                self.assertEqual(config.load_poll_interval_ms(), 200)
                self.assertTrue(config.load_check_manifest())

    def test_malformed_config_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("[1, 2", encoding="utf-8")
            with mock.patch("msfslayout.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_debounce_ms(), config.DEFAULT_DEBOUNCE_MS)

    def test_invalid_values_are_sanitized(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(
                json.dumps({"debounce_ms": True, "poll_interval_ms": -5, "check_manifest": "no"}),
                encoding="utf-8",
            )
            with mock.patch("msfslayout.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_debounce_ms(), 300)
                self.assertEqual(config.load_poll_interval_ms(), 200)
                self.assertTrue(config.load_check_manifest())

    def test_save_defaults_round_trips_and_keeps_unrelated_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("msfslayout.runtime.config.CONFIG_PATH", config_path):
                config.save_config({"other": 1})
                config.save_defaults(debounce_ms=750, poll_interval_ms=0, check_manifest=False)

                self.assertEqual(config.load_debounce_ms(), 750)
                self.assertEqual(config.load_poll_interval_ms(), 200)
                self.assertFalse(config.load_check_manifest())
                self.assertEqual(config.load_config().get("other"), 1)


if __name__ == "__main__":
    unittest.main()
