#!/usr/bin/env python3
"""
Fluia Care Config & API Logger Tests — v1.0.0
"""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from system.config import Config, DEFAULTS
from system.logger import ApiLogger


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.data_dir = Path(self.temp_dir) / "data"

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_missing_file_writes_defaults(self):
        config = Config.load(self.data_dir)
        self.assertEqual(config.timezone, "America/Sao_Paulo")
        self.assertEqual(config.day_reset_hour, 4)
        with (self.data_dir / "config.json").open(encoding="utf-8") as f:
            self.assertEqual(json.load(f), DEFAULTS)

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_file_values_and_unknown_keys(self):
        self.data_dir.mkdir(parents=True)
        (self.data_dir / "config.json").write_text(
            json.dumps({"env": "prod", "debug": False, "legacy": 1}), encoding="utf-8")
        config = Config.load(self.data_dir)
        self.assertEqual(config.env, "prod")
        self.assertFalse(config.debug)

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_unreadable_file_is_reset(self):
        self.data_dir.mkdir(parents=True)
        (self.data_dir / "config.json").write_text("{broken", encoding="utf-8")
        config = Config.load(self.data_dir)
        self.assertEqual(config.env, "dev")

    @mock.patch.dict(os.environ, {"FLUIA_TIMEZONE": "UTC", "FLUIA_DAY_RESET_HOUR": "3", "FLUIA_DEBUG": "no"}, clear=True)
    def test_env_overrides(self):
        config = Config.load(self.data_dir)
        self.assertEqual(config.timezone, "UTC")
        self.assertEqual(config.day_reset_hour, 3)
        self.assertFalse(config.debug)

    @mock.patch.dict(os.environ, {"FLUIA_DAY_RESET_HOUR": "four"}, clear=True)
    def test_malformed_override_ignored(self):
        self.assertEqual(Config.load(self.data_dir).day_reset_hour, 4)


class TestApiLogger(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.logger = ApiLogger(Config(data_dir=Path(self.temp_dir)))

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_writes_tagged_lines(self):
        self.logger.log_request("/api/milestone", {"presenceDays": 7, "isPremium": False})
        self.logger.log_response("/api/milestone", {"ok": True})
        self.logger.log_exception("/api/milestone", ValueError("boom"))
        lines = self.logger.log_file.read_text(encoding="utf-8").splitlines()
        self.assertEqual(len(lines), 3)
        self.assertIn("[REQUEST] route=/api/milestone keys=isPremium,presenceDays", lines[0])
        self.assertIn("[RESPONSE] route=/api/milestone ok=True", lines[1])
        self.assertIn("[EXCEPTION]", lines[2])


if __name__ == "__main__":
    unittest.main(verbosity=2)
