#!/usr/bin/env python3
"""
ConfigSync Settings Tests

Tests for reading process settings from the environment.
"""
import os
import sys
import unittest

# Add parent directory to path to import configsync modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from configsync.config import Settings, parse_bool, parse_directive_list
from configsync.core.constants import DEFAULT_SENTINEL_CONFIG_FILE, DEFAULT_SYNCABLE_DIRECTIVES
from configsync.core.exceptions import ConfigValidationError


class SettingsFromEnvTests(unittest.TestCase):
    """Tests for CONFIGSYNC_* variables"""

    def test_defaults(self):
        """Test an empty environment gives the defaults"""
        settings = Settings.from_env({})

        self.assertEqual(settings.sentinel_config_file, DEFAULT_SENTINEL_CONFIG_FILE)
        self.assertEqual(settings.directives, DEFAULT_SYNCABLE_DIRECTIVES)
        self.assertIn("save", settings.directives)
        self.assertIn("appendfsync", settings.directives)
        self.assertFalse(settings.pretend)
        self.assertEqual(settings.workers, 1)

    def test_overrides(self):
        """Test every variable is honored"""
        settings = Settings.from_env({
            "CONFIGSYNC_SENTINELCONFIGFILE": "/tmp/sentinel.conf",
            "CONFIGSYNC_SYNCABLEDIRECTIVELIST": "save,appendonly",
            "CONFIGSYNC_PRETENDONLY": "true",
            "CONFIGSYNC_LOGLEVEL": "debug",
            "CONFIGSYNC_SYSLOG": "1",
            "CONFIGSYNC_WORKERS": "4",
            "CONFIGSYNC_TIMEOUT": "2.5",
            "CONFIGSYNC_RUNTIMEOUT": "30",
        })

        self.assertEqual(settings.sentinel_config_file, "/tmp/sentinel.conf")
        self.assertEqual(settings.directives, ("save", "appendonly"))
        self.assertTrue(settings.pretend)
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertTrue(settings.syslog)
        self.assertEqual(settings.workers, 4)
        self.assertEqual(settings.timeout, 2.5)
        self.assertEqual(settings.run_timeout, 30.0)

    def test_directive_list_replaces_defaults(self):
        """Test the override is a full replacement, not an addition"""
        settings = Settings.from_env({"CONFIGSYNC_SYNCABLEDIRECTIVELIST": "maxmemory"})
        self.assertEqual(settings.directives, ("maxmemory",))

    def test_invalid_bool(self):
        """Test an unparseable pretend flag is rejected"""
        with self.assertRaises(ConfigValidationError) as ctx:
            Settings.from_env({"CONFIGSYNC_PRETENDONLY": "maybe"})
        self.assertEqual(ctx.exception.field, "CONFIGSYNC_PRETENDONLY")

    def test_invalid_number(self):
        """Test an unparseable worker count is rejected"""
        with self.assertRaises(ConfigValidationError):
            Settings.from_env({"CONFIGSYNC_WORKERS": "many"})

    def test_blank_directive_list_keeps_defaults(self):
        """Test an empty variable is treated as unset"""
        settings = Settings.from_env({"CONFIGSYNC_SYNCABLEDIRECTIVELIST": "  "})
        self.assertEqual(settings.directives, DEFAULT_SYNCABLE_DIRECTIVES)


class SettingsValidationTests(unittest.TestCase):
    """Tests for value validation"""

    def test_rejects_bad_values(self):
        """Test out-of-range settings raise ConfigValidationError"""
        for kwargs in (
            {"workers": 0},
            {"timeout": 0},
            {"run_timeout": -1},
            {"log_level": "LOUD"},
            {"directives": ()},
            {"sentinel_config_file": ""},
        ):
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ConfigValidationError):
                    Settings(**kwargs)

    def test_with_overrides_skips_none(self):
        """Test unset overrides keep existing values"""
        base = Settings(pretend=True, workers=2)
        updated = base.with_overrides(pretend=None, workers=8, log_file=None)

        self.assertTrue(updated.pretend)
        self.assertEqual(updated.workers, 8)
        self.assertEqual(base.workers, 2)

    def test_with_overrides_validates(self):
        """Test overrides go through validation"""
        with self.assertRaises(ConfigValidationError):
            Settings().with_overrides(workers=1000)

    def test_to_dict(self):
        """Test dictionary conversion"""
        data = Settings(directives=("save",)).to_dict()
        self.assertEqual(data['directives'], ["save"])
        self.assertIn('sentinel_config_file', data)


class ParserHelperTests(unittest.TestCase):
    """Tests for value parsing helpers"""

    def test_parse_bool(self):
        """Test accepted boolean spellings"""
        for value in ("1", "t", "TRUE", "yes", "On"):
            self.assertTrue(parse_bool("x", value))
        for value in ("0", "f", "False", "no", "OFF"):
            self.assertFalse(parse_bool("x", value))

    def test_parse_directive_list(self):
        """Test whitespace, empties and duplicates"""
        self.assertEqual(
            parse_directive_list(" save , appendonly,,save,appendfsync "),
            ("save", "appendonly", "appendfsync"),
        )
        self.assertEqual(parse_directive_list(""), ())


if __name__ == '__main__':
    unittest.main()
