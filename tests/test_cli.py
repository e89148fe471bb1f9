#!/usr/bin/env python3
"""
ConfigSync CLI Tests

Tests for argument parsing and command execution end to end,
with in-memory store nodes standing in for Redis.
"""
import io
import json
import logging
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

# Add parent directory to path to import configsync modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fake_store import FakeCluster, FakeNode

from configsync.cli import create_argument_parser, execute_command
from configsync.cli.executor import build_settings
from configsync.core.constants import LOGGER_NAME


SENTINEL_CONF = """\
port 26379
sentinel monitor mypod 10.0.0.1 6379 2
sentinel auth-pass mypod secret123
"""


class CLITestCase(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_file = os.path.join(self.temp_dir.name, "sentinel.conf")
        with open(self.config_file, 'w') as f:
            f.write(SENTINEL_CONF)

        self.cluster = FakeCluster({
            "10.0.0.1:6379": FakeNode(role="master", password="secret123",
                                      config={"save": "900 1", "appendonly": "yes"},
                                      replicas=[("10.0.0.2", 6379)]),
            "10.0.0.2:6379": FakeNode(role="slave", password="secret123",
                                      config={"save": "", "appendonly": "no"}),
        })
        self.parser = create_argument_parser()

    def tearDown(self):
        self.temp_dir.cleanup()
        for handler in list(logging.getLogger(LOGGER_NAME).handlers):
            logging.getLogger(LOGGER_NAME).removeHandler(handler)
            handler.close()

    def execute(self, *argv, environ=None):
        args = self.parser.parse_args(["--quiet", *argv])
        output = io.StringIO()
        with redirect_stdout(output):
            code = execute_command(args, environ=environ or {}, connector=self.cluster)
        return code, output.getvalue()


class ArgumentParserTests(CLITestCase):
    """Tests for flag parsing and precedence"""

    def test_flags_override_environment(self):
        """Test command-line flags win over CONFIGSYNC_* variables"""
        args = self.parser.parse_args([
            "--config-file", "/tmp/other.conf",
            "--directives", "save,appendonly",
            "--workers", "3",
        ])
        settings = build_settings(args, {
            "CONFIGSYNC_SENTINELCONFIGFILE": "/etc/redis/sentinel.conf",
            "CONFIGSYNC_PRETENDONLY": "true",
            "CONFIGSYNC_WORKERS": "8",
        })

        self.assertEqual(settings.sentinel_config_file, "/tmp/other.conf")
        self.assertEqual(settings.directives, ("save", "appendonly"))
        self.assertEqual(settings.workers, 3)
        # Not given on the command line, so the environment value stands
        self.assertTrue(settings.pretend)

    def test_no_pretend_overrides_environment(self):
        """Test --no-pretend switches off CONFIGSYNC_PRETENDONLY=true"""
        environ = {"CONFIGSYNC_PRETENDONLY": "true", "CONFIGSYNC_SYSLOG": "true"}

        settings = build_settings(self.parser.parse_args(["--no-pretend", "--no-syslog"]), environ)
        self.assertFalse(settings.pretend)
        self.assertFalse(settings.syslog)

        settings = build_settings(self.parser.parse_args([]), environ)
        self.assertTrue(settings.pretend)
        self.assertTrue(settings.syslog)

    def test_no_pretend_run_writes(self):
        """Test a --no-pretend run pushes values despite the environment"""
        code, _ = self.execute("--config-file", self.config_file, "--directives", "save",
                               "--no-pretend", environ={"CONFIGSYNC_PRETENDONLY": "true"})

        self.assertEqual(code, 0)
        self.assertEqual(self.cluster.sets_for("10.0.0.2:6379"), [("save", "900 1")])

    def test_version_matches_version_file(self):
        """Test --version reports the release recorded in the VERSION file"""
        version_file = os.path.join(os.path.dirname(__file__), '..', 'VERSION')
        with open(version_file) as f:
            expected = f.read().strip()

        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            with self.assertRaises(SystemExit):
                self.parser.parse_args(["--version"])
        self.assertIn(f"ConfigSync v{expected}", stdout.getvalue())

    def test_debug_flag(self):
        """Test --debug selects DEBUG logging"""
        args = self.parser.parse_args(["--debug"])
        self.assertEqual(build_settings(args, {}).log_level, "DEBUG")

    def test_invalid_workers_rejected(self):
        """Test argparse rejects an out-of-range worker count"""
        with mock.patch('sys.stderr', new_callable=io.StringIO) as stderr:
            with self.assertRaises(SystemExit):
                self.parser.parse_args(["--workers", "0"])
        self.assertIn("Worker count", stderr.getvalue())


class ExecuteCommandTests(CLITestCase):
    """Tests for command execution"""

    def test_sync_run(self):
        """Test a full run pushes the primary's values"""
        code, output = self.execute("--config-file", self.config_file,
                                    "--directives", "save,appendonly")

        self.assertEqual(code, 0)
        self.assertEqual(self.cluster.nodes["10.0.0.2:6379"].config,
                         {"save": "900 1", "appendonly": "yes"})
        self.assertIn("mypod", output)

    def test_pretend_json_summary(self):
        """Test --pretend --json prints a machine-readable summary and writes nothing"""
        code, output = self.execute("--config-file", self.config_file,
                                    "--directives", "save", "--pretend", "--json")

        self.assertEqual(code, 0)
        self.assertEqual(self.cluster.set_calls, [])
        summary = json.loads(output)
        self.assertTrue(summary['pretend'])
        self.assertEqual(summary['pods_synced'], 1)
        self.assertEqual(summary['pods'][0]['snapshot'], {"save": "900 1"})

    def test_pod_failure_keeps_zero_exit(self):
        """Test per-pod failures do not change the exit status"""
        self.cluster.unreachable.add("10.0.0.1:6379")
        code, output = self.execute("--config-file", self.config_file, "--json")

        self.assertEqual(code, 0)
        self.assertEqual(json.loads(output)['pods_failed'], 1)

    def test_missing_config_file_is_fatal(self):
        """Test an unreadable sentinel file exits non-zero without any connection"""
        missing = os.path.join(self.temp_dir.name, "missing.conf")
        code, _ = self.execute("--config-file", missing)

        self.assertEqual(code, 1)
        self.assertEqual(self.cluster.connects, [])

    def test_invalid_environment_is_fatal(self):
        """Test invalid settings exit non-zero"""
        code, _ = self.execute(environ={"CONFIGSYNC_PRETENDONLY": "perhaps"})
        self.assertEqual(code, 1)

    def test_show_topology(self):
        """Test --show-topology prints pods without network access"""
        code, output = self.execute("--config-file", self.config_file,
                                    "--show-topology", "--json")

        self.assertEqual(code, 0)
        self.assertEqual(self.cluster.connects, [])
        topology = json.loads(output)
        self.assertEqual(topology['port'], 26379)
        self.assertEqual(topology['pods']['mypod']['ip'], "10.0.0.1")
        self.assertTrue(topology['pods']['mypod']['auth'])
        self.assertNotIn("secret123", output)

    def test_show_topology_table(self):
        """Test the human-readable topology view"""
        code, output = self.execute("--config-file", self.config_file, "--show-topology")
        self.assertEqual(code, 0)
        self.assertIn("10.0.0.1:6379", output)

    def test_list_directives(self):
        """Test --list-directives prints the effective list"""
        code, output = self.execute("--list-directives", "--directives", "save,appendonly")

        self.assertEqual(code, 0)
        self.assertEqual(output.split(), ["save", "appendonly"])


if __name__ == '__main__':
    unittest.main()
