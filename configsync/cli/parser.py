#!/usr/bin/env python3
"""
ConfigSync Argument Parser Module

Sets up command-line argument parsing with validation.
Every flag is optional and overrides the matching CONFIGSYNC_* variable.
"""

import argparse

from ..__version__ import get_version_string
from ..core.constants import LOG_LEVELS, MAX_WORKERS


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser with all ConfigSync commands

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="configsync",
        description="ConfigSync - push runtime config from sentinel-managed primaries to their replicas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Sync every pod in the default sentinel file
  configsync

  # Show what would change without touching any replica
  configsync --pretend

  # Only sync persistence settings, four pods at a time
  configsync --directives save,appendonly,appendfsync --workers 4

  # Inspect the parsed topology (no network access)
  configsync --config-file ./sentinel.conf --show-topology

Environment:
  CONFIGSYNC_SENTINELCONFIGFILE    sentinel config path
  CONFIGSYNC_SYNCABLEDIRECTIVELIST comma-separated directive list
  CONFIGSYNC_PRETENDONLY           true to only log intended changes
  CONFIGSYNC_LOGFILE, CONFIGSYNC_LOGLEVEL, CONFIGSYNC_SYSLOG,
  CONFIGSYNC_WORKERS, CONFIGSYNC_TIMEOUT, CONFIGSYNC_RUNTIMEOUT
        """
    )

    # Validation type converters
    def positive_float(value):
        try:
            result = float(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"Invalid number: {value}")
        if result <= 0:
            raise argparse.ArgumentTypeError(f"Must be positive: {value}")
        return result

    def worker_count(value):
        try:
            result = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"Invalid worker count: {value}")
        if not (1 <= result <= MAX_WORKERS):
            raise argparse.ArgumentTypeError(f"Worker count must be 1-{MAX_WORKERS}: {value}")
        return result

    # Alternative commands; without one the sync itself runs
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--show-topology', action='store_true',
                       help='Parse the sentinel file, print the pods and exit')
    group.add_argument('--list-directives', action='store_true',
                       help='Print the directives that would be synced and exit')
    group.add_argument('--version', action='version', version=get_version_string())

    # Sync parameters
    parser.add_argument('--config-file', metavar='PATH',
                        help='Sentinel configuration file (default: /etc/redis/sentinel.conf)')
    parser.add_argument('--directives', metavar='LIST',
                        help='Comma-separated directives to sync, replaces the default list')
    parser.add_argument('--pretend', action=argparse.BooleanOptionalAction, default=None,
                        help='Log intended changes without issuing CONFIG SET '
                             '(--no-pretend overrides CONFIGSYNC_PRETENDONLY)')
    parser.add_argument('--workers', type=worker_count, metavar='N',
                        help='Pods synchronized concurrently (default: 1)')
    parser.add_argument('--timeout', type=positive_float, metavar='SECONDS',
                        help='Connect and command timeout per node (default: 5)')
    parser.add_argument('--run-timeout', type=positive_float, metavar='SECONDS',
                        help='Give up on pods still running after this long')

    # Output
    parser.add_argument('--json', action='store_true',
                        help='Print the run summary or topology as JSON')

    # Logging
    parser.add_argument('--log-file', metavar='PATH',
                        help='Also log to this rotating file')
    parser.add_argument('--log-level', type=str.upper, choices=LOG_LEVELS,
                        help='Log level (default: INFO)')
    parser.add_argument('--debug', action='store_true',
                        help='Shortcut for --log-level DEBUG')
    parser.add_argument('--syslog', action=argparse.BooleanOptionalAction, default=None,
                        help='Also log to the local syslog daemon')
    parser.add_argument('--quiet', action='store_true',
                        help='Do not log to the console')

    return parser
