#!/usr/bin/env python3
"""
ConfigSync - Main Module

Entry point for the configsync command. Designed to run to completion
once per invocation, typically from cron or a systemd timer.

Architecture:
    - cli/parser.py: Argument parsing setup
    - cli/sync_commands.py: Topology inspection and sync runs
    - cli/executor.py: Command orchestration
    - topology.py: Sentinel config file parsing
    - sync.py: Per-pod synchronization
"""

import sys
import logging
import traceback

from .cli import create_argument_parser, execute_command
from .core.constants import LOGGER_NAME


def main(argv=None) -> int:
    """
    Main entry point with clean separation of concerns

    Args:
        argv: Argument list, defaults to sys.argv[1:]

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        parser = create_argument_parser()
        args = parser.parse_args(argv)
        return execute_command(args)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 1
    except Exception as e:
        logging.getLogger(LOGGER_NAME).critical(f"Unexpected error: {e}")
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
