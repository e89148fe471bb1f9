#!/usr/bin/env python3
"""
ConfigSync Command Executor Module

Orchestrates command execution based on parsed arguments:
settings -> logging -> topology -> command.
"""

import logging
from argparse import Namespace
from typing import Mapping, Optional

from . import sync_commands
from ..config import Settings, parse_directive_list
from ..core.constants import LOGGER_NAME
from ..core.exceptions import ConfigurationError, ConfigReadError
from ..logger import setup_logging
from ..topology import load_topology_file

logger = logging.getLogger(LOGGER_NAME)


def build_settings(args: Namespace, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from the environment, then apply command-line overrides

    Args:
        args: Parsed command-line arguments
        environ: Environment mapping, defaults to os.environ

    Returns:
        Validated Settings

    Raises:
        ConfigValidationError: If a setting is invalid
    """
    settings = Settings.from_env(environ)

    directives = parse_directive_list(args.directives) if args.directives else None
    log_level = "DEBUG" if args.debug else args.log_level

    return settings.with_overrides(
        sentinel_config_file=args.config_file,
        directives=directives,
        pretend=args.pretend,
        log_file=args.log_file,
        log_level=log_level,
        syslog=args.syslog,
        workers=args.workers,
        timeout=args.timeout,
        run_timeout=args.run_timeout,
    )


def execute_command(args: Namespace, environ: Optional[Mapping[str, str]] = None,
                    connector=None) -> int:
    """
    Execute the appropriate command based on parsed arguments

    Args:
        args: Parsed command-line arguments
        environ: Environment mapping, defaults to os.environ
        connector: Store connector override, used by tests

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        settings = build_settings(args, environ)
    except ConfigurationError as e:
        # Logging is not configured yet
        setup_logging(console=True)
        logger.critical(str(e))
        return 1

    setup_logging(
        console=not args.quiet,
        log_file=settings.log_file,
        log_level=settings.log_level,
        use_syslog=settings.syslog,
    )
    logger.debug(f"Running with {settings}")

    if args.list_directives:
        return sync_commands.list_directives(settings, as_json=args.json)

    try:
        topology = load_topology_file(settings.sentinel_config_file)
    except ConfigReadError as e:
        logger.warning("=============== LOAD FILE ERROR ===============")
        logger.critical(str(e))
        return 1

    if args.show_topology:
        return sync_commands.show_topology(topology, as_json=args.json)

    return sync_commands.run(settings, topology, as_json=args.json, connector=connector)
