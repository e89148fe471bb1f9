#!/usr/bin/env python3
"""
ConfigSync CLI Module

Provides command-line interface functionality organized by concern:
- parser: Argument parsing setup
- sync_commands: Topology inspection and sync runs
- executor: Command orchestration
"""

__all__ = [
    'create_argument_parser',
    'execute_command',
]

from .parser import create_argument_parser
from .executor import execute_command
