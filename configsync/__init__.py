#!/usr/bin/env python3
"""
ConfigSync - Sentinel Replica Configuration Synchronizer

Reads a Redis Sentinel configuration file, and for every monitored pod
copies an allow-list of runtime configuration directives from the
primary to each of its replicas.
"""

from .__version__ import (
    __version__,
    __description__,
    get_version_string,
)

# Public API
__all__ = [
    '__version__',
    '__description__',
    'get_version_string',
]
