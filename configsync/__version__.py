#!/usr/bin/env python3
"""
ConfigSync Version Information

The VERSION file at the repository root is the single source of truth.
Packaging reads it into the distribution metadata, and installed copies
read it back from there.

Usage:
    from configsync.__version__ import __version__

    print(f"ConfigSync v{__version__}")
"""
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

try:
    __version__ = version('configsync')
except PackageNotFoundError:
    # Running from a source checkout
    _version_file = Path(__file__).parent.parent / 'VERSION'
    try:
        with open(_version_file, 'r') as f:
            __version__ = f.read().strip()
    except FileNotFoundError:
        __version__ = '0.0.0-dev'

# Package metadata
__description__ = 'Keeps runtime Redis configuration consistent across sentinel-managed replicas'


def get_version_string() -> str:
    """Return the one-line version string printed by --version."""
    return f"ConfigSync v{__version__} - {__description__}"


__all__ = [
    '__version__',
    '__description__',
    'get_version_string',
]
