#!/usr/bin/env python3
"""
ConfigSync Core Module

Provides shared constants, types, and exceptions used across all ConfigSync modules.

Author: ConfigSync Team
Version: 1.0.0
"""

from .constants import (
    DEFAULT_SENTINEL_CONFIG_FILE,
    DEFAULT_SYNCABLE_DIRECTIVES,
    MASTER_ROLE,
    LOGGER_NAME,
)

from .types import (
    PodConfig,
    LocalSentinelConfig,
    ParseAnomaly,
    ReplicaAddress,
    ReplicationInfo,
    ReplicaSyncResult,
    PodSyncReport,
    RunSummary,
    SyncState,
)

from .exceptions import (
    ConfigSyncError,
    ConfigurationError,
    ConfigReadError,
    ConfigValidationError,
    SyncError,
    ConnectError,
    RoleSafetyError,
    RunTimeoutError,
    SyncCancelledError,
    DirectiveError,
    DirectiveFetchError,
    DirectiveSetError,
)

__all__ = [
    # Constants
    'DEFAULT_SENTINEL_CONFIG_FILE',
    'DEFAULT_SYNCABLE_DIRECTIVES',
    'MASTER_ROLE',
    'LOGGER_NAME',
    # Types
    'PodConfig',
    'LocalSentinelConfig',
    'ParseAnomaly',
    'ReplicaAddress',
    'ReplicationInfo',
    'ReplicaSyncResult',
    'PodSyncReport',
    'RunSummary',
    'SyncState',
    # Exceptions
    'ConfigSyncError',
    'ConfigurationError',
    'ConfigReadError',
    'ConfigValidationError',
    'SyncError',
    'ConnectError',
    'RoleSafetyError',
    'RunTimeoutError',
    'SyncCancelledError',
    'DirectiveError',
    'DirectiveFetchError',
    'DirectiveSetError',
]
