#!/usr/bin/env python3
"""
ConfigSync Core Exceptions

Custom exception hierarchy for ConfigSync.
Failures are grouped by the granularity they abort: configuration errors
stop the whole run, sync errors stop a pod, directive errors only skip
one directive on one node.

Author: ConfigSync Team
Version: 1.0.0
"""

from typing import Optional, Any


class ConfigSyncError(Exception):
    """
    Base exception for all ConfigSync errors.

    All custom exceptions in ConfigSync inherit from this class,
    allowing for catch-all error handling when needed.
    """

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================

class ConfigurationError(ConfigSyncError):
    """
    Exception for configuration-related errors.

    Raised when the sentinel file cannot be read or the process
    settings contain incorrect values. Always fatal to the run.
    """
    pass


class ConfigReadError(ConfigurationError):
    """Raised when the sentinel configuration file cannot be opened or read."""

    def __init__(self, file_path: str, error: str):
        super().__init__(
            "Failed to read sentinel configuration file",
            details=f"{file_path}: {error}"
        )
        self.file_path = file_path
        self.error = error


class ConfigValidationError(ConfigurationError):
    """Raised when a process setting is invalid."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration value for '{field}'",
            details=f"value={value!r}, reason={reason}"
        )
        self.field = field
        self.value = value
        self.reason = reason


# =============================================================================
# SYNCHRONIZATION EXCEPTIONS
# =============================================================================

class SyncError(ConfigSyncError):
    """
    Exception for synchronization errors.

    Raised while talking to the nodes of a pod.
    """
    pass


class ConnectError(SyncError):
    """Raised when a node cannot be reached or does not answer a query."""

    def __init__(self, address: str, error: str):
        super().__init__(
            f"Cannot communicate with {address}",
            details=error
        )
        self.address = address
        self.error = error


class RoleSafetyError(SyncError):
    """Raised when the listed primary does not report the master role."""

    def __init__(self, address: str, role: str):
        super().__init__(
            f"Listed master {address} does not have role 'master'. Aborting for safety",
            details=f"role={role!r}"
        )
        self.address = address
        self.role = role


class RunTimeoutError(SyncError):
    """Raised for a pod that did not finish inside the run time budget."""

    def __init__(self, pod: str, timeout: float):
        super().__init__(
            f"Pod '{pod}' did not finish in time",
            details=f"run_timeout={timeout}s"
        )
        self.pod = pod
        self.timeout = timeout


class SyncCancelledError(SyncError):
    """Raised inside a worker whose pod was abandoned by the run driver."""

    def __init__(self, pod: str, details: str):
        super().__init__(f"Sync of pod '{pod}' cancelled", details=details)
        self.pod = pod


class DirectiveError(SyncError):
    """
    Exception for a single directive on a single node.

    Never aborts a pod: the directive is logged and skipped.
    """

    def __init__(self, message: str, address: str, directive: str, error: str):
        super().__init__(message, details=f"{address} {directive}: {error}")
        self.address = address
        self.directive = directive
        self.error = error


class DirectiveFetchError(DirectiveError):
    """Raised when CONFIG GET fails for a directive."""

    def __init__(self, address: str, directive: str, error: str):
        super().__init__("Config get failed", address, directive, error)


class DirectiveSetError(DirectiveError):
    """Raised when CONFIG SET fails for a directive."""

    def __init__(self, address: str, directive: str, error: str):
        super().__init__("Config set failed", address, directive, error)
