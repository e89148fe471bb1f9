#!/usr/bin/env python3
"""
ConfigSync Configuration Module

Process settings: which sentinel file to read, which directives to sync,
whether to pretend, and how to log. Values come from CONFIGSYNC_*
environment variables and can be overridden from the command line.

Author: ConfigSync Team
Version: 1.0.0
"""

import os
import logging
from dataclasses import dataclass, asdict, field, replace
from typing import Optional, Dict, Any, Mapping, Tuple

from .core.constants import (
    DEFAULT_SENTINEL_CONFIG_FILE,
    DEFAULT_SYNCABLE_DIRECTIVES,
    DEFAULT_SOCKET_TIMEOUT,
    DEFAULT_WORKERS,
    DIRECTIVE_LIST_SEPARATOR,
    ENV_SENTINEL_CONFIG_FILE,
    ENV_SYNCABLE_DIRECTIVE_LIST,
    ENV_PRETEND_ONLY,
    ENV_LOG_FILE,
    ENV_LOG_LEVEL,
    ENV_SYSLOG,
    ENV_WORKERS,
    ENV_TIMEOUT,
    ENV_RUN_TIMEOUT,
    LOGGER_NAME,
    LOG_LEVELS,
    MAX_WORKERS,
)
from .core.exceptions import ConfigValidationError

logger = logging.getLogger(LOGGER_NAME)

_TRUE_VALUES = frozenset({'1', 't', 'true', 'y', 'yes', 'on'})
_FALSE_VALUES = frozenset({'0', 'f', 'false', 'n', 'no', 'off'})


def parse_bool(field_name: str, value: str) -> bool:
    """
    Parse a boolean setting.

    Raises:
        ConfigValidationError: If the value is not a recognized boolean
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigValidationError(field_name, value, "expected a boolean such as true/false")


def _parse_number(field_name: str, value: str, kind=int):
    try:
        return kind(value.strip())
    except ValueError:
        raise ConfigValidationError(field_name, value, f"expected {kind.__name__}") from None


def parse_directive_list(value: str) -> Tuple[str, ...]:
    """
    Parse a comma-separated directive allow-list.

    Whitespace around names is dropped, empty entries are skipped and
    duplicates keep their first position.

    Example:
        >>> parse_directive_list("save, appendonly,,save")
        ('save', 'appendonly')
    """
    directives = []
    for item in value.split(DIRECTIVE_LIST_SEPARATOR):
        name = item.strip()
        if name and name not in directives:
            directives.append(name)
    return tuple(directives)


@dataclass
class Settings:
    """
    ConfigSync process settings.

    Attributes:
        sentinel_config_file: Path of the sentinel configuration file
        directives: Directive names to sync, a full replacement of the defaults
        pretend: Log intended changes without issuing CONFIG SET
        log_file: Optional rotating log file
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        syslog: Also log to the local syslog daemon
        workers: Pods synchronized concurrently
        timeout: Connect and per-command socket timeout in seconds
        run_timeout: Optional budget for the whole run in seconds
    """
    sentinel_config_file: str = DEFAULT_SENTINEL_CONFIG_FILE
    directives: Tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_SYNCABLE_DIRECTIVES))
    pretend: bool = False
    log_file: Optional[str] = None
    log_level: str = "INFO"
    syslog: bool = False
    workers: int = DEFAULT_WORKERS
    timeout: float = DEFAULT_SOCKET_TIMEOUT
    run_timeout: Optional[float] = None

    def __post_init__(self):
        """Normalize and validate settings after initialization."""
        self.directives = tuple(self.directives)
        self.log_level = str(self.log_level).upper()
        self._validate()

    def _validate(self):
        if not self.sentinel_config_file:
            raise ConfigValidationError("sentinel_config_file", self.sentinel_config_file,
                                        "must not be empty")
        if not self.directives:
            raise ConfigValidationError("directives", self.directives,
                                        "at least one directive is required")
        if self.log_level not in LOG_LEVELS:
            raise ConfigValidationError("log_level", self.log_level,
                                        f"must be one of {', '.join(LOG_LEVELS)}")
        if not (1 <= self.workers <= MAX_WORKERS):
            raise ConfigValidationError("workers", self.workers, f"must be 1-{MAX_WORKERS}")
        if self.timeout <= 0:
            raise ConfigValidationError("timeout", self.timeout, "must be positive")
        if self.run_timeout is not None and self.run_timeout <= 0:
            raise ConfigValidationError("run_timeout", self.run_timeout, "must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """
        Build settings from CONFIGSYNC_* environment variables.

        Unset or empty variables keep their defaults.

        Args:
            environ: Mapping to read, defaults to os.environ

        Raises:
            ConfigValidationError: If a variable holds an invalid value
        """
        if environ is None:
            environ = os.environ

        values: Dict[str, Any] = {}

        def get(name: str) -> str:
            return environ.get(name, "").strip()

        if get(ENV_SENTINEL_CONFIG_FILE):
            values['sentinel_config_file'] = get(ENV_SENTINEL_CONFIG_FILE)
        if get(ENV_SYNCABLE_DIRECTIVE_LIST):
            values['directives'] = parse_directive_list(get(ENV_SYNCABLE_DIRECTIVE_LIST))
        if get(ENV_PRETEND_ONLY):
            values['pretend'] = parse_bool(ENV_PRETEND_ONLY, get(ENV_PRETEND_ONLY))
        if get(ENV_LOG_FILE):
            values['log_file'] = get(ENV_LOG_FILE)
        if get(ENV_LOG_LEVEL):
            values['log_level'] = get(ENV_LOG_LEVEL)
        if get(ENV_SYSLOG):
            values['syslog'] = parse_bool(ENV_SYSLOG, get(ENV_SYSLOG))
        if get(ENV_WORKERS):
            values['workers'] = _parse_number(ENV_WORKERS, get(ENV_WORKERS))
        if get(ENV_TIMEOUT):
            values['timeout'] = _parse_number(ENV_TIMEOUT, get(ENV_TIMEOUT), float)
        if get(ENV_RUN_TIMEOUT):
            values['run_timeout'] = _parse_number(ENV_RUN_TIMEOUT, get(ENV_RUN_TIMEOUT), float)

        return cls(**values)

    def with_overrides(self, **overrides) -> 'Settings':
        """
        Return a copy with the given fields replaced.

        None values are skipped so unset command-line flags keep the
        environment value.
        """
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data['directives'] = list(self.directives)
        return data

    def __str__(self) -> str:
        return (
            f"Settings(file={self.sentinel_config_file}, directives={len(self.directives)}, "
            f"pretend={self.pretend}, workers={self.workers}, timeout={self.timeout}s)"
        )
