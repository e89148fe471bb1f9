#!/usr/bin/env python3
"""
ConfigSync Logging Module

Sets up the "configsync" logger: console output, an optional rotating
log file, and an optional syslog sink for cron-driven runs.
"""
import os
import logging
from logging.handlers import RotatingFileHandler, SysLogHandler

from .core.constants import (
    LOGGER_NAME,
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    SYSLOG_FORMAT,
    DEFAULT_SYSLOG_ADDRESS,
)

logger = logging.getLogger(LOGGER_NAME)
formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

_LOG_LEVEL_MAP = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}


def _syslog_address(address):
    # "host:port" for a remote daemon, anything else is a unix socket path
    if ':' in address and not address.startswith('/'):
        host, _, port = address.rpartition(':')
        return host, int(port)
    return address


def setup_logging(console=True, log_file=None, log_level="INFO", max_size=10 * 1024 * 1024,
                  backup_count=5, use_syslog=False, syslog_address=DEFAULT_SYSLOG_ADDRESS):
    """
    Set up logging with optional console, file and syslog output

    Handlers serialize each record, so pods synced from worker threads
    never interleave within a line.

    Args:
        console (bool): Whether to output logs to stderr
        log_file (str): Path to a rotating log file, None to disable
        log_level (str): Log level name
        max_size (int): Maximum size of log file in bytes before rotation
        backup_count (int): Number of backup files to keep
        use_syslog (bool): Whether to also send records to syslog
        syslog_address (str): Unix socket path or "host:port" of the syslog daemon

    Returns:
        logging.Logger: The configured "configsync" logger
    """
    numeric_level = _LOG_LEVEL_MAP.get(str(log_level).upper(), logging.INFO)
    logger.setLevel(numeric_level)

    # Clear any existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file, maxBytes=max_size, backupCount=backup_count)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            print(f"Error setting up file logging: {e}")

    if use_syslog:
        try:
            syslog_handler = SysLogHandler(
                address=_syslog_address(syslog_address),
                facility=SysLogHandler.LOG_DAEMON)
            syslog_handler.setFormatter(logging.Formatter(SYSLOG_FORMAT))
            logger.addHandler(syslog_handler)
        except (OSError, ValueError) as e:
            print(f"Error setting up syslog logging: {e}")

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # Quiet runs must not fall back to the root logger's last-resort handler
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
