#!/usr/bin/env python3
"""
ConfigSync Core Constants

Centralized defaults for the sentinel file format, the directive
allow-list and store connection tuning.

Author: ConfigSync Team
Version: 1.0.0
"""

# =============================================================================
# SENTINEL FILE FORMAT
# =============================================================================

DEFAULT_SENTINEL_CONFIG_FILE = "/etc/redis/sentinel.conf"

# Any line containing this marker is skipped as a whole
COMMENT_MARKER = "#"

# Tokens are separated by exactly one space
TOKEN_SEPARATOR = " "

# Sentinel sub-directives that are recognized but carry nothing we use
IGNORED_SENTINEL_DIRECTIVES = frozenset({
    "config-epoch",
    "leader-epoch",
    "current-epoch",
    "down-after-milliseconds",
    "known-sentinel",
    "known-slave",
    "known-replica",
})


# =============================================================================
# REPLICATION
# =============================================================================

# Role reported by INFO replication on a writable primary
MASTER_ROLE = "master"


# =============================================================================
# DIRECTIVES
# =============================================================================

# Storage-engine tuning and durability directives kept in sync by default
DEFAULT_SYNCABLE_DIRECTIVES = (
    "hash-max-ziplist-entries",
    "hash-max-ziplist-value",
    "list-max-ziplist-entries",
    "list-max-ziplist-value",
    "zset-max-ziplist-entries",
    "zset-max-ziplist-value",
    "save",
    "appendfsync",
    "appendonly",
    "no-appendfsync-on-rewrite",
    "auto-aof-rewrite-percentage",
    "auto-aof-rewrite-min-size",
    "aof-rewrite-incremental-fsync",
)

# Separator of the directive allow-list override
DIRECTIVE_LIST_SEPARATOR = ","


# =============================================================================
# CONNECTION TUNING
# =============================================================================

DEFAULT_SOCKET_TIMEOUT = 5.0
DEFAULT_SOCKET_CONNECT_TIMEOUT = 5.0
DEFAULT_WORKERS = 1
MAX_WORKERS = 64


# =============================================================================
# PROCESS ENVIRONMENT
# =============================================================================

ENV_PREFIX = "CONFIGSYNC_"

ENV_SENTINEL_CONFIG_FILE = ENV_PREFIX + "SENTINELCONFIGFILE"
ENV_SYNCABLE_DIRECTIVE_LIST = ENV_PREFIX + "SYNCABLEDIRECTIVELIST"
ENV_PRETEND_ONLY = ENV_PREFIX + "PRETENDONLY"
ENV_LOG_FILE = ENV_PREFIX + "LOGFILE"
ENV_LOG_LEVEL = ENV_PREFIX + "LOGLEVEL"
ENV_SYSLOG = ENV_PREFIX + "SYSLOG"
ENV_WORKERS = ENV_PREFIX + "WORKERS"
ENV_TIMEOUT = ENV_PREFIX + "TIMEOUT"
ENV_RUN_TIMEOUT = ENV_PREFIX + "RUNTIMEOUT"


# =============================================================================
# LOGGING
# =============================================================================

LOGGER_NAME = "configsync"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
SYSLOG_FORMAT = "configsync: [%(levelname)s] %(message)s"
DEFAULT_SYSLOG_ADDRESS = "/dev/log"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
