#!/usr/bin/env python3
"""
ConfigSync Topology Loader

Parses a Redis Sentinel configuration file into the pods it monitors.

Only the handful of directives we need are understood:

    bind <host>
    port <port>
    dir <path>
    sentinel monitor <pod> <host> <port> <quorum>
    sentinel auth-pass <pod> <token>

Everything else is logged and ignored. A malformed or unknown line never
aborts the load; only failing to read the file does.

Usage:
    from configsync.topology import load_topology_file

    topology = load_topology_file("/etc/redis/sentinel.conf")
    for name, pod in topology.pods.items():
        print(name, pod.address)
"""

import logging
from typing import Dict, Iterable, List, Optional

from .core.constants import (
    COMMENT_MARKER,
    TOKEN_SEPARATOR,
    IGNORED_SENTINEL_DIRECTIVES,
    LOGGER_NAME,
)
from .core.exceptions import ConfigReadError
from .core.types import LocalSentinelConfig, PodConfig, ParseAnomaly

logger = logging.getLogger(LOGGER_NAME)


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


class TopologyBuilder:
    """
    Accumulates sentinel file lines into a LocalSentinelConfig.

    Pods are deduplicated by primary address (first declaration wins)
    but stored by name, so an address index is kept next to the map.
    """

    def __init__(self):
        self.config = LocalSentinelConfig()
        self._addresses: Dict[str, str] = {}
        self._line_number = 0
        self._line = ""

    def _anomaly(self, reason: str) -> None:
        anomaly = ParseAnomaly(self._line_number, self._line, reason)
        self.config.anomalies.append(anomaly)
        logger.warning(f"Sentinel config {anomaly}")

    def _int_field(self, name: str, value: str) -> int:
        # Invalid numbers load as 0 so one bad line cannot stop a run
        parsed = _parse_int(value)
        if parsed is None:
            self._anomaly(f"invalid {name} {value!r}, using 0")
            return 0
        return parsed

    def feed(self, raw_line: str) -> None:
        """
        Process one physical line of the sentinel file.

        Args:
            raw_line: Line as read, trailing newline included or not
        """
        self._line_number += 1
        line = raw_line.strip()
        self._line = line

        if not line or COMMENT_MARKER in line:
            return

        entries = line.split(TOKEN_SEPARATOR)
        keyword = entries[0]

        if keyword == "sentinel":
            self._handle_sentinel(entries[1:])
        elif keyword == "port":
            if len(entries) < 2:
                self._anomaly("port directive without a value")
                return
            self.config.port = self._int_field("port", entries[1])
        elif keyword == "dir":
            if len(entries) < 2:
                self._anomaly("dir directive without a value")
                return
            self.config.dir = entries[1]
        elif keyword == "bind":
            if len(entries) < 2:
                self._anomaly("bind directive without a value")
                return
            self.config.host = entries[1]
        else:
            self._anomaly("unhandled sentinel directive")

    def _handle_sentinel(self, entries: List[str]) -> None:
        if not entries or not entries[0]:
            self._anomaly("sentinel directive without a sub-directive")
            return

        directive = entries[0]
        if directive == "monitor":
            self._handle_monitor(entries)
        elif directive == "auth-pass":
            self._handle_auth_pass(entries)
        elif directive in IGNORED_SENTINEL_DIRECTIVES:
            return
        else:
            self._anomaly(f"unhandled sentinel sub-directive '{directive}'")

    def _handle_monitor(self, entries: List[str]) -> None:
        if len(entries) < 5:
            self._anomaly("misshapen monitor directive")
            return

        name, ip = entries[1], entries[2]
        if not name or not ip:
            self._anomaly("monitor directive with empty pod name or host")
            return

        port = self._int_field("port", entries[3])
        quorum = self._int_field("quorum", entries[4])
        pod = PodConfig(name=name, ip=ip, port=port, quorum=quorum)

        existing = self._addresses.get(pod.address)
        if existing is not None:
            logger.debug(f"Pod '{name}' at {pod.address} already registered as '{existing}', ignoring")
            return
        if name in self.config.pods:
            self._anomaly(
                f"pod '{name}' already monitored at {self.config.pods[name].address}, ignoring"
            )
            return

        self.config.pods[name] = pod
        self._addresses[pod.address] = name
        logger.debug(f"Loaded pod '{name}' at {pod.address} (quorum {quorum})")

    def _handle_auth_pass(self, entries: List[str]) -> None:
        if len(entries) < 3:
            self._anomaly("misshapen auth-pass directive")
            return

        pod = self.config.pods.get(entries[1])
        if pod is None:
            self._anomaly(f"auth-pass for unknown pod '{entries[1]}'")
            return
        pod.auth_token = entries[2]


def load_topology(lines: Iterable[str]) -> LocalSentinelConfig:
    """
    Build the topology from an iterable of sentinel file lines.

    Args:
        lines: Any line source (open file, list of strings, ...)

    Returns:
        LocalSentinelConfig with every monitored pod
    """
    builder = TopologyBuilder()
    for line in lines:
        builder.feed(line)

    config = builder.config
    logger.debug(
        f"Topology loaded: {len(config.pods)} pods, "
        f"{len(config.anomalies)} ignored lines"
    )
    return config


def load_topology_file(path: str) -> LocalSentinelConfig:
    """
    Load the topology from a sentinel configuration file.

    Args:
        path: Path to sentinel.conf

    Returns:
        LocalSentinelConfig with every monitored pod

    Raises:
        ConfigReadError: If the file cannot be opened or read
    """
    # Undecodable bytes only ever affect their own line
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            config = load_topology(f)
    except OSError as e:
        raise ConfigReadError(path, str(e)) from e

    logger.info(f"Loaded {len(config.pods)} pods from {path}")
    return config
