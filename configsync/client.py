#!/usr/bin/env python3
"""
ConfigSync Store Client

Thin wrapper around redis-py exposing only the three commands the
synchronizer needs: INFO replication, CONFIG GET and CONFIG SET.

Every redis-py error is translated into a ConfigSync exception so the
synchronizer can decide what a failure aborts:
- connecting or INFO failing -> ConnectError
- CONFIG GET failing -> DirectiveFetchError
- CONFIG SET failing -> DirectiveSetError

Author: ConfigSync Team
Version: 1.0.0
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

import redis

from .core.constants import (
    DEFAULT_SOCKET_TIMEOUT,
    DEFAULT_SOCKET_CONNECT_TIMEOUT,
    LOGGER_NAME,
)
from .core.exceptions import ConnectError, DirectiveFetchError, DirectiveSetError
from .core.types import ReplicaAddress, ReplicationInfo

logger = logging.getLogger(LOGGER_NAME)

# INFO replication lists replicas as slave0, slave1, ...
_REPLICA_KEY = re.compile(r'^slave(\d+)$')


class StoreConnection(ABC):
    """
    An open connection to one store node.

    Usable as a context manager; leaving the block closes the connection.
    """

    address: str = ""

    @abstractmethod
    def get_replication_info(self) -> ReplicationInfo:
        """Return the node's role and the replicas attached to it."""

    @abstractmethod
    def get_config_value(self, name: str) -> Optional[str]:
        """Return a directive's value, or None if the node does not know it."""

    @abstractmethod
    def set_config_value(self, name: str, value: str) -> None:
        """Apply a directive value at runtime."""

    def close(self) -> None:
        pass

    def __enter__(self) -> 'StoreConnection':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


# Callable opening a connection: (host, port, password) -> StoreConnection
Connector = Callable[[str, int, Optional[str]], StoreConnection]


def parse_replicas(info: Dict[str, Any]) -> List[ReplicaAddress]:
    """
    Extract replica addresses from a parsed INFO replication reply.

    redis-py turns ``slave0:ip=10.0.0.2,port=6379,state=online`` into a
    dict; very old servers report ``slave0:10.0.0.2,6379,online`` which
    stays a plain string.

    Args:
        info: Reply of ``Redis.info("replication")``

    Returns:
        Replica addresses ordered by their slave index
    """
    indexed = []
    for key, value in info.items():
        match = _REPLICA_KEY.match(str(key))
        if not match:
            continue

        if isinstance(value, dict):
            ip = value.get('ip')
            port = value.get('port')
        else:
            parts = str(value).split(',')
            ip = parts[0] if parts else None
            port = parts[1] if len(parts) > 1 else None

        if not ip:
            logger.warning(f"Ignoring replica entry {key} without an address")
            continue
        try:
            replica = ReplicaAddress(ip=str(ip), port=int(port))
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unparseable replica entry {key}={value!r}")
            continue
        indexed.append((int(match.group(1)), replica))

    return [replica for _, replica in sorted(indexed, key=lambda item: item[0])]


class RedisConnection(StoreConnection):
    """
    StoreConnection backed by a redis-py client.
    """

    def __init__(self, client: 'redis.Redis', address: str):
        """
        Args:
            client: Connected redis-py client
            address: "host:port" used in log and error messages
        """
        self._client = client
        self.address = address

    def get_replication_info(self) -> ReplicationInfo:
        try:
            info = self._client.info("replication")
        except redis.RedisError as e:
            raise ConnectError(self.address, f"INFO replication failed: {e}") from e

        role = str(info.get('role', ''))
        return ReplicationInfo(role=role, replicas=parse_replicas(info))

    def get_config_value(self, name: str) -> Optional[str]:
        try:
            reply = self._client.config_get(name)
        except redis.RedisError as e:
            raise DirectiveFetchError(self.address, name, str(e)) from e

        if not reply:
            return None
        if name in reply:
            return str(reply[name])
        # Renamed directives may come back under their canonical name
        if len(reply) == 1:
            return str(next(iter(reply.values())))
        return None

    def set_config_value(self, name: str, value: str) -> None:
        try:
            self._client.config_set(name, value)
        except redis.RedisError as e:
            raise DirectiveSetError(self.address, name, str(e)) from e

    def close(self) -> None:
        try:
            self._client.close()
        except redis.RedisError as e:
            logger.debug(f"Error closing connection to {self.address}: {e}")


class RedisConnector:
    """
    Opens authenticated RedisConnections with bounded timeouts.

    A slow or hung node costs at most the connect timeout plus the
    socket timeout per command, so it cannot stall other pods.
    """

    def __init__(self, socket_timeout: float = DEFAULT_SOCKET_TIMEOUT,
                 socket_connect_timeout: float = DEFAULT_SOCKET_CONNECT_TIMEOUT):
        self.socket_timeout = socket_timeout
        self.socket_connect_timeout = socket_connect_timeout

    def __call__(self, host: str, port: int, password: Optional[str] = None) -> StoreConnection:
        """
        Connect to a node and verify it answers PING.

        Args:
            host: Node host or IP
            port: Node port
            password: Shared pod token, empty or None for no AUTH

        Returns:
            Connected StoreConnection

        Raises:
            ConnectError: If the node is unreachable or rejects the token
        """
        address = f"{host}:{port}"
        client = redis.Redis(
            host=host,
            port=port,
            password=password or None,
            socket_timeout=self.socket_timeout,
            socket_connect_timeout=self.socket_connect_timeout,
            decode_responses=True,
        )

        try:
            client.ping()
        except redis.RedisError as e:
            client.close()
            raise ConnectError(address, str(e)) from e

        logger.debug(f"Connected to {address}")
        return RedisConnection(client, address)
