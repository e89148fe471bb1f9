#!/usr/bin/env python3
"""
ConfigSync Core Types

Type definitions and data structures used throughout ConfigSync.
Uses dataclasses for the topology model and for the per-pod and
per-run sync reports.

Author: ConfigSync Team
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any
from enum import Enum


# =============================================================================
# TYPE ALIASES
# =============================================================================

# Directive name -> value read from the primary
DirectiveSnapshot = Dict[str, str]


# =============================================================================
# TOPOLOGY STRUCTURES
# =============================================================================

@dataclass
class PodConfig:
    """
    One monitored replication group as declared in the sentinel file.

    The primary address is the one last written by the sentinel and
    is not necessarily the current truth; the synchronizer checks the
    reported role before trusting it.
    """
    name: str
    ip: str
    port: int
    quorum: int = 0
    auth_token: str = ""

    @property
    def address(self) -> str:
        return f"{self.ip}:{self.port}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, never exposing the token itself."""
        return {
            'name': self.name,
            'ip': self.ip,
            'port': self.port,
            'quorum': self.quorum,
            'auth': bool(self.auth_token),
        }


@dataclass(frozen=True)
class ParseAnomaly:
    """
    A sentinel file line that was ignored or only partially understood.
    """
    line_number: int
    line: str
    reason: str

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.reason}: {self.line!r}"


@dataclass
class LocalSentinelConfig:
    """
    The sentinel we are running next to, plus every pod it monitors.

    Built once per run by the topology loader and treated as read-only
    afterwards.
    """
    host: str = ""
    port: int = 0
    dir: str = ""
    pods: Dict[str, PodConfig] = field(default_factory=dict)
    anomalies: List[ParseAnomaly] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'host': self.host,
            'port': self.port,
            'dir': self.dir,
            'pods': {name: pod.to_dict() for name, pod in self.pods.items()},
            'anomalies': [str(a) for a in self.anomalies],
        }


# =============================================================================
# REPLICATION STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class ReplicaAddress:
    """Replica as reported by its primary."""
    ip: str
    port: int

    def __str__(self) -> str:
        return f"{self.ip}:{self.port}"


@dataclass
class ReplicationInfo:
    """Subset of INFO replication we rely on."""
    role: str
    replicas: List[ReplicaAddress] = field(default_factory=list)


# =============================================================================
# SYNC RESULT STRUCTURES
# =============================================================================

class SyncState(Enum):
    """Progress of a single pod through a sync run."""
    UNVISITED = "unvisited"
    CONNECTED = "connected"
    ROLE_VERIFIED = "role_verified"
    SNAPSHOT_TAKEN = "snapshot_taken"
    PUSHING = "pushing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ReplicaSyncResult:
    """
    Outcome of pushing a snapshot to one replica.
    """
    address: str
    connected: bool = False
    pretend: bool = False
    applied: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return not self.pretend and not self.connected

    def to_dict(self) -> Dict[str, Any]:
        return {
            'address': self.address,
            'connected': self.connected,
            'pretend': self.pretend,
            'applied': list(self.applied),
            'failed': list(self.failed),
            'error': self.error,
        }


@dataclass
class PodSyncReport:
    """
    Outcome of one pod sync. A pod counts as synced once every replica
    has been attempted, even if some replicas or directives failed.
    """
    pod: str
    primary: str
    state: SyncState = SyncState.UNVISITED
    snapshot: DirectiveSnapshot = field(default_factory=dict)
    replicas: List[ReplicaSyncResult] = field(default_factory=list)
    fetch_failures: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state == SyncState.DONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'pod': self.pod,
            'primary': self.primary,
            'state': self.state.value,
            'snapshot': dict(self.snapshot),
            'replicas': [r.to_dict() for r in self.replicas],
            'fetch_failures': list(self.fetch_failures),
            'error': self.error,
        }


@dataclass
class RunSummary:
    """
    Aggregated result of a whole run across pods.
    """
    reports: List[PodSyncReport] = field(default_factory=list)
    pretend: bool = False
    elapsed: float = 0.0

    @property
    def pods_synced(self) -> int:
        return sum(1 for r in self.reports if r.succeeded)

    @property
    def pods_failed(self) -> int:
        return sum(1 for r in self.reports if not r.succeeded)

    @property
    def replicas_synced(self) -> int:
        return sum(1 for r in self.reports for rep in r.replicas if rep.connected)

    @property
    def replicas_skipped(self) -> int:
        return sum(1 for r in self.reports for rep in r.replicas if rep.skipped)

    @property
    def directives_failed(self) -> int:
        return sum(len(rep.failed) for r in self.reports for rep in r.replicas)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'pretend': self.pretend,
            'elapsed': round(self.elapsed, 3),
            'pods_synced': self.pods_synced,
            'pods_failed': self.pods_failed,
            'replicas_synced': self.replicas_synced,
            'replicas_skipped': self.replicas_skipped,
            'directives_failed': self.directives_failed,
            'pods': [r.to_dict() for r in self.reports],
        }
