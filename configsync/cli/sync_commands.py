#!/usr/bin/env python3
"""
ConfigSync Sync CLI Commands

Commands that inspect the topology or run a sync, and print the result.

Author: ConfigSync Team
Version: 1.0.0
"""

import json
import logging

from ..client import RedisConnector
from ..config import Settings
from ..core.constants import LOGGER_NAME
from ..core.types import LocalSentinelConfig, RunSummary
from ..sync import run_sync

logger = logging.getLogger(LOGGER_NAME)


def list_directives(settings: Settings, as_json: bool = False) -> int:
    """
    Print the directives a run would sync.

    Returns:
        Exit code
    """
    if as_json:
        print(json.dumps(list(settings.directives), indent=2))
    else:
        for directive in settings.directives:
            print(directive)
    return 0


def show_topology(topology: LocalSentinelConfig, as_json: bool = False) -> int:
    """
    Print the pods parsed from the sentinel file.

    Returns:
        Exit code
    """
    if as_json:
        print(json.dumps(topology.to_dict(), indent=2))
        return 0

    print("=" * 70)
    print("Sentinel Topology")
    print("=" * 70)
    print(f"  Sentinel: {topology.host or '*'}:{topology.port}  dir={topology.dir or '-'}")
    print(f"\nPods ({len(topology.pods)}):")
    for name in sorted(topology.pods):
        pod = topology.pods[name]
        auth = "auth" if pod.auth_token else "no auth"
        print(f"  • {name:<24} {pod.address:<22} quorum={pod.quorum}  {auth}")

    if topology.anomalies:
        print(f"\nIgnored lines ({len(topology.anomalies)}):")
        for anomaly in topology.anomalies:
            print(f"  - {anomaly}")
    print("=" * 70)
    return 0


def print_summary(summary: RunSummary, as_json: bool = False) -> None:
    """Print a per-pod result table, or the summary as JSON."""
    if as_json:
        print(json.dumps(summary.to_dict(), indent=2))
        return

    mode = " (pretend)" if summary.pretend else ""
    print("=" * 70)
    print(f"Config Sync Summary{mode}")
    print("=" * 70)
    for report in summary.reports:
        if report.succeeded:
            print(f"  ✓ {report.pod:<24} {report.primary:<22} {len(report.replicas)} replicas")
        else:
            print(f"  ✗ {report.pod:<24} {report.primary:<22} {report.error}")
    print(f"\nPods synced: {summary.pods_synced}  failed: {summary.pods_failed}")
    print(f"Replicas synced: {summary.replicas_synced}  skipped: {summary.replicas_skipped}")
    print(f"Directive updates failed: {summary.directives_failed}")
    print(f"Elapsed: {summary.elapsed:.2f}s")
    print("=" * 70)


def run(settings: Settings, topology: LocalSentinelConfig, as_json: bool = False,
        connector=None) -> int:
    """
    Synchronize every pod and print the summary.

    Per-pod failures are reported but do not change the exit code.

    Returns:
        Exit code
    """
    if connector is None:
        connector = RedisConnector(socket_timeout=settings.timeout,
                                   socket_connect_timeout=settings.timeout)

    summary = run_sync(
        topology,
        settings.directives,
        pretend=settings.pretend,
        connector=connector,
        workers=settings.workers,
        run_timeout=settings.run_timeout,
    )
    print_summary(summary, as_json=as_json)
    return 0
