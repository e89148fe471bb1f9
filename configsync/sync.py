#!/usr/bin/env python3
"""
ConfigSync Pod Synchronizer

Copies runtime configuration directives from each pod's primary to its
replicas. Neither replication nor sentinel propagates CONFIG SET changes,
so this runs periodically and converges replicas onto the primary.

Per pod:
    connect to primary -> verify role is master -> snapshot directives
    -> push snapshot to every replica

Failure isolation, smallest unit first:
    - A directive that cannot be read is synced as an empty value
    - A directive that cannot be set is logged and skipped
    - A replica that cannot be reached is logged and skipped
    - A primary that cannot be reached, or is not a master, aborts its pod
    - A failed pod never stops the other pods

Usage:
    from configsync.sync import run_sync
    from configsync.topology import load_topology_file

    topology = load_topology_file("/etc/redis/sentinel.conf")
    summary = run_sync(topology, directives, pretend=True)

Author: ConfigSync Team
Version: 1.0.0
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Iterable, List, Optional

from .client import Connector, RedisConnector, StoreConnection
from .core.constants import MASTER_ROLE, LOGGER_NAME
from .core.exceptions import (
    ConfigSyncError,
    ConnectError,
    DirectiveFetchError,
    DirectiveSetError,
    RoleSafetyError,
    RunTimeoutError,
    SyncCancelledError,
)
from .core.types import (
    DirectiveSnapshot,
    LocalSentinelConfig,
    PodConfig,
    PodSyncReport,
    ReplicaAddress,
    ReplicaSyncResult,
    RunSummary,
    SyncState,
)

logger = logging.getLogger(LOGGER_NAME)


def take_snapshot(primary: StoreConnection, directives: Iterable[str],
                  report: Optional[PodSyncReport] = None) -> DirectiveSnapshot:
    """
    Read every directive from the primary.

    A directive that cannot be read, or that the primary does not know,
    is recorded with an empty value instead of aborting the pod.

    Args:
        primary: Connection to a verified master
        directives: Directive names to read
        report: Optional report collecting fetch failures

    Returns:
        Ordered mapping of directive name to value
    """
    snapshot: DirectiveSnapshot = {}
    for directive in directives:
        try:
            value = primary.get_config_value(directive)
        except DirectiveFetchError as e:
            logger.warning(f"Unable to read '{directive}' from {primary.address}: {e.error}")
            value = None
            if report is not None:
                report.fetch_failures.append(directive)

        if value is None:
            logger.debug(f"No value for '{directive}' on {primary.address}, syncing empty value")
            value = ""
        snapshot[directive] = value
    return snapshot


def push_snapshot(replica: StoreConnection, snapshot: DirectiveSnapshot,
                  result: ReplicaSyncResult,
                  cancel: Optional[threading.Event] = None) -> None:
    """
    Apply a snapshot to one replica, one directive at a time.

    There is no rollback: every CONFIG SET is independent and idempotent,
    so a later run retries whatever failed here. Once cancel is set no
    further directive is sent.
    """
    for directive, value in snapshot.items():
        if cancel is not None and cancel.is_set():
            remaining = len(snapshot) - len(result.applied) - len(result.failed)
            logger.warning(f"Run cancelled, {remaining} directives left unset on {result.address}")
            return
        try:
            replica.set_config_value(directive, value)
            result.applied.append(directive)
        except DirectiveSetError as e:
            logger.warning(f"Err on config set: {e}")
            result.failed.append(directive)


def _sync_replica(pod: PodConfig, primary_address: str, replica: ReplicaAddress,
                  snapshot: DirectiveSnapshot, pretend: bool,
                  connector: Connector,
                  cancel: Optional[threading.Event] = None) -> ReplicaSyncResult:
    address = str(replica)
    result = ReplicaSyncResult(address=address, pretend=pretend)

    if pretend:
        logger.info(f"WOULD Sync: {primary_address} => {address} '{snapshot}'")
        return result

    logger.info(f"Sync: {primary_address} => {address}")
    try:
        connection = connector(replica.ip, replica.port, pod.auth_token)
    except ConnectError as e:
        logger.warning(f"Unable to connect to replica {address} of pod '{pod.name}': {e.error}")
        result.error = str(e)
        return result

    result.connected = True
    with connection:
        push_snapshot(connection, snapshot, result, cancel)

    if result.failed:
        logger.warning(
            f"Replica {address} of pod '{pod.name}': "
            f"{len(result.failed)}/{len(snapshot)} directives failed"
        )
    return result


def _check_cancelled(cancel: Optional[threading.Event], pod: PodConfig,
                     report: PodSyncReport, total: int) -> None:
    if cancel is None or not cancel.is_set():
        return
    applied = sum(len(r.applied) for r in report.replicas)
    raise SyncCancelledError(
        pod.name,
        f"{len(report.replicas)}/{total} replicas attempted, {applied} directives applied"
    )


def synchronize(pod: PodConfig, directives: Iterable[str], pretend: bool = False,
                connector: Optional[Connector] = None,
                cancel: Optional[threading.Event] = None) -> PodSyncReport:
    """
    Synchronize the directives of one pod from its primary to its replicas.

    Args:
        pod: Pod to synchronize
        directives: Directive names to sync
        pretend: Log what would be pushed without touching any replica
        connector: Opens store connections, defaults to RedisConnector()
        cancel: Set by the run driver to stop before the next connection

    Returns:
        PodSyncReport once every replica has been attempted

    Raises:
        ConnectError: If the primary cannot be reached or queried
        RoleSafetyError: If the primary does not report the master role
        SyncCancelledError: If cancel was set before the pod finished
    """
    connector = connector or RedisConnector()
    report = PodSyncReport(pod=pod.name, primary=pod.address)

    if cancel is not None and cancel.is_set():
        raise SyncCancelledError(pod.name, "not started")

    with connector(pod.ip, pod.port, pod.auth_token) as primary:
        report.state = SyncState.CONNECTED

        info = primary.get_replication_info()
        if info.role != MASTER_ROLE:
            raise RoleSafetyError(pod.address, info.role)
        report.state = SyncState.ROLE_VERIFIED

        report.snapshot = take_snapshot(primary, directives, report)
        report.state = SyncState.SNAPSHOT_TAKEN

    if not info.replicas:
        logger.info(f"Pod '{pod.name}' has no replicas attached to {pod.address}")

    report.state = SyncState.PUSHING
    for replica in info.replicas:
        _check_cancelled(cancel, pod, report, len(info.replicas))
        report.replicas.append(
            _sync_replica(pod, pod.address, replica, report.snapshot, pretend,
                          connector, cancel)
        )
    _check_cancelled(cancel, pod, report, len(info.replicas))

    report.state = SyncState.DONE
    return report


def _failed_report(pod: PodConfig, error: Exception) -> PodSyncReport:
    return PodSyncReport(
        pod=pod.name,
        primary=pod.address,
        state=SyncState.FAILED,
        error=str(error),
    )


def sync_pod(pod: PodConfig, directives: Iterable[str], pretend: bool = False,
             connector: Optional[Connector] = None,
             cancel: Optional[threading.Event] = None) -> PodSyncReport:
    """
    Run synchronize() for one pod and turn any failure into a report.

    Never raises; this is the isolation boundary between pods.
    """
    try:
        report = synchronize(pod, directives, pretend=pretend, connector=connector,
                             cancel=cancel)
    except ConfigSyncError as e:
        logger.warning(f"Error synchronizing configs for pod '{pod.name}'. Error='{e}'")
        return _failed_report(pod, e)
    except Exception as e:
        logger.error(f"Unexpected error synchronizing pod '{pod.name}': {e}", exc_info=True)
        return _failed_report(pod, e)

    logger.info(f"Synchronized config for {pod.name}")
    return report


def _run_sequential(pods: List[PodConfig], directives: tuple, pretend: bool,
                    connector: Connector, deadline: Optional[float],
                    run_timeout: Optional[float]) -> List[PodSyncReport]:
    reports = []
    for pod in pods:
        if deadline is not None and time.monotonic() >= deadline:
            error = RunTimeoutError(pod.name, run_timeout)
            logger.warning(f"Error synchronizing configs for pod '{pod.name}'. Error='{error}'")
            reports.append(_failed_report(pod, error))
            continue
        reports.append(sync_pod(pod, directives, pretend, connector))
    return reports


def _run_pooled(pods: List[PodConfig], directives: tuple, pretend: bool,
                connector: Connector, workers: int,
                run_timeout: Optional[float]) -> List[PodSyncReport]:
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="configsync")
    cancel = threading.Event()
    try:
        futures = {
            pod.name: executor.submit(sync_pod, pod, directives, pretend, connector, cancel)
            for pod in pods
        }
        wait(futures.values(), timeout=run_timeout)
        # Stragglers must not write once they are reported failed
        cancel.set()

        reports = []
        for pod in pods:
            future = futures[pod.name]
            if future.done():
                reports.append(future.result())
            else:
                error = RunTimeoutError(pod.name, run_timeout)
                logger.warning(f"Error synchronizing configs for pod '{pod.name}'. Error='{error}'")
                reports.append(_failed_report(pod, error))
        return reports
    finally:
        # A command already on the wire ends within its socket timeout;
        # interpreter exit joins the workers after that
        cancel.set()
        executor.shutdown(wait=False, cancel_futures=True)


def run_sync(topology: LocalSentinelConfig, directives: Iterable[str],
             pretend: bool = False, connector: Optional[Connector] = None,
             workers: int = 1, run_timeout: Optional[float] = None) -> RunSummary:
    """
    Synchronize every pod of the topology.

    Args:
        topology: Loaded sentinel topology (read-only)
        directives: Directive names to sync
        pretend: Dry-run, no CONFIG SET is issued
        connector: Opens store connections, defaults to RedisConnector()
        workers: Pods processed concurrently, 1 for sequential
        run_timeout: Optional budget in seconds for the whole run. Unfinished
            pods are reported failed and their workers stop writing

    Returns:
        RunSummary with one report per pod, in topology order
    """
    connector = connector or RedisConnector()
    directives = tuple(directives)
    pods = list(topology.pods.values())
    started = time.monotonic()

    if pretend:
        logger.info("Pretend mode: no configuration will be changed")
    logger.debug(f"Syncing {len(pods)} pods with {workers} workers: {', '.join(directives)}")

    if workers > 1 and len(pods) > 1:
        reports = _run_pooled(pods, directives, pretend, connector,
                              min(workers, len(pods)), run_timeout)
    else:
        deadline = started + run_timeout if run_timeout else None
        reports = _run_sequential(pods, directives, pretend, connector, deadline, run_timeout)

    summary = RunSummary(reports=reports, pretend=pretend,
                         elapsed=time.monotonic() - started)
    logger.info(
        f"Run complete: {summary.pods_synced} pods synced, {summary.pods_failed} failed, "
        f"{summary.replicas_skipped} replicas skipped, "
        f"{summary.directives_failed} directive updates failed"
    )
    return summary
