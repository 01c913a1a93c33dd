"""Concurrent TCP reachability probing.

Each scanned target gets its own worker thread that attempts a single
TCP connection with a deadline. The aggregate call joins all workers
but never waits much longer than one timeout period: probes that are
still running at the deadline (for example stuck in name resolution,
which socket timeouts do not cover) are reported Offline and abandoned.

Abandoned workers are not killed. concurrent.futures still joins them
at interpreter exit, so a lookup blocked in the resolver can hold up
process exit until the OS call returns.
"""

from __future__ import annotations

import concurrent.futures as cf
import socket
import time
from collections.abc import Iterable

from sshhub.models.target import DEFAULT_PORT, ProbeResult, Target
from sshhub.utils.logging import get_logger

logger = get_logger("prober")

DEFAULT_TIMEOUT = 0.6

# Extra time allowed for thread start-up and result collection.
JOIN_SLACK = 0.05


def probe(host: str, port: int = DEFAULT_PORT, timeout: float = DEFAULT_TIMEOUT) -> ProbeResult:
    """Check whether a TCP connection to host:port can be opened.

    Args:
        host: Hostname or IP address.
        port: TCP port.
        timeout: Connection timeout in seconds.

    Returns:
        ONLINE if the connection succeeded, OFFLINE on timeout, refusal or
        an unreachable network, ERROR on name resolution and other failures.
    """
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return ProbeResult.ONLINE
    except (TimeoutError, socket.timeout):
        logger.debug(f"Probe {host}:{port} timed out after {timeout}s")
        return ProbeResult.OFFLINE
    except socket.gaierror as e:
        logger.debug(f"Probe {host}:{port} could not resolve host: {e}")
        return ProbeResult.ERROR
    except OSError as e:
        logger.debug(f"Probe {host}:{port} failed: {e}")
        return ProbeResult.OFFLINE
    except Exception as e:
        logger.debug(f"Probe {host}:{port} raised unexpected error: {e}")
        return ProbeResult.ERROR


class Prober:
    """Probes many targets at once.

    Args:
        timeout: Per-probe timeout in seconds; also bounds probe_all.

    Example:
        >>> prober = Prober(timeout=0.6)
        >>> results = prober.probe_all(registry.list())
        >>> results[1]
        <ProbeResult.ONLINE: 'Online'>
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        if timeout <= 0:
            raise ValueError(f"Probe timeout must be positive, got {timeout}")
        self.timeout = timeout

    def probe(self, target: Target) -> ProbeResult:
        """Probe a single target, honouring its scan flag."""
        if not target.scan_online:
            return ProbeResult.NOT_SCANNED
        return probe(target.host, target.port, self.timeout)

    def probe_all(self, targets: Iterable[Target]) -> dict[int, ProbeResult]:
        """Probe all targets concurrently.

        Targets with scan_online disabled are reported NOT_SCANNED without
        any network I/O.

        Args:
            targets: Targets to check.

        Returns:
            Mapping of target id to probe result.
        """
        results: dict[int, ProbeResult] = {}
        to_scan: list[Target] = []
        for target in targets:
            if target.scan_online:
                to_scan.append(target)
            else:
                results[target.id] = ProbeResult.NOT_SCANNED

        if not to_scan:
            return results

        started = time.monotonic()
        pool = cf.ThreadPoolExecutor(
            max_workers=len(to_scan), thread_name_prefix="sshhub-probe"
        )
        try:
            futures = {
                pool.submit(probe, t.host, t.port, self.timeout): t for t in to_scan
            }
            done, not_done = cf.wait(futures, timeout=self.timeout + JOIN_SLACK)

            for future in done:
                target = futures[future]
                try:
                    results[target.id] = future.result()
                except Exception as e:
                    logger.debug(f"Probe worker for target {target.id} failed: {e}")
                    results[target.id] = ProbeResult.ERROR

            for future in not_done:
                target = futures[future]
                logger.debug(f"Probe of target {target.id} missed the deadline")
                results[target.id] = ProbeResult.OFFLINE
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        logger.debug(
            f"Probed {len(to_scan)} target(s) in {time.monotonic() - started:.3f}s"
        )
        return results
