"""Tests for online status probing."""

from __future__ import annotations

import socket
import time
from collections.abc import Generator
from unittest.mock import patch

import pytest

from sshhub.core import prober as prober_module
from sshhub.core.prober import Prober, probe
from sshhub.models.target import ProbeResult, Target


@pytest.fixture
def listening_port() -> Generator[int, None, None]:
    """Open a local listening socket and yield its port."""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(8)
    try:
        yield server.getsockname()[1]
    finally:
        server.close()


@pytest.fixture
def closed_port() -> int:
    """Find a local port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


def make_target(target_id: int, port: int, scan: bool = True) -> Target:
    return Target(
        id=target_id,
        name=f"t{target_id}",
        host="127.0.0.1",
        port=port,
        username="u",
        scan_online=scan,
    )


class TestProbe:
    """Tests for the single probe function."""

    def test_online(self, listening_port: int) -> None:
        """Test a port that accepts connections."""
        assert probe("127.0.0.1", listening_port, timeout=0.6) is ProbeResult.ONLINE

    def test_closed_port_is_offline_within_timeout(self, closed_port: int) -> None:
        """Test that a refused connection is Offline and fast."""
        started = time.monotonic()
        assert probe("127.0.0.1", closed_port, timeout=0.6) is ProbeResult.OFFLINE
        assert time.monotonic() - started < 0.7

    def test_timeout_is_offline(self) -> None:
        """Test timeout classification."""
        with patch("socket.create_connection", side_effect=TimeoutError("timed out")):
            assert probe("10.255.255.1", 22, timeout=0.1) is ProbeResult.OFFLINE

    def test_unreachable_is_offline(self) -> None:
        """Test network unreachable classification."""
        with patch("socket.create_connection", side_effect=OSError(101, "Network is unreachable")):
            assert probe("10.255.255.1", 22) is ProbeResult.OFFLINE

    def test_name_resolution_is_error(self) -> None:
        """Test DNS failure classification."""
        error = socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        with patch("socket.create_connection", side_effect=error):
            assert probe("no-such-host.invalid", 22) is ProbeResult.ERROR

    def test_unexpected_failure_is_error(self) -> None:
        """Test that other exceptions are classified, not raised."""
        with patch("socket.create_connection", side_effect=ValueError("bad")):
            assert probe("host", 22) is ProbeResult.ERROR


class TestProber:
    """Tests for Prober.probe_all."""

    def test_invalid_timeout(self) -> None:
        """Test that the timeout must be positive."""
        with pytest.raises(ValueError):
            Prober(timeout=0)

    def test_unscanned_targets_skip_network(self) -> None:
        """Test that scan_online=False never produces a network result."""
        targets = [make_target(1, 22, scan=False), make_target(2, 2222, scan=False)]
        with patch("socket.create_connection") as mock_connect:
            results = Prober().probe_all(targets)

        mock_connect.assert_not_called()
        assert results == {1: ProbeResult.NOT_SCANNED, 2: ProbeResult.NOT_SCANNED}

    def test_mixed_targets(self, listening_port: int, closed_port: int) -> None:
        """Test a real scan over online, offline and skipped targets."""
        targets = [
            make_target(1, listening_port),
            make_target(2, closed_port),
            make_target(3, listening_port, scan=False),
        ]
        results = Prober(timeout=0.6).probe_all(targets)
        assert results == {
            1: ProbeResult.ONLINE,
            2: ProbeResult.OFFLINE,
            3: ProbeResult.NOT_SCANNED,
        }

    def test_probes_run_concurrently(self) -> None:
        """Test that many slow probes finish in about one timeout period."""

        def slow_probe(host: str, port: int, timeout: float) -> ProbeResult:
            time.sleep(0.15)
            return ProbeResult.ONLINE

        targets = [make_target(i, 22) for i in range(1, 21)]
        with patch.object(prober_module, "probe", side_effect=slow_probe):
            started = time.monotonic()
            results = Prober(timeout=0.3).probe_all(targets)
            elapsed = time.monotonic() - started

        assert set(results.values()) == {ProbeResult.ONLINE}
        assert len(results) == 20
        assert elapsed < 0.6

    def test_stuck_probe_reported_offline(self) -> None:
        """Test that a probe outliving the deadline does not block the join."""

        def stuck_probe(host: str, port: int, timeout: float) -> ProbeResult:
            time.sleep(1.0)
            return ProbeResult.ONLINE

        with patch.object(prober_module, "probe", side_effect=stuck_probe):
            started = time.monotonic()
            results = Prober(timeout=0.1).probe_all([make_target(1, 22)])
            elapsed = time.monotonic() - started

        assert results == {1: ProbeResult.OFFLINE}
        assert elapsed < 0.5

    def test_single_target_probe_honours_flag(self, listening_port: int) -> None:
        """Test Prober.probe for one target."""
        prober = Prober(timeout=0.6)
        assert prober.probe(make_target(1, listening_port, scan=False)) is ProbeResult.NOT_SCANNED
        assert prober.probe(make_target(1, listening_port)) is ProbeResult.ONLINE
