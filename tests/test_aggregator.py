"""Tests for the status aggregator."""

import asyncio
import time
from unittest.mock import MagicMock

import pytest

from vulkan.status import (
    DEGRADED,
    HEALTHY,
    PROBES,
    UNHEALTHY,
    ProbeKind,
    ProbeResult,
    ProbeTarget,
    StatusChecker,
    run_status_check,
)


def _target(name: str, timeout: float = 1.0) -> ProbeTarget:
    return ProbeTarget(name=name, kind="http", url=f"http://{name}.test/", timeout=timeout)


@pytest.fixture
def fake_http_probe(monkeypatch):
    """Replace the http probe with one driven by a per-target script."""
    script = {}

    async def probe(target):
        delay, result = script[target.name]
        await asyncio.sleep(delay)
        return result

    monkeypatch.setitem(PROBES, ProbeKind.HTTP, probe)
    return script


class TestRunStatusCheck:
    @pytest.mark.asyncio
    async def test_no_targets_reports_self_only(self):
        report = await run_status_check([])

        assert report.status == HEALTHY
        assert list(report.services) == ["vulkan"]
        assert report.services["vulkan"].to_dict() == {"status": HEALTHY, "response_time": "0ms"}

    @pytest.mark.asyncio
    async def test_probes_run_concurrently(self, fake_http_probe):
        targets = [_target(f"svc{i}") for i in range(5)]
        for target in targets:
            fake_http_probe[target.name] = (0.3, ProbeResult.ok(300))

        start = time.monotonic()
        report = await run_status_check(targets)
        elapsed = time.monotonic() - start

        # Five sequential probes would take 1.5s
        assert elapsed < 1.0
        assert report.status == HEALTHY

    @pytest.mark.asyncio
    async def test_order_follows_configuration(self, fake_http_probe):
        fake_http_probe["slow"] = (0.2, ProbeResult.ok(200))
        fake_http_probe["fast"] = (0.0, ProbeResult.ok(1))

        report = await run_status_check([_target("slow"), _target("fast")], self_name="home")

        assert list(report.services) == ["home", "slow", "fast"]

    @pytest.mark.asyncio
    async def test_single_failure_degrades(self, fake_http_probe):
        fake_http_probe["site"] = (0.0, ProbeResult.ok(5))
        fake_http_probe["db"] = (0.0, ProbeResult.failed("ECONNREFUSED"))

        report = await run_status_check([_target("site"), _target("db")])
        data = report.to_dict()

        assert data["status"] == DEGRADED
        assert data["services"]["site"]["status"] == HEALTHY
        assert data["services"]["db"] == {"status": "unhealthy", "error": "ECONNREFUSED"}

    @pytest.mark.asyncio
    async def test_unresolvable_tcp_host_degrades(self, fake_http_probe):
        fake_http_probe["site"] = (0.0, ProbeResult.ok(5))
        bad = ProbeTarget(name="db", kind="tcp", host="x" * 64 + ".example", port=5432, timeout=1)

        report = await run_status_check([_target("site"), bad])

        assert report.status == DEGRADED
        assert report.services["site"].status == HEALTHY
        assert report.services["db"].status == UNHEALTHY


class TestStatusChecker:
    @pytest.mark.asyncio
    async def test_check_logs_summary(self, fake_http_probe):
        fake_http_probe["db"] = (0.0, ProbeResult.failed("TIMEOUT"))
        logger = MagicMock()
        checker = StatusChecker([_target("db")], self_name="vulkan", logger=logger)

        report = await checker.check()

        assert report.status == DEGRADED
        logger.debug.assert_called_once()
        _, kwargs = logger.debug.call_args
        assert kwargs["status"] == DEGRADED
        assert kwargs["unhealthy"] == "db"
        assert kwargs["targets"] == 1

    def test_targets_are_stored_as_tuple(self):
        checker = StatusChecker([_target("a")])

        assert checker.targets == (_target("a"),)
        assert checker.self_name == "vulkan"
