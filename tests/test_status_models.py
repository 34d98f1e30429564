"""Tests for vulkan.status models and target loading."""

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from vulkan.exceptions import ConfigurationError
from vulkan.status import (
    DEGRADED,
    HEALTHY,
    UNHEALTHY,
    AggregateReport,
    ProbeKind,
    ProbeResult,
    ProbeTarget,
    load_targets,
)


class TestProbeTarget:
    def test_http_target(self):
        target = ProbeTarget(name="site", kind="http", url="https://example.com")

        assert target.kind is ProbeKind.HTTP
        assert target.timeout == 5.0

    def test_tcp_target(self):
        target = ProbeTarget(name="db", kind="tcp", host="db", port=5432, timeout=2)

        assert target.kind is ProbeKind.TCP
        assert target.timeout == 2.0

    def test_container_target_default_socket(self):
        target = ProbeTarget(name="mail", kind="container", container="mailcow")

        assert target.socket_path == "/var/run/docker.sock"

    @pytest.mark.parametrize(
        "params",
        [
            {"kind": "http"},
            {"kind": "http", "url": "ftp://example.com"},
            {"kind": "tcp", "host": "db"},
            {"kind": "tcp", "port": 5432},
            {"kind": "container"},
            {"kind": "udp", "host": "db", "port": 53},
            {"kind": "tcp", "host": "db", "port": 0},
            {"kind": "http", "url": "http://x", "timeout": 0},
            {"kind": "http", "url": "http://x", "retries": 3},
        ],
    )
    def test_invalid_targets(self, params):
        with pytest.raises(PydanticValidationError):
            ProbeTarget(name="bad", **params)

    def test_frozen(self):
        target = ProbeTarget(name="site", kind="http", url="https://example.com")

        with pytest.raises(PydanticValidationError):
            target.name = "other"


class TestProbeResult:
    def test_ok(self):
        result = ProbeResult.ok(42)

        assert result.healthy
        assert result.to_dict() == {"status": HEALTHY, "response_time": "42ms"}

    def test_failed(self):
        result = ProbeResult.failed("ECONNREFUSED")

        assert not result.healthy
        assert result.status == UNHEALTHY
        assert result.to_dict() == {"status": UNHEALTHY, "error": "ECONNREFUSED"}


class TestAggregateReport:
    def test_all_healthy(self):
        report = AggregateReport(services={"vulkan": ProbeResult.ok(0), "site": ProbeResult.ok(10)})

        assert report.status == HEALTHY

    def test_any_failure_degrades(self):
        report = AggregateReport(
            services={"vulkan": ProbeResult.ok(0), "db": ProbeResult.failed("TIMEOUT")}
        )

        assert report.status == DEGRADED

    def test_to_dict(self):
        when = datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
        report = AggregateReport(
            services={"vulkan": ProbeResult.ok(0), "db": ProbeResult.failed("TIMEOUT")},
            timestamp=when,
        )

        data = report.to_dict()

        assert data["status"] == DEGRADED
        assert data["timestamp"] == "2025-01-02T03:04:05.678000Z"
        assert list(data["services"]) == ["vulkan", "db"]
        assert data["services"]["db"] == {"status": UNHEALTHY, "error": "TIMEOUT"}


class TestLoadTargets:
    def test_empty(self):
        assert load_targets(None) == []
        assert load_targets("   ") == []

    def test_parses_list_in_order(self):
        raw = json.dumps([
            {"name": "site", "kind": "http", "url": "https://example.com"},
            {"name": "db", "kind": "tcp", "host": "db", "port": 5432, "timeout": 2},
            {"name": "mail", "kind": "container", "container": "mailcow"},
        ])

        targets = load_targets(raw)

        assert [t.name for t in targets] == ["site", "db", "mail"]
        assert targets[1].timeout == 2.0

    def test_invalid_json(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_targets("[{")

        assert exc_info.value.code == "INVALID_STATUS_TARGETS"

    def test_not_a_list(self):
        with pytest.raises(ConfigurationError):
            load_targets('{"name": "site"}')

    def test_invalid_target(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_targets('[{"name": "db", "kind": "tcp", "host": "db"}]')

        assert "#0" in exc_info.value.message
        assert exc_info.value.details["errors"]

    def test_duplicate_name(self):
        raw = json.dumps([
            {"name": "site", "kind": "http", "url": "https://a.example.com"},
            {"name": "site", "kind": "http", "url": "https://b.example.com"},
        ])

        with pytest.raises(ConfigurationError) as exc_info:
            load_targets(raw)

        assert exc_info.value.code == "DUPLICATE_STATUS_TARGET"
