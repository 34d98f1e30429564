"""Health/status aggregation.

Usage:
    from vulkan.status import ProbeTarget, StatusChecker

    checker = StatusChecker([
        ProbeTarget(name="site", kind="http", url="https://example.com"),
        ProbeTarget(name="db", kind="tcp", host="db", port=5432, timeout=2),
    ])
    report = await checker.check()
    report.to_dict()
"""

from vulkan.status.aggregator import DEFAULT_SELF_NAME, StatusChecker, run_status_check
from vulkan.status.models import (
    DEGRADED,
    HEALTHY,
    TIMEOUT,
    UNHEALTHY,
    AggregateReport,
    ProbeKind,
    ProbeResult,
    ProbeTarget,
)
from vulkan.status.probes import (
    CONTAINER_NOT_RUNNING,
    GRACE_SECONDS,
    PROBES,
    error_code,
    probe_container,
    probe_http,
    probe_tcp,
    run_probe,
)
from vulkan.status.targets import load_targets

__all__ = [
    "AggregateReport",
    "ProbeKind",
    "ProbeResult",
    "ProbeTarget",
    "HEALTHY",
    "UNHEALTHY",
    "DEGRADED",
    "TIMEOUT",
    "CONTAINER_NOT_RUNNING",
    "GRACE_SECONDS",
    "PROBES",
    "error_code",
    "probe_http",
    "probe_tcp",
    "probe_container",
    "run_probe",
    "run_status_check",
    "StatusChecker",
    "DEFAULT_SELF_NAME",
    "load_targets",
]
