"""Status aggregator: fan out to every probe, fold into one report."""

import asyncio
import time
from typing import Dict, Optional, Sequence

from vulkan.logger import Logger
from vulkan.status.models import AggregateReport, ProbeResult, ProbeTarget
from vulkan.status.probes import run_probe

DEFAULT_SELF_NAME = "vulkan"


async def run_status_check(
    targets: Sequence[ProbeTarget],
    self_name: str = DEFAULT_SELF_NAME,
) -> AggregateReport:
    """Run every probe concurrently and wait for all of them.

    A single pass with no retries: the call takes as long as the slowest
    probe, never the sum of the timeouts. The report lists this service
    first (always healthy, since answering proves it is up), then the
    targets in configuration order regardless of completion order.
    """
    results = await asyncio.gather(*(run_probe(target) for target in targets))

    services: Dict[str, ProbeResult] = {self_name: ProbeResult.ok(0)}
    for target, result in zip(targets, results):
        services[target.name] = result

    return AggregateReport(services=services)


class StatusChecker:
    """Holds the statically configured targets for the /status endpoint."""

    def __init__(
        self,
        targets: Sequence[ProbeTarget],
        self_name: str = DEFAULT_SELF_NAME,
        logger: Optional[Logger] = None,
    ):
        self.targets = tuple(targets)
        self.self_name = self_name
        self.logger = logger

    async def check(self) -> AggregateReport:
        start = time.monotonic()
        report = await run_status_check(self.targets, self.self_name)

        if self.logger:
            unhealthy = [
                name for name, result in report.services.items() if not result.healthy
            ]
            self.logger.debug(
                "Status check completed",
                status=report.status,
                targets=len(self.targets),
                unhealthy=",".join(unhealthy) or "-",
                duration_ms=round((time.monotonic() - start) * 1000, 2),
            )

        return report
