"""Data model for the status aggregator.

ProbeTarget is configuration (validated once at startup); ProbeResult and
AggregateReport are built fresh for every /status request and never stored.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

HEALTHY = "healthy"
UNHEALTHY = "unhealthy"
DEGRADED = "degraded"

TIMEOUT = "TIMEOUT"


class ProbeKind(str, Enum):
    """Transport used to check a target."""

    HTTP = "http"
    TCP = "tcp"
    CONTAINER = "container"


class ProbeTarget(BaseModel):
    """A statically configured dependency to probe.

    Only the parameters of the target's kind are required:
    ``url`` for http, ``host`` and ``port`` for tcp, ``container`` for
    container targets.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, description="Key in the status report")
    kind: ProbeKind
    url: Optional[str] = Field(default=None, description="URL for http targets")
    host: Optional[str] = Field(default=None, description="Host for tcp targets")
    port: Optional[int] = Field(default=None, ge=1, le=65535, description="Port for tcp targets")
    container: Optional[str] = Field(default=None, description="Container name for container targets")
    socket_path: str = Field(
        default="/var/run/docker.sock",
        description="Container runtime API socket for container targets",
    )
    timeout: float = Field(default=5.0, gt=0, description="Per-probe timeout in seconds")

    @model_validator(mode="after")
    def _check_kind_parameters(self) -> "ProbeTarget":
        if self.kind is ProbeKind.HTTP:
            if not self.url or not self.url.startswith(("http://", "https://")):
                raise ValueError(f"http target '{self.name}' needs an http(s) url")
        elif self.kind is ProbeKind.TCP:
            if not self.host or self.port is None:
                raise ValueError(f"tcp target '{self.name}' needs host and port")
        elif not self.container:
            raise ValueError(f"container target '{self.name}' needs a container name")
        return self


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of one probe invocation."""

    status: str
    response_time_ms: Optional[int] = None
    error: Optional[str] = None

    @property
    def healthy(self) -> bool:
        return self.status == HEALTHY

    @classmethod
    def ok(cls, response_time_ms: int) -> "ProbeResult":
        return cls(status=HEALTHY, response_time_ms=response_time_ms)

    @classmethod
    def failed(cls, error: str) -> "ProbeResult":
        return cls(status=UNHEALTHY, error=error)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"status": self.status}
        if self.response_time_ms is not None:
            data["response_time"] = f"{self.response_time_ms}ms"
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class AggregateReport:
    """Combined status across all probes, in configuration order."""

    services: Dict[str, ProbeResult]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def status(self) -> str:
        if all(result.healthy for result in self.services.values()):
            return HEALTHY
        return DEGRADED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "timestamp": self.timestamp.isoformat().replace("+00:00", "Z"),
            "services": {name: result.to_dict() for name, result in self.services.items()},
        }
