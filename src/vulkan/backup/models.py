"""Backup run records."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class BackupOutcome(str, Enum):
    """How a backup attempt ended."""

    SUCCESS = "success"
    SUCCESS_WITH_PUSH_FAILURE = "success-with-push-failure"
    NO_CHANGES = "no-changes"
    SKIPPED_CONCURRENT = "skipped-concurrent"
    SKIPPED_DISABLED = "skipped-disabled"
    FAILED = "failed"


_SUCCESSFUL = {
    BackupOutcome.SUCCESS,
    BackupOutcome.SUCCESS_WITH_PUSH_FAILURE,
    BackupOutcome.NO_CHANGES,
}


@dataclass
class BackupRun:
    """One backup attempt. Returned to the caller and logged, never persisted."""

    trigger: str
    outcome: BackupOutcome
    message: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    error: Optional[str] = None
    push_error: Optional[str] = None
    backend: Optional[str] = None

    @property
    def success(self) -> bool:
        """True when local durability was reached (or nothing needed saving)."""
        return self.outcome in _SUCCESSFUL

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "trigger": self.trigger,
            "outcome": self.outcome.value,
            "success": self.success,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.error is not None:
            data["error"] = self.error
        if self.push_error is not None:
            data["push_error"] = self.push_error
        if self.backend is not None:
            data["backend"] = self.backend
        return data
