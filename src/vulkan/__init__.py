"""Vulkan - personal backend services.

- status: multi-protocol health-check aggregator behind GET /status
- backup: git-based backup of the data directory after each change
- ledger: CSV/JSON spend, category and budget tracking (/vault)
- notes: markdown note appender (/well)
- config, logger, exceptions: shared infrastructure
"""

__version__ = "1.0.0"

from vulkan.backup import BackupConfig, BackupManager, BackupOutcome, BackupRun
from vulkan.config import Settings, get_settings, reset_settings
from vulkan.exceptions import (
    BackupError,
    ConfigurationError,
    ResourceNotFoundError,
    SecurityError,
    ValidationError,
    VcsError,
    VulkanError,
)
from vulkan.logger import Logger, StructuredLogger, create_logger, get_logger
from vulkan.status import AggregateReport, ProbeKind, ProbeResult, ProbeTarget, run_status_check

__all__ = [
    "__version__",
    # Logger
    "Logger",
    "StructuredLogger",
    "get_logger",
    "create_logger",
    # Config
    "Settings",
    "get_settings",
    "reset_settings",
    # Status
    "ProbeKind",
    "ProbeTarget",
    "ProbeResult",
    "AggregateReport",
    "run_status_check",
    # Backup
    "BackupConfig",
    "BackupManager",
    "BackupOutcome",
    "BackupRun",
    # Exceptions
    "VulkanError",
    "ValidationError",
    "ResourceNotFoundError",
    "SecurityError",
    "ConfigurationError",
    "BackupError",
    "VcsError",
]
