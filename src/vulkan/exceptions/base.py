"""Base exception classes for Vulkan.

All Vulkan exceptions carry structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging/recovery
"""

from typing import Any, Dict, Optional


class VulkanError(Exception):
    """Base exception for all Vulkan errors.

    Attributes:
        code: Machine-readable error code (e.g., "INVALID_AMOUNT")
        message: Human-readable error message
        details: Optional additional context for debugging/recovery
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(VulkanError):
    """Input data failed validation rules (maps to HTTP 400)."""

    pass


class ResourceNotFoundError(VulkanError):
    """A requested resource (category, budget month, ...) doesn't exist."""

    pass


class SecurityError(VulkanError):
    """Access denied: missing or wrong API key."""

    pass


class ConfigurationError(VulkanError):
    """System configuration is invalid or incomplete."""

    pass


class BackupError(VulkanError):
    """Base exception for backup operations.

    The message can be passed as the first positional argument so call sites
    read like `raise BackupError("repository not initialized")`.
    """

    def __init__(
        self, message: str, code: str = "BACKUP_ERROR", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(code=code, message=message, details=details)


class VcsError(BackupError):
    """A version-control operation (init, commit, push, ...) failed."""

    def __init__(
        self, message: str, code: str = "VCS_ERROR", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, code=code, details=details)
