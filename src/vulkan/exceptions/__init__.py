"""Common exceptions for Vulkan.

All exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging/recovery

Usage:
    from vulkan.exceptions import (
        VulkanError,
        ValidationError,
        ConfigurationError,
        BackupError,
        VcsError,
    )
"""

from vulkan.exceptions.base import (
    BackupError,
    ConfigurationError,
    ResourceNotFoundError,
    SecurityError,
    ValidationError,
    VcsError,
    VulkanError,
)

__all__ = [
    "VulkanError",
    "ValidationError",
    "ResourceNotFoundError",
    "SecurityError",
    "ConfigurationError",
    "BackupError",
    "VcsError",
]
