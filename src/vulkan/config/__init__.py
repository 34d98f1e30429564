"""Configuration Module for Vulkan

Typed configuration management with environment variable support.

Example:
    from vulkan.config import Settings

    settings = Settings.from_env()            # VULKAN_* variables + ./.env
    settings = Settings.from_env(overrides={"VULKAN_ENV": "TEST"})
"""

from vulkan.config.env_loader import EnvLoader, parse_bool, parse_int
from vulkan.config.settings import (
    ALLOWED_ENVS,
    LogSettings,
    ServerSettings,
    Settings,
    StorageSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "EnvLoader",
    "parse_bool",
    "parse_int",
    "ALLOWED_ENVS",
    "ServerSettings",
    "StorageSettings",
    "LogSettings",
    "Settings",
    "get_settings",
    "reset_settings",
]
