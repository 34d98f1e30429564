"""Environment loader with optional .env support.

Loads configuration values in deterministic order:
1) .env file (if provided and exists)
2) OS environment variables
3) Explicit overrides (highest precedence)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from dotenv import dotenv_values

from vulkan.exceptions import ConfigurationError

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off", ""}


class EnvLoader:
    """Load environment-style key/value pairs with .env support."""

    def __init__(self, env_file: Optional[Path | str] = None) -> None:
        self.env_file = Path(env_file) if env_file else None

    def load(self, overrides: Optional[Mapping[str, str]] = None) -> MutableMapping[str, str]:
        """Load environment data, precedence (low -> high): .env file, OS env vars, overrides."""
        data: MutableMapping[str, str] = {}

        env_path = self.env_file or Path.cwd() / ".env"
        if env_path.exists():
            file_values = dotenv_values(env_path)
            data.update({k: v for k, v in file_values.items() if v is not None})

        data.update(os.environ)

        if overrides:
            data.update({k: str(v) for k, v in overrides.items()})

        return data


def parse_bool(value: Optional[str], name: str, default: bool = False) -> bool:
    """Parse a boolean env value ("true"/"false", "1"/"0", ...)."""
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        code="INVALID_BOOLEAN",
        message=f"{name} must be 'true' or 'false', got {value!r}",
    )


def parse_int(value: Optional[str], name: str, default: int) -> int:
    """Parse an integer env value, raising ConfigurationError when invalid."""
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(
            code="INVALID_INTEGER",
            message=f"{name} must be an integer, got {value!r}",
        ) from exc


__all__ = ["EnvLoader", "parse_bool", "parse_int"]
