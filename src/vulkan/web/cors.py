"""CORS configuration for the Vulkan web server."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware


@dataclass
class CORSConfig:
    """Configuration for CORS middleware.

    Attributes:
        allow_origins: List of allowed origins or ["*"] for all
        allow_methods: List of allowed HTTP methods
        allow_headers: List of allowed request headers
        allow_credentials: Whether to allow credentials
        max_age: Max age for preflight cache (seconds)
    """
    allow_origins: List[str] = field(default_factory=lambda: ["*"])
    allow_methods: List[str] = field(default_factory=lambda: ["GET", "POST", "OPTIONS"])
    allow_headers: List[str] = field(default_factory=lambda: ["Content-Type", "X-API-Key"])
    allow_credentials: bool = False
    max_age: int = 600

    @classmethod
    def from_env(cls, env_prefix: str = "VULKAN", default_origins: str = "*") -> "CORSConfig":
        """Create CORSConfig from {env_prefix}_CORS_ORIGINS (comma-separated or "*").

        Example:
            # With VULKAN_CORS_ORIGINS="https://example.com,https://app.example.com"
            config = CORSConfig.from_env()
            # config.allow_origins == ["https://example.com", "https://app.example.com"]
        """
        origins_str = os.getenv(f"{env_prefix}_CORS_ORIGINS", default_origins)
        return cls(allow_origins=get_cors_origins(origins_str))


def get_cors_origins(origins_str: str) -> List[str]:
    """Parse CORS origins from a string.

    Example:
        >>> get_cors_origins("https://example.com, https://app.example.com")
        ["https://example.com", "https://app.example.com"]
    """
    if origins_str.strip() == "*":
        return ["*"]
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


def cors_middleware(config: Optional[CORSConfig] = None) -> Middleware:
    """Starlette Middleware entry for the given CORS configuration."""
    config = config or CORSConfig()
    return Middleware(
        CORSMiddleware,
        allow_origins=config.allow_origins,
        allow_credentials=config.allow_credentials,
        allow_methods=config.allow_methods,
        allow_headers=config.allow_headers,
        max_age=config.max_age,
    )
