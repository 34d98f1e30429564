"""Vulkan web server: Starlette app, routes and request plumbing."""

from vulkan.web.app import create_app
from vulkan.web.background import run_backup, schedule_backup
from vulkan.web.cors import CORSConfig, cors_middleware, get_cors_origins
from vulkan.web.health import create_health_routes, create_ping_response
from vulkan.web.middleware import (
    RequestLoggingMiddleware,
    get_context,
    read_json,
    require_api_key,
)
from vulkan.web.site import create_site_routes

__all__ = [
    "create_app",
    "CORSConfig",
    "cors_middleware",
    "get_cors_origins",
    "RequestLoggingMiddleware",
    "require_api_key",
    "get_context",
    "read_json",
    "run_backup",
    "schedule_backup",
    "create_health_routes",
    "create_ping_response",
    "create_site_routes",
]
