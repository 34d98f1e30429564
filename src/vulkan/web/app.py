"""Starlette application factory for Vulkan."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount

from vulkan.context import AppContext
from vulkan.exceptions import (
    BackupError,
    ResourceNotFoundError,
    SecurityError,
    ValidationError,
    VulkanError,
)
from vulkan.web.cors import CORSConfig, cors_middleware
from vulkan.web.health import create_health_routes
from vulkan.web.middleware import RequestLoggingMiddleware
from vulkan.web.site import create_site_routes
from vulkan.web.vault import create_vault_routes
from vulkan.web.well import create_well_routes


@asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    context: AppContext = app.state.context
    context.settings.storage.ensure_directories()

    try:
        await context.backup.initialize()
    except BackupError as e:
        # Serve anyway; each backup attempt will report the failure
        context.logger.error("Backup initialization failed", error=e.message, exc_info=True)

    context.logger.info(
        "Vulkan started",
        env=context.settings.env,
        data_dir=str(context.settings.storage.data_dir),
        status_targets=len(context.status.targets),
        backups=context.backup.enabled,
    )
    try:
        yield
    finally:
        await context.backup.shutdown()


async def validation_error(request: Request, exc: VulkanError) -> JSONResponse:
    return JSONResponse({"error": exc.message}, status_code=400)


async def not_found_error(request: Request, exc: VulkanError) -> JSONResponse:
    return JSONResponse({"error": exc.message}, status_code=404)


async def security_error(request: Request, exc: VulkanError) -> JSONResponse:
    request.app.state.context.logger.warning(
        "Rejected request", path=request.url.path, reason=exc.code
    )
    return JSONResponse({"error": exc.message}, status_code=401)


async def vulkan_error(request: Request, exc: VulkanError) -> JSONResponse:
    request.app.state.context.logger.error(
        f"{request.method} {request.url.path} failed", error=str(exc)
    )
    return JSONResponse(
        {"error": "Internal server error", "message": "Request failed"},
        status_code=500,
    )


def create_app(
    context: AppContext,
    cors_config: Optional[CORSConfig] = None,
    debug: bool = False,
) -> Starlette:
    """Create the Vulkan application.

    Args:
        context: Application context shared by every handler
        cors_config: CORS configuration (default: from VULKAN_CORS_ORIGINS)
        debug: Enable debug mode

    Example:
        settings = Settings.from_env()
        app = create_app(AppContext.from_settings(settings))
        uvicorn.run(app, host=settings.server.host, port=settings.server.port)
    """
    routes = [
        *create_site_routes(),
        *create_health_routes(),
        *create_well_routes(),
        Mount("/vault", routes=create_vault_routes()),
    ]

    middleware = [
        cors_middleware(cors_config or CORSConfig.from_env(context.settings.prefix)),
        Middleware(RequestLoggingMiddleware, logger=context.logger),
    ]

    app = Starlette(
        debug=debug,
        routes=routes,
        middleware=middleware,
        lifespan=lifespan,
        exception_handlers={
            ValidationError: validation_error,
            ResourceNotFoundError: not_found_error,
            SecurityError: security_error,
            VulkanError: vulkan_error,
        },
    )
    app.state.context = context
    return app
