"""Health endpoints: /ping liveness and the /status aggregate report."""

from datetime import datetime, timezone
from typing import Any, Dict, List

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from vulkan.web.middleware import get_context


def create_ping_response(service: str, status: str = "ok") -> Dict[str, Any]:
    """Create a standard ping response.

    Example:
        >>> create_ping_response("vulkan")
        {"status": "ok", "timestamp": "2025-01-01T12:00:00+00:00", "service": "vulkan"}
    """
    return {
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": service,
    }


async def ping(request: Request) -> JSONResponse:
    context = get_context(request)
    return JSONResponse(create_ping_response(context.settings.status_self_name))


async def status(request: Request) -> JSONResponse:
    """Probe every configured dependency and report.

    Always 200 with a healthy/degraded body; probe failures are data, not
    errors. Only a fault in the handler itself yields 500.
    """
    context = get_context(request)
    try:
        report = await context.status.check()
    except Exception as e:
        context.logger.error("Status check failed", error=str(e), exc_info=True)
        return JSONResponse(
            {"error": "Internal server error", "message": "Status check failed"},
            status_code=500,
        )
    return JSONResponse(report.to_dict())


def create_health_routes() -> List[Route]:
    return [
        Route("/ping", endpoint=ping, methods=["GET"]),
        Route("/status", endpoint=status, methods=["GET"]),
    ]
