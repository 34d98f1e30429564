"""Request plumbing for the Vulkan web server.

- RequestLoggingMiddleware: one log line per request with status and timing
- require_api_key: X-API-Key guard for the vault and notes endpoints
- get_context / read_json: handler helpers
"""

import functools
import hmac
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from vulkan.context import AppContext
from vulkan.exceptions import SecurityError, ValidationError

Endpoint = Callable[[Request], Awaitable[Response]]


def get_context(request: Request) -> AppContext:
    """The AppContext the application was created with."""
    return request.app.state.context


async def read_json(request: Request) -> Dict[str, Any]:
    """Parse the request body as a JSON object.

    Raises:
        ValidationError: If the body is not a JSON object
    """
    try:
        data = await request.json()
    except ValueError:
        raise ValidationError(code="INVALID_JSON", message="Request body must be valid JSON") from None
    if not isinstance(data, dict):
        raise ValidationError(code="INVALID_JSON", message="Request body must be a JSON object")
    return data


def require_api_key(endpoint: Endpoint) -> Endpoint:
    """Reject requests whose X-API-Key header doesn't match the configured key.

    Example:
        Route("/spend", endpoint=require_api_key(add_spend), methods=["POST"])
    """

    @functools.wraps(endpoint)
    async def wrapper(request: Request) -> Response:
        expected = get_context(request).settings.api_key
        if not expected:
            return JSONResponse({"error": "API key not configured on server"}, status_code=500)

        provided = request.headers.get("x-api-key", "")
        if not provided or not hmac.compare_digest(provided.encode(), expected.encode()):
            raise SecurityError(code="INVALID_API_KEY", message="Invalid or missing API key")

        return await endpoint(request)

    return wrapper


class RequestLoggingMiddleware:
    """ASGI middleware logging method, path, status and duration of each request.

    Example:
        app = Starlette(middleware=[Middleware(RequestLoggingMiddleware, logger=logger)])
    """

    def __init__(self, app: Any, logger: Optional[Any] = None) -> None:
        self.app = app
        self.logger = logger

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        if scope["type"] != "http" or not self.logger:
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "/")
        start_time = time.monotonic()
        response_status = 0

        async def send_wrapper(message: dict) -> None:
            nonlocal response_status
            if message["type"] == "http.response.start":
                response_status = message.get("status", 0)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration_ms = (time.monotonic() - start_time) * 1000
            self.logger.info(
                f"{method} {path}",
                status=response_status,
                duration_ms=round(duration_ms, 2),
            )
