"""Notes endpoint: POST /well appends a note, task or bookmark."""

from typing import List

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from vulkan.exceptions import ValidationError
from vulkan.web.background import schedule_backup
from vulkan.web.middleware import get_context, read_json, require_api_key


async def add_note(request: Request) -> JSONResponse:
    context = get_context(request)
    body = await read_json(request)

    note_type = body.get("type")
    text = body.get("body")
    if not note_type or not text:
        raise ValidationError(code="MISSING_FIELDS", message="Missing required fields: type and body")

    result = await run_in_threadpool(context.notes.append, note_type, text)
    return JSONResponse(
        {"success": True, "message": "Entry saved successfully", "data": result},
        status_code=201,
        background=schedule_backup(request),
    )


def create_well_routes() -> List[Route]:
    return [Route("/well", endpoint=require_api_key(add_note), methods=["POST"])]
