"""Ledger endpoints mounted under /vault (all require the API key)."""

from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route

from vulkan.exceptions import ValidationError
from vulkan.ledger import SpendEntry
from vulkan.web.background import schedule_backup
from vulkan.web.middleware import get_context, read_json, require_api_key

REQUIRED_SPEND_FIELDS = ("date", "name", "amount", "category", "subcategory", "payment_method")


def _first_error(exc: PydanticValidationError) -> str:
    error = exc.errors(include_url=False)[0]
    message = str(error.get("msg", "Invalid value"))
    # Our validators raise ValueError; pydantic prefixes their message
    message = message.removeprefix("Value error, ")
    if error.get("type") != "value_error" and error.get("loc"):
        message = f"{error['loc'][0]}: {message}"
    return message


def _entry_dict(entry: SpendEntry) -> Dict[str, Any]:
    data = entry.model_dump()
    data["amount"] = float(entry.amount)
    return data


async def add_spend(request: Request) -> JSONResponse:
    context = get_context(request)
    body = await read_json(request)

    missing = [f for f in REQUIRED_SPEND_FIELDS if body.get(f) in (None, "")]
    if missing:
        raise ValidationError(
            code="MISSING_FIELDS",
            message=f"Missing required fields: {', '.join(REQUIRED_SPEND_FIELDS)}",
            details={"missing": missing},
        )

    try:
        entry = SpendEntry.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError(code="INVALID_ENTRY", message=_first_error(e)) from e

    categories = await run_in_threadpool(context.categories.categories)
    if entry.category not in categories:
        raise ValidationError(
            code="UNKNOWN_CATEGORY",
            message=f'Category "{entry.category}" does not exist. Please create it first.',
        )
    if entry.subcategory not in categories[entry.category]:
        raise ValidationError(
            code="UNKNOWN_SUBCATEGORY",
            message=(
                f'Subcategory "{entry.subcategory}" does not exist in category '
                f'"{entry.category}". Please create it first.'
            ),
        )

    line = await run_in_threadpool(context.ledger.add_entry, entry)
    context.logger.info("Ledger entry added", category=entry.category, amount=str(entry.amount))

    return JSONResponse(
        {
            "success": True,
            "message": "Entry added successfully",
            "preview": line,
            "entry": _entry_dict(entry),
        },
        status_code=201,
        background=schedule_backup(request),
    )


async def get_data(request: Request) -> PlainTextResponse:
    content = await run_in_threadpool(get_context(request).ledger.read_all)
    return PlainTextResponse(content, media_type="text/csv")


async def get_categories(request: Request) -> JSONResponse:
    categories = await run_in_threadpool(get_context(request).categories.categories)
    return JSONResponse({
        "success": True,
        "categories": categories,
        "stats": {
            "categories": len(categories),
            "subcategories": sum(len(subs) for subs in categories.values()),
        },
    })


async def add_category(request: Request) -> JSONResponse:
    context = get_context(request)
    body = await read_json(request)

    category = body.get("category")
    subcategory = body.get("subcategory")
    if not category or not isinstance(category, str):
        raise ValidationError(
            code="INVALID_CATEGORY", message="Category is required and must be a string"
        )

    if not subcategory:
        result = await run_in_threadpool(context.categories.add_category, category)
        message = f'Category "{result["category"]}" added successfully'
    else:
        if not isinstance(subcategory, str):
            raise ValidationError(code="INVALID_SUBCATEGORY", message="Subcategory must be a string")
        result = await run_in_threadpool(context.categories.add_subcategory, category, subcategory)
        message = (
            f'Subcategory "{result["subcategory"]}" added to category '
            f'"{result["category"]}" successfully'
        )

    return JSONResponse(
        {"success": True, "message": message, "result": result},
        status_code=201,
        background=schedule_backup(request),
    )


async def get_summary(request: Request) -> JSONResponse:
    context = get_context(request)
    categories = await run_in_threadpool(context.categories.categories)
    summary = await run_in_threadpool(context.ledger.summary, categories)
    return JSONResponse({"success": True, "summary": summary})


async def get_budget(request: Request) -> JSONResponse:
    budget = await run_in_threadpool(get_context(request).budget.load)
    return JSONResponse({"success": True, "budget": budget})


async def duplicate_budget(request: Request) -> JSONResponse:
    context = get_context(request)
    body = await read_json(request) if await request.body() else {}

    target = body.get("target_month")
    if target is not None and not (isinstance(target, str) and len(target) == 7 and target[4] == "-"):
        raise ValidationError(code="INVALID_MONTH", message="target_month must be in YYYY-MM format")

    result = await run_in_threadpool(context.budget.duplicate_last_month, target)
    return JSONResponse(
        {"success": True, "result": result},
        status_code=201,
        background=schedule_backup(request),
    )


def create_vault_routes() -> List[Route]:
    return [
        Route("/spend", endpoint=require_api_key(add_spend), methods=["POST"]),
        Route("/data", endpoint=require_api_key(get_data), methods=["GET"]),
        Route("/categories", endpoint=require_api_key(get_categories), methods=["GET"]),
        Route("/categories", endpoint=require_api_key(add_category), methods=["POST"]),
        Route("/summary", endpoint=require_api_key(get_summary), methods=["GET"]),
        Route("/budget", endpoint=require_api_key(get_budget), methods=["GET"]),
        Route("/budget/duplicate", endpoint=require_api_key(duplicate_budget), methods=["POST"]),
    ]
