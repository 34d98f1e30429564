"""Crawler-facing routes: robots.txt and a noindex landing page."""

from typing import List

from starlette.requests import Request
from starlette.responses import HTMLResponse, PlainTextResponse
from starlette.routing import Route

ROBOTS_TXT = "User-agent: *\nDisallow: /"

LANDING_PAGE = """<!doctype html>
<html>
<head>
    <meta name="robots" content="noindex, nofollow">
    <title>You've gone too far</title>
</head>
<body>
    <h1>You've gone too far</h1>
    <p>You shouldn't be here, and now you are on the list</p>
</body>
</html>
"""


async def robots(request: Request) -> PlainTextResponse:
    return PlainTextResponse(ROBOTS_TXT)


async def landing(request: Request) -> HTMLResponse:
    return HTMLResponse(LANDING_PAGE, headers={"X-Robots-Tag": "noindex, nofollow"})


def create_site_routes() -> List[Route]:
    return [
        Route("/", endpoint=landing, methods=["GET"]),
        Route("/robots.txt", endpoint=robots, methods=["GET"]),
    ]
