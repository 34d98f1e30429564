"""Probe strategies for the status aggregator.

Each probe takes a ProbeTarget and resolves to a ProbeResult within roughly
the target's timeout. Probes never raise: every failure mode becomes an
unhealthy result carrying an error code.
"""

import asyncio
import contextlib
import errno
import socket
import time
from typing import Awaitable, Callable, Dict, Optional
from urllib.parse import quote

import httpx

from vulkan.status.models import TIMEOUT, ProbeKind, ProbeResult, ProbeTarget

CONTAINER_NOT_RUNNING = "Container not found or not running"

# Slack on top of the client timeout before the request task is cancelled
GRACE_SECONDS = 0.5

ProbeFunc = Callable[[ProbeTarget], Awaitable[ProbeResult]]


def _deadline(target: ProbeTarget) -> float:
    return target.timeout + GRACE_SECONDS


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def error_code(exc: BaseException) -> str:
    """Reduce an exception chain to an errno-style code.

    Walks ``__cause__``/``__context__`` and exception groups looking for the
    OS error underneath the client library's wrapper. Name-resolution
    failures report ``ENOTFOUND``; anything without an errno reports the
    outermost exception's class name.
    """
    code = _find_os_code(exc, set())
    return code or type(exc).__name__


def _find_os_code(exc: Optional[BaseException], seen: set) -> Optional[str]:
    if exc is None or id(exc) in seen:
        return None
    seen.add(id(exc))

    if isinstance(exc, socket.gaierror):
        return "ENOTFOUND"
    if isinstance(exc, OSError) and exc.errno in errno.errorcode:
        return errno.errorcode[exc.errno]

    for inner in getattr(exc, "exceptions", ()):
        code = _find_os_code(inner, seen)
        if code:
            return code

    return _find_os_code(exc.__cause__ or exc.__context__, seen)


async def _get_and_drain(client: httpx.AsyncClient, url: str) -> int:
    async with client.stream("GET", url) as response:
        async for _ in response.aiter_raw():
            pass
        return response.status_code


async def probe_http(
    target: ProbeTarget,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ProbeResult:
    """GET the target URL; any HTTP response counts as healthy.

    The whole exchange (connect, headers, body) shares one deadline; when it
    fires the request task is cancelled, which closes the connection.
    """
    start = time.monotonic()
    try:
        async with httpx.AsyncClient(timeout=target.timeout, transport=transport) as client:
            await asyncio.wait_for(_get_and_drain(client, str(target.url)), timeout=_deadline(target))
    except (httpx.TimeoutException, asyncio.TimeoutError):
        return ProbeResult.failed(TIMEOUT)
    except (httpx.HTTPError, OSError) as exc:
        return ProbeResult.failed(error_code(exc))
    except Exception as exc:  # noqa: BLE001 - a probe must never raise
        return ProbeResult.failed(error_code(exc))

    return ProbeResult.ok(_elapsed_ms(start))


async def probe_tcp(target: ProbeTarget) -> ProbeResult:
    """Open and immediately close a TCP connection to host:port."""
    start = time.monotonic()
    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(target.host, target.port),
            timeout=_deadline(target),
        )
    except asyncio.TimeoutError:
        return ProbeResult.failed(TIMEOUT)
    except OSError as exc:
        return ProbeResult.failed(error_code(exc))
    except Exception as exc:  # noqa: BLE001 - a probe must never raise
        return ProbeResult.failed(error_code(exc))

    elapsed = _elapsed_ms(start)
    writer.close()
    # Reachability is already established; a failing close changes nothing
    with contextlib.suppress(OSError):
        await writer.wait_closed()

    return ProbeResult.ok(elapsed)


async def probe_container(
    target: ProbeTarget,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ProbeResult:
    """Ask the local container runtime whether the named container is running.

    Talks to the runtime's HTTP API over its Unix socket. The check is local,
    so a running container reports a fixed 0ms response time.
    """
    if transport is None:
        transport = httpx.AsyncHTTPTransport(uds=target.socket_path)

    path = f"/containers/{quote(str(target.container), safe='')}/json"
    try:
        async with httpx.AsyncClient(
            transport=transport,
            base_url="http://container-runtime",
            timeout=target.timeout,
        ) as client:
            response = await asyncio.wait_for(client.get(path), timeout=_deadline(target))
        running = (
            response.status_code == 200
            and response.json().get("State", {}).get("Running") is True
        )
    except Exception:  # noqa: BLE001 - a probe must never raise
        running = False

    if running:
        return ProbeResult.ok(0)
    return ProbeResult.failed(CONTAINER_NOT_RUNNING)


PROBES: Dict[ProbeKind, ProbeFunc] = {
    ProbeKind.HTTP: probe_http,
    ProbeKind.TCP: probe_tcp,
    ProbeKind.CONTAINER: probe_container,
}


async def run_probe(target: ProbeTarget) -> ProbeResult:
    """Dispatch to the probe strategy for the target's kind."""
    return await PROBES[target.kind](target)
