"""Shared HTTP client configuration and the default transport."""

from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from remote_resource._version import __version__

Transport = Callable[[str, dict[str, Any]], Awaitable[httpx.Response]]


def create_http_client() -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Timeouts are disabled: an exchange that never settles blocks the call.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=None,
        headers={"User-Agent": f"remote-resource/{__version__}"},
    )


def _content(body: Any) -> str | bytes | None:
    """Render a resolved body as request content."""
    if body is None or isinstance(body, (str, bytes)):
        return body
    if isinstance(body, bool):
        return "true" if body else "false"
    return str(body)


async def httpx_transport(uri: str, options: dict[str, Any]) -> httpx.Response:
    """Perform a single request/response round trip with httpx.

    Args:
        uri: Fully built request URI, query string included.
        options: ``method``, ``headers`` and ``body`` plus any extra keyword
            arguments accepted by ``httpx.AsyncClient.request``. Scalar bodies
            are sent as text.

    Returns:
        The fully read response.
    """
    request_opts = dict(options)
    method = request_opts.pop("method", "GET")
    headers = request_opts.pop("headers", None)
    body = request_opts.pop("body", None)

    async with create_http_client() as client:
        return await client.request(method, uri, headers=headers, content=_content(body), **request_opts)
