"""Request execution and response routing."""

import inspect
import json
from typing import Any

import httpx

from remote_resource._internal.http import Transport
from remote_resource.models import CallOutcome, CompiledHooks, Request


async def settle(result: Any) -> Any:
    """Await a hook's return value if it is awaitable."""
    if inspect.isawaitable(result):
        return await result
    return result


def build_uri(uri: str, query: str) -> str:
    """Attach a query string ("?a=1") to a URI."""
    params = query.lstrip("?")
    if not params:
        return uri

    uri = uri.rstrip("?&")
    separator = "&" if "?" in uri else "?"
    return f"{uri}{separator}{params}"


def parse_response_data(response: httpx.Response) -> Any:
    """Decode the JSON body, tolerating empty or invalid payloads."""
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
        return {}


async def send_request(request: Request, hooks: CompiledHooks, transport: Transport) -> httpx.Response:
    """Fire the request hook, then perform the transport call.

    Args:
        request: The fully resolved request.
        hooks: Compiled lifecycle hooks.
        transport: Function performing the exchange.

    Returns:
        The transport's response.
    """
    uri = build_uri(request.uri, request.query)
    options = {
        "method": request.method,
        "headers": request.headers,
        "body": request.body,
        **request.request_opts,
    }

    await settle(hooks.on_before_call())
    return await transport(uri, options)


async def route_response(
    response: httpx.Response,
    status_actions: dict[int, Any],
    hooks: CompiledHooks,
) -> CallOutcome:
    """Invoke exactly one of: the status action, the failure hook, the success hook.

    A status action registered for the response code replaces both the
    success and the failure hook.
    """
    status_action = status_actions.get(response.status_code)
    if status_action is not None:
        await settle(status_action(response))
        return "status_action"

    data = parse_response_data(response)
    if not response.is_success:
        await settle(hooks.on_call_failure(response.status_code, data, response))
        return "failure"

    await settle(hooks.on_call_success(data, response))
    return "success"

