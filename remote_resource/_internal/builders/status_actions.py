"""Status action compilation."""

import asyncio
from collections.abc import Callable
from typing import Any

import httpx

from remote_resource._internal.resolver import callback_strategy, resolve
from remote_resource.models import Dispatch, StatusEvent

STEP_NAME = "#makeStatusActions"

StatusCallback = Callable[[httpx.Response], Any]


async def make_status_actions(
    status_actions: dict[int, Any],
    dispatch: Dispatch,
    *,
    bypass: bool = False,
) -> dict[int, StatusCallback]:
    """Compile the status action configuration into response callbacks.

    Args:
        status_actions: Status code -> action type, payload, function or awaitable.
        dispatch: Dispatch function handed to actions.
        bypass: Return no status actions at all.

    Returns:
        Status code -> callback taking the response.
    """
    if bypass:
        return {}

    def wrap(fn: Callable[..., Any]) -> StatusCallback:
        def on_status(response: httpx.Response) -> Any:
            return fn(StatusEvent(status=response.status_code, response=response, dispatch=dispatch))

        return on_status

    async def compile_entry(code: Any, value: Any) -> tuple[int, StatusCallback]:
        strategy = callback_strategy(STEP_NAME, f"status action {code}", dispatch, wrap)
        return int(code), await resolve(value, strategy)

    entries = await asyncio.gather(*(compile_entry(c, v) for c, v in status_actions.items()))
    return dict(entries)
