"""Request body resolution."""

import inspect
from typing import Any

from remote_resource._internal.resolver import ResolutionStrategy, dump_json, resolve
from remote_resource.exceptions import CallProcessingError

STEP_NAME = "#parseBody"


def _serialize(body: Any) -> str:
    try:
        return dump_json(body)
    except (TypeError, ValueError) as e:
        raise CallProcessingError("Error parsing body", STEP_NAME, e) from e


async def parse_body(state: Any, body: Any) -> Any:
    """Resolve the request body.

    Structured payloads are serialized to JSON. A body function is called with
    the state; its result is only resolved again when it is awaitable.

    Args:
        state: Current application state snapshot.
        body: The raw descriptor body.

    Returns:
        None, the JSON string, or the passthrough scalar.

    Raises:
        CallProcessingError: If the body function or serialization fails.
    """
    strategy = ResolutionStrategy(
        step=STEP_NAME,
        description="body function",
        absent=lambda: None,
        on_callable=lambda fn: fn(state),
        on_structured=_serialize,
        on_literal=lambda value: value,
        reenter=inspect.isawaitable,
    )
    return await resolve(body, strategy)
