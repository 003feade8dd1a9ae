"""Header resolution."""

import asyncio
import inspect
from typing import Any

from remote_resource._internal.resolver import (
    ResolutionStrategy,
    always,
    is_structured,
    resolve,
)
from remote_resource.exceptions import CallProcessingError

STEP_NAME = "#buildHeaders"
JSON_CONTENT_TYPE = "application/json"


def _is_json_body(body: Any) -> bool:
    """Check if the descriptor body is sent as JSON.

    Pending bodies count as JSON since they usually yield a payload; body
    functions do not.
    """
    if body is None:
        return False
    if inspect.isawaitable(body):
        return True
    return not callable(body) and is_structured(body)


def _header_text(value: Any) -> Any:
    if value is False or isinstance(value, (str, bytes)):
        return value
    if value is True:
        return "true"
    return str(value)


def merge_headers(
    headers: dict[str, Any] | None,
    body: Any,
    injected_headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Merge injected and descriptor headers, adding the JSON content type.

    Descriptor headers override injected ones. ``Content-Type`` is only added
    when the body is a structured or pending payload and no content type was
    set.
    """
    header_map = {**(injected_headers or {}), **(headers or {})}

    has_content_type = any(key.lower() == "content-type" for key in header_map)
    if _is_json_body(body) and not has_content_type:
        header_map["Content-Type"] = JSON_CONTENT_TYPE

    return header_map


def _header_strategy(state: Any, key: str) -> ResolutionStrategy:
    def reject(_: Any) -> Any:
        raise CallProcessingError(f"Object given for header {key}", STEP_NAME)

    return ResolutionStrategy(
        step=STEP_NAME,
        description=f"header function {key}",
        absent=lambda: False,
        on_callable=lambda fn: fn(state),
        on_structured=reject,
        on_literal=_header_text,
        reenter=always,
    )


async def build_headers(
    state: Any,
    headers: dict[str, Any] | None,
    body: Any = None,
    injected_headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a flat header map from a mix of values, functions and awaitables.

    Functions are called with the state and their result is resolved again.
    Headers resolving to False (or None) are left out.

    Args:
        state: Current application state snapshot.
        headers: Descriptor headers.
        body: Raw descriptor body, used to decide the JSON content type.
        injected_headers: Headers injected on every request.

    Returns:
        The resolved header map.

    Raises:
        CallProcessingError: If any header fails to resolve.
    """
    header_map = merge_headers(headers, body, injected_headers)

    async def resolve_entry(key: str, value: Any) -> tuple[str, Any]:
        return key, await resolve(value, _header_strategy(state, key))

    pairs = await asyncio.gather(*(resolve_entry(k, v) for k, v in header_map.items()))
    return {key: value for key, value in pairs if value is not False}
