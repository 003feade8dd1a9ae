"""Recursive resolution of descriptor values.

Header values, body values, lifecycle hooks and status actions all accept the
same union: nothing, an awaitable, a callable, a structured payload or a
literal. ``resolve`` walks that union once; a ``ResolutionStrategy`` decides
what each branch produces for a given context.
"""

import inspect
import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from remote_resource.exceptions import CallProcessingError

SCALAR_TYPES = (str, bytes, int, float, bool)


def is_structured(value: Any) -> bool:
    """Check if a (non-awaitable, non-callable) value is a structured payload."""
    return not isinstance(value, SCALAR_TYPES)


def dump_json(value: Any) -> str:
    """Serialize a structured value to compact JSON."""
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    return json.dumps(value, separators=(",", ":"))


def noop(*args: Any, **kwargs: Any) -> None:
    """Callback used for omitted hooks."""
    return None


def always(_: Any) -> bool:
    return True


def never(_: Any) -> bool:
    return False


@dataclass(frozen=True)
class ResolutionStrategy:
    """Per-context behaviour for ``resolve``.

    Attributes:
        step: Pipeline step name used to tag errors.
        description: What is being resolved, for error messages.
        absent: Produces the result for a missing value.
        on_callable: Handles a callable (invoke it, or wrap it as a callback).
        on_structured: Handles a structured payload.
        on_literal: Handles a scalar literal.
        reenter: Decides whether a callable's result is resolved again.
    """

    step: str
    description: str
    absent: Callable[[], Any]
    on_callable: Callable[[Callable[..., Any]], Any]
    on_structured: Callable[[Any], Any]
    on_literal: Callable[[Any], Any]
    reenter: Callable[[Any], bool] = never


async def resolve(value: Any, strategy: ResolutionStrategy) -> Any:
    """Resolve a descriptor value according to the given strategy.

    Args:
        value: The raw descriptor value.
        strategy: Context-specific handling for each kind of value.

    Returns:
        The concrete value or compiled callback.

    Raises:
        CallProcessingError: If awaiting the value or evaluating a callable fails,
            or if the strategy rejects the value.
    """
    if value is None:
        return strategy.absent()

    if inspect.isawaitable(value):
        try:
            awaited = await value
        except Exception as e:
            raise CallProcessingError(
                f"Error thrown while awaiting {strategy.description}", strategy.step, e
            ) from e
        return await resolve(awaited, strategy)

    if callable(value):
        try:
            result = strategy.on_callable(value)
        except CallProcessingError:
            raise
        except Exception as e:
            raise CallProcessingError(
                f"Error thrown when evaluating {strategy.description}", strategy.step, e
            ) from e
        if strategy.reenter(result):
            return await resolve(result, strategy)
        return result

    if is_structured(value):
        return strategy.on_structured(value)

    return strategy.on_literal(value)


def callback_strategy(
    step: str,
    description: str,
    dispatch: Callable[[Any], Any],
    wrap: Callable[[Callable[..., Any]], Callable[..., Any]],
    *,
    absent: Callable[..., Any] = noop,
) -> ResolutionStrategy:
    """Build a strategy that compiles a hook-like value into a callback.

    Functions are wrapped by ``wrap`` and never called during resolution,
    payloads are dispatched verbatim and literals as ``{"type": value}``.
    """
    return ResolutionStrategy(
        step=step,
        description=description,
        absent=lambda: absent,
        on_callable=wrap,
        on_structured=lambda payload: lambda *args, **kwargs: dispatch(payload),
        on_literal=lambda tag: lambda *args, **kwargs: dispatch({"type": tag}),
    )
