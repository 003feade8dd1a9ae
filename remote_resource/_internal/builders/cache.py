"""Cache lookup gate."""

import inspect
from collections.abc import Callable
from typing import Any

from remote_resource.exceptions import CallProcessingError

STEP_NAME = "#cacheLookup"

MUTATING_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def is_cacheable_request(method: str) -> bool:
    """Check if an HTTP verb may be served from the cache."""
    return method.upper() not in MUTATING_METHODS


async def cache_lookup(
    state: Any,
    method: str,
    cache_mapping: Callable[[Any], Any] | None,
    nocache: bool = False,
) -> Any:
    """Consult the cache mapping for an already known value.

    Never runs for mutating verbs like POST.

    Returns:
        The cached value, or False if the cache couldn't/shouldn't be used.
    """
    if not is_cacheable_request(method) or cache_mapping is None or nocache:
        return False

    try:
        result = cache_mapping(state)
        while inspect.isawaitable(result):
            result = await result
    except Exception as e:
        raise CallProcessingError("Error thrown while evaluating cache mapping", STEP_NAME, e) from e

    return result or False
