"""Query string building."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from remote_resource._internal.resolver import dump_json, is_structured
from remote_resource.exceptions import CallProcessingError

STEP_NAME = "#buildQuery"

# Characters encodeURIComponent leaves alone besides alphanumerics.
_SAFE = "-_.!~*'()"


def _encode(text: str) -> str:
    return quote(text, safe=_SAFE)


def _query_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, bool):
        return dump_json(value)
    if is_structured(value):
        try:
            return dump_json(value)
        except (TypeError, ValueError) as e:
            raise CallProcessingError("Error serializing query param", STEP_NAME, e) from e
    if isinstance(value, bytes):
        return value.decode()
    return str(value)


async def build_query(params: Any = None) -> str:
    """Build a query string that can be attached to a URI.

    Parameters must be flat; structured values are sent as JSON strings.

    Args:
        params: Mapping of query parameters.

    Returns:
        The query string, always starting with "?".

    Raises:
        CallProcessingError: If params is not a mapping.
    """
    if params is None:
        params = {}
    if not isinstance(params, Mapping):
        raise CallProcessingError("Query params must be object", STEP_NAME)

    query_string = "&".join(
        f"{_encode(str(key))}={_encode(_query_text(value))}" for key, value in params.items()
    )
    return f"?{query_string}"
