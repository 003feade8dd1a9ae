"""Redaction of sensitive values before they reach debug logs."""

from typing import Any

REDACT_KEYS: frozenset[str] = frozenset({
    "authorization",
    "proxy-authorization",
    "cookie",
    "cookies",
    "set-cookie",
    "x-api-key",
    "api-key",
    "api_key",
    "auth",
    "token",
    "password",
    "secret",
})

REDACTED_VALUE = "[REDACTED]"


def redact_mapping(mapping: dict[str, Any]) -> dict[str, Any]:
    """Redact sensitive entries of a header map or of request options.

    Nested option maps (``params``, ``data``) are redacted one level down.
    Returns a copy; the original mapping is never mutated.
    """
    return {key: _redact_entry(key, value, nested=True) for key, value in mapping.items()}


def _redact_entry(key: Any, value: Any, *, nested: bool) -> Any:
    if isinstance(key, str) and key.lower() in REDACT_KEYS:
        return REDACTED_VALUE
    if nested and isinstance(value, dict):
        return {k: _redact_entry(k, v, nested=False) for k, v in value.items()}
    return value
