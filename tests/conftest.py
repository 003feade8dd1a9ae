"""Shared fixtures."""

from typing import Any

import httpx
import pytest


class MockTransport:
    """Transport returning a canned response and recording every call."""

    def __init__(self, status: int = 200, json: Any = None, content: bytes = b"") -> None:
        if json is not None:
            self.response = httpx.Response(status, json=json)
        else:
            self.response = httpx.Response(status, content=content)
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def __call__(self, uri: str, options: dict[str, Any]) -> httpx.Response:
        self.calls.append((uri, options))
        return self.response

    @property
    def called(self) -> bool:
        return bool(self.calls)

    @property
    def last_uri(self) -> str:
        return self.calls[-1][0]

    @property
    def last_options(self) -> dict[str, Any]:
        return self.calls[-1][1]


@pytest.fixture
def mock_transport():
    """Factory for MockTransport instances."""
    return MockTransport


@pytest.fixture
def dispatched() -> list[Any]:
    """Actions collected by the ``dispatch`` fixture."""
    return []


@pytest.fixture
def dispatch(dispatched):
    return dispatched.append
