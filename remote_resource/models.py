"""Pydantic models for remote call descriptors, configuration and hook events."""

import json
import os
from collections.abc import Callable
from typing import Annotated, Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field

from remote_resource._internal.http import Transport, httpx_transport
from remote_resource.exceptions import RemoteCallError

# =============================================================================
# Constants
# =============================================================================

DEFAULT_METHOD = "GET"
REMOTE_RESOURCE_ERROR = "@@REMOTE_RESOURCE_ERROR"

Dispatch = Callable[[Any], Any]

CallOutcome = Literal["cache_hit", "status_action", "success", "failure", "error"]

_MODEL_CONFIG = ConfigDict(frozen=True, arbitrary_types_allowed=True)

# =============================================================================
# Descriptor & Configuration
# =============================================================================


class Lifecycle(BaseModel):
    """Lifecycle hook values for a single remote call.

    Each hook may be omitted, an action type, a payload mapping, a function
    receiving the matching event, or an awaitable of any of these.
    """

    model_config = _MODEL_CONFIG

    request: Any = None
    success: Any = None
    failure: Any = None


class ResourceDescriptor(BaseModel):
    """Declarative description of one remote call.

    Required fields:
        uri: Target URI (an empty URI is reported as an ArgumentError)

    Optional fields:
        method: HTTP verb, case-insensitive (default: "GET")
        headers: Header name -> literal, False, function of state, or awaitable
        body: Request body value
        query: Flat query parameter mapping
        cache_mapping: Function of state returning a cached value or False
        nocache: Skip the cache lookup
        bypass_status_actions: Ignore globally configured status actions
        request_opts: Extra transport options, merged over the global ones
        lifecycle: Request / success / failure hooks
        transport: Per-call transport override
    """

    model_config = _MODEL_CONFIG

    uri: str = ""
    method: str = DEFAULT_METHOD
    headers: dict[str, Any] = Field(default_factory=dict)
    body: Any = None
    query: Any = Field(default_factory=dict)
    cache_mapping: Callable[[Any], Any] | None = None
    nocache: bool = False
    bypass_status_actions: bool = False
    request_opts: dict[str, Any] = Field(default_factory=dict)
    lifecycle: Lifecycle = Field(default_factory=Lifecycle)
    transport: Transport | None = None


class GlobalConfig(BaseModel):
    """Configuration shared by every call made through a client."""

    model_config = _MODEL_CONFIG

    injected_headers: dict[str, Any] = Field(default_factory=dict)
    status_actions: dict[int, Any] = Field(default_factory=dict)
    request_opts: dict[str, Any] = Field(default_factory=dict)
    transport: Transport = httpx_transport
    debug: bool = False

    @classmethod
    def from_env(cls, **overrides: Any) -> "GlobalConfig":
        """Create a configuration from environment variables.

        Optional environment variables:
            REMOTE_RESOURCE_DEBUG: Set to "1" to enable debug logging.
            REMOTE_RESOURCE_INJECTED_HEADERS: JSON object of headers injected
                on every outgoing request.

        Args:
            **overrides: Field values that take precedence over the environment.

        Returns:
            A GlobalConfig instance.

        Raises:
            ValueError: If REMOTE_RESOURCE_INJECTED_HEADERS is not a JSON object.
        """
        values: dict[str, Any] = {
            "debug": os.environ.get("REMOTE_RESOURCE_DEBUG", "") == "1",
        }

        raw_headers = os.environ.get("REMOTE_RESOURCE_INJECTED_HEADERS")
        if raw_headers:
            injected = json.loads(raw_headers)
            if not isinstance(injected, dict):
                raise ValueError("REMOTE_RESOURCE_INJECTED_HEADERS must be a JSON object")
            values["injected_headers"] = injected

        values.update(overrides)
        return cls(**values)


class Request(BaseModel):
    """Fully resolved request handed to the executor."""

    model_config = _MODEL_CONFIG

    uri: str
    method: str = DEFAULT_METHOD
    headers: dict[str, Any] = Field(default_factory=dict)
    body: Any = None
    query: str = "?"
    request_opts: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Hook Events
# =============================================================================


class RequestEvent(BaseModel):
    """Passed to a request hook function just before the transport call."""

    model_config = _MODEL_CONFIG

    kind: Literal["request"] = "request"
    dispatch: Dispatch


class SuccessEvent(BaseModel):
    """Passed to a success hook function.

    ``response`` is None when the data came from a cache hit.
    """

    model_config = _MODEL_CONFIG

    kind: Literal["success"] = "success"
    data: Any = None
    response: httpx.Response | None = None
    dispatch: Dispatch


class FailureEvent(BaseModel):
    """Passed to a failure hook function.

    ``data`` and ``response`` are only set for completed exchanges.
    """

    model_config = _MODEL_CONFIG

    kind: Literal["failure"] = "failure"
    error: Exception
    data: Any = None
    response: httpx.Response | None = None
    dispatch: Dispatch


class StatusEvent(BaseModel):
    """Passed to a status action function."""

    model_config = _MODEL_CONFIG

    kind: Literal["status"] = "status"
    status: int
    response: httpx.Response
    dispatch: Dispatch


HookEvent = Annotated[
    RequestEvent | SuccessEvent | FailureEvent | StatusEvent,
    Field(discriminator="kind"),
]

# =============================================================================
# Compiled Artifacts
# =============================================================================


def derive_error_message(data: Any, response: httpx.Response | None) -> str:
    """Pick the error text for a failed exchange.

    Priority: ``data["error"]``, ``data["err"]``, then the response reason phrase.
    """
    message = None
    if isinstance(data, dict):
        message = data.get("error") or data.get("err")
    if not message and response is not None:
        message = response.reason_phrase
    return str(message or "")


class CompiledHooks(BaseModel):
    """Lifecycle hooks with fixed call signatures."""

    model_config = _MODEL_CONFIG

    on_before_call: Callable[[], Any]
    on_call_success: Callable[[Any, httpx.Response | None], Any]
    on_error: Callable[..., Any]

    def on_call_failure(self, status: int, data: Any, response: httpx.Response) -> Any:
        """Report a completed, non-2xx exchange through ``on_error``."""
        error = RemoteCallError(
            derive_error_message(data, response),
            status_code=status,
            response=response,
            data=data,
        )
        return self.on_error(error, data, response)
