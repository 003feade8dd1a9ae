"""Remote call client.

Turns a ResourceDescriptor into exactly one HTTP exchange:

    from remote_resource import RemoteResourceClient, ResourceDescriptor

    client = RemoteResourceClient(dispatch=store.dispatch, get_state=store.get_state)

    await client.call(
        ResourceDescriptor(
            uri="https://api.example.com/users",
            headers={"Authorization": lambda state: f"Bearer {state['token']}"},
            lifecycle={"request": "USERS_REQUEST", "success": on_users},
        )
    )
"""

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from remote_resource._internal.builders import (
    build_headers,
    build_query,
    cache_lookup,
    compile_failure_hook,
    make_remote_call_hooks,
    make_status_actions,
    parse_body,
)
from remote_resource._internal.builders.hooks import default_failure
from remote_resource._internal.executor import route_response, send_request, settle
from remote_resource._internal.redaction import redact_mapping
from remote_resource.exceptions import ArgumentError, CallProcessingError
from remote_resource.models import (
    CallOutcome,
    CompiledHooks,
    Dispatch,
    GlobalConfig,
    Request,
    ResourceDescriptor,
)


def _no_state() -> Any:
    return None


class RemoteResourceClient:
    """Resolves call descriptors and performs the remote call.

    Every resolution (cache lookup, headers, query, body, status actions and
    lifecycle hooks) runs concurrently before any network activity. Any
    failure is reported through the failure hook and no request is sent.

    Use `RemoteResourceClient.from_env()` to build the configuration from
    environment variables.
    """

    def __init__(
        self,
        config: GlobalConfig | None = None,
        *,
        dispatch: Dispatch,
        get_state: Callable[[], Any] = _no_state,
    ) -> None:
        """Initialize the client.

        Args:
            config: Global configuration shared by every call.
            dispatch: Function receiving the actions emitted by hooks.
            get_state: Returns the current application state snapshot.
        """
        self._config = config or GlobalConfig()
        self._dispatch = dispatch
        self._get_state = get_state
        self._debug = self._config.debug

    @classmethod
    def from_env(
        cls,
        *,
        dispatch: Dispatch,
        get_state: Callable[[], Any] = _no_state,
        **overrides: Any,
    ) -> "RemoteResourceClient":
        """Create a client whose configuration comes from environment variables.

        See `GlobalConfig.from_env()` for the variables read.
        """
        return cls(GlobalConfig.from_env(**overrides), dispatch=dispatch, get_state=get_state)

    @property
    def config(self) -> GlobalConfig:
        return self._config

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            import sys

            print(f"[remote-resource] {message}", file=sys.stderr)

    def _coerce(self, descriptor: ResourceDescriptor | Mapping[str, Any]) -> ResourceDescriptor:
        if isinstance(descriptor, ResourceDescriptor):
            return descriptor
        try:
            return ResourceDescriptor.model_validate(descriptor)
        except ValidationError as e:
            raise ArgumentError(f"Invalid call descriptor: {e}") from e

    async def call(self, descriptor: ResourceDescriptor | Mapping[str, Any]) -> CallOutcome:
        """Resolve the descriptor and perform the remote call.

        Exactly one of the status action, success hook or failure hook fires.
        Processing and transport errors never escape: they are reported
        through the failure hook.

        Args:
            descriptor: The call descriptor, or a mapping of its fields.

        Returns:
            Which outcome was delivered.
        """
        try:
            descriptor = self._coerce(descriptor)
        except ArgumentError as e:
            self._log_debug(f"Rejected descriptor: {e}")
            await settle(default_failure(self._dispatch)(e))
            return "error"

        if not descriptor.uri:
            return await self._report_argument_error(descriptor, ArgumentError("Must include URI"))

        state = self._get_state()
        config = self._config
        method = descriptor.method.upper()

        cache_task = asyncio.ensure_future(
            cache_lookup(state, method, descriptor.cache_mapping, descriptor.nocache)
        )
        hooks_task = asyncio.ensure_future(
            make_remote_call_hooks(descriptor.lifecycle, self._dispatch)
        )

        try:
            cached, headers, query, body, status_actions, hooks = await asyncio.gather(
                cache_task,
                build_headers(state, descriptor.headers, descriptor.body, config.injected_headers),
                build_query(descriptor.query),
                parse_body(state, descriptor.body),
                make_status_actions(
                    config.status_actions,
                    self._dispatch,
                    bypass=descriptor.bypass_status_actions,
                ),
                hooks_task,
            )
        except Exception as error:
            return await self._report_error(error, hooks_task)

        if cached is not False:
            self._log_debug(f"Cache hit for {method} {descriptor.uri}")
            await settle(hooks.on_call_success(cached, None))
            return "cache_hit"

        request = Request(
            uri=descriptor.uri,
            method=method,
            headers=headers,
            body=body,
            query=query,
            request_opts={**config.request_opts, **descriptor.request_opts},
        )
        transport = descriptor.transport or config.transport

        self._log_debug(
            f"Sending {request.method} {request.uri} "
            f"headers={redact_mapping(request.headers)} opts={redact_mapping(request.request_opts)}"
        )
        try:
            response = await send_request(request, hooks, transport)
        except Exception as error:
            return await self._report_error(error, hooks_task)

        self._log_debug(f"Received {response.status_code} for {request.method} {request.uri}")
        return await route_response(response, status_actions, hooks)

    async def _report_argument_error(
        self, descriptor: ResourceDescriptor, error: ArgumentError
    ) -> CallOutcome:
        self._log_debug(f"Argument error: {error}")
        try:
            on_error = await compile_failure_hook(descriptor.lifecycle.failure, self._dispatch)
        except CallProcessingError:
            on_error = default_failure(self._dispatch)
        await settle(on_error(error))
        return "error"

    async def _report_error(self, error: Exception, hooks_task: "asyncio.Future[CompiledHooks]") -> CallOutcome:
        """Route a pipeline error to the compiled failure hook.

        Falls back to the generic reporter when the hooks themselves failed.
        """
        if isinstance(error, CallProcessingError):
            self._log_debug(f"Processing failed at {error.step}: {error}")
        else:
            self._log_debug(f"Remote call failed: {error!r}")

        await asyncio.wait([hooks_task])
        if hooks_task.exception() is None:
            on_error = hooks_task.result().on_error
        else:
            on_error = default_failure(self._dispatch)

        await settle(on_error(error))
        return "error"
