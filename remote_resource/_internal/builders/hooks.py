"""Lifecycle hook compilation."""

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

from remote_resource._internal.resolver import ResolutionStrategy, callback_strategy, resolve
from remote_resource.models import (
    REMOTE_RESOURCE_ERROR,
    CompiledHooks,
    Dispatch,
    FailureEvent,
    Lifecycle,
    RequestEvent,
    SuccessEvent,
)

STEP_NAME = "#makeRemoteCallHooks"


def default_failure(dispatch: Dispatch) -> Callable[..., Any]:
    """Generic error reporter used when no failure hook is given."""

    def on_error(error: Exception, data: Any = None, response: Any = None) -> Any:
        return dispatch({"type": REMOTE_RESOURCE_ERROR, "error": error})

    return on_error


def _request_strategy(dispatch: Dispatch) -> ResolutionStrategy:
    def wrap(fn: Callable[..., Any]) -> Callable[[], Any]:
        return lambda: fn(RequestEvent(dispatch=dispatch))

    return callback_strategy(STEP_NAME, "request hook", dispatch, wrap)


def _success_strategy(dispatch: Dispatch) -> ResolutionStrategy:
    def wrap(fn: Callable[..., Any]) -> Callable[..., Any]:
        def on_success(data: Any = None, response: Any = None) -> Any:
            return fn(SuccessEvent(data=data, response=response, dispatch=dispatch))

        return on_success

    return callback_strategy(STEP_NAME, "success hook", dispatch, wrap)


def _failure_strategy(dispatch: Dispatch) -> ResolutionStrategy:
    def wrap(fn: Callable[..., Any]) -> Callable[..., Any]:
        def on_error(error: Exception, data: Any = None, response: Any = None) -> Any:
            return fn(FailureEvent(error=error, data=data, response=response, dispatch=dispatch))

        return on_error

    def payload(value: Any) -> Callable[..., Any]:
        if isinstance(value, Mapping):
            return lambda error, *args, **kwargs: dispatch({**value, "error": error})
        return lambda *args, **kwargs: dispatch(value)

    def action_type(tag: Any) -> Callable[..., Any]:
        return lambda error, *args, **kwargs: dispatch({"type": tag, "error": error})

    return ResolutionStrategy(
        step=STEP_NAME,
        description="failure hook",
        absent=lambda: default_failure(dispatch),
        on_callable=wrap,
        on_structured=payload,
        on_literal=action_type,
    )


async def compile_failure_hook(value: Any, dispatch: Dispatch) -> Callable[..., Any]:
    """Compile only the failure hook into ``on_error(error, data, response)``."""
    return await resolve(value, _failure_strategy(dispatch))


async def make_remote_call_hooks(lifecycle: Lifecycle, dispatch: Dispatch) -> CompiledHooks:
    """Compile the lifecycle hooks, giving each one its call signature.

    Omitted request and success hooks become no-ops; an omitted failure hook
    dispatches a generic ``@@REMOTE_RESOURCE_ERROR`` action.

    Args:
        lifecycle: The user lifecycle hooks.
        dispatch: Dispatch function handed to hooks.

    Returns:
        The compiled hooks.

    Raises:
        CallProcessingError: If any hook fails to resolve.
    """
    on_before_call, on_call_success, on_error = await asyncio.gather(
        resolve(lifecycle.request, _request_strategy(dispatch)),
        resolve(lifecycle.success, _success_strategy(dispatch)),
        compile_failure_hook(lifecycle.failure, dispatch),
    )
    return CompiledHooks(
        on_before_call=on_before_call,
        on_call_success=on_call_success,
        on_error=on_error,
    )
