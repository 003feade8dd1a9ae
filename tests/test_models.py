"""Tests for descriptor, configuration and event models."""

import os
from unittest.mock import MagicMock, patch

import httpx
import pytest
from pydantic import TypeAdapter, ValidationError

from remote_resource._internal.http import httpx_transport
from remote_resource.exceptions import RemoteCallError
from remote_resource.models import (
    CompiledHooks,
    FailureEvent,
    GlobalConfig,
    HookEvent,
    Lifecycle,
    RequestEvent,
    ResourceDescriptor,
    StatusEvent,
    SuccessEvent,
    derive_error_message,
)


class TestResourceDescriptor:
    """Tests for ResourceDescriptor."""

    def test_defaults(self):
        """Should apply the documented defaults."""
        descriptor = ResourceDescriptor(uri="localhost/someapi")
        assert descriptor.method == "GET"
        assert descriptor.headers == {}
        assert descriptor.body is None
        assert descriptor.query == {}
        assert descriptor.cache_mapping is None
        assert descriptor.nocache is False
        assert descriptor.bypass_status_actions is False
        assert descriptor.request_opts == {}
        assert descriptor.lifecycle == Lifecycle()
        assert descriptor.transport is None

    def test_lifecycle_from_mapping(self):
        """Should build the lifecycle from a plain mapping."""
        descriptor = ResourceDescriptor(uri="x", lifecycle={"request": "REQUEST"})
        assert descriptor.lifecycle.request == "REQUEST"
        assert descriptor.lifecycle.success is None

    def test_is_frozen(self):
        """Descriptors are immutable once built."""
        descriptor = ResourceDescriptor(uri="x")
        with pytest.raises(ValidationError):
            descriptor.uri = "y"  # type: ignore[misc]

    def test_cache_mapping_must_be_callable(self):
        """Should reject a non-callable cache mapping."""
        with pytest.raises(ValidationError):
            ResourceDescriptor(uri="x", cache_mapping="nope")


class TestGlobalConfig:
    """Tests for GlobalConfig."""

    def test_defaults(self):
        """Should default to the httpx transport and no injected values."""
        config = GlobalConfig()
        assert config.injected_headers == {}
        assert config.status_actions == {}
        assert config.request_opts == {}
        assert config.transport is httpx_transport
        assert config.debug is False

    def test_status_codes_coerced_to_int(self):
        """Should accept string status codes."""
        config = GlobalConfig(status_actions={"401": "UNAUTHORIZED"})
        assert config.status_actions == {401: "UNAUTHORIZED"}

    def test_from_env_empty(self):
        """Should use defaults when no variables are set."""
        with patch.dict(os.environ, {}, clear=True):
            config = GlobalConfig.from_env()
        assert config.debug is False
        assert config.injected_headers == {}

    def test_from_env_with_all_vars(self):
        """Should read debug flag and injected headers."""
        env = {
            "REMOTE_RESOURCE_DEBUG": "1",
            "REMOTE_RESOURCE_INJECTED_HEADERS": '{"X-Client": "web"}',
        }
        with patch.dict(os.environ, env, clear=True):
            config = GlobalConfig.from_env()
        assert config.debug is True
        assert config.injected_headers == {"X-Client": "web"}

    def test_from_env_overrides_win(self):
        """Keyword overrides should take precedence over the environment."""
        env = {"REMOTE_RESOURCE_DEBUG": "1"}
        with patch.dict(os.environ, env, clear=True):
            config = GlobalConfig.from_env(debug=False, request_opts={"follow_redirects": True})
        assert config.debug is False
        assert config.request_opts == {"follow_redirects": True}

    def test_from_env_malformed_headers_raises(self):
        """Should raise ValueError when injected headers are not valid JSON."""
        env = {"REMOTE_RESOURCE_INJECTED_HEADERS": "not json"}
        with patch.dict(os.environ, env, clear=True), pytest.raises(ValueError):
            GlobalConfig.from_env()

    def test_from_env_non_object_headers_raises(self):
        """Should raise ValueError when injected headers are not a JSON object."""
        env = {"REMOTE_RESOURCE_INJECTED_HEADERS": '["a", "b"]'}
        with patch.dict(os.environ, env, clear=True), pytest.raises(ValueError):
            GlobalConfig.from_env()


class TestHookEvents:
    """Tests for the hook event variants."""

    def test_kinds(self):
        """Each event should carry its own kind tag."""
        response = httpx.Response(200)
        assert RequestEvent(dispatch=print).kind == "request"
        assert SuccessEvent(data={}, dispatch=print).kind == "success"
        assert FailureEvent(error=ValueError(), dispatch=print).kind == "failure"
        assert StatusEvent(status=200, response=response, dispatch=print).kind == "status"

    def test_discriminated_union(self):
        """HookEvent should pick the variant from the kind tag."""
        adapter = TypeAdapter(HookEvent)
        event = adapter.validate_python({"kind": "success", "data": [1], "dispatch": print})
        assert isinstance(event, SuccessEvent)
        assert event.data == [1]

    def test_failure_event_requires_exception(self):
        """FailureEvent should only accept exceptions as error."""
        with pytest.raises(ValidationError):
            FailureEvent(error="not an error", dispatch=print)


class TestDeriveErrorMessage:
    """Tests for derive_error_message()."""

    def test_prefers_error_key(self):
        response = httpx.Response(400)
        assert derive_error_message({"error": "bad", "err": "worse"}, response) == "bad"

    def test_falls_back_to_err_key(self):
        response = httpx.Response(400)
        assert derive_error_message({"err": "worse"}, response) == "worse"

    def test_falls_back_to_reason_phrase(self):
        """Should use the status text when the payload has no error."""
        response = httpx.Response(404)
        assert derive_error_message({}, response) == "Not Found"
        assert derive_error_message(["list"], response) == "Not Found"


class TestCompiledHooks:
    """Tests for CompiledHooks.on_call_failure()."""

    def test_on_call_failure_builds_remote_call_error(self):
        """Should pass a RemoteCallError, data and response to on_error."""
        on_error = MagicMock()
        hooks = CompiledHooks(
            on_before_call=lambda: None,
            on_call_success=lambda data, response: None,
            on_error=on_error,
        )
        response = httpx.Response(422, json={"error": "Invalid"})

        hooks.on_call_failure(422, {"error": "Invalid"}, response)

        error, data, passed_response = on_error.call_args.args
        assert isinstance(error, RemoteCallError)
        assert error.message == "Invalid"
        assert error.status_code == 422
        assert error.response is response
        assert data == {"error": "Invalid"}
        assert passed_response is response
