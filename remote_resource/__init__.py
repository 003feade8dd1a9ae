"""remote-resource: declarative, asynchronous remote calls.

Public API:
    RemoteResourceClient - Resolves call descriptors and performs the call
    ResourceDescriptor, Lifecycle, GlobalConfig - Call and client configuration
    RequestEvent, SuccessEvent, FailureEvent, StatusEvent - Hook events

Internal (not for direct use):
    _internal.builders - Concurrent request builders
    _internal.executor - Request execution and response routing
"""

from remote_resource._internal.http import Transport, httpx_transport
from remote_resource._version import __version__
from remote_resource.client import RemoteResourceClient
from remote_resource.exceptions import (
    ArgumentError,
    CallProcessingError,
    RemoteCallError,
    RemoteResourceError,
)
from remote_resource.models import (
    REMOTE_RESOURCE_ERROR,
    FailureEvent,
    GlobalConfig,
    HookEvent,
    Lifecycle,
    RequestEvent,
    ResourceDescriptor,
    StatusEvent,
    SuccessEvent,
)

__all__ = [
    "__version__",
    "RemoteResourceClient",
    "ResourceDescriptor",
    "Lifecycle",
    "GlobalConfig",
    "Transport",
    "httpx_transport",
    "HookEvent",
    "RequestEvent",
    "SuccessEvent",
    "FailureEvent",
    "StatusEvent",
    "REMOTE_RESOURCE_ERROR",
    "RemoteResourceError",
    "ArgumentError",
    "CallProcessingError",
    "RemoteCallError",
]
