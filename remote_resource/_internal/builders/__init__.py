"""Builders run concurrently to turn a descriptor into request parts.

Modules:
    headers - Header map resolution
    query - Query string building
    body - Body resolution
    cache - Cache lookup gate
    status_actions - Status action compilation
    hooks - Lifecycle hook compilation
"""

from remote_resource._internal.builders.body import parse_body
from remote_resource._internal.builders.cache import cache_lookup, is_cacheable_request
from remote_resource._internal.builders.headers import build_headers
from remote_resource._internal.builders.hooks import compile_failure_hook, make_remote_call_hooks
from remote_resource._internal.builders.query import build_query
from remote_resource._internal.builders.status_actions import make_status_actions

__all__ = [
    "build_headers",
    "build_query",
    "cache_lookup",
    "compile_failure_hook",
    "is_cacheable_request",
    "make_remote_call_hooks",
    "make_status_actions",
    "parse_body",
]
