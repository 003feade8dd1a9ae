"""Internal modules for remote-resource.

WARNING: These modules back RemoteResourceClient and are not a stable API.

Modules:
    resolver - Generic value resolution
    builders - Concurrent request builders
    executor - Request execution and response routing
    http - Default httpx transport
    redaction - Redaction of sensitive values in debug logs
"""
