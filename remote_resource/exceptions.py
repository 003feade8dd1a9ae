"""Public exceptions for remote-resource."""

from typing import Any


class RemoteResourceError(Exception):
    """Base exception for all remote-resource errors."""


class ArgumentError(RemoteResourceError):
    """Invalid call descriptor (missing URI, malformed descriptor mapping)."""


class CallProcessingError(RemoteResourceError):
    """Error raised while resolving part of a remote call.

    Attributes:
        step: Name of the pipeline step that failed (e.g. ``#buildHeaders``).
        source_error: The underlying exception, if any.
    """

    def __init__(self, message: str, step: str, source_error: BaseException | None = None) -> None:
        if source_error is not None:
            message = f"{message}\nOriginal Error: {source_error}"
        super().__init__(message)
        self.step = step
        self.source_error = source_error


class RemoteCallError(RemoteResourceError):
    """Completed exchange with a status outside the 2xx range."""

    def __init__(
        self,
        message: str,
        status_code: int,
        response: Any = None,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response
        self.data = data
