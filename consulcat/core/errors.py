"""
Error taxonomy for consulcat.

Runtime failures (network, HTTP status, payload shape) derive from
ConsulError. Passing a parameter an operation does not accept is a
programming error and raises ParameterContractError, a TypeError, before any
request is built.
"""

from __future__ import annotations

from consulcat.datastructures.type_aliases import UrlPath


class ConsulError(Exception):
    """Base exception for consulcat runtime errors."""

    pass


class TransportError(ConsulError):
    """Base exception for transport-related errors."""

    pass


class TransportConnectionError(TransportError):
    """Raised when the agent cannot be reached."""

    pass


class TransportTimeoutError(TransportError):
    """Raised when a request does not complete in time."""

    pass


class BadStatus(TransportError):
    """Raised when the agent answers with a non-2xx status."""

    def __init__(self, status: int, message: str = "", path: UrlPath = "") -> None:
        self.status = int(status)
        self.message = message
        self.path = path
        detail = f": {message}" if message else ""
        location = f" for {path}" if path else ""
        super().__init__(f"HTTP {self.status}{location}{detail}")


class NotFoundError(BadStatus):
    """Raised on HTTP 404."""

    pass


class DecodeError(ConsulError, ValueError):
    """Raised when a response body does not have the expected shape."""

    pass


class ParameterContractError(TypeError):
    """Raised when an operation receives a parameter it does not accept."""

    pass
