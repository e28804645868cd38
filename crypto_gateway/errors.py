"""Error hierarchy and classification for the gateway.

Stores raise these explicitly so that callers never have to compare against a
driver-specific "key missing" value. ``classify`` maps any exception to an
``ErrorKind`` and the status code the transport should answer with.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    INTERNAL = "INTERNAL"
    VALIDATION = "VALIDATION"


STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
    # Rejected input is reported to callers as 500.
    ErrorKind.VALIDATION: 500,
}


class GatewayError(Exception):
    """Base error for the gateway."""

    kind = ErrorKind.INTERNAL


class NotFoundError(GatewayError):
    """Raised when a well-formed lookup finds no entity in the store."""

    kind = ErrorKind.NOT_FOUND


class BackendError(GatewayError):
    """Raised when a backing store is unavailable or fails unexpectedly."""

    kind = ErrorKind.INTERNAL


class InvalidRequestError(GatewayError):
    """Raised when request input is missing, malformed or out of range."""

    kind = ErrorKind.VALIDATION


def classify(exc: BaseException) -> tuple[ErrorKind, int]:
    """Return the error kind and status code for ``exc``.

    Only the exception type is inspected, never its message.
    """
    kind = exc.kind if isinstance(exc, GatewayError) else ErrorKind.INTERNAL
    return kind, STATUS_CODES[kind]
