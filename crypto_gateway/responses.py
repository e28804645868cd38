"""Error envelopes returned to callers.

Successful results are returned as bare payloads through each route's
response model; every failure becomes ``{code, message}``.
"""
from __future__ import annotations

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from crypto_gateway.errors import GatewayError, STATUS_CODES, ErrorKind, classify
from crypto_gateway.schemas import ErrorResponse

INTERNAL_MESSAGE = "Internal server error"


def flatten_validation_errors(exc: RequestValidationError) -> str:
    """Return a concise, stable validation message string."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(i) for i in err.get("loc", []) if i != "body")
        msg = err.get("msg", "Invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


def error_payload(exc: BaseException) -> tuple[ErrorResponse, int]:
    """Build the envelope and status for ``exc``.

    Messages of unexpected exceptions are replaced so that no internal detail
    leaves the process.
    """
    _, status = classify(exc)
    message = str(exc) if isinstance(exc, GatewayError) else INTERNAL_MESSAGE
    return ErrorResponse(code=status, message=message or INTERNAL_MESSAGE), status


def error_response(exc: BaseException) -> JSONResponse:
    payload, status = error_payload(exc)
    return JSONResponse(status_code=status, content=payload.model_dump())


def validation_error_response(exc: RequestValidationError) -> JSONResponse:
    status = STATUS_CODES[ErrorKind.VALIDATION]
    payload = ErrorResponse(code=status, message=flatten_validation_errors(exc))
    return JSONResponse(status_code=status, content=payload.model_dump())
