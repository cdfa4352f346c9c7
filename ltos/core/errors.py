"""
Custom exception hierarchy for LTOS.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.

Most intents never fail: empty notes and unknown goal ids degrade to a
no-op, and a malformed store falls back to the seed snapshot. The classes
below cover the few inputs that are ill-typed rather than merely empty.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from ltos.schemas.common import ErrorDetail, ErrorResponse

logger = logging.getLogger("ltos.errors")


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class LTOSException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class UnknownRitualItemError(LTOSException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "UNKNOWN_RITUAL_ITEM"

    def __init__(self, period: str, item_id: str):
        super().__init__(
            message=f"Ritual item {item_id!r} is not part of the {period} ritual.",
            details={"period": period, "item_id": item_id},
        )


class MalformedSnapshotError(LTOSException):
    """Stored document could not be read back as a snapshot."""
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "MALFORMED_SNAPSHOT"

    def __init__(self, reason: str, key: str | None = None):
        super().__init__(
            message=f"Stored snapshot is not well-formed: {reason}",
            details={"key": key} if key else {},
        )
        self.reason = reason


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def ltos_exception_handler(request: Request, exc: LTOSException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = [
        ErrorDetail(
            field=".".join(str(loc) for loc in error["loc"] if loc != "body"),
            message=error["msg"],
            type=error["type"],
        )
        for error in exc.errors()
    ]
    envelope = ErrorResponse(
        code="VALIDATION_ERROR",
        message="Request validation failed.",
        details={"errors": [e.model_dump() for e in field_errors]},
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=envelope.model_dump(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
