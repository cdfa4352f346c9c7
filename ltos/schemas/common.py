"""
Error envelope schemas.

Every 4xx/5xx body is `{code, message, details}`. Request validation
failures put one ErrorDetail per offending field under `details.errors`.
"""
from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """One rejected request field."""
    field: str = Field(description="Dotted location, e.g. `cycle_start` or `note`.")
    message: str
    type: str = Field(description="Pydantic error type, e.g. `date_from_datetime_parsing`.")


class ErrorResponse(BaseModel):
    code: str = Field(examples=["UNKNOWN_RITUAL_ITEM"])
    message: str
    details: Optional[dict[str, Any]] = None


# Shared `responses=` entry for routes that take an intent body or path enum.
INTENT_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    422: {
        "model": ErrorResponse,
        "description": "VALIDATION_ERROR with `details.errors` as a list of ErrorDetail.",
    },
}
