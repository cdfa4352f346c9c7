"""
Request bodies for the intent endpoints.

PATCH /state/profile              → ProfileUpdateRequest
PUT   /state/resilience/{field}   → ResilienceUpdateRequest
POST  /pillars/{pillar}/actions   → LogActionRequest
PATCH /goals/{goal_id}            → GoalUpdateRequest
"""
from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, Field


class ProfileUpdateRequest(BaseModel):
    """Any subset of the profile fields; omitted fields are left alone."""
    mantra: Optional[Annotated[str, Field(max_length=500)]] = Field(
        default=None,
        examples=["I act as my future self, today."],
    )
    theme_dark: Optional[bool] = None
    # Local midnight of any of these days is a storable instant in every zone.
    cycle_start: Optional[Annotated[date, Field(ge=date(1, 1, 3), le=date(9999, 12, 29))]] = Field(
        default=None,
        description="First day of the 90-day cycle (local calendar day).",
        examples=["2026-10-01"],
    )


class ResilienceUpdateRequest(BaseModel):
    text: Annotated[str, Field(max_length=10_000)]


class LogActionRequest(BaseModel):
    # Empty or blank notes are accepted and ignored, never rejected.
    note: Annotated[str, Field(
        max_length=2_000,
        description="What was done. Blank notes leave the log unchanged.",
        examples=["ran 5k"],
    )]


class GoalUpdateRequest(BaseModel):
    text: Optional[Annotated[str, Field(max_length=500)]] = None
    done: Optional[bool] = None
