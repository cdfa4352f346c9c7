"""
Derived-metric response schemas.

GET /metrics/dashboard        → DashboardResponse
GET /metrics/heat             → HeatCalendarResponse
GET /metrics/cycle            → CycleProgressResponse
GET /pillars/{pillar}/actions → PillarActionsResponse
GET /catalog                  → CatalogResponse
"""
from typing import Optional
from pydantic import BaseModel, Field


class ChecklistItemResponse(BaseModel):
    id: str
    label: str
    checked: bool


class CycleProgressResponse(BaseModel):
    cycle_start: str = Field(description="ISO date of day 1.")
    elapsed_days: int = Field(description="Inclusive of the start day, capped at cycle_days.")
    cycle_days: int
    percent: int = Field(ge=0, le=100)


class PillarStatsResponse(BaseModel):
    id: str
    name: str
    icon: str
    today_count: int
    momentum: int = Field(ge=0, le=100, description="Trailing 7-day momentum, percent.")
    total_actions: int


class DashboardResponse(BaseModel):
    today: str = Field(description="Day-key (YYYY-MM-DD) of the local day.")
    completion_level: int = Field(ge=0, le=2, description="0 none, 1 partial, 2 full.")
    morning: list[ChecklistItemResponse]
    evening: list[ChecklistItemResponse]
    streak: int
    cycle: CycleProgressResponse
    pillars: list[PillarStatsResponse]


class HeatDayResponse(BaseModel):
    day: str
    level: int = Field(ge=0, le=2)


class HeatCalendarResponse(BaseModel):
    today: str
    days: list[HeatDayResponse]


class ActionResponse(BaseModel):
    timestamp: int = Field(description="Epoch milliseconds.")
    logged_at: str = Field(description="Local ISO-8601 timestamp.")
    note: str


class PillarActionsResponse(BaseModel):
    pillar: PillarStatsResponse
    items: list[ActionResponse] = Field(description="Newest first.")


class PillarInfoResponse(BaseModel):
    id: str
    name: str
    icon: str


class RitualItemResponse(BaseModel):
    id: str
    label: str


class CatalogResponse(BaseModel):
    pillars: list[PillarInfoResponse]
    morning: list[RitualItemResponse]
    evening: list[RitualItemResponse]
    cycle_days: int
    timezone: Optional[str] = None
