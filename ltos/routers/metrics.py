"""
Metrics router — everything derived from the snapshot.

GET /metrics/dashboard   — today's completion, streak, cycle, pillar momentum
GET /metrics/heat        — per-day completion levels for a calendar view
GET /metrics/cycle       — 90-day cycle progress only
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ltos.schemas.metrics import (
    ChecklistItemResponse,
    CycleProgressResponse,
    DashboardResponse,
    HeatCalendarResponse,
    HeatDayResponse,
    PillarStatsResponse,
)
from ltos.services import mutations
from ltos.services.calendar import day_key
from ltos.services.container import Clock, SnapshotContainer, get_clock, get_container
from ltos.services.derive import (
    CycleProgress,
    Dashboard,
    PillarStats,
    build_dashboard,
    cycle_progress,
    heat_calendar,
)

router = APIRouter(prefix="/metrics", tags=["metrics"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def cycle_to_response(c: CycleProgress) -> CycleProgressResponse:
    return CycleProgressResponse(
        cycle_start=day_key(c.cycle_start),
        elapsed_days=c.elapsed_days,
        cycle_days=c.cycle_days,
        percent=c.percent,
    )


def pillar_to_response(p: PillarStats) -> PillarStatsResponse:
    return PillarStatsResponse(
        id=p.pillar_id,
        name=p.name,
        icon=p.icon,
        today_count=p.today_count,
        momentum=p.momentum,
        total_actions=p.total_actions,
    )


def _dashboard_to_response(d: Dashboard) -> DashboardResponse:
    return DashboardResponse(
        today=d.today,
        completion_level=d.completion_level,
        morning=[ChecklistItemResponse(id=i.id, label=i.label, checked=i.checked) for i in d.morning],
        evening=[ChecklistItemResponse(id=i.id, label=i.label, checked=i.checked) for i in d.evening],
        streak=d.streak,
        cycle=cycle_to_response(d.cycle),
        pillars=[pillar_to_response(p) for p in d.pillars],
    )


# ---------------------------------------------------------------------------
# GET /metrics/dashboard
# ---------------------------------------------------------------------------

@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="All presented metrics for today",
)
def dashboard(
    container: SnapshotContainer = Depends(get_container),
    clock: Clock = Depends(get_clock),
):
    """
    Compute the dashboard for the current local day.

    Reading also records today's completion level in `heat` (and saves it),
    so the history accumulates even on days when nothing is toggled.
    Earlier days keep the level they were recorded with.
    """
    now = clock()
    snapshot = container.apply(mutations.record_today_heat, now)
    return _dashboard_to_response(build_dashboard(snapshot, now))


# ---------------------------------------------------------------------------
# GET /metrics/heat
# ---------------------------------------------------------------------------

@router.get(
    "/heat",
    response_model=HeatCalendarResponse,
    summary="Completion levels for the last N days",
)
def heat(
    days: int = Query(default=30, ge=1, le=365, description="Window size ending today."),
    container: SnapshotContainer = Depends(get_container),
    clock: Clock = Depends(get_clock),
):
    """
    Oldest → newest. Days never recorded report level 0; today shows its
    live level. Nothing is written back.
    """
    now = clock()
    snapshot = mutations.record_today_heat(container.get(), now)
    return HeatCalendarResponse(
        today=day_key(now),
        days=[HeatDayResponse(day=h.day, level=h.level) for h in heat_calendar(snapshot.heat, now, days=days)],
    )


# ---------------------------------------------------------------------------
# GET /metrics/cycle
# ---------------------------------------------------------------------------

@router.get(
    "/cycle",
    response_model=CycleProgressResponse,
    summary="Progress through the 90-day cycle",
)
def cycle(
    container: SnapshotContainer = Depends(get_container),
    clock: Clock = Depends(get_clock),
):
    return cycle_to_response(cycle_progress(container.get().cycle_start, clock()))
