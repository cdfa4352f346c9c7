"""
Derivation engine — the numbers the dashboard presents.

Everything here is a pure function of a Snapshot (or part of one) and a
"now" instant. Nothing reads the clock, the store or the settings except
for the default timezone.

Metrics
-------
completion level   ritual items checked today -> 0 none / 1 partial / 2 full
streak             consecutive level-2 days ending today (bounded lookback)
cycle progress     day N of the 90-day cycle, inclusive of the start day
today count        actions logged on today's local date, per pillar
momentum           actions in the trailing 7-day window / 7, capped at 100 %

Percentages round half up, as a browser's Math.round does.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from ltos.schemas.snapshot import Action, RitualDay, Snapshot
from ltos.services.calendar import (
    TzLike,
    day_key,
    day_key_for_date,
    days_between,
    local_date,
    resolve_zone,
)
from ltos.services.catalog import (
    CYCLE_DAYS,
    EVENING,
    FULL_COMPLETION_RATIO,
    MOMENTUM_WINDOW_DAYS,
    MORNING,
    PILLARS,
    STREAK_LOOKBACK_DAYS,
)


LEVEL_NONE = 0
LEVEL_PARTIAL = 1
LEVEL_FULL = 2


# ---------------------------------------------------------------------------
# Result types (plain dataclasses, no ORM or Pydantic)
# ---------------------------------------------------------------------------

@dataclass
class CycleProgress:
    cycle_start: int     # epoch ms, local midnight
    elapsed_days: int    # 0 .. cycle_days
    cycle_days: int
    percent: int         # 0 .. 100


@dataclass
class PillarStats:
    pillar_id: str
    name: str
    icon: str
    today_count: int
    momentum: int        # 0 .. 100
    total_actions: int


@dataclass
class HeatDay:
    day: str
    level: int


@dataclass
class ChecklistItem:
    id: str
    label: str
    checked: bool


@dataclass
class Dashboard:
    today: str
    completion_level: int
    morning: list[ChecklistItem]
    evening: list[ChecklistItem]
    streak: int
    cycle: CycleProgress
    pillars: list[PillarStats]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _percent(numerator: int, denominator: int) -> int:
    raw = Decimal(numerator * 100) / Decimal(denominator)
    return int(raw.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# Rituals / heat
# ---------------------------------------------------------------------------

def completion_level(ritual_day: Optional[RitualDay]) -> int:
    """
    Score one day's checklist. Only catalog items count, so stale ids left
    in an old document never push a day to full.
    """
    if ritual_day is None:
        return LEVEL_NONE
    total = len(MORNING) + len(EVENING)
    done = (
        sum(1 for i in MORNING if ritual_day.morning.get(i.id))
        + sum(1 for i in EVENING if ritual_day.evening.get(i.id))
    )
    ratio = done / total
    if ratio >= FULL_COMPLETION_RATIO:
        return LEVEL_FULL
    if ratio > 0:
        return LEVEL_PARTIAL
    return LEVEL_NONE


def streak_count(
    heat: dict[str, int],
    now: int,
    tz: TzLike = None,
    lookback: int = STREAK_LOOKBACK_DAYS,
) -> int:
    """Consecutive level-2 days ending today. A day without heat is level 0."""
    today = local_date(now, tz)
    n = 0
    for i in range(lookback):
        key = day_key_for_date(today - timedelta(days=i))
        if heat.get(key, LEVEL_NONE) != LEVEL_FULL:
            break
        n += 1
    return n


def heat_calendar(
    heat: dict[str, int],
    now: int,
    tz: TzLike = None,
    days: int = 30,
) -> list[HeatDay]:
    """Per-day levels for the `days` ending today, oldest -> newest."""
    today = local_date(now, tz)
    out = []
    for i in range(days - 1, -1, -1):
        key = day_key_for_date(today - timedelta(days=i))
        out.append(HeatDay(day=key, level=heat.get(key, LEVEL_NONE)))
    return out


# ---------------------------------------------------------------------------
# Cycle
# ---------------------------------------------------------------------------

def cycle_progress(
    cycle_start: int,
    now: int,
    tz: TzLike = None,
    cycle_days: int = CYCLE_DAYS,
) -> CycleProgress:
    elapsed = days_between(cycle_start, now, tz) + 1
    elapsed = min(cycle_days, max(0, elapsed))
    return CycleProgress(
        cycle_start=cycle_start,
        elapsed_days=elapsed,
        cycle_days=cycle_days,
        percent=_percent(elapsed, cycle_days),
    )


# ---------------------------------------------------------------------------
# Pillars
# ---------------------------------------------------------------------------

def pillar_today_count(actions: Iterable[Action], now: int, tz: TzLike = None) -> int:
    zone = resolve_zone(tz)
    today = local_date(now, zone)
    return sum(1 for a in actions if local_date(a.timestamp, zone) == today)


def pillar_momentum(actions: Iterable[Action], now: int, tz: TzLike = None) -> int:
    """
    Share of the trailing 7-day window (today included) covered by actions.
    Future-dated actions fall inside the window, as they always have.
    """
    zone = resolve_zone(tz)
    recent = sum(
        1 for a in actions
        if days_between(a.timestamp, now, zone) <= MOMENTUM_WINDOW_DAYS - 1
    )
    return min(100, _percent(recent, MOMENTUM_WINDOW_DAYS))


def pillar_stats(snapshot: Snapshot, now: int, tz: TzLike = None) -> list[PillarStats]:
    out = []
    for p in PILLARS:
        actions = snapshot.pillar_actions(p.id)
        out.append(PillarStats(
            pillar_id=p.id,
            name=p.name,
            icon=p.icon,
            today_count=pillar_today_count(actions, now, tz),
            momentum=pillar_momentum(actions, now, tz),
            total_actions=len(actions),
        ))
    return out


# ---------------------------------------------------------------------------
# Public: main dashboard helper
# ---------------------------------------------------------------------------

def build_dashboard(snapshot: Snapshot, now: int, tz: TzLike = None) -> Dashboard:
    """
    Assemble every metric for "today". Reads heat as stored, so callers
    that want today's level reflected in the streak apply
    `mutations.record_today_heat` first.
    """
    zone = resolve_zone(tz)
    today_key = day_key(now, zone)
    today = snapshot.ritual_day(today_key)
    return Dashboard(
        today=today_key,
        completion_level=completion_level(today),
        morning=[ChecklistItem(i.id, i.label, bool(today.morning.get(i.id))) for i in MORNING],
        evening=[ChecklistItem(i.id, i.label, bool(today.evening.get(i.id))) for i in EVENING],
        streak=streak_count(snapshot.heat, now, zone),
        cycle=cycle_progress(snapshot.cycle_start, now, zone),
        pillars=pillar_stats(snapshot, now, zone),
    )
