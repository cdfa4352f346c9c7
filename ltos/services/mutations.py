"""
Mutation operations: (old snapshot, intent) -> new snapshot.

Each function is pure. The old snapshot and its nested containers are
never modified; an intent that changes nothing returns the very same
object so the container can skip the save.

Guarded preconditions
---------------------
* log_action ignores empty / whitespace-only notes.
* Goal intents with an unknown id leave the snapshot unchanged.
* toggle_ritual_item rejects item ids outside the catalog
  (UnknownRitualItemError) since those can never be scored.
"""
from __future__ import annotations

import logging
from typing import Optional

from ltos.core.errors import UnknownRitualItemError
from ltos.schemas.snapshot import Action, Goal, RitualDay, Snapshot
from ltos.services.calendar import TzLike, day_key, start_of_day
from ltos.services.catalog import ResilienceField, RitualPeriod, is_ritual_item
from ltos.services.derive import completion_level

logger = logging.getLogger("ltos.mutations")


# ---------------------------------------------------------------------------
# Heat write-back
# ---------------------------------------------------------------------------

def record_today_heat(snapshot: Snapshot, now: int, tz: TzLike = None) -> Snapshot:
    """
    Store today's completion level under today's day-key. Past days are
    left as they were recorded.
    """
    key = day_key(now, tz)
    level = completion_level(snapshot.rituals.get(key))
    if key in snapshot.heat and snapshot.heat[key] == level:
        return snapshot
    return snapshot.model_copy(update={"heat": {**snapshot.heat, key: level}})


# ---------------------------------------------------------------------------
# Rituals
# ---------------------------------------------------------------------------

def toggle_ritual_item(
    snapshot: Snapshot,
    period: RitualPeriod | str,
    item_id: str,
    now: int,
    tz: TzLike = None,
) -> Snapshot:
    period = RitualPeriod(period)
    if not is_ritual_item(period, item_id):
        raise UnknownRitualItemError(period=period.value, item_id=item_id)

    key = day_key(now, tz)
    day = snapshot.ritual_day(key)
    checks = getattr(day, period.value)
    updated_day = day.model_copy(
        update={period.value: {**checks, item_id: not checks.get(item_id, False)}}
    )
    toggled = snapshot.model_copy(update={"rituals": {**snapshot.rituals, key: updated_day}})
    return record_today_heat(toggled, now, tz)


# ---------------------------------------------------------------------------
# Pillar actions
# ---------------------------------------------------------------------------

def log_action(snapshot: Snapshot, pillar_id: str, note: Optional[str], now: int) -> Snapshot:
    if not note or not note.strip():
        logger.debug("Ignoring empty note for pillar %s", pillar_id)
        return snapshot
    entries = [*snapshot.pillar_actions(pillar_id), Action(timestamp=now, note=note)]
    return snapshot.model_copy(update={"actions": {**snapshot.actions, pillar_id: entries}})


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

def _replace_goal(snapshot: Snapshot, goal_id: str, **changes) -> Snapshot:
    goals: list[Goal] = []
    changed = False
    for g in snapshot.goals:
        if g.id == goal_id:
            replacement = g.model_copy(update=changes)
            changed = changed or replacement != g
            goals.append(replacement)
        else:
            goals.append(g)
    if not changed:
        return snapshot
    return snapshot.model_copy(update={"goals": goals})


def set_goal_done(snapshot: Snapshot, goal_id: str, done: bool) -> Snapshot:
    return _replace_goal(snapshot, goal_id, done=done)


def set_goal_text(snapshot: Snapshot, goal_id: str, text: str) -> Snapshot:
    return _replace_goal(snapshot, goal_id, text=text)


def toggle_goal_done(snapshot: Snapshot, goal_id: str) -> Snapshot:
    for g in snapshot.goals:
        if g.id == goal_id:
            return _replace_goal(snapshot, goal_id, done=not g.done)
    return snapshot


# ---------------------------------------------------------------------------
# Cycle / profile
# ---------------------------------------------------------------------------

def set_cycle_start(snapshot: Snapshot, instant: int, tz: TzLike = None) -> Snapshot:
    normalized = start_of_day(instant, tz)
    if normalized == snapshot.cycle_start:
        return snapshot
    return snapshot.model_copy(update={"cycle_start": normalized})


def set_mantra(snapshot: Snapshot, text: str) -> Snapshot:
    if text == snapshot.mantra:
        return snapshot
    return snapshot.model_copy(update={"mantra": text})


def set_theme_dark(snapshot: Snapshot, dark: bool) -> Snapshot:
    if dark == snapshot.theme_dark:
        return snapshot
    return snapshot.model_copy(update={"theme_dark": dark})


def toggle_theme(snapshot: Snapshot) -> Snapshot:
    return set_theme_dark(snapshot, not snapshot.theme_dark)


def set_resilience_field(
    snapshot: Snapshot,
    field: ResilienceField | str,
    text: str,
) -> Snapshot:
    attr = ResilienceField(field).value
    if getattr(snapshot.resilience, attr) == text:
        return snapshot
    resilience = snapshot.resilience.model_copy(update={attr: text})
    return snapshot.model_copy(update={"resilience": resilience})
