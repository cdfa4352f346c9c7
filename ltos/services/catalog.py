"""
Fixed catalog: the six pillars, the two ritual checklists and the
constants the derivation engine is parameterised by.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass


CYCLE_DAYS = 90
STREAK_LOOKBACK_DAYS = 365
MOMENTUM_WINDOW_DAYS = 7
FULL_COMPLETION_RATIO = 0.99


class Pillar(str, enum.Enum):
    health = "health"
    mindset = "mindset"
    skills = "skills"
    finance = "finance"
    relationships = "relationships"
    inner = "inner"


class RitualPeriod(str, enum.Enum):
    morning = "morning"
    evening = "evening"


class ResilienceField(str, enum.Enum):
    fears = "fears"
    counter_moves = "counter_moves"
    emergency = "emergency"


@dataclass(frozen=True)
class PillarInfo:
    id: str
    name: str
    icon: str


@dataclass(frozen=True)
class RitualItem:
    id: str
    label: str


PILLARS: tuple[PillarInfo, ...] = (
    PillarInfo(Pillar.health.value, "Health Mastery", "💪"),
    PillarInfo(Pillar.mindset.value, "Mindset Mastery", "🧠"),
    PillarInfo(Pillar.skills.value, "Skill Growth", "🚀"),
    PillarInfo(Pillar.finance.value, "Financial Power", "💼"),
    PillarInfo(Pillar.relationships.value, "Relationships", "🤝"),
    PillarInfo(Pillar.inner.value, "Inner Strength", "🧘"),
)

MORNING: tuple[RitualItem, ...] = (
    RitualItem("gratitude", "3× Gratitude"),
    RitualItem("visualization", "10m Visualization"),
    RitualItem("movement", "10m Movement"),
    RitualItem("learning", "5m Learning"),
    RitualItem("targets", "Set 3 Targets"),
)

EVENING: tuple[RitualItem, ...] = (
    RitualItem("selfcheck", "Self-Check (Mind/Body/Emotions/Direction)"),
    RitualItem("wins", "Log 3 Wins"),
    RitualItem("plan", "Plan Tomorrow’s 3 Targets"),
)

RITUALS: dict[RitualPeriod, tuple[RitualItem, ...]] = {
    RitualPeriod.morning: MORNING,
    RitualPeriod.evening: EVENING,
}


def ritual_items(period: RitualPeriod | str) -> tuple[RitualItem, ...]:
    return RITUALS[RitualPeriod(period)]


def is_ritual_item(period: RitualPeriod | str, item_id: str) -> bool:
    return any(i.id == item_id for i in ritual_items(period))
