"""
Snapshot — the single persisted document.

The models double as the storage format and the `GET /state` response:
JSON keys are camelCase (`themeDark`, `cycleStart`, `counterMoves`),
timestamps are integer epoch milliseconds, day-keys are "YYYY-MM-DD".

Every model is frozen. Mutations build a new Snapshot with
`model_copy(update=...)` and never touch the nested dicts/lists of the
old one.
"""
from __future__ import annotations

from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ltos.services.calendar import MAX_INSTANT_MS, MIN_INSTANT_MS


DEFAULT_MANTRA = "I act as my future self, today."

HeatValue = Annotated[int, Field(ge=0, le=2)]

# Epoch milliseconds the calendar helpers can turn into a local date.
Instant = Annotated[int, Field(ge=MIN_INSTANT_MS, le=MAX_INSTANT_MS)]


class _Document(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Goal(_Document):
    id: str
    text: str
    done: bool = False


class RitualDay(_Document):
    morning: dict[str, bool] = Field(default_factory=dict)
    evening: dict[str, bool] = Field(default_factory=dict)


class Action(_Document):
    # Older documents stored the instant under "ts".
    timestamp: Instant = Field(
        validation_alias=AliasChoices("timestamp", "ts"),
        description="Epoch milliseconds when the action was logged.",
    )
    note: str


class Resilience(_Document):
    fears: str = ""
    counter_moves: str = ""
    emergency: str = ""


def _default_goals() -> list[Goal]:
    return [
        Goal(id="g1", text="Health: 10k steps daily"),
        Goal(id="g2", text="Skill: 1h focused learning/day"),
        Goal(id="g3", text="Finance: 20% savings rate"),
    ]


class Snapshot(_Document):
    theme_dark: bool = True
    mantra: str = DEFAULT_MANTRA
    cycle_start: Instant = Field(description="Local midnight, epoch milliseconds.")
    goals: list[Goal] = Field(default_factory=_default_goals)
    rituals: dict[str, RitualDay] = Field(default_factory=dict)
    actions: dict[str, list[Action]] = Field(default_factory=dict)
    heat: dict[str, HeatValue] = Field(default_factory=dict)
    resilience: Resilience = Field(default_factory=Resilience)

    def ritual_day(self, key: str) -> RitualDay:
        """Ritual state for a day-key; an absent day reads as nothing checked."""
        return self.rituals.get(key) or RitualDay()

    def pillar_actions(self, pillar_id: str) -> list[Action]:
        return self.actions.get(pillar_id, [])

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
