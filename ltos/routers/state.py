"""
State router.

GET   /state                       — full snapshot document
PATCH /state/profile               — mantra / theme / cycle start
POST  /state/theme/toggle          — flip dark theme
PUT   /state/resilience/{field}    — fears / counter_moves / emergency
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from ltos.schemas.common import INTENT_ERROR_RESPONSES
from ltos.schemas.intents import ProfileUpdateRequest, ResilienceUpdateRequest
from ltos.schemas.snapshot import Snapshot
from ltos.services import mutations
from ltos.services.calendar import date_to_ms
from ltos.services.catalog import ResilienceField
from ltos.services.container import SnapshotContainer, get_container

router = APIRouter(prefix="/state", tags=["state"])


@router.get(
    "",
    response_model=Snapshot,
    summary="The whole persisted document",
    responses={200: {"description": "Snapshot with camelCase keys, timestamps in epoch ms."}},
)
def get_state(container: SnapshotContainer = Depends(get_container)):
    """Return the snapshot exactly as it is persisted."""
    return container.get()


@router.patch(
    "/profile",
    response_model=Snapshot,
    summary="Update mantra, theme or cycle start date",
    responses=INTENT_ERROR_RESPONSES,
)
def update_profile(
    payload: ProfileUpdateRequest,
    container: SnapshotContainer = Depends(get_container),
):
    """
    Apply every field present in the body as one intent:
    - `mantra` replaces the future-self mantra.
    - `theme_dark` sets the theme.
    - `cycle_start` (ISO date) moves day 1 of the 90-day cycle; it is
      stored as local midnight of that calendar day.
    """
    def _apply(snapshot: Snapshot) -> Snapshot:
        if payload.mantra is not None:
            snapshot = mutations.set_mantra(snapshot, payload.mantra)
        if payload.theme_dark is not None:
            snapshot = mutations.set_theme_dark(snapshot, payload.theme_dark)
        if payload.cycle_start is not None:
            snapshot = mutations.set_cycle_start(snapshot, date_to_ms(payload.cycle_start))
        return snapshot

    return container.apply(_apply)


@router.post(
    "/theme/toggle",
    response_model=Snapshot,
    summary="Flip between dark and light theme",
)
def toggle_theme(container: SnapshotContainer = Depends(get_container)):
    return container.apply(mutations.toggle_theme)


@router.put(
    "/resilience/{field}",
    response_model=Snapshot,
    summary="Replace one resilience note",
    responses=INTENT_ERROR_RESPONSES,
)
def update_resilience(
    payload: ResilienceUpdateRequest,
    field: ResilienceField = Path(description="fears | counter_moves | emergency"),
    container: SnapshotContainer = Depends(get_container),
):
    return container.apply(mutations.set_resilience_field, field, payload.text)
