"""
Pillars router.

GET  /pillars/{pillar_id}/actions   — action log (newest first) + stats
POST /pillars/{pillar_id}/actions   — log a meaningful action
"""
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Path, Query

from ltos.routers.metrics import pillar_to_response
from ltos.schemas.common import INTENT_ERROR_RESPONSES
from ltos.schemas.intents import LogActionRequest
from ltos.schemas.metrics import ActionResponse, PillarActionsResponse
from ltos.schemas.snapshot import Action, Snapshot
from ltos.services import mutations
from ltos.services.calendar import resolve_zone
from ltos.services.catalog import Pillar
from ltos.services.container import Clock, SnapshotContainer, get_clock, get_container
from ltos.services.derive import pillar_stats

router = APIRouter(prefix="/pillars", tags=["pillars"])


def _action_to_response(a: Action) -> ActionResponse:
    logged_at = datetime.fromtimestamp(a.timestamp / 1000, tz=resolve_zone(None))
    return ActionResponse(
        timestamp=a.timestamp,
        logged_at=logged_at.isoformat(timespec="seconds"),
        note=a.note,
    )


@router.get(
    "/{pillar_id}/actions",
    response_model=PillarActionsResponse,
    summary="Logged actions for one pillar",
)
def list_actions(
    pillar_id: Pillar = Path(description="health | mindset | skills | finance | relationships | inner"),
    limit: int = Query(default=50, ge=1, le=500, description="Page size."),
    offset: int = Query(default=0, ge=0, description="Skip N items."),
    container: SnapshotContainer = Depends(get_container),
    clock: Clock = Depends(get_clock),
):
    snapshot = container.get()
    stats = next(s for s in pillar_stats(snapshot, clock()) if s.pillar_id == pillar_id.value)
    newest_first = list(reversed(snapshot.pillar_actions(pillar_id.value)))
    return PillarActionsResponse(
        pillar=pillar_to_response(stats),
        items=[_action_to_response(a) for a in newest_first[offset:offset + limit]],
    )


@router.post(
    "/{pillar_id}/actions",
    response_model=Snapshot,
    summary="Log an action against a pillar",
    responses={
        200: {"description": "Updated snapshot; unchanged when the note is blank."},
        **INTENT_ERROR_RESPONSES,
    },
)
def log_action(
    payload: LogActionRequest,
    pillar_id: Pillar = Path(description="health | mindset | skills | finance | relationships | inner"),
    container: SnapshotContainer = Depends(get_container),
    clock: Clock = Depends(get_clock),
):
    """Append `{timestamp: now, note}` to the pillar's log. Blank notes are ignored."""
    return container.apply(mutations.log_action, pillar_id.value, payload.note, clock())
