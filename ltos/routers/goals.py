"""
Goals router — the Big 3 goals of the current cycle.

PATCH /goals/{goal_id}          — set text and/or done
POST  /goals/{goal_id}/toggle   — flip done
"""
from fastapi import APIRouter, Depends

from ltos.schemas.common import INTENT_ERROR_RESPONSES
from ltos.schemas.intents import GoalUpdateRequest
from ltos.schemas.snapshot import Snapshot
from ltos.services import mutations
from ltos.services.container import SnapshotContainer, get_container

router = APIRouter(prefix="/goals", tags=["goals"])


@router.patch(
    "/{goal_id}",
    response_model=Snapshot,
    summary="Edit a goal",
    responses={
        200: {"description": "Updated snapshot; unchanged for an unknown goal id."},
        **INTENT_ERROR_RESPONSES,
    },
)
def update_goal(
    goal_id: str,
    payload: GoalUpdateRequest,
    container: SnapshotContainer = Depends(get_container),
):
    def _apply(snapshot: Snapshot) -> Snapshot:
        if payload.text is not None:
            snapshot = mutations.set_goal_text(snapshot, goal_id, payload.text)
        if payload.done is not None:
            snapshot = mutations.set_goal_done(snapshot, goal_id, payload.done)
        return snapshot

    return container.apply(_apply)


@router.post(
    "/{goal_id}/toggle",
    response_model=Snapshot,
    summary="Mark a goal done / not done",
)
def toggle_goal(goal_id: str, container: SnapshotContainer = Depends(get_container)):
    return container.apply(mutations.toggle_goal_done, goal_id)
