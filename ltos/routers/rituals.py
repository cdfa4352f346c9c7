"""
Rituals router.

POST /rituals/{period}/{item_id}/toggle   — check / uncheck an item for today
"""
from fastapi import APIRouter, Depends, Path

from ltos.schemas.common import ErrorResponse
from ltos.schemas.snapshot import Snapshot
from ltos.services import mutations
from ltos.services.catalog import RitualPeriod
from ltos.services.container import Clock, SnapshotContainer, get_clock, get_container

router = APIRouter(prefix="/rituals", tags=["rituals"])


@router.post(
    "/{period}/{item_id}/toggle",
    response_model=Snapshot,
    summary="Toggle a ritual item for today",
    responses={
        200: {"description": "Item flipped; today's heat recomputed."},
        422: {"model": ErrorResponse, "description": "Item is not part of that ritual."},
    },
)
def toggle_item(
    period: RitualPeriod = Path(description="morning | evening"),
    item_id: str = Path(description="Ritual item id, e.g. gratitude or wins."),
    container: SnapshotContainer = Depends(get_container),
    clock: Clock = Depends(get_clock),
):
    """
    Flip `rituals[today][period][item_id]`, creating today's entry if it
    does not exist yet. Only today can be toggled.
    """
    return container.apply(mutations.toggle_ritual_item, period, item_id, clock())
