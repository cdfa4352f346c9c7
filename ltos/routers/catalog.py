"""
Catalog router.

GET /catalog   — fixed pillars, ritual checklists and cycle length
"""
from fastapi import APIRouter

from ltos.core.config import settings
from ltos.schemas.metrics import CatalogResponse, PillarInfoResponse, RitualItemResponse
from ltos.services.catalog import CYCLE_DAYS, EVENING, MORNING, PILLARS

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=CatalogResponse, summary="Static dashboard catalog")
def get_catalog():
    return CatalogResponse(
        pillars=[PillarInfoResponse(id=p.id, name=p.name, icon=p.icon) for p in PILLARS],
        morning=[RitualItemResponse(id=i.id, label=i.label) for i in MORNING],
        evening=[RitualItemResponse(id=i.id, label=i.label) for i in EVENING],
        cycle_days=CYCLE_DAYS,
        timezone=settings.TIMEZONE,
    )
