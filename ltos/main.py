import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy import text

from ltos.db.base import Base, SessionLocal, engine, get_db
from ltos.core.config import settings
from ltos.core.logging_config import configure_logging
from ltos.routers import catalog as catalog_router
from ltos.routers import state as state_router
from ltos.routers import metrics as metrics_router
from ltos.routers import rituals as rituals_router
from ltos.routers import pillars as pillars_router
from ltos.routers import goals as goals_router
from ltos.services.container import SnapshotContainer
from ltos.services.store import SqlSnapshotStore
from ltos.core.errors import (
    LTOSException,
    ltos_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

logger = logging.getLogger("ltos")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    if settings.AUTO_CREATE_SCHEMA:
        Base.metadata.create_all(bind=engine)
    # Loaded lazily on first request, saved after every intent.
    app.state.container = SnapshotContainer(SqlSnapshotStore(SessionLocal))
    logger.info(
        "LTOS started env=%s timezone=%s storage_key=%s",
        settings.APP_ENV, settings.TIMEZONE, settings.STORAGE_KEY,
    )
    yield


app = FastAPI(
    title="LTOS API",
    description=(
        "**Life Transformation Dashboard**\n\n"
        "Morning/evening rituals, pillar action logs, a 90-day goal cycle and "
        "resilience notes, persisted as a single snapshot document. Exposes the "
        "derived metrics (completion heat, streak, momentum, cycle progress) and "
        "one endpoint per user intent.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(LTOSException, ltos_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(catalog_router.router)
app.include_router(state_router.router)
app.include_router(metrics_router.router)
app.include_router(rituals_router.router)
app.include_router(pillars_router.router)
app.include_router(goals_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """
    Returns `{"status": "ok", "db": "ok"}` when both the API and the
    snapshot store are reachable. Returns HTTP 503 if the DB is down.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database", exc_info=True)
        db_status = "unreachable"

    if db_status != "ok":
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": db_status},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
