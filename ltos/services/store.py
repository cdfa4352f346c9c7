"""
Snapshot persistence against the kv_store table.

Public API
----------
SqlSnapshotStore(session_factory, key)
    .load()            -> LoadResult   (never raises)
    .save(snapshot)    -> None         (fire-and-forget; failures are logged)
load_or_seed(store, now, tz) -> Snapshot

A LoadResult is ok (carries a Snapshot), absent (nothing stored yet) or
failed (carries a MalformedSnapshotError with the reason). Callers
collapse it into "use the snapshot or use the seed"; nothing here decides
that policy except load_or_seed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ltos.core.config import settings
from ltos.core.errors import MalformedSnapshotError
from ltos.models.kv_entry import KeyValueEntry
from ltos.schemas.snapshot import Snapshot
from ltos.services.calendar import TzLike
from ltos.services.seed import default_snapshot

logger = logging.getLogger("ltos.store")


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LoadResult:
    snapshot: Optional[Snapshot] = None
    error: Optional[MalformedSnapshotError] = None

    @classmethod
    def ok(cls, snapshot: Snapshot) -> "LoadResult":
        return cls(snapshot=snapshot)

    @classmethod
    def absent(cls) -> "LoadResult":
        return cls()

    @classmethod
    def failed(cls, reason: str, key: Optional[str] = None) -> "LoadResult":
        return cls(error=MalformedSnapshotError(reason=reason, key=key))

    @property
    def is_ok(self) -> bool:
        return self.snapshot is not None


class SnapshotStore(Protocol):
    def load(self) -> LoadResult: ...

    def save(self, snapshot: Snapshot) -> None: ...


# ---------------------------------------------------------------------------
# SQL-backed key-value store
# ---------------------------------------------------------------------------

class SqlSnapshotStore:
    """Keeps the snapshot as one JSON row in kv_store, keyed by STORAGE_KEY."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        key: Optional[str] = None,
    ):
        self._session_factory = session_factory
        self.key = key or settings.STORAGE_KEY

    def load(self) -> LoadResult:
        try:
            with self._session_factory() as db:
                row = db.get(KeyValueEntry, self.key)
                raw = row.value if row is not None else None
        except SQLAlchemyError as exc:
            return LoadResult.failed(f"store unreadable: {exc.__class__.__name__}", self.key)

        if raw is None:
            return LoadResult.absent()
        try:
            return LoadResult.ok(Snapshot.model_validate_json(raw))
        except ValidationError as exc:
            return LoadResult.failed(f"{exc.error_count()} schema error(s)", self.key)

    def save(self, snapshot: Snapshot) -> None:
        document = snapshot.to_json()
        with self._session_factory() as db:
            try:
                row = db.get(KeyValueEntry, self.key)
                if row is None:
                    db.add(KeyValueEntry(key=self.key, value=document))
                else:
                    row.value = document
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                logger.exception("Saving snapshot under %r failed", self.key)


# ---------------------------------------------------------------------------
# Public: load with seed fallback
# ---------------------------------------------------------------------------

def load_or_seed(store: SnapshotStore, now: int, tz: TzLike = None) -> Snapshot:
    """
    Return the stored snapshot, or the default seed when there is none or
    it cannot be read. The seed is saved straight away, replacing whatever
    unreadable document was there.
    """
    result = store.load()
    if result.is_ok:
        return result.snapshot
    if result.error is None:
        logger.info("No snapshot stored under the configured key; seeding defaults")
    else:
        logger.warning("Using default seed snapshot: %s", result.error.reason)
    seed = default_snapshot(now, tz)
    store.save(seed)
    return seed
