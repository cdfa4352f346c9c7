"""Default seed snapshot used on first run and whenever the store is unreadable."""
from __future__ import annotations

from ltos.schemas.snapshot import Snapshot
from ltos.services.calendar import TzLike, start_of_day


def default_snapshot(now: int, tz: TzLike = None) -> Snapshot:
    return Snapshot(cycle_start=start_of_day(now, tz))
