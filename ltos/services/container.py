"""
State container: the one live Snapshot of the process.

get()                   current snapshot (loads, or seeds, on first use)
replace(snapshot)       swap in a new value and save it
apply(mutation, ...)    run a mutation against the current value, then replace

FastAPI runs sync endpoints in a thread pool, so apply() holds a lock for
the read-mutate-replace sequence. Other processes writing the same store
are not coordinated with: last write wins.
"""
from __future__ import annotations

import threading
from typing import Callable, Optional

from fastapi import Request

from ltos.schemas.snapshot import Snapshot
from ltos.services.calendar import TzLike, now_ms
from ltos.services.store import SnapshotStore, load_or_seed

Clock = Callable[[], int]


class SnapshotContainer:
    def __init__(self, store: SnapshotStore, clock: Clock = now_ms, tz: TzLike = None):
        self._store = store
        self._clock = clock
        self._tz = tz
        self._snapshot: Optional[Snapshot] = None
        self._lock = threading.RLock()

    def get(self) -> Snapshot:
        with self._lock:
            if self._snapshot is None:
                self._snapshot = load_or_seed(self._store, self._clock(), self._tz)
            return self._snapshot

    def replace(self, snapshot: Snapshot) -> Snapshot:
        with self._lock:
            if snapshot is self._snapshot:
                return snapshot
            self._snapshot = snapshot
            self._store.save(snapshot)
            return snapshot

    def apply(self, mutation: Callable[..., Snapshot], *args, **kwargs) -> Snapshot:
        with self._lock:
            return self.replace(mutation(self.get(), *args, **kwargs))


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

def get_container(request: Request) -> SnapshotContainer:
    return request.app.state.container


def get_clock() -> Clock:
    return now_ms
