"""
Calendar utilities — instants, local day boundaries and day-keys.

Instants are integer milliseconds since the Unix epoch (the unit the
snapshot document is stored in). "Local" means the configured TIMEZONE
unless a zone is passed explicitly.

Public API
----------
now_ms()                   -> int
start_of_day(ts, tz)       -> int    local midnight containing ts
day_key(ts, tz)            -> str    "YYYY-MM-DD"
days_between(a, b, tz)     -> int    calendar days from a to b (may be < 0)
local_date(ts, tz)         -> date
date_to_ms(d, tz)          -> int    local midnight of a calendar date
"""
from __future__ import annotations

import time as _time
from datetime import date, datetime, time
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ltos.core.config import settings

MS_PER_DAY = 86_400_000

# Instants every zone can convert: one day inside datetime.min and datetime.max.
_EPOCH_ORDINAL = date(1970, 1, 1).toordinal()
MIN_INSTANT_MS = (date.min.toordinal() + 1 - _EPOCH_ORDINAL) * MS_PER_DAY
MAX_INSTANT_MS = (date.max.toordinal() - 1 - _EPOCH_ORDINAL) * MS_PER_DAY

TzLike = Union[ZoneInfo, str, None]


def resolve_zone(tz: TzLike) -> ZoneInfo:
    if tz is None:
        return settings.tz
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def now_ms() -> int:
    return _time.time_ns() // 1_000_000


def local_date(ts: int, tz: TzLike = None) -> date:
    return datetime.fromtimestamp(ts / 1000, tz=resolve_zone(tz)).date()


def date_to_ms(d: date, tz: TzLike = None) -> int:
    midnight = datetime.combine(d, time.min, tzinfo=resolve_zone(tz))
    return int(midnight.timestamp()) * 1000


def start_of_day(ts: int, tz: TzLike = None) -> int:
    zone = resolve_zone(tz)
    return date_to_ms(local_date(ts, zone), zone)


def day_key(ts: int, tz: TzLike = None) -> str:
    return day_key_for_date(local_date(ts, tz))


def day_key_for_date(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def days_between(a: int, b: int, tz: Optional[TzLike] = None) -> int:
    """
    Whole calendar days from the day of `a` to the day of `b`.

    Counted on local dates rather than dividing millisecond differences,
    so a 23- or 25-hour DST day still counts as one day.
    """
    zone = resolve_zone(tz)
    return (local_date(b, zone) - local_date(a, zone)).days
