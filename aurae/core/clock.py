"""
Time helpers shared by every analyzer.

Each public entry point resolves "now" exactly once and passes it down, so a
single report never mixes two clock readings. Calendar math (day, weekday,
hour, month) is done on naive local wall-clock datetimes:

  - with an aware `now`, an aware timestamp is converted into `now`'s
    timezone and its tzinfo dropped;
  - with a naive `now` (the host default), an aware timestamp is converted
    with the host zone rules in force at that instant, so episodes from the
    other DST season keep their own offset;
  - a naive timestamp is taken to already be local wall-clock time.
"""
from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional


def local_now() -> datetime:
    """Current host wall-clock time, naive."""
    return datetime.now()


def wall_clock(moment: datetime, tz: Optional[tzinfo]) -> datetime:
    """Return `moment` as naive local wall-clock time in `tz`."""
    if moment.tzinfo is None:
        return moment
    if tz is None:
        return moment.astimezone().replace(tzinfo=None)
    return moment.astimezone(tz).replace(tzinfo=None)


def wall_now(now: datetime) -> datetime:
    return wall_clock(now, now.tzinfo)
