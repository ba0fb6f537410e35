"""
Average severity bucketed by weekday and by time of day.

Weekday keys follow the host calendar convention: 1 = Sunday … 7 = Saturday.
Buckets with no episodes are absent from the result, never zero.
"""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Hashable, Sequence, TypeVar

from aurae.core.clock import wall_clock
from aurae.schemas.episode import Episode
from aurae.schemas.vocabulary import TimeOfDay

K = TypeVar("K", bound=Hashable)


def weekday_index(moment: datetime) -> int:
    """1 = Sunday … 7 = Saturday."""
    return moment.isoweekday() % 7 + 1


def _mean_by(
    episodes: Sequence[Episode],
    key: Callable[[Episode], K],
    order: Callable[[K], object],
) -> dict[K, float]:
    sums: dict[K, int] = {}
    counts: dict[K, int] = {}
    for e in episodes:
        k = key(e)
        sums[k] = sums.get(k, 0) + e.severity
        counts[k] = counts.get(k, 0) + 1
    return {k: sums[k] / counts[k] for k in sorted(sums, key=order)}


def severity_by_weekday(episodes: Sequence[Episode], now: datetime) -> dict[int, float]:
    return _mean_by(
        episodes,
        key=lambda e: weekday_index(wall_clock(e.onset_time, now.tzinfo)),
        order=lambda wd: wd,
    )


_TIME_OF_DAY_ORDER = list(TimeOfDay)


def severity_by_time_of_day(episodes: Sequence[Episode], now: datetime) -> dict[TimeOfDay, float]:
    return _mean_by(
        episodes,
        key=lambda e: TimeOfDay.from_hour(wall_clock(e.onset_time, now.tzinfo).hour),
        order=_TIME_OF_DAY_ORDER.index,
    )
