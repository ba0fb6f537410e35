"""
Summary statistics over an episode history.

Public API
----------
average_severity(episodes)             -> Optional[float]
average_duration(episodes)             -> Optional[timedelta]
headache_free_streak(episodes, now)    -> int
headache_frequency(episodes, now)      -> dict[date, int]
"""
from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from aurae.core.clock import wall_clock, wall_now
from aurae.schemas.episode import Episode

# Upper bound on the backward streak walk
STREAK_CAP_DAYS = 365

# Trailing window for the day-level frequency map
FREQUENCY_WINDOW_DAYS = 90


def average_severity(episodes: Sequence[Episode]) -> Optional[float]:
    """Mean severity over every episode, resolved or not."""
    if not episodes:
        return None
    return sum(e.severity for e in episodes) / len(episodes)


def average_duration(episodes: Sequence[Episode]) -> Optional[timedelta]:
    """Mean (resolved - onset) over resolved episodes only."""
    durations = [e.duration for e in episodes if e.duration is not None]
    if not durations:
        return None
    return sum(durations, timedelta()) / len(durations)


def onset_day(episode: Episode, now: datetime) -> date:
    return wall_clock(episode.onset_time, now.tzinfo).date()


def headache_free_streak(episodes: Sequence[Episode], now: datetime) -> int:
    """
    Consecutive headache-free days ending yesterday.

    Walks backward from today and stops at the first day with an onset.
    Today itself is never counted: it only ends the walk if it has an
    episode. The walk is capped at STREAK_CAP_DAYS.
    """
    headache_days = {onset_day(e, now) for e in episodes}
    day = wall_now(now).date()
    streak = 0
    while day not in headache_days:
        streak += 1
        day -= timedelta(days=1)
        if streak > STREAK_CAP_DAYS:
            break
    # The first step of the walk was today.
    return max(0, streak - 1)


def headache_frequency(episodes: Sequence[Episode], now: datetime) -> dict[date, int]:
    """Episode count per local calendar day over the trailing window."""
    cutoff = wall_now(now) - timedelta(days=FREQUENCY_WINDOW_DAYS)
    counts: Counter[date] = Counter(
        onset_day(e, now)
        for e in episodes
        if wall_clock(e.onset_time, now.tzinfo) >= cutoff
    )
    return {day: counts[day] for day in sorted(counts)}
