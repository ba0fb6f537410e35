"""
Sleep duration on high-severity vs low-severity episodes.

High severity: severity >= 4. Low severity: severity <= 2.
Sleep hours come from the retrospective entry when present, otherwise from
the health snapshot captured at onset.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from aurae.schemas.episode import Episode
from aurae.schemas.vocabulary import SleepPattern

logger = logging.getLogger(__name__)

HIGH_SEVERITY_MIN = 4
LOW_SEVERITY_MAX = 2
MIN_POINTS_PER_GROUP = 2
SLEEP_DIFFERENCE_BAND = 0.5


@dataclass(frozen=True)
class SleepCorrelation:
    average_sleep_high_severity: float
    average_sleep_low_severity: float
    difference: float               # low-severity mean − high-severity mean
    pattern: SleepPattern
    description: str


def sleep_hours(episode: Episode) -> Optional[float]:
    if episode.retrospective is not None and episode.retrospective.sleep_hours is not None:
        return episode.retrospective.sleep_hours
    if episode.health is not None:
        return episode.health.sleep_hours
    return None


def _describe(difference: float) -> tuple[SleepPattern, str]:
    if difference > SLEEP_DIFFERENCE_BAND:
        return SleepPattern.more_sleep_on_milder_days, (
            f"You sleep {difference:.1f} hour(s) more before milder headaches. "
            "Less sleep appears linked to more severe headaches."
        )
    if difference < -SLEEP_DIFFERENCE_BAND:
        return SleepPattern.less_sleep_on_milder_days, (
            f"You sleep {abs(difference):.1f} hour(s) more before severe headaches. "
            "Shorter sleep does not appear linked to severity."
        )
    return SleepPattern.no_clear_difference, (
        "Sleep duration shows little variation between milder and high-severity headaches."
    )


def _collect(episodes: Sequence[Episode]) -> list[float]:
    hours = [sleep_hours(e) for e in episodes]
    return [h for h in hours if h is not None]


def sleep_correlation(episodes: Sequence[Episode]) -> Optional[SleepCorrelation]:
    high = _collect([e for e in episodes if e.severity >= HIGH_SEVERITY_MIN])
    low = _collect([e for e in episodes if e.severity <= LOW_SEVERITY_MAX])

    if len(high) < MIN_POINTS_PER_GROUP or len(low) < MIN_POINTS_PER_GROUP:
        logger.debug(
            "Skipping sleep correlation: %d high-severity and %d low-severity data points",
            len(high), len(low),
        )
        return None

    high_mean = sum(high) / len(high)
    low_mean = sum(low) / len(low)
    difference = low_mean - high_mean
    pattern, description = _describe(difference)
    return SleepCorrelation(
        average_sleep_high_severity=high_mean,
        average_sleep_low_severity=low_mean,
        difference=difference,
        pattern=pattern,
        description=description,
    )
