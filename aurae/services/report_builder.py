"""
Insights report builder.

Definition
----------
A Report is an immutable snapshot of every aggregate insight derived from the
full episode history. It is recomputed on demand; nothing is cached or
updated incrementally. Sequences are tuples and maps are read-only views.

Minimum-sample gate
-------------------
With fewer than MINIMUM_LOGS episodes the builder returns the "keep logging"
report: only `total_logs` is populated and every derived field is None or
empty. This is a defined output, not an error.

The red-flag evaluator and the overuse detector are not gated; callers invoke
them directly (see services.red_flag / services.medication).

Public API
----------
build_report(episodes, now) -> Report
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from aurae.core.clock import local_now
from aurae.schemas.episode import Episode
from aurae.schemas.vocabulary import TimeOfDay
from aurae.services.aggregator import (
    average_duration,
    average_severity,
    headache_free_streak,
    headache_frequency,
)
from aurae.services.medication import MedicationScore, medication_effectiveness
from aurae.services.sleep import SleepCorrelation, sleep_correlation
from aurae.services.temporal import severity_by_time_of_day, severity_by_weekday
from aurae.services.triggers import RankedFactor, top_symptoms, top_triggers
from aurae.services.weather import WeatherCorrelation, weather_correlations

logger = logging.getLogger(__name__)

MINIMUM_LOGS = 5


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------

def _empty_mapping() -> Mapping:
    return MappingProxyType({})


@dataclass(frozen=True)
class Report:
    total_logs: int
    minimum_logs_required: int = MINIMUM_LOGS

    # Summary
    average_severity: Optional[float] = None
    average_duration: Optional[timedelta] = None   # None if no resolved episodes
    streak_days: Optional[int] = None

    # Triggers & symptoms (top 5 by frequency)
    most_common_triggers: tuple[RankedFactor, ...] = ()
    most_common_symptoms: tuple[RankedFactor, ...] = ()

    # Temporal patterns
    severity_by_weekday: Mapping[int, float] = field(default_factory=_empty_mapping)   # 1 = Sunday
    severity_by_time_of_day: Mapping[TimeOfDay, float] = field(default_factory=_empty_mapping)

    # Correlations
    weather_correlations: tuple[WeatherCorrelation, ...] = ()
    sleep_correlation: Optional[SleepCorrelation] = None

    # Medication, ranked best first; only names used at least twice
    medication_effectiveness: tuple[MedicationScore, ...] = ()

    # Local day → episode count over the trailing 90 days
    headache_frequency: Mapping[date, int] = field(default_factory=_empty_mapping)

    @property
    def minimum_logs_met(self) -> bool:
        return self.total_logs >= self.minimum_logs_required

    @classmethod
    def insufficient(cls, total_logs: int) -> "Report":
        """The "keep logging" report."""
        return cls(total_logs=total_logs)


# ---------------------------------------------------------------------------
# Public: main entry point
# ---------------------------------------------------------------------------

def build_report(episodes: Sequence[Episode], now: Optional[datetime] = None) -> Report:
    """
    Analyse the given episodes and return a Report.
    `now` is read once and shared by every calendar-dependent analyzer.
    When omitted it is the naive host wall-clock time, so aware onsets are
    converted with the host zone rules in force at each onset.
    The input collection is never mutated.
    """
    episodes = list(episodes)
    if len(episodes) < MINIMUM_LOGS:
        logger.debug("Report gated: %d episodes (need %d)", len(episodes), MINIMUM_LOGS)
        return Report.insufficient(len(episodes))

    now = now or local_now()

    report = Report(
        total_logs=len(episodes),
        average_severity=average_severity(episodes),
        average_duration=average_duration(episodes),
        streak_days=headache_free_streak(episodes, now),
        most_common_triggers=tuple(top_triggers(episodes)),
        most_common_symptoms=tuple(top_symptoms(episodes)),
        severity_by_weekday=MappingProxyType(severity_by_weekday(episodes, now)),
        severity_by_time_of_day=MappingProxyType(severity_by_time_of_day(episodes, now)),
        weather_correlations=tuple(weather_correlations(episodes)),
        sleep_correlation=sleep_correlation(episodes),
        medication_effectiveness=tuple(medication_effectiveness(episodes)),
        headache_frequency=MappingProxyType(headache_frequency(episodes, now)),
    )
    logger.info(
        "Built insights report: %d episodes, %d weather correlations, sleep=%s",
        report.total_logs,
        len(report.weather_correlations),
        report.sleep_correlation is not None,
    )
    return report
