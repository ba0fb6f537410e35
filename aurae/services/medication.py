"""
Medication effectiveness ranking and acute-medication overuse awareness.

Public API
----------
medication_effectiveness(episodes)                         -> list[MedicationScore]
is_acute_medication(name, is_acute, preventive_names)      -> bool
check_medication_overuse(episodes, now, preventive_names)  -> MedicationOveruseStatus

Overuse rule
------------
Count distinct local calendar days in the current month with at least one
acute medication entry. Flag when the count reaches OVERUSE_DAY_THRESHOLD.
The classical "for more than 3 months" duration criterion is not applied;
only the current month is considered.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from aurae.core.clock import wall_clock, wall_now
from aurae.core.config import settings
from aurae.schemas.episode import Episode

logger = logging.getLogger(__name__)

MIN_USES_FOR_RANKING = 2
OVERUSE_DAY_THRESHOLD = 10


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MedicationScore:
    name: str
    average_effectiveness: float
    uses: int


@dataclass(frozen=True)
class MedicationOveruseStatus:
    month: date                  # first day of the evaluated month
    acute_medication_days: int
    threshold: int
    exceeds_threshold: bool


# ---------------------------------------------------------------------------
# Effectiveness
# ---------------------------------------------------------------------------

def medication_effectiveness(episodes: Sequence[Episode]) -> list[MedicationScore]:
    """
    Mean self-reported effectiveness per medication name, best first.
    Names with fewer than MIN_USES_FOR_RANKING scored uses are dropped.
    """
    scores: dict[str, list[int]] = {}
    for e in episodes:
        retro = e.retrospective
        if retro is None or not retro.medication_name or retro.medication_effectiveness is None:
            continue
        scores.setdefault(retro.medication_name, []).append(retro.medication_effectiveness)

    ranked = [
        MedicationScore(name=name, average_effectiveness=sum(vals) / len(vals), uses=len(vals))
        for name, vals in scores.items()
        if len(vals) >= MIN_USES_FOR_RANKING
    ]
    ranked.sort(key=lambda m: m.average_effectiveness, reverse=True)
    return ranked


# ---------------------------------------------------------------------------
# Acute / preventive classification
# ---------------------------------------------------------------------------

def is_acute_medication(
    name: str,
    is_acute: Optional[bool],
    preventive_names: Iterable[str],
) -> bool:
    """
    True = acute, False = preventive, None = unclassified.
    An unclassified entry counts as acute unless its name is a known
    preventive medication (case-insensitive).
    """
    if is_acute is not None:
        return is_acute
    known = {n.strip().casefold() for n in preventive_names}
    return name.strip().casefold() not in known


# ---------------------------------------------------------------------------
# Overuse
# ---------------------------------------------------------------------------

def check_medication_overuse(
    episodes: Sequence[Episode],
    now: datetime,
    preventive_names: Optional[Iterable[str]] = None,
) -> MedicationOveruseStatus:
    if preventive_names is None:
        preventive_names = settings.preventive_medications
    preventive = frozenset(n.strip().casefold() for n in preventive_names)

    today = wall_now(now).date()
    acute_days: set[date] = set()
    for e in episodes:
        retro = e.retrospective
        if retro is None or not retro.medication_name:
            continue
        day = wall_clock(e.onset_time, now.tzinfo).date()
        if (day.year, day.month) != (today.year, today.month):
            continue
        if is_acute_medication(retro.medication_name, retro.medication_is_acute, preventive):
            acute_days.add(day)

    status = MedicationOveruseStatus(
        month=today.replace(day=1),
        acute_medication_days=len(acute_days),
        threshold=OVERUSE_DAY_THRESHOLD,
        exceeds_threshold=len(acute_days) >= OVERUSE_DAY_THRESHOLD,
    )
    if status.exceeds_threshold:
        logger.info(
            "Acute medication used on %d days in %s (threshold %d)",
            status.acute_medication_days, status.month.strftime("%Y-%m"), OVERUSE_DAY_THRESHOLD,
        )
    return status
