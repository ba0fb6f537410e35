"""
Trigger and symptom frequency ranking.

Counts co-occurrence of each factor with logged episodes. These are plain
frequency counts, not correlation coefficients.

Trigger sources per episode (in encounter order):
  1. environmental trigger tags     → display label
  2. meals / foods                   → capitalised display form
  3. skipped meal                    → "Skipped meal"
  4. stress_level >= 4               → "High stress"

Ranking is a stable sort by count descending, so ties keep the order in
which each factor was first encountered.
"""
from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Iterable, Sequence

from aurae.schemas.episode import Episode
from aurae.schemas.vocabulary import (
    HIGH_STRESS_LABEL,
    SKIPPED_MEAL_LABEL,
    SYMPTOM_LABELS,
    TRIGGER_LABELS,
)

TOP_N = 5
HIGH_STRESS_LEVEL = 4


@dataclass(frozen=True)
class RankedFactor:
    name: str
    count: int


def _meal_label(meal: str) -> str:
    return string.capwords(meal)


def _episode_triggers(episode: Episode) -> Iterable[str]:
    retro = episode.retrospective
    if retro is None:
        return
    for trigger in retro.environmental_triggers:
        yield TRIGGER_LABELS[trigger]
    for meal in retro.meals:
        yield _meal_label(meal)
    if retro.skipped_meal:
        yield SKIPPED_MEAL_LABEL
    if retro.stress_level is not None and retro.stress_level >= HIGH_STRESS_LEVEL:
        yield HIGH_STRESS_LABEL


def _episode_symptoms(episode: Episode) -> Iterable[str]:
    if episode.retrospective is None:
        return
    for symptom in episode.retrospective.symptoms:
        yield SYMPTOM_LABELS[symptom]


def _tally(labels: Iterable[str]) -> dict[str, int]:
    # Plain dict keeps first-encountered insertion order for tie-breaking.
    counts: dict[str, int] = {}
    for label in labels:
        counts[label] = counts.get(label, 0) + 1
    return counts


def _rank(counts: dict[str, int], limit: int) -> list[RankedFactor]:
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [RankedFactor(name=name, count=count) for name, count in ranked[:limit]]


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def trigger_counts(episodes: Sequence[Episode]) -> dict[str, int]:
    """Full trigger frequency table in first-encountered order."""
    return _tally(label for e in episodes for label in _episode_triggers(e))


def top_triggers(episodes: Sequence[Episode], limit: int = TOP_N) -> list[RankedFactor]:
    return _rank(trigger_counts(episodes), limit)


def top_symptoms(episodes: Sequence[Episode], limit: int = TOP_N) -> list[RankedFactor]:
    counts = _tally(label for e in episodes for label in _episode_symptoms(e))
    return _rank(counts, limit)
