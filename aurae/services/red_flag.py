"""
Red-flag safety evaluation for a single episode.

Decision table (first match wins)
---------------------------------
  resolved OR already acknowledged               → none
  onset_speed == instantaneous AND severity >= 4 → urgent
  onset_speed == instantaneous                   → advisory
  symptoms include aura AND visual disturbance   → advisory
  otherwise                                      → none

Acknowledgement is per episode: a new qualifying episode surfaces again even
when an earlier episode's banner was dismissed. The evaluator never writes the
acknowledgement; the caller sets it via Episode.acknowledge_red_flag().

onset_speed == unknown never contributes a signal.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional, Sequence

from aurae.schemas.episode import Episode
from aurae.schemas.vocabulary import (
    SYMPTOM_LABELS,
    OnsetSpeed,
    RedFlagReason,
    Symptom,
    Urgency,
)

logger = logging.getLogger(__name__)

URGENT_SEVERITY_MIN = 4
_AURA_COMBINATION = (Symptom.aura, Symptom.visual_disturbance)


@dataclass(frozen=True)
class RedFlagAssessment:
    episode_id: uuid.UUID
    urgency: Urgency
    reason: Optional[RedFlagReason] = None
    matched_symptoms: tuple[str, ...] = field(default_factory=tuple)

    @property
    def should_surface(self) -> bool:
        return self.urgency != Urgency.none


def _has_aura_combination(episode: Episode) -> bool:
    if episode.retrospective is None:
        return False
    symptoms = set(episode.retrospective.symptoms)
    return all(s in symptoms for s in _AURA_COMBINATION)


def evaluate_red_flag(episode: Episode) -> RedFlagAssessment:
    """Stateless: safe to call on every episode on every refresh."""
    episode_id = episode.id

    if not episode.is_active or episode.has_acknowledged_red_flag:
        return RedFlagAssessment(episode_id=episode_id, urgency=Urgency.none)

    matched: tuple[str, ...] = ()
    if _has_aura_combination(episode):
        matched = tuple(SYMPTOM_LABELS[s] for s in _AURA_COMBINATION)

    if episode.onset_speed == OnsetSpeed.instantaneous:
        urgency = Urgency.urgent if episode.severity >= URGENT_SEVERITY_MIN else Urgency.advisory
        return RedFlagAssessment(
            episode_id=episode_id,
            urgency=urgency,
            reason=RedFlagReason.sudden_onset,
            matched_symptoms=matched,
        )

    if matched:
        return RedFlagAssessment(
            episode_id=episode_id,
            urgency=Urgency.advisory,
            reason=RedFlagReason.aura_with_visual_disturbance,
            matched_symptoms=matched,
        )

    return RedFlagAssessment(episode_id=episode_id, urgency=Urgency.none)


def active_red_flags(episodes: Sequence[Episode]) -> list[RedFlagAssessment]:
    """Assessments that should currently be shown, in input order."""
    flagged = [a for a in (evaluate_red_flag(e) for e in episodes) if a.should_surface]
    for assessment in flagged:
        logger.info(
            "Red flag %s for episode %s (%s)",
            assessment.urgency.value, assessment.episode_id, assessment.reason.value,
        )
    return flagged
