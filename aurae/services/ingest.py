"""
Ingest service: turns plain records from the persistence layer into Episodes.

Public API
----------
parse_episode(record)      → Episode        (raises EpisodeValidationError)
parse_episodes(records)    → list[Episode]  (fails on the first bad record)
parse_episodes_lenient(records) → BatchParseResult (per-item outcome)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from pydantic import ValidationError

from aurae.core.errors import EpisodeValidationError
from aurae.schemas.episode import Episode

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class BatchParseResult:
    episodes: list[Episode] = field(default_factory=list)
    errors: list[EpisodeValidationError] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.errors)


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def parse_episode(record: Mapping[str, Any], index: Optional[int] = None) -> Episode:
    try:
        return Episode.model_validate(record)
    except ValidationError as exc:
        raise EpisodeValidationError(exc, index=index) from exc


def parse_episodes(records: Iterable[Mapping[str, Any]]) -> list[Episode]:
    return [parse_episode(record, index=i) for i, record in enumerate(records)]


def parse_episodes_lenient(records: Iterable[Mapping[str, Any]]) -> BatchParseResult:
    """
    Parse every record independently: a bad record does not cancel the
    others. Failures are collected in input order.
    """
    result = BatchParseResult()
    for i, record in enumerate(records):
        try:
            result.episodes.append(parse_episode(record, index=i))
        except EpisodeValidationError as exc:
            logger.warning("Skipping invalid episode record %d: %s", i, exc.details["errors"])
            result.errors.append(exc)
    return result
