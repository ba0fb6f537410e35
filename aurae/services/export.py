"""
Summary data for the document export.

The renderer lists the ten most frequent triggers together with the share of
all logged episodes each one co-occurred with (count / total_logs), plus the
covered date range and the log count for the header.

Onsets are ordered by local wall-clock time, so a history mixing naive and
aware timestamps still has a well-defined first and last entry.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from aurae.core.clock import wall_clock
from aurae.schemas.episode import Episode
from aurae.services.triggers import top_triggers

EXPORT_TOP_N = 10


@dataclass(frozen=True)
class TriggerShare:
    name: str
    count: int
    share: float      # 0–1, count / total_logs


@dataclass(frozen=True)
class ExportSummary:
    total_logs: int
    first_onset: Optional[datetime] = None
    last_onset: Optional[datetime] = None
    top_triggers: tuple[TriggerShare, ...] = field(default_factory=tuple)


def _local_onset(episode: Episode) -> datetime:
    return wall_clock(episode.onset_time, None)


def build_export_summary(episodes: Sequence[Episode]) -> ExportSummary:
    episodes = list(episodes)
    if not episodes:
        return ExportSummary(total_logs=0)

    total = len(episodes)
    return ExportSummary(
        total_logs=total,
        first_onset=min(episodes, key=_local_onset).onset_time,
        last_onset=max(episodes, key=_local_onset).onset_time,
        top_triggers=tuple(
            TriggerShare(name=t.name, count=t.count, share=t.count / total)
            for t in top_triggers(episodes, limit=EXPORT_TOP_N)
        ),
    )
