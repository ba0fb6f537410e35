"""
Unit tests for turning plain records into Episodes.
"""
import uuid

import pytest

from aurae.core.errors import EpisodeValidationError
from aurae.schemas.vocabulary import OnsetSpeed, Symptom
from aurae.services.ingest import parse_episode, parse_episodes, parse_episodes_lenient


def _record(**overrides) -> dict:
    record = {
        "id": str(uuid.uuid4()),
        "onset_time": "2026-03-10T08:30:00",
        "severity": 4,
        "onset_speed": "gradual",
    }
    record.update(overrides)
    return record


class TestParseEpisode:
    def test_minimal_record(self):
        e = parse_episode({"onset_time": "2026-03-10T08:30:00"})
        assert e.severity == 3
        assert e.onset_speed == OnsetSpeed.unknown
        assert e.is_active
        assert e.has_acknowledged_red_flag is False

    def test_full_record(self):
        e = parse_episode(_record(
            resolved_time="2026-03-10T11:30:00",
            weather={"temperature": 12.5, "humidity": 80, "pressure": 1008, "pressure_trend": "falling"},
            health={"sleep_hours": 6.5, "resting_heart_rate": 62},
            retrospective={
                "meals": ["  pasta ", ""],
                "symptoms": ["nausea", "aura"],
                "medication_name": "  ",
            },
        ))
        assert not e.is_active
        assert e.weather.pressure == 1008
        assert e.retrospective.meals == ["pasta"]
        assert e.retrospective.symptoms == [Symptom.nausea, Symptom.aura]
        assert e.retrospective.medication_name is None

    def test_invalid_record_raises_with_index(self):
        with pytest.raises(EpisodeValidationError) as info:
            parse_episode(_record(severity=7), index=2)
        assert info.value.details["index"] == 2
        assert info.value.details["errors"][0]["field"] == "severity"


class TestParseEpisodes:
    def test_all_valid(self):
        episodes = parse_episodes([_record(), _record(severity=1)])
        assert [e.severity for e in episodes] == [4, 1]

    def test_fails_on_first_bad_record(self):
        records = [_record(), _record(onset_speed="sluggish"), _record(severity=0)]
        with pytest.raises(EpisodeValidationError) as info:
            parse_episodes(records)
        assert info.value.details["index"] == 1

    def test_empty(self):
        assert parse_episodes([]) == []


class TestParseEpisodesLenient:
    def test_collects_failures_in_order(self):
        records = [
            _record(),
            _record(severity=9),
            _record(),
            {"severity": 2},
        ]
        result = parse_episodes_lenient(records)
        assert len(result.episodes) == 2
        assert result.failed == 2
        assert [err.details["index"] for err in result.errors] == [1, 3]
        assert result.errors[1].details["errors"][0]["field"] == "onset_time"

    def test_all_valid(self):
        result = parse_episodes_lenient([_record(), _record()])
        assert result.failed == 0
        assert len(result.episodes) == 2

    def test_logs_each_failure(self, caplog):
        with caplog.at_level("WARNING", logger="aurae.services.ingest"):
            parse_episodes_lenient([_record(severity=9), _record(severity=0)])
        assert len([r for r in caplog.records if r.levelname == "WARNING"]) == 2
