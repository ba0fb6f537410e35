"""
Tests for the sleep comparison between high- and low-severity episodes.
"""
import pytest

from aurae.schemas.episode import HealthSnapshot, RetrospectiveDetail
from aurae.schemas.vocabulary import SleepPattern
from aurae.services.sleep import sleep_correlation, sleep_hours


def _slept(make_episode, severity, retro_hours=None, health_hours=None):
    retro = RetrospectiveDetail(sleep_hours=retro_hours) if retro_hours is not None else None
    health = HealthSnapshot(sleep_hours=health_hours) if health_hours is not None else None
    return make_episode(severity=severity, retrospective=retro, health=health)


class TestSleepHoursSource:
    def test_retrospective_preferred(self, make_episode):
        e = _slept(make_episode, 3, retro_hours=6.0, health_hours=8.0)
        assert sleep_hours(e) == 6.0

    def test_health_fallback(self, make_episode):
        assert sleep_hours(_slept(make_episode, 3, health_hours=7.5)) == 7.5

    def test_retrospective_without_sleep_falls_back(self, make_episode):
        e = make_episode(
            retrospective=RetrospectiveDetail(stress_level=2),
            health=HealthSnapshot(sleep_hours=5.0),
        )
        assert sleep_hours(e) == 5.0

    def test_absent(self, make_episode):
        assert sleep_hours(make_episode()) is None


class TestSleepCorrelation:
    def test_more_sleep_on_milder_days(self, make_episode):
        episodes = [
            _slept(make_episode, 5, retro_hours=5.0),
            _slept(make_episode, 4, health_hours=5.0),
            _slept(make_episode, 1, retro_hours=8.0),
            _slept(make_episode, 2, retro_hours=8.0),
        ]
        result = sleep_correlation(episodes)
        assert result.average_sleep_high_severity == 5.0
        assert result.average_sleep_low_severity == 8.0
        assert result.difference == pytest.approx(3.0)
        assert result.pattern == SleepPattern.more_sleep_on_milder_days
        assert "3.0 hour(s)" in result.description

    def test_less_sleep_on_milder_days(self, make_episode):
        episodes = [
            _slept(make_episode, 5, retro_hours=8.0),
            _slept(make_episode, 5, retro_hours=8.0),
            _slept(make_episode, 1, retro_hours=6.0),
            _slept(make_episode, 1, retro_hours=6.0),
        ]
        assert sleep_correlation(episodes).pattern == SleepPattern.less_sleep_on_milder_days

    def test_within_band(self, make_episode):
        episodes = [
            _slept(make_episode, 5, retro_hours=7.0),
            _slept(make_episode, 5, retro_hours=7.0),
            _slept(make_episode, 1, retro_hours=7.5),
            _slept(make_episode, 1, retro_hours=7.5),
        ]
        assert sleep_correlation(episodes).pattern == SleepPattern.no_clear_difference

    def test_moderate_severity_excluded(self, make_episode):
        episodes = [
            _slept(make_episode, 5, retro_hours=5.0),
            _slept(make_episode, 5, retro_hours=5.0),
            _slept(make_episode, 3, retro_hours=1.0),
            _slept(make_episode, 1, retro_hours=8.0),
            _slept(make_episode, 1, retro_hours=8.0),
        ]
        assert sleep_correlation(episodes).average_sleep_low_severity == 8.0

    def test_insufficient_points_in_one_group(self, make_episode):
        episodes = [
            _slept(make_episode, 5, retro_hours=5.0),
            _slept(make_episode, 5, retro_hours=5.0),
            _slept(make_episode, 1, retro_hours=8.0),
            _slept(make_episode, 1),  # no sleep data
        ]
        assert sleep_correlation(episodes) is None

    def test_no_data(self, make_episode):
        assert sleep_correlation([make_episode(severity=5) for _ in range(5)]) is None
