"""
Shared pytest fixtures.

All tests run against a fixed, naive local "now" so calendar math (streaks,
weekdays, current month) is deterministic.
"""
import os
import time
from datetime import datetime, timedelta

import pytest

from aurae.schemas.episode import Episode

# Wednesday, mid-month; leaves 18 days of the current month behind it
NOW = datetime(2026, 3, 18, 12, 0)


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def make_episode():
    """
    Factory for episodes relative to NOW.

    days_ago / hour place the onset; duration_hours resolves the episode.
    Any other keyword is passed straight to Episode.
    """
    def _make(days_ago=0, hour=9, severity=3, duration_hours=None, **fields) -> Episode:
        onset = (NOW - timedelta(days=days_ago)).replace(hour=hour, minute=0)
        resolved = None
        if duration_hours is not None:
            resolved = onset + timedelta(hours=duration_hours)
        return Episode(onset_time=onset, resolved_time=resolved, severity=severity, **fields)

    return _make


@pytest.fixture()
def berlin_host():
    """Run the test with the host zone set to Europe/Berlin (CET/CEST)."""
    if not hasattr(time, "tzset"):
        pytest.skip("host timezone cannot be switched on this platform")
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "Europe/Berlin"
    time.tzset()
    yield
    if previous is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = previous
    time.tzset()
