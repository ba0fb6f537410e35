"""
Weather co-occurrence heuristics.

Checks (each evaluated independently over weather-linked episodes)
------------------------------------------------------------------
  1. FALLING_PRESSURE
     Rate   : share of episodes with pressure_trend == falling
     Report : rate > 0.20
     Strength: min(rate * 2, 1.0)

  2. LOW_PRESSURE
     Delta  : mean severity below 1013 hPa − mean severity at/above 1013 hPa
     Report : delta > 0.3 (both groups non-empty)
     Strength: min(delta / 2, 1.0)

  3. HIGH_HUMIDITY
     Rate   : share of episodes with humidity > 70 %
     Report : rate > 0.30 and at least 2 such episodes
     Strength: min(rate * 1.5, 1.0)

  4. TEMPERATURE
     Needs  : temperature range > 10 °C
     Delta  : |mean severity warmer half − mean severity colder half|,
              split at the upper median (colder half includes the median)
     Report : delta > 0.3 (both halves non-empty)
     Strength: min(delta / 2, 1.0)

Nothing is reported with fewer than 3 weather-linked episodes. The numeric
thresholds are product constants, not statistically derived.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from aurae.schemas.episode import Episode, WeatherSnapshot
from aurae.schemas.vocabulary import CorrelationStrength, PressureTrend

logger = logging.getLogger(__name__)


# Thresholds
MIN_WEATHER_EPISODES = 3
FALLING_RATE_THRESHOLD = 0.20
LOW_PRESSURE_HPA = 1013.0
LOW_PRESSURE_DELTA_THRESHOLD = 0.3
HIGH_HUMIDITY_PERCENT = 70.0
HIGH_HUMIDITY_RATE_THRESHOLD = 0.30
HIGH_HUMIDITY_MIN_COUNT = 2
TEMPERATURE_MIN_RANGE = 10.0
TEMPERATURE_DELTA_THRESHOLD = 0.3


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WeatherCorrelation:
    factor: str                     # e.g. "Falling pressure"
    strength: float                 # 0–1
    label: CorrelationStrength
    description: str                # plain-language insight

    @classmethod
    def build(cls, factor: str, strength: float, description: str) -> "WeatherCorrelation":
        return cls(
            factor=factor,
            strength=strength,
            label=CorrelationStrength.from_strength(strength),
            description=description,
        )


_Pair = tuple[Episode, WeatherSnapshot]


def _mean_severity(pairs: Sequence[_Pair]) -> float:
    return sum(e.severity for e, _ in pairs) / len(pairs)


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------

def _falling_pressure(pairs: Sequence[_Pair]) -> Optional[WeatherCorrelation]:
    falling = sum(1 for _, w in pairs if w.pressure_trend == PressureTrend.falling)
    rate = falling / len(pairs)
    if rate <= FALLING_RATE_THRESHOLD:
        return None
    return WeatherCorrelation.build(
        factor="Falling pressure",
        strength=min(rate * 2, 1.0),
        description=(
            f"{int(rate * 100)}% of your headaches occurred when "
            "barometric pressure was falling."
        ),
    )


def _low_pressure(pairs: Sequence[_Pair]) -> Optional[WeatherCorrelation]:
    low = [p for p in pairs if p[1].pressure < LOW_PRESSURE_HPA]
    high = [p for p in pairs if p[1].pressure >= LOW_PRESSURE_HPA]
    if not low or not high:
        return None
    delta = _mean_severity(low) - _mean_severity(high)
    if delta <= LOW_PRESSURE_DELTA_THRESHOLD:
        return None
    return WeatherCorrelation.build(
        factor="Low pressure",
        strength=min(delta / 2, 1.0),
        description=(
            f"Headaches are {delta:.1f} points more severe on average when "
            f"pressure is below {LOW_PRESSURE_HPA:.0f} hPa."
        ),
    )


def _high_humidity(pairs: Sequence[_Pair]) -> Optional[WeatherCorrelation]:
    humid = sum(1 for _, w in pairs if w.humidity > HIGH_HUMIDITY_PERCENT)
    if humid < HIGH_HUMIDITY_MIN_COUNT:
        return None
    rate = humid / len(pairs)
    if rate <= HIGH_HUMIDITY_RATE_THRESHOLD:
        return None
    return WeatherCorrelation.build(
        factor="High humidity",
        strength=min(rate * 1.5, 1.0),
        description=(
            f"{int(rate * 100)}% of your headaches occurred when humidity "
            f"was above {HIGH_HUMIDITY_PERCENT:.0f}%."
        ),
    )


def _temperature(pairs: Sequence[_Pair]) -> Optional[WeatherCorrelation]:
    temps = sorted(w.temperature for _, w in pairs)
    if temps[-1] - temps[0] <= TEMPERATURE_MIN_RANGE:
        return None
    median = temps[len(temps) // 2]
    warmer = [p for p in pairs if p[1].temperature > median]
    colder = [p for p in pairs if p[1].temperature <= median]
    if not warmer or not colder:
        return None
    warm_mean = _mean_severity(warmer)
    cold_mean = _mean_severity(colder)
    delta = abs(warm_mean - cold_mean)
    if delta <= TEMPERATURE_DELTA_THRESHOLD:
        return None
    warmer_is_worse = warm_mean > cold_mean
    return WeatherCorrelation.build(
        factor="High temperature" if warmer_is_worse else "Low temperature",
        strength=min(delta / 2, 1.0),
        description=(
            f"Headaches average {delta:.1f} points more severe in "
            f"{'warmer' if warmer_is_worse else 'colder'} weather."
        ),
    )


_CHECKS = (_falling_pressure, _low_pressure, _high_humidity, _temperature)


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def weather_correlations(episodes: Sequence[Episode]) -> list[WeatherCorrelation]:
    pairs = [(e, e.weather) for e in episodes if e.weather is not None]
    if len(pairs) < MIN_WEATHER_EPISODES:
        logger.debug(
            "Skipping weather correlations: %d weather-linked episodes (need %d)",
            len(pairs), MIN_WEATHER_EPISODES,
        )
        return []

    results = []
    for check in _CHECKS:
        correlation = check(pairs)
        if correlation is not None:
            results.append(correlation)
    return results
