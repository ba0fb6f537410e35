"""
Closed vocabularies used across the engine.

Every categorical value stored on an episode is one of these enums. Display
text lives in explicit label tables next to each enum so the analyzers never
format raw keys themselves.
"""
from __future__ import annotations

import enum


# ---------------------------------------------------------------------------
# Episode-level categories
# ---------------------------------------------------------------------------

class OnsetSpeed(str, enum.Enum):
    """How quickly a headache reached peak intensity."""
    gradual = "gradual"              # over 30 minutes or more
    moderate = "moderate"            # within about 1 to 30 minutes
    instantaneous = "instantaneous"  # within seconds to about a minute
    unknown = "unknown"              # "not sure" or unanswered


class SeverityLevel(int, enum.Enum):
    mild = 1
    moderate = 3
    severe = 5


SEVERITY_LABELS: dict[SeverityLevel, str] = {
    SeverityLevel.mild: "Mild",
    SeverityLevel.moderate: "Moderate",
    SeverityLevel.severe: "Severe",
}


class PressureTrend(str, enum.Enum):
    rising = "rising"
    falling = "falling"
    stable = "stable"


# ---------------------------------------------------------------------------
# Retrospective vocabularies
# ---------------------------------------------------------------------------

class Symptom(str, enum.Enum):
    nausea = "nausea"
    light_sensitivity = "light_sensitivity"
    sound_sensitivity = "sound_sensitivity"
    aura = "aura"
    neck_pain = "neck_pain"
    visual_disturbance = "visual_disturbance"
    vomiting = "vomiting"
    dizziness = "dizziness"


SYMPTOM_LABELS: dict[Symptom, str] = {
    Symptom.nausea: "Nausea",
    Symptom.light_sensitivity: "Light sensitivity",
    Symptom.sound_sensitivity: "Sound sensitivity",
    Symptom.aura: "Aura",
    Symptom.neck_pain: "Neck pain",
    Symptom.visual_disturbance: "Visual disturbance",
    Symptom.vomiting: "Vomiting",
    Symptom.dizziness: "Dizziness",
}


class EnvironmentalTrigger(str, enum.Enum):
    strong_smell = "strong_smell"
    bright_light = "bright_light"
    loud_noise = "loud_noise"
    screen_glare = "screen_glare"
    weather_change = "weather_change"
    altitude = "altitude"
    heat = "heat"
    cold = "cold"


TRIGGER_LABELS: dict[EnvironmentalTrigger, str] = {
    EnvironmentalTrigger.strong_smell: "Strong smell",
    EnvironmentalTrigger.bright_light: "Bright light",
    EnvironmentalTrigger.loud_noise: "Loud noise",
    EnvironmentalTrigger.screen_glare: "Screen glare",
    EnvironmentalTrigger.weather_change: "Weather change",
    EnvironmentalTrigger.altitude: "Altitude",
    EnvironmentalTrigger.heat: "Heat",
    EnvironmentalTrigger.cold: "Cold",
}

# Synthetic trigger entries derived from retrospective fields
SKIPPED_MEAL_LABEL = "Skipped meal"
HIGH_STRESS_LABEL = "High stress"


class HeadacheType(str, enum.Enum):
    tension = "tension"
    migraine = "migraine"
    cluster = "cluster"
    sinus = "sinus"
    other = "other"
    unknown = "unknown"


class CyclePhase(str, enum.Enum):
    menstrual = "menstrual"
    follicular = "follicular"
    ovulatory = "ovulatory"
    luteal = "luteal"
    unknown = "unknown"


# ---------------------------------------------------------------------------
# Output categories
# ---------------------------------------------------------------------------

class TimeOfDay(str, enum.Enum):
    morning = "morning"      # 06:00–11:59
    afternoon = "afternoon"  # 12:00–16:59
    evening = "evening"      # 17:00–21:59
    night = "night"          # 22:00–05:59

    @classmethod
    def from_hour(cls, hour: int) -> "TimeOfDay":
        if 6 <= hour < 12:
            return cls.morning
        if 12 <= hour < 17:
            return cls.afternoon
        if 17 <= hour < 22:
            return cls.evening
        return cls.night


class Urgency(str, enum.Enum):
    none = "none"
    advisory = "advisory"
    urgent = "urgent"


class RedFlagReason(str, enum.Enum):
    sudden_onset = "sudden_onset"
    aura_with_visual_disturbance = "aura_with_visual_disturbance"


class CorrelationStrength(str, enum.Enum):
    strong = "strong"
    moderate = "moderate"
    weak = "weak"

    @classmethod
    def from_strength(cls, strength: float) -> "CorrelationStrength":
        if strength >= 0.7:
            return cls.strong
        if strength >= 0.4:
            return cls.moderate
        return cls.weak

    @property
    def label(self) -> str:
        return f"{self.value.capitalize()} correlation"


class SleepPattern(str, enum.Enum):
    more_sleep_on_milder_days = "more_sleep_on_milder_days"
    less_sleep_on_milder_days = "less_sleep_on_milder_days"
    no_clear_difference = "no_clear_difference"
