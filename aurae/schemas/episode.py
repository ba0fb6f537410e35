"""
Episode input schemas.

Episode                → one headache occurrence, onset through resolution
  WeatherSnapshot      → conditions captured at onset (immutable)
  HealthSnapshot       → physiological readings captured at onset (immutable)
  RetrospectiveDetail  → context the user adds after the episode resolves

Every unmeasured quantity is Optional. Analyzers treat None as "excluded from
this computation", never as zero.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from aurae.schemas.vocabulary import (
    SEVERITY_LABELS,
    CyclePhase,
    EnvironmentalTrigger,
    HeadacheType,
    OnsetSpeed,
    PressureTrend,
    SeverityLevel,
    Symptom,
)

Severity = Annotated[int, Field(ge=1, le=5)]
Rating = Annotated[int, Field(ge=1, le=5)]
Hours = Annotated[float, Field(ge=0, le=24)]


# ---------------------------------------------------------------------------
# Capture snapshots
# ---------------------------------------------------------------------------

class WeatherSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature: float = Field(description="Air temperature in °C.")
    humidity: float = Field(ge=0, le=100, description="Relative humidity in %.")
    pressure: float = Field(gt=0, description="Barometric pressure in hPa.")
    pressure_trend: PressureTrend = PressureTrend.stable
    uv_index: float = Field(default=0, ge=0)
    aqi: Optional[int] = Field(default=None, ge=0)
    condition: str = Field(default="unknown", description='Sky condition, e.g. "partly_cloudy".')
    captured_at: Optional[datetime] = None


class HealthSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    heart_rate: Optional[float] = Field(default=None, ge=0)
    hrv: Optional[float] = Field(default=None, ge=0)
    oxygen_saturation: Optional[float] = Field(default=None, ge=0, le=100)
    resting_heart_rate: Optional[float] = Field(default=None, ge=0)
    step_count: Optional[int] = Field(default=None, ge=0)
    sleep_hours: Optional[Hours] = None
    captured_at: Optional[datetime] = None

    @property
    def has_cardiovascular_data(self) -> bool:
        return any(
            v is not None
            for v in (self.heart_rate, self.hrv, self.resting_heart_rate, self.oxygen_saturation)
        )

    @property
    def has_any_data(self) -> bool:
        return self.has_cardiovascular_data or self.step_count is not None or self.sleep_hours is not None


# ---------------------------------------------------------------------------
# Retrospective detail
# ---------------------------------------------------------------------------

class RetrospectiveDetail(BaseModel):
    """Post-episode context. Every field may be skipped by the user."""
    model_config = ConfigDict(validate_assignment=True)

    # Food & drink
    meals: list[str] = Field(default_factory=list)
    alcohol: Optional[str] = None
    caffeine_mg: Optional[int] = Field(default=None, ge=0)
    hydration_glasses: Optional[int] = Field(default=None, ge=0)
    skipped_meal: bool = False

    # Lifestyle
    sleep_hours: Optional[Hours] = None
    sleep_quality: Optional[Rating] = None
    stress_level: Optional[Rating] = None
    screen_time_hours: Optional[Hours] = None

    # Medication
    medication_name: Optional[str] = None
    medication_dose: Optional[str] = None
    medication_effectiveness: Optional[Rating] = None
    medication_is_acute: Optional[bool] = Field(
        default=None,
        description="True = acute, False = preventive, None = not classified.",
    )

    # Symptoms & classification
    symptoms: list[Symptom] = Field(default_factory=list)
    headache_type: Optional[HeadacheType] = None
    headache_location: Optional[str] = None
    cycle_phase: Optional[CyclePhase] = None

    # Environment
    environmental_triggers: list[EnvironmentalTrigger] = Field(default_factory=list)

    notes: Optional[str] = None

    @field_validator("meals", mode="before")
    @classmethod
    def drop_blank_meals(cls, v):
        if not isinstance(v, list):
            return v
        cleaned = []
        for m in v:
            # Non-string items pass through so pydantic reports them.
            if isinstance(m, str):
                m = m.strip()
                if not m:
                    continue
            cleaned.append(m)
        return cleaned

    @field_validator("medication_name", mode="before")
    @classmethod
    def blank_name_is_absent(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @property
    def has_any_data(self) -> bool:
        return bool(
            self.meals
            or self.alcohol is not None
            or self.caffeine_mg is not None
            or self.sleep_hours is not None
            or self.stress_level is not None
            or self.medication_name is not None
            or self.symptoms
            or self.headache_type is not None
            or self.environmental_triggers
            or self.notes is not None
        )

    @property
    def completion_fraction(self) -> float:
        """Share (0–1) of the tracked retrospective fields that are filled in."""
        filled = [
            bool(self.meals),
            self.alcohol is not None,
            self.caffeine_mg is not None,
            self.sleep_hours is not None,
            self.sleep_quality is not None,
            self.stress_level is not None,
            self.medication_name is not None,
            bool(self.symptoms),
            self.headache_type is not None,
            self.headache_location is not None,
            bool(self.environmental_triggers),
        ]
        return sum(filled) / len(filled)


# ---------------------------------------------------------------------------
# Episode
# ---------------------------------------------------------------------------

def _check_order(onset: datetime, resolved: datetime) -> None:
    if (onset.tzinfo is None) != (resolved.tzinfo is None):
        raise ValueError("onset_time and resolved_time must both be timezone-aware or both naive")
    if resolved < onset:
        raise ValueError("resolved_time must not be earlier than onset_time")


class Episode(BaseModel):
    """
    A single headache episode.

    Only `resolved_time` and `has_acknowledged_red_flag` change after
    creation (via resolve() and acknowledge_red_flag()); the snapshots are
    immutable once attached.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    onset_time: datetime
    resolved_time: Optional[datetime] = None
    severity: Severity = 3
    onset_speed: OnsetSpeed = OnsetSpeed.unknown

    weather: Optional[WeatherSnapshot] = None
    health: Optional[HealthSnapshot] = None
    retrospective: Optional[RetrospectiveDetail] = None

    # Set by the caller when the user dismisses the safety banner for this
    # specific episode. The red-flag evaluator only reads it.
    has_acknowledged_red_flag: bool = False

    # A rejected assignment leaves the instance unchanged.
    @field_validator("resolved_time")
    @classmethod
    def check_resolution_order(cls, v: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
        onset = info.data.get("onset_time")
        if v is not None and onset is not None:
            _check_order(onset, v)
        return v

    @field_validator("onset_time")
    @classmethod
    def check_onset_before_resolution(cls, v: datetime, info: ValidationInfo) -> datetime:
        # Only populated on assignment; resolved_time is declared later.
        resolved = info.data.get("resolved_time")
        if resolved is not None:
            _check_order(v, resolved)
        return v

    # --- lifecycle ---

    @property
    def is_active(self) -> bool:
        return self.resolved_time is None

    @property
    def duration(self) -> Optional[timedelta]:
        if self.resolved_time is None:
            return None
        return self.resolved_time - self.onset_time

    @property
    def severity_level(self) -> SeverityLevel:
        # Legacy 2 and 4 ratings map up to the next level on the 1/3/5 scale.
        if self.severity <= 1:
            return SeverityLevel.mild
        if self.severity <= 3:
            return SeverityLevel.moderate
        return SeverityLevel.severe

    @property
    def severity_label(self) -> str:
        return SEVERITY_LABELS[self.severity_level]

    def resolve(self, at: Optional[datetime] = None) -> None:
        self.resolved_time = at or datetime.now(self.onset_time.tzinfo)

    def acknowledge_red_flag(self) -> None:
        self.has_acknowledged_red_flag = True
