"""
Serialisable output schemas for the presentation and export layers.

Report                  → ReportOut
RedFlagAssessment       → RedFlagAssessmentOut
MedicationOveruseStatus → MedicationOveruseOut
ExportSummary           → ExportSummaryOut

Built with `Model.model_validate(result)` straight from the service
dataclasses (from_attributes).
"""
import uuid
from datetime import date, datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from aurae.schemas.vocabulary import (
    CorrelationStrength,
    RedFlagReason,
    SleepPattern,
    TimeOfDay,
    Urgency,
)


class RankedFactorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    count: int


class WeatherCorrelationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    factor: str
    strength: float = Field(ge=0, le=1)
    label: CorrelationStrength
    description: str


class SleepCorrelationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    average_sleep_high_severity: float
    average_sleep_low_severity: float
    difference: float
    pattern: SleepPattern
    description: str


class MedicationScoreOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    average_effectiveness: float
    uses: int


class ReportOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_logs: int
    minimum_logs_required: int
    minimum_logs_met: bool
    average_severity: Optional[float] = None
    average_duration: Optional[timedelta] = None
    streak_days: Optional[int] = None
    most_common_triggers: list[RankedFactorOut]
    most_common_symptoms: list[RankedFactorOut]
    severity_by_weekday: dict[int, float] = Field(description="1 = Sunday … 7 = Saturday.")
    severity_by_time_of_day: dict[TimeOfDay, float]
    weather_correlations: list[WeatherCorrelationOut]
    sleep_correlation: Optional[SleepCorrelationOut] = None
    medication_effectiveness: list[MedicationScoreOut]
    headache_frequency: dict[date, int]


class RedFlagAssessmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    episode_id: uuid.UUID
    urgency: Urgency
    reason: Optional[RedFlagReason] = None
    matched_symptoms: list[str]
    should_surface: bool


class MedicationOveruseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: date
    acute_medication_days: int
    threshold: int
    exceeds_threshold: bool


class TriggerShareOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    count: int
    share: float = Field(ge=0, le=1)


class ExportSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_logs: int
    first_onset: Optional[datetime] = None
    last_onset: Optional[datetime] = None
    top_triggers: list[TriggerShareOut]
