from .episode import Episode, HealthSnapshot, RetrospectiveDetail, WeatherSnapshot
from .report import (
    ExportSummaryOut,
    MedicationOveruseOut,
    RedFlagAssessmentOut,
    ReportOut,
)

__all__ = [
    "Episode",
    "HealthSnapshot",
    "RetrospectiveDetail",
    "WeatherSnapshot",
    "ExportSummaryOut",
    "MedicationOveruseOut",
    "RedFlagAssessmentOut",
    "ReportOut",
]
