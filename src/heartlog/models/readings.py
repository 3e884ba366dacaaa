"""Imported health readings and trend data points."""

from datetime import date, datetime
from typing import Optional, Sequence

from pydantic import BaseModel

from .alerts import AlertType
from .health import SymptomType
from .thresholds import HEART_RATE_HIGH, HEART_RATE_LOW, PERSISTENT_READING_COUNT


class HeartRateReading(BaseModel):
    """A resting heart rate sample from a health-data export."""

    heart_rate: int
    recorded_at: datetime


class BloodPressureReading(BaseModel):
    """A blood pressure sample from a health-data export."""

    systolic: int
    diastolic: int
    recorded_at: datetime

    @property
    def mean_arterial_pressure(self) -> int:
        return self.diastolic + (self.systolic - self.diastolic) // 3

    @property
    def formatted(self) -> str:
        return f"{self.systolic}/{self.diastolic}"


class OxygenSaturationReading(BaseModel):
    """An SpO2 sample from a health-data export."""

    percentage: int
    recorded_at: datetime

    @property
    def formatted(self) -> str:
        return f"{self.percentage}%"


class WeightReading(BaseModel):
    """A weight sample (lbs) from a health-data export."""

    weight: float
    recorded_at: datetime


class WeightDataPoint(BaseModel):
    """Weight on a given day, for charts and export."""

    day: date
    weight: float


class SymptomDataPoint(BaseModel):
    """Symptom severity on a given day, for charts and export."""

    day: date
    symptom_type: SymptomType
    severity: int
    has_alert: bool = False


def persistent_heart_rate_alert(readings: Sequence[HeartRateReading]) -> Optional[AlertType]:
    """
    Classify the most recent heart rate readings.

    Returns HEART_RATE_LOW or HEART_RATE_HIGH when the last
    PERSISTENT_READING_COUNT readings are all below or all above the alert
    thresholds, otherwise None.
    """
    recent = sorted(readings, key=lambda r: r.recorded_at, reverse=True)
    recent = recent[:PERSISTENT_READING_COUNT]
    if len(recent) < PERSISTENT_READING_COUNT:
        return None

    if all(r.heart_rate < HEART_RATE_LOW for r in recent):
        return AlertType.HEART_RATE_LOW
    if all(r.heart_rate > HEART_RATE_HIGH for r in recent):
        return AlertType.HEART_RATE_HIGH
    return None
