"""Alert models."""

from datetime import date, datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from .health import SymptomType


class AlertType(str, Enum):
    """Kinds of alert raised from logged data."""
    WEIGHT_GAIN_24H = "weight_gain_24h"
    WEIGHT_GAIN_7D = "weight_gain_7d"
    HEART_RATE_LOW = "heart_rate_low"
    HEART_RATE_HIGH = "heart_rate_high"
    SEVERE_SYMPTOM = "severe_symptom"
    DIZZINESS_BP_CHECK = "dizziness_bp_check"
    LOW_OXYGEN_SATURATION = "low_oxygen_saturation"
    LOW_BLOOD_PRESSURE = "low_blood_pressure"
    LOW_MAP = "low_map"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def description(self) -> str:
        """Patient-friendly explanation of the alert."""
        return _DESCRIPTIONS[self]

    @property
    def family(self) -> str:
        """Group used when showing alerts: weight, symptom, heart_rate, vitals."""
        return _FAMILIES[self]


_DISPLAY_NAMES = {
    AlertType.WEIGHT_GAIN_24H: "Weight change in 24 hours",
    AlertType.WEIGHT_GAIN_7D: "Weight change over 7 days",
    AlertType.HEART_RATE_LOW: "Low heart rate",
    AlertType.HEART_RATE_HIGH: "High heart rate",
    AlertType.SEVERE_SYMPTOM: "Symptom needs attention",
    AlertType.DIZZINESS_BP_CHECK: "Blood pressure check suggested",
    AlertType.LOW_OXYGEN_SATURATION: "Low oxygen level",
    AlertType.LOW_BLOOD_PRESSURE: "Low blood pressure",
    AlertType.LOW_MAP: "Low blood pressure",
}

_DESCRIPTIONS = {
    AlertType.WEIGHT_GAIN_24H: (
        "Your weight has changed noticeably since yesterday. "
        "It's a good idea to check in with your care team."
    ),
    AlertType.WEIGHT_GAIN_7D: (
        "Your weight has shifted over the past week. "
        "Your care team can help you understand what this means."
    ),
    AlertType.HEART_RATE_LOW: (
        "Your heart rate seems lower than usual. Consider reaching out to your care team."
    ),
    AlertType.HEART_RATE_HIGH: (
        "Your heart rate seems higher than usual. "
        "Your care team can help you figure out next steps."
    ),
    AlertType.SEVERE_SYMPTOM: (
        "You've noted a symptom that may need attention. "
        "Please consider contacting your care team."
    ),
    AlertType.DIZZINESS_BP_CHECK: (
        "You mentioned feeling dizzy. Checking your blood pressure may be helpful."
    ),
    AlertType.LOW_OXYGEN_SATURATION: (
        "Your oxygen level seems lower than usual. "
        "It's a good idea to check in with your care team to discuss this reading."
    ),
    AlertType.LOW_BLOOD_PRESSURE: (
        "Your blood pressure seems lower than usual. Consider reaching out to your "
        "care team, especially if you're feeling unwell."
    ),
    AlertType.LOW_MAP: (
        "Your blood pressure reading may be on the low side. "
        "Your care team can help you understand what this means for you."
    ),
}

_FAMILIES = {
    AlertType.WEIGHT_GAIN_24H: "weight",
    AlertType.WEIGHT_GAIN_7D: "weight",
    AlertType.HEART_RATE_LOW: "heart_rate",
    AlertType.HEART_RATE_HIGH: "heart_rate",
    AlertType.SEVERE_SYMPTOM: "symptom",
    AlertType.DIZZINESS_BP_CHECK: "dizziness",
    AlertType.LOW_OXYGEN_SATURATION: "vitals",
    AlertType.LOW_BLOOD_PRESSURE: "vitals",
    AlertType.LOW_MAP: "vitals",
}


class AlertEvent(BaseModel):
    """A logged notification-worthy condition.

    Alert events are an append-only log: once stored they are never edited.
    Acknowledgement is recorded separately as an AlertAcknowledgement.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    alert_type: AlertType
    message: str
    entry_date: date
    triggered_at: datetime = Field(default_factory=datetime.now)

    # The values that caused the alert, e.g. {"weight": 182.4, "change": 2.4}
    values: dict[str, float] = Field(default_factory=dict)

    # Severe symptoms covered by a severe_symptom alert
    symptom_types: list[SymptomType] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.alert_type.display_name

    def covers(self, symptom_types: set[SymptomType]) -> bool:
        """True when every given symptom is already part of this alert."""
        return symptom_types.issubset(set(self.symptom_types))


class AlertAcknowledgement(BaseModel):
    """Record that the patient dismissed an alert."""

    alert_id: str
    acknowledged_at: datetime = Field(default_factory=datetime.now)


class ActiveAlert(BaseModel):
    """An alert paired with its acknowledgement state, for display."""

    event: AlertEvent
    acknowledged_at: Optional[datetime] = None

    @property
    def is_acknowledged(self) -> bool:
        return self.acknowledged_at is not None
