"""Data models for the heart diary application."""

from .alerts import ActiveAlert, AlertAcknowledgement, AlertEvent, AlertType
from .entry import DailyEntry
from .health import (
    MEDICATION_UNITS,
    DiureticDose,
    Medication,
    MedicationPeriod,
    SeverityLevel,
    SymptomEntry,
    SymptomType,
    VitalSigns,
)
from .preferences import Preferences
from .readings import (
    BloodPressureReading,
    HeartRateReading,
    OxygenSaturationReading,
    SymptomDataPoint,
    WeightDataPoint,
    WeightReading,
    persistent_heart_rate_alert,
)

__all__ = [
    "DailyEntry",
    "SymptomEntry",
    "SymptomType",
    "SeverityLevel",
    "VitalSigns",
    "DiureticDose",
    "Medication",
    "MedicationPeriod",
    "MEDICATION_UNITS",
    "AlertType",
    "AlertEvent",
    "AlertAcknowledgement",
    "ActiveAlert",
    "Preferences",
    "HeartRateReading",
    "BloodPressureReading",
    "OxygenSaturationReading",
    "WeightReading",
    "WeightDataPoint",
    "SymptomDataPoint",
    "persistent_heart_rate_alert",
]
