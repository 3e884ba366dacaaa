"""Business logic services."""

from .alerts import (
    AlertService,
    DizzinessBPAlertService,
    HeartRateAlertService,
    SymptomAlertService,
    VitalSignsAlertService,
    WeightAlertService,
)
from .diuretics import DiureticDoseService
from .export import ExportData, ExportService, PDFReportGenerator
from .medications import MedicationService
from .preferences import PreferencesService
from .reminders import ReminderService
from .storage import HeartStorage
from .today import TodayService, WeightSaveResult
from .trends import TrendsService

__all__ = [
    "HeartStorage",
    "AlertService",
    "WeightAlertService",
    "SymptomAlertService",
    "VitalSignsAlertService",
    "HeartRateAlertService",
    "DizzinessBPAlertService",
    "TodayService",
    "WeightSaveResult",
    "MedicationService",
    "DiureticDoseService",
    "TrendsService",
    "ExportData",
    "ExportService",
    "PDFReportGenerator",
    "PreferencesService",
    "ReminderService",
]
