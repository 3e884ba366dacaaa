"""Daily logging: weight, symptoms and vital signs for one day."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Mapping, Optional, Union

from ..exceptions import InputValidationError
from ..models import thresholds
from ..models.alerts import AlertEvent, AlertType
from ..models.entry import DailyEntry
from ..models.health import SymptomType, VitalSigns, clamp_severity
from ..sources.health_data import HealthDataSource
from .alerts import (
    AlertService,
    DizzinessBPAlertService,
    HeartRateAlertService,
    SymptomAlertService,
    VitalSignsAlertService,
    WeightAlertService,
)
from .storage import HeartStorage
from .validation import (
    validate_blood_pressure,
    validate_heart_rate,
    validate_oxygen_saturation,
    validate_weight,
)

logger = logging.getLogger(__name__)


@dataclass
class WeightSaveResult:
    """Outcome of saving a weight."""
    entry: DailyEntry
    weight: float
    previous_weight: Optional[float] = None
    alerts: list[AlertEvent] = field(default_factory=list)

    @property
    def change(self) -> Optional[float]:
        if self.previous_weight is None:
            return None
        return self.weight - self.previous_weight

    @property
    def weight_change_text(self) -> Optional[str]:
        """Plain-language comparison with yesterday, or None without a previous weight."""
        change = self.change
        if change is None:
            return None
        formatted = f"{abs(change):.1f}"
        if change > thresholds.WEIGHT_STABILITY:
            return f"Your weight is up {formatted} lbs from yesterday"
        if change < -thresholds.WEIGHT_STABILITY:
            return f"Your weight is down {formatted} lbs from yesterday"
        return "Your weight is stable from yesterday"


@dataclass
class VitalsSaveResult:
    """Outcome of saving vital signs."""
    entry: DailyEntry
    alerts: list[AlertEvent] = field(default_factory=list)


@dataclass
class HealthImportResult:
    """Outcome of importing the latest readings from a health-data export."""
    imported: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    weight: Optional[float] = None
    alerts: list[AlertEvent] = field(default_factory=list)

    @property
    def found_readings(self) -> bool:
        return bool(self.imported or self.skipped)


class TodayService:
    """
    Service behind the daily check-in.

    Every save creates the day's entry on first write, persists it, then runs
    the alert checks that depend on what changed.
    """

    def __init__(
        self,
        storage: Optional[HeartStorage] = None,
        health_source: Optional[HealthDataSource] = None,
    ):
        self.storage = storage or HeartStorage()
        self.health_source = health_source

        self.alerts = AlertService(self.storage)
        self.weight_alerts = WeightAlertService(self.storage)
        self.symptom_alerts = SymptomAlertService(self.storage)
        self.vitals_alerts = VitalSignsAlertService(self.storage)
        self.heart_rate_alerts = HeartRateAlertService(self.storage)
        self.dizziness_alerts = DizzinessBPAlertService(self.storage)

    def get_entry(self, day: Optional[date] = None) -> Optional[DailyEntry]:
        return self.storage.get_entry(day or date.today())

    def previous_weight(self, day: Optional[date] = None) -> Optional[float]:
        """Yesterday's weight, if one was logged."""
        day = day or date.today()
        previous = self.storage.get_entry(day - timedelta(days=1))
        return previous.weight if previous else None

    # ----- Weight -----

    def save_weight(
        self,
        value: Union[str, float, int, None],
        day: Optional[date] = None,
    ) -> WeightSaveResult:
        """Validate and store the day's weight, then run weight alerts."""
        day = day or date.today()
        weight = validate_weight(value)

        entry = self.storage.get_or_create_entry(day)
        entry.weight = weight
        entry.touch()
        self.storage.save_entry(entry)
        logger.info("Saved weight %.1f lbs for %s", weight, day)

        alerts = self.weight_alerts.check(weight, day)
        return WeightSaveResult(
            entry=entry,
            weight=weight,
            previous_weight=self.previous_weight(day),
            alerts=alerts,
        )

    # ----- Symptoms -----

    def symptom_severities(self, day: Optional[date] = None) -> dict[SymptomType, int]:
        """Severity for all 8 symptoms, 1 where nothing was logged."""
        entry = self.storage.get_entry(day or date.today())
        if entry is None:
            return {symptom_type: 1 for symptom_type in SymptomType}
        return entry.severity_map()

    def update_severity(
        self,
        symptom_type: SymptomType,
        severity: int,
        day: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> list[AlertEvent]:
        """Rate one symptom and run the symptom checks."""
        return self.save_symptoms({symptom_type: severity}, day=day, now=now)

    def save_symptoms(
        self,
        severities: Mapping[SymptomType, int],
        day: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> list[AlertEvent]:
        """Rate several symptoms at once, e.g. a full check-in."""
        day = day or date.today()
        entry = self.storage.get_or_create_entry(day)

        for symptom_type, severity in severities.items():
            entry.set_severity(SymptomType(symptom_type), clamp_severity(severity))

        self.storage.save_entry(entry)
        logger.info("Saved %d symptom rating(s) for %s", len(severities), day)

        alerts = []
        alert = self.symptom_alerts.check(entry.severity_map(), day)
        if alert:
            alerts.append(alert)

        if SymptomType.DIZZINESS in severities:
            dizziness = entry.severity_map()[SymptomType.DIZZINESS]
            alert = self.dizziness_alerts.check(
                dizziness,
                self.has_recent_blood_pressure(entry, now=now),
                day,
            )
            if alert:
                alerts.append(alert)

        return alerts

    def has_recent_blood_pressure(
        self,
        entry: Optional[DailyEntry] = None,
        now: Optional[datetime] = None,
    ) -> bool:
        """Whether a BP reading exists within the look-back window."""
        now = now or datetime.now()
        cutoff = now - timedelta(hours=thresholds.BLOOD_PRESSURE_LOOKBACK_HOURS)

        entries = [entry] if entry else []
        entries += self.storage.get_entries_in_range(cutoff.date(), now.date())
        for e in entries:
            vitals = e.vitals
            if vitals and vitals.has_blood_pressure and vitals.blood_pressure_at:
                if cutoff <= vitals.blood_pressure_at <= now:
                    return True

        source = self.health_source
        if source is not None and source.authorized:
            return source.has_recent_blood_pressure(now=now)
        return False

    # ----- Vital signs -----

    def save_vitals(
        self,
        systolic=None,
        diastolic=None,
        oxygen_saturation=None,
        heart_rate=None,
        day: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> VitalsSaveResult:
        """
        Validate and store vital signs. Only the values given are updated;
        anything left as None keeps the value already recorded for the day.
        """
        day = day or date.today()
        now = now or datetime.now()

        systolic, diastolic = validate_blood_pressure(systolic, diastolic)
        oxygen_saturation = validate_oxygen_saturation(oxygen_saturation)
        heart_rate = validate_heart_rate(heart_rate)

        entry = self.storage.get_or_create_entry(day)
        vitals = entry.vitals or VitalSigns(created_at=now)

        if systolic is not None:
            vitals.systolic_bp = systolic
            vitals.diastolic_bp = diastolic
            vitals.blood_pressure_at = now
        if oxygen_saturation is not None:
            vitals.oxygen_saturation = oxygen_saturation
            vitals.oxygen_saturation_at = now
        if heart_rate is not None:
            vitals.resting_heart_rate = heart_rate
            vitals.heart_rate_at = now
        vitals.updated_at = now

        entry.vitals = vitals
        entry.touch()
        self.storage.save_entry(entry)
        logger.info("Saved vital signs for %s", day)

        alerts = self.vitals_alerts.check(systolic, diastolic, oxygen_saturation, day)
        return VitalsSaveResult(entry=entry, alerts=alerts)

    # ----- Heart rate -----

    def check_heart_rate(
        self,
        source: Optional[HealthDataSource] = None,
        day: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> Optional[AlertEvent]:
        """Run the persistent heart rate rule on imported readings."""
        source = source or self.health_source
        if source is None:
            return None
        readings = source.heart_rate_history(now=now)
        return self.heart_rate_alerts.check(readings, day or date.today())

    # ----- Health data import -----

    def import_health_data(
        self,
        source: Optional[HealthDataSource] = None,
        day: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> HealthImportResult:
        """
        Copy the latest readings from a health-data export into the day's entry.

        Each reading is checked on its own. A reading outside the accepted
        ranges is logged and skipped so the rest of the import still happens.
        The persistent heart rate rule always runs on the full history,
        including readings that were too extreme to store.
        """
        source = source or self.health_source
        result = HealthImportResult()
        if source is None:
            return result

        day = day or date.today()
        now = now or datetime.now()

        vitals = {}
        bp = source.latest_blood_pressure(now=now)
        if bp is not None:
            if self._acceptable("blood pressure", bp.formatted, result,
                                validate_blood_pressure, bp.systolic, bp.diastolic):
                vitals["systolic"] = bp.systolic
                vitals["diastolic"] = bp.diastolic
                result.imported.append("blood pressure")

        spo2 = source.latest_oxygen_saturation(now=now)
        if spo2 is not None:
            if self._acceptable("oxygen level", spo2.percentage, result,
                                validate_oxygen_saturation, spo2.percentage):
                vitals["oxygen_saturation"] = spo2.percentage
                result.imported.append("oxygen level")

        hr = source.latest_heart_rate(now=now)
        if hr is not None:
            if self._acceptable("heart rate", hr.heart_rate, result,
                                validate_heart_rate, hr.heart_rate):
                vitals["heart_rate"] = hr.heart_rate
                result.imported.append("heart rate")

        if vitals:
            result.alerts += self.save_vitals(day=day, now=now, **vitals).alerts

        entry = self.storage.get_entry(day)
        if entry is None or entry.weight is None:
            days = max((now.date() - day).days + 1, 1)
            weights = [w for w in source.weight_history(days=days, now=now) if w.recorded_at.date() == day]
            if weights:
                latest = weights[-1].weight
                if self._acceptable("weight", latest, result, validate_weight, latest):
                    saved = self.save_weight(latest, day)
                    result.weight = saved.weight
                    result.alerts += saved.alerts
                    result.imported.append("weight")

        alert = self.check_heart_rate(source, day, now=now)
        if alert:
            result.alerts.append(alert)
        return result

    @staticmethod
    def _acceptable(label, shown, result: HealthImportResult, validator, *values) -> bool:
        try:
            validator(*values)
        except InputValidationError as e:
            logger.warning("Skipped imported %s %s: %s", label, shown, e.message)
            result.skipped.append(label)
            return False
        return True

    # ----- Alerts -----

    def active_alerts(self) -> dict[str, list[AlertEvent]]:
        """Unacknowledged alerts grouped by family, newest first within each."""
        grouped: dict[str, list[AlertEvent]] = {}
        for alert in self.alerts.load_unacknowledged():
            grouped.setdefault(alert.alert_type.family, []).append(alert)
        return grouped

    def acknowledge(self, alert_id: str):
        return self.alerts.acknowledge(alert_id)

    def unacknowledged_count(self, alert_types: Optional[list[AlertType]] = None) -> int:
        return len(self.alerts.load_unacknowledged(alert_types))
