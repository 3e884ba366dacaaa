"""Alert services.

Each service checks one kind of logged data against the thresholds in
``models.thresholds`` and appends an AlertEvent when a rule fires. Every rule
fires at most once per alert type per day.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Mapping, Optional, Sequence

from ..exceptions import AlertNotFoundError
from ..models import thresholds
from ..models.alerts import ActiveAlert, AlertAcknowledgement, AlertEvent, AlertType
from ..models.health import SymptomType
from ..models.readings import HeartRateReading, persistent_heart_rate_alert
from .storage import HeartStorage

logger = logging.getLogger(__name__)


def format_symptom_list(symptom_types: Iterable[SymptomType]) -> str:
    """Join symptom names as "a", "a and b" or "a, b, and c"."""
    names = sorted(s.display_name.lower() for s in symptom_types)
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return f"{names[0]} and {names[1]}"
    return ", ".join(names[:-1]) + f", and {names[-1]}"


class AlertService:
    """Shared alert log operations."""

    alert_types: tuple[AlertType, ...] = tuple(AlertType)

    def __init__(self, storage: Optional[HeartStorage] = None):
        self.storage = storage or HeartStorage()

    def has_alert_on(self, alert_type: AlertType, day: date) -> bool:
        """Whether an alert of this type already exists for the day."""
        return bool(self.storage.get_alerts(entry_date=day, alert_types=[alert_type]))

    def create_alert(
        self,
        alert_type: AlertType,
        message: str,
        day: date,
        values: Optional[Mapping[str, float]] = None,
        symptom_types: Optional[Sequence[SymptomType]] = None,
        now: Optional[datetime] = None,
    ) -> AlertEvent:
        """Append a new alert to the log."""
        alert = AlertEvent(
            alert_type=alert_type,
            message=message,
            entry_date=day,
            triggered_at=now or datetime.now(),
            values=dict(values or {}),
            symptom_types=list(symptom_types or []),
        )
        self.storage.append_alert(alert)
        logger.info("Alert %s raised for %s", alert_type.value, day)
        return alert

    def load_unacknowledged(
        self,
        alert_types: Optional[Iterable[AlertType]] = None,
    ) -> list[AlertEvent]:
        """Unacknowledged alerts of the given types, newest first."""
        types = list(alert_types) if alert_types is not None else list(self.alert_types)
        acknowledged = self.storage.get_acknowledgements()
        alerts = [
            a for a in self.storage.get_alerts(alert_types=types)
            if a.id not in acknowledged
        ]
        alerts.sort(key=lambda a: a.triggered_at, reverse=True)
        return alerts

    def load_all(self, alert_types: Optional[Iterable[AlertType]] = None) -> list[ActiveAlert]:
        """Every alert with its acknowledgement state, newest first."""
        types = list(alert_types) if alert_types is not None else list(self.alert_types)
        acknowledged = self.storage.get_acknowledgements()
        result = [
            ActiveAlert(
                event=a,
                acknowledged_at=acknowledged[a.id].acknowledged_at if a.id in acknowledged else None,
            )
            for a in self.storage.get_alerts(alert_types=types)
        ]
        result.sort(key=lambda a: a.event.triggered_at, reverse=True)
        return result

    def acknowledge(self, alert_id: str, now: Optional[datetime] = None) -> AlertAcknowledgement:
        """Dismiss an alert. Acknowledging twice keeps the first acknowledgement."""
        if self.storage.get_alert(alert_id) is None:
            raise AlertNotFoundError(alert_id)

        existing = self.storage.get_acknowledgements().get(alert_id)
        if existing is not None:
            return existing

        acknowledgement = AlertAcknowledgement(
            alert_id=alert_id,
            acknowledged_at=now or datetime.now(),
        )
        self.storage.acknowledge_alert(acknowledgement)
        logger.info("Alert %s acknowledged", alert_id)
        return acknowledgement


class WeightAlertService(AlertService):
    """Day-over-day and week-over-week weight gain."""

    alert_types = (AlertType.WEIGHT_GAIN_24H, AlertType.WEIGHT_GAIN_7D)

    def check(self, weight: float, day: date) -> list[AlertEvent]:
        alerts = []

        alert = self._check_24h(weight, day)
        if alert:
            alerts.append(alert)

        alert = self._check_7d(weight, day)
        if alert:
            alerts.append(alert)

        return alerts

    def _check_24h(self, weight: float, day: date) -> Optional[AlertEvent]:
        previous = self.storage.get_entry(day - timedelta(days=1))
        if previous is None or previous.weight is None:
            return None

        change = weight - previous.weight
        if change < thresholds.WEIGHT_GAIN_24H:
            return None

        if self.has_alert_on(AlertType.WEIGHT_GAIN_24H, day):
            return None

        message = (
            f"Your weight has increased by {change:.1f} lbs since yesterday. "
            "This is good information to share with your care team. "
            "Consider reaching out to discuss."
        )
        return self.create_alert(
            AlertType.WEIGHT_GAIN_24H,
            message,
            day,
            values={"weight": weight, "previous_weight": previous.weight, "change": change},
        )

    def _check_7d(self, weight: float, day: date) -> Optional[AlertEvent]:
        # Baseline is the earliest weighed day in the week before
        entries = self.storage.get_entries_in_range(
            day - timedelta(days=thresholds.WEIGHT_BASELINE_DAYS),
            day - timedelta(days=1),
        )
        weighed = [e for e in entries if e.weight is not None]
        if not weighed:
            return None

        baseline = weighed[0].weight
        change = weight - baseline
        if change < thresholds.WEIGHT_GAIN_7D:
            return None

        if self.has_alert_on(AlertType.WEIGHT_GAIN_7D, day):
            return None

        message = (
            f"Over the past week, your weight has increased by {change:.1f} lbs. "
            "Your clinician may want to know about this trend. "
            "It might be a good time to check in with them."
        )
        return self.create_alert(
            AlertType.WEIGHT_GAIN_7D,
            message,
            day,
            values={"weight": weight, "baseline_weight": baseline, "change": change},
        )


class SymptomAlertService(AlertService):
    """Symptoms rated significant or severe."""

    alert_types = (AlertType.SEVERE_SYMPTOM,)

    def check(self, severities: Mapping[SymptomType, int], day: date) -> Optional[AlertEvent]:
        severe = {
            symptom_type for symptom_type, severity in severities.items()
            if severity >= thresholds.SEVERE_SYMPTOM
        }
        if not severe:
            return None

        existing = self.storage.get_alerts(entry_date=day, alert_types=self.alert_types)
        if any(alert.covers(severe) for alert in existing):
            return None

        ordered = sorted(severe, key=lambda s: s.display_name)
        message = (
            f"You've noted that {format_symptom_list(ordered)} is bothering you "
            "more than usual today. This is helpful information to share with "
            "your care team when you get a chance."
        )
        return self.create_alert(
            AlertType.SEVERE_SYMPTOM,
            message,
            day,
            values={s.value: float(severities[s]) for s in ordered},
            symptom_types=ordered,
        )


class VitalSignsAlertService(AlertService):
    """Low oxygen saturation and low blood pressure."""

    alert_types = (
        AlertType.LOW_OXYGEN_SATURATION,
        AlertType.LOW_BLOOD_PRESSURE,
        AlertType.LOW_MAP,
    )

    def check(
        self,
        systolic: Optional[int],
        diastolic: Optional[int],
        oxygen_saturation: Optional[int],
        day: date,
    ) -> list[AlertEvent]:
        alerts = []

        if (
            oxygen_saturation is not None
            and oxygen_saturation < thresholds.OXYGEN_SATURATION_LOW
            and not self.has_alert_on(AlertType.LOW_OXYGEN_SATURATION, day)
        ):
            alerts.append(self.create_alert(
                AlertType.LOW_OXYGEN_SATURATION,
                f"Your oxygen level is {oxygen_saturation}%, which is lower than usual. "
                "Please contact your care team to discuss this reading.",
                day,
                values={"oxygen_saturation": oxygen_saturation},
            ))

        # Implausible readings (systolic not above diastolic) never alert
        if systolic is None or diastolic is None or systolic <= diastolic:
            return alerts

        reading = f"{systolic}/{diastolic}"
        values = {"systolic": systolic, "diastolic": diastolic}

        if (
            systolic < thresholds.SYSTOLIC_BP_LOW
            and not self.has_alert_on(AlertType.LOW_BLOOD_PRESSURE, day)
        ):
            alerts.append(self.create_alert(
                AlertType.LOW_BLOOD_PRESSURE,
                f"Your blood pressure reading of {reading} mmHg is lower than usual. "
                "Please contact your care team if you're feeling unwell.",
                day,
                values=values,
            ))

        mean_arterial_pressure = diastolic + (systolic - diastolic) // 3
        if (
            mean_arterial_pressure < thresholds.MAP_LOW
            and not self.has_alert_on(AlertType.LOW_MAP, day)
        ):
            alerts.append(self.create_alert(
                AlertType.LOW_MAP,
                f"Your blood pressure reading of {reading} mmHg indicates your blood "
                "pressure may be low. Please contact your care team if you have any symptoms.",
                day,
                values={**values, "map": mean_arterial_pressure},
            ))

        return alerts


class HeartRateAlertService(AlertService):
    """Persistently low or high resting heart rate."""

    alert_types = (AlertType.HEART_RATE_LOW, AlertType.HEART_RATE_HIGH)

    def check(self, readings: Sequence[HeartRateReading], day: date) -> Optional[AlertEvent]:
        alert_type = persistent_heart_rate_alert(readings)
        if alert_type is None or self.has_alert_on(alert_type, day):
            return None

        latest = max(readings, key=lambda r: r.recorded_at)
        if alert_type == AlertType.HEART_RATE_LOW:
            message = (
                f"Your resting heart rate has been around {latest.heart_rate} bpm recently, "
                "which is lower than usual. This is good information to share with your care team."
            )
        else:
            message = (
                f"Your resting heart rate has been around {latest.heart_rate} bpm recently, "
                "which is higher than usual. Your care team can help you understand "
                "what this means for you."
            )

        return self.create_alert(
            alert_type,
            message,
            day,
            values={"heart_rate": latest.heart_rate},
        )


class DizzinessBPAlertService(AlertService):
    """Prompt for a blood pressure reading when dizzy."""

    alert_types = (AlertType.DIZZINESS_BP_CHECK,)

    MESSAGE = (
        "You mentioned feeling dizzy today. If you have a blood pressure cuff, "
        "it might be helpful to take a reading. Remember to stand up slowly. "
        "If you're concerned or symptoms persist, consider reaching out to your care team."
    )

    def check(self, dizziness_severity: int, has_bp_reading: bool, day: date) -> Optional[AlertEvent]:
        if dizziness_severity < thresholds.DIZZINESS_BP_PROMPT or has_bp_reading:
            return None
        if self.has_alert_on(AlertType.DIZZINESS_BP_CHECK, day):
            return None
        return self.create_alert(
            AlertType.DIZZINESS_BP_CHECK,
            self.MESSAGE,
            day,
            values={"dizziness": dizziness_severity},
        )
