"""Tests for data models."""

from datetime import date, datetime

from heartlog.models import (
    DailyEntry,
    DiureticDose,
    HeartRateReading,
    Medication,
    Preferences,
    SymptomEntry,
    VitalSigns,
    persistent_heart_rate_alert,
)
from heartlog.models.alerts import AlertEvent, AlertType
from heartlog.models.health import SeverityLevel, SymptomType, clamp_severity


class TestSymptomEntry:
    """Tests for the SymptomEntry model."""

    def test_create_symptom(self):
        """Test basic symptom creation."""
        symptom = SymptomEntry(type=SymptomType.ORTHOPNEA, severity=3)
        assert symptom.level == SeverityLevel.MODERATE
        assert symptom.is_severe is False

    def test_severity_is_clamped(self):
        """Out-of-range ratings are pulled back onto the 1-5 scale."""
        assert SymptomEntry(type=SymptomType.PND, severity=9).severity == 5
        assert SymptomEntry(type=SymptomType.PND, severity=0).severity == 1
        assert clamp_severity(-3) == 1

    def test_display_name(self):
        """Test human-readable symptom names."""
        assert SymptomType.DYSPNEA_AT_REST.display_name == "Shortness of breath at rest"
        assert SeverityLevel.SIGNIFICANT.label == "Significant"


class TestDailyEntry:
    """Tests for the DailyEntry model."""

    def test_create_entry(self):
        """Test basic entry creation."""
        entry = DailyEntry(entry_date=date(2024, 3, 15))
        assert entry.weight is None
        assert entry.symptoms == []
        assert entry.has_symptoms is False
        assert entry.worst_symptom_severity == 0

    def test_set_severity_updates_existing(self):
        """Rating a symptom twice keeps one record."""
        entry = DailyEntry(entry_date=date(2024, 3, 15))
        entry.set_severity(SymptomType.CHEST_PAIN, 2)
        entry.set_severity(SymptomType.CHEST_PAIN, 4)

        assert len(entry.symptoms) == 1
        assert entry.severity_map()[SymptomType.CHEST_PAIN] == 4
        assert [s.type for s in entry.severe_symptoms] == [SymptomType.CHEST_PAIN]

    def test_severity_map_defaults_to_none(self):
        """Test unrated symptoms default to none."""
        entry = DailyEntry(entry_date=date(2024, 3, 15))
        severities = entry.severity_map()
        assert len(severities) == 8
        assert set(severities.values()) == {1}

    def test_remove_dose(self):
        """Test removing a dose."""
        entry = DailyEntry(entry_date=date(2024, 3, 15))
        dose = DiureticDose(medication_id="m1", medication_name="Furosemide", amount=40)
        entry.add_dose(dose)

        assert entry.remove_dose("missing") is False
        assert entry.remove_dose(dose.id) is True
        assert entry.diuretic_doses == []

    def test_summary(self):
        """Test entry summary generation."""
        entry = DailyEntry(entry_date=date(2024, 12, 25), weight=182.4)
        entry.set_severity(SymptomType.DIZZINESS, 3)
        summary = entry.summary()

        assert "December 25, 2024" in summary
        assert "182.4 lbs" in summary
        assert "3/5" in summary


class TestVitalSigns:
    """Tests for derived vital sign values."""

    def test_mean_arterial_pressure(self):
        """Test mean arterial pressure."""
        vitals = VitalSigns(systolic_bp=120, diastolic_bp=80)
        assert vitals.mean_arterial_pressure == 93
        assert vitals.formatted_blood_pressure == "120/80"

    def test_partial_blood_pressure(self):
        """Test a blood pressure with one number missing."""
        vitals = VitalSigns(systolic_bp=120)
        assert vitals.has_blood_pressure is False
        assert vitals.mean_arterial_pressure is None


class TestMedication:
    """Tests for medication periods."""

    def test_dose_change_opens_new_period(self):
        """Test a dose change opens a new period."""
        med = Medication(name="Furosemide", dosage=40, unit="mg")
        med.start_period(datetime(2024, 1, 1))
        med.update_dosage(80, "mg", "twice daily", datetime(2024, 2, 1))

        assert len(med.periods) == 2
        assert med.periods[0].end_date == datetime(2024, 2, 1)
        assert med.current_period.dosage == 80
        assert med.display_dosage == "80 mg"

    def test_schedule_change_keeps_period(self):
        """Test a schedule change keeps the period."""
        med = Medication(name="Carvedilol", dosage=6.25, unit="mg")
        med.start_period(datetime(2024, 1, 1))
        med.update_dosage(6.25, "mg", "with meals", datetime(2024, 2, 1))

        assert len(med.periods) == 1
        assert med.current_period.schedule == "with meals"

    def test_archive_closes_period(self):
        """Test archiving closes the open period."""
        med = Medication(name="Lisinopril", dosage=10)
        med.start_period(datetime(2024, 1, 1))
        med.archive(datetime(2024, 3, 1))

        assert med.is_active is False
        assert med.current_period is None
        assert med.periods[0].end_date == datetime(2024, 3, 1)


class TestAlertEvent:
    """Tests for alert coverage checks."""

    def test_covers_subset(self):
        """Test the symptom superset check."""
        alert = AlertEvent(
            alert_type=AlertType.SEVERE_SYMPTOM,
            message="m",
            entry_date=date(2024, 3, 15),
            symptom_types=[SymptomType.ORTHOPNEA, SymptomType.PND],
        )
        assert alert.covers({SymptomType.PND})
        assert not alert.covers({SymptomType.PND, SymptomType.SYNCOPE})


class TestPersistentHeartRate:
    """Tests for the persistent heart rate rule."""

    def _readings(self, *rates):
        return [
            HeartRateReading(heart_rate=rate, recorded_at=datetime(2024, 3, 15, 8 + i))
            for i, rate in enumerate(rates)
        ]

    def test_needs_three_readings(self):
        """Test fewer than three readings never alert."""
        assert persistent_heart_rate_alert(self._readings(35, 36)) is None

    def test_low_and_high(self):
        """Test low and high classification."""
        assert persistent_heart_rate_alert(self._readings(35, 36, 38)) == AlertType.HEART_RATE_LOW
        assert persistent_heart_rate_alert(self._readings(130, 125, 140)) == AlertType.HEART_RATE_HIGH

    def test_only_latest_three_count(self):
        """An old normal reading does not break a run of recent low ones."""
        assert persistent_heart_rate_alert(self._readings(70, 35, 36, 38)) == AlertType.HEART_RATE_LOW
        assert persistent_heart_rate_alert(self._readings(35, 36, 70)) is None


class TestPreferences:
    def test_defaults(self):
        """Test default preferences."""
        prefs = Preferences()
        assert prefs.formatted_reminder_time == "8:00 AM"
        assert prefs.notifications_authorized is None
        assert prefs.patient_identifier_for_export is None

    def test_identifier_trimmed(self):
        """Test the patient identifier is trimmed."""
        assert Preferences(patient_identifier="  J.D.  ").patient_identifier_for_export == "J.D."
