"""Tests for TinyDB storage."""

from datetime import date, datetime

from heartlog.models import AlertAcknowledgement, AlertEvent, AlertType, DailyEntry, Medication, Preferences
from heartlog.services.storage import HeartStorage


class TestEntries:
    """Tests for daily entry persistence."""

    def test_one_entry_per_day(self, storage, today):
        """Test saving twice keeps one entry per day."""
        entry = storage.get_or_create_entry(today)
        entry.weight = 180.0
        storage.save_entry(entry)
        storage.save_entry(storage.get_or_create_entry(today))

        assert len(storage.entries.all()) == 1
        assert storage.get_entry(today).weight == 180.0

    def test_range_is_inclusive_and_sorted(self, storage):
        """Test range queries are inclusive and sorted."""
        for day in (3, 1, 2, 5):
            storage.save_entry(DailyEntry(entry_date=date(2024, 3, day)))

        entries = storage.get_entries_in_range(date(2024, 3, 1), date(2024, 3, 3))
        assert [e.entry_date.day for e in entries] == [1, 2, 3]

    def test_recent_entries_newest_first(self, storage):
        """Test recent entries come newest first."""
        for day in (1, 2, 3):
            storage.save_entry(DailyEntry(entry_date=date(2024, 3, day)))
        assert [e.entry_date.day for e in storage.get_recent_entries(2)] == [3, 2]

    def test_delete_entry(self, storage, today):
        """Test deleting an entry."""
        storage.save_entry(DailyEntry(entry_date=today))
        assert storage.delete_entry(today) is True
        assert storage.delete_entry(today) is False

    def test_persists_across_reopen(self, tmp_path, settings, today):
        """Test data survives reopening the database."""
        path = tmp_path / "reopen.json"
        with HeartStorage(settings=settings, db_path=path) as store:
            store.save_entry(DailyEntry(entry_date=today, weight=175.5))

        with HeartStorage(settings=settings, db_path=path) as store:
            assert store.get_entry(today).weight == 175.5


class TestMedications:
    def test_find_by_name_ignores_case(self, storage):
        """Test name lookup ignores case."""
        storage.save_medication(Medication(name="Furosemide", dosage=40))
        assert len(storage.find_medications("furosemide ")) == 1
        assert storage.find_medications("torsemide") == []


class TestAlerts:
    def _alert(self, alert_type, day, hour=9):
        return AlertEvent(
            alert_type=alert_type,
            message="m",
            entry_date=day,
            triggered_at=datetime(day.year, day.month, day.day, hour),
        )

    def test_filter_by_day_and_type(self, storage, today):
        """Test filtering alerts by day and type."""
        storage.append_alert(self._alert(AlertType.WEIGHT_GAIN_24H, today))
        storage.append_alert(self._alert(AlertType.SEVERE_SYMPTOM, today))
        storage.append_alert(self._alert(AlertType.WEIGHT_GAIN_24H, date(2024, 3, 14)))

        assert len(storage.get_alerts(entry_date=today)) == 2
        assert len(storage.get_alerts(alert_types=[AlertType.WEIGHT_GAIN_24H])) == 2
        assert len(storage.get_alerts(entry_date=today, alert_types=[AlertType.SEVERE_SYMPTOM])) == 1

    def test_acknowledgements_keyed_by_alert(self, storage, today):
        """Test acknowledgements are keyed by alert id."""
        alert = self._alert(AlertType.LOW_MAP, today)
        storage.append_alert(alert)
        storage.acknowledge_alert(AlertAcknowledgement(alert_id=alert.id))

        assert alert.id in storage.get_acknowledgements()
        # The alert itself is unchanged
        assert storage.get_alert(alert.id) == alert


class TestPreferences:
    def test_default_when_empty(self, storage):
        """Test default preferences when none are saved."""
        assert storage.get_preferences() == Preferences()

    def test_single_document(self, storage):
        """Test preferences are a single document."""
        storage.save_preferences(Preferences(patient_identifier="A"))
        storage.save_preferences(Preferences(patient_identifier="B"))

        assert len(storage.preferences.all()) == 1
        assert storage.get_preferences().patient_identifier == "B"
