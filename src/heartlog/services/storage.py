"""Local storage service using TinyDB."""

import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from tinydb import Query, TinyDB
from tinydb.table import Table

from ..models.alerts import AlertAcknowledgement, AlertEvent, AlertType
from ..models.entry import DailyEntry
from ..models.health import Medication
from ..models.preferences import Preferences
from ..utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


class HeartStorage:
    """
    Local storage for the heart diary using TinyDB.

    Data is stored as JSON in the data directory, one table per record type:
    - entries: one DailyEntry per calendar date
    - medications: the medication list, including archived medications
    - alerts: append-only AlertEvent log
    - acknowledgements: dismissals of alerts
    - preferences: a single settings document
    """

    def __init__(self, settings: Optional[Settings] = None, db_path: Optional[Path] = None):
        self.settings = settings or get_settings()
        self._db_path = db_path
        self._db: Optional[TinyDB] = None

    @property
    def db_path(self) -> Path:
        """Path to the database file."""
        if self._db_path is not None:
            return self._db_path
        self.settings.data_dir.mkdir(parents=True, exist_ok=True)
        return self.settings.db_path

    @property
    def db(self) -> TinyDB:
        """Get the TinyDB instance."""
        if self._db is None:
            self._db = TinyDB(self.db_path)
        return self._db

    @property
    def entries(self) -> Table:
        return self.db.table("entries")

    @property
    def medications(self) -> Table:
        return self.db.table("medications")

    @property
    def alerts(self) -> Table:
        return self.db.table("alerts")

    @property
    def acknowledgements(self) -> Table:
        return self.db.table("acknowledgements")

    @property
    def preferences(self) -> Table:
        return self.db.table("preferences")

    # ----- Daily entries -----

    def save_entry(self, entry: DailyEntry) -> None:
        """Save or update a daily entry, keyed by its date."""
        Entry = Query()
        entry_dict = entry.model_dump(mode="json")
        self.entries.upsert(entry_dict, Entry.entry_date == entry.entry_date.isoformat())

    def get_entry(self, entry_date: date) -> Optional[DailyEntry]:
        """Get an entry by date."""
        Entry = Query()
        results = self.entries.search(Entry.entry_date == entry_date.isoformat())

        if results:
            return DailyEntry.model_validate(results[0])
        return None

    def get_or_create_entry(self, entry_date: date) -> DailyEntry:
        """Get an existing entry or create a new one."""
        entry = self.get_entry(entry_date)
        if entry is None:
            entry = DailyEntry(entry_date=entry_date)
            self.save_entry(entry)
            logger.debug("Created daily entry for %s", entry_date)
        return entry

    def get_recent_entries(self, days: int = 30) -> list[DailyEntry]:
        """Get the most recent N entries, newest first."""
        entries = [DailyEntry.model_validate(e) for e in self.entries.all()]
        entries.sort(key=lambda e: e.entry_date, reverse=True)
        return entries[:days]

    def get_entries_in_range(
        self,
        start_date: date,
        end_date: date,
    ) -> list[DailyEntry]:
        """Get all entries within a date range (inclusive), oldest first."""
        Entry = Query()

        results = self.entries.search(
            (Entry.entry_date >= start_date.isoformat()) &
            (Entry.entry_date <= end_date.isoformat())
        )

        entries = [DailyEntry.model_validate(e) for e in results]
        entries.sort(key=lambda e: e.entry_date)
        return entries

    def delete_entry(self, entry_date: date) -> bool:
        """Delete an entry by date."""
        Entry = Query()
        removed = self.entries.remove(Entry.entry_date == entry_date.isoformat())
        return len(removed) > 0

    # ----- Medications -----

    def save_medication(self, medication: Medication) -> None:
        """Insert or update a medication, keyed by id."""
        Med = Query()
        self.medications.upsert(medication.model_dump(mode="json"), Med.id == medication.id)

    def get_medication(self, medication_id: str) -> Optional[Medication]:
        Med = Query()
        results = self.medications.search(Med.id == medication_id)
        if results:
            return Medication.model_validate(results[0])
        return None

    def all_medications(self) -> list[Medication]:
        return [Medication.model_validate(m) for m in self.medications.all()]

    def find_medications(self, name: str) -> list[Medication]:
        """Case-insensitive lookup by exact name."""
        Med = Query()
        wanted = name.strip().lower()
        results = self.medications.search(Med.name.test(lambda v: v.lower() == wanted))
        return [Medication.model_validate(m) for m in results]

    # ----- Alerts (append-only) -----

    def append_alert(self, alert: AlertEvent) -> None:
        """Add an alert to the log. Alerts are never updated or removed."""
        self.alerts.insert(alert.model_dump(mode="json"))

    def get_alert(self, alert_id: str) -> Optional[AlertEvent]:
        Alert = Query()
        results = self.alerts.search(Alert.id == alert_id)
        if results:
            return AlertEvent.model_validate(results[0])
        return None

    def get_alerts(
        self,
        entry_date: Optional[date] = None,
        alert_types: Optional[Iterable[AlertType]] = None,
    ) -> list[AlertEvent]:
        """Alerts, optionally filtered by day and type, oldest first."""
        Alert = Query()
        condition = None

        if entry_date is not None:
            condition = Alert.entry_date == entry_date.isoformat()

        if alert_types is not None:
            wanted = [t.value for t in alert_types]
            type_condition = Alert.alert_type.one_of(wanted)
            condition = type_condition if condition is None else condition & type_condition

        docs = self.alerts.all() if condition is None else self.alerts.search(condition)
        alerts = [AlertEvent.model_validate(a) for a in docs]
        alerts.sort(key=lambda a: a.triggered_at)
        return alerts

    def get_alerts_in_range(self, start_date: date, end_date: date) -> list[AlertEvent]:
        Alert = Query()
        results = self.alerts.search(
            (Alert.entry_date >= start_date.isoformat()) &
            (Alert.entry_date <= end_date.isoformat())
        )
        alerts = [AlertEvent.model_validate(a) for a in results]
        alerts.sort(key=lambda a: a.triggered_at)
        return alerts

    def acknowledge_alert(self, acknowledgement: AlertAcknowledgement) -> None:
        self.acknowledgements.insert(acknowledgement.model_dump(mode="json"))

    def get_acknowledgements(self) -> dict[str, AlertAcknowledgement]:
        """Acknowledgements keyed by alert id."""
        acks = [AlertAcknowledgement.model_validate(a) for a in self.acknowledgements.all()]
        return {a.alert_id: a for a in acks}

    # ----- Preferences -----

    def get_preferences(self) -> Preferences:
        docs = self.preferences.all()
        if docs:
            return Preferences.model_validate(docs[0])
        return Preferences()

    def save_preferences(self, preferences: Preferences) -> None:
        self.preferences.truncate()
        self.preferences.insert(preferences.model_dump(mode="json"))

    def close(self) -> None:
        """Close the database connection."""
        if self._db:
            self._db.close()
            self._db = None

    def __enter__(self) -> "HeartStorage":
        return self

    def __exit__(self, *args) -> None:
        self.close()
