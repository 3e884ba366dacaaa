"""Diuretic dose tracking."""

import logging
from datetime import date, datetime
from typing import Optional

from ..exceptions import DoseNotFoundError, MedicationValidationError
from ..models.health import DiureticDose, Medication
from .medications import MedicationService
from .storage import HeartStorage

logger = logging.getLogger(__name__)


class DiureticDoseService:
    """Log and remove diuretic doses on a day's entry."""

    def __init__(self, storage: Optional[HeartStorage] = None):
        self.storage = storage or HeartStorage()
        self.medications = MedicationService(self.storage)

    def load_diuretics(self) -> list[Medication]:
        """Active diuretics, by name."""
        diuretics = [
            m for m in self.storage.all_medications()
            if m.is_active and m.is_diuretic
        ]
        diuretics.sort(key=lambda m: m.name.lower())
        return diuretics

    def log_dose(
        self,
        medication_id: str,
        amount: Optional[float] = None,
        extra: bool = False,
        timestamp: Optional[datetime] = None,
        day: Optional[date] = None,
    ) -> DiureticDose:
        """
        Record a dose. Without an amount the medication's current dosage
        is used.
        """
        medication = self.medications.get(medication_id)
        if not medication.is_active or not medication.is_diuretic:
            raise MedicationValidationError(f"{medication.name} is not an active diuretic")

        if amount is None:
            amount = medication.dosage
        if amount <= 0:
            raise MedicationValidationError("Please enter a valid dosage amount")

        if timestamp is None:
            now = datetime.now()
            timestamp = now if day is None else datetime.combine(day, now.time())
        day = day or timestamp.date()

        dose = DiureticDose(
            medication_id=medication.id,
            medication_name=medication.name,
            unit=medication.unit,
            amount=amount,
            timestamp=timestamp,
            is_extra=extra,
        )

        entry = self.storage.get_or_create_entry(day)
        entry.add_dose(dose)
        self.storage.save_entry(entry)
        logger.info("Logged %s for %s", dose.description, day)
        return dose

    def delete_dose(self, dose_id: str, day: Optional[date] = None) -> None:
        day = day or date.today()
        entry = self.storage.get_entry(day)
        if entry is None or not entry.remove_dose(dose_id):
            raise DoseNotFoundError(dose_id)
        self.storage.save_entry(entry)
        logger.info("Deleted dose %s from %s", dose_id, day)

    def doses_for(self, day: Optional[date] = None, medication_id: Optional[str] = None) -> list[DiureticDose]:
        """Doses taken on a day, in time order."""
        entry = self.storage.get_entry(day or date.today())
        if entry is None:
            return []
        doses = entry.diuretic_doses
        if medication_id is not None:
            doses = [d for d in doses if d.medication_id == medication_id]
        return sorted(doses, key=lambda d: d.timestamp)
