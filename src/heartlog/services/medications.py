"""Medication list management."""

import logging
from datetime import datetime
from typing import Optional

from ..exceptions import MedicationNotFoundError, MedicationValidationError
from ..models.health import Medication, MedicationPeriod
from .storage import HeartStorage
from .validation import validate_medication

logger = logging.getLogger(__name__)


class MedicationService:
    """
    Add, edit and archive medications.

    Medications are never deleted. Archiving hides a medication from the
    active list and closes its current dosage period, so the history stays
    available for the clinician summary.
    """

    def __init__(self, storage: Optional[HeartStorage] = None):
        self.storage = storage or HeartStorage()

    def get(self, medication_id: str) -> Medication:
        medication = self.storage.get_medication(medication_id)
        if medication is None:
            raise MedicationNotFoundError(medication_id)
        return medication

    def resolve(self, id_or_name: str) -> Medication:
        """Look up a medication by id, falling back to a case-insensitive name."""
        medication = self.storage.get_medication(id_or_name)
        if medication is not None:
            return medication

        matches = self.storage.find_medications(id_or_name)
        if not matches:
            raise MedicationNotFoundError(id_or_name)
        # Prefer the active one when the name was reused after archiving
        matches.sort(key=lambda m: (not m.is_active, m.created_at))
        return matches[0]

    def add(
        self,
        name: str,
        dosage,
        unit: str = "mg",
        schedule: str = "",
        is_diuretic: bool = False,
        when: Optional[datetime] = None,
    ) -> Medication:
        name, amount = validate_medication(name, dosage, unit)
        when = when or datetime.now()

        medication = Medication(
            name=name,
            dosage=amount,
            unit=unit,
            schedule=schedule.strip(),
            is_diuretic=is_diuretic,
            created_at=when,
        )
        medication.start_period(when)
        self.storage.save_medication(medication)
        logger.info("Added medication %s (%s)", medication.name, medication.display_dosage)
        return medication

    def update(
        self,
        medication_id: str,
        name: Optional[str] = None,
        dosage=None,
        unit: Optional[str] = None,
        schedule: Optional[str] = None,
        is_diuretic: Optional[bool] = None,
        when: Optional[datetime] = None,
    ) -> Medication:
        """
        Edit a medication. A dosage or unit change closes the current
        period and opens a new one; a schedule change edits it in place.
        """
        medication = self.get(medication_id)
        if not medication.is_active:
            raise MedicationValidationError("Reactivate this medication before editing it")

        new_name, amount = validate_medication(
            name if name is not None else medication.name,
            dosage if dosage is not None else medication.dosage,
            unit or medication.unit,
        )

        medication.name = new_name
        if is_diuretic is not None:
            medication.is_diuretic = is_diuretic

        medication.update_dosage(
            amount,
            unit or medication.unit,
            schedule.strip() if schedule is not None else medication.schedule,
            when,
        )
        self.storage.save_medication(medication)
        logger.info("Updated medication %s", medication.name)
        return medication

    def archive(self, medication_id: str, when: Optional[datetime] = None) -> Medication:
        """Stop taking a medication while keeping its history."""
        medication = self.get(medication_id)
        if not medication.is_active:
            return medication
        medication.archive(when)
        self.storage.save_medication(medication)
        logger.info("Archived medication %s", medication.name)
        return medication

    def reactivate(
        self,
        medication_id: str,
        dosage=None,
        unit: Optional[str] = None,
        schedule: Optional[str] = None,
        when: Optional[datetime] = None,
    ) -> Medication:
        """Restart an archived medication, optionally at a new dose."""
        medication = self.get(medication_id)
        if medication.is_active:
            return medication

        _, amount = validate_medication(
            medication.name,
            dosage if dosage is not None else medication.dosage,
            unit or medication.unit,
        )
        medication.reactivate(
            amount,
            unit or medication.unit,
            schedule.strip() if schedule is not None else medication.schedule,
            when,
        )
        self.storage.save_medication(medication)
        logger.info("Reactivated medication %s", medication.name)
        return medication

    def list_active(self) -> list[Medication]:
        """Active medications, diuretics first, then by name."""
        active = [m for m in self.storage.all_medications() if m.is_active]
        active.sort(key=lambda m: (not m.is_diuretic, m.name.lower()))
        return active

    def list_prior(self) -> list[Medication]:
        """Archived medications, most recently archived first."""
        prior = [m for m in self.storage.all_medications() if not m.is_active]
        prior.sort(key=lambda m: m.archived_at or m.created_at, reverse=True)
        return prior

    def history(self, medication_id: str) -> list[MedicationPeriod]:
        """All dosage periods, most recent first."""
        return self.get(medication_id).sorted_periods
