"""Daily entry model."""

from datetime import date, datetime
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from .health import DiureticDose, SymptomEntry, SymptomType, VitalSigns, clamp_severity
from .thresholds import SEVERE_SYMPTOM


class DailyEntry(BaseModel):
    """A single day's self-reported health record."""

    # Identity
    id: str = Field(default_factory=lambda: str(uuid4()))
    entry_date: date

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    # Weight in lbs
    weight: Optional[float] = None

    # Health tracking
    symptoms: list[SymptomEntry] = Field(default_factory=list)
    vitals: Optional[VitalSigns] = None
    diuretic_doses: list[DiureticDose] = Field(default_factory=list)

    def touch(self) -> None:
        self.updated_at = datetime.now()

    def symptom(self, symptom_type: SymptomType) -> Optional[SymptomEntry]:
        """Return the rating for a symptom, if one was logged."""
        return next((s for s in self.symptoms if s.type == symptom_type), None)

    def set_severity(self, symptom_type: SymptomType, severity: int) -> SymptomEntry:
        """Create or update the rating for a symptom."""
        existing = self.symptom(symptom_type)
        if existing is None:
            existing = SymptomEntry(type=symptom_type, severity=severity)
            self.symptoms.append(existing)
        else:
            existing.severity = clamp_severity(severity)
        self.touch()
        return existing

    def severity_map(self) -> dict[SymptomType, int]:
        """Severity for every symptom type, defaulting to 1 when not logged."""
        severities = {symptom_type: 1 for symptom_type in SymptomType}
        for s in self.symptoms:
            severities[s.type] = s.severity
        return severities

    def add_dose(self, dose: DiureticDose) -> None:
        self.diuretic_doses.append(dose)
        self.touch()

    def remove_dose(self, dose_id: str) -> bool:
        before = len(self.diuretic_doses)
        self.diuretic_doses = [d for d in self.diuretic_doses if d.id != dose_id]
        removed = len(self.diuretic_doses) < before
        if removed:
            self.touch()
        return removed

    @property
    def has_symptoms(self) -> bool:
        return any(s.severity > 1 for s in self.symptoms)

    @property
    def severe_symptoms(self) -> list[SymptomEntry]:
        return [s for s in self.symptoms if s.severity >= SEVERE_SYMPTOM]

    @property
    def worst_symptom_severity(self) -> int:
        """Return the worst symptom severity for the day."""
        if not self.symptoms:
            return 0
        return max(s.severity for s in self.symptoms)

    def summary(self) -> str:
        """Generate a brief summary of the entry."""
        parts = [f"Entry for {self.entry_date.strftime('%A, %B %d, %Y')}"]

        if self.weight is not None:
            parts.append(f"Weight: {self.weight:.1f} lbs")

        if self.has_symptoms:
            worst = max(self.symptoms, key=lambda s: s.severity)
            parts.append(
                f"Symptoms: {sum(1 for s in self.symptoms if s.severity > 1)} logged "
                f"(worst: {worst.type.display_name} at {worst.severity}/5)"
            )

        if self.vitals and self.vitals.formatted_blood_pressure:
            parts.append(f"BP: {self.vitals.formatted_blood_pressure}")

        if self.vitals and self.vitals.oxygen_saturation is not None:
            parts.append(f"SpO2: {self.vitals.oxygen_saturation}%")

        if self.diuretic_doses:
            parts.append(f"Diuretic doses: {len(self.diuretic_doses)}")

        return " | ".join(parts)
