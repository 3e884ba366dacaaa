"""Health-related data models."""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

MEDICATION_UNITS = ("mg", "mcg", "mL", "g", "units")


class SeverityLevel(int, Enum):
    """Symptom severity scale (1-5)."""
    NONE = 1
    MILD = 2
    MODERATE = 3
    SIGNIFICANT = 4
    SEVERE = 5

    @property
    def label(self) -> str:
        return self.name.title()

    @property
    def triggers_alert_consideration(self) -> bool:
        return self in (SeverityLevel.SIGNIFICANT, SeverityLevel.SEVERE)


def clamp_severity(value: int) -> int:
    """Clamp a raw severity into the 1-5 scale."""
    return min(max(int(value), SeverityLevel.NONE.value), SeverityLevel.SEVERE.value)


class SymptomType(str, Enum):
    """The heart failure symptoms tracked in a daily check-in."""
    DYSPNEA_AT_REST = "dyspnea_at_rest"
    DYSPNEA_ON_EXERTION = "dyspnea_on_exertion"
    ORTHOPNEA = "orthopnea"
    PND = "pnd"
    CHEST_PAIN = "chest_pain"
    DIZZINESS = "dizziness"
    SYNCOPE = "syncope"
    REDUCED_URINE_OUTPUT = "reduced_urine_output"

    @property
    def display_name(self) -> str:
        return _SYMPTOM_DISPLAY_NAMES[self]


_SYMPTOM_DISPLAY_NAMES = {
    SymptomType.DYSPNEA_AT_REST: "Shortness of breath at rest",
    SymptomType.DYSPNEA_ON_EXERTION: "Shortness of breath with activity",
    SymptomType.ORTHOPNEA: "Difficulty breathing lying flat",
    SymptomType.PND: "Waking up short of breath",
    SymptomType.CHEST_PAIN: "Chest discomfort",
    SymptomType.DIZZINESS: "Feeling dizzy or lightheaded",
    SymptomType.SYNCOPE: "Fainting or near-fainting",
    SymptomType.REDUCED_URINE_OUTPUT: "Less urine than usual",
}


class SymptomEntry(BaseModel):
    """One symptom rating within a daily entry."""

    type: SymptomType
    severity: int = SeverityLevel.NONE.value

    @field_validator("severity", mode="before")
    @classmethod
    def _clamp(cls, value: int) -> int:
        return clamp_severity(value)

    @property
    def level(self) -> SeverityLevel:
        return SeverityLevel(self.severity)

    @property
    def is_severe(self) -> bool:
        return self.level.triggers_alert_consideration


class VitalSigns(BaseModel):
    """Blood pressure, oxygen saturation and heart rate for a day."""

    systolic_bp: Optional[int] = None
    diastolic_bp: Optional[int] = None
    blood_pressure_at: Optional[datetime] = None

    oxygen_saturation: Optional[int] = None
    oxygen_saturation_at: Optional[datetime] = None

    resting_heart_rate: Optional[int] = None
    heart_rate_at: Optional[datetime] = None

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def has_blood_pressure(self) -> bool:
        return self.systolic_bp is not None and self.diastolic_bp is not None

    @property
    def has_oxygen_saturation(self) -> bool:
        return self.oxygen_saturation is not None

    @property
    def mean_arterial_pressure(self) -> Optional[int]:
        """MAP = DBP + (SBP - DBP) / 3, truncated to whole mmHg."""
        if not self.has_blood_pressure:
            return None
        return self.diastolic_bp + (self.systolic_bp - self.diastolic_bp) // 3

    @property
    def formatted_blood_pressure(self) -> Optional[str]:
        if not self.has_blood_pressure:
            return None
        return f"{self.systolic_bp}/{self.diastolic_bp}"


class DiureticDose(BaseModel):
    """A single diuretic dose taken on a given day."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    medication_id: str
    # Snapshot so history survives medication edits
    medication_name: str
    unit: str = "mg"
    amount: float
    timestamp: datetime = Field(default_factory=datetime.now)
    is_extra: bool = False

    @property
    def description(self) -> str:
        extra = " (extra)" if self.is_extra else ""
        return f"{self.medication_name} {self.amount:.0f}{self.unit}{extra}"


class MedicationPeriod(BaseModel):
    """A span of time a medication was taken at one dosage."""

    dosage: float
    unit: str
    schedule: str = ""
    start_date: datetime = Field(default_factory=datetime.now)
    end_date: Optional[datetime] = None

    @property
    def is_current(self) -> bool:
        return self.end_date is None


class Medication(BaseModel):
    """A medication on the patient's list."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    dosage: float
    unit: str = "mg"
    schedule: str = ""
    is_diuretic: bool = False
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
    archived_at: Optional[datetime] = None
    periods: list[MedicationPeriod] = Field(default_factory=list)

    @property
    def current_period(self) -> Optional[MedicationPeriod]:
        return next((p for p in self.periods if p.is_current), None)

    @property
    def sorted_periods(self) -> list[MedicationPeriod]:
        """All periods, most recent first."""
        return sorted(self.periods, key=lambda p: p.start_date, reverse=True)

    @property
    def display_dosage(self) -> str:
        return f"{self.dosage:g} {self.unit}"

    def start_period(self, when: Optional[datetime] = None) -> MedicationPeriod:
        """Open a new period at the current dosage."""
        period = MedicationPeriod(
            dosage=self.dosage,
            unit=self.unit,
            schedule=self.schedule,
            start_date=when or datetime.now(),
        )
        self.periods.append(period)
        return period

    def update_dosage(
        self,
        dosage: float,
        unit: str,
        schedule: str,
        when: Optional[datetime] = None,
    ) -> None:
        """Change dosage/schedule, opening a new period if the dose changed."""
        when = when or datetime.now()
        dose_changed = dosage != self.dosage or unit != self.unit

        self.dosage = dosage
        self.unit = unit
        self.schedule = schedule

        current = self.current_period
        if dose_changed:
            if current is not None:
                current.end_date = when
            self.start_period(when)
        elif current is not None:
            current.schedule = schedule

    def archive(self, when: Optional[datetime] = None) -> None:
        """Soft-delete: stop the medication but keep its history."""
        when = when or datetime.now()
        current = self.current_period
        if current is not None:
            current.end_date = when
        self.is_active = False
        self.archived_at = when

    def reactivate(
        self,
        dosage: float,
        unit: str,
        schedule: str,
        when: Optional[datetime] = None,
    ) -> None:
        """Restart an archived medication with a fresh period."""
        self.dosage = dosage
        self.unit = unit
        self.schedule = schedule
        self.is_active = True
        self.archived_at = None
        self.start_period(when)
