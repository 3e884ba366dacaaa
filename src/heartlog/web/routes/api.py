"""JSON API over the same services as the HTML pages."""

from datetime import date
from typing import Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ...models.alerts import AlertEvent
from ...models.entry import DailyEntry
from ...models.health import DiureticDose, Medication, MedicationPeriod, SymptomType
from ...models.preferences import Preferences
from ...services.alerts import AlertService
from ...services.diuretics import DiureticDoseService
from ...services.medications import MedicationService
from ...services.preferences import PreferencesService
from ...services.reminders import ReminderService
from ...services.storage import HeartStorage
from ...services.today import TodayService
from ...services.trends import TrendsService
from ..deps import get_storage, today_service

router = APIRouter()


class WeightIn(BaseModel):
    weight: Union[float, str, None] = None
    entry_date: Optional[date] = None


class SymptomsIn(BaseModel):
    severities: dict[SymptomType, int]
    entry_date: Optional[date] = None


class VitalsIn(BaseModel):
    systolic: Optional[int] = None
    diastolic: Optional[int] = None
    oxygen_saturation: Optional[int] = None
    heart_rate: Optional[int] = None
    entry_date: Optional[date] = None


class MedicationIn(BaseModel):
    name: str
    dosage: float
    unit: str = "mg"
    schedule: str = ""
    is_diuretic: bool = False


class MedicationUpdate(BaseModel):
    name: Optional[str] = None
    dosage: Optional[float] = None
    unit: Optional[str] = None
    schedule: Optional[str] = None
    is_diuretic: Optional[bool] = None


class DoseIn(BaseModel):
    medication_id: str
    amount: Optional[float] = None
    extra: bool = False
    entry_date: Optional[date] = None


class ReminderIn(BaseModel):
    enabled: bool
    hour: Optional[int] = Field(default=None, ge=0, le=23)
    minute: Optional[int] = Field(default=None, ge=0, le=59)


class PreferencesUpdate(BaseModel):
    patient_identifier: Optional[str] = None
    health_data_authorized: Optional[bool] = None


# ----- Today -----


@router.get("/entries/{entry_date}", response_model=Optional[DailyEntry])
async def get_entry(entry_date: date, storage: HeartStorage = Depends(get_storage)):
    return storage.get_entry(entry_date)


@router.post("/weight")
async def save_weight(body: WeightIn, storage: HeartStorage = Depends(get_storage)):
    result = TodayService(storage).save_weight(body.weight, body.entry_date)
    return {
        "weight": result.weight,
        "previous_weight": result.previous_weight,
        "weight_change_text": result.weight_change_text,
        "alerts": [a.model_dump(mode="json") for a in result.alerts],
    }


@router.post("/symptoms", response_model=list[AlertEvent])
async def save_symptoms(body: SymptomsIn, storage: HeartStorage = Depends(get_storage)):
    return today_service(storage).save_symptoms(body.severities, body.entry_date)


@router.get("/symptoms/{entry_date}")
async def symptom_severities(entry_date: date, storage: HeartStorage = Depends(get_storage)):
    severities = TodayService(storage).symptom_severities(entry_date)
    return {symptom_type.value: severity for symptom_type, severity in severities.items()}


@router.post("/vitals", response_model=list[AlertEvent])
async def save_vitals(body: VitalsIn, storage: HeartStorage = Depends(get_storage)):
    result = TodayService(storage).save_vitals(
        body.systolic,
        body.diastolic,
        body.oxygen_saturation,
        body.heart_rate,
        day=body.entry_date,
    )
    return result.alerts


# ----- Alerts -----


@router.get("/alerts", response_model=list[AlertEvent])
async def list_alerts(storage: HeartStorage = Depends(get_storage)):
    """Unacknowledged alerts, newest first."""
    return AlertService(storage).load_unacknowledged()


@router.post("/alerts/{alert_id}/ack")
async def acknowledge_alert(alert_id: str, storage: HeartStorage = Depends(get_storage)):
    ack = AlertService(storage).acknowledge(alert_id)
    return ack.model_dump(mode="json")


# ----- Medications -----


@router.get("/medications", response_model=list[Medication])
async def list_medications(prior: bool = False, storage: HeartStorage = Depends(get_storage)):
    service = MedicationService(storage)
    return service.list_prior() if prior else service.list_active()


@router.post("/medications", response_model=Medication, status_code=201)
async def add_medication(body: MedicationIn, storage: HeartStorage = Depends(get_storage)):
    return MedicationService(storage).add(
        body.name, body.dosage, body.unit, body.schedule, is_diuretic=body.is_diuretic,
    )


@router.patch("/medications/{medication_id}", response_model=Medication)
async def update_medication(
    medication_id: str,
    body: MedicationUpdate,
    storage: HeartStorage = Depends(get_storage),
):
    return MedicationService(storage).update(
        medication_id, body.name, body.dosage, body.unit, body.schedule, body.is_diuretic,
    )


@router.post("/medications/{medication_id}/archive", response_model=Medication)
async def archive_medication(medication_id: str, storage: HeartStorage = Depends(get_storage)):
    return MedicationService(storage).archive(medication_id)


@router.post("/medications/{medication_id}/reactivate", response_model=Medication)
async def reactivate_medication(medication_id: str, storage: HeartStorage = Depends(get_storage)):
    return MedicationService(storage).reactivate(medication_id)


@router.get("/medications/{medication_id}/history", response_model=list[MedicationPeriod])
async def medication_history(medication_id: str, storage: HeartStorage = Depends(get_storage)):
    return MedicationService(storage).history(medication_id)


# ----- Diuretics -----


@router.get("/diuretics", response_model=list[Medication])
async def list_diuretics(storage: HeartStorage = Depends(get_storage)):
    return DiureticDoseService(storage).load_diuretics()


@router.post("/doses", response_model=DiureticDose, status_code=201)
async def log_dose(body: DoseIn, storage: HeartStorage = Depends(get_storage)):
    return DiureticDoseService(storage).log_dose(
        body.medication_id, amount=body.amount, extra=body.extra, day=body.entry_date,
    )


@router.get("/doses/{entry_date}", response_model=list[DiureticDose])
async def doses_for(entry_date: date, storage: HeartStorage = Depends(get_storage)):
    return DiureticDoseService(storage).doses_for(entry_date)


@router.delete("/doses/{entry_date}/{dose_id}", status_code=204)
async def delete_dose(entry_date: date, dose_id: str, storage: HeartStorage = Depends(get_storage)):
    DiureticDoseService(storage).delete_dose(dose_id, entry_date)


# ----- Trends -----


@router.get("/trends")
async def trends(storage: HeartStorage = Depends(get_storage)):
    service = TrendsService(storage)
    trend = service.weight_trend()
    start, end = service.window()
    return {
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "weights": [p.model_dump(mode="json") for p in trend.points],
        "current_weight": trend.current_weight,
        "starting_weight": trend.starting_weight,
        "change": trend.change,
        "change_text": trend.change_text,
        "trend": trend.trend_description,
        "weekly_slope": trend.weekly_slope,
        "days_with_data": trend.days_with_data,
        "summary": service.summary(),
        "symptoms": [p.model_dump(mode="json") for p in service.symptom_points()],
    }


# ----- Preferences & reminders -----


@router.get("/preferences", response_model=Preferences)
async def get_preferences(storage: HeartStorage = Depends(get_storage)):
    return PreferencesService(storage).get()


@router.patch("/preferences", response_model=Preferences)
async def update_preferences(body: PreferencesUpdate, storage: HeartStorage = Depends(get_storage)):
    return PreferencesService(storage).update(**body.model_dump(exclude_none=True))


@router.post("/reminders/permission", response_model=Preferences)
async def reminder_permission(granted: bool = True, storage: HeartStorage = Depends(get_storage)):
    service = ReminderService(storage)
    service.request_permission(granted)
    return service.preferences.get()


@router.put("/reminders", response_model=Preferences)
async def update_reminder(body: ReminderIn, storage: HeartStorage = Depends(get_storage)):
    return ReminderService(storage).update_schedule(body.enabled, body.hour, body.minute)


@router.get("/reminders/next")
async def next_reminder(storage: HeartStorage = Depends(get_storage)):
    next_time = ReminderService(storage).next_reminder()
    return {"next_reminder": next_time.isoformat() if next_time else None}
