"""Routes for the daily check-in page."""

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...exceptions import InputValidationError
from ...models.health import SeverityLevel, SymptomType
from ...services.diuretics import DiureticDoseService
from ...services.storage import HeartStorage
from ...services.today import TodayService, WeightSaveResult
from ..deps import get_storage, templates, today_service

router = APIRouter()


def parse_day(value: Optional[str]) -> date:
    if not value:
        return date.today()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise InputValidationError(f"Invalid date: {value}. Use YYYY-MM-DD.") from None


def redirect_to(day: date) -> RedirectResponse:
    return RedirectResponse(url=f"/today/?entry_date={day.isoformat()}", status_code=303)


def render_today(
    request: Request,
    storage: HeartStorage,
    day: date,
    error: Optional[str] = None,
    status_code: int = 200,
) -> HTMLResponse:
    service = TodayService(storage)
    doses = DiureticDoseService(storage)
    entry = storage.get_entry(day)

    weight_change_text = None
    if entry and entry.weight is not None:
        previous = service.previous_weight(day)
        if previous is not None:
            weight_change_text = WeightSaveResult(
                entry=entry, weight=entry.weight, previous_weight=previous,
            ).weight_change_text

    return templates.TemplateResponse(
        request,
        "today.html",
        {
            "day": day,
            "entry": entry,
            "weight_change_text": weight_change_text,
            "severities": service.symptom_severities(day),
            "symptom_types": list(SymptomType),
            "severity_levels": list(SeverityLevel),
            "alerts": service.active_alerts(),
            "diuretics": doses.load_diuretics(),
            "doses": doses.doses_for(day),
            "error": error,
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
async def today_page(
    request: Request,
    entry_date: Optional[str] = Query(default=None),
    storage: HeartStorage = Depends(get_storage),
):
    """Show the check-in form for a day."""
    try:
        day = parse_day(entry_date)
    except InputValidationError as e:
        return render_today(request, storage, date.today(), error=e.message, status_code=400)
    return render_today(request, storage, day)


@router.post("/weight")
async def save_weight(
    request: Request,
    weight: str = Form(default=""),
    entry_date: Optional[str] = Form(default=None),
    storage: HeartStorage = Depends(get_storage),
):
    day = parse_day(entry_date)
    try:
        TodayService(storage).save_weight(weight, day)
    except InputValidationError as e:
        return render_today(request, storage, day, error=e.message, status_code=400)
    return redirect_to(day)


@router.post("/symptoms")
async def save_symptoms(request: Request, storage: HeartStorage = Depends(get_storage)):
    """Save every symptom rating submitted with the form."""
    form = await request.form()
    day = parse_day(form.get("entry_date"))

    severities = {}
    for symptom_type in SymptomType:
        value = form.get(symptom_type.value)
        if not value:
            continue
        try:
            severities[symptom_type] = SeverityLevel(int(value)).value
        except ValueError:
            error = f"Please choose a rating from 1 to 5 for {symptom_type.display_name.lower()}"
            return render_today(request, storage, day, error=error, status_code=400)

    if severities:
        today_service(storage).save_symptoms(severities, day)
    return redirect_to(day)


@router.post("/vitals")
async def save_vitals(
    request: Request,
    systolic: str = Form(default=""),
    diastolic: str = Form(default=""),
    oxygen_saturation: str = Form(default=""),
    heart_rate: str = Form(default=""),
    entry_date: Optional[str] = Form(default=None),
    storage: HeartStorage = Depends(get_storage),
):
    day = parse_day(entry_date)
    try:
        TodayService(storage).save_vitals(
            systolic, diastolic, oxygen_saturation, heart_rate, day=day,
        )
    except InputValidationError as e:
        return render_today(request, storage, day, error=e.message, status_code=400)
    return redirect_to(day)


@router.post("/doses")
async def log_dose(
    medication_id: str = Form(...),
    extra: bool = Form(default=False),
    entry_date: Optional[str] = Form(default=None),
    storage: HeartStorage = Depends(get_storage),
):
    day = parse_day(entry_date)
    DiureticDoseService(storage).log_dose(medication_id, extra=extra, day=day)
    return redirect_to(day)


@router.post("/doses/{dose_id}/delete")
async def delete_dose(
    dose_id: str,
    entry_date: Optional[str] = Form(default=None),
    storage: HeartStorage = Depends(get_storage),
):
    day = parse_day(entry_date)
    DiureticDoseService(storage).delete_dose(dose_id, day)
    return redirect_to(day)


@router.post("/alerts/{alert_id}/ack")
async def acknowledge_alert(
    alert_id: str,
    entry_date: Optional[str] = Form(default=None),
    storage: HeartStorage = Depends(get_storage),
):
    TodayService(storage).acknowledge(alert_id)
    return redirect_to(parse_day(entry_date))
