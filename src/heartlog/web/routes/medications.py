"""Routes for the medication list."""

from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...exceptions import InputValidationError
from ...models.health import MEDICATION_UNITS
from ...services.medications import MedicationService
from ...services.storage import HeartStorage
from ..deps import get_storage, templates

router = APIRouter()


def render_medications(
    request: Request,
    storage: HeartStorage,
    error: Optional[str] = None,
    status_code: int = 200,
) -> HTMLResponse:
    service = MedicationService(storage)
    return templates.TemplateResponse(
        request,
        "medications.html",
        {
            "active": service.list_active(),
            "prior": service.list_prior(),
            "units": MEDICATION_UNITS,
            "error": error,
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
async def medications_page(request: Request, storage: HeartStorage = Depends(get_storage)):
    """Show current and prior medications."""
    return render_medications(request, storage)


@router.post("/")
async def add_medication(
    request: Request,
    name: str = Form(default=""),
    dosage: str = Form(default=""),
    unit: str = Form(default="mg"),
    schedule: str = Form(default=""),
    is_diuretic: bool = Form(default=False),
    storage: HeartStorage = Depends(get_storage),
):
    try:
        MedicationService(storage).add(name, dosage, unit, schedule, is_diuretic=is_diuretic)
    except InputValidationError as e:
        return render_medications(request, storage, error=e.message, status_code=400)
    return RedirectResponse(url="/medications/", status_code=303)


@router.post("/{medication_id}/edit")
async def edit_medication(
    request: Request,
    medication_id: str,
    name: Optional[str] = Form(default=None),
    dosage: Optional[str] = Form(default=None),
    unit: Optional[str] = Form(default=None),
    schedule: Optional[str] = Form(default=None),
    storage: HeartStorage = Depends(get_storage),
):
    try:
        MedicationService(storage).update(medication_id, name, dosage or None, unit, schedule)
    except InputValidationError as e:
        return render_medications(request, storage, error=e.message, status_code=400)
    return RedirectResponse(url="/medications/", status_code=303)


@router.post("/{medication_id}/archive")
async def archive_medication(medication_id: str, storage: HeartStorage = Depends(get_storage)):
    MedicationService(storage).archive(medication_id)
    return RedirectResponse(url="/medications/", status_code=303)


@router.post("/{medication_id}/reactivate")
async def reactivate_medication(medication_id: str, storage: HeartStorage = Depends(get_storage)):
    MedicationService(storage).reactivate(medication_id)
    return RedirectResponse(url="/medications/", status_code=303)
