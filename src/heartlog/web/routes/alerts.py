"""Routes for the alert history."""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...services.alerts import AlertService
from ...services.storage import HeartStorage
from ..deps import get_storage, templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def alerts_page(
    request: Request,
    show_all: bool = Query(default=False, alias="all"),
    storage: HeartStorage = Depends(get_storage),
):
    """Alerts, newest first. Acknowledged ones are hidden unless ?all=true."""
    alerts = AlertService(storage).load_all()
    if not show_all:
        alerts = [a for a in alerts if not a.is_acknowledged]
    return templates.TemplateResponse(
        request,
        "alerts.html",
        {"alerts": alerts, "show_all": show_all},
    )


@router.post("/{alert_id}/ack")
async def acknowledge(alert_id: str, storage: HeartStorage = Depends(get_storage)):
    AlertService(storage).acknowledge(alert_id)
    return RedirectResponse(url="/alerts/", status_code=303)
