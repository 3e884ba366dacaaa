"""Routes for 30-day trends and charts."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response

from ...services.charts import render_symptom_chart, render_weight_chart
from ...services.storage import HeartStorage
from ...services.trends import TrendsService
from ..deps import get_storage, templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def trends_page(request: Request, storage: HeartStorage = Depends(get_storage)):
    """Weight and symptom trends for the last 30 days."""
    service = TrendsService(storage)
    start, end = service.window()
    return templates.TemplateResponse(
        request,
        "trends.html",
        {
            "start": start,
            "end": end,
            "trend": service.weight_trend(),
            "summary": service.summary(),
            "symptoms": service.symptom_summaries(service.symptom_points()),
        },
    )


@router.get("/weight.png")
async def weight_chart(storage: HeartStorage = Depends(get_storage)):
    points = TrendsService(storage).weight_points()
    return Response(content=render_weight_chart(points), media_type="image/png")


@router.get("/symptoms.png")
async def symptom_chart(storage: HeartStorage = Depends(get_storage)):
    points = TrendsService(storage).symptom_points()
    return Response(content=render_symptom_chart(points), media_type="image/png")
