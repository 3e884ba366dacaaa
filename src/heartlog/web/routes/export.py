"""Routes for the clinician PDF summary."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ...services.export import ExportService
from ...services.storage import HeartStorage
from ..deps import get_storage

router = APIRouter()


@router.get("/summary.pdf")
async def summary_pdf(storage: HeartStorage = Depends(get_storage)):
    """Download the 30-day summary."""
    service = ExportService(storage)
    pdf = service.generate()
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{service.default_filename()}"'},
    )
