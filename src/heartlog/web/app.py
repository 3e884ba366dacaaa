"""FastAPI web application."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from .. import __version__
from ..exceptions import (
    ExportError,
    HeartLogError,
    InputValidationError,
    NotFoundError,
    PermissionDeniedError,
)
from .routes import alerts, api, export, medications, today, trends

logger = logging.getLogger(__name__)

app = FastAPI(
    title="HeartLog",
    description="Heart failure self-management diary",
    version=__version__,
)

# Include routers
app.include_router(today.router, prefix="/today", tags=["today"])
app.include_router(medications.router, prefix="/medications", tags=["medications"])
app.include_router(trends.router, prefix="/trends", tags=["trends"])
app.include_router(alerts.router, prefix="/alerts", tags=["alerts"])
app.include_router(export.router, prefix="/export", tags=["export"])
app.include_router(api.router, prefix="/api", tags=["api"])


def status_for(error: HeartLogError) -> int:
    if isinstance(error, InputValidationError):
        return 400
    if isinstance(error, PermissionDeniedError):
        return 403
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ExportError):
        return 500
    return 400


@app.exception_handler(HeartLogError)
async def heartlog_error_handler(request: Request, exc: HeartLogError):
    """Return service errors as JSON with a user-facing message."""
    status_code = status_for(exc)
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.get("/")
async def home():
    """Home page - redirect to today's check-in."""
    return RedirectResponse(url="/today/", status_code=302)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
