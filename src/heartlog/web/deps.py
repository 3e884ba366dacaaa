"""Shared dependencies for web routes."""

from pathlib import Path
from typing import Iterator

from fastapi.templating import Jinja2Templates

from ..services.storage import HeartStorage
from ..services.today import TodayService
from ..sources.health_data import HealthDataSource

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=TEMPLATES_DIR)


def get_storage() -> Iterator[HeartStorage]:
    """One storage per request, closed when the response is sent."""
    storage = HeartStorage()
    try:
        yield storage
    finally:
        storage.close()


def today_service(storage: HeartStorage) -> TodayService:
    """TodayService that can also look at imported readings, when access is granted."""
    authorized = storage.get_preferences().health_data_authorized
    return TodayService(storage, health_source=HealthDataSource(authorized=authorized))
