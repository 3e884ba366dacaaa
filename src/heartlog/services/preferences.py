"""Patient preferences."""

import logging
from typing import Optional

from pydantic import ValidationError

from ..exceptions import InputValidationError
from ..models.preferences import DEFAULT_REMINDER_HOUR, DEFAULT_REMINDER_MINUTE, Preferences
from .storage import HeartStorage

logger = logging.getLogger(__name__)


class PreferencesService:
    """Read and update the single preferences document."""

    def __init__(self, storage: Optional[HeartStorage] = None):
        self.storage = storage or HeartStorage()

    def get(self) -> Preferences:
        return self.storage.get_preferences()

    def update(self, **changes) -> Preferences:
        """Apply field changes; values are validated by the Preferences model."""
        current = self.get()
        try:
            updated = Preferences.model_validate({**current.model_dump(), **changes})
        except ValidationError as exc:
            field = exc.errors()[0]["loc"][0]
            raise InputValidationError(f"Invalid value for {field}") from exc
        self.storage.save_preferences(updated)
        logger.info("Updated preferences: %s", ", ".join(sorted(changes)) or "none")
        return updated

    def set_patient_identifier(self, identifier: str) -> Preferences:
        return self.update(patient_identifier=identifier.strip())

    def clear_patient_identifier(self) -> Preferences:
        return self.update(patient_identifier="")

    def reset_reminder_time(self) -> Preferences:
        """Put the reminder back to 8:00 AM."""
        return self.update(
            reminder_hour=DEFAULT_REMINDER_HOUR,
            reminder_minute=DEFAULT_REMINDER_MINUTE,
        )

    def set_health_data_access(self, granted: bool) -> Preferences:
        return self.update(health_data_authorized=granted)
