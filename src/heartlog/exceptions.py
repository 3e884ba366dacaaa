"""Exceptions raised by heartlog services.

Every exception carries a patient-facing ``message`` that the CLI and web
interface show as-is.
"""


class HeartLogError(Exception):
    """Base class for all heartlog errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputValidationError(HeartLogError, ValueError):
    """User input was rejected."""


class WeightValidationError(InputValidationError):
    pass


class VitalsValidationError(InputValidationError):
    pass


class MedicationValidationError(InputValidationError):
    pass


class NotFoundError(HeartLogError, LookupError):
    """A referenced record does not exist."""


class MedicationNotFoundError(NotFoundError):
    def __init__(self, medication_id: str):
        super().__init__(f"Medication not found: {medication_id}")
        self.medication_id = medication_id


class AlertNotFoundError(NotFoundError):
    def __init__(self, alert_id: str):
        super().__init__(f"Alert not found: {alert_id}")
        self.alert_id = alert_id


class DoseNotFoundError(NotFoundError):
    def __init__(self, dose_id: str):
        super().__init__(f"Dose not found: {dose_id}")
        self.dose_id = dose_id


class PermissionDeniedError(HeartLogError):
    """The patient has not granted access needed for this action."""


class ExportError(HeartLogError):
    """PDF generation failed."""

    def __init__(self, message: str = "Unable to create PDF. Please try again."):
        super().__init__(message)
