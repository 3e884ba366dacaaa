"""Input validation for weight, vital signs and medications."""

import logging
import math
from typing import Optional, Union

from ..exceptions import (
    MedicationValidationError,
    VitalsValidationError,
    WeightValidationError,
)
from ..models import thresholds
from ..models.health import MEDICATION_UNITS

logger = logging.getLogger(__name__)

Number = Union[int, float, str]


def _parse_number(value: Optional[Number]) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = value.strip()
    if not text:
        return None
    return float(text)


def validate_weight(value: Optional[Number]) -> float:
    """
    Parse and range-check a weight entry in lbs.

    Raises:
        WeightValidationError: with a message suitable for showing the patient.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise WeightValidationError("Please enter your weight")

    try:
        weight = _parse_number(value)
    except ValueError:
        logger.warning("Rejected non-numeric weight %r", value)
        raise WeightValidationError("Please enter a valid number") from None

    if weight != weight:  # NaN
        raise WeightValidationError("Please enter a valid number")

    if weight < thresholds.MIN_WEIGHT:
        logger.warning("Rejected weight %.1f below minimum", weight)
        raise WeightValidationError(
            f"Weight must be at least {int(thresholds.MIN_WEIGHT)} lbs"
        )

    if weight > thresholds.MAX_WEIGHT:
        logger.warning("Rejected weight %.1f above maximum", weight)
        raise WeightValidationError(
            f"Weight must be less than {int(thresholds.MAX_WEIGHT)} lbs"
        )

    return weight


def _parse_int(value: Optional[Number], label: str) -> Optional[int]:
    try:
        parsed = _parse_number(value)
    except ValueError:
        raise VitalsValidationError(f"Please enter a valid number for {label}") from None
    if parsed is None:
        return None
    if not math.isfinite(parsed):
        raise VitalsValidationError(f"Please enter a valid number for {label}")
    if parsed != int(parsed):
        raise VitalsValidationError(f"Please enter a whole number for {label}")
    return int(parsed)


def validate_blood_pressure(
    systolic: Optional[Number],
    diastolic: Optional[Number],
) -> tuple[Optional[int], Optional[int]]:
    """Both values or neither; each within range, systolic above diastolic."""
    sys_value = _parse_int(systolic, "systolic pressure")
    dia_value = _parse_int(diastolic, "diastolic pressure")

    if sys_value is None and dia_value is None:
        return None, None

    if sys_value is None or dia_value is None:
        raise VitalsValidationError("Please enter both the top and bottom blood pressure numbers")

    if not thresholds.MIN_SYSTOLIC_BP <= sys_value <= thresholds.MAX_SYSTOLIC_BP:
        raise VitalsValidationError(
            f"Systolic pressure must be between {thresholds.MIN_SYSTOLIC_BP} "
            f"and {thresholds.MAX_SYSTOLIC_BP} mmHg"
        )

    if not thresholds.MIN_DIASTOLIC_BP <= dia_value <= thresholds.MAX_DIASTOLIC_BP:
        raise VitalsValidationError(
            f"Diastolic pressure must be between {thresholds.MIN_DIASTOLIC_BP} "
            f"and {thresholds.MAX_DIASTOLIC_BP} mmHg"
        )

    if sys_value <= dia_value:
        raise VitalsValidationError("The top number should be higher than the bottom number")

    return sys_value, dia_value


def validate_oxygen_saturation(value: Optional[Number]) -> Optional[int]:
    spo2 = _parse_int(value, "oxygen level")
    if spo2 is None:
        return None
    if not thresholds.MIN_OXYGEN_SATURATION <= spo2 <= thresholds.MAX_OXYGEN_SATURATION:
        raise VitalsValidationError(
            f"Oxygen level must be between {thresholds.MIN_OXYGEN_SATURATION}% "
            f"and {thresholds.MAX_OXYGEN_SATURATION}%"
        )
    return spo2


def validate_heart_rate(value: Optional[Number]) -> Optional[int]:
    heart_rate = _parse_int(value, "heart rate")
    if heart_rate is None:
        return None
    if not thresholds.MIN_HEART_RATE <= heart_rate <= thresholds.MAX_HEART_RATE:
        raise VitalsValidationError(
            f"Heart rate must be between {thresholds.MIN_HEART_RATE} "
            f"and {thresholds.MAX_HEART_RATE} bpm"
        )
    return heart_rate


def validate_medication(name: str, dosage: Optional[Number], unit: str = "mg") -> tuple[str, float]:
    """Return the trimmed name and parsed dosage."""
    trimmed = (name or "").strip()
    if not trimmed:
        raise MedicationValidationError("Please enter a medication name")

    if dosage is None or (isinstance(dosage, str) and not dosage.strip()):
        raise MedicationValidationError("Please enter a dosage")

    try:
        amount = _parse_number(dosage)
    except ValueError:
        raise MedicationValidationError("Please enter a valid dosage amount") from None

    if amount is None or not math.isfinite(amount) or amount <= 0:
        raise MedicationValidationError("Please enter a valid dosage amount")

    if unit not in MEDICATION_UNITS:
        raise MedicationValidationError(
            f"Unit must be one of: {', '.join(MEDICATION_UNITS)}"
        )

    return trimmed, amount
