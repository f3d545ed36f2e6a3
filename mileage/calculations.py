"""Helper functions for mileage distance and input calculations."""

import math
from datetime import date
from typing import Optional, Union

from dateutil import parser as date_parser

from .exceptions import MileageValidationError


def calc_distance(reading: float, previous_reading: float) -> float:
    """Distance between two readings, clamped at zero when the reading went backwards."""
    return max(0.0, reading - previous_reading)


def calc_trip_reading(last_reading: Optional[float], trip_distance: float, baseline: float = 0) -> float:
    """
    Calculate the absolute reading at the end of a trip.

    - With a previous entry: last_reading + trip_distance
    - Without one: baseline + trip_distance
    """
    if last_reading is not None:
        return last_reading + trip_distance
    return baseline + trip_distance


def parse_reading(value: Union[str, float, int, None], field: str = "odometer_reading") -> float:
    """Parse a user-entered reading or trip distance. Must be a positive finite number."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MileageValidationError(field, "a value is required")
    if isinstance(value, bool):
        raise MileageValidationError(field, f"not a number: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise MileageValidationError(field, f"not a number: {value!r}")
    return validate_reading(number, field)


def validate_reading(value: float, field: str = "odometer_reading") -> float:
    """Reject readings that are not positive finite numbers."""
    if not math.isfinite(value):
        raise MileageValidationError(field, f"must be a finite number, got {value}")
    if value <= 0:
        raise MileageValidationError(field, f"must be greater than 0, got {value:g}")
    return value


def validate_date(value: Union[str, date, None]) -> str:
    """Normalize a trip date to ISO format (YYYY-MM-DD). Empty dates are rejected."""
    if isinstance(value, date):
        return value.isoformat()
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MileageValidationError("date", "a date is required")
    if not isinstance(value, str):
        raise MileageValidationError("date", f"not a valid date: {value!r}")
    try:
        return date_parser.parse(value.strip()).date().isoformat()
    except (ValueError, OverflowError):
        raise MileageValidationError("date", f"not a valid date: {value!r}")


def validate_description(value: Optional[str]) -> Optional[str]:
    """Descriptions are optional free text; an empty one is stored as none."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise MileageValidationError("description", f"must be text, got {value!r}")
    return value or None


def format_display_date(date_str: str) -> str:
    """Format an ISO date for display and search, e.g. 'Jan 5, 2025'."""
    try:
        d = date.fromisoformat(date_str)
    except (TypeError, ValueError):
        return date_str or ""
    return f"{d:%b} {d.day}, {d.year}"
