"""
Create, update and delete mileage log entries.

Every write loads the current ledger, resolves the user's value to an
absolute odometer reading and validates it before touching the store. A
rejected submission writes nothing. Callers re-load the ledger afterwards;
previously computed distances are never patched.
"""

import logging
from pathlib import Path
from typing import Optional, Union
from uuid import uuid4

from .calculations import validate_date, validate_description
from .exceptions import MileageValidationError
from .ledger import MileageLedger
from .loader import (
    delete_mileage_log,
    load_ledger,
    save_logging_style,
    save_mileage_log,
    update_mileage_log,
)
from .log_entry import MileageLogEntry
from .logging_style import LoggingStyle
from .resolver import edit_display_value, resolve_edited_reading, resolve_new_reading

logger = logging.getLogger(__name__)

Number = Union[str, float, int]


def build_new_entry(
    ledger: MileageLedger,
    date: Optional[str],
    value: Number,
    style: LoggingStyle,
    description: Optional[str] = None,
    is_business_use: bool = True,
) -> MileageLogEntry:
    """Validate a submission and build the entry that would be stored."""
    entry_date = validate_date(date)
    reading = resolve_new_reading(ledger, value, style)
    return MileageLogEntry(
        id=str(uuid4()),
        vehicle_id=ledger.vehicle.id,
        date=entry_date,
        odometer_reading=reading,
        description=validate_description(description),
        is_business_use=is_business_use,
    )


def build_edited_entry(
    ledger: MileageLedger,
    entry_id: str,
    style: LoggingStyle,
    value: Optional[Number] = None,
    date: Optional[str] = None,
    description: Optional[str] = None,
    is_business_use: Optional[bool] = None,
) -> MileageLogEntry:
    """
    Validate an edit and build the replacement entry.

    Fields left as None keep their stored values; an empty description clears
    it. Without a new value the stored reading is kept, unless the date moves
    under the trip distance style: then the entry's current trip distance is
    re-applied at its new position.
    """
    existing = ledger.get_entry(entry_id)
    entry_date = validate_date(date) if date is not None else existing.date

    if value is None and (style is LoggingStyle.ODOMETER or entry_date == existing.date):
        reading = existing.odometer_reading
    else:
        if value is None:
            value = edit_display_value(ledger, entry_id, style)
        reading = resolve_edited_reading(ledger, entry_id, value, style, entry_date)

    return MileageLogEntry(
        id=existing.id,
        vehicle_id=existing.vehicle_id,
        date=entry_date,
        odometer_reading=reading,
        description=existing.description if description is None else validate_description(description),
        is_business_use=existing.is_business_use if is_business_use is None else is_business_use,
    )


def log_trip(
    vehicle_file: Union[str, Path],
    date: Optional[str],
    value: Number,
    style: LoggingStyle,
    description: Optional[str] = None,
    is_business_use: bool = True,
) -> MileageLogEntry:
    """Add a mileage log entry to a vehicle file."""
    ledger = load_ledger(vehicle_file)
    try:
        entry = build_new_entry(ledger, date, value, style, description, is_business_use)
    except MileageValidationError as e:
        logger.info("Rejected new mileage log for %s: %s", ledger.vehicle.id, e)
        raise
    save_mileage_log(vehicle_file, entry)
    return entry


def edit_trip(
    vehicle_file: Union[str, Path],
    entry_id: str,
    style: LoggingStyle,
    value: Optional[Number] = None,
    date: Optional[str] = None,
    description: Optional[str] = None,
    is_business_use: Optional[bool] = None,
) -> MileageLogEntry:
    """Update a mileage log entry in a vehicle file."""
    ledger = load_ledger(vehicle_file)
    try:
        entry = build_edited_entry(
            ledger, entry_id, style, value, date, description, is_business_use
        )
    except MileageValidationError as e:
        logger.info("Rejected edit of mileage log %s: %s", entry_id, e)
        raise
    update_mileage_log(vehicle_file, entry)
    return entry


def delete_trip(vehicle_file: Union[str, Path], entry_id: str) -> None:
    """Remove a mileage log entry from a vehicle file."""
    delete_mileage_log(vehicle_file, entry_id)


def parse_logging_style(value: Union[str, LoggingStyle]) -> LoggingStyle:
    if isinstance(value, LoggingStyle):
        return value
    try:
        return LoggingStyle(value)
    except ValueError:
        choices = ", ".join(s.value for s in LoggingStyle)
        raise MileageValidationError(
            "mileage_logging_style", f"must be one of {choices}, got {value!r}"
        )


def set_logging_style(settings_file: Union[str, Path], value: Union[str, LoggingStyle]) -> LoggingStyle:
    """Change the user's logging style. Stored readings are untouched."""
    style = parse_logging_style(value)
    save_logging_style(settings_file, style)
    return style
