"""
Translate user-entered mileage values into absolute odometer readings.

Under the odometer style the value is already absolute. Under the trip
distance style the value is added to the reading of the entry that precedes
the trip in date order (or the vehicle baseline when there is none). The
store only ever receives the absolute result.
"""

from typing import Optional, Union

from .calculations import calc_trip_reading, parse_reading, validate_date, validate_reading
from .ledger import MileageLedger
from .logging_style import LoggingStyle

Number = Union[str, float, int]


def input_field(style: LoggingStyle) -> str:
    """Name of the field the user fills in under a logging style."""
    if style is LoggingStyle.ODOMETER:
        return "odometer_reading"
    return "trip_distance"


def resolve_new_reading(ledger: MileageLedger, value: Number, style: LoggingStyle) -> float:
    """Absolute reading for a new entry."""
    field = input_field(style)
    amount = parse_reading(value, field)
    if style is LoggingStyle.ODOMETER:
        return amount
    last = ledger.last_entry
    reading = calc_trip_reading(
        last.odometer_reading if last else None, amount, ledger.baseline
    )
    return validate_reading(reading, field)


def resolve_edited_reading(
    ledger: MileageLedger,
    entry_id: str,
    value: Number,
    style: LoggingStyle,
    new_date: Optional[str] = None,
) -> float:
    """
    Absolute reading for an edited entry.

    For trip distances the ledger is re-normalized with the entry at its
    (possibly new) date, in the order the reconciler will walk once the edit
    is stored. The trip is added to the reading of whatever precedes it
    there, not to its old neighbour.
    """
    field = input_field(style)
    amount = parse_reading(value, field)
    entry = ledger.get_entry(entry_id)
    if style is LoggingStyle.ODOMETER:
        return amount

    target_date = validate_date(new_date) if new_date else entry.date
    previous = None
    for other in ledger.placed(entry_id, target_date):
        if other.id == entry_id:
            break
        previous = other
    reading = calc_trip_reading(
        previous.odometer_reading if previous else None, amount, ledger.baseline
    )
    return validate_reading(reading, field)


def edit_display_value(ledger: MileageLedger, entry_id: str, style: LoggingStyle) -> float:
    """Value to pre-fill when editing: the stored reading, or the reconciled trip distance."""
    if style is LoggingStyle.ODOMETER:
        return ledger.get_entry(entry_id).odometer_reading
    return ledger.get_reconciled(entry_id).distance
