"""MileageLogEntry class for stored mileage records."""
from typing import Optional


class MileageLogEntry:
    """A stored mileage record. The reading is always the absolute odometer value."""

    def __init__(
            self,
            id: str,
            vehicle_id: str,
            date: str,
            odometer_reading: float,
            description: Optional[str] = None,
            is_business_use: bool = True,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.date = date
        self.odometer_reading = odometer_reading
        self.description = description
        self.is_business_use = is_business_use

    def __repr__(self) -> str:
        return (
            f"MileageLogEntry(id={self.id!r}, date={self.date!r}, "
            f"odometer_reading={self.odometer_reading!r})"
        )
