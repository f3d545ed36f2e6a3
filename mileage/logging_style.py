"""LoggingStyle enum for how mileage input is interpreted."""

from enum import Enum


class LoggingStyle(Enum):
    """How the user enters mileage. Storage is always absolute readings."""

    ODOMETER = "odometer"  # User enters the absolute odometer reading
    TRIP_DISTANCE = "trip_distance"  # User enters the length of the trip

    @classmethod
    def default(cls) -> "LoggingStyle":
        return cls.TRIP_DISTANCE

    @property
    def input_label(self) -> str:
        """Label for the value the user types in."""
        if self is LoggingStyle.ODOMETER:
            return "Odometer Reading (km)"
        return "Trip Distance (km)"
