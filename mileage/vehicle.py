"""Vehicle class for vehicle identification and baseline odometer."""

from typing import Optional


class Vehicle:
    """A vehicle enrolled for mileage tracking."""

    def __init__(
        self,
        id: str,
        name: str,
        baseline_odometer: float = 0,
        make: Optional[str] = None,
        model: Optional[str] = None,
        year: Optional[int] = None,
    ):
        self.id = id
        self.name = name
        self.baseline_odometer = baseline_odometer or 0
        self.make = make
        self.model = model
        self.year = year

    @property
    def display_name(self) -> str:
        """Human-readable vehicle name, with year/make/model when known."""
        details = " ".join(str(p) for p in (self.year, self.make, self.model) if p)
        if details and details != self.name:
            return f"{self.name} ({details})"
        return self.name
