"""ReconciledEntry dataclass for a log entry with its derived distance."""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .log_entry import MileageLogEntry


@dataclass(frozen=True)
class ReconciledEntry:
    """A log entry annotated with the distance attributed to it."""

    entry: "MileageLogEntry"
    distance: float
    raw_delta: float
    previous_reading: float

    @property
    def id(self) -> str:
        return self.entry.id

    @property
    def date(self) -> str:
        return self.entry.date

    @property
    def odometer_reading(self) -> float:
        return self.entry.odometer_reading

    @property
    def description(self) -> Optional[str]:
        return self.entry.description

    @property
    def is_business_use(self) -> bool:
        return self.entry.is_business_use

    @property
    def is_clamped(self) -> bool:
        """True when the reading went backwards and the distance was clamped to 0."""
        return self.raw_delta < 0


@dataclass(frozen=True)
class MileageSummary:
    """Totals over a full reconciled ledger."""

    total_distance: float
    business_distance: float
    entry_count: int

    @property
    def personal_distance(self) -> float:
        return self.total_distance - self.business_distance

    @property
    def business_percentage(self) -> float:
        """Business share of total distance, as a percentage (0 when no distance)."""
        if self.total_distance <= 0:
            return 0.0
        return self.business_distance / self.total_distance * 100
