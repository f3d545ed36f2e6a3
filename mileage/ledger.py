"""MileageLedger - the aggregate for one vehicle's mileage log and its reconciliation."""

import logging
from typing import Iterable, List, Optional

from .calculations import calc_distance, format_display_date
from .exceptions import EntryNotFoundError
from .log_entry import MileageLogEntry
from .reconciled_entry import MileageSummary, ReconciledEntry
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


def normalize_entries(entries: Iterable[MileageLogEntry]) -> List[MileageLogEntry]:
    """
    Order entries ascending by date.

    The sort is stable: entries sharing a date keep the order they were
    supplied in. There is no secondary key.
    """
    return sorted(entries, key=lambda e: e.date)


def reconcile_entries(
    entries: Iterable[MileageLogEntry], baseline: float
) -> List[ReconciledEntry]:
    """
    Assign a distance to every entry.

    Walks the entries in ascending date order with a cursor starting at the
    baseline. Each distance is the reading minus the cursor, clamped at zero.
    The cursor then moves to the entry's own reading, even when that reading
    was lower than the previous one.
    """
    reconciled = []
    previous = baseline
    for entry in normalize_entries(entries):
        reading = entry.odometer_reading
        raw_delta = reading - previous
        if raw_delta < 0:
            logger.debug(
                "Reading %s on %s is below previous reading %s; distance clamped to 0",
                reading, entry.date, previous,
            )
        reconciled.append(
            ReconciledEntry(
                entry=entry,
                distance=calc_distance(reading, previous),
                raw_delta=raw_delta,
                previous_reading=previous,
            )
        )
        previous = reading
    return reconciled


def matches_search(item: ReconciledEntry, query: str) -> bool:
    """Case-insensitive match against the description and the formatted date."""
    needle = query.lower()
    if item.description and needle in item.description.lower():
        return True
    return needle in format_display_date(item.date).lower()


class MileageLedger:
    """A vehicle and its full set of mileage log entries."""

    def __init__(self, vehicle: Vehicle, entries: Optional[List[MileageLogEntry]] = None):
        self.vehicle = vehicle
        self.entries = list(entries or [])

    @property
    def baseline(self) -> float:
        return self.vehicle.baseline_odometer

    def normalized(self) -> List[MileageLogEntry]:
        """Entries in ascending date order."""
        return normalize_entries(self.entries)

    def reconciled(self) -> List[ReconciledEntry]:
        """Entries in ascending date order with distances. Recomputed on every call."""
        return reconcile_entries(self.entries, self.baseline)

    def display_entries(self) -> List[ReconciledEntry]:
        """
        Reconciled entries, most recent first.

        Distances come from the ascending pass; only the order changes here.
        """
        return sorted(self.reconciled(), key=lambda r: r.date, reverse=True)

    @property
    def last_entry(self) -> Optional[MileageLogEntry]:
        """Chronologically last entry (by date, not by creation)."""
        ordered = self.normalized()
        return ordered[-1] if ordered else None

    @property
    def last_reading(self) -> float:
        """Reading of the last entry, or the baseline when there are none."""
        last = self.last_entry
        return last.odometer_reading if last else self.baseline

    def get_entry(self, entry_id: str) -> MileageLogEntry:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        raise EntryNotFoundError(entry_id)

    def get_reconciled(self, entry_id: str) -> ReconciledEntry:
        for item in self.reconciled():
            if item.id == entry_id:
                return item
        raise EntryNotFoundError(entry_id)

    def placed(self, entry_id: str, new_date: str) -> List[MileageLogEntry]:
        """
        Ascending order as it will be once one entry moves to a new date.

        The entry keeps its place in the stored list, so among entries sharing
        the new date it sorts exactly where the reconciler will put it.
        """
        self.get_entry(entry_id)
        return sorted(
            self.entries, key=lambda e: new_date if e.id == entry_id else e.date
        )

    # Totals are always over the full ledger, never a filtered view.

    @property
    def total_distance(self) -> float:
        return sum(r.distance for r in self.reconciled())

    @property
    def business_distance(self) -> float:
        return sum(r.distance for r in self.reconciled() if r.is_business_use)

    def summary(self) -> MileageSummary:
        reconciled = self.reconciled()
        return MileageSummary(
            total_distance=sum(r.distance for r in reconciled),
            business_distance=sum(r.distance for r in reconciled if r.is_business_use),
            entry_count=len(reconciled),
        )

    def search(self, query: Optional[str]) -> List[ReconciledEntry]:
        """Display-ordered entries matching the query. Empty query matches all."""
        entries = self.display_entries()
        if not query:
            return entries
        return [r for r in entries if matches_search(r, query)]

    def entries_for_year(self, year: int) -> List[ReconciledEntry]:
        """
        Display-ordered entries dated in the given tax year.

        Reconciliation runs over the full ledger first, so the first trip of
        a year is measured against the last reading of the year before.
        """
        prefix = f"{year:04d}-"
        return [r for r in self.display_entries() if r.date.startswith(prefix)]
