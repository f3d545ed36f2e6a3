"""Custom exceptions for the mileage ledger."""


class MileageError(Exception):
    """Base exception for mileage ledger errors."""


class MileageValidationError(MileageError):
    """Raised when user input is rejected before anything is written."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Validation error on '{field}': {message}")


class EntryNotFoundError(MileageError):
    """Raised when an edit or delete references an unknown log entry."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Mileage log entry not found: {entry_id}")


class VehicleNotFoundError(MileageError):
    """Raised when the store has no record of a vehicle."""

    def __init__(self, vehicle_id: str):
        self.vehicle_id = vehicle_id
        super().__init__(f"Vehicle not found: {vehicle_id}")


class MileageStoreError(MileageError):
    """Raised when reading from or writing to the data store fails."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Store error for {source}: {message}")
