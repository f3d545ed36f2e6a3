"""
Vehicle mileage ledger.

This package reconciles a vehicle's mileage log into trip distances:
- Vehicle: Vehicle identification and baseline odometer
- MileageLogEntry: Stored records (absolute odometer readings)
- LoggingStyle: How the user enters mileage (odometer or trip distance)
- MileageLedger: Ordering, distance reconciliation, totals and search
- ReconciledEntry / MileageSummary: Derived distances and totals
- resolver: User input to absolute reading, for new and edited entries
- operations: Validated create/update/delete against the YAML store
"""

from .exceptions import (
    MileageError,
    MileageValidationError,
    EntryNotFoundError,
    VehicleNotFoundError,
    MileageStoreError,
)
from .logging_style import LoggingStyle
from .vehicle import Vehicle
from .log_entry import MileageLogEntry
from .reconciled_entry import ReconciledEntry, MileageSummary
from .calculations import (
    calc_distance,
    calc_trip_reading,
    parse_reading,
    validate_reading,
    validate_date,
    validate_description,
    format_display_date,
)
from .ledger import MileageLedger, normalize_entries, reconcile_entries, matches_search
from .resolver import resolve_new_reading, resolve_edited_reading, edit_display_value
from .loader import (
    load_ledger,
    load_vehicle,
    list_vehicle_files,
    find_vehicle_file,
    user_settings_path,
    create_vehicle,
    save_mileage_log,
    update_mileage_log,
    delete_mileage_log,
    load_logging_style,
    save_logging_style,
)
from .operations import (
    build_new_entry,
    build_edited_entry,
    log_trip,
    edit_trip,
    delete_trip,
    parse_logging_style,
    set_logging_style,
)

__all__ = [
    "MileageError",
    "MileageValidationError",
    "EntryNotFoundError",
    "VehicleNotFoundError",
    "MileageStoreError",
    "LoggingStyle",
    "Vehicle",
    "MileageLogEntry",
    "ReconciledEntry",
    "MileageSummary",
    "calc_distance",
    "calc_trip_reading",
    "parse_reading",
    "validate_reading",
    "validate_date",
    "validate_description",
    "format_display_date",
    "MileageLedger",
    "normalize_entries",
    "reconcile_entries",
    "matches_search",
    "resolve_new_reading",
    "resolve_edited_reading",
    "edit_display_value",
    "load_ledger",
    "load_vehicle",
    "list_vehicle_files",
    "find_vehicle_file",
    "user_settings_path",
    "create_vehicle",
    "save_mileage_log",
    "update_mileage_log",
    "delete_mileage_log",
    "load_logging_style",
    "save_logging_style",
    "build_new_entry",
    "build_edited_entry",
    "log_trip",
    "edit_trip",
    "delete_trip",
    "parse_logging_style",
    "set_logging_style",
]
