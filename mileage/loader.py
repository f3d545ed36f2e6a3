"""YAML loading and saving utilities for vehicle mileage data."""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .exceptions import EntryNotFoundError, MileageStoreError, VehicleNotFoundError
from .ledger import MileageLedger
from .log_entry import MileageLogEntry
from .logging_style import LoggingStyle
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

USER_SETTINGS_FILE = "user.yaml"


def _parse_reading(value: Any, source: str) -> float:
    """Odometer values in the store are absolute, so they must be finite and not negative."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise MileageStoreError(source, f"invalid odometer value {value!r}")
    if not math.isfinite(number) or number < 0:
        raise MileageStoreError(source, f"invalid odometer value {value!r}")
    return number


def _parse_object(dct: Dict[str, Any]) -> Union[Vehicle, MileageLogEntry, MileageLedger, dict]:
    """Parse dictionary into appropriate object type."""
    # Mileage log entry
    if "odometerReading" in dct:
        return MileageLogEntry(
            str(dct["id"]),
            dct.get("vehicleId"),
            dct["date"],
            _parse_reading(dct["odometerReading"], f"mileage log {dct['id']}"),
            str(dct["description"]) if dct.get("description") else None,
            dct.get("isBusinessUse", True),
        )
    # Vehicle object (inside 'vehicle' key)
    elif "id" in dct and "name" in dct:
        return Vehicle(
            str(dct["id"]),
            dct["name"],
            _parse_reading(dct.get("baselineOdometer") or 0, f"vehicle {dct['id']}"),
            dct.get("make"),
            dct.get("model"),
            dct.get("year"),
        )
    # Top-level vehicle file
    elif isinstance(dct.get("vehicle"), Vehicle):
        vehicle = dct["vehicle"]
        entries = dct.get("mileageLogs") or []
        for entry in entries:
            # The owning vehicle is implied by the file
            entry.vehicle_id = vehicle.id
        return MileageLedger(vehicle, entries)
    else:
        return dct


def _read_yaml(filename: Union[str, Path]) -> Dict[str, Any]:
    try:
        with open(filename, "r") as fp:
            data = yaml.load(fp, Loader=yaml.SafeLoader)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to read %s: %s", filename, e)
        raise MileageStoreError(str(filename), str(e)) from e
    return data or {}


def _write_yaml(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    try:
        with open(filename, "w") as fp:
            yaml.dump(
                data,
                fp,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                width=120,
            )
    except OSError as e:
        logger.error("Failed to write %s: %s", filename, e)
        raise MileageStoreError(str(filename), str(e)) from e


def load_ledger(filename: Union[str, Path]) -> MileageLedger:
    """Load a vehicle and all of its mileage logs from a YAML file."""
    data = _read_yaml(filename)
    if "vehicle" not in data:
        raise MileageStoreError(str(filename), "missing 'vehicle' section")
    # Dates YAML reads as date objects are written back as ISO strings
    json_data = json.dumps(data, default=str)
    try:
        ledger = json.loads(json_data, object_hook=_parse_object)
    except (KeyError, AttributeError) as e:
        raise MileageStoreError(str(filename), f"malformed mileage log: {e}") from e
    if not isinstance(ledger, MileageLedger):
        raise MileageStoreError(str(filename), "malformed 'vehicle' section")
    return ledger


def load_vehicle(filename: Union[str, Path]) -> Vehicle:
    """Load just the vehicle record from a YAML file."""
    return load_ledger(filename).vehicle


def list_vehicle_files(data_dir: Union[str, Path]) -> List[Path]:
    """All vehicle YAML files in a data directory."""
    return sorted(
        p for p in Path(data_dir).glob("*.yaml") if p.name != USER_SETTINGS_FILE
    )


def find_vehicle_file(data_dir: Union[str, Path], vehicle_id: str) -> Path:
    """Path of the YAML file for a vehicle id (the filename without extension)."""
    path = Path(data_dir) / f"{vehicle_id}.yaml"
    if vehicle_id == Path(USER_SETTINGS_FILE).stem or not path.exists():
        raise VehicleNotFoundError(vehicle_id)
    return path


def user_settings_path(vehicle_file: Union[str, Path]) -> Path:
    """User settings live next to the vehicle files."""
    return Path(vehicle_file).parent / USER_SETTINGS_FILE


def _vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    """Serialize a Vehicle to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "id": vehicle.id,
        "name": vehicle.name,
        "baselineOdometer": vehicle.baseline_odometer,
    }
    if vehicle.make is not None:
        d["make"] = vehicle.make
    if vehicle.model is not None:
        d["model"] = vehicle.model
    if vehicle.year is not None:
        d["year"] = vehicle.year
    return d


def _entry_to_dict(entry: MileageLogEntry) -> Dict[str, Any]:
    """Serialize a MileageLogEntry, omitting an empty description."""
    d: Dict[str, Any] = {
        "id": entry.id,
        "date": entry.date,
        "odometerReading": entry.odometer_reading,
    }
    if entry.description:
        d["description"] = entry.description
    d["isBusinessUse"] = entry.is_business_use
    return d


def create_vehicle(filename: Union[str, Path], vehicle: Vehicle) -> None:
    """Create a new vehicle YAML file with an empty mileage log."""
    data: Dict[str, Any] = {
        "vehicle": _vehicle_to_dict(vehicle),
        "mileageLogs": [],
    }
    _write_yaml(filename, data)
    logger.info("Created vehicle %s in %s", vehicle.id, filename)


def save_mileage_log(filename: Union[str, Path], entry: MileageLogEntry) -> None:
    """
    Append a mileage log entry to a vehicle YAML file.

    Loads the raw YAML, appends the entry to the mileageLogs list,
    and writes back to the file.
    """
    data = _read_yaml(filename)
    if data.get("mileageLogs") is None:
        data["mileageLogs"] = []

    data["mileageLogs"].append(_entry_to_dict(entry))

    _write_yaml(filename, data)
    logger.info("Saved mileage log %s (%s) to %s", entry.id, entry.date, filename)


def update_mileage_log(filename: Union[str, Path], entry: MileageLogEntry) -> None:
    """Replace the mileage log entry with the same id."""
    data = _read_yaml(filename)
    logs = data.get("mileageLogs") or []
    for index, existing in enumerate(logs):
        if str(existing.get("id")) == entry.id:
            logs[index] = _entry_to_dict(entry)
            break
    else:
        raise EntryNotFoundError(entry.id)

    _write_yaml(filename, data)
    logger.info("Updated mileage log %s in %s", entry.id, filename)


def delete_mileage_log(filename: Union[str, Path], entry_id: str) -> None:
    """Remove the mileage log entry with the given id."""
    data = _read_yaml(filename)
    logs = data.get("mileageLogs") or []
    remaining = [e for e in logs if str(e.get("id")) != entry_id]
    if len(remaining) == len(logs):
        raise EntryNotFoundError(entry_id)

    data["mileageLogs"] = remaining
    _write_yaml(filename, data)
    logger.info("Deleted mileage log %s from %s", entry_id, filename)


def load_logging_style(filename: Union[str, Path]) -> LoggingStyle:
    """Read the user's logging style. Missing file or key means the default style."""
    if not Path(filename).exists():
        return LoggingStyle.default()
    data = _read_yaml(filename)
    value = data.get("mileageLoggingStyle")
    if value is None:
        return LoggingStyle.default()
    try:
        return LoggingStyle(value)
    except ValueError:
        raise MileageStoreError(str(filename), f"unknown mileage logging style {value!r}")


def save_logging_style(filename: Union[str, Path], style: LoggingStyle) -> None:
    """Write the user's logging style, keeping any other settings in the file."""
    data = _read_yaml(filename) if Path(filename).exists() else {}
    data["mileageLoggingStyle"] = style.value
    _write_yaml(filename, data)
    logger.info("Mileage logging style set to %s", style.value)
