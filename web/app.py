"""Flask JSON API for vehicle mileage tracking."""

import logging
import os
from pathlib import Path

from flask import Flask, jsonify, request

from mileage import (
    EntryNotFoundError,
    MileageStoreError,
    MileageValidationError,
    VehicleNotFoundError,
    delete_trip,
    edit_display_value,
    edit_trip,
    find_vehicle_file,
    list_vehicle_files,
    load_ledger,
    load_logging_style,
    log_trip,
    set_logging_style,
)
from mileage.loader import USER_SETTINGS_FILE

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Path to data directory (vehicle YAML files and user.yaml)
app.config["DATA_DIR"] = Path(
    os.environ.get("MILEAGE_DATA_DIR", Path(__file__).parent.parent / "vehicles")
)


def get_data_dir() -> Path:
    return Path(app.config["DATA_DIR"])


def get_settings_path() -> Path:
    return get_data_dir() / USER_SETTINGS_FILE


def get_vehicle_path(vehicle_id: str) -> Path:
    """Get full path for a vehicle ID, raising VehicleNotFoundError if missing."""
    return find_vehicle_file(get_data_dir(), vehicle_id)


def vehicle_to_json(vehicle):
    return {
        "id": vehicle.id,
        "name": vehicle.name,
        "make": vehicle.make,
        "model": vehicle.model,
        "year": vehicle.year,
        "baselineOdometer": vehicle.baseline_odometer,
    }


def entry_to_json(item):
    """Serialize a ReconciledEntry (camelCase keys, distance included)."""
    return {
        "id": item.id,
        "vehicleId": item.entry.vehicle_id,
        "date": item.date,
        "odometerReading": item.odometer_reading,
        "description": item.description,
        "isBusinessUse": item.is_business_use,
        "distance": item.distance,
        "rawDelta": item.raw_delta,
    }


def stored_entry_to_json(entry):
    return {
        "id": entry.id,
        "vehicleId": entry.vehicle_id,
        "date": entry.date,
        "odometerReading": entry.odometer_reading,
        "description": entry.description,
        "isBusinessUse": entry.is_business_use,
    }


def summary_to_json(summary):
    return {
        "totalDistance": summary.total_distance,
        "businessDistance": summary.business_distance,
        "personalDistance": summary.personal_distance,
        "businessPercentage": summary.business_percentage,
        "entryCount": summary.entry_count,
    }


def optional_bool(payload, key):
    value = payload.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise MileageValidationError(key, f"must be true or false, got {value!r}")


# =============================================================================
# Error handlers
# =============================================================================


@app.errorhandler(MileageValidationError)
def handle_validation_error(e: MileageValidationError):
    return jsonify({"error": e.message, "field": e.field}), 400


@app.errorhandler(EntryNotFoundError)
@app.errorhandler(VehicleNotFoundError)
def handle_not_found(e):
    return jsonify({"error": str(e)}), 404


@app.errorhandler(MileageStoreError)
def handle_store_error(e: MileageStoreError):
    logger.error("Store failure: %s", e)
    return jsonify({"error": str(e)}), 502


# =============================================================================
# Vehicles and mileage logs
# =============================================================================


@app.route("/api/vehicles")
def list_vehicles():
    """All vehicles in the data directory."""
    vehicles = [load_ledger(path).vehicle for path in list_vehicle_files(get_data_dir())]
    return jsonify([vehicle_to_json(v) for v in vehicles])


@app.route("/api/vehicles/<vehicle_id>/mileage-logs", methods=["GET"])
def get_mileage_logs(vehicle_id: str):
    """
    Reconciled mileage logs, most recent first.

    `search` and `year` narrow the returned entries only; the summary is
    always over the vehicle's full ledger.
    """
    ledger = load_ledger(get_vehicle_path(vehicle_id))
    search = request.args.get("search", "").strip()
    year = request.args.get("year", "").strip()

    if year:
        if not year.isdigit():
            raise MileageValidationError("year", f"not a year: {year!r}")
        entries = ledger.entries_for_year(int(year))
    else:
        entries = ledger.display_entries()
    if search:
        matching = {e.id for e in ledger.search(search)}
        entries = [e for e in entries if e.id in matching]

    return jsonify({
        "vehicle": vehicle_to_json(ledger.vehicle),
        "entries": [entry_to_json(e) for e in entries],
        "summary": summary_to_json(ledger.summary()),
    })


@app.route("/api/vehicles/<vehicle_id>/mileage-logs", methods=["POST"])
def create_mileage_log(vehicle_id: str):
    """Add an entry. `value` is read as a trip distance or an odometer reading per the user's style."""
    path = get_vehicle_path(vehicle_id)
    payload = request.get_json(silent=True) or {}
    style = load_logging_style(get_settings_path())

    is_business = optional_bool(payload, "isBusinessUse")
    entry = log_trip(
        path,
        payload.get("date"),
        payload.get("value"),
        style,
        payload.get("description"),
        True if is_business is None else is_business,
    )
    logger.info("Created mileage log %s for %s", entry.id, vehicle_id)
    return jsonify(stored_entry_to_json(entry)), 201


@app.route("/api/vehicles/<vehicle_id>/mileage-logs/<log_id>/edit-value", methods=["GET"])
def get_edit_value(vehicle_id: str, log_id: str):
    """Value to pre-fill in the edit form under the user's style."""
    ledger = load_ledger(get_vehicle_path(vehicle_id))
    style = load_logging_style(get_settings_path())
    return jsonify({
        "mileageLoggingStyle": style.value,
        "value": edit_display_value(ledger, log_id, style),
    })


@app.route("/api/vehicles/<vehicle_id>/mileage-logs/<log_id>", methods=["PATCH"])
def update_mileage_log(vehicle_id: str, log_id: str):
    """Change an entry. Omitted fields keep their stored values."""
    path = get_vehicle_path(vehicle_id)
    payload = request.get_json(silent=True) or {}
    style = load_logging_style(get_settings_path())

    entry = edit_trip(
        path,
        log_id,
        style,
        value=payload.get("value"),
        date=payload.get("date"),
        description=payload.get("description"),
        is_business_use=optional_bool(payload, "isBusinessUse"),
    )
    logger.info("Updated mileage log %s for %s", log_id, vehicle_id)
    return jsonify(stored_entry_to_json(entry))


@app.route("/api/vehicles/<vehicle_id>/mileage-logs/<log_id>", methods=["DELETE"])
def remove_mileage_log(vehicle_id: str, log_id: str):
    path = get_vehicle_path(vehicle_id)
    delete_trip(path, log_id)
    logger.info("Deleted mileage log %s for %s", log_id, vehicle_id)
    return "", 204


# =============================================================================
# User settings
# =============================================================================


@app.route("/api/user/mileage-logging-style", methods=["GET"])
def get_mileage_logging_style():
    style = load_logging_style(get_settings_path())
    return jsonify({"mileageLoggingStyle": style.value})


@app.route("/api/user/mileage-logging-style", methods=["PATCH"])
def update_mileage_logging_style():
    payload = request.get_json(silent=True) or {}
    style = set_logging_style(get_settings_path(), payload.get("mileageLoggingStyle"))
    return jsonify({"mileageLoggingStyle": style.value})


if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("MILEAGE_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
