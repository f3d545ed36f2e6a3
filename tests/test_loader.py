#!/usr/bin/env python3
"""Tests for YAML loading and saving utilities."""

import pytest
import yaml

from mileage import (
    EntryNotFoundError,
    LoggingStyle,
    MileageLedger,
    MileageLogEntry,
    MileageStoreError,
    Vehicle,
    VehicleNotFoundError,
    create_vehicle,
    delete_mileage_log,
    find_vehicle_file,
    list_vehicle_files,
    load_ledger,
    load_logging_style,
    load_vehicle,
    save_logging_style,
    save_mileage_log,
    update_mileage_log,
    user_settings_path,
)

VEHICLE_YAML = """
vehicle:
  id: civic
  name: Work Civic
  make: Honda
  model: Civic
  year: 2019
  baselineOdometer: 10000

mileageLogs:
  - id: a1
    date: '2025-01-01'
    odometerReading: 10100
    description: Client meeting
    isBusinessUse: true
  - id: b2
    date: 2025-01-05
    odometerReading: '10250'
    isBusinessUse: false
"""


@pytest.fixture
def vehicle_file(tmp_path):
    path = tmp_path / "civic.yaml"
    path.write_text(VEHICLE_YAML)
    return path


# =============================================================================
# load_ledger tests
# =============================================================================


class TestLoadLedger:
    """Tests for load_ledger function."""

    def test_loads_vehicle_and_entries(self, vehicle_file):
        ledger = load_ledger(vehicle_file)

        assert isinstance(ledger, MileageLedger)
        assert isinstance(ledger.vehicle, Vehicle)
        assert ledger.vehicle.id == "civic"
        assert ledger.vehicle.name == "Work Civic"
        assert ledger.vehicle.year == 2019
        assert ledger.baseline == 10000
        assert len(ledger.entries) == 2
        assert all(isinstance(e, MileageLogEntry) for e in ledger.entries)

    def test_entry_fields(self, vehicle_file):
        first, second = load_ledger(vehicle_file).entries
        assert first.id == "a1"
        assert first.vehicle_id == "civic"
        assert first.description == "Client meeting"
        assert first.is_business_use is True
        assert second.description is None
        assert second.is_business_use is False

    def test_unquoted_dates_become_strings(self, vehicle_file):
        """YAML date objects load as ISO strings."""
        assert load_ledger(vehicle_file).entries[1].date == "2025-01-05"

    def test_string_readings_become_numbers(self, vehicle_file):
        assert load_ledger(vehicle_file).entries[1].odometer_reading == 10250.0

    def test_loaded_ledger_reconciles(self, vehicle_file):
        ledger = load_ledger(vehicle_file)
        assert [r.distance for r in ledger.reconciled()] == [100, 150]

    def test_vehicle_without_logs(self, tmp_path):
        path = tmp_path / "van.yaml"
        path.write_text("vehicle:\n  id: van\n  name: Van\n")
        ledger = load_ledger(path)
        assert ledger.entries == []
        assert ledger.baseline == 0

    def test_business_use_defaults_true(self, tmp_path):
        path = tmp_path / "van.yaml"
        path.write_text(
            "vehicle:\n  id: van\n  name: Van\n"
            "mileageLogs:\n  - id: x\n    date: '2025-01-01'\n    odometerReading: 5\n"
        )
        assert load_ledger(path).entries[0].is_business_use is True

    def test_load_vehicle(self, vehicle_file):
        assert load_vehicle(vehicle_file).baseline_odometer == 10000

    def test_missing_file_is_store_error(self, tmp_path):
        with pytest.raises(MileageStoreError):
            load_ledger(tmp_path / "nope.yaml")

    def test_invalid_yaml_is_store_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("vehicle: [unclosed\n")
        with pytest.raises(MileageStoreError):
            load_ledger(path)

    def test_missing_vehicle_section(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("mileageLogs: []\n")
        with pytest.raises(MileageStoreError, match="vehicle"):
            load_ledger(path)

    def test_non_numeric_reading(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "vehicle:\n  id: van\n  name: Van\n"
            "mileageLogs:\n  - id: x\n    date: '2025-01-01'\n    odometerReading: lots\n"
        )
        with pytest.raises(MileageStoreError, match="invalid odometer value"):
            load_ledger(path)

    @pytest.mark.parametrize(
        "vehicle_extra, reading",
        [
            ("", "-5"),
            ("", ".nan"),
            ("  baselineOdometer: -100\n", "5"),
        ],
    )
    def test_negative_or_non_finite_reading(self, tmp_path, vehicle_extra, reading):
        """Stored readings are absolute: negative or non-finite values are store errors."""
        path = tmp_path / "bad.yaml"
        path.write_text(
            "vehicle:\n  id: van\n  name: Van\n" + vehicle_extra +
            f"mileageLogs:\n  - id: x\n    date: '2025-01-01'\n    odometerReading: {reading}\n"
        )
        with pytest.raises(MileageStoreError, match="invalid odometer value"):
            load_ledger(path)

    def test_numeric_description_loads_as_text(self, tmp_path):
        path = tmp_path / "van.yaml"
        path.write_text(
            "vehicle:\n  id: van\n  name: Van\n"
            "mileageLogs:\n  - id: x\n    date: '2025-01-01'\n    odometerReading: 5\n"
            "    description: 123\n"
        )
        ledger = load_ledger(path)
        assert ledger.get_entry("x").description == "123"
        assert [r.id for r in ledger.search("12")] == ["x"]

    def test_entry_missing_id(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "vehicle:\n  id: van\n  name: Van\n"
            "mileageLogs:\n  - date: '2025-01-01'\n    odometerReading: 5\n"
        )
        with pytest.raises(MileageStoreError, match="malformed"):
            load_ledger(path)


# =============================================================================
# Directory helpers
# =============================================================================


class TestVehicleFiles:
    """Tests for list_vehicle_files, find_vehicle_file and user_settings_path."""

    def test_list_skips_user_settings(self, tmp_path, vehicle_file):
        (tmp_path / "user.yaml").write_text("mileageLoggingStyle: odometer\n")
        assert list_vehicle_files(tmp_path) == [vehicle_file]

    def test_find_vehicle_file(self, tmp_path, vehicle_file):
        assert find_vehicle_file(tmp_path, "civic") == vehicle_file

    def test_find_missing_vehicle(self, tmp_path):
        with pytest.raises(VehicleNotFoundError):
            find_vehicle_file(tmp_path, "nope")

    def test_find_refuses_user_settings(self, tmp_path):
        (tmp_path / "user.yaml").write_text("mileageLoggingStyle: odometer\n")
        with pytest.raises(VehicleNotFoundError):
            find_vehicle_file(tmp_path, "user")

    def test_user_settings_next_to_vehicle(self, vehicle_file):
        assert user_settings_path(vehicle_file) == vehicle_file.parent / "user.yaml"


# =============================================================================
# Write tests
# =============================================================================


class TestCreateVehicle:
    """Tests for create_vehicle function."""

    def test_round_trips(self, tmp_path):
        path = tmp_path / "van.yaml"
        create_vehicle(path, Vehicle("van", "Grip Van", 5000, make="Ford"))

        data = yaml.safe_load(path.read_text())
        assert data["vehicle"] == {
            "id": "van",
            "name": "Grip Van",
            "baselineOdometer": 5000,
            "make": "Ford",
        }
        assert data["mileageLogs"] == []
        assert load_ledger(path).baseline == 5000


class TestSaveMileageLog:
    """Tests for save_mileage_log function."""

    def test_appends_entry(self, vehicle_file):
        entry = MileageLogEntry("c3", "civic", "2025-01-09", 10300.0, "Audition")
        save_mileage_log(vehicle_file, entry)

        data = yaml.safe_load(vehicle_file.read_text())
        assert data["mileageLogs"][-1] == {
            "id": "c3",
            "date": "2025-01-09",
            "odometerReading": 10300.0,
            "description": "Audition",
            "isBusinessUse": True,
        }
        assert len(load_ledger(vehicle_file).entries) == 3

    def test_omits_empty_description(self, vehicle_file):
        save_mileage_log(vehicle_file, MileageLogEntry("c3", "civic", "2025-01-09", 10300.0))
        data = yaml.safe_load(vehicle_file.read_text())
        assert "description" not in data["mileageLogs"][-1]

    def test_creates_list_when_missing(self, tmp_path):
        path = tmp_path / "van.yaml"
        path.write_text("vehicle:\n  id: van\n  name: Van\n")
        save_mileage_log(path, MileageLogEntry("x", "van", "2025-01-01", 5.0))
        assert len(load_ledger(path).entries) == 1


class TestUpdateMileageLog:
    """Tests for update_mileage_log function."""

    def test_replaces_by_id(self, vehicle_file):
        entry = MileageLogEntry("a1", "civic", "2025-01-02", 10120.0, "Callback", False)
        update_mileage_log(vehicle_file, entry)

        ledger = load_ledger(vehicle_file)
        updated = ledger.get_entry("a1")
        assert updated.date == "2025-01-02"
        assert updated.odometer_reading == 10120.0
        assert updated.description == "Callback"
        assert updated.is_business_use is False
        assert [e.id for e in ledger.entries] == ["a1", "b2"]

    def test_unknown_id(self, vehicle_file):
        with pytest.raises(EntryNotFoundError):
            update_mileage_log(vehicle_file, MileageLogEntry("zz", "civic", "2025-01-02", 1.0))


class TestDeleteMileageLog:
    """Tests for delete_mileage_log function."""

    def test_removes_by_id(self, vehicle_file):
        delete_mileage_log(vehicle_file, "a1")
        assert [e.id for e in load_ledger(vehicle_file).entries] == ["b2"]

    def test_unknown_id(self, vehicle_file):
        with pytest.raises(EntryNotFoundError):
            delete_mileage_log(vehicle_file, "zz")


class TestLoggingStyleSettings:
    """Tests for load_logging_style and save_logging_style."""

    def test_missing_file_is_default(self, tmp_path):
        assert load_logging_style(tmp_path / "user.yaml") is LoggingStyle.TRIP_DISTANCE

    def test_missing_key_is_default(self, tmp_path):
        path = tmp_path / "user.yaml"
        path.write_text("name: Sam\n")
        assert load_logging_style(path) is LoggingStyle.TRIP_DISTANCE

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "user.yaml"
        save_logging_style(path, LoggingStyle.ODOMETER)
        assert load_logging_style(path) is LoggingStyle.ODOMETER

    def test_save_keeps_other_settings(self, tmp_path):
        path = tmp_path / "user.yaml"
        path.write_text("name: Sam\n")
        save_logging_style(path, LoggingStyle.ODOMETER)
        data = yaml.safe_load(path.read_text())
        assert data == {"name": "Sam", "mileageLoggingStyle": "odometer"}

    def test_unknown_style_is_store_error(self, tmp_path):
        path = tmp_path / "user.yaml"
        path.write_text("mileageLoggingStyle: hourly\n")
        with pytest.raises(MileageStoreError):
            load_logging_style(path)
