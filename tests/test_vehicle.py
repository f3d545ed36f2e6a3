#!/usr/bin/env python3
"""Tests for Vehicle class."""

from mileage import Vehicle


class TestVehicle:
    """Tests for Vehicle class."""

    def test_required_attributes(self):
        """Required attributes are stored correctly."""
        vehicle = Vehicle("civic", "Work Civic", 10000)
        assert vehicle.id == "civic"
        assert vehicle.name == "Work Civic"
        assert vehicle.baseline_odometer == 10000

    def test_baseline_defaults_to_zero(self):
        """Missing baseline odometer means 0."""
        assert Vehicle("civic", "Civic").baseline_odometer == 0
        assert Vehicle("civic", "Civic", None).baseline_odometer == 0

    def test_display_name_with_details(self):
        """Display name includes year/make/model when known."""
        vehicle = Vehicle("civic", "Work Car", 0, make="Honda", model="Civic", year=2019)
        assert vehicle.display_name == "Work Car (2019 Honda Civic)"

    def test_display_name_without_details(self):
        """Display name is just the name when no details are set."""
        assert Vehicle("civic", "Work Car").display_name == "Work Car"
