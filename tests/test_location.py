"""Tests for the Location value type."""

import pytest

from pushpullfeeder.models.data_models import LengthUnit, Location, FeederState


class TestLocation:
    """Location arithmetic, derive and unit handling."""

    def test_add_and_subtract_are_component_wise(self):
        a = Location(LengthUnit.MILLIMETERS, 1.0, 2.0, 3.0, 4.0)
        b = Location(LengthUnit.MILLIMETERS, 10.0, 20.0, 30.0, 40.0)

        assert a + b == Location(LengthUnit.MILLIMETERS, 11.0, 22.0, 33.0, 44.0)
        assert b - a == Location(LengthUnit.MILLIMETERS, 9.0, 18.0, 27.0, 36.0)

    def test_add_converts_other_into_own_units(self):
        a = Location(LengthUnit.MILLIMETERS, 1.0, 0.0)
        b = Location(LengthUnit.CENTIMETERS, 1.0, 2.0)

        result = a.add(b)

        assert result.units is LengthUnit.MILLIMETERS
        assert result.x == pytest.approx(11.0)
        assert result.y == pytest.approx(20.0)

    def test_derive_overrides_only_given_fields(self):
        location = Location(LengthUnit.MILLIMETERS, 1.0, 2.0, 3.0, 4.0)

        derived = location.derive(x=5.0, z=0.0)

        assert derived == Location(LengthUnit.MILLIMETERS, 5.0, 2.0, 0.0, 4.0)
        assert location.x == 1.0  # original untouched

    def test_equality_across_units(self):
        assert Location(LengthUnit.CENTIMETERS, 1.0, 2.0) == Location(LengthUnit.MILLIMETERS, 10.0, 20.0)
        assert Location(LengthUnit.MILLIMETERS, 1.0) != Location(LengthUnit.MILLIMETERS, 1.0, 0.1)

    def test_equal_locations_hash_alike(self):
        a = Location(LengthUnit.METERS, 0.001)
        b = Location(LengthUnit.MILLIMETERS, 1.0)

        assert a == b
        assert len({a, b}) == 1

    def test_locations_are_immutable(self):
        location = Location(LengthUnit.MILLIMETERS, 1.0)
        with pytest.raises(AttributeError):
            location.x = 2.0

    def test_linear_distance_ignores_z_and_rotation(self):
        a = Location(LengthUnit.MILLIMETERS, 0.0, 0.0, 5.0, 90.0)
        b = Location(LengthUnit.MILLIMETERS, 3.0, 4.0, -5.0, 0.0)

        assert a.linear_distance_to(b) == pytest.approx(5.0)

    def test_is_close_tolerates_float_noise(self):
        a = Location(LengthUnit.MILLIMETERS, 0.1 + 0.2)
        b = Location(LengthUnit.MILLIMETERS, 0.3)

        assert a.is_close(b)
        assert not a.is_close(b.derive(x=0.31))

    def test_inches_convert_to_millimeters(self):
        location = Location(LengthUnit.INCHES, 1.0, 0.5).convert_to_units(LengthUnit.MILLIMETERS)

        assert location.x == pytest.approx(25.4)
        assert location.y == pytest.approx(12.7)


class TestFeederState:
    """Feeder state naming."""

    def test_state_names(self):
        state = FeederState()
        assert state.state_name == "Uncalibrated"

        state.hole1_location = Location(LengthUnit.MILLIMETERS, 100.0, 10.0)
        state.hole2_location = Location(LengthUnit.MILLIMETERS, 104.0, 10.0)
        assert state.state_name == "Calibrated"

        state.feed_count = 3
        assert state.state_name == "Calibrated(feedCount=3)"

        state.clear_calibration()
        assert state.state_name == "Uncalibrated"
        assert state.feed_count == 0
