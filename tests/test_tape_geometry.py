"""Tests for EIA-481 tape geometry."""

import numpy as np
import pytest

from pushpullfeeder.core.tape_geometry import (
    pick_location_from_start, get_hole1_location, get_hole2_location,
    get_hole_n_location, pick_location_from_holes, diagram_to_machine,
    tape_angle
)
from pushpullfeeder.models.data_models import LengthUnit, Location, Tape

START_TOP_RIGHT = Location(LengthUnit.MILLIMETERS, 80.0, 40.0, 0.0, 0.0)


def make_tape(hole_pitch, part_pitch, top_to_hole_y, hole_to_cavity_x, hole_to_cavity_y):
    return Tape(8.0, hole_pitch, part_pitch, top_to_hole_y, hole_to_cavity_x, hole_to_cavity_y)


class TestTape:
    """Tape construction contract."""

    @pytest.mark.parametrize("hole_pitch, part_pitch", [(0.0, 2.0), (4.0, 0.0), (-4.0, 2.0)])
    def test_non_positive_pitch_raises(self, hole_pitch, part_pitch):
        with pytest.raises(ValueError, match="pitch must be positive"):
            Tape(8.0, hole_pitch, part_pitch, 1.75, 2.0, 3.5)


class TestPickLocationFromStart:
    """First pickable cavity of a cut tape."""

    @pytest.mark.parametrize(
        "scenario, hole_pitch, part_pitch, top_to_hole_y, hole_to_cavity_x, hole_to_cavity_y, "
        "expected_offset_x, expected_offset_y",
        [
            ("0402", 4.0, 2.0, 1.75, 2.0, 3.5, 4.0 - 2.0, 1.75 + 3.5),
            ("0603", 4.0, 4.0, 1.75, 4.0, 3.5, 4.0 - 4.0, 1.75 + 3.5),
            ("SDCARD", 4.0, 12.0, 1.75, 6.0, 3.5, 12.0 - 6.0, 1.75 + 3.5),
        ]
    )
    def test_offset_from_start(self, scenario, hole_pitch, part_pitch, top_to_hole_y,
                               hole_to_cavity_x, hole_to_cavity_y,
                               expected_offset_x, expected_offset_y):
        tape = make_tape(hole_pitch, part_pitch, top_to_hole_y, hole_to_cavity_x, hole_to_cavity_y)

        offset = pick_location_from_start(tape, START_TOP_RIGHT) - START_TOP_RIGHT

        assert offset == Location(LengthUnit.MILLIMETERS, -expected_offset_x, -expected_offset_y), scenario

    def test_0402_absolute_location(self):
        tape = make_tape(4.0, 2.0, 1.75, 2.0, 3.5)

        pick_location = pick_location_from_start(tape, START_TOP_RIGHT)

        assert pick_location == Location(LengthUnit.MILLIMETERS, 78.0, 34.75, 0.0, 0.0)

    def test_z_and_rotation_are_zero(self):
        tape = make_tape(4.0, 2.0, 1.75, 2.0, 3.5)
        start = START_TOP_RIGHT.derive(z=-12.0, rotation=90.0)

        pick_location = pick_location_from_start(tape, start)

        assert pick_location.z == 0.0
        assert pick_location.rotation == 0.0

    def test_keeps_units_of_start(self):
        tape = make_tape(4.0, 2.0, 1.75, 2.0, 3.5)
        start = Location(LengthUnit.INCHES, 1.0, 1.0)

        pick_location = pick_location_from_start(tape, start)

        assert pick_location.units is LengthUnit.INCHES
        assert pick_location.x == pytest.approx(1.0 - 2.0 / 25.4)
        assert pick_location.y == pytest.approx(1.0 - 5.25 / 25.4)


class TestHoleLocations:
    """Sprocket holes relative to a pick location."""

    TAPES = [
        make_tape(4.0, 2.0, 1.75, 2.0, 3.5),
        make_tape(4.0, 4.0, 1.75, 2.0, 5.5),
        make_tape(4.0, 12.0, 1.75, 6.0, 7.5),
    ]
    PICKS = [
        Location(LengthUnit.MILLIMETERS, 78.0, 34.75),
        Location(LengthUnit.MILLIMETERS, -12.5, 300.0, -5.0, 45.0),
        Location(LengthUnit.MILLIMETERS, 0.0, 0.0),
    ]

    def test_hole1_is_left_of_and_above_the_cavity(self):
        tape = self.TAPES[0]
        pick_location = self.PICKS[0]

        hole1 = get_hole1_location(tape, pick_location)

        assert hole1 == Location(LengthUnit.MILLIMETERS, 76.0, 38.25, 0.0, 0.0)

    @pytest.mark.parametrize("tape", TAPES)
    @pytest.mark.parametrize("pick_location", PICKS)
    def test_hole2_is_one_hole_pitch_right_of_hole1(self, tape, pick_location):
        difference = get_hole2_location(tape, pick_location) - get_hole1_location(tape, pick_location)

        assert difference.is_close(Location(LengthUnit.MILLIMETERS, tape.hole_pitch, 0.0, 0.0, 0.0))

    def test_hole_n(self):
        tape = self.TAPES[0]
        pick_location = self.PICKS[0]

        hole3 = get_hole_n_location(tape, pick_location, 3)

        assert hole3 == get_hole1_location(tape, pick_location).derive(x=76.0 + 12.0)

    @pytest.mark.parametrize("tape", TAPES)
    @pytest.mark.parametrize("pick_location", PICKS)
    def test_round_trip_through_holes(self, tape, pick_location):
        pick_location = pick_location.derive(z=0.0, rotation=0.0)
        hole1 = get_hole1_location(tape, pick_location)
        hole2 = get_hole2_location(tape, pick_location)

        recomputed = pick_location_from_holes(tape, hole1, hole2)

        assert recomputed.is_close(pick_location)

    def test_round_trip_from_start(self):
        tape = self.TAPES[0]
        pick_location = pick_location_from_start(tape, START_TOP_RIGHT)

        recomputed = pick_location_from_holes(
            tape,
            get_hole1_location(tape, pick_location),
            get_hole2_location(tape, pick_location)
        )

        assert recomputed.is_close(pick_location)


class TestPickLocationFromHoles:
    """Pick locations derived from calibrated holes."""

    TAPE = make_tape(4.0, 2.0, 1.75, 2.0, 3.5)
    HOLE1 = Location(LengthUnit.MILLIMETERS, 100.0, 10.0)
    HOLE2 = Location(LengthUnit.MILLIMETERS, 104.0, 10.0)

    def test_feed_count_advances_along_the_tape(self):
        picks = [pick_location_from_holes(self.TAPE, self.HOLE1, self.HOLE2, n) for n in range(4)]

        assert [p.x for p in picks] == pytest.approx([102.0, 104.0, 106.0, 108.0])
        assert all(p.y == pytest.approx(6.5) for p in picks)

    def test_z_and_rotation_applied(self):
        pick_location = pick_location_from_holes(self.TAPE, self.HOLE1, self.HOLE2, z=-5.0, rotation=90.0)

        assert pick_location.z == -5.0
        assert pick_location.rotation == 90.0

    def test_rotated_tape_follows_hole_direction(self):
        # tape fed upwards, cavity ends up right of the holes
        hole1 = Location(LengthUnit.MILLIMETERS, 50.0, 50.0)
        hole2 = Location(LengthUnit.MILLIMETERS, 50.0, 54.0)

        pick_location = pick_location_from_holes(self.TAPE, hole1, hole2, feed_count=1)

        assert pick_location.is_close(Location(LengthUnit.MILLIMETERS, 53.5, 54.0))
        assert tape_angle(hole1, hole2) == pytest.approx(90.0)


class TestDiagramToMachine:
    """Diagram frame to machine frame conversion."""

    def test_unrotated_tape_flips_across_axis(self):
        assert diagram_to_machine(2.0, 3.5) == pytest.approx((2.0, -3.5))
        assert diagram_to_machine(0.0, -1.75) == pytest.approx((0.0, 1.75))

    def test_rotated_tape(self):
        direction = np.array([0.0, 1.0])

        assert diagram_to_machine(2.0, 3.5, direction) == pytest.approx((3.5, 2.0))
