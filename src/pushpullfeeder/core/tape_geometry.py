"""
Tape geometry for EIA-481 component tapes.

Pure functions mapping a Tape specification and a reference point to the
pick location and sprocket hole locations. No state, no I/O, no errors:
tape pitches are validated when the Tape is constructed.

The EIA-481 diagrams put the top of the tape (sprocket hole edge) at 0 with
positive offsets pointing down/right. Machine coordinates point up/right, so
every "across the tape" offset changes sign on its way into machine space.
That conversion lives in `diagram_to_machine` and nowhere else.

See https://www.vishay.com/docs/20014/smdpack.pdf
"""

from typing import Tuple

import numpy as np

from ..models.data_models import LengthUnit, Location, Tape
from ..utils.geometric_calculations import (
    unit_vector, left_normal, vector_angle_degrees
)

# feed/unreel direction of an unrotated tape, as per EIA-481
DEFAULT_FEED_DIRECTION = np.array([1.0, 0.0])


def diagram_to_machine(along: float, across: float,
                       direction: np.ndarray = DEFAULT_FEED_DIRECTION) -> Tuple[float, float]:
    """
    Convert a diagram-frame tape offset into a machine-frame XY offset.

    Args:
        along: Offset along the feed direction (diagram right is positive)
        across: Offset across the tape (diagram down is positive)
        direction: Unit vector of the feed direction in machine space

    Returns:
        Tuple of (dx, dy) in machine space

    Examples (unrotated tape, direction (1, 0)):
        along=2.0, across=3.5  -> (2.0, -3.5)   cavity is below the hole
        along=0.0, across=-1.75 -> (0.0, 1.75)  tape top edge is above the hole

    Tape rotated 90 degrees (direction (0, 1)):
        along=2.0, across=3.5  -> (3.5, 2.0)
    """
    offset = along * direction - across * left_normal(direction)
    return float(offset[0]), float(offset[1])


def pick_location_from_start(tape: Tape, start_top_right: Location) -> Location:
    """
    Location of the first pickable cavity of a freshly cut tape.

    EIA-481 doesn't clearly define the start of a tape. In practice tapes are
    cut between components, usually through the center of a sprocket hole.
    For 2mm pitch tapes (0402/0201) the cut goes through a cavity AND a
    sprocket hole, so the first full cavity is one hole pitch in; coarser
    pitches have it one part pitch in.
    """
    if tape.part_pitch < tape.hole_pitch:
        offset_x = tape.hole_pitch
    else:
        offset_x = tape.part_pitch

    dx, dy = diagram_to_machine(
        -offset_x + tape.cavity_center_offset_x,
        tape.hole_center_offset_y + tape.cavity_center_offset_y
    )
    offset = Location(LengthUnit.MILLIMETERS, dx, dy)
    return start_top_right.add(offset).derive(z=0.0, rotation=0.0)


def get_hole1_location(tape: Tape, pick_location: Location) -> Location:
    """Sprocket hole belonging to a pick location; it sits LEFT of the cavity."""
    dx, dy = diagram_to_machine(
        -tape.cavity_center_offset_x,
        -tape.cavity_center_offset_y
    )
    offset = Location(LengthUnit.MILLIMETERS, dx, dy)
    return pick_location.add(offset).derive(z=0.0, rotation=0.0)


def get_hole_n_location(tape: Tape, pick_location: Location, hole_skip: int) -> Location:
    """Sprocket hole `hole_skip` pitches to the RIGHT of hole 1."""
    hole1_location = get_hole1_location(tape, pick_location)
    dx, dy = diagram_to_machine(tape.hole_pitch * hole_skip, 0.0)
    return hole1_location.add(Location(LengthUnit.MILLIMETERS, dx, dy))


def get_hole2_location(tape: Tape, pick_location: Location) -> Location:
    return get_hole_n_location(tape, pick_location, 1)


def feed_direction(hole1_location: Location, hole2_location: Location) -> np.ndarray:
    """Machine-frame unit vector pointing from hole 1 to hole 2."""
    hole2 = hole2_location.convert_to_units(hole1_location.units)
    return unit_vector(hole2.x - hole1_location.x, hole2.y - hole1_location.y)


def tape_angle(hole1_location: Location, hole2_location: Location) -> float:
    """Rotation of the tape in the machine, degrees (0 = EIA-481 orientation)."""
    return vector_angle_degrees(feed_direction(hole1_location, hole2_location))


def pick_location_from_holes(tape: Tape, hole1_location: Location, hole2_location: Location,
                             feed_count: int = 0, z: float = 0.0,
                             rotation: float = 0.0) -> Location:
    """
    Pick location relative to a calibrated sprocket hole pair.

    Inverse of `get_hole1_location`, following the hole1 -> hole2 direction,
    advanced by `feed_count` part pitches along the tape.

    Args:
        tape: Tape specification
        hole1_location: Calibrated first sprocket hole
        hole2_location: Calibrated second sprocket hole
        feed_count: Part pitches consumed since the holes were calibrated
        z: Pick Z, in hole1 units
        rotation: Pick rotation, degrees
    """
    direction = feed_direction(hole1_location, hole2_location)
    dx, dy = diagram_to_machine(
        tape.cavity_center_offset_x + feed_count * tape.part_pitch,
        tape.cavity_center_offset_y,
        direction
    )
    offset = Location(LengthUnit.MILLIMETERS, dx, dy)
    return hole1_location.add(offset).derive(z=z, rotation=rotation)
