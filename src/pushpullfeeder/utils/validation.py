"""Validation utilities for push-pull feeder package."""

from typing import Optional

from ..models.data_models import LengthUnit, Location, Tape, DetectedOffset
from ..exceptions.custom_exceptions import (
    InvalidCalibrationError, VisionNotFoundError, CorrectionLimitError,
    HoleConsistencyError
)
from .geometric_calculations import location_distance, nearest_pitch_multiple


def validate_hole_locations(feeder_name: str, hole1_location: Optional[Location],
                            hole2_location: Optional[Location],
                            min_distance: float) -> float:
    """
    Validate the calibrated sprocket hole pair of a feeder.

    Unset holes count as both sitting at the origin, distance 0.

    Returns:
        Hole distance in mm

    Raises InvalidCalibrationError if the holes are unset or too close together.
    """
    origin = Location(LengthUnit.MILLIMETERS)
    distance = location_distance(hole1_location or origin, hole2_location or origin)

    if hole1_location is None or hole2_location is None or distance <= min_distance:
        raise InvalidCalibrationError(feeder_name, distance)

    return distance


def validate_detection(detection: DetectedOffset, min_confidence: float) -> None:
    """
    Validate a vision pipeline result.

    Raises VisionNotFoundError if the confidence is too low.
    """
    if detection.confidence < min_confidence:
        raise VisionNotFoundError(
            f"Detection confidence too low: {detection.confidence:.2f} < {min_confidence:.2f} required"
        )


def validate_correction(correction: float, max_correction: float) -> None:
    """
    Validate a vision correction distance.

    Raises CorrectionLimitError when the correction is beyond the bound,
    a gross misdetection is more likely than a real hole there.
    """
    if correction > max_correction:
        raise CorrectionLimitError(
            f"Vision correction too large: {correction:.3f}mm > {max_correction:.3f}mm allowed"
        )


def validate_hole_pair(tape: Tape, hole1_location: Location, hole2_location: Location,
                       tolerance: float) -> int:
    """
    Validate that a hole pair is consistent with the tape hole pitch.

    Returns:
        Number of hole pitches between the holes

    Raises HoleConsistencyError if the holes are not a whole number of pitches apart.
    """
    distance = location_distance(hole1_location, hole2_location)
    multiple, residual = nearest_pitch_multiple(distance, tape.hole_pitch)

    if multiple < 1 or residual > tolerance:
        raise HoleConsistencyError(
            f"Sprocket holes {distance:.3f}mm apart do not match hole pitch "
            f"{tape.hole_pitch:.3f}mm (± {tolerance:.3f}mm)"
        )

    return multiple
