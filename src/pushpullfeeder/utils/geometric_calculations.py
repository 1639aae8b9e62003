"""Geometric calculation utilities for push-pull feeder package."""

import numpy as np
from typing import List, Tuple

from ..models.data_models import LengthUnit, Location


def calculate_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Calculate Euclidean distance between two points."""
    return float(np.sqrt((x2 - x1)**2 + (y2 - y1)**2))


def location_distance(a: Location, b: Location) -> float:
    """XY distance between two locations in millimeters."""
    a_mm = a.convert_to_units(LengthUnit.MILLIMETERS)
    b_mm = b.convert_to_units(LengthUnit.MILLIMETERS)
    return calculate_distance(a_mm.x, a_mm.y, b_mm.x, b_mm.y)


def unit_vector(dx: float, dy: float) -> np.ndarray:
    """
    Normalize a 2D vector.

    A zero vector has no direction; callers validate hole distances first,
    so (1, 0) (the EIA-481 feed direction) is returned for it.
    """
    vector = np.array([dx, dy], dtype=float)
    norm = np.linalg.norm(vector)
    if norm == 0.0:
        return np.array([1.0, 0.0])
    return vector / norm


def left_normal(direction: np.ndarray) -> np.ndarray:
    """Rotate a direction 90 degrees counter-clockwise."""
    return np.array([-direction[1], direction[0]])


def vector_angle_degrees(direction: np.ndarray) -> float:
    """Angle of a direction against +X, in degrees."""
    return float(np.degrees(np.arctan2(direction[1], direction[0])))


def midpoint(a: Location, b: Location) -> Location:
    """Midpoint of two locations in the units of the first."""
    b = b.convert_to_units(a.units)
    return a.derive(x=(a.x + b.x) / 2.0, y=(a.y + b.y) / 2.0)


def mean_magnitude(values: List[float]) -> float:
    if not values:
        return 0.0
    return float(np.mean(np.abs(values)))


def nearest_pitch_multiple(distance: float, pitch: float) -> Tuple[int, float]:
    """
    Closest whole number of pitches to a distance.

    Returns:
        Tuple of (multiple, residual) where residual is the absolute error in mm
    """
    multiple = int(np.rint(distance / pitch))
    residual = abs(distance - multiple * pitch)
    return multiple, float(residual)
