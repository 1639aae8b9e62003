"""Utility functions and helpers."""

from .geometric_calculations import calculate_distance, location_distance
from .validation import validate_hole_locations, validate_hole_pair
from .logging_utils import setup_logger

__all__ = ["calculate_distance", "location_distance", "validate_hole_locations",
           "validate_hole_pair", "setup_logger"]
