"""Core tape geometry, vision calibration and feeder control."""

from .tape_geometry import (
    pick_location_from_start, get_hole1_location, get_hole2_location,
    get_hole_n_location, pick_location_from_holes, diagram_to_machine
)
from .vision_calibration import VisionCalibrationAdapter
from .feeder import PushPullFeeder

__all__ = ["pick_location_from_start", "get_hole1_location", "get_hole2_location",
           "get_hole_n_location", "pick_location_from_holes", "diagram_to_machine",
           "VisionCalibrationAdapter", "PushPullFeeder"]
