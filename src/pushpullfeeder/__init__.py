"""
Push-Pull Feeder Package

Tape geometry and push-pull feeder control for pick-and-place machines.
Resolves component pick locations on EIA-481 tape from calibrated sprocket
holes and drives the feed and peel actuators.

Sprocket hole calibration must be valid before any feed motion.
"""

from .core.feeder import PushPullFeeder
from .core.vision_calibration import VisionCalibrationAdapter
from .models.data_models import (
    LengthUnit, Location, Tape, CalibrationTrigger, PipelineType, DetectedOffset
)
from .exceptions.custom_exceptions import (
    FeederError, CalibrationError, InvalidCalibrationError, VisionNotFoundError,
    ActuatorFault, MotionFault
)

__version__ = "1.0.0"

__all__ = [
    "PushPullFeeder",
    "VisionCalibrationAdapter",
    "LengthUnit",
    "Location",
    "Tape",
    "CalibrationTrigger",
    "PipelineType",
    "DetectedOffset",
    "FeederError",
    "CalibrationError",
    "InvalidCalibrationError",
    "VisionNotFoundError",
    "ActuatorFault",
    "MotionFault"
]
