"""Custom exception classes for push-pull feeder package."""

from .custom_exceptions import (
    FeederError,
    ConfigurationError,
    CalibrationError,
    InvalidCalibrationError,
    VisionNotFoundError,
    CorrectionLimitError,
    HoleConsistencyError,
    ActuatorFault,
    MotionFault
)

__all__ = [
    "FeederError",
    "ConfigurationError",
    "CalibrationError",
    "InvalidCalibrationError",
    "VisionNotFoundError",
    "CorrectionLimitError",
    "HoleConsistencyError",
    "ActuatorFault",
    "MotionFault"
]
