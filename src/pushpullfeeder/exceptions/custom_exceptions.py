"""Custom exceptions for push-pull feeder package."""


class FeederError(Exception):
    """Base exception for all feeder related errors."""
    pass


class ConfigurationError(FeederError):
    """Raised when feeder settings are invalid."""
    pass


class CalibrationError(FeederError):
    """Raised when sprocket hole calibration fails."""
    pass


class InvalidCalibrationError(CalibrationError):
    """
    Raised when the sprocket hole pair is unset or degenerate.

    Fatal to the current feed attempt, recoverable by recalibrating.
    The message format is parsed by operator tooling - do not change it.
    """

    def __init__(self, feeder_name: str, distance: float):
        self.feeder_name = feeder_name
        self.distance = distance
        super().__init__(
            "Sprocket hole locations undefined/too close together. "
            f"feeder: '{feeder_name}', distance: {distance:.3f}mm"
        )


class VisionNotFoundError(CalibrationError):
    """Raised when the vision pipeline cannot locate a sprocket hole."""
    pass


class CorrectionLimitError(CalibrationError):
    """Raised when a vision correction exceeds the configured bound."""
    pass


class HoleConsistencyError(CalibrationError):
    """Raised when a detected hole pair does not match the tape hole pitch."""
    pass


class ActuatorFault(FeederError):
    """Raised when an actuator fails to actuate or read."""
    pass


class MotionFault(FeederError):
    """Raised when the head or camera fails to reach a location."""
    pass
