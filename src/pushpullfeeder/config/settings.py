"""Configuration management for push-pull feeder package."""

import os

from ..models.data_models import CalibrationTrigger, PipelineType
from ..exceptions.custom_exceptions import ConfigurationError


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_enum(name: str, enum_class, default: str):
    value = os.getenv(name, default).upper()
    try:
        return enum_class[value]
    except KeyError:
        choices = ", ".join(member.name for member in enum_class)
        raise ConfigurationError(f"{name} must be one of {choices}, got '{value}'")


class Settings:
    """Feeder settings, read from the environment with safe defaults."""

    def __init__(self):
        self.feeder_name: str = os.getenv("FEEDER_NAME", "ReferencePushPullFeeder")

        # Calibration settings
        self.calibration_trigger: CalibrationTrigger = _env_enum(
            "CALIBRATION_TRIGGER", CalibrationTrigger, "ON_FIRST_USE"
        )
        self.pipeline_type: PipelineType = _env_enum(
            "PIPELINE_TYPE", PipelineType, "CIRCULAR_SYMMETRY"
        )
        self.min_hole_distance: float = float(os.getenv("MIN_HOLE_DISTANCE", "0.001"))
        self.hole_pitch_tolerance: float = float(os.getenv("HOLE_PITCH_TOLERANCE", "0.5"))

        # Vision settings
        self.max_vision_correction: float = float(os.getenv("MAX_VISION_CORRECTION", "1.0"))
        self.min_vision_confidence: float = float(os.getenv("MIN_VISION_CONFIDENCE", "0.5"))
        self.vision_retries: int = int(os.getenv("VISION_RETRIES", "1"))
        self.vision_fallback: bool = _env_flag("VISION_FALLBACK", "false")
        self.precision_wanted: float = float(os.getenv("PRECISION_WANTED", "0.1"))
        self.precision_confidence_samples: int = int(os.getenv("PRECISION_CONFIDENCE_SAMPLES", "3"))

        # Pick settings
        self.pick_z_offset: float = float(os.getenv("PICK_Z_OFFSET", "0.0"))
        self.part_rotation: float = float(os.getenv("PART_ROTATION", "0.0"))
        self.parts_per_feed: int = int(os.getenv("PARTS_PER_FEED", "1"))

        # Actuation settings
        self.feed_dwell: float = float(os.getenv("FEED_DWELL", "0.1"))
        self.peel_dwell: float = float(os.getenv("PEEL_DWELL", "0.1"))

        # Feeder controller board (serial) settings
        self.actuator_port: str = os.getenv("ACTUATOR_PORT", "/dev/ttyUSB0")
        self.actuator_baud: int = int(os.getenv("ACTUATOR_BAUD", "115200"))
        self.actuator_timeout: float = float(os.getenv("ACTUATOR_TIMEOUT", "2.0"))

        # Robot communication settings
        self.robot_ip: str = os.getenv("ROBOT_IP", "192.168.0.1")
        self.robot_port: int = int(os.getenv("ROBOT_PORT", "44818"))
        self.robot_timeout: float = float(os.getenv("ROBOT_TIMEOUT", "5.0"))
        self.communication_retry_count: int = int(os.getenv("COMMUNICATION_RETRY_COUNT", "3"))

        # Logging settings
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def validate_settings(self) -> bool:
        """Validate all settings before driving hardware."""
        if not self.feeder_name:
            raise ConfigurationError("Feeder name must be specified")

        if self.min_hole_distance < 0:
            raise ConfigurationError("Minimum hole distance must not be negative")

        if self.hole_pitch_tolerance <= 0:
            raise ConfigurationError("Hole pitch tolerance must be positive")

        if self.max_vision_correction <= 0:
            raise ConfigurationError("Maximum vision correction must be positive")

        if not 0.0 <= self.min_vision_confidence <= 1.0:
            raise ConfigurationError("Minimum vision confidence must be between 0.0 and 1.0")

        if self.vision_retries < 0:
            raise ConfigurationError("Vision retries must not be negative")

        if self.precision_confidence_samples < 1:
            raise ConfigurationError("Precision confidence samples must be at least 1")

        if self.parts_per_feed < 1:
            raise ConfigurationError("Parts per feed must be at least 1")

        if self.feed_dwell < 0 or self.peel_dwell < 0:
            raise ConfigurationError("Actuator dwell times must not be negative")

        if self.robot_timeout <= 0 or self.actuator_timeout <= 0:
            raise ConfigurationError("Communication timeouts must be positive")

        return True

    def get_robot_address(self) -> tuple:
        """Get robot connection address tuple."""
        return (self.robot_ip, self.robot_port)
