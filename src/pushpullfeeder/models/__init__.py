"""Data models for push-pull feeder package."""

from .data_models import (
    LengthUnit, Location, Tape, CalibrationTrigger, PipelineType,
    DetectedOffset, FeederState
)

__all__ = [
    "LengthUnit", "Location", "Tape", "CalibrationTrigger", "PipelineType",
    "DetectedOffset", "FeederState"
]
