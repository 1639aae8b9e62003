"""
Pytest configuration for push-pull feeder tests.

Sets up Python path to allow importing from src/ without installation and
provides in-memory actuators, camera and vision pipeline.
"""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from pushpullfeeder.config.settings import Settings  # noqa: E402
from pushpullfeeder.core.vision_calibration import VisionCalibrationAdapter  # noqa: E402
from pushpullfeeder.exceptions.custom_exceptions import ActuatorFault, VisionNotFoundError  # noqa: E402
from pushpullfeeder.models.data_models import (  # noqa: E402
    LengthUnit, Location, Tape, DetectedOffset, CalibrationTrigger
)

# 8mm tape, 2mm part pitch (0402)
TAPE_0402 = Tape(8.0, 4.0, 2.0, 1.75, 2.0, 3.5)

# feed direction is to the right (positive X)
STRIP_TOP_RIGHT_0402 = Location(LengthUnit.MILLIMETERS, 80.0, 30.0, 0.0, 0.0)

PICK_HEAD_OFFSET_Z = -5.0


class FakeActuator:
    """Actuator recording every call."""

    def __init__(self, name: str, fail: bool = False, read_value: str = "0.0"):
        self.name = name
        self.fail = fail
        self.read_value = read_value
        self.calls = []

    def actuate(self, on: bool) -> None:
        if self.fail:
            raise ActuatorFault(f"{self.name} jammed")
        self.calls.append(on)

    def read(self) -> str:
        return self.read_value


class FakeCamera:
    """Camera returning numbered frames at 0.1mm per pixel."""

    def __init__(self, mm_per_pixel: float = 0.1):
        self.units_per_pixel = Location(LengthUnit.MILLIMETERS, mm_per_pixel, mm_per_pixel)
        self.moves = []
        self.frames = 0

    def move_to(self, location: Location) -> None:
        self.moves.append(location)

    def capture(self):
        self.frames += 1
        return f"frame-{self.frames}"


class ScriptedPipeline:
    """
    Vision pipeline replaying scripted results.

    Each entry is a DetectedOffset to return or an exception to raise; the
    last entry repeats once the script runs out.
    """

    def __init__(self, *results):
        self.results = list(results) or [DetectedOffset(0.0, 0.0, 1.0)]
        self.calls = []

    def detect(self, image, expected_location, pipeline_type):
        self.calls.append((image, expected_location, pipeline_type))
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def settings():
    """Default settings without actuator dwell."""
    settings = Settings()
    settings.feed_dwell = 0.0
    settings.peel_dwell = 0.0
    settings.calibration_trigger = CalibrationTrigger.NONE
    return settings


@pytest.fixture
def feed_actuator():
    return FakeActuator("FEED_ACTUATOR")


@pytest.fixture
def rotation_actuator():
    return FakeActuator("ROTATION_ACTUATOR")


@pytest.fixture
def camera():
    return FakeCamera()


@pytest.fixture
def pipeline():
    return ScriptedPipeline(DetectedOffset(0.0, 0.0, 1.0))


@pytest.fixture
def vision(pipeline):
    return VisionCalibrationAdapter(pipeline, max_correction=1.0, min_confidence=0.5, retries=1)


@pytest.fixture
def not_found():
    return VisionNotFoundError("no hole")
