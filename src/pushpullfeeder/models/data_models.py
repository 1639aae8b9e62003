"""Data models for push-pull feeder package."""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional


class LengthUnit(Enum):
    """Length units with their size in millimeters."""
    MILLIMETERS = 1.0
    CENTIMETERS = 10.0
    METERS = 1000.0
    INCHES = 25.4
    MILS = 0.0254

    def convert(self, value: float, units: "LengthUnit") -> float:
        """Convert a value in this unit into `units`."""
        if units is self:
            return value
        return value * self.value / units.value

    def to_millimeters(self, value: float) -> float:
        return self.convert(value, LengthUnit.MILLIMETERS)


@dataclass(frozen=True, eq=False)
class Location:
    """Immutable machine or diagram point with units, x/y/z and rotation (degrees)."""
    units: LengthUnit
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    rotation: float = 0.0

    def convert_to_units(self, units: LengthUnit) -> "Location":
        if units is self.units:
            return self
        return Location(
            units,
            self.units.convert(self.x, units),
            self.units.convert(self.y, units),
            self.units.convert(self.z, units),
            self.rotation
        )

    def add(self, other: "Location") -> "Location":
        other = other.convert_to_units(self.units)
        return Location(
            self.units,
            self.x + other.x,
            self.y + other.y,
            self.z + other.z,
            self.rotation + other.rotation
        )

    def subtract(self, other: "Location") -> "Location":
        other = other.convert_to_units(self.units)
        return Location(
            self.units,
            self.x - other.x,
            self.y - other.y,
            self.z - other.z,
            self.rotation - other.rotation
        )

    def derive(self, x: Optional[float] = None, y: Optional[float] = None,
               z: Optional[float] = None, rotation: Optional[float] = None) -> "Location":
        """Copy with only the given fields overridden."""
        changes = {}
        if x is not None:
            changes["x"] = x
        if y is not None:
            changes["y"] = y
        if z is not None:
            changes["z"] = z
        if rotation is not None:
            changes["rotation"] = rotation
        return replace(self, **changes)

    def linear_distance_to(self, other: "Location") -> float:
        """XY distance to another location, in this location's units."""
        other = other.convert_to_units(self.units)
        return math.hypot(other.x - self.x, other.y - self.y)

    def is_close(self, other: "Location", tolerance: float = 1e-9) -> bool:
        """Component-wise comparison in millimeters within `tolerance`."""
        a = self._millimeter_tuple()
        b = other._millimeter_tuple()
        return all(abs(p - q) <= tolerance for p, q in zip(a, b))

    def _millimeter_tuple(self) -> tuple:
        mm = self.convert_to_units(LengthUnit.MILLIMETERS)
        return (mm.x, mm.y, mm.z, mm.rotation)

    def __add__(self, other: "Location") -> "Location":
        return self.add(other)

    def __sub__(self, other: "Location") -> "Location":
        return self.subtract(other)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return self._millimeter_tuple() == other._millimeter_tuple()

    def __hash__(self) -> int:
        return hash(self._millimeter_tuple())

    def __str__(self) -> str:
        return (f"({self.x:.3f}, {self.y:.3f}, {self.z:.3f}, {self.rotation:.3f} "
                f"{self.units.name.lower()})")


@dataclass(frozen=True)
class Tape:
    """
    EIA-481 component tape specification.

    All lengths in millimeters. Top of the tape (edge with the round sprocket
    holes) is 0 and offsets follow the EIA-481 diagrams: positive values point
    downwards/right, the opposite of machine coordinates.
    """
    width: float  # usually 8, 12, 16, 24mm
    hole_pitch: float  # usually 4mm
    part_pitch: float  # 0402/0201 = 2mm, 0603/0805/1206 = 4mm
    hole_center_offset_y: float  # from the top edge
    cavity_center_offset_x: float  # from the hole center
    cavity_center_offset_y: float  # from the hole center

    def __post_init__(self):
        if self.hole_pitch <= 0:
            raise ValueError("Hole pitch must be positive")

        if self.part_pitch <= 0:
            raise ValueError("Part pitch must be positive")


class CalibrationTrigger(Enum):
    """When vision recalibration of the sprocket holes runs."""
    NONE = "none"
    ON_FIRST_USE = "on_first_use"
    UNTIL_CONFIDENT = "until_confident"
    ON_EACH_FEED = "on_each_feed"


class PipelineType(Enum):
    """Vision pipeline variant handed to the external pipeline."""
    CIRCULAR_SYMMETRY = "circular_symmetry"
    COLOR_KEYED = "color_keyed"


@dataclass
class DetectedOffset:
    """Pixel offset of a detected hole from its expected image position (y down)."""
    dx_pixels: float
    dy_pixels: float
    confidence: float = 1.0

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError("Confidence must be between 0.0 and 1.0")


@dataclass
class FeederState:
    """Calibration and feed bookkeeping owned by one feeder controller."""
    calibration_trigger: CalibrationTrigger = CalibrationTrigger.ON_FIRST_USE
    hole1_location: Optional[Location] = None
    hole2_location: Optional[Location] = None
    feed_count: int = 0
    last_pick_location: Optional[Location] = None
    calibration_count: int = 0
    correction_history: List[float] = field(default_factory=list)
    calibration_tape: Optional[Tape] = None
    last_error: Optional[str] = None

    @property
    def has_holes(self) -> bool:
        return self.hole1_location is not None and self.hole2_location is not None

    @property
    def state_name(self) -> str:
        if not self.has_holes:
            return "Uncalibrated"
        if self.feed_count == 0:
            return "Calibrated"
        return f"Calibrated(feedCount={self.feed_count})"

    def clear_calibration(self) -> None:
        self.hole1_location = None
        self.hole2_location = None
        self.feed_count = 0
        self.calibration_count = 0
        self.correction_history.clear()
        self.calibration_tape = None
