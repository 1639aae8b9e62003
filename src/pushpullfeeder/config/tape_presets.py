"""EIA-481 tape definitions."""

from typing import Dict, List

from ..models.data_models import Tape
from ..exceptions.custom_exceptions import ConfigurationError

# EIA-481 constants shared by all embossed carrier tapes, mm
HOLE_PITCH = 4.0  # P0
HOLE_CENTER_OFFSET_Y = 1.75  # E1
CAVITY_CENTER_OFFSET_X = 2.0  # P2

# tape width -> F (sprocket hole center to cavity center, across the tape)
CAVITY_CENTER_OFFSET_Y = {
    8.0: 3.5,
    12.0: 5.5,
    16.0: 7.5,
    24.0: 11.5,
}


class TapePresets:
    """
    Standard tape definitions by '<width>mm-<part pitch>mm'.

    Cut tapes vary between manufacturers; these are the nominal values,
    calibrate the sprocket holes before trusting them.
    """

    PRESETS: Dict[str, tuple] = {
        "8mm-2mm": (8.0, 2.0),    # 0402, 0201
        "8mm-4mm": (8.0, 4.0),    # 0603, 0805, 1206, SOT-23
        "12mm-4mm": (12.0, 4.0),
        "12mm-8mm": (12.0, 8.0),  # SOIC-8, SOT-223
        "16mm-8mm": (16.0, 8.0),
        "16mm-12mm": (16.0, 12.0),  # SOIC-16, QFN
        "24mm-12mm": (24.0, 12.0),
        "24mm-16mm": (24.0, 16.0),
    }

    @staticmethod
    def names() -> List[str]:
        return list(TapePresets.PRESETS)

    @staticmethod
    def get(name: str) -> Tape:
        """
        Get a standard tape by name.

        Raises ConfigurationError for unknown names.
        """
        if name not in TapePresets.PRESETS:
            raise ConfigurationError(
                f"Unknown tape '{name}', expected one of: {', '.join(TapePresets.names())}"
            )

        width, part_pitch = TapePresets.PRESETS[name]
        return Tape(
            width=width,
            hole_pitch=HOLE_PITCH,
            part_pitch=part_pitch,
            hole_center_offset_y=HOLE_CENTER_OFFSET_Y,
            cavity_center_offset_x=CAVITY_CENTER_OFFSET_X,
            cavity_center_offset_y=CAVITY_CENTER_OFFSET_Y[width]
        )
