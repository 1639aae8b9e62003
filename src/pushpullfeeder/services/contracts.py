"""
Hardware and vision contracts used by the feeder controller.

The controller only talks to these protocols; drivers, cameras and the
image-processing pipeline live outside this package.
"""

from typing import Any, Protocol, runtime_checkable

from ..models.data_models import Location, PipelineType, DetectedOffset


@runtime_checkable
class Actuator(Protocol):
    """
    Protocol for feed and rotation/peel actuators.

    Calls block until the actuation is confirmed or the driver times out.
    """

    name: str

    def actuate(self, on: bool) -> None:
        """
        Switch the actuator.

        Raises:
            ActuatorFault: If the actuator could not be driven
        """
        ...

    def read(self) -> str:
        """
        Read the actuator's current value.

        Raises:
            ActuatorFault: If the actuator could not be read
        """
        ...


@runtime_checkable
class Camera(Protocol):
    """Protocol for the head camera used to calibrate sprocket holes."""

    # physical units per image pixel in x and y
    units_per_pixel: Location

    def move_to(self, location: Location) -> None:
        """
        Center the camera over a location, blocking until in position.

        Raises:
            MotionFault: If the location could not be reached
        """
        ...

    def capture(self) -> Any:
        """Capture an image at the current position."""
        ...


@runtime_checkable
class VisionPipeline(Protocol):
    """Protocol for the external sprocket hole detector."""

    def detect(self, image: Any, expected_location: Location,
               pipeline_type: PipelineType) -> DetectedOffset:
        """
        Locate the sprocket hole nearest the expected location.

        Returns:
            Pixel offset of the hole from where `expected_location` appears in the image

        Raises:
            VisionNotFoundError: If no hole was found
        """
        ...
