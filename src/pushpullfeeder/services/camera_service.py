"""Head camera service for push-pull feeder package."""

import logging
from typing import Any, Callable

from ..models.data_models import Location
from .robot_service import RobotService


class CameraService:
    """
    Down-looking head camera.

    Combines head motion with an external frame grabber; the frame is
    passed through to the vision pipeline untouched.
    """

    def __init__(self, robot: RobotService, frame_grabber: Callable[[], Any],
                 units_per_pixel: Location):
        self.robot = robot
        self.frame_grabber = frame_grabber
        self.units_per_pixel = units_per_pixel
        self.logger = logging.getLogger(__name__)

    def move_to(self, location: Location) -> None:
        # the camera only looks down, keep the part rotation out of the move
        self.robot.move_to(location.derive(rotation=0.0))

    def capture(self) -> Any:
        image = self.frame_grabber()
        self.logger.debug("Camera frame captured")
        return image
