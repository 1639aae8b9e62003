"""External service interfaces for actuators, head motion and camera."""

from .contracts import Actuator, Camera, VisionPipeline
from .serial_actuator import FeederBoardService, SerialActuator
from .robot_service import RobotService
from .camera_service import CameraService

__all__ = ["Actuator", "Camera", "VisionPipeline", "FeederBoardService", "SerialActuator",
           "RobotService", "CameraService"]
