"""Robot head motion service for push-pull feeder package."""

import time
import logging

from cpppo.server.enip.get_attribute import proxy_simple

from ..models.data_models import LengthUnit, Location
from ..exceptions.custom_exceptions import MotionFault
from ..config.settings import Settings

# head handshake values in fd_status
HEAD_IDLE = 0
HEAD_MOVING = 1
HEAD_ERROR = 3
HEAD_IN_POSITION = 10
HEAD_MOVE_REQUEST = 11

# register name -> (CIP attribute, data type)
HEAD_REGISTERS = {
    'fd_command': ('@0x6B/1/120', 'DINT'),
    'fd_status': ('@0x6B/1/121', 'DINT'),
    'fd_target_x': ('@0x6C/1/122', 'REAL'),
    'fd_target_y': ('@0x6C/1/123', 'REAL'),
    'fd_target_z': ('@0x6C/1/124', 'REAL'),
    'fd_target_r': ('@0x6C/1/125', 'REAL'),
    'fd_tool': ('@0x6B/1/126', 'DINT'),
}


class RobotService(proxy_simple):
    """
    Pick head motion through robot registers R[120-126] over EtherNet/IP.

    A move writes the target and a move request in one request, then polls
    fd_status until the controller reports in-position or an error.
    """

    PARAMETERS = dict(proxy_simple.PARAMETERS, **{
        name: proxy_simple.parameter(attribute, data_type, 'head')
        for name, (attribute, data_type) in HEAD_REGISTERS.items()
    })

    def __init__(self, settings: Settings, poll_interval: float = 0.05):
        super().__init__(host=settings.robot_ip, port=settings.robot_port)
        self.settings = settings
        self.poll_interval = poll_interval
        self.logger = logging.getLogger(__name__)
        self.connected = False

    def connect(self) -> None:
        """
        Open the register link, proven by reading the head status.

        Raises MotionFault once all retries fail.
        """
        attempts = self.settings.communication_retry_count + 1

        for attempt in range(attempts):
            self.connected = True
            try:
                status = self.head_status()
            except MotionFault as e:
                self.connected = False
                if attempt == attempts - 1:
                    raise MotionFault(f"Robot at {self.host}:{self.port} unreachable after {attempts} attempts: {e}")
                self.logger.warning(f"Robot link attempt {attempt + 1}/{attempts} failed: {e}")
                time.sleep(1.0)
            else:
                self.logger.info(f"Robot link up at {self.host}:{self.port}, head status {status}")
                return

    def disconnect(self) -> None:
        self.connected = False
        self.logger.info("Robot link closed")

    def _write_registers(self, **values: float) -> None:
        """
        Write several head registers in a single request.

        Raises MotionFault if any write is refused.
        """
        if not self.connected:
            raise MotionFault("Robot not connected")

        assignments = []
        for name, value in values.items():
            data_type = HEAD_REGISTERS[name][1]
            typed = int(value) if data_type == 'DINT' else float(value)
            assignments.append(f'{name} = ({data_type}) {typed}')

        try:
            results = list(self.write(self.parameter_substitution(assignments), checking=True))
        except Exception as e:
            raise MotionFault(f"Head register write {', '.join(values)} failed: {e}")

        refused = [name for name, ok in zip(values, results) if not ok]
        if refused:
            raise MotionFault(f"Head registers refused: {', '.join(refused)}")

    def _read_register(self, name: str) -> float:
        """
        Read one head register.

        Raises MotionFault if the read fails.
        """
        if not self.connected:
            raise MotionFault("Robot not connected")

        try:
            value, = self.read(self.parameter_substitution(name), checking=True)
        except Exception as e:
            raise MotionFault(f"Head register read {name} failed: {e}")

        return float(value[0]) if isinstance(value, list) else float(value)

    def head_status(self) -> int:
        return int(self._read_register('fd_status'))

    def wait_until_settled(self, timeout: float) -> int:
        """
        Poll the head until it is in position, faulted or the timeout passes.

        Returns:
            Last head status read
        """
        deadline = time.time() + timeout
        status = self.head_status()

        while status not in (HEAD_IN_POSITION, HEAD_ERROR) and time.time() < deadline:
            time.sleep(self.poll_interval)
            status = self.head_status()

        return status

    def move_to(self, location: Location) -> None:
        """
        Move the head to a location and block until in position.

        Raises MotionFault if the move is refused, faults or times out.
        """
        target = location.convert_to_units(LengthUnit.MILLIMETERS)
        self.logger.debug(f"Moving head to {target}")

        self._write_registers(
            fd_target_x=target.x,
            fd_target_y=target.y,
            fd_target_z=target.z,
            fd_target_r=target.rotation,
            fd_status=HEAD_MOVE_REQUEST
        )

        status = self.wait_until_settled(self.settings.robot_timeout)
        if status == HEAD_ERROR:
            raise MotionFault(f"Head faulted moving to {target}")
        if status != HEAD_IN_POSITION:
            raise MotionFault(f"Head failed to reach {target} within {self.settings.robot_timeout}s (status {status})")
