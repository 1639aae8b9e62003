"""Serial feeder controller board service for push-pull feeder package."""

import serial
import time
import logging
from typing import Optional

from ..exceptions.custom_exceptions import ActuatorFault
from ..config.settings import Settings


class FeederBoardService:
    """
    Line protocol to a feeder controller board (Arduino class MCU).

    Commands:
        ACTUATE <name> ON|OFF  -> OK (after the stroke completes) or ERROR:<reason>
        READ <name>            -> VALUE:<text> or ERROR:<reason>
        PING                   -> PONG
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.logger = logging.getLogger(__name__)
        self.serial_conn: Optional[serial.Serial] = None
        self.connected = False

    def connect(self) -> None:
        """
        Connect to the feeder board with retry logic.

        Raises ActuatorFault if connection fails.
        """
        max_retries = self.settings.communication_retry_count

        for attempt in range(max_retries + 1):
            try:
                self.logger.info(f"Connecting to feeder board at {self.settings.actuator_port} (attempt {attempt + 1})")

                self.serial_conn = serial.Serial(
                    self.settings.actuator_port,
                    self.settings.actuator_baud,
                    timeout=self.settings.actuator_timeout
                )

                time.sleep(2)  # Arduino reset delay
                self.serial_conn.reset_input_buffer()

                # connected must be set before the first command goes out
                self.connected = True
                response = self._send_command("PING")
                if response != "PONG":
                    raise ActuatorFault(f"Invalid test response: {response}")

                self.logger.info("Feeder board connection established")
                return

            except (serial.SerialException, ActuatorFault) as e:
                self.connected = False
                if self.serial_conn and self.serial_conn.is_open:
                    self.serial_conn.close()

                if attempt < max_retries:
                    self.logger.warning(f"Feeder board connection attempt {attempt + 1} failed: {e}")
                    time.sleep(1.0)
                else:
                    raise ActuatorFault(f"Failed to connect to feeder board after {max_retries + 1} attempts: {e}")

    def disconnect(self) -> None:
        """Disconnect from feeder board."""
        if self.serial_conn and self.serial_conn.is_open:
            self.serial_conn.close()
        self.connected = False
        self.logger.info("Feeder board disconnected")

    def _send_command(self, command: str) -> str:
        """
        Send command to the board and get the response line.

        Raises ActuatorFault if communication fails.
        """
        if not self.connected or not self.serial_conn:
            raise ActuatorFault("Feeder board not connected")

        try:
            self.serial_conn.write(f"{command}\n".encode())
            response = self.serial_conn.readline().decode().strip()
        except serial.SerialException as e:
            raise ActuatorFault(f"Feeder board command '{command}' failed: {e}")

        if not response:
            raise ActuatorFault(f"No response to command '{command}'")

        if response.startswith("ERROR"):
            raise ActuatorFault(f"Feeder board rejected '{command}': {response}")

        return response

    def actuate(self, actuator_name: str, on: bool) -> None:
        response = self._send_command(f"ACTUATE {actuator_name} {'ON' if on else 'OFF'}")
        if response != "OK":
            raise ActuatorFault(f"Invalid actuate response: {response}")

    def read(self, actuator_name: str) -> str:
        response = self._send_command(f"READ {actuator_name}")
        if not response.startswith("VALUE:"):
            raise ActuatorFault(f"Invalid read response: {response}")
        return response[len("VALUE:"):]

    def test_communication(self) -> bool:
        """
        Test feeder board communication.

        Returns:
            True if communication is working
        """
        try:
            return self._send_command("PING") == "PONG"
        except ActuatorFault:
            return False


class SerialActuator:
    """Actuator channel on a feeder controller board."""

    def __init__(self, board: FeederBoardService, name: str):
        self.board = board
        self.name = name

    def actuate(self, on: bool) -> None:
        self.board.actuate(self.name, on)

    def read(self) -> str:
        return self.board.read(self.name)

    def __repr__(self) -> str:
        return f"SerialActuator({self.name!r})"
