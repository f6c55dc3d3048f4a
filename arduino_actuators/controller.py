"""
Actuator Controller
===================

High-level interface for the LEDs and servomotors attached to the
Arduino. Each operation is encoded into one protocol command, sent
through a SerialCommunicator, and reported as a plain bool so the
caller (HTTP handler, shell, CLI) can map it onto its own responses.

Example:
    >>> from arduino_actuators import ArduinoController, PortConfig
    >>>
    >>> with ArduinoController.from_config(PortConfig('COM7')) as arduino:
    ...     arduino.set_led('red', True)
    ...     arduino.position_servo('head', 90)
    ...     arduino.sweep('arm', 0, 180, 5)
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Optional

from . import commands
from .commands import Response, ServoMovement
from .config import PortConfig
from .serial.communicator import SerialCommunicator
from .serial.port_manager import PortEnumerator

logger = logging.getLogger(__name__)


class ActuatorController(ABC):
    """
    Abstract actuator controller.

    Method groups:
    - LED: set_led()
    - Servo position: position_servo()
    - Servo movement: sweep(), half_sweep(), reverse_half_sweep(),
      reverse_sweep()
    - Lifecycle: is_ready(), shutdown()

    Every operation except shutdown() returns True on success. Failures
    are never raised.
    """

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()

    # =========================================================================
    # LED
    # =========================================================================

    @abstractmethod
    def set_led(self, name: str, on: bool) -> bool:
        """Switch LED `name` on or off."""
        pass

    # =========================================================================
    # Servo position
    # =========================================================================

    @abstractmethod
    def position_servo(self, name: str, angle: int) -> bool:
        """Move servo `name` to `angle` (typically 0-180 degrees)."""
        pass

    # =========================================================================
    # Servo movement
    # =========================================================================

    @abstractmethod
    def sweep(self, name: str, start_angle: int, end_angle: int, speed: int) -> bool:
        """Sweep between start_angle and end_angle."""
        pass

    @abstractmethod
    def half_sweep(self, name: str, start_angle: int, end_angle: int, speed: int) -> bool:
        """Single pass from start_angle to end_angle."""
        pass

    @abstractmethod
    def reverse_half_sweep(self, name: str, start_angle: int, end_angle: int, speed: int) -> bool:
        """Single pass from end_angle back to start_angle."""
        pass

    @abstractmethod
    def reverse_sweep(self, name: str, start_angle: int, end_angle: int, speed: int) -> bool:
        """Sweep between the angles, starting from end_angle."""
        pass

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @abstractmethod
    def is_ready(self) -> bool:
        """Ask the board whether it is ready."""
        pass

    @abstractmethod
    def shutdown(self) -> None:
        """Tell the board to shut down and release the connection."""
        pass


class ArduinoController(ActuatorController):
    """
    ActuatorController speaking the text protocol over a SerialCommunicator.

    Holds no state besides the communicator. Names, angles and speeds
    are sent as given.
    """

    def __init__(self, communicator: SerialCommunicator):
        self.communicator = communicator

    @classmethod
    def from_config(
        cls,
        config: PortConfig,
        enumerator: Optional[PortEnumerator] = None
    ) -> 'ArduinoController':
        """
        Open the link described by `config` and wrap it in a controller.

        Blocks for the board's boot delay.

        Raises:
            PortNotFoundError: No port matches config.port
            PortOpenError: The port could not be opened
        """
        communicator = SerialCommunicator(config, enumerator)
        communicator.initialize()
        logger.info("Arduino controller initialized on %s", config.port)
        return cls(communicator)

    def set_led(self, name: str, on: bool) -> bool:
        return self.communicator.send(commands.led_command(name, on), Response.OK)

    def position_servo(self, name: str, angle: int) -> bool:
        return self.communicator.send(commands.servo_angle_command(name, angle), Response.OK)

    def move_servo(
        self,
        name: str,
        movement: str,
        start_angle: int,
        end_angle: int,
        speed: int
    ) -> bool:
        """
        Run any servo movement.

        Args:
            name: Servo name
            movement: One of the ServoMovement keywords
            start_angle: First angle of the movement
            end_angle: Last angle of the movement
            speed: Firmware speed setting

        Raises:
            ValueError: If movement is not a ServoMovement keyword
        """
        command = commands.servo_movement_command(name, movement, start_angle, end_angle, speed)
        return self.communicator.send(command, Response.OK)

    def sweep(self, name, start_angle, end_angle, speed) -> bool:
        return self.move_servo(name, ServoMovement.SWEEP, start_angle, end_angle, speed)

    def half_sweep(self, name, start_angle, end_angle, speed) -> bool:
        return self.move_servo(name, ServoMovement.HALF_SWEEP, start_angle, end_angle, speed)

    def reverse_half_sweep(self, name, start_angle, end_angle, speed) -> bool:
        return self.move_servo(name, ServoMovement.REVERSE_HALF_SWEEP, start_angle, end_angle, speed)

    def reverse_sweep(self, name, start_angle, end_angle, speed) -> bool:
        return self.move_servo(name, ServoMovement.REVERSE_SWEEP, start_angle, end_angle, speed)

    def is_ready(self) -> bool:
        if not self.communicator.is_open():
            return False
        return self.communicator.send(commands.STATUS_COMMAND, Response.READY)

    def shutdown(self) -> None:
        logger.info("Shutting down Arduino controller")
        try:
            self.communicator.send(commands.SHUTDOWN_COMMAND, Response.OK)
        finally:
            self.communicator.close()
        logger.info("Arduino controller shut down")


class SynchronizedController(ActuatorController):
    """
    Serializes access to another controller.

    The serial link handles one command at a time; wrap the controller
    in this class when several threads (e.g. HTTP request handlers)
    share it.
    """

    def __init__(self, controller: ActuatorController):
        self.controller = controller
        self._lock = threading.Lock()

    def set_led(self, name, on) -> bool:
        with self._lock:
            return self.controller.set_led(name, on)

    def position_servo(self, name, angle) -> bool:
        with self._lock:
            return self.controller.position_servo(name, angle)

    def sweep(self, name, start_angle, end_angle, speed) -> bool:
        with self._lock:
            return self.controller.sweep(name, start_angle, end_angle, speed)

    def half_sweep(self, name, start_angle, end_angle, speed) -> bool:
        with self._lock:
            return self.controller.half_sweep(name, start_angle, end_angle, speed)

    def reverse_half_sweep(self, name, start_angle, end_angle, speed) -> bool:
        with self._lock:
            return self.controller.reverse_half_sweep(name, start_angle, end_angle, speed)

    def reverse_sweep(self, name, start_angle, end_angle, speed) -> bool:
        with self._lock:
            return self.controller.reverse_sweep(name, start_angle, end_angle, speed)

    def is_ready(self) -> bool:
        with self._lock:
            return self.controller.is_ready()

    def shutdown(self) -> None:
        with self._lock:
            self.controller.shutdown()
