"""
arduino_actuators - Arduino LED & Servo Serial Driver
=====================================================

A Python library for driving the LEDs and servomotors of an Arduino
running the actuator firmware, using its line-based serial protocol.

Example:
    >>> from arduino_actuators import ArduinoController, PortConfig
    >>>
    >>> with ArduinoController.from_config(PortConfig('/dev/ttyACM0')) as arduino:
    ...     if arduino.is_ready():
    ...         arduino.set_led('red', True)
    ...         arduino.half_sweep('arm', 0, 90, 5)
"""

from .config import PortConfig
from .controller import ActuatorController, ArduinoController, SynchronizedController
from .exceptions import (
    ArduinoConnectionError,
    PortNotFoundError,
    PortOpenError,
    CommunicatorClosedError,
)
from .serial import (
    PortDescriptor,
    PortEnumerator,
    PortHandle,
    SerialPortEnumerator,
    SerialCommunicator,
    CommunicatorState,
)
from .commands import Response, ServoMovement

__version__ = "1.0.0"
__all__ = [
    "PortConfig",
    "ActuatorController",
    "ArduinoController",
    "SynchronizedController",
    "ArduinoConnectionError",
    "PortNotFoundError",
    "PortOpenError",
    "CommunicatorClosedError",
    "PortDescriptor",
    "PortEnumerator",
    "PortHandle",
    "SerialPortEnumerator",
    "SerialCommunicator",
    "CommunicatorState",
    "Response",
    "ServoMovement",
]
