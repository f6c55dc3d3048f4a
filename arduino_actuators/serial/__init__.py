"""
Serial communication for arduino_actuators

Handles serial port enumeration, port handles and the line-based
command/response link.
"""

from .port_manager import (
    PortDescriptor,
    PortHandle,
    PortEnumerator,
    SerialPortHandle,
    SerialPortEnumerator,
    FakePortHandle,
    FakePortEnumerator,
)
from .communicator import SerialCommunicator, CommunicatorState

__all__ = [
    'PortDescriptor',
    'PortHandle',
    'PortEnumerator',
    'SerialPortHandle',
    'SerialPortEnumerator',
    'FakePortHandle',
    'FakePortEnumerator',
    'SerialCommunicator',
    'CommunicatorState',
]
