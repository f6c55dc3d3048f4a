"""
Exceptions raised while bringing up the serial link.

Only initialization failures are raised. Once the port is open, every
failure is reported as a ``False`` result instead.
"""


class ArduinoConnectionError(ConnectionError):
    """Base class for serial link setup failures."""


class PortNotFoundError(ArduinoConnectionError):
    """No enumerated port matches the configured identifier."""

    def __init__(self, port: str):
        super().__init__(f"Serial port not found: {port}")
        self.port = port


class PortOpenError(ArduinoConnectionError):
    """The matching port was found but could not be opened."""

    def __init__(self, port: str):
        super().__init__(f"Failed to open serial port: {port}")
        self.port = port


class CommunicatorClosedError(ArduinoConnectionError):
    """The communicator was closed and cannot be reopened."""
