"""
Serial Communicator
===================

Owns the single serial connection to the Arduino and implements the
command/response timing the firmware expects:

1. Opening the port resets the board (DTR toggles on connect), so the
   communicator waits a fixed BOOT_DELAY after opening.
2. Each command is written as one line, followed by a fixed
   COMMAND_DELAY, then exactly one response line is read.

Both delays block the calling thread. The firmware has no handshake
beyond its response lines, so they are kept as-is; shortening them
breaks unmodified firmware.

Example:
    >>> from arduino_actuators import PortConfig
    >>> from arduino_actuators.serial import SerialCommunicator
    >>>
    >>> with SerialCommunicator(PortConfig('/dev/ttyACM0')) as comm:
    ...     comm.send('led(red, on)', 'ok')
    True
"""

import enum
import logging
import time
from typing import Optional

import serial

from ..commands import decode_line, encode_line, matches
from ..config import PortConfig
from ..exceptions import CommunicatorClosedError, PortNotFoundError, PortOpenError
from ..tools import log_exceptions
from .port_manager import PortDescriptor, PortEnumerator, PortHandle, SerialPortEnumerator

logger = logging.getLogger(__name__)


class CommunicatorState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    OPEN = "open"
    CLOSED = "closed"


class SerialCommunicator:
    """
    Line-protocol link to the Arduino.

    Not thread-safe: at most one send() may be in flight. Callers that
    share a communicator must serialize access themselves (see
    SynchronizedController).

    Attributes:
        READ_TIMEOUT: Seconds readline() waits for a response
        WRITE_TIMEOUT: None, writes block until done
        COMMAND_DELAY: Seconds to wait between writing and reading
        BOOT_DELAY: Seconds to wait after opening for the board to reset
    """

    READ_TIMEOUT = 5.0
    WRITE_TIMEOUT = None
    COMMAND_DELAY = 0.2
    BOOT_DELAY = 2.0

    def __init__(
        self,
        config: PortConfig,
        enumerator: Optional[PortEnumerator] = None
    ):
        """
        Args:
            config: Port identifier and baudrate
            enumerator: Port source; defaults to the host's serial ports
        """
        self.config = config
        self.enumerator = enumerator if enumerator is not None else SerialPortEnumerator()
        self.descriptor: Optional[PortDescriptor] = None

        self._handle: Optional[PortHandle] = None
        self._state = CommunicatorState.UNINITIALIZED

    def __enter__(self) -> 'SerialCommunicator':
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def state(self) -> CommunicatorState:
        return self._state

    # =========================================================================
    # Connection Management
    # =========================================================================

    @log_exceptions
    def initialize(self) -> None:
        """
        Find, configure and open the port, then wait for the board to boot.

        Raises:
            PortNotFoundError: No enumerated port matches config.port
            PortOpenError: The port could not be opened
            CommunicatorClosedError: close() was already called
        """
        if self._state is CommunicatorState.OPEN:
            return
        if self._state is CommunicatorState.CLOSED:
            raise CommunicatorClosedError(
                f"Communicator for {self.config.port} is closed"
            )

        logger.info(
            "Initializing serial communication on port %s with baud rate %d",
            self.config.port, self.config.baudrate
        )

        descriptor = self._find_port()
        self._handle = self._open_port(descriptor)
        self.descriptor = descriptor
        self._state = CommunicatorState.OPEN

        # Board resets on connect; no ready signal, just wait
        time.sleep(self.BOOT_DELAY)

        logger.info("Serial communication initialized on %s", descriptor.system_name)

    def _find_port(self) -> PortDescriptor:
        """First port whose system name equals, or description contains, the identifier."""
        wanted = self.config.port
        for port in self.enumerator.list_ports():
            logger.debug("Found serial port: %s (%s)", port.system_name, port.descriptive_name)
            if port.system_name == wanted or wanted in port.descriptive_name:
                return port
        raise PortNotFoundError(wanted)

    def _open_port(self, descriptor: PortDescriptor) -> PortHandle:
        handle = self.enumerator.get_handle(descriptor)
        try:
            handle.configure(self.config.baudrate, self.READ_TIMEOUT, self.WRITE_TIMEOUT)
            if not handle.open():
                raise PortOpenError(self.config.port)
        except BaseException:
            # Never leave a half-configured port behind
            try:
                handle.close()
            except (serial.SerialException, OSError) as e:
                logger.debug("Ignoring close error after failed open: %s", e)
            raise
        return handle

    def is_open(self) -> bool:
        """Check if the link is open and the port still reports open."""
        return (
            self._state is CommunicatorState.OPEN
            and self._handle is not None
            and self._handle.is_open
        )

    def close(self) -> None:
        """
        Close the link and release the port.

        Safe to call repeatedly and from teardown paths; errors are
        logged, never raised.
        """
        if self._state is not CommunicatorState.OPEN:
            return

        logger.info("Closing serial communication")
        handle, self._handle = self._handle, None
        self._state = CommunicatorState.CLOSED

        if handle is not None:
            # Each step is attempted even if an earlier one failed
            if handle.is_open:
                try:
                    handle.reset_input_buffer()
                except (serial.SerialException, OSError) as e:
                    logger.error("Error closing input stream: %s", e)
                try:
                    handle.flush()
                except (serial.SerialException, OSError) as e:
                    logger.error("Error closing output stream: %s", e)
            else:
                logger.debug("Port already dropped, skipping stream cleanup")
            try:
                handle.close()
            except (serial.SerialException, OSError) as e:
                logger.error("Error closing serial port: %s", e)

        logger.info("Serial communication closed")

    # =========================================================================
    # Commands
    # =========================================================================

    def send(self, command: str, expected_response: str) -> bool:
        """
        Send one command and check its one-line response.

        Args:
            command: Command without line terminator, e.g. "led(red, on)"
            expected_response: Success token, compared case-insensitively

        Returns:
            True if the response matched; False if the link is not open,
            on any I/O error, on read timeout or on any other response
        """
        if not self.is_open():
            logger.error("Serial port is not open")
            return False

        handle = self._handle
        try:
            logger.debug("Sending command: %s", command)
            handle.write(encode_line(command))
            handle.flush()

            time.sleep(self.COMMAND_DELAY)

            raw = handle.readline()
        except (serial.SerialException, OSError) as e:
            logger.error("Error sending command %s: %s", command, e)
            return False

        # readline() returns a partial line when the timeout expires
        response = decode_line(raw) if raw.endswith(b"\n") else ""
        if not response:
            logger.debug("No response to %s within %.1fs", command, self.READ_TIMEOUT)
            return False

        logger.debug("Received response: %s", response)
        return matches(response, expected_response)
