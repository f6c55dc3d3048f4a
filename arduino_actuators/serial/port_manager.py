"""
Serial port enumeration and handles
===================================

Two abstract seams sit between the communicator and the host's serial
subsystem:

- PortEnumerator: lists ports and hands out unopened handles
- PortHandle: one serial port with open/close lifecycle and
  byte-level I/O

Each has a live implementation backed by pyserial and an in-memory fake
that records writes and serves scripted responses.

Example
-------
>>> from arduino_actuators.serial import SerialPortEnumerator
>>> for port in SerialPortEnumerator().list_ports():
...     print(port.system_name, port.descriptive_name)
/dev/ttyACM0 Arduino Uno
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import serial
import serial.tools.list_ports

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortDescriptor:
    """
    A serial port as reported by enumeration.

    Attributes
    ----------
    system_name : str
        Device name used to open the port (e.g. "/dev/ttyACM0", "COM7")
    descriptive_name : str
        Human-readable description (e.g. "Arduino Uno (COM7)")
    """
    system_name: str
    descriptive_name: str


class PortHandle(ABC):
    """
    Abstract serial port.

    A handle starts closed; the communicator configures it, opens it and
    owns it exclusively until close().
    """

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Check if the port is open."""
        pass

    @abstractmethod
    def configure(
        self,
        baudrate: int,
        read_timeout: Optional[float],
        write_timeout: Optional[float]
    ) -> None:
        """
        Set line parameters before opening.

        Parameters
        ----------
        baudrate : int
            Serial baudrate
        read_timeout : float or None
            Seconds readline() may block before giving up
        write_timeout : float or None
            Seconds write() may block; None blocks indefinitely
        """
        pass

    @abstractmethod
    def open(self) -> bool:
        """
        Open the port.

        Returns
        -------
        bool
            True if the port is now open
        """
        pass

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write bytes; raises OSError on failure."""
        pass

    @abstractmethod
    def flush(self) -> None:
        """Block until all written bytes are transmitted."""
        pass

    @abstractmethod
    def reset_input_buffer(self) -> None:
        """Discard received bytes not read yet."""
        pass

    @abstractmethod
    def readline(self) -> bytes:
        """
        Read up to and including the next newline.

        Returns
        -------
        bytes
            The line, or b"" (possibly a partial line) on read timeout
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the port."""
        pass


class PortEnumerator(ABC):
    """Abstract source of serial ports."""

    @abstractmethod
    def list_ports(self) -> List[PortDescriptor]:
        """
        Enumerate available serial ports.

        Returns
        -------
        List[PortDescriptor]
            Ports in the order the host reports them; may be empty
        """
        pass

    @abstractmethod
    def get_handle(self, descriptor: PortDescriptor) -> PortHandle:
        """Return an unopened handle for an enumerated port."""
        pass


# =============================================================================
# pyserial implementation
# =============================================================================

class SerialPortHandle(PortHandle):
    """PortHandle backed by an unopened serial.Serial."""

    def __init__(self, port_name: str):
        self.port_name = port_name
        self._ser = serial.Serial()
        self._ser.port = port_name

    @property
    def is_open(self) -> bool:
        return self._ser.is_open

    def configure(self, baudrate, read_timeout, write_timeout) -> None:
        self._ser.baudrate = baudrate
        self._ser.timeout = read_timeout
        self._ser.write_timeout = write_timeout

    def open(self) -> bool:
        try:
            self._ser.open()
            return True
        except (serial.SerialException, OSError) as e:
            logger.error("Cannot open %s: %s", self.port_name, e)
            return False

    def write(self, data: bytes) -> int:
        return self._ser.write(data)

    def flush(self) -> None:
        self._ser.flush()

    def reset_input_buffer(self) -> None:
        self._ser.reset_input_buffer()

    def readline(self) -> bytes:
        return self._ser.readline()

    def close(self) -> None:
        self._ser.close()


class SerialPortEnumerator(PortEnumerator):
    """PortEnumerator backed by serial.tools.list_ports."""

    def list_ports(self) -> List[PortDescriptor]:
        # port_info.device is the port name (e.g., "/dev/ttyACM0", "COM7")
        # port_info.description is human-readable description
        return [
            PortDescriptor(port_info.device, port_info.description or "")
            for port_info in serial.tools.list_ports.comports()
        ]

    def get_handle(self, descriptor: PortDescriptor) -> PortHandle:
        return SerialPortHandle(descriptor.system_name)


# =============================================================================
# In-memory fakes
# =============================================================================

class FakePortHandle(PortHandle):
    """
    In-memory port for testing without hardware.

    Every written line is recorded in ``written`` (decoded, without the
    newline). Each readline() pops the next scripted response; an empty
    script behaves like a read timeout.

    Parameters
    ----------
    responses : iterable of str
        Lines the fake device answers with, in order
    fail_open : bool
        Make open() report failure
    """

    def __init__(self, responses: Iterable[str] = (), fail_open: bool = False):
        self.written: List[str] = []
        self.responses = deque(responses)
        self.fail_open = fail_open
        self.fail_write = False
        self.fail_read = False
        self.fail_close = False
        self.close_calls = 0
        self.baudrate: Optional[int] = None
        self.read_timeout: Optional[float] = None
        self.write_timeout: Optional[float] = None
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def configure(self, baudrate, read_timeout, write_timeout) -> None:
        self.baudrate = baudrate
        self.read_timeout = read_timeout
        self.write_timeout = write_timeout

    def open(self) -> bool:
        if self.fail_open:
            return False
        self._open = True
        return True

    def write(self, data: bytes) -> int:
        if not self._open:
            raise serial.PortNotOpenError()
        if self.fail_write:
            raise serial.SerialException("write failed")
        self.written.append(data.decode().rstrip("\n"))
        return len(data)

    def flush(self) -> None:
        if not self._open:
            raise serial.PortNotOpenError()

    def reset_input_buffer(self) -> None:
        if not self._open:
            raise serial.PortNotOpenError()

    def readline(self) -> bytes:
        if not self._open:
            raise serial.PortNotOpenError()
        if self.fail_read:
            raise serial.SerialException("read failed")
        if not self.responses:
            return b""
        return (self.responses.popleft() + "\r\n").encode()

    def close(self) -> None:
        self.close_calls += 1
        self._open = False
        if self.fail_close:
            raise OSError("close failed")

    def inject_response(self, line: str) -> None:
        """Queue a line for the next readline()."""
        self.responses.append(line)

    def get_last_command(self) -> str:
        """Get the last command written."""
        return self.written[-1] if self.written else ""


class FakePortEnumerator(PortEnumerator):
    """
    Enumerator over a fixed set of fake ports.

    Parameters
    ----------
    ports : dict
        Maps each descriptor to the handle get_handle() returns for it.
        Dict order is the enumeration order.
    """

    def __init__(self, ports: Dict[PortDescriptor, PortHandle]):
        self.ports = dict(ports)

    def list_ports(self) -> List[PortDescriptor]:
        return list(self.ports)

    def get_handle(self, descriptor: PortDescriptor) -> PortHandle:
        return self.ports[descriptor]
