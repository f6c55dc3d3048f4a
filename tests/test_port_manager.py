"""
Port enumeration and handle tests
=================================

Covers the pyserial-backed enumerator and handle (with pyserial
patched out) and the in-memory fakes.
"""

from unittest.mock import MagicMock, Mock, patch

import pytest
import serial

from arduino_actuators.serial import (
    FakePortEnumerator,
    FakePortHandle,
    PortDescriptor,
    SerialPortEnumerator,
    SerialPortHandle,
)


def _port_info(device, description):
    info = Mock()
    info.device = device
    info.description = description
    return info


# =============================================================================
# PYSERIAL ENUMERATOR
# =============================================================================

class TestSerialPortEnumerator:
    """Test enumeration through serial.tools.list_ports."""

    def test_list_ports_keeps_host_order(self):
        infos = [
            _port_info("/dev/ttyUSB1", "USB Serial"),
            _port_info("/dev/ttyACM0", "Arduino Uno"),
        ]
        with patch("serial.tools.list_ports.comports", return_value=infos):
            ports = SerialPortEnumerator().list_ports()

        assert ports == [
            PortDescriptor("/dev/ttyUSB1", "USB Serial"),
            PortDescriptor("/dev/ttyACM0", "Arduino Uno"),
        ]

    def test_list_ports_empty(self):
        with patch("serial.tools.list_ports.comports", return_value=[]):
            assert SerialPortEnumerator().list_ports() == []

    def test_missing_description(self):
        with patch("serial.tools.list_ports.comports",
                   return_value=[_port_info("COM3", None)]):
            ports = SerialPortEnumerator().list_ports()
        assert ports[0].descriptive_name == ""

    def test_get_handle_is_unopened(self):
        handle = SerialPortEnumerator().get_handle(PortDescriptor("COM7", "Arduino"))
        assert isinstance(handle, SerialPortHandle)
        assert handle.port_name == "COM7"
        assert not handle.is_open


# =============================================================================
# PYSERIAL HANDLE
# =============================================================================

@pytest.fixture
def pyserial_handle():
    """SerialPortHandle with serial.Serial replaced by a mock."""
    with patch("serial.Serial") as serial_class:
        ser = MagicMock()
        ser.is_open = False
        serial_class.return_value = ser
        handle = SerialPortHandle("/dev/ttyACM0")
        yield handle, ser


class TestSerialPortHandle:
    """Test the pyserial handle wrapper."""

    def test_port_assigned_before_open(self, pyserial_handle):
        handle, ser = pyserial_handle
        assert ser.port == "/dev/ttyACM0"
        ser.open.assert_not_called()

    def test_configure(self, pyserial_handle):
        handle, ser = pyserial_handle
        handle.configure(9600, 5.0, None)
        assert ser.baudrate == 9600
        assert ser.timeout == 5.0
        assert ser.write_timeout is None

    def test_open_success(self, pyserial_handle):
        handle, ser = pyserial_handle
        assert handle.open() is True
        ser.open.assert_called_once()

    def test_open_failure_returns_false(self, pyserial_handle):
        handle, ser = pyserial_handle
        ser.open.side_effect = serial.SerialException("busy")
        assert handle.open() is False

    def test_io_delegates(self, pyserial_handle):
        handle, ser = pyserial_handle
        ser.readline.return_value = b"ok\r\n"

        handle.write(b"led(red, on)\n")
        handle.flush()
        handle.reset_input_buffer()

        ser.write.assert_called_once_with(b"led(red, on)\n")
        ser.flush.assert_called_once()
        ser.reset_input_buffer.assert_called_once()
        assert handle.readline() == b"ok\r\n"

    def test_close(self, pyserial_handle):
        handle, ser = pyserial_handle
        handle.close()
        ser.close.assert_called_once()


# =============================================================================
# FAKES
# =============================================================================

class TestFakePortHandle:
    """Test the in-memory port."""

    def test_records_writes(self):
        handle = FakePortHandle()
        handle.open()
        handle.write(b"led(red, on)\n")
        handle.write(b"shutdown()\n")
        assert handle.written == ["led(red, on)", "shutdown()"]
        assert handle.get_last_command() == "shutdown()"

    def test_scripted_responses(self):
        handle = FakePortHandle(responses=["ok"])
        handle.open()
        handle.inject_response("ready")
        assert handle.readline() == b"ok\r\n"
        assert handle.readline() == b"ready\r\n"

    def test_empty_script_is_timeout(self):
        handle = FakePortHandle()
        handle.open()
        assert handle.readline() == b""

    def test_io_when_closed_raises(self):
        handle = FakePortHandle()
        with pytest.raises(serial.SerialException):
            handle.write(b"x\n")
        with pytest.raises(serial.SerialException):
            handle.readline()

    def test_fail_open(self):
        handle = FakePortHandle(fail_open=True)
        assert handle.open() is False
        assert not handle.is_open

    def test_close_counts(self):
        handle = FakePortHandle()
        handle.open()
        handle.close()
        handle.close()
        assert handle.close_calls == 2
        assert not handle.is_open


class TestFakePortEnumerator:
    """Test the fixed enumerator."""

    def test_order_and_handles(self):
        first = PortDescriptor("COM3", "Bluetooth link")
        second = PortDescriptor("COM7", "Arduino Uno (COM7)")
        h1, h2 = FakePortHandle(), FakePortHandle()
        enumerator = FakePortEnumerator({first: h1, second: h2})

        assert enumerator.list_ports() == [first, second]
        assert enumerator.get_handle(second) is h2
