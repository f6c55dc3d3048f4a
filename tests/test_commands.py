"""
Protocol encoding tests
=======================

Validates the exact command lines and response matching rules of the
Arduino line protocol.

Run with:
    pytest tests/test_commands.py -v
"""

import pytest

from arduino_actuators import commands
from arduino_actuators.commands import Response, ServoMovement


# =============================================================================
# COMMAND GENERATION
# =============================================================================

class TestLedCommand:
    """Test led(<name>, on|off)."""

    def test_on(self):
        assert commands.led_command("red", True) == "led(red, on)"

    def test_off(self):
        assert commands.led_command("red", False) == "led(red, off)"

    def test_name_passed_through(self):
        """Names are not validated or escaped."""
        assert commands.led_command("status LED 2", True) == "led(status LED 2, on)"


class TestServoCommands:
    """Test servo command generation."""

    def test_angle(self):
        assert commands.servo_angle_command("head", 90) == "servo(head, angle 90)"

    def test_angle_out_of_range_passed_through(self):
        assert commands.servo_angle_command("head", -45) == "servo(head, angle -45)"
        assert commands.servo_angle_command("head", 720) == "servo(head, angle 720)"

    @pytest.mark.parametrize("movement, expected", [
        (ServoMovement.SWEEP, "servo(arm, sweep 0 180 5)"),
        (ServoMovement.HALF_SWEEP, "servo(arm, half-sweep 0 180 5)"),
        (ServoMovement.REVERSE_HALF_SWEEP, "servo(arm, reverse-half-sweep 0 180 5)"),
        (ServoMovement.REVERSE_SWEEP, "servo(arm, reverse-sweep 0 180 5)"),
    ])
    def test_movements(self, movement, expected):
        assert commands.servo_movement_command("arm", movement, 0, 180, 5) == expected

    def test_unknown_movement(self):
        with pytest.raises(ValueError):
            commands.servo_movement_command("arm", "wiggle", 0, 180, 5)

    def test_fixed_commands(self):
        assert commands.STATUS_COMMAND == "status(arduino, ok)"
        assert commands.SHUTDOWN_COMMAND == "shutdown()"


# =============================================================================
# LINE ENCODING
# =============================================================================

class TestLineEncoding:
    """Test wire encoding of commands and responses."""

    def test_encode_appends_newline(self):
        assert commands.encode_line("led(red, on)") == b"led(red, on)\n"

    def test_decode_strips_crlf(self):
        """Arduino println() terminates with \\r\\n."""
        assert commands.decode_line(b"ok\r\n") == "ok"

    def test_decode_strips_lf(self):
        assert commands.decode_line(b"ready\n") == "ready"

    def test_decode_timeout(self):
        assert commands.decode_line(b"") == ""

    def test_decode_invalid_utf8(self):
        """Garbage on the line does not raise."""
        assert commands.decode_line(b"\xffok\n") == "�ok"


class TestResponseMatching:
    """Test success token comparison."""

    def test_exact(self):
        assert commands.matches("ok", Response.OK)

    def test_case_insensitive(self):
        assert commands.matches("OK", Response.OK)
        assert commands.matches("Ready", Response.READY)

    def test_mismatch(self):
        assert not commands.matches("error", Response.OK)
        assert not commands.matches("ok", Response.READY)

    def test_empty(self):
        assert not commands.matches("", Response.OK)

    def test_no_partial_match(self):
        assert not commands.matches("ok!", Response.OK)
        assert not commands.matches(" ok", Response.OK)
