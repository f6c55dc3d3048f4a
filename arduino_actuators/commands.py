"""
Command Protocol for the Arduino Actuator Firmware
==================================================

This module defines the line-based protocol used to drive LEDs and
servomotors on the Arduino via serial.

Protocol Overview
-----------------
Every command is a single UTF-8 line of the form ``verb(args)``
terminated by ``\\n``. The firmware answers every command with exactly
one line.

Input (Host → Device):
    led(<name>, on|off)                              - Switch an LED
    servo(<name>, angle <a>)                         - Position a servo
    servo(<name>, sweep <start> <end> <speed>)       - Sweep back and forth
    servo(<name>, half-sweep <start> <end> <speed>)  - Sweep start → end
    servo(<name>, reverse-half-sweep <s> <e> <v>)    - Sweep end → start
    servo(<name>, reverse-sweep <s> <e> <v>)         - Sweep, starting at end
    status(arduino, ok)                              - Readiness query
    shutdown()                                       - Park actuators

Output (Device → Host):
    ok      - Command accepted
    ready   - Answer to the readiness query
    (anything else, or no line within the read timeout, is a failure)

Names and numbers are formatted as given; range checks are the
firmware's business.
"""


class Response:
    """Success tokens, compared case-insensitively."""
    OK = "ok"
    READY = "ready"


class ServoMovement:
    """Movement keywords for the servo command."""
    SWEEP = "sweep"
    HALF_SWEEP = "half-sweep"
    REVERSE_HALF_SWEEP = "reverse-half-sweep"
    REVERSE_SWEEP = "reverse-sweep"

    ALL = (SWEEP, HALF_SWEEP, REVERSE_HALF_SWEEP, REVERSE_SWEEP)


STATUS_COMMAND = "status(arduino, ok)"
SHUTDOWN_COMMAND = "shutdown()"

LINE_TERMINATOR = "\n"
ENCODING = "utf-8"


def led_command(name: str, on: bool) -> str:
    """Build ``led(<name>, on|off)``."""
    return f"led({name}, {'on' if on else 'off'})"


def servo_angle_command(name: str, angle: int) -> str:
    """Build ``servo(<name>, angle <angle>)``."""
    return f"servo({name}, angle {angle})"


def servo_movement_command(
    name: str,
    movement: str,
    start_angle: int,
    end_angle: int,
    speed: int
) -> str:
    """
    Build ``servo(<name>, <movement> <start> <end> <speed>)``.

    Args:
        name: Servo name as known by the firmware
        movement: One of the ServoMovement keywords
        start_angle: First angle of the movement
        end_angle: Last angle of the movement
        speed: Firmware speed setting

    Raises:
        ValueError: If movement is not a known keyword
    """
    if movement not in ServoMovement.ALL:
        raise ValueError(f"Unknown servo movement: {movement!r}")
    return f"servo({name}, {movement} {start_angle} {end_angle} {speed})"


def encode_line(command: str) -> bytes:
    """Terminate a command with a newline and encode it for the wire."""
    return (command + LINE_TERMINATOR).encode(ENCODING)


def decode_line(raw: bytes) -> str:
    """Decode one received line, dropping the ``\\r\\n`` Arduino println adds."""
    return raw.decode(ENCODING, errors="replace").rstrip("\r\n")


def matches(response: str, expected: str) -> bool:
    """Case-insensitive comparison of a response line with a success token."""
    if not response:
        return False
    return response.lower() == expected.lower()
