"""
Serial link configuration.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


PORT_ENV_VAR = "ARDUINO_PORT"
BAUDRATE_ENV_VAR = "ARDUINO_BAUDRATE"


@dataclass(frozen=True)
class PortConfig:
    """
    Configuration for the Arduino serial link.

    Attributes
    ----------
    port : str
        Port identifier. Matched exactly against a port's system name
        (e.g. "/dev/ttyUSB0", "COM7") or as a substring of its
        descriptive name (e.g. "Arduino Uno").
    baudrate : int
        Serial baudrate; must match the firmware's Serial.begin()
    """
    port: str = "/dev/ttyUSB0"
    baudrate: int = 9600

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'PortConfig':
        """
        Build a configuration from ARDUINO_PORT / ARDUINO_BAUDRATE.

        Unset variables fall back to the defaults.

        Raises:
            ValueError: If ARDUINO_BAUDRATE is not an integer
        """
        env = os.environ if environ is None else environ
        port = env.get(PORT_ENV_VAR) or cls.port
        raw_baudrate = env.get(BAUDRATE_ENV_VAR)
        if raw_baudrate:
            try:
                baudrate = int(raw_baudrate)
            except ValueError:
                raise ValueError(
                    f"{BAUDRATE_ENV_VAR} must be an integer, got {raw_baudrate!r}"
                ) from None
        else:
            baudrate = cls.baudrate
        return cls(port=port, baudrate=baudrate)
