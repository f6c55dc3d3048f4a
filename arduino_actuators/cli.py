"""
Command line tool for the Arduino actuators.

Entry point for the `arduino-actuators` command:

    arduino-actuators ports
    arduino-actuators --port COM7 led red on
    arduino-actuators --port /dev/ttyACM0 servo head 90
    arduino-actuators --port "Arduino Uno" sweep arm 0 180 5 --mode half-sweep
    arduino-actuators status
    arduino-actuators shutdown

Port and baudrate default to ARDUINO_PORT / ARDUINO_BAUDRATE.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .commands import ServoMovement
from .config import PortConfig
from .controller import ArduinoController
from .exceptions import ArduinoConnectionError
from .serial.port_manager import PortEnumerator, SerialPortEnumerator

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_CONNECTION = 2

LIBRARY_LOGGER = "arduino_actuators"


def _on_off(value: str) -> bool:
    value = value.lower()
    if value in ("on", "true", "1"):
        return True
    if value in ("off", "false", "0"):
        return False
    raise argparse.ArgumentTypeError(f"expected on/off, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arduino-actuators",
        description="Drive LEDs and servos on an Arduino over serial",
    )
    try:
        defaults = PortConfig.from_env()
    except ValueError as e:
        parser.error(str(e))

    parser.add_argument('--port', '-p', default=defaults.port,
                        help=f'Port name or description substring (default: {defaults.port})')
    parser.add_argument('--baudrate', '-b', type=int, default=defaults.baudrate,
                        help=f'Baudrate (default: {defaults.baudrate})')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log every command and response')

    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('ports', help='List serial ports')
    sub.add_parser('status', help='Check if the Arduino is ready')
    sub.add_parser('shutdown', help='Shut down the Arduino')

    led = sub.add_parser('led', help='Switch an LED')
    led.add_argument('name')
    led.add_argument('state', type=_on_off, help='on or off')

    servo = sub.add_parser('servo', help='Position a servo')
    servo.add_argument('name')
    servo.add_argument('angle', type=int)

    sweep = sub.add_parser('sweep', help='Run a servo movement')
    sweep.add_argument('name')
    sweep.add_argument('start_angle', type=int)
    sweep.add_argument('end_angle', type=int)
    sweep.add_argument('speed', type=int)
    sweep.add_argument('--mode', choices=ServoMovement.ALL, default=ServoMovement.SWEEP)

    return parser


def _run(arduino: ArduinoController, args: argparse.Namespace) -> bool:
    """Execute one command and print the outcome."""
    if args.command == 'status':
        ok = arduino.is_ready()
        print("Arduino is ready" if ok else "Arduino is not ready")
        return ok

    if args.command == 'led':
        ok = arduino.set_led(args.name, args.state)
        if ok:
            print(f"LED {args.name} {'turned on' if args.state else 'turned off'}")
        else:
            print(f"Failed to control LED {args.name}")
        return ok

    if args.command == 'servo':
        ok = arduino.position_servo(args.name, args.angle)
        if ok:
            print(f"Servo {args.name} positioned at {args.angle} degrees")
        else:
            print(f"Failed to position servo {args.name}")
        return ok

    if args.command == 'sweep':
        ok = arduino.move_servo(args.name, args.mode, args.start_angle,
                                args.end_angle, args.speed)
        if ok:
            print(f"Servo {args.name} {args.mode} from {args.start_angle} to {args.end_angle}")
        else:
            print(f"Failed to {args.mode} servo {args.name}")
        return ok

    raise ValueError(f"Unhandled command: {args.command}")


def main(argv: Optional[List[str]] = None,
         enumerator: Optional[PortEnumerator] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Failures are reported by the printed messages below; library
    # records are only shown with --verbose
    logging.getLogger(LIBRARY_LOGGER).setLevel(
        logging.DEBUG if args.verbose else logging.CRITICAL
    )

    if enumerator is None:
        enumerator = SerialPortEnumerator()

    if args.command == 'ports':
        ports = enumerator.list_ports()
        if not ports:
            print("No serial ports found")
        for port in ports:
            print(f"{port.system_name}\t{port.descriptive_name}")
        return EXIT_OK

    config = PortConfig(port=args.port, baudrate=args.baudrate)
    try:
        arduino = ArduinoController.from_config(config, enumerator)
    except ArduinoConnectionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_NO_CONNECTION

    if args.command == 'shutdown':
        arduino.shutdown()
        print("Arduino controller shut down")
        return EXIT_OK

    try:
        ok = _run(arduino, args)
    finally:
        arduino.communicator.close()
    return EXIT_OK if ok else EXIT_FAILED


if __name__ == '__main__':
    sys.exit(main())
