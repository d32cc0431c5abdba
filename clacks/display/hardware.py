"""Hardware output driver for tower shutters on a PCA9685 servo board."""

from __future__ import annotations

import math
import time
from typing import Any

from clacks.encoding.frames import Frame
from clacks.encoding.shutters import ShutterLocation, ShutterPosition, ShutterSide, position_of

MIN_PULSE_US = 1000.0
MAX_PULSE_US = 2000.0
PERIOD_US = 20_000.0
TRAVEL_RANGE = 90.0
SHUTTER_ANGLE = 45.0
PWM_RESOLUTION = 4096

PCA9685_ADDRESS = 0x40
REG_MODE1 = 0x00
REG_PRESCALE = 0xFE
REG_LED0 = 0x06
MODE1_SLEEP = 0x10
MODE1_AUTO_INCREMENT = 0x20
PRESCALE_50HZ = 0x79

SERVO_CHANNELS = {
    ShutterLocation.TOP_LEFT: 0,
    ShutterLocation.TOP_RIGHT: 1,
    ShutterLocation.MIDDLE_LEFT: 2,
    ShutterLocation.MIDDLE_RIGHT: 3,
    ShutterLocation.BOTTOM_LEFT: 4,
    ShutterLocation.BOTTOM_RIGHT: 5,
}


def shutter_angle(location: ShutterLocation, position: ShutterPosition) -> float:
    """Servo angle for a shutter; the two columns are mounted mirrored."""
    opened = position == ShutterPosition.OPEN
    if location.side == ShutterSide.LEFT:
        return SHUTTER_ANGLE if opened else -SHUTTER_ANGLE
    return -SHUTTER_ANGLE if opened else SHUTTER_ANGLE


def angle_to_ticks(angle: float) -> int:
    """Convert an angle in [-45, 45] degrees to PCA9685 off-ticks of a 20ms period."""
    half_travel = TRAVEL_RANGE / 2.0
    if not math.isfinite(angle):
        raise ValueError("Angle must be finite.")
    if abs(angle) > half_travel:
        raise ValueError(f"Absolute value of angle must be <= {half_travel}, got {angle}.")
    pulse_us = MIN_PULSE_US + ((angle + half_travel) / TRAVEL_RANGE) * (MAX_PULSE_US - MIN_PULSE_US)
    return int(round((pulse_us / PERIOD_US) * PWM_RESOLUTION))


def channel_register(channel: int) -> int:
    if not 0 <= channel <= 15:
        raise ValueError(f"Servo channel must be between 0 and 15, got {channel}.")
    return REG_LED0 + channel * 4


def servo_command(angle: float) -> list[int]:
    ticks = angle_to_ticks(angle)
    return [0x00, 0x00, ticks & 0xFF, ticks >> 8]


class ServoShutterDisplay:
    """Move the six shutter servos to match a frame."""

    def __init__(
        self,
        bus: Any | None = None,
        i2c_bus: int = 1,
        address: int = PCA9685_ADDRESS,
        settle_seconds: float = 0.1,
    ) -> None:
        if bus is None:
            try:
                import smbus2
            except ImportError as exc:
                raise RuntimeError(
                    "Hardware output requires 'smbus2' on a Raspberry Pi with I2C enabled."
                ) from exc
            bus = smbus2.SMBus(i2c_bus)

        self._bus = bus
        self._address = address
        self._bus.write_i2c_block_data(address, REG_MODE1, [MODE1_SLEEP])
        self._bus.write_i2c_block_data(address, REG_PRESCALE, [PRESCALE_50HZ])
        self._bus.write_i2c_block_data(address, REG_MODE1, [MODE1_AUTO_INCREMENT])
        # oscillator needs a moment after waking up
        if settle_seconds > 0:
            time.sleep(settle_seconds)

    def show(self, frame: Frame | None) -> None:
        """Drive every shutter; a missing frame closes them all."""
        shutters = frame.open_shutters if frame is not None else frozenset()
        for location in ShutterLocation:
            self.move(location, position_of(shutters, location))

    def move(self, location: ShutterLocation, position: ShutterPosition) -> None:
        register = channel_register(SERVO_CHANNELS[location])
        command = servo_command(shutter_angle(location, position))
        self._bus.write_i2c_block_data(self._address, register, command)

    def close(self) -> None:
        close = getattr(self._bus, "close", None)
        if close is not None:
            close()


__all__ = [
    "SERVO_CHANNELS",
    "ServoShutterDisplay",
    "angle_to_ticks",
    "channel_register",
    "servo_command",
    "shutter_angle",
]
