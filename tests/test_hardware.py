from __future__ import annotations

import math
from unittest.mock import MagicMock

import pytest

from clacks.display.hardware import (
    SERVO_CHANNELS,
    ServoShutterDisplay,
    angle_to_ticks,
    channel_register,
    servo_command,
    shutter_angle,
)
from clacks.encoding.alphabet import Alphabet
from clacks.encoding.shutters import ShutterLocation, ShutterPosition


def test_angle_to_ticks_spans_one_to_two_milliseconds() -> None:
    assert angle_to_ticks(-45) == 205
    assert angle_to_ticks(0) == 307
    assert angle_to_ticks(45) == 410


@pytest.mark.parametrize("angle", [45.1, -90, math.inf, math.nan])
def test_angle_to_ticks_rejects_out_of_range(angle: float) -> None:
    with pytest.raises(ValueError):
        angle_to_ticks(angle)


def test_channel_register() -> None:
    assert channel_register(0) == 0x06
    assert channel_register(5) == 0x1A
    with pytest.raises(ValueError):
        channel_register(16)


def test_servo_command_little_endian_off_ticks() -> None:
    assert servo_command(45) == [0x00, 0x00, 410 & 0xFF, 410 >> 8]


def test_columns_open_in_opposite_directions() -> None:
    assert shutter_angle(ShutterLocation.TOP_LEFT, ShutterPosition.OPEN) == 45
    assert shutter_angle(ShutterLocation.TOP_LEFT, ShutterPosition.CLOSED) == -45
    assert shutter_angle(ShutterLocation.TOP_RIGHT, ShutterPosition.OPEN) == -45
    assert shutter_angle(ShutterLocation.TOP_RIGHT, ShutterPosition.CLOSED) == 45


def test_init_wakes_board_at_fifty_hertz() -> None:
    bus = MagicMock()

    ServoShutterDisplay(bus=bus, address=0x41, settle_seconds=0)

    calls = [call.args for call in bus.write_i2c_block_data.call_args_list]
    assert calls == [(0x41, 0x00, [0x10]), (0x41, 0xFE, [0x79]), (0x41, 0x00, [0x20])]


def test_show_drives_all_six_servos() -> None:
    bus = MagicMock()
    display = ServoShutterDisplay(bus=bus, settle_seconds=0)
    bus.reset_mock()
    frame = Alphabet.default().encode("A").parts[0]

    display.show(frame)

    writes = {call.args[1]: call.args[2] for call in bus.write_i2c_block_data.call_args_list}
    assert len(writes) == 6
    for location, channel in SERVO_CHANNELS.items():
        position = ShutterPosition.OPEN if location in frame.open_shutters else ShutterPosition.CLOSED
        assert writes[channel_register(channel)] == servo_command(shutter_angle(location, position))


def test_close_closes_bus() -> None:
    bus = MagicMock()
    display = ServoShutterDisplay(bus=bus, settle_seconds=0)

    display.close()

    bus.close.assert_called_once_with()
