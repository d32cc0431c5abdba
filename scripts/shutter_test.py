"""Servo hardware test: open each shutter in turn, then show the END frame."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys
import time

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from clacks.display import ServoShutterDisplay
from clacks.encoding import Alphabet, ShutterLocation, ShutterPosition


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--i2c-bus", type=int, default=1)
    parser.add_argument("--address", type=lambda value: int(value, 0), default=0x40)
    parser.add_argument("--hold-seconds", type=float, default=1.0)
    args = parser.parse_args()

    display = ServoShutterDisplay(i2c_bus=args.i2c_bus, address=args.address)
    print("shutter_test_start", {"bus": args.i2c_bus, "address": hex(args.address)}, flush=True)
    try:
        display.show(None)
        for location in ShutterLocation:
            print("shutter_open", location.value, flush=True)
            display.move(location, ShutterPosition.OPEN)
            time.sleep(args.hold_seconds)
            display.move(location, ShutterPosition.CLOSED)

        display.show(Alphabet.default().end_frame)
        time.sleep(args.hold_seconds)
        display.show(None)
    finally:
        display.close()
    print("shutter_test_done", flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
