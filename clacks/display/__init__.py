"""Shutter output adapters."""

from clacks.display.hardware import ServoShutterDisplay
from clacks.display.outputs import (
    EmulatorShutterDisplay,
    LoggingShutterDisplay,
    ShutterDisplay,
    ShutterOutput,
)

__all__ = [
    "EmulatorShutterDisplay",
    "LoggingShutterDisplay",
    "ServoShutterDisplay",
    "ShutterDisplay",
    "ShutterOutput",
]
