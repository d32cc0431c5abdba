"""Alphabet codec and frame types for the shutter tower."""

from clacks.encoding.alphabet import DEFAULT_ALPHABET, DEFAULT_END, Alphabet
from clacks.encoding.frames import CharacterFrame, EncodedMessage, EndFrame, Frame
from clacks.encoding.shutters import ShutterLocation, ShutterPosition, ShutterSide

__all__ = [
    "Alphabet",
    "CharacterFrame",
    "DEFAULT_ALPHABET",
    "DEFAULT_END",
    "EncodedMessage",
    "EndFrame",
    "Frame",
    "ShutterLocation",
    "ShutterPosition",
    "ShutterSide",
]
