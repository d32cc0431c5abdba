"""Data structures for rendering tower frames."""

from __future__ import annotations

from dataclasses import dataclass

from clacks.encoding.frames import CharacterFrame, EndFrame, Frame
from clacks.encoding.shutters import ShutterLocation


@dataclass(frozen=True)
class FrameData:
    """What one character slot of the tower shows."""

    open_shutters: frozenset[ShutterLocation]
    label: str
    is_end: bool = False

    @classmethod
    def from_frame(cls, frame: Frame | None) -> "FrameData":
        if frame is None:
            return cls(open_shutters=frozenset(), label="")
        if isinstance(frame, CharacterFrame):
            label = "SPACE" if frame.character == " " else frame.character
            return cls(open_shutters=frame.open_shutters, label=label)
        if isinstance(frame, EndFrame):
            return cls(open_shutters=frame.open_shutters, label="END", is_end=True)
        raise TypeError(f"Unknown frame type: {type(frame).__name__}")


__all__ = ["FrameData"]
