"""Immutable snapshots of the transmission state handed to observers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from clacks.encoding.frames import CharacterFrame, EncodedMessage

IDLE = "IDLE"
TRANSMITTING = "TRANSMITTING"


@dataclass(frozen=True)
class CurrentMessage:
    """Cursor into the message being transmitted."""

    before: tuple[CharacterFrame, ...]
    current: CharacterFrame | None
    after: tuple[CharacterFrame, ...]

    @classmethod
    def start(cls, message: EncodedMessage) -> "CurrentMessage":
        return cls(before=(), current=message.parts[0], after=message.parts[1:])

    def advance(self) -> "CurrentMessage | None":
        """Show the next frame, or return None once the last frame has been shown."""
        if not self.after:
            return None
        shown = self.before + ((self.current,) if self.current is not None else ())
        return CurrentMessage(before=shown, current=self.after[0], after=self.after[1:])

    @property
    def frames(self) -> tuple[CharacterFrame, ...]:
        current = (self.current,) if self.current is not None else ()
        return self.before + current + self.after

    @property
    def text(self) -> str:
        return "".join(frame.character for frame in self.frames)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"before": [frame.to_dict() for frame in self.before]}
        if self.current is not None:
            data["current"] = self.current.to_dict()
        data["after"] = [frame.to_dict() for frame in self.after]
        return data


@dataclass(frozen=True)
class TransmissionState:
    """Complete view of the tower: the message in flight and everything pending."""

    current_message: CurrentMessage | None
    queue: tuple[EncodedMessage, ...]

    @property
    def status(self) -> str:
        return IDLE if self.current_message is None else TRANSMITTING

    @property
    def current_frame(self) -> CharacterFrame | None:
        if self.current_message is None:
            return None
        return self.current_message.current

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.current_message is not None:
            data["currentMessage"] = self.current_message.to_dict()
        data["queue"] = [message.to_dict() for message in self.queue]
        return data


EMPTY_STATE = TransmissionState(current_message=None, queue=())


__all__ = ["CurrentMessage", "EMPTY_STATE", "IDLE", "TRANSMITTING", "TransmissionState"]
