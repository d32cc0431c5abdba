"""Frame variants shown on the tower and the encoded message built from them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Union

from clacks.encoding.shutters import ShutterLocation, describe, ordered

CHARACTER = "CHARACTER"
END = "END"


@dataclass(frozen=True)
class CharacterFrame:
    """Shutter set displaying a single character."""

    character: str
    open_shutters: frozenset[ShutterLocation]

    @property
    def kind(self) -> str:
        return CHARACTER

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": CHARACTER,
            "character": self.character,
            "openShutters": [loc.value for loc in ordered(self.open_shutters)],
        }

    def __str__(self) -> str:
        return f"{self.character!r} {describe(self.open_shutters)}"


@dataclass(frozen=True)
class EndFrame:
    """Reserved shutter set marking the boundary around a message."""

    open_shutters: frozenset[ShutterLocation]

    @property
    def kind(self) -> str:
        return END

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": END,
            "openShutters": [loc.value for loc in ordered(self.open_shutters)],
        }

    def __str__(self) -> str:
        return f"END {describe(self.open_shutters)}"


Frame = Union[CharacterFrame, EndFrame]


@dataclass(frozen=True)
class EncodedMessage:
    """Ordered, immutable character frames of one submitted text."""

    parts: tuple[CharacterFrame, ...]

    def __post_init__(self) -> None:
        if not self.parts:
            raise ValueError("Encoded message must contain at least one frame")

    def __len__(self) -> int:
        return len(self.parts)

    def __iter__(self) -> Iterator[CharacterFrame]:
        return iter(self.parts)

    @property
    def text(self) -> str:
        return "".join(part.character for part in self.parts)

    def to_dict(self) -> dict[str, Any]:
        return {"parts": [part.to_dict() for part in self.parts]}


__all__ = ["CHARACTER", "END", "CharacterFrame", "EncodedMessage", "EndFrame", "Frame"]
