"""Alphabet codec: maps characters to fixed shutter sets and validates messages."""

from __future__ import annotations

from typing import Iterable, Mapping

from clacks.encoding.frames import CharacterFrame, EncodedMessage, EndFrame, Frame
from clacks.encoding.shutters import ALL_CLOSED, ShutterLocation, shutter_set
from clacks.errors import ConfigurationMissing, EmptyMessage, MessageTooLong, UnsupportedCharacter

TL = ShutterLocation.TOP_LEFT
TR = ShutterLocation.TOP_RIGHT
ML = ShutterLocation.MIDDLE_LEFT
MR = ShutterLocation.MIDDLE_RIGHT
BL = ShutterLocation.BOTTOM_LEFT
BR = ShutterLocation.BOTTOM_RIGHT

DEFAULT_MAX_MESSAGE_LEN_BYTES = 20

DEFAULT_ALPHABET: dict[str, tuple[ShutterLocation, ...]] = {
    "A": (ML, BR),
    "B": (MR, BL),
    "C": (ML, MR),
    "D": (TL, BL),
    "E": (TL, TR, BL),
    "F": (TL, TR, ML),
    "G": (TL, TR, MR),
    "H": (TL, BL, BR),
    "I": (TL, ML, BL),
    "J": (TR, MR, BL, BR),
    "K": (TR, ML, BR),
    "L": (TL, ML, BL, BR),
    "M": (TL, ML, MR, BL, BR),
    "N": (TR, ML, BL, BR),
    "O": (TL, TR, ML, MR),
    "P": (TL, TR, ML, MR, BL),
    "Q": (TL, TR, MR, BL),
    "R": (TL, TR, ML, BL),
    "S": (TR, ML, MR, BL),
    "T": (TL, TR, MR, BR),
    "U": (MR, BL, BR),
    "V": (ML, BL, BR),
    "W": (TL, TR, ML, BR),
    "X": (TL, MR, BL),
    "Y": (TL, MR, BR),
    "Z": (TL, ML, MR, BR),
    " ": (BL,),
    "1": (TL,),
    "2": (TR,),
    "3": (TL, TR),
    "4": (ML,),
    "5": (TL, ML),
    "6": (TR, ML),
    "7": (MR,),
    "8": (TL, MR),
    "9": (TR, MR),
    "0": (TL, ML, MR),
}

DEFAULT_END: tuple[ShutterLocation, ...] = (TL, TR, BL, BR)


class Alphabet:
    """Pure codec between text and shutter frames for one configured alphabet.

    Each supported character maps to exactly one shutter set, and no two
    characters (nor the END marker) share a set, so a shown frame can always
    be read back. Construction fails with ``ConfigurationMissing`` when the
    mapping breaks that rule.
    """

    def __init__(
        self,
        characters: Mapping[str, Iterable[ShutterLocation | str]],
        max_message_len_bytes: int,
        end_shutters: Iterable[ShutterLocation | str] = DEFAULT_END,
        fold_case: bool = False,
    ) -> None:
        if not characters:
            raise ConfigurationMissing("Alphabet must define at least one character")
        if (
            isinstance(max_message_len_bytes, bool)
            or not isinstance(max_message_len_bytes, int)
            or max_message_len_bytes <= 0
        ):
            raise ConfigurationMissing(
                f"max_message_len_in_bytes must be a positive integer, got {max_message_len_bytes!r}"
            )

        self._fold_case = fold_case
        self._max_message_len_bytes = max_message_len_bytes
        self._frames: dict[str, CharacterFrame] = {}
        owners: dict[frozenset[ShutterLocation], str] = {}

        for raw_character, locations in characters.items():
            character = str(raw_character)
            if fold_case:
                character = character.upper()
            if len(character) != 1:
                raise ConfigurationMissing(f"Alphabet key {raw_character!r} must be a single character")
            if character in self._frames:
                raise ConfigurationMissing(f"Duplicate alphabet character {character!r}")
            try:
                shutters = shutter_set(locations)
            except ValueError as exc:
                raise ConfigurationMissing(f"Character {character!r}: {exc}") from exc
            if shutters == ALL_CLOSED:
                raise ConfigurationMissing(f"Character {character!r} can't be encoded as all shutters closed")
            if shutters in owners:
                raise ConfigurationMissing(
                    f"Character {character!r} reuses the shutter set of {owners[shutters]!r}"
                )
            owners[shutters] = character
            self._frames[character] = CharacterFrame(character=character, open_shutters=shutters)

        try:
            end = shutter_set(end_shutters)
        except ValueError as exc:
            raise ConfigurationMissing(f"Message end: {exc}") from exc
        if end == ALL_CLOSED:
            raise ConfigurationMissing("Message end can't be encoded as all shutters closed")
        if end in owners:
            raise ConfigurationMissing(f"Message end reuses the shutter set of {owners[end]!r}")
        self._end_frame = EndFrame(open_shutters=end)
        self._by_shutters = {frame.open_shutters: frame for frame in self._frames.values()}

    @classmethod
    def default(cls, max_message_len_bytes: int = DEFAULT_MAX_MESSAGE_LEN_BYTES) -> "Alphabet":
        return cls(DEFAULT_ALPHABET, max_message_len_bytes, DEFAULT_END, fold_case=True)

    @property
    def supported_characters(self) -> list[str]:
        return list(self._frames)

    @property
    def max_message_len_bytes(self) -> int:
        return self._max_message_len_bytes

    @property
    def fold_case(self) -> bool:
        return self._fold_case

    @property
    def end_frame(self) -> EndFrame:
        return self._end_frame

    def encode(self, text: str) -> EncodedMessage:
        """Encode text into one character frame per input character."""
        if not text:
            raise EmptyMessage()

        length = len(text.encode("utf-8"))
        if length > self._max_message_len_bytes:
            raise MessageTooLong(length, self._max_message_len_bytes)

        parts: list[CharacterFrame] = []
        for position, character in enumerate(text):
            key = character.upper() if self._fold_case else character
            frame = self._frames.get(key)
            if frame is None:
                raise UnsupportedCharacter(character, position)
            parts.append(frame)

        return EncodedMessage(parts=tuple(parts))

    def decode(self, open_shutters: Iterable[ShutterLocation | str]) -> Frame | None:
        """Return the frame a shutter set stands for, or None if it means nothing."""
        shutters = shutter_set(open_shutters)
        if shutters == self._end_frame.open_shutters:
            return self._end_frame
        return self._by_shutters.get(shutters)


__all__ = ["Alphabet", "DEFAULT_ALPHABET", "DEFAULT_END", "DEFAULT_MAX_MESSAGE_LEN_BYTES"]
