"""Shutter locations and shutter sets for one character slot of the tower."""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class ShutterSide(Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class ShutterLocation(Enum):
    """One of the six shutters, declared in canonical display order."""

    TOP_LEFT = "TOP_LEFT"
    TOP_RIGHT = "TOP_RIGHT"
    MIDDLE_LEFT = "MIDDLE_LEFT"
    MIDDLE_RIGHT = "MIDDLE_RIGHT"
    BOTTOM_LEFT = "BOTTOM_LEFT"
    BOTTOM_RIGHT = "BOTTOM_RIGHT"

    @property
    def side(self) -> ShutterSide:
        return ShutterSide.LEFT if self.value.endswith("_LEFT") else ShutterSide.RIGHT

    @property
    def row(self) -> int:
        return _ROWS[self.value.split("_", 1)[0]]


_ROWS = {"TOP": 0, "MIDDLE": 1, "BOTTOM": 2}


class ShutterPosition(Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


ALL_CLOSED: frozenset[ShutterLocation] = frozenset()
ALL_OPEN: frozenset[ShutterLocation] = frozenset(ShutterLocation)


def shutter_set(locations: Iterable[ShutterLocation | str]) -> frozenset[ShutterLocation]:
    """Build a shutter set from locations or their names, rejecting duplicates."""
    parsed = [loc if isinstance(loc, ShutterLocation) else parse_location(loc) for loc in locations]
    result = frozenset(parsed)
    if len(result) != len(parsed):
        raise ValueError(f"Shutter locations contain duplicates: {[loc.value for loc in parsed]}")
    return result


def parse_location(name: str) -> ShutterLocation:
    key = str(name).strip().upper()
    try:
        return ShutterLocation[key]
    except KeyError as exc:
        valid = ", ".join(loc.value for loc in ShutterLocation)
        raise ValueError(f"Unknown shutter location '{name}', expected one of: {valid}") from exc


def position_of(shutters: frozenset[ShutterLocation], location: ShutterLocation) -> ShutterPosition:
    return ShutterPosition.OPEN if location in shutters else ShutterPosition.CLOSED


def ordered(shutters: Iterable[ShutterLocation]) -> list[ShutterLocation]:
    """Return locations in canonical order."""
    present = set(shutters)
    return [loc for loc in ShutterLocation if loc in present]


def describe(shutters: frozenset[ShutterLocation]) -> str:
    if not shutters:
        return "<all closed>"
    return "<open: " + ", ".join(loc.value for loc in ordered(shutters)) + ">"


__all__ = [
    "ALL_CLOSED",
    "ALL_OPEN",
    "ShutterLocation",
    "ShutterPosition",
    "ShutterSide",
    "describe",
    "ordered",
    "parse_location",
    "position_of",
    "shutter_set",
]
