"""Exceptions raised by the clacks core."""

from __future__ import annotations


class ConfigurationMissing(ValueError):
    """Raised at startup when required configuration is absent or invalid."""


class SubmissionError(Exception):
    """Base class for rejected submissions; the message is shown to the submitter."""


class EmptyMessage(SubmissionError):
    def __init__(self) -> None:
        super().__init__("Message is empty")


class UnsupportedCharacter(SubmissionError):
    """Raised for the first character outside the configured alphabet."""

    def __init__(self, character: str, position: int) -> None:
        self.character = character
        self.position = position
        super().__init__(f"Unsupported character {character!r} at position {position}")


class MessageTooLong(SubmissionError):
    def __init__(self, actual: int, maximum: int) -> None:
        self.actual = actual
        self.maximum = maximum
        super().__init__(f"Message is too long: {actual} bytes, maximum is {maximum}")


class QueueFull(SubmissionError):
    def __init__(self, queue_size: int) -> None:
        self.queue_size = queue_size
        super().__init__(f"Queue is full ({queue_size} messages pending), try again later")


__all__ = [
    "ConfigurationMissing",
    "EmptyMessage",
    "MessageTooLong",
    "QueueFull",
    "SubmissionError",
    "UnsupportedCharacter",
]
