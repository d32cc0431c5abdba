"""Application wiring: build every tower component from an AppConfig."""

from __future__ import annotations

import logging

from flask import Flask

from clacks.config import AlphabetConfig, AppConfig, DisplayConfig
from clacks.display.hardware import ServoShutterDisplay
from clacks.display.outputs import (
    EmulatorShutterDisplay,
    LoggingShutterDisplay,
    ShutterDisplay,
    ShutterOutput,
)
from clacks.encoding.alphabet import DEFAULT_ALPHABET, DEFAULT_END, Alphabet
from clacks.encoding.frames import EncodedMessage
from clacks.errors import ConfigurationMissing, SubmissionError
from clacks.metrics import Metrics
from clacks.transmission.publisher import StatePublisher
from clacks.transmission.queue import TransmissionQueue
from clacks.transmission.scheduler import TransmissionScheduler, TransmissionTimer
from clacks.transmission.service import TransmissionService
from clacks.web.server import create_app

logger = logging.getLogger(__name__)


def build_alphabet(config: AlphabetConfig) -> Alphabet:
    end = config.end if config.end is not None else DEFAULT_END
    if config.characters is None:
        fold_case = True if config.fold_case is None else config.fold_case
        return Alphabet(DEFAULT_ALPHABET, config.max_message_len_in_bytes, end, fold_case=fold_case)
    return Alphabet(
        config.characters,
        config.max_message_len_in_bytes,
        end,
        fold_case=bool(config.fold_case),
    )


def build_display(config: DisplayConfig) -> ShutterDisplay:
    if config.output == "hardware":
        return ServoShutterDisplay(i2c_bus=config.i2c_bus, address=config.i2c_address)
    if config.output == "emulator":
        return EmulatorShutterDisplay(config.emulator_path)
    return LoggingShutterDisplay()


def encode_idle_messages(alphabet: Alphabet, messages: tuple[str, ...]) -> tuple[EncodedMessage, ...]:
    """Encode configured filler messages; any the alphabet rejects is a config error."""
    encoded = []
    for text in messages:
        try:
            encoded.append(alphabet.encode(text))
        except SubmissionError as exc:
            raise ConfigurationMissing(f"Idle message {text!r} can't be transmitted: {exc}") from exc
    return tuple(encoded)


class ClacksApp:
    """Owns the queue, scheduler, publisher and their background threads."""

    def __init__(self, config: AppConfig, display: ShutterDisplay | None = None) -> None:
        self.config = config
        self.alphabet = build_alphabet(config.alphabet)
        idle_messages = encode_idle_messages(self.alphabet, config.transmission.idle_messages)

        self.metrics = Metrics()
        self.queue = TransmissionQueue()
        self.publisher = StatePublisher()
        self.scheduler = TransmissionScheduler(
            self.queue,
            self.publisher,
            idle_messages=idle_messages,
            inject_after_idle_ticks=config.transmission.inject_after_idle_ticks if idle_messages else None,
            metrics=self.metrics,
        )
        self.service = TransmissionService(
            self.alphabet,
            self.queue,
            self.scheduler,
            queue_size=config.transmission.queue_size,
            metrics=self.metrics,
        )
        self.timer = TransmissionTimer(self.scheduler, config.transmission.tick_seconds)
        self.outputs = [
            ShutterOutput(
                self.publisher,
                display if display is not None else build_display(config.display),
                self.alphabet.end_frame,
            )
        ]

    def create_web_app(self) -> Flask:
        return create_app(self.service, self.publisher, environment=self.config.server.environment)

    def start(self) -> None:
        for output in self.outputs:
            output.start()
        self.timer.start()
        logger.info(
            "Tower started: %d characters, tick every %.2fs, queue holds %d",
            len(self.alphabet.supported_characters),
            self.config.transmission.tick_seconds,
            self.config.transmission.queue_size,
        )

    def stop(self, timeout: float | None = 5.0) -> None:
        self.timer.stop()
        self.timer.join(timeout=timeout)
        for output in self.outputs:
            output.stop()
            output.join(timeout=timeout)
        logger.info("Tower stopped")


__all__ = ["ClacksApp", "build_alphabet", "build_display", "encode_idle_messages"]
