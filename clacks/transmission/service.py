"""Submission use case and config read-model shared by every port."""

from __future__ import annotations

import logging
import threading
from typing import Any

from clacks.encoding.alphabet import Alphabet
from clacks.encoding.frames import EncodedMessage
from clacks.errors import QueueFull, SubmissionError
from clacks.metrics import Metrics
from clacks.transmission.queue import TransmissionQueue
from clacks.transmission.scheduler import TransmissionScheduler

logger = logging.getLogger(__name__)


class TransmissionService:
    """Encodes submissions, caps queue depth and announces queue changes."""

    def __init__(
        self,
        alphabet: Alphabet,
        queue: TransmissionQueue,
        scheduler: TransmissionScheduler,
        queue_size: int,
        metrics: Metrics | None = None,
    ) -> None:
        self._alphabet = alphabet
        self._queue = queue
        self._scheduler = scheduler
        self._queue_size = queue_size
        self._metrics = metrics if metrics is not None else Metrics()
        self._submit_lock = threading.Lock()

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    def submit(self, text: str) -> EncodedMessage:
        """Accept text into the queue or raise a SubmissionError describing why not."""
        with self._metrics.record("add_message_to_queue"):
            try:
                message = self._alphabet.encode(text)
                with self._submit_lock:
                    if self._queue.peek_length() >= self._queue_size:
                        raise QueueFull(self._queue_size)
                    self._queue.enqueue(message)
            except SubmissionError as exc:
                logger.info("Rejected submission %r: %s", text, exc)
                raise

            logger.info("Accepted submission %r", message.text)
            self._scheduler.notify_queue_changed()
            return message

    def config(self) -> dict[str, Any]:
        with self._metrics.record("get_config"):
            return {
                "supportedCharacters": self._alphabet.supported_characters,
                "maxMessageLenInBytes": self._alphabet.max_message_len_bytes,
            }


__all__ = ["TransmissionService"]
