"""Tick-driven state machine that walks the current message frame by frame."""

from __future__ import annotations

import logging
import random
import threading
from typing import Callable, Sequence

from clacks.encoding.frames import EncodedMessage
from clacks.metrics import Metrics
from clacks.transmission.publisher import StatePublisher
from clacks.transmission.queue import TransmissionQueue
from clacks.transmission.state import IDLE, TRANSMITTING, CurrentMessage, TransmissionState

logger = logging.getLogger(__name__)


class TransmissionScheduler:
    """Advances the cursor one frame per tick and publishes every change.

    Ticks and queue notifications are serialized by one lock, so snapshots
    reach the publisher complete and in the order the changes happened.
    The pending queue is only read when promoting a message.
    """

    def __init__(
        self,
        queue: TransmissionQueue,
        publisher: StatePublisher,
        idle_messages: Sequence[EncodedMessage] = (),
        inject_after_idle_ticks: int | None = None,
        choose: Callable[[Sequence[EncodedMessage]], EncodedMessage] = random.choice,
        metrics: Metrics | None = None,
    ) -> None:
        self._queue = queue
        self._publisher = publisher
        self._idle_messages = tuple(idle_messages)
        self._inject_after_idle_ticks = inject_after_idle_ticks
        self._choose = choose
        self._metrics = metrics if metrics is not None else Metrics()
        self._cursor: CurrentMessage | None = None
        self._idle_ticks = 0
        self._lock = threading.Lock()

    @property
    def state(self) -> str:
        with self._lock:
            return IDLE if self._cursor is None else TRANSMITTING

    @property
    def current_message(self) -> CurrentMessage | None:
        with self._lock:
            return self._cursor

    def tick(self) -> bool:
        """Process one tick; return True when the observable state changed."""
        with self._metrics.record("update_clacks"), self._lock:
            changed = self._advance()
            if changed:
                self._publish()
            return changed

    def notify_queue_changed(self) -> None:
        """Publish a fresh snapshot after the pending queue was modified."""
        with self._lock:
            self._publish()

    def _advance(self) -> bool:
        if self._cursor is not None:
            following = self._cursor.advance()
            if following is None:
                logger.info("Finished transmitting %r", self._cursor.text)
                self._cursor = None
                self._idle_ticks = 0
            else:
                self._cursor = following
                logger.debug("Showing %s", following.current)
            return True

        message = self._queue.dequeue_next()
        if message is None:
            self._idle_ticks += 1
            message = self._idle_message()
            if message is None:
                return False

        self._idle_ticks = 0
        self._cursor = CurrentMessage.start(message)
        logger.info("Started transmitting %r (%d pending)", message.text, self._queue.peek_length())
        return True

    def _idle_message(self) -> EncodedMessage | None:
        if not self._idle_messages or self._inject_after_idle_ticks is None:
            return None
        if self._idle_ticks < self._inject_after_idle_ticks:
            return None
        logger.info("Idle for %d ticks, injecting a filler message", self._idle_ticks)
        return self._choose(self._idle_messages)

    def _publish(self) -> None:
        self._publisher.publish(
            TransmissionState(current_message=self._cursor, queue=self._queue.messages())
        )


class TransmissionTimer:
    """Background thread that ticks the scheduler at a fixed cadence."""

    def __init__(self, scheduler: TransmissionScheduler, tick_seconds: float) -> None:
        self._scheduler = scheduler
        self._tick_seconds = tick_seconds
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the ticking thread."""
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, name="clacks-timer", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Signal the ticking thread to stop."""
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self._scheduler.tick()
            except Exception:
                logger.exception("Transmission tick failed")
            self._stop_event.wait(timeout=self._tick_seconds)


__all__ = ["TransmissionScheduler", "TransmissionTimer"]
