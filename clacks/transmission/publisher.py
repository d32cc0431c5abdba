"""Fan-out of transmission snapshots to any number of observers."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Iterator

from clacks.transmission.state import EMPTY_STATE, TransmissionState

logger = logging.getLogger(__name__)

DEFAULT_MAX_PENDING = 64

_CLOSED = object()


class Subscription:
    """Ordered stream of snapshots for one observer.

    The first item is the snapshot that was current when the subscription
    was created; every later publish follows in order. Iterating blocks
    between publishes and stops once the subscription is closed.
    """

    def __init__(self, publisher: "StatePublisher") -> None:
        self._publisher = publisher
        self._buffer: "queue.Queue[object]" = queue.Queue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def pending(self) -> int:
        return self._buffer.qsize()

    def get(self, timeout: float | None = None) -> TransmissionState | None:
        """Return the next snapshot, or None on timeout or once closed."""
        if self._closed.is_set() and self._buffer.empty():
            return None
        try:
            item = self._buffer.get(timeout=timeout)
        except queue.Empty:
            return None
        if item is _CLOSED:
            return None
        return item  # type: ignore[return-value]

    def close(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        self._publisher._remove(self)
        self._buffer.put(_CLOSED)

    def _deliver(self, state: TransmissionState) -> None:
        self._buffer.put(state)

    def __iter__(self) -> Iterator[TransmissionState]:
        while True:
            item = self._buffer.get()
            if item is _CLOSED:
                return
            yield item  # type: ignore[misc]

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class StatePublisher:
    """Holds the authoritative snapshot and pushes every replacement to subscribers."""

    def __init__(
        self,
        initial: TransmissionState = EMPTY_STATE,
        max_pending: int = DEFAULT_MAX_PENDING,
    ) -> None:
        self._snapshot = initial
        self._max_pending = max_pending
        self._subscriptions: list[Subscription] = []
        self._lock = threading.Lock()

    def current_snapshot(self) -> TransmissionState:
        with self._lock:
            return self._snapshot

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def subscribe(self) -> Subscription:
        subscription = Subscription(self)
        with self._lock:
            subscription._deliver(self._snapshot)
            self._subscriptions.append(subscription)
        return subscription

    def publish(self, state: TransmissionState) -> None:
        """Replace the snapshot and deliver it to every live subscription."""
        dropped: list[Subscription] = []
        with self._lock:
            self._snapshot = state
            for subscription in list(self._subscriptions):
                if subscription.pending >= self._max_pending:
                    self._subscriptions.remove(subscription)
                    dropped.append(subscription)
                    continue
                subscription._deliver(state)

        for subscription in dropped:
            logger.warning("Dropping subscriber with %d undelivered snapshots", subscription.pending)
            subscription.close()

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)


__all__ = ["DEFAULT_MAX_PENDING", "StatePublisher", "Subscription"]
