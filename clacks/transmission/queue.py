"""Thread-safe FIFO of encoded messages waiting to be transmitted."""

from __future__ import annotations

from collections import deque
import threading

from clacks.encoding.frames import EncodedMessage


class TransmissionQueue:
    """Unbounded FIFO; callers that want a depth cap check ``peek_length`` first."""

    def __init__(self) -> None:
        self._messages: deque[EncodedMessage] = deque()
        self._lock = threading.Lock()

    def enqueue(self, message: EncodedMessage) -> None:
        with self._lock:
            self._messages.append(message)

    def dequeue_next(self) -> EncodedMessage | None:
        """Remove and return the oldest message, or None when empty."""
        with self._lock:
            if not self._messages:
                return None
            return self._messages.popleft()

    def peek_length(self) -> int:
        with self._lock:
            return len(self._messages)

    def messages(self) -> tuple[EncodedMessage, ...]:
        """Return the pending messages in submission order."""
        with self._lock:
            return tuple(self._messages)


__all__ = ["TransmissionQueue"]
