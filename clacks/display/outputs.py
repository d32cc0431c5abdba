"""Shutter output adapters and the thread that feeds them published frames."""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from clacks.encoding.frames import EndFrame, Frame
from clacks.rendering.composer import compose_frame
from clacks.rendering.emulator import save_frame
from clacks.rendering.frame_data import FrameData
from clacks.transmission.publisher import StatePublisher, Subscription
from clacks.transmission.state import TransmissionState

logger = logging.getLogger(__name__)


class ShutterDisplay(Protocol):
    def show(self, frame: Frame | None) -> None: ...

    def close(self) -> None: ...


class LoggingShutterDisplay:
    """Stand-in for real shutters: log every frame that would be shown."""

    def show(self, frame: Frame | None) -> None:
        logger.info("Setting shutter positions: %s", frame if frame is not None else "<all closed>")

    def close(self) -> None:
        return None


class EmulatorShutterDisplay:
    """Render each shown frame to a PNG that a preview page can poll."""

    def __init__(self, path: str = "emulator_output/frame.png", scale: int = 2) -> None:
        self._path = path
        self._scale = scale

    @property
    def path(self) -> str:
        return self._path

    def show(self, frame: Frame | None) -> None:
        save_frame(compose_frame(FrameData.from_frame(frame), scale=self._scale), self._path)

    def close(self) -> None:
        return None


def displayed_frame(state: TransmissionState, end_frame: EndFrame) -> Frame:
    """Frame the tower shows for a state: the current character or the END marker."""
    current = state.current_frame
    return current if current is not None else end_frame


class ShutterOutput:
    """Background consumer forwarding each newly shown frame to one display.

    A display slow enough to be dropped by the publisher is resubscribed from
    the current snapshot; only ``stop`` ends the thread.
    """

    def __init__(self, publisher: StatePublisher, display: ShutterDisplay, end_frame: EndFrame) -> None:
        self._publisher = publisher
        self._display = display
        self._end_frame = end_frame
        self._subscription: Subscription | None = None
        self._thread: threading.Thread | None = None
        self._last_frame: Frame | None = None
        self._stopped = threading.Event()
        self._lock = threading.Lock()

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stopped.clear()
        with self._lock:
            self._subscription = self._publisher.subscribe()
            subscription = self._subscription
        self._thread = threading.Thread(
            target=self._run_loop,
            args=(subscription,),
            name=f"clacks-output-{type(self._display).__name__}",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        with self._lock:
            self._stopped.set()
            subscription = self._subscription
        if subscription is not None:
            subscription.close()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    def _run_loop(self, subscription: Subscription) -> None:
        while True:
            for state in subscription:
                # A dropped subscription still holds a stale backlog.
                if subscription.closed:
                    break
                self.apply(state)
            with self._lock:
                if self._stopped.is_set():
                    break
                logger.warning(
                    "Shutter display %s fell behind, resubscribing", type(self._display).__name__
                )
                subscription = self._publisher.subscribe()
                self._subscription = subscription
        self._display.close()

    def apply(self, state: TransmissionState) -> None:
        frame = displayed_frame(state, self._end_frame)
        if frame == self._last_frame:
            return
        try:
            self._display.show(frame)
        except Exception:
            logger.exception("Shutter display %s failed to show %s", type(self._display).__name__, frame)
            return
        self._last_frame = frame


__all__ = [
    "EmulatorShutterDisplay",
    "LoggingShutterDisplay",
    "ShutterDisplay",
    "ShutterOutput",
    "displayed_frame",
]
