"""Message queue, transmission state machine and snapshot publishing."""

from clacks.transmission.publisher import StatePublisher, Subscription
from clacks.transmission.queue import TransmissionQueue
from clacks.transmission.scheduler import TransmissionScheduler, TransmissionTimer
from clacks.transmission.service import TransmissionService
from clacks.transmission.state import EMPTY_STATE, CurrentMessage, TransmissionState

__all__ = [
    "CurrentMessage",
    "EMPTY_STATE",
    "StatePublisher",
    "Subscription",
    "TransmissionQueue",
    "TransmissionScheduler",
    "TransmissionService",
    "TransmissionState",
    "TransmissionTimer",
]
