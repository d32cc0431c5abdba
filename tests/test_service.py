from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from clacks.encoding.alphabet import Alphabet
from clacks.encoding.shutters import ShutterLocation
from clacks.errors import EmptyMessage, QueueFull
from clacks.metrics import Metrics
from clacks.transmission.queue import TransmissionQueue
from clacks.transmission.service import TransmissionService


@pytest.fixture()
def alphabet() -> Alphabet:
    return Alphabet({"A": [ShutterLocation.TOP_LEFT], "B": [ShutterLocation.TOP_RIGHT]}, 4)


def test_submit_enqueues_and_notifies_scheduler(alphabet: Alphabet) -> None:
    queue = TransmissionQueue()
    scheduler = MagicMock()
    service = TransmissionService(alphabet, queue, scheduler, queue_size=3)

    message = service.submit("AB")

    assert message.text == "AB"
    assert queue.messages() == (message,)
    scheduler.notify_queue_changed.assert_called_once_with()


def test_submit_rejects_when_queue_is_full(alphabet: Alphabet) -> None:
    queue = TransmissionQueue()
    scheduler = MagicMock()
    service = TransmissionService(alphabet, queue, scheduler, queue_size=1)
    service.submit("A")

    with pytest.raises(QueueFull) as exc_info:
        service.submit("B")

    assert exc_info.value.queue_size == 1
    assert queue.peek_length() == 1
    assert scheduler.notify_queue_changed.call_count == 1


def test_rejected_submission_is_logged_and_not_announced(alphabet: Alphabet, caplog) -> None:
    caplog.set_level("INFO")
    scheduler = MagicMock()
    service = TransmissionService(alphabet, TransmissionQueue(), scheduler, queue_size=1)

    with pytest.raises(EmptyMessage):
        service.submit("")

    scheduler.notify_queue_changed.assert_not_called()
    assert "Rejected submission" in caplog.text


def test_config_reports_characters_and_length(alphabet: Alphabet) -> None:
    service = TransmissionService(alphabet, TransmissionQueue(), MagicMock(), queue_size=1)

    assert service.config() == {"supportedCharacters": ["A", "B"], "maxMessageLenInBytes": 4}
    assert service.alphabet is alphabet


def test_submissions_are_counted_by_outcome(alphabet: Alphabet) -> None:
    metrics = Metrics()
    service = TransmissionService(alphabet, TransmissionQueue(), MagicMock(), queue_size=3, metrics=metrics)

    service.submit("A")
    with pytest.raises(EmptyMessage):
        service.submit("")
    service.config()

    assert service.metrics is metrics
    assert metrics.call_count("add_message_to_queue", "ok") == 1
    assert metrics.call_count("add_message_to_queue", "error") == 1
    assert metrics.call_count("get_config", "ok") == 1
