from __future__ import annotations

import threading

from clacks.encoding.alphabet import Alphabet
from clacks.transmission.publisher import StatePublisher
from clacks.transmission.state import EMPTY_STATE, CurrentMessage, TransmissionState


def _state(text: str) -> TransmissionState:
    message = Alphabet.default().encode(text)
    return TransmissionState(current_message=CurrentMessage.start(message), queue=())


def test_current_snapshot_starts_empty_and_is_stable() -> None:
    publisher = StatePublisher()

    assert publisher.current_snapshot() is EMPTY_STATE
    assert publisher.current_snapshot() == publisher.current_snapshot()


def test_subscriber_receives_join_snapshot_then_updates_in_order() -> None:
    publisher = StatePublisher()
    first = _state("A")
    publisher.publish(first)

    subscription = publisher.subscribe()
    second, third = _state("B"), _state("C")
    publisher.publish(second)
    publisher.publish(third)

    assert subscription.get(timeout=1) == first
    assert subscription.get(timeout=1) == second
    assert subscription.get(timeout=1) == third
    assert subscription.get(timeout=0.01) is None
    assert publisher.current_snapshot() == third


def test_every_subscriber_gets_every_snapshot() -> None:
    publisher = StatePublisher()
    subscriptions = [publisher.subscribe() for _ in range(3)]
    update = _state("X")

    publisher.publish(update)

    for subscription in subscriptions:
        assert subscription.get(timeout=1) == EMPTY_STATE
        assert subscription.get(timeout=1) == update


def test_closed_subscription_stops_receiving_and_unregisters() -> None:
    publisher = StatePublisher()
    subscription = publisher.subscribe()
    assert publisher.subscriber_count == 1

    subscription.close()
    publisher.publish(_state("A"))

    assert subscription.closed
    assert publisher.subscriber_count == 0
    assert list(subscription) == [EMPTY_STATE]


def test_context_manager_closes_subscription() -> None:
    publisher = StatePublisher()

    with publisher.subscribe() as subscription:
        assert publisher.subscriber_count == 1

    assert subscription.closed
    assert publisher.subscriber_count == 0


def test_slow_subscriber_is_dropped_without_affecting_others(caplog) -> None:
    publisher = StatePublisher(max_pending=2)
    slow = publisher.subscribe()
    fast = publisher.subscribe()
    updates = [_state("A"), _state("B"), _state("C")]

    publisher.publish(updates[0])
    assert fast.get(timeout=1) == EMPTY_STATE
    assert fast.get(timeout=1) == updates[0]
    publisher.publish(updates[1])
    assert fast.get(timeout=1) == updates[1]
    publisher.publish(updates[2])

    assert slow.closed
    assert not fast.closed
    assert publisher.subscriber_count == 1
    assert fast.get(timeout=1) == updates[2]
    assert slow.get(timeout=1) == EMPTY_STATE
    assert slow.get(timeout=1) == updates[0]
    assert slow.get(timeout=0.01) is None
    assert "Dropping subscriber" in caplog.text


def test_iteration_ends_when_closed_from_another_thread() -> None:
    publisher = StatePublisher()
    subscription = publisher.subscribe()
    received = []

    worker = threading.Thread(target=lambda: received.extend(subscription))
    worker.start()
    publisher.publish(_state("A"))
    subscription.close()
    worker.join(timeout=2)

    assert not worker.is_alive()
    assert received[0] == EMPTY_STATE
