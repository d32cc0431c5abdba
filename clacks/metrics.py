"""Prometheus counters and latency histograms for the tower's use cases."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import Iterator

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, generate_latest

NAMESPACE = "clacks"


class Metrics:
    """Per-handler call counts and durations, labelled by outcome.

    Each instance owns its registry so several towers (or tests) in one
    process never collide on metric names.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        self._calls = Counter(
            "application_handler_calls",
            "Number of application handler calls",
            ["handler_name", "result"],
            namespace=NAMESPACE,
            registry=self.registry,
        )
        self._durations = Histogram(
            "application_handler_call_duration_seconds",
            "Time spent in application handlers",
            ["handler_name", "result"],
            namespace=NAMESPACE,
            registry=self.registry,
        )

    @contextmanager
    def record(self, handler_name: str) -> Iterator[None]:
        """Time the block; an exception escaping it counts as an error and is re-raised."""
        started = time.perf_counter()
        result = "error"
        try:
            yield
            result = "ok"
        finally:
            self._calls.labels(handler_name=handler_name, result=result).inc()
            self._durations.labels(handler_name=handler_name, result=result).observe(
                time.perf_counter() - started
            )

    def call_count(self, handler_name: str, result: str) -> float:
        value = self.registry.get_sample_value(
            f"{NAMESPACE}_application_handler_calls_total",
            {"handler_name": handler_name, "result": result},
        )
        return value or 0.0

    def exposition(self) -> bytes:
        return generate_latest(self.registry)


__all__ = ["Metrics"]
