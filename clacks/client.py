"""HTTP client for a running clacks tower."""

from __future__ import annotations

from typing import Any

import requests

DEFAULT_BASE_URL = "http://localhost:8080"


class ClacksClientError(Exception):
    """Raised when a tower request fails or returns an unexpected response."""


class MessageRejected(ClacksClientError):
    """Raised when the tower refuses a submitted message."""

    def __init__(self, reason: str, status_code: int) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code

    @property
    def queue_full(self) -> bool:
        return self.status_code == 429


class ClacksClient:
    """Thin wrapper around the tower HTTP API using requests."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout_seconds: float = 10) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    def get_config(self) -> dict[str, Any]:
        """Fetch the supported characters and maximum message length."""
        return self._get("/api/config")

    def get_state(self) -> dict[str, Any]:
        """Fetch the latest transmission state snapshot."""
        return self._get("/api/state")

    def submit_message(self, message: str) -> None:
        url = f"{self._base_url}/api/queue"
        try:
            response = requests.post(url, json={"message": message}, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise ClacksClientError(f"Tower request failed: {exc}") from exc

        if response.status_code == 204:
            return
        if response.status_code in (400, 429):
            raise MessageRejected(_error_message(response), response.status_code)
        raise ClacksClientError(f"Tower request failed: {_describe(response)}")

    def _get(self, path: str) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = requests.get(url, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise ClacksClientError(f"Tower request failed: {exc}") from exc

        if response.status_code != 200:
            raise ClacksClientError(f"Tower request failed: {_describe(response)}")

        try:
            return response.json()
        except ValueError as exc:
            raise ClacksClientError("Tower response was not valid JSON") from exc


def _describe(response: requests.Response) -> str:
    body_text = response.text.strip()
    detail = f"Status {response.status_code}"
    if body_text:
        detail = f"{detail}, Body: {body_text}"
    return detail


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or f"Status {response.status_code}"
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return _describe(response)


__all__ = ["ClacksClient", "ClacksClientError", "MessageRejected"]
