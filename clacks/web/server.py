"""HTTP port: message submission, state snapshots, a live state stream and metrics."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterator

from flask import Flask, Response, jsonify, request

from clacks.errors import QueueFull, SubmissionError
from clacks.transmission.publisher import StatePublisher, Subscription
from clacks.transmission.service import TransmissionService

logger = logging.getLogger(__name__)

KEEPALIVE_SECONDS = 15.0


def _sse_event(payload: dict[str, Any]) -> str:
    return f"data: {json.dumps(payload, separators=(',', ':'))}\n\n"


def _stream_states(subscription: Subscription, keepalive_seconds: float) -> Iterator[str]:
    try:
        while True:
            state = subscription.get(timeout=keepalive_seconds)
            if state is None:
                if subscription.closed:
                    return
                # comment line; lets the server notice clients that went away
                yield ": keepalive\n\n"
                continue
            yield _sse_event(state.to_dict())
    finally:
        subscription.close()


def create_app(
    service: TransmissionService,
    publisher: StatePublisher,
    environment: str = "development",
    keepalive_seconds: float = KEEPALIVE_SECONDS,
) -> Flask:
    """Build the Flask app serving the tower API."""
    app = Flask(__name__)

    @app.after_request
    def _cors(response: Response) -> Response:
        if environment == "development":
            response.headers["Access-Control-Allow-Origin"] = "*"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        return response

    @app.route("/healthz", methods=["GET"])
    def healthz() -> Response:
        return Response("ok", mimetype="text/plain")

    @app.route("/api/config", methods=["GET"])
    def get_config() -> Response:
        return jsonify(service.config())

    @app.route("/api/state", methods=["GET"])
    def get_state() -> Response:
        with service.metrics.record("get_state"):
            snapshot = publisher.current_snapshot()
        return jsonify(snapshot.to_dict())

    @app.route("/metrics", methods=["GET"])
    def metrics() -> Response:
        return Response(service.metrics.exposition(), content_type=service.metrics.content_type)

    @app.route("/api/state/stream", methods=["GET"])
    def stream_state() -> Response:
        subscription = publisher.subscribe()
        return Response(
            _stream_states(subscription, keepalive_seconds),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    @app.route("/api/queue", methods=["POST"])
    def post_queue() -> Any:
        body = request.get_json(silent=True)
        if not isinstance(body, dict) or not isinstance(body.get("message"), str):
            return jsonify({"message": "Request body must be a JSON object with a string 'message'"}), 400
        try:
            service.submit(body["message"])
        except QueueFull as exc:
            return jsonify({"message": str(exc)}), 429
        except SubmissionError as exc:
            return jsonify({"message": str(exc)}), 400
        return "", 204

    return app


def run_server(app: Flask, host: str, port: int) -> None:
    """Serve the app with the threaded development server until interrupted."""
    logger.info("Listening on http://%s:%d", host, port)
    app.run(host=host, port=port, threaded=True, use_reloader=False)


__all__ = ["create_app", "run_server"]
