import json
import queue
from typing import Any, Iterator
from flask import Response, stream_with_context
from sitecms.extensions import db


def format_event(event: str, data: Any) -> str:
    return f"event: {event}\ndata: {json.dumps(data, separators=(',', ':'))}\n\n"


def drain_events(updates: "queue.Queue", *, event: str, keepalive: float) -> Iterator[str]:
    """
    Yield one SSE frame per queued payload, and a comment frame whenever
    nothing arrives for ``keepalive`` seconds so idle proxies keep the
    connection open. Runs until the client goes away.
    """
    while True:
        try:
            payload = updates.get(timeout=keepalive)
        except queue.Empty:
            yield ": keepalive\n\n"
            continue
        yield format_event(event, payload)


def event_stream_response(updates: "queue.Queue", *, event: str, keepalive: float, release) -> Response:
    """
    Wrap a queue of payloads in a text/event-stream response.

    ``release`` runs exactly once when the client disconnects or the
    response is closed, whether or not streaming ever started.
    """
    # Later snapshots load in the publisher's session; give the connection back
    db.session.remove()

    def generate():
        try:
            yield from drain_events(updates, event=event, keepalive=keepalive)
        finally:
            release()

    response = Response(
        stream_with_context(generate()),
        mimetype="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
    response.call_on_close(release)
    return response
