"""Utility functions for the application."""

import datetime
import json


def to_jsonable(value):
    """Recursively convert Firestore values into JSON-friendly ones.

    Timestamps become ISO 8601 strings; everything else passes through.
    """
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, datetime.datetime):
        return value.isoformat()
    return value


def sse_message(payload, event=None):
    """Format one server-sent event carrying ``payload`` as JSON."""
    lines = []
    if event:
        lines.append(f"event: {event}")
    lines.append(f"data: {json.dumps(to_jsonable(payload))}")
    return "\n".join(lines) + "\n\n"


SSE_KEEPALIVE = ": keepalive\n\n"
