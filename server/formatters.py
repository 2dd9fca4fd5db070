"""JSON formatting utilities for published topics."""

import json

__all__ = ["format_publication"]


def format_publication(topic: str, value: str) -> str:
    """Serialize one topic update into a JSON string for WebSocket transmission."""
    return json.dumps({
        "type": "gps",
        "topic": topic,
        "value": value,
    })
