"""Manages WebSocket subscriber queues and the retained value of every topic.

Like the MQTT sink, the live view behaves as if every topic were retained: a
client that connects late first receives the latest message of each topic
and then the live stream. All state is touched on the event loop thread
only; the reader thread hands messages over with ``call_soon_threadsafe``.
"""

import asyncio

__all__ = [
    "add_subscriber",
    "broadcast_message",
    "clear_retained",
    "remove_subscriber",
]

_subscriber_queues: list[asyncio.Queue[str]] = []
_retained_messages: dict[str, str] = {}


def add_subscriber(queue: asyncio.Queue[str]) -> None:
    """Register a subscriber queue and prime it with the retained messages."""
    for message in _retained_messages.values():
        _enqueue_message(queue, message)
    _subscriber_queues.append(queue)


def remove_subscriber(queue: asyncio.Queue[str]) -> None:
    """Remove a subscriber queue from the broadcast list."""
    _subscriber_queues.remove(queue)


def clear_retained() -> None:
    """Forget the retained messages, e.g. when the bridge restarts."""
    _retained_messages.clear()


def _enqueue_message(queue: asyncio.Queue[str], message: str) -> None:
    if queue.full():
        queue.get_nowait()
    queue.put_nowait(message)


def _deliver(topic: str, message: str) -> None:
    _retained_messages[topic] = message
    for queue in list(_subscriber_queues):
        _enqueue_message(queue, message)


def broadcast_message(
    topic: str,
    message: str,
    loop: asyncio.AbstractEventLoop,
) -> None:
    """Retain ``message`` as the latest for ``topic`` and send it to every subscriber.

    Safe to call from any thread. Full queues drop their oldest message.
    """
    loop.call_soon_threadsafe(_deliver, topic, message)
