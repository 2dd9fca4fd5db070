"""Background loops moving receiver data to the publish sinks."""

import asyncio
import logging
from collections.abc import Iterable
from typing import BinaryIO, Protocol

from gpsmqtt.config import AppConfig
from gpsmqtt.gnss import GNSSReader, NMEAPipeline, PipelineStats, Publication
from gpsmqtt.ubx import send_rate_command
from server.broadcaster import broadcast_message
from server.formatters import format_publication

__all__ = ["Publisher", "publish_all", "replay_log", "run_gnss_loop"]

logger = logging.getLogger(__name__)

_RATE_COMMAND_PERIOD_MS = 100
_REPLAY_CHUNK_SIZE = 4096


class Publisher(Protocol):
    def publish(self, topic: str, payload: str, qos: int = 0) -> bool: ...


def publish_all(
    publications: Iterable[Publication],
    config: AppConfig,
    publisher: Publisher | None = None,
    loop: asyncio.AbstractEventLoop | None = None,
) -> None:
    """Send topic updates to the MQTT sink and the WebSocket live view.

    Either sink may be absent. Topic suffixes are prefixed with the
    configured base topic for MQTT; the live view uses the bare suffix.

    Args:
        publications: ``(topic_suffix, payload)`` pairs in publish order.
        config: Supplies the base topic and QoS.
        publisher: MQTT sink, or None.
        loop: Running asyncio event loop to broadcast messages on, or None.
    """
    for topic, payload in publications:
        if publisher is not None:
            publisher.publish(config.mqtt_base_topic + topic, payload, config.mqtt_qos)
        if loop is not None:
            broadcast_message(topic, format_publication(topic, payload), loop)


def run_gnss_loop(
    loop: asyncio.AbstractEventLoop | None,
    gnss: GNSSReader,
    pipeline: NMEAPipeline,
    config: AppConfig,
    publisher: Publisher | None = None,
) -> None:
    """Read the receiver continuously and publish every topic update.

    The caller owns *gnss* and must use it as an open context manager. If
    ``config.set_gps_to_10hz`` is set, the rate command is written once
    before reading starts; a failed write is logged and reading goes on at
    the receiver's current rate. The loop returns quietly after
    ``gnss.cancel()``.

    Args:
        loop: Running asyncio event loop to broadcast messages on, or None
            when there is no live view.
        gnss: An open ``GNSSReader`` instance managed by the caller.
        pipeline: Pipeline holding the framing and aggregation state.
        config: Application configuration.
        publisher: MQTT sink, or None.

    Raises:
        EOFError: If the port fails while reading.
    """
    if config.set_gps_to_10hz:
        try:
            send_rate_command(gnss, _RATE_COMMAND_PERIOD_MS)
        except EOFError as e:
            logger.error("Failed to set GPS sample rate: %s", e)

    try:
        for chunk in gnss:
            publish_all(pipeline.feed(chunk), config, publisher, loop)
    except EOFError as e:
        if not gnss.cancelled:
            raise
        logger.info("GNSS reader stopped: %s", e)
    finally:
        logger.info("Pipeline counters at exit: %s", pipeline.stats)


def replay_log(
    stream: BinaryIO,
    pipeline: NMEAPipeline,
    config: AppConfig,
    publisher: Publisher | None = None,
    loop: asyncio.AbstractEventLoop | None = None,
) -> PipelineStats:
    """Feed a recorded NMEA log through the pipeline and publish the result.

    Returns:
        The pipeline counters after the whole log has been processed.
    """
    while chunk := stream.read(_REPLAY_CHUNK_SIZE):
        publish_all(pipeline.feed(chunk), config, publisher, loop)
    # A log that does not end in a newline still has its last sentence
    publish_all(pipeline.feed(b"\n"), config, publisher, loop)
    return pipeline.stats
