"""FastAPI web server bridging the GPS receiver to MQTT with a live view.

Start with::

    uvicorn server.main:app --host 0.0.0.0 --port 8000

On startup the server loads the configuration (from the file named by the
``GPS_TO_MQTT_CONFIG`` environment variable, or the default search paths),
connects to the MQTT broker and starts reading the receiver in a background
thread. Every topic update is published to MQTT and also streamed to
WebSocket clients on ``ws://<host>:8000/ws`` as
``{"type": "gps", "topic": "LAT", "value": "48.1173"}``.

If the broker cannot be reached the live view keeps working without MQTT.
"""

import asyncio
import logging
import os
from collections.abc import AsyncIterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from gpsmqtt.config import AppConfig, load_configuration
from gpsmqtt.gnss import GNSSReader, NMEAPipeline
from server.broadcaster import add_subscriber, clear_retained, remove_subscriber
from server.mqtt import MQTTPublisher
from server.sensors import run_gnss_loop

logger = logging.getLogger(__name__)

CONFIG_ENVIRONMENT_VARIABLE = "GPS_TO_MQTT_CONFIG"

# Room for one full set of topics so a new client gets every retained value
_QUEUE_MAX_SIZE = 256
_TIMEOUT_SECONDS = 5.0


def _connect_publisher(config: AppConfig) -> MQTTPublisher | None:
    try:
        return MQTTPublisher.connect(config.mqtt_host, config.mqtt_port)
    except OSError as e:
        logger.error(
            "Cannot connect to MQTT broker at %s:%d, serving the live view only: %s",
            config.mqtt_host,
            config.mqtt_port,
            e,
        )
        return None


def _run_bridge(
    loop: asyncio.AbstractEventLoop,
    gnss: GNSSReader,
    config: AppConfig,
    publisher: MQTTPublisher | None,
) -> None:
    try:
        with gnss:
            pipeline = NMEAPipeline(config.max_sentence_length)
            run_gnss_loop(loop, gnss, pipeline, config, publisher)
    except EOFError as e:
        logger.error("GNSS receiver failed, live view continues without data: %s", e)


@asynccontextmanager
async def _lifespan(_application: FastAPI) -> AsyncIterator[None]:
    loop = asyncio.get_running_loop()
    config = load_configuration(os.environ.get(CONFIG_ENVIRONMENT_VARIABLE))
    publisher = _connect_publisher(config)
    gnss = GNSSReader(config.port_name, config.baud_rate)

    clear_retained()
    executor = ThreadPoolExecutor(max_workers=1)
    loop.run_in_executor(executor, _run_bridge, loop, gnss, config, publisher)
    yield
    gnss.cancel()
    executor.shutdown(wait=False)
    if publisher is not None:
        publisher.close()


app = FastAPI(lifespan=_lifespan)


async def _send_messages_until_disconnect(
    queue: asyncio.Queue[str],
    websocket: WebSocket,
) -> None:
    try:
        while True:
            message = await asyncio.wait_for(queue.get(), timeout=_TIMEOUT_SECONDS)
            await websocket.send_text(message)
    except TimeoutError:
        await websocket.close(code=1001)
    except WebSocketDisconnect:
        pass


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Stream topic updates as JSON messages to a connected WebSocket client.

    The client first receives the latest value of every topic, then each
    update as it is published. Each client gets its own bounded queue (max
    ``_QUEUE_MAX_SIZE`` messages); the oldest message is dropped when the
    queue is full so slow clients do not stall the reader thread. The
    connection closes with code 1001, and the client should reconnect, if
    no message arrives within ``_TIMEOUT_SECONDS``.

    Args:
        websocket: The incoming WebSocket connection.
    """
    await websocket.accept()
    queue: asyncio.Queue[str] = asyncio.Queue(maxsize=_QUEUE_MAX_SIZE)
    add_subscriber(queue)
    try:
        await _send_messages_until_disconnect(queue, websocket)
    finally:
        remove_subscriber(queue)
