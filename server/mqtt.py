"""MQTT publish sink built on paho-mqtt.

Every topic carries a retained message so a dashboard that subscribes late
immediately sees the last known value. A payload is only sent when it
differs from the last one sent on the same topic; at 10 Hz most values
(date, satellite descriptors, fix quality) rarely change.
"""

import logging

import paho.mqtt.client as mqtt

__all__ = ["MQTTPublisher"]

logger = logging.getLogger(__name__)

_KEEPALIVE_SECONDS = 60
_VALID_QOS = (0, 1, 2)


class MQTTPublisher:
    """Publish-if-changed wrapper around a paho ``Client``.

    ``publish`` never raises for a failed publish; failures are logged and
    the payload is retried on the next call with the same topic.

    Args:
        client: A paho client. ``connect`` builds and starts one.
        retain: Set the retain flag on every message.
    """

    def __init__(self, client: mqtt.Client, retain: bool = True) -> None:
        self._client = client
        self._retain = retain
        self._last_payloads: dict[str, str] = {}

    @classmethod
    def connect(
        cls,
        host: str,
        port: int = 1883,
        keepalive: int = _KEEPALIVE_SECONDS,
    ) -> "MQTTPublisher":
        """Connect to the broker and start paho's network thread.

        Raises:
            OSError: If the broker cannot be reached.
        """
        client = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2)
        client.enable_logger(logger)
        client.connect(host, port, keepalive=keepalive)
        client.loop_start()
        logger.info("Connected to MQTT broker at %s:%d", host, port)
        return cls(client)

    def close(self) -> None:
        """Disconnect once queued messages are out, then stop the network thread."""
        self._client.disconnect()
        self._client.loop_stop()

    def publish(self, topic: str, payload: str, qos: int = 0) -> bool:
        """Publish ``payload`` on ``topic`` if it changed since the last publish.

        Returns:
            True if the message was handed to the client, False if it was
            unchanged, invalid or the client reported an error.
        """
        if not topic or not payload:
            logger.warning("Refusing to publish empty topic or payload: %r=%r", topic, payload)
            return False
        if qos not in _VALID_QOS:
            logger.warning("Refusing to publish %s with invalid QoS %r", topic, qos)
            return False
        if self._last_payloads.get(topic) == payload:
            return False

        try:
            info = self._client.publish(topic, payload, qos=qos, retain=self._retain)
        except ValueError as e:
            logger.warning("MQTT publish to %s rejected: %s", topic, e)
            return False

        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            logger.warning(
                "MQTT publish to %s failed: %s", topic, mqtt.error_string(info.rc)
            )
            return False

        self._last_payloads[topic] = payload
        return True
