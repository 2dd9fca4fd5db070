"""Command-line entry point: bridge the receiver to MQTT without the web server.

Usage::

    gps-to-mqtt [--config PATH] [--replay FILE] [--log-level LEVEL]

With ``--replay`` a recorded NMEA log is published instead of reading the
serial port, which is handy for testing dashboards away from the car.
"""

import argparse
import logging
import signal
import sys
from collections.abc import Sequence
from types import FrameType

from gpsmqtt.config import AppConfig, ConfigError, load_configuration
from gpsmqtt.gnss import GNSSReader, NMEAPipeline
from server.mqtt import MQTTPublisher
from server.sensors import replay_log, run_gnss_loop

logger = logging.getLogger(__name__)

_EXIT_CONFIG_ERROR = 1
_EXIT_MQTT_ERROR = 2
_EXIT_SERIAL_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gps-to-mqtt",
        description="Publish NMEA 0183 GPS data to MQTT topics",
    )
    parser.add_argument(
        "--config",
        help="TOML configuration file (default: search settings.toml and "
        "/usr/etc/g86-car-telemetry/gps-to-mqtt.toml)",
    )
    parser.add_argument(
        "--replay",
        metavar="FILE",
        help="Publish a recorded NMEA log instead of reading the serial port",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        type=str.upper,
    )
    return parser


def _run_serial(config: AppConfig, publisher: MQTTPublisher) -> int:
    gnss = GNSSReader(config.port_name, config.baud_rate)

    def stop(_signum: int, _frame: FrameType | None) -> None:
        gnss.cancel()

    signal.signal(signal.SIGINT, stop)
    signal.signal(signal.SIGTERM, stop)

    try:
        with gnss:
            logger.info("Reading %s at %d baud", config.port_name, config.baud_rate)
            pipeline = NMEAPipeline(config.max_sentence_length)
            run_gnss_loop(None, gnss, pipeline, config, publisher)
    except EOFError as e:
        logger.error("Serial port failed: %s", e)
        return _EXIT_SERIAL_ERROR
    return 0


def _run_replay(path: str, config: AppConfig, publisher: MQTTPublisher) -> int:
    try:
        with open(path, "rb") as stream:
            stats = replay_log(
                stream, NMEAPipeline(config.max_sentence_length), config, publisher
            )
    except OSError as e:
        logger.error("Cannot read replay file: %s", e)
        return _EXIT_CONFIG_ERROR
    logger.info("Replay finished: %s", stats)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_configuration(args.config)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return _EXIT_CONFIG_ERROR

    try:
        publisher = MQTTPublisher.connect(config.mqtt_host, config.mqtt_port)
    except OSError as e:
        logger.error(
            "MQTT connect to %s:%d failed: %s", config.mqtt_host, config.mqtt_port, e
        )
        return _EXIT_MQTT_ERROR

    try:
        if args.replay is not None:
            return _run_replay(args.replay, config, publisher)
        return _run_serial(config, publisher)
    finally:
        publisher.close()


if __name__ == "__main__":
    sys.exit(main())
