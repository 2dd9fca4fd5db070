"""gpsmqtt package: NMEA 0183 receiver data to MQTT topics."""

from gpsmqtt.config import AppConfig, ConfigError, load_configuration
from gpsmqtt.gnss import GNSSReader, NMEAPipeline, SatelliteAggregator
from gpsmqtt.nmea import (
    FixRecord,
    SentenceFramer,
    SentenceValidator,
    parse_sentence,
    validate_checksum,
)
from gpsmqtt.ubx import build_rate_command, send_rate_command

__all__ = [
    "AppConfig",
    "ConfigError",
    "FixRecord",
    "GNSSReader",
    "NMEAPipeline",
    "SatelliteAggregator",
    "SentenceFramer",
    "SentenceValidator",
    "build_rate_command",
    "load_configuration",
    "parse_sentence",
    "send_rate_command",
    "validate_checksum",
]
