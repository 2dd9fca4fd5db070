"""Application configuration loaded from TOML files.

Example ``settings.toml``::

    port_name = "/dev/ttyACM0"
    baud_rate = 9600
    set_gps_to_10hz = true
    mqtt_host = "localhost"
    mqtt_port = 1883
    mqtt_base_topic = "/GOLF86/GPS/"

Every key is optional. When no path is given, the files in
``DEFAULT_SEARCH_PATHS`` are read in order and later files override earlier
ones, so a system-wide file can adjust a local one.
"""

import dataclasses
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from gpsmqtt.nmea.framer import DEFAULT_MAX_SENTENCE_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_PATHS = (
    Path("settings.toml"),
    Path("/usr/etc/g86-car-telemetry/gps-to-mqtt.toml"),
)


class ConfigError(Exception):
    """Raised for unreadable configuration files and invalid values."""


@dataclass(frozen=True)
class AppConfig:
    """Settings for the serial port, the receiver and the MQTT broker.

    Attributes:
        port_name: Serial device the receiver is attached to.
        baud_rate: Serial line speed.
        set_gps_to_10hz: Send UBX-CFG-RATE for a 100 ms measurement period
            at startup.
        mqtt_host: Broker host name.
        mqtt_port: Broker TCP port.
        mqtt_base_topic: Prefix prepended to every topic suffix.
        mqtt_qos: QoS level for every publish (0, 1 or 2).
        max_sentence_length: Longest line the framer accepts, in bytes.
    """

    port_name: str = "/dev/ttyACM0"
    baud_rate: int = 9600
    set_gps_to_10hz: bool = False
    mqtt_host: str = "localhost"
    mqtt_port: int = 1883
    mqtt_base_topic: str = "/GOLF86/GPS/"
    mqtt_qos: int = 0
    max_sentence_length: int = DEFAULT_MAX_SENTENCE_LENGTH

    def __post_init__(self) -> None:
        if self.baud_rate <= 0:
            raise ConfigError(f"baud_rate must be positive, got {self.baud_rate}")
        if not 0 < self.mqtt_port < 65536:
            raise ConfigError(f"mqtt_port out of range: {self.mqtt_port}")
        if self.mqtt_qos not in (0, 1, 2):
            raise ConfigError(f"mqtt_qos must be 0, 1 or 2, got {self.mqtt_qos}")
        if self.max_sentence_length <= 0:
            raise ConfigError(
                f"max_sentence_length must be positive, got {self.max_sentence_length}"
            )


_FIELD_TYPES: dict[str, type] = {
    field.name: type(field.default) for field in dataclasses.fields(AppConfig)
}


def _check_value(key: str, value: Any) -> Any:
    expected = _FIELD_TYPES[key]
    # bool is a subclass of int
    if isinstance(value, bool) != (expected is bool) or not isinstance(value, expected):
        raise ConfigError(
            f"{key} must be of type {expected.__name__}, got {type(value).__name__}"
        )
    return value


def _read_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file:
            data = tomllib.load(file)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    values = {}
    for key, value in data.items():
        if key not in _FIELD_TYPES:
            logger.warning("Unknown config key %r in %s - ignored", key, path)
            continue
        values[key] = _check_value(key, value)

    logger.info("Loaded config from %s (%d values)", path, len(values))
    return values


def load_configuration(
    path: str | Path | None = None,
    search_paths: tuple[Path, ...] = DEFAULT_SEARCH_PATHS,
) -> AppConfig:
    """Build the application configuration.

    Args:
        path: Explicit configuration file. It must exist; the search paths
            are not consulted.
        search_paths: Files read in order when ``path`` is None. Missing
            files are skipped.

    Returns:
        AppConfig with file values applied over the defaults.

    Raises:
        ConfigError: If the explicit file is missing, a file is not valid
            TOML, or a value has the wrong type or range.
    """
    values: dict[str, Any] = {}

    if path is not None:
        explicit = Path(path)
        if not explicit.is_file():
            raise ConfigError(f"Config file not found: {explicit}")
        values.update(_read_file(explicit))
    else:
        for candidate in search_paths:
            if candidate.is_file():
                values.update(_read_file(candidate))
            else:
                logger.debug("Config file not found at %s, skipping", candidate)

    return AppConfig(**values)
