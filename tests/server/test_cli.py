"""Tests for the command-line entry point."""

from unittest.mock import MagicMock

import pytest
import serial

import server.__main__ as cli_module
from gpsmqtt.config import ConfigError
from gpsmqtt.gnss import GNSSReader
from server.__main__ import build_parser, main
from tests.server.helpers import GGA, wire


@pytest.fixture
def cli_publisher(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    publisher = MagicMock()
    monkeypatch.setattr(
        "server.__main__.MQTTPublisher.connect", MagicMock(return_value=publisher)
    )
    return publisher


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.config is None
        assert args.replay is None
        assert args.log_level == "INFO"

    def test_log_level_is_case_insensitive(self):
        assert build_parser().parse_args(["--log-level", "debug"]).log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--log-level", "chatty"])


class TestMain:
    def test_replay(self, tmp_path, cli_publisher):
        log = tmp_path / "drive.nmea"
        log.write_bytes(wire(GGA))
        settings = tmp_path / "settings.toml"
        settings.write_text('mqtt_base_topic = "car/"\n')

        assert main(["--config", str(settings), "--replay", str(log)]) == 0
        cli_publisher.publish.assert_any_call("car/ALT", "545.4", 0)
        cli_publisher.close.assert_called_once()

    def test_missing_replay_file(self, tmp_path, cli_publisher):
        settings = tmp_path / "settings.toml"
        settings.write_text("")
        assert main(["--config", str(settings), "--replay", str(tmp_path / "x")]) == 1
        cli_publisher.close.assert_called_once()

    def test_invalid_configuration(self, monkeypatch):
        monkeypatch.setattr(
            "server.__main__.load_configuration", MagicMock(side_effect=ConfigError("bad"))
        )
        assert main([]) == 1

    def test_broker_unreachable(self, tmp_path, monkeypatch):
        settings = tmp_path / "settings.toml"
        settings.write_text("")
        monkeypatch.setattr(
            "server.__main__.MQTTPublisher.connect",
            MagicMock(side_effect=ConnectionRefusedError()),
        )
        assert main(["--config", str(settings)]) == 2

    def test_serial_port_unavailable(self, tmp_path, cli_publisher, monkeypatch):
        settings = tmp_path / "settings.toml"
        settings.write_text('port_name = "/dev/does-not-exist"\n')
        gnss = MagicMock()
        gnss.__enter__.side_effect = EOFError("Cannot open serial port")
        monkeypatch.setattr("server.__main__.GNSSReader", MagicMock(return_value=gnss))
        monkeypatch.setattr("server.__main__.signal.signal", MagicMock())
        assert main(["--config", str(settings)]) == 3
        cli_publisher.close.assert_called_once()

    def test_serial_failure_while_reading(self, tmp_path, cli_publisher, monkeypatch):
        settings = tmp_path / "settings.toml"
        settings.write_text("")
        stream = MagicMock()
        stream.read.side_effect = [
            wire(GGA),
            serial.SerialException("device reports readiness to read but returned no data"),
        ]
        monkeypatch.setattr(
            "server.__main__.GNSSReader",
            lambda port, baud_rate: GNSSReader(port, baud_rate, stream=stream),
        )
        monkeypatch.setattr("server.__main__.signal.signal", MagicMock())
        assert main(["--config", str(settings)]) == 3
        cli_publisher.publish.assert_any_call("/GOLF86/GPS/QTY", "1", 0)
        cli_publisher.close.assert_called_once()

    def test_logger_follows_module_name(self):
        assert cli_module.logger.name == "server.__main__"
