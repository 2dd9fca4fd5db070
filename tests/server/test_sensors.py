"""Tests for the receiver loop and log replay."""

import io
import logging
from unittest.mock import MagicMock

import pytest

from gpsmqtt.config import AppConfig
from gpsmqtt.gnss import NMEAPipeline
from gpsmqtt.ubx import build_rate_command
from server.sensors import publish_all, replay_log, run_gnss_loop
from tests.server.conftest import ControlledGNSSReader
from tests.server.helpers import GGA, GGA_TOPICS, make_vtg, wire


def _published_topics(publisher: MagicMock) -> list[str]:
    return [call.args[0] for call in publisher.publish.call_args_list]


class TestPublishAll:
    def test_prefixes_base_topic_and_uses_qos(self):
        publisher = MagicMock()
        config = AppConfig(mqtt_base_topic="car/gps/", mqtt_qos=1)
        publish_all([("LAT", "48.1"), ("LNG", "11.5")], config, publisher)
        assert [call.args for call in publisher.publish.call_args_list] == [
            ("car/gps/LAT", "48.1", 1),
            ("car/gps/LNG", "11.5", 1),
        ]

    def test_without_sinks(self):
        publish_all([("LAT", "48.1")], AppConfig())

    def test_broadcasts_bare_topic(self, monkeypatch):
        broadcast = MagicMock()
        monkeypatch.setattr("server.sensors.broadcast_message", broadcast)
        loop = MagicMock()
        publish_all([("QTY", "1")], AppConfig(), loop=loop)
        broadcast.assert_called_once_with(
            "QTY", '{"type": "gps", "topic": "QTY", "value": "1"}', loop
        )


class TestRunGNSSLoop:
    def test_publishes_until_cancelled(self):
        gnss = ControlledGNSSReader()
        publisher = MagicMock()
        gnss.message_queue.put(wire(GGA))
        gnss.cancel()
        run_gnss_loop(None, gnss, NMEAPipeline(), AppConfig(), publisher)  # type: ignore[arg-type]
        assert _published_topics(publisher) == [f"/GOLF86/GPS/{t}" for t in GGA_TOPICS]
        assert gnss.written == []

    def test_sends_rate_command_first(self):
        gnss = ControlledGNSSReader()
        gnss.cancel()
        config = AppConfig(set_gps_to_10hz=True)
        run_gnss_loop(None, gnss, NMEAPipeline(), config)  # type: ignore[arg-type]
        assert gnss.written == [build_rate_command(100)]

    def test_port_failure_propagates(self):
        gnss = ControlledGNSSReader()
        publisher = MagicMock()
        gnss.message_queue.put(wire(GGA))
        gnss.message_queue.put(None)
        with pytest.raises(EOFError):
            run_gnss_loop(None, gnss, NMEAPipeline(), AppConfig(), publisher)  # type: ignore[arg-type]
        assert len(_published_topics(publisher)) == len(GGA_TOPICS)

    def test_failed_rate_command_keeps_reading(self, caplog):
        gnss = ControlledGNSSReader()
        gnss.write_error = EOFError("Serial port closed.")
        publisher = MagicMock()
        gnss.message_queue.put(wire(GGA))
        gnss.cancel()
        config = AppConfig(set_gps_to_10hz=True)
        with caplog.at_level(logging.ERROR, logger="server.sensors"):
            run_gnss_loop(None, gnss, NMEAPipeline(), config, publisher)  # type: ignore[arg-type]
        assert "Failed to set GPS sample rate" in caplog.text
        assert len(_published_topics(publisher)) == len(GGA_TOPICS)


class TestReplayLog:
    def test_replays_every_sentence(self):
        publisher = MagicMock()
        log = io.BytesIO(wire(GGA, make_vtg(5.5, 10.2)))
        stats = replay_log(log, NMEAPipeline(), AppConfig(), publisher)
        assert stats.accepted == 2
        assert len(_published_topics(publisher)) == 5 + 4

    def test_last_line_without_newline(self):
        publisher = MagicMock()
        log = io.BytesIO(wire(GGA) + make_vtg(5.5, 10.2).encode())
        stats = replay_log(log, NMEAPipeline(), AppConfig(), publisher)
        assert stats.sentences == 2

    def test_large_log_spans_chunks(self):
        log = io.BytesIO(wire(*[GGA] * 200))
        stats = replay_log(log, NMEAPipeline(), AppConfig())
        assert stats.accepted == 200
