"""Tests for UBX frame construction."""

from unittest.mock import MagicMock

import pytest

from gpsmqtt.ubx import (
    CFG_CLASS,
    CFG_RATE_ID,
    SYNC_CHARS,
    TIME_REFERENCE_UTC,
    build_rate_command,
    build_ubx_frame,
    send_rate_command,
    ubx_checksum,
)

TEN_HZ = bytes.fromhex("B5 62 06 08 06 00 64 00 01 00 01 00 7A 12")


class TestChecksum:
    def test_known_value(self):
        assert ubx_checksum(bytes.fromhex("06 08 06 00 64 00 01 00 01 00")) == b"\x7a\x12"

    def test_empty(self):
        assert ubx_checksum(b"") == b"\x00\x00"

    def test_wraps_at_one_byte(self):
        assert ubx_checksum(b"\xff\x02") == b"\x01\x00"


class TestBuildFrame:
    def test_empty_payload(self):
        frame = build_ubx_frame(CFG_CLASS, CFG_RATE_ID)
        assert frame[:2] == SYNC_CHARS
        assert frame[2:6] == b"\x06\x08\x00\x00"
        assert frame[6:] == ubx_checksum(frame[2:6])

    def test_length_is_little_endian(self):
        frame = build_ubx_frame(0x01, 0x07, bytes(300))
        assert frame[4:6] == b"\x2c\x01"
        assert len(frame) == 2 + 4 + 300 + 2


class TestRateCommand:
    def test_ten_hertz_default(self):
        assert build_rate_command() == TEN_HZ

    def test_one_hertz_utc(self):
        frame = build_rate_command(1000, 1, TIME_REFERENCE_UTC)
        assert frame[6:12] == b"\xe8\x03\x01\x00\x00\x00"
        assert frame[-2:] == ubx_checksum(frame[2:-2])

    @pytest.mark.parametrize("period", [0, -100, 65536])
    def test_out_of_range_period(self, period):
        with pytest.raises(ValueError):
            build_rate_command(period)

    def test_out_of_range_navigation_rate(self):
        with pytest.raises(ValueError):
            build_rate_command(100, navigation_rate=-1)


class TestSendRateCommand:
    def test_writes_frame_once(self):
        port = MagicMock()
        assert send_rate_command(port) == TEN_HZ
        port.write.assert_called_once_with(TEN_HZ)

    def test_logs_frame(self, caplog):
        with caplog.at_level("INFO", logger="gpsmqtt.ubx"):
            send_rate_command(MagicMock(), 200)
        assert "200 ms" in caplog.text
