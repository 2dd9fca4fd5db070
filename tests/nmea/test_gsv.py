"""Tests for GSV sentence parsing."""

from gpsmqtt.nmea import Constellation, parse_gsv

GSV_FIRST = "GPGSV,2,1,08,01,40,083,46,02,17,308,41,12,07,344,39,14,22,228,45"


class TestParseGSV:
    def test_full_batch(self):
        result = parse_gsv(GSV_FIRST.split(","))
        assert result is not None
        assert result.constellation is Constellation.GPS
        assert result.total_messages == 2
        assert result.message_number == 1
        assert result.satellites_in_view == 8
        assert [satellite.prn for satellite in result.satellites] == [1, 2, 12, 14]

        first = result.satellites[0]
        assert first.elevation_degrees == 40
        assert first.azimuth_degrees == 83
        assert first.snr_db == 46
        assert first.in_view is True
        assert first.constellation is Constellation.GPS

    def test_partial_last_batch(self):
        result = parse_gsv("GLGSV,3,3,09,88,11,226,".split(","))
        assert result is not None
        assert result.constellation is Constellation.GLONASS
        [satellite] = result.satellites
        assert satellite.prn == 88
        assert satellite.snr_db is None
        assert satellite.in_view is False

    def test_zero_snr_is_not_in_view(self):
        result = parse_gsv("GAGSV,1,1,01,07,79,045,00".split(","))
        assert result is not None
        assert result.satellites[0].in_view is False

    def test_nmea_410_signal_id(self):
        result = parse_gsv("GAGSV,1,1,02,07,79,045,42,30,12,200,38,7".split(","))
        assert result is not None
        assert result.constellation is Constellation.GALILEO
        assert [satellite.prn for satellite in result.satellites] == [7, 30]

    def test_empty_slots_are_skipped(self):
        result = parse_gsv("GPGSV,1,1,01,07,79,045,42,,,,".split(","))
        assert result is not None
        assert [satellite.prn for satellite in result.satellites] == [7]

    def test_no_satellites(self):
        result = parse_gsv("GPGSV,1,1,00".split(","))
        assert result is not None
        assert result.satellites_in_view == 0
        assert result.satellites == []

    def test_unknown_talker(self):
        result = parse_gsv("GQGSV,1,1,01,193,45,120,30".split(","))
        assert result is not None
        assert result.constellation is Constellation.UNKNOWN

    def test_message_number_beyond_total_drops_sentence(self):
        assert parse_gsv("GPGSV,2,3,08,01,40,083,46".split(",")) is None

    def test_message_number_zero_drops_sentence(self):
        assert parse_gsv("GPGSV,2,0,08,01,40,083,46".split(",")) is None

    def test_incomplete_group_drops_sentence(self):
        assert parse_gsv("GPGSV,1,1,01,07,79".split(",")) is None

    def test_too_few_fields(self):
        assert parse_gsv("GPGSV,1,1".split(",")) is None
