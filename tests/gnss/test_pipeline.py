"""End-to-end tests from receiver bytes to publications."""

import pytest

from gpsmqtt.gnss import NMEAPipeline
from gpsmqtt.nmea import append_checksum

GGA = "$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47"
RMC = "$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A"
GSV_1_OF_2 = "$GPGSV,2,1,08,01,40,083,46,02,17,308,41,12,07,344,39,14,22,228,45*75"
GSV_2_OF_2 = append_checksum("GPGSV,2,2,08,15,10,020,30,17,55,110,44,22,33,250,,30,65,300,48")


def _wire(*sentences: str) -> bytes:
    return b"".join(sentence.encode() + b"\r\n" for sentence in sentences)


def _topics(publications):
    return [topic for topic, _ in publications]


class TestPipeline:
    def test_gga_publications(self):
        publications = dict(NMEAPipeline().feed(_wire(GGA)))
        assert float(publications["LAT"]) == pytest.approx(48.1173, rel=1e-6)
        assert float(publications["LNG"]) == pytest.approx(11.516667, rel=1e-6)
        assert publications["ALT"] == "545.4"
        assert publications["QTY"] == "1"
        assert publications["TME"] == "12:35:19"

    def test_rmc_publications(self):
        publications = dict(NMEAPipeline().feed(_wire(RMC)))
        assert publications["DTE"] == "23.03.2094"
        assert publications["SPD_KTS"] == "22.4"
        assert float(publications["SPD_KPH"]) == pytest.approx(41.485, abs=1e-3)

    def test_void_rmc_withholds_position_and_velocity(self):
        void = append_checksum("GPRMC,123519,V,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W")
        topics = _topics(NMEAPipeline().feed(_wire(void)))
        assert topics == ["TME", "DTE"]

    def test_gsv_published_only_when_cycle_completes(self):
        pipeline = NMEAPipeline()
        assert pipeline.feed(_wire(GSV_1_OF_2)) == []
        publications = pipeline.feed(_wire(GSV_2_OF_2))
        topics = _topics(publications)
        assert topics[0] == "SAT/GLOBAL/NUM"
        assert dict(publications)["SAT/GLOBAL/NUM"] == "8"
        assert topics[1:] == [
            f"SAT/VEHICLES/{prn}" for prn in (1, 2, 12, 14, 15, 17, 22, 30)
        ]
        assert "SNR: -, In View: false" in dict(publications)["SAT/VEHICLES/22"]

    def test_antenna_status_reaches_satellite_view(self):
        pipeline = NMEAPipeline()
        text = append_checksum("GNTXT,01,01,02,ANTSTATUS=OK")
        assert pipeline.feed(_wire(text)) == [
            ("TXT", "ANTSTATUS=OK"),
            ("SAT/GLOBAL/ANTSTATUS", "OK"),
        ]
        publications = dict(pipeline.feed(_wire(append_checksum("GPGSV,1,1,00"))))
        assert publications == {"SAT/GLOBAL/NUM": "0", "SAT/GLOBAL/ANTSTATUS": "OK"}

    def test_gga_without_quality_publishes_no_quality_topic(self):
        empty = append_checksum("GPGGA,123519,,,,,,,,,,,,,")
        assert dict(NMEAPipeline().feed(_wire(empty))) == {"TME": "12:35:19"}

    def test_gsa_fix_types(self):
        gsa = "$GPGSA,A,3,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*39"
        publications = NMEAPipeline().feed(_wire(gsa))
        assert publications[0] == ("SAT/VEHICLES/4/FIX_TYPE", "3D")
        assert len(publications) == 5

    def test_same_output_bytewise_and_at_once(self):
        data = _wire(GGA, GSV_1_OF_2, RMC, GSV_2_OF_2)
        expected = NMEAPipeline().feed(data)

        pipeline = NMEAPipeline()
        bytewise = []
        for index in range(len(data)):
            bytewise += pipeline.feed(data[index : index + 1])
        assert bytewise == expected
        assert len(expected) > 0


class TestPipelineStats:
    def test_counters(self):
        pipeline = NMEAPipeline()
        pipeline.feed(
            _wire(
                GGA,
                GGA[:-2] + "00",  # checksum mismatch
                append_checksum("GPZDA,201530.00,04,07,2002,00,00"),  # unsupported
                append_checksum("GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,5x5.4,M,46.9,M,,"),
                "$GPGLL,4916.45,N,12311.12,W,225444,A",  # no checksum
            )
        )
        stats = pipeline.stats
        assert stats.sentences == 5
        assert stats.accepted == 3
        assert stats.unverified == 1
        assert stats.rejected == 1
        assert stats.unknown == 1
        assert stats.parse_failures == 1
        assert stats.publications == 5 + 3

    def test_overflow_and_discarded_cycles(self):
        pipeline = NMEAPipeline(max_sentence_length=100)
        pipeline.feed(b"$" + b"9" * 200 + b"\r\n")
        pipeline.feed(_wire(GSV_1_OF_2, GSV_1_OF_2))
        assert pipeline.stats.overflows == 1
        assert pipeline.stats.discarded_cycles == 1

    def test_reset_drops_partial_state(self):
        pipeline = NMEAPipeline()
        pipeline.feed(_wire(GSV_1_OF_2) + b"$GPGGA,1235")
        pipeline.reset()
        assert pipeline.framer.pending == 0
        assert pipeline.feed(_wire(GSV_2_OF_2)) == []
