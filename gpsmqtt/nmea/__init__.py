"""NMEA 0183 framing, validation and parsing."""

from gpsmqtt.nmea.checksum import (
    ChecksumStatus,
    SentenceValidator,
    append_checksum,
    calculate_checksum,
    validate_checksum,
    verify_checksum,
)
from gpsmqtt.nmea.dispatcher import dispatch, identify_sentence_kind, parse_sentence
from gpsmqtt.nmea.framer import SentenceFramer
from gpsmqtt.nmea.gga import parse_gga
from gpsmqtt.nmea.gll import parse_gll
from gpsmqtt.nmea.gsa import parse_gsa
from gpsmqtt.nmea.gsv import parse_gsv
from gpsmqtt.nmea.rmc import parse_rmc
from gpsmqtt.nmea.txt import parse_txt
from gpsmqtt.nmea.types import (
    ActiveSatellites,
    Constellation,
    FixDimension,
    FixQuality,
    FixRecord,
    NMEARecord,
    SatelliteBatch,
    SatelliteRecord,
    SatelliteView,
    SentenceKind,
    TextMessage,
)
from gpsmqtt.nmea.vtg import parse_vtg

__all__ = [
    "ActiveSatellites",
    "ChecksumStatus",
    "Constellation",
    "FixDimension",
    "FixQuality",
    "FixRecord",
    "NMEARecord",
    "SatelliteBatch",
    "SatelliteRecord",
    "SatelliteView",
    "SentenceFramer",
    "SentenceKind",
    "SentenceValidator",
    "TextMessage",
    "append_checksum",
    "calculate_checksum",
    "dispatch",
    "identify_sentence_kind",
    "parse_gga",
    "parse_gll",
    "parse_gsa",
    "parse_gsv",
    "parse_rmc",
    "parse_sentence",
    "parse_txt",
    "parse_vtg",
    "validate_checksum",
    "verify_checksum",
]
