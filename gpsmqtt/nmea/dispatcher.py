"""Route validated sentences to their parser.

The address field is the first comma-separated field of the sentence
content: two talker characters followed by three kind characters, e.g.
``GPGGA`` or ``GNRMC``. Any talker ID is accepted; only the kind selects the
parser.
"""

import logging

from gpsmqtt.nmea.checksum import SentenceValidator
from gpsmqtt.nmea.gga import parse_gga
from gpsmqtt.nmea.gll import parse_gll
from gpsmqtt.nmea.gsa import parse_gsa
from gpsmqtt.nmea.gsv import parse_gsv
from gpsmqtt.nmea.rmc import parse_rmc
from gpsmqtt.nmea.txt import parse_txt
from gpsmqtt.nmea.types import NMEARecord, SentenceKind
from gpsmqtt.nmea.vtg import parse_vtg

logger = logging.getLogger(__name__)

_ADDRESS_LENGTH = 5
_KINDS = {kind.value: kind for kind in SentenceKind if kind is not SentenceKind.UNKNOWN}


def identify_sentence_kind(address: str) -> SentenceKind:
    """Classify an address field by its last three characters.

    Example:
        >>> identify_sentence_kind("GNGGA")
        <SentenceKind.GGA: 'GGA'>
        >>> identify_sentence_kind("PUBX")
        <SentenceKind.UNKNOWN: 'Unknown'>
    """
    if len(address) != _ADDRESS_LENGTH:
        return SentenceKind.UNKNOWN
    return _KINDS.get(address[2:], SentenceKind.UNKNOWN)


def dispatch(fields: list[str]) -> NMEARecord | None:
    """Parse the fields of a validated sentence according to its kind.

    Args:
        fields: Sentence content split on commas; ``fields[0]`` is the
            address field.

    Returns:
        The parsed record, or None for unknown kinds and malformed sentences.
    """
    match identify_sentence_kind(fields[0]):
        case SentenceKind.GGA:
            return parse_gga(fields)
        case SentenceKind.RMC:
            return parse_rmc(fields)
        case SentenceKind.VTG:
            return parse_vtg(fields)
        case SentenceKind.GSA:
            return parse_gsa(fields)
        case SentenceKind.GLL:
            return parse_gll(fields)
        case SentenceKind.GSV:
            return parse_gsv(fields)
        case SentenceKind.TXT:
            return parse_txt(fields)
        case SentenceKind.UNKNOWN:
            logger.debug("Ignoring sentence with address %r", fields[0])
            return None


def parse_sentence(
    sentence: str,
    validator: SentenceValidator | None = None,
) -> NMEARecord | None:
    """Validate, split and dispatch one framed sentence.

    Args:
        sentence: A sentence starting with '$', optionally ending in ``*hh``.
        validator: Validator whose counters should record the outcome. A
            throwaway one is used if omitted.

    Returns:
        The parsed record, or None if the checksum is wrong, the kind is
        unknown or a field does not parse.

    Example:
        >>> record = parse_sentence("$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47")
        >>> record.altitude_meters
        545.4
    """
    if validator is None:
        validator = SentenceValidator()

    content = validator.check(sentence)
    if content is None:
        return None
    return dispatch(content.split(","))
