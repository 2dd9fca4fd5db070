"""VTG sentence parser.

VTG (Track Made Good and Ground Speed) provides course and speed. It reports
the same quantities as RMC; whichever arrives last wins on the shared topics.

VTG Sentence Format:
    $GPVTG,054.7,T,034.4,M,005.5,N,010.2,K*48
           |     | |     | |     | |     |
           |     | |     | |     | +-----+-- Speed in km/h
           |     | |     | +-----+-- Speed in knots
           |     | +-----+-- Track (magnetic north, degrees)
           +-----+-- Track (true north, degrees)

NMEA 2.3 receivers append a mode indicator after the ``K``; it is not used.

Note: When stationary, the track angle may be empty (no heading when not moving).
"""

import logging

from gpsmqtt.nmea.fields import parse_float_field
from gpsmqtt.nmea.types import FixRecord, SentenceKind

logger = logging.getLogger(__name__)

# VTG has 9 fields in basic format, 10 with FAA mode indicator
_MINIMUM_FIELD_COUNT = 9


def _build_fix_record(fields: list[str]) -> FixRecord:
    """Construct a FixRecord from VTG fields.

    Maps NMEA field indices to FixRecord attributes:
        fields[1] -> course_degrees (heading relative to true north)
        fields[5] -> speed_knots
        fields[7] -> speed_kilometers_per_hour
    """
    return FixRecord(
        kind=SentenceKind.VTG,
        course_degrees=parse_float_field(fields[1]),
        speed_knots=parse_float_field(fields[5]),
        speed_kilometers_per_hour=parse_float_field(fields[7]),
    )


def parse_vtg(fields: list[str]) -> FixRecord | None:
    """Parse the fields of a validated VTG sentence.

    Returns:
        FixRecord with course and speed only, or None if malformed.
    """
    if len(fields) < _MINIMUM_FIELD_COUNT:
        logger.debug("Dropping VTG with %d fields", len(fields))
        return None

    try:
        return _build_fix_record(fields)
    except (ValueError, IndexError) as error:
        logger.debug("Dropping unparsable VTG %r: %s", fields, error)
        return None
