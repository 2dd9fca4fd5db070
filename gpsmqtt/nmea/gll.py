"""GLL sentence parser.

GLL (Geographic Position - Latitude/Longitude) is an independent position
report. It is published under its own ``GLL_*`` topics so consumers can
cross-check it against GGA/RMC.

GLL Sentence Format:
    $GPGLL,4916.45,N,12311.12,W,225444,A,*1D
           |       | |        | |      | |
           |       | |        | |      | +-- Mode indicator (NMEA 2.3+)
           |       | |        | |      +-- Status (A=valid, V=void)
           |       | |        | +-- UTC time (HHMMSS.ss)
           |       | +--------+-- Longitude + E/W
           +-------+-- Latitude + N/S
"""

import logging

from gpsmqtt.nmea.fields import (
    LATITUDE_HEMISPHERES,
    LONGITUDE_HEMISPHERES,
    convert_to_decimal_degrees,
    parse_status_field,
    parse_time_field,
)
from gpsmqtt.nmea.types import FixRecord, SentenceKind

logger = logging.getLogger(__name__)

# Address field through the time field; the status field was added later
_MINIMUM_FIELD_COUNT = 6


def _build_fix_record(fields: list[str]) -> FixRecord:
    status = fields[6] if len(fields) > 6 else ""
    return FixRecord(
        kind=SentenceKind.GLL,
        latitude_degrees=convert_to_decimal_degrees(
            fields[1], fields[2], LATITUDE_HEMISPHERES
        ),
        longitude_degrees=convert_to_decimal_degrees(
            fields[3], fields[4], LONGITUDE_HEMISPHERES
        ),
        time=parse_time_field(fields[5]),
        valid=parse_status_field(status),
    )


def parse_gll(fields: list[str]) -> FixRecord | None:
    """Parse the fields of a validated GLL sentence.

    Returns:
        FixRecord, or None if malformed. ``valid`` is None when the receiver
        does not send a status field.
    """
    if len(fields) < _MINIMUM_FIELD_COUNT:
        logger.debug("Dropping GLL with %d fields", len(fields))
        return None

    try:
        return _build_fix_record(fields)
    except (ValueError, IndexError) as error:
        logger.debug("Dropping unparsable GLL %r: %s", fields, error)
        return None
