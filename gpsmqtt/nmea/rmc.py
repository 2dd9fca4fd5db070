"""RMC sentence parser.

RMC (Recommended Minimum Specific GNSS Data) is the only sentence carrying
the date, and also reports time, position, speed and course.

RMC Sentence Format:
    $GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A
           |      | |        | |         | |     |     |      |     |
           |      | |        | |         | |     |     |      +-----+-- Magnetic variation
           |      | |        | |         | |     |     +-- Date (DDMMYY)
           |      | |        | |         | |     +-- Course over ground (degrees true)
           |      | |        | |         | +-- Speed over ground (knots)
           |      | |        | +---------+-- Longitude + E/W
           |      | +--------+-- Latitude + N/S
           |      +-- Status (A=valid, V=void)
           +-- UTC time (HHMMSS.ss)

A void fix (status V) is still parsed; the record carries ``valid=False`` and
the publish mapper holds back its position and velocity.
"""

import logging

from gpsmqtt.nmea.fields import (
    LATITUDE_HEMISPHERES,
    LONGITUDE_HEMISPHERES,
    convert_to_decimal_degrees,
    parse_date_field,
    parse_float_field,
    parse_status_field,
    parse_time_field,
)
from gpsmqtt.nmea.types import FixRecord, SentenceKind

logger = logging.getLogger(__name__)

# Address field through the date field
_MINIMUM_FIELD_COUNT = 10


def _build_fix_record(fields: list[str]) -> FixRecord:
    """Construct a FixRecord from RMC fields.

    Speed stays in knots; conversion to km/h happens when publishing.
    """
    return FixRecord(
        kind=SentenceKind.RMC,
        time=parse_time_field(fields[1]),
        valid=parse_status_field(fields[2]) is True,
        latitude_degrees=convert_to_decimal_degrees(
            fields[3], fields[4], LATITUDE_HEMISPHERES
        ),
        longitude_degrees=convert_to_decimal_degrees(
            fields[5], fields[6], LONGITUDE_HEMISPHERES
        ),
        speed_knots=parse_float_field(fields[7]),
        course_degrees=parse_float_field(fields[8]),
        date=parse_date_field(fields[9]),
    )


def parse_rmc(fields: list[str]) -> FixRecord | None:
    """Parse the fields of a validated RMC sentence.

    Returns:
        FixRecord, or None if the sentence is malformed. An empty status
        field is treated as void.
    """
    if len(fields) < _MINIMUM_FIELD_COUNT:
        logger.debug("Dropping RMC with %d fields", len(fields))
        return None

    try:
        return _build_fix_record(fields)
    except (ValueError, IndexError) as error:
        logger.debug("Dropping unparsable RMC %r: %s", fields, error)
        return None
