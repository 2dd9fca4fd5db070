"""GGA sentence parser.

GGA (Global Positioning System Fix Data) provides the position fix including
coordinates, altitude, fix quality, and satellite/accuracy metrics.

GGA Sentence Format:
    $GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47
           |      |        | |         | | |  |   |     | |    |
           |      |        | |         | | |  |   |     | |    +-- DGPS info (optional)
           |      |        | |         | | |  |   |     | +-- Geoid height (M=meters)
           |      |        | |         | | |  |   +-----+-- Altitude above MSL
           |      |        | |         | | |  +-- HDOP (horizontal dilution)
           |      |        | |         | | +-- Number of satellites
           |      |        | |         | +-- Fix quality (0-8)
           |      |        | +---------+-- Longitude + E/W
           |      +--------+-- Latitude + N/S
           +-- UTC time (HHMMSS.ss)

A GGA record is published whatever its quality; the quality code is part of
what gets published.
"""

import logging

from gpsmqtt.nmea.fields import (
    LATITUDE_HEMISPHERES,
    LONGITUDE_HEMISPHERES,
    convert_to_decimal_degrees,
    parse_float_field,
    parse_int_field,
    parse_time_field,
)
from gpsmqtt.nmea.types import FixQuality, FixRecord, SentenceKind

logger = logging.getLogger(__name__)

# Address field plus the 9 fields up to and including the altitude
_MINIMUM_FIELD_COUNT = 10


def _build_fix_record(fields: list[str]) -> FixRecord:
    """Construct a FixRecord from GGA fields.

    Maps NMEA field indices to FixRecord attributes:
        fields[1]  -> time (HHMMSS.ss format)
        fields[2]  -> latitude (DDMM.MMMM format)
        fields[3]  -> latitude direction (N/S)
        fields[4]  -> longitude (DDDMM.MMMM format)
        fields[5]  -> longitude direction (E/W)
        fields[6]  -> fix_quality (0-8)
        fields[7]  -> num_satellites
        fields[8]  -> HDOP (horizontal dilution of precision)
        fields[9]  -> altitude above MSL (meters)

    An empty quality field leaves both ``fix_quality`` and ``valid`` unset.
    """
    quality_code = parse_int_field(fields[6])
    fix_quality = FixQuality(quality_code) if quality_code is not None else None

    return FixRecord(
        kind=SentenceKind.GGA,
        time=parse_time_field(fields[1]),
        latitude_degrees=convert_to_decimal_degrees(
            fields[2], fields[3], LATITUDE_HEMISPHERES
        ),
        longitude_degrees=convert_to_decimal_degrees(
            fields[4], fields[5], LONGITUDE_HEMISPHERES
        ),
        fix_quality=fix_quality,
        num_satellites=parse_int_field(fields[7]),
        horizontal_dilution_of_precision=parse_float_field(fields[8]),
        altitude_meters=parse_float_field(fields[9]),
        valid=None if fix_quality is None else fix_quality > FixQuality.INVALID,
    )


def parse_gga(fields: list[str]) -> FixRecord | None:
    """Parse the fields of a validated GGA sentence.

    Args:
        fields: Comma-separated fields of the sentence content, starting with
            the address field (e.g. ``["GPGGA", "123519", ...]``).

    Returns:
        FixRecord, or None if the sentence has too few fields or any field
        fails to parse (including an unknown quality code).
    """
    if len(fields) < _MINIMUM_FIELD_COUNT:
        logger.debug("Dropping GGA with %d fields", len(fields))
        return None

    try:
        return _build_fix_record(fields)
    except (ValueError, IndexError) as error:
        logger.debug("Dropping unparsable GGA %r: %s", fields, error)
        return None
