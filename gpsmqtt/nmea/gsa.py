"""GSA sentence parser.

GSA (GNSS DOP and Active Satellites) lists the satellites used in the
navigation solution along with the fix dimension and dilution of precision.

GSA Sentence Format:
    $GPGSA,A,3,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*39
           | | |                     |   |   |
           | | |                     |   |   +-- VDOP
           | | |                     |   +-- HDOP
           | | |                     +-- PDOP
           | | +-- PRNs of satellites used (12 slots, empty when unused)
           | +-- Fix type (1=none, 2=2D, 3=3D)
           +-- Selection mode (M=manual, A=automatic)
"""

import logging

from gpsmqtt.nmea.fields import parse_float_field, parse_int_field, parse_string_field
from gpsmqtt.nmea.types import ActiveSatellites, FixDimension

logger = logging.getLogger(__name__)

_PRN_SLOTS = 12
_FIRST_PRN_INDEX = 3
_PDOP_INDEX = _FIRST_PRN_INDEX + _PRN_SLOTS

# Address, mode, fix type, 12 PRN slots, PDOP, HDOP, VDOP
_MINIMUM_FIELD_COUNT = _PDOP_INDEX + 3


def _parse_prns(slots: list[str]) -> tuple[int, ...]:
    prns = (parse_int_field(slot) for slot in slots)
    return tuple(prn for prn in prns if prn is not None)


def _build_active_satellites(fields: list[str]) -> ActiveSatellites:
    dimension_code = parse_int_field(fields[2])
    fix_dimension = (
        FixDimension(dimension_code) if dimension_code is not None else FixDimension.NONE
    )

    return ActiveSatellites(
        selection_mode=parse_string_field(fields[1]),
        fix_dimension=fix_dimension,
        prns=_parse_prns(fields[_FIRST_PRN_INDEX:_PDOP_INDEX]),
        position_dop=parse_float_field(fields[_PDOP_INDEX]),
        horizontal_dop=parse_float_field(fields[_PDOP_INDEX + 1]),
        vertical_dop=parse_float_field(fields[_PDOP_INDEX + 2]),
    )


def parse_gsa(fields: list[str]) -> ActiveSatellites | None:
    """Parse the fields of a validated GSA sentence.

    NMEA 4.10 receivers append a system ID after VDOP; it is ignored.

    Returns:
        ActiveSatellites, or None if malformed or the fix type is not 1-3.
    """
    if len(fields) < _MINIMUM_FIELD_COUNT:
        logger.debug("Dropping GSA with %d fields", len(fields))
        return None

    try:
        return _build_active_satellites(fields)
    except (ValueError, IndexError) as error:
        logger.debug("Dropping unparsable GSA %r: %s", fields, error)
        return None
