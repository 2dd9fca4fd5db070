"""GSV sentence parser.

GSV (GNSS Satellites in View) describes up to four satellites per sentence.
A receiver tracking more satellites splits the list over several sentences;
``SatelliteAggregator`` reassembles them, so a parsed batch is never
published on its own.

GSV Sentence Format:
    $GPGSV,2,1,08,01,40,083,46,02,17,308,41,12,07,344,39,14,22,228,45*75
           | | |  |  |  |   |
           | | |  |  |  |   +-- SNR (dB-Hz, empty when not tracked)
           | | |  |  |  +-- Azimuth (degrees true)
           | | |  |  +-- Elevation (degrees)
           | | |  +-- PRN (the 4-field group repeats up to 4 times)
           | | +-- Satellites in view
           | +-- Message number (1-based)
           +-- Total number of messages in this cycle

NMEA 4.10 receivers append a signal ID after the last group; it is ignored.
"""

import logging

from gpsmqtt.nmea.fields import constellation_for_talker, parse_int_field
from gpsmqtt.nmea.types import Constellation, SatelliteBatch, SatelliteRecord

logger = logging.getLogger(__name__)

# Address, total messages, message number, satellites in view
_MINIMUM_FIELD_COUNT = 4
_GROUP_SIZE = 4


def _satellite_groups(fields: list[str]) -> list[list[str]]:
    """Split the satellite part of a GSV sentence into 4-field groups.

    Raises:
        ValueError: If the groups are incomplete.
    """
    remainder = len(fields) % _GROUP_SIZE
    if remainder == 1:
        fields = fields[:-1]
    elif remainder != 0:
        raise ValueError(f"Incomplete satellite group in {fields!r}")

    return [fields[i : i + _GROUP_SIZE] for i in range(0, len(fields), _GROUP_SIZE)]


def _build_satellite_record(
    group: list[str],
    constellation: Constellation,
) -> SatelliteRecord | None:
    prn = parse_int_field(group[0])
    if prn is None:
        return None

    snr_db = parse_int_field(group[3])
    return SatelliteRecord(
        prn=prn,
        constellation=constellation,
        elevation_degrees=parse_int_field(group[1]),
        azimuth_degrees=parse_int_field(group[2]),
        snr_db=snr_db,
        in_view=snr_db is not None and snr_db > 0,
    )


def _build_satellite_batch(fields: list[str]) -> SatelliteBatch:
    total_messages = int(fields[1])
    message_number = int(fields[2])
    if not 1 <= message_number <= total_messages:
        raise ValueError(f"Message {message_number} of {total_messages}")

    constellation = constellation_for_talker(fields[0][:2])
    records = (
        _build_satellite_record(group, constellation)
        for group in _satellite_groups(fields[_MINIMUM_FIELD_COUNT:])
    )

    return SatelliteBatch(
        constellation=constellation,
        total_messages=total_messages,
        message_number=message_number,
        satellites_in_view=parse_int_field(fields[3]),
        satellites=[record for record in records if record is not None],
    )


def parse_gsv(fields: list[str]) -> SatelliteBatch | None:
    """Parse the fields of a validated GSV sentence.

    Args:
        fields: Sentence fields starting with the address field. The talker
            ID in the address selects the constellation.

    Returns:
        SatelliteBatch with the satellites of this sentence (slots with an
        empty PRN are skipped), or None if malformed.

    Example:
        >>> batch = parse_gsv("GPGSV,1,1,01,07,79,045,42".split(","))
        >>> batch.satellites[0].in_view
        True
    """
    if len(fields) < _MINIMUM_FIELD_COUNT:
        logger.debug("Dropping GSV with %d fields", len(fields))
        return None

    try:
        return _build_satellite_batch(fields)
    except (ValueError, IndexError) as error:
        logger.debug("Dropping unparsable GSV %r: %s", fields, error)
        return None
