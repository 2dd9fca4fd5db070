"""NMEA field parsing utilities.

This module provides utilities for parsing individual fields from NMEA sentences.
NMEA fields are comma-separated and may be empty (consecutive commas indicate
missing data). These utilities return None for empty fields, allowing callers
to distinguish "no data" from "zero value".

A non-empty field that does not parse raises ``ValueError``. The sentence
parsers catch it at their boundary and drop the whole sentence, so a single
corrupted field never produces a half-filled record.
"""

import datetime

from gpsmqtt.nmea.types import Constellation

# Talker IDs for multi-constellation GNSS receivers.
# Each 2-character prefix identifies the satellite system:
#   GP = GPS (USA)
#   GL = GLONASS (Russia)
#   GA = Galileo (Europe)
#   GB = BeiDou (China), BD on older receivers
#   GN = Multi-GNSS (combined solution)
#   GQ = QZSS (Japan)
TALKER_CONSTELLATIONS = {
    "GP": Constellation.GPS,
    "GL": Constellation.GLONASS,
    "GA": Constellation.GALILEO,
    "GB": Constellation.BEIDOU,
    "BD": Constellation.BEIDOU,
}

_NEGATIVE_HEMISPHERES = ("S", "W")
LATITUDE_HEMISPHERES = ("N", "S")
LONGITUDE_HEMISPHERES = ("E", "W")


def constellation_for_talker(talker_id: str) -> Constellation:
    """Map a 2-character talker ID to its satellite system."""
    return TALKER_CONSTELLATIONS.get(talker_id, Constellation.UNKNOWN)


def parse_float_field(value: str) -> float | None:
    """Parse a string field to float, returning None if empty.

    Args:
        value: String value from an NMEA field

    Returns:
        Parsed float value, or None if the field is empty

    Raises:
        ValueError: If the field is not empty and not a number.

    Example:
        >>> parse_float_field("545.4")
        545.4
        >>> parse_float_field("")  # empty field
        None
    """
    if not value:
        return None
    return float(value)


def parse_int_field(value: str) -> int | None:
    """Parse a string field to int, returning None if empty.

    Used for satellite counts, PRNs and quality indicators.

    Raises:
        ValueError: If the field is not empty and not an integer.
    """
    if not value:
        return None
    return int(value)


def parse_string_field(value: str) -> str | None:
    """Parse a string field, returning None if empty."""
    if not value:
        return None
    return value


def apply_hemisphere(magnitude: float, hemisphere: str) -> float:
    """Apply the sign convention of a hemisphere indicator.

    North/East stay positive, South/West are negated.

    Raises:
        ValueError: If the indicator is not one of N, S, E, W.

    Example:
        >>> apply_hemisphere(11.5, "W")
        -11.5
    """
    if hemisphere not in LATITUDE_HEMISPHERES + LONGITUDE_HEMISPHERES:
        raise ValueError(f"Invalid hemisphere indicator: {hemisphere!r}")
    if hemisphere in _NEGATIVE_HEMISPHERES:
        return -magnitude
    return magnitude


def _parse_coordinate_parts(value: str) -> tuple[int, float]:
    """Parse NMEA coordinate into degrees and minutes components.

    NMEA coordinates use DDDMM.MMMM format where:
    - DDD (or DD for latitude) = degrees
    - MM.MMMM = decimal minutes

    The decimal point position determines the split between degrees and minutes:
    the 2 digits before the decimal point are always minutes. A value without
    a decimal point is split the same way from its end.

    Example:
        >>> _parse_coordinate_parts("4807.038")  # 48° 07.038'
        (48, 7.038)
        >>> _parse_coordinate_parts("01131.000")  # 11° 31.000'
        (11, 31.0)
    """
    dot_position = value.find(".")
    if dot_position == -1:
        dot_position = len(value)
    if dot_position < 3:
        raise ValueError(f"Coordinate too short: {value!r}")

    degrees = int(value[: dot_position - 2])
    minutes = float(value[dot_position - 2 :])
    if degrees < 0 or not 0.0 <= minutes < 60.0:
        raise ValueError(f"Coordinate out of range: {value!r}")
    return degrees, minutes


def convert_to_decimal_degrees(
    value: str,
    direction: str,
    hemispheres: tuple[str, ...] = LATITUDE_HEMISPHERES + LONGITUDE_HEMISPHERES,
) -> float | None:
    """Convert NMEA coordinate (DDDMM.MMMM) to decimal degrees.

    NMEA uses degrees-minutes format with a hemisphere indicator.
    This function converts to decimal degrees with sign convention:
    - North/East = positive
    - South/West = negative

    The conversion formula is:
        decimal_degrees = degrees + (minutes / 60)

    Args:
        value: Coordinate in DDDMM.MMMM format (e.g., "4807.038")
        direction: Hemisphere indicator ("N", "S", "E", or "W")
        hemispheres: Indicators allowed for this axis. Sentence parsers pass
            ``LATITUDE_HEMISPHERES`` or ``LONGITUDE_HEMISPHERES``.

    Returns:
        Decimal degrees (positive for N/E, negative for S/W),
        or None if both fields are empty

    Raises:
        ValueError: If only one of the two fields is present, the
            indicator is not allowed for the axis, the value is not a
            coordinate, or the result is outside the valid range for
            its hemisphere (90 for N/S, 180 for E/W).

    Example:
        >>> convert_to_decimal_degrees("4807.038", "N")
        48.1173  # 48° + 7.038'/60
        >>> convert_to_decimal_degrees("01131.000", "W")
        -11.5166667  # negative for West
    """
    if not value and not direction:
        return None
    if not value or not direction:
        raise ValueError(f"Incomplete coordinate: {value!r} {direction!r}")
    if direction not in hemispheres:
        raise ValueError(f"Unexpected hemisphere {direction!r}, expected one of {hemispheres}")

    degrees, minutes = _parse_coordinate_parts(value)
    decimal_degrees = degrees + minutes / 60.0

    limit = 90.0 if direction in LATITUDE_HEMISPHERES else 180.0
    if decimal_degrees > limit:
        raise ValueError(f"Coordinate out of range: {value!r} {direction!r}")

    return apply_hemisphere(decimal_degrees, direction)


def parse_time_field(value: str) -> datetime.time | None:
    """Parse a UTC time field in HHMMSS or HHMMSS.ss format.

    Fractional seconds are kept as microseconds.

    Raises:
        ValueError: If the field is shorter than 6 characters or any
            component is out of range.

    Example:
        >>> parse_time_field("123519.50")
        datetime.time(12, 35, 19, 500000)
    """
    if not value:
        return None
    if len(value) < 6 or not value[:6].isdigit():
        raise ValueError(f"Invalid UTC time: {value!r}")

    microsecond = 0
    fraction = value[6:]
    if fraction:
        if not fraction.startswith(".") or not fraction[1:].isdigit():
            raise ValueError(f"Invalid UTC time: {value!r}")
        microsecond = int(fraction[1:7].ljust(6, "0"))

    return datetime.time(
        hour=int(value[0:2]),
        minute=int(value[2:4]),
        second=int(value[4:6]),
        microsecond=microsecond,
    )


def parse_date_field(value: str) -> datetime.date | None:
    """Parse an RMC date field in DDMMYY format.

    Two-digit years are placed in the 2000s.

    Raises:
        ValueError: If the field is not 6 digits or is not a calendar date.

    Example:
        >>> parse_date_field("230394")
        datetime.date(2094, 3, 23)
    """
    if not value:
        return None
    if len(value) != 6 or not value.isdigit():
        raise ValueError(f"Invalid date: {value!r}")

    return datetime.date(
        year=2000 + int(value[4:6]),
        month=int(value[2:4]),
        day=int(value[0:2]),
    )


def parse_status_field(value: str) -> bool | None:
    """Parse an RMC/GLL data status field: ``A`` is valid, ``V`` is void.

    Raises:
        ValueError: For any other non-empty value.
    """
    if not value:
        return None
    if value == "A":
        return True
    if value == "V":
        return False
    raise ValueError(f"Invalid status indicator: {value!r}")
