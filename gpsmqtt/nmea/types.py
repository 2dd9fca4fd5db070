"""NMEA data types for parsed sentences.

This module defines the enumerations and dataclasses produced by the
per-sentence parsers.

Design Decisions:
    1. Optional fields (float | None): NMEA fields may be empty, indicated by
       consecutive commas. Using None distinguishes "no data received" from
       "measured zero". A stationary receiver reports a speed of 0.0, which
       must still be published.

    2. One FixRecord for every position/velocity sentence: GGA, RMC, VTG and
       GLL all carry a subset of the same quantities. Each parser fills in
       what its sentence carries and leaves the rest as None, so the publish
       mapper only has to look at which fields are set.

    3. Separate valid flag: ``valid`` is the receiver's own navigation
       validity (RMC/GLL status, GGA quality), NOT parse validity. A parser
       returns None for a malformed sentence; a well-formed void fix is a
       record with ``valid=False``.
"""

import datetime
from dataclasses import dataclass, field
from enum import Enum, IntEnum


class SentenceKind(Enum):
    """Sentence formatter (the 3 characters after the talker ID)."""

    GGA = "GGA"
    RMC = "RMC"
    VTG = "VTG"
    GSA = "GSA"
    GLL = "GLL"
    GSV = "GSV"
    TXT = "TXT"
    UNKNOWN = "Unknown"


class FixQuality(IntEnum):
    """GGA fix quality indicator.

    The code itself is what gets published; the names are for readability.
    """

    INVALID = 0
    GPS = 1
    DGPS = 2
    PPS = 3
    RTK_FIXED = 4
    RTK_FLOAT = 5
    DEAD_RECKONING = 6
    MANUAL = 7
    SIMULATION = 8


class FixDimension(IntEnum):
    """GSA navigation mode (fix type)."""

    NONE = 1
    TWO_D = 2
    THREE_D = 3

    @property
    def label(self) -> str:
        return _FIX_DIMENSION_LABELS[self]


_FIX_DIMENSION_LABELS = {
    FixDimension.NONE: "Not Available",
    FixDimension.TWO_D: "2D",
    FixDimension.THREE_D: "3D",
}


class Constellation(Enum):
    """Satellite system a GSV sentence reports on, keyed off the talker ID."""

    GPS = "GPS"
    GLONASS = "GLONASS"
    GALILEO = "Galileo"
    BEIDOU = "BeiDou"
    UNKNOWN = "Unknown"


@dataclass
class FixRecord:
    """Position, time and velocity fields from one GGA, RMC, VTG or GLL sentence.

    Attributes:
        kind: Sentence the record was parsed from. The publish mapper uses it
            to pick the topic namespace (GLL has its own).

        time: UTC time of the fix. None if the field was empty.

        date: UTC date (RMC only). None if absent.

        latitude_degrees: Latitude in decimal degrees, positive=North.
            Range: -90.0 to +90.0.

        longitude_degrees: Longitude in decimal degrees, positive=East.
            Range: -180.0 to +180.0.

        altitude_meters: Altitude above mean sea level (GGA only).

        course_degrees: Course over ground relative to true north
            (RMC, VTG). Usually empty while stationary.

        speed_knots: Ground speed in knots (RMC, VTG).

        speed_kilometers_per_hour: Ground speed in km/h (VTG only; RMC
            reports knots and the mapper converts).

        fix_quality: GGA quality indicator.

        num_satellites: Satellites used in the GGA solution.

        horizontal_dilution_of_precision: GGA HDOP.

        valid: Receiver validity flag. RMC/GLL: status ``A`` is True,
            ``V`` is False. GGA: quality > 0, or None when the quality
            field is empty. VTG: None (VTG carries no
            status in NMEA 2.x).

    Example:
        >>> record = parse_sentence("$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A")
        >>> record.speed_knots
        22.4
        >>> record.valid
        True
    """

    kind: SentenceKind
    time: datetime.time | None = None
    date: datetime.date | None = None
    latitude_degrees: float | None = None
    longitude_degrees: float | None = None
    altitude_meters: float | None = None
    course_degrees: float | None = None
    speed_knots: float | None = None
    speed_kilometers_per_hour: float | None = None
    fix_quality: FixQuality | None = None
    num_satellites: int | None = None
    horizontal_dilution_of_precision: float | None = None
    valid: bool | None = None


@dataclass
class ActiveSatellites:
    """Parsed GSA (DOP and active satellites) sentence.

    Attributes:
        selection_mode: ``M`` (manual) or ``A`` (automatic 2D/3D switching).
        fix_dimension: No fix, 2D or 3D.
        prns: PRNs of the satellites used in the solution, in sentence order.
        position_dop: PDOP, None if empty.
        horizontal_dop: HDOP, None if empty.
        vertical_dop: VDOP, None if empty.
    """

    selection_mode: str | None
    fix_dimension: FixDimension
    prns: tuple[int, ...]
    position_dop: float | None
    horizontal_dop: float | None
    vertical_dop: float | None


@dataclass
class SatelliteRecord:
    """One satellite entry from a GSV sentence."""

    prn: int
    constellation: Constellation
    elevation_degrees: int | None
    azimuth_degrees: int | None
    snr_db: int | None
    in_view: bool


@dataclass
class SatelliteBatch:
    """One GSV sentence: a slice of a multi-sentence satellites-in-view cycle.

    Attributes:
        constellation: System derived from the talker ID.
        total_messages: Number of GSV sentences in this cycle.
        message_number: 1-based position of this sentence in the cycle.
        satellites_in_view: Total satellites in view for the whole cycle.
        satellites: Up to four satellite entries.
    """

    constellation: Constellation
    total_messages: int
    message_number: int
    satellites_in_view: int | None
    satellites: list[SatelliteRecord] = field(default_factory=list)


@dataclass
class SatelliteView:
    """Satellites in view, accumulated over one complete GSV cycle.

    Satellites are keyed by PRN, so a PRN appears at most once. The receiver
    status fields come from the most recent u-blox TXT status messages and are
    None until one has been seen.
    """

    satellites_in_view: int | None
    satellites: dict[int, SatelliteRecord] = field(default_factory=dict)
    antenna_status: str | None = None
    feature_flags: str | None = None
    gnss_config: str | None = None


@dataclass
class TextMessage:
    """Parsed TXT (text transmission) sentence.

    Attributes:
        total_messages: Number of TXT sentences in this group.
        message_number: Position of this sentence in the group.
        message_type: 00=error, 01=warning, 02=notice, 07=user.
        text: The text, verbatim.
        status: ``(key, value)`` for u-blox status lines such as
            ``ANTSTATUS=OK``; None for any other text.
    """

    total_messages: int | None
    message_number: int | None
    message_type: str | None
    text: str
    status: tuple[str, str] | None = None


# Anything a sentence parser can return
NMEARecord = FixRecord | ActiveSatellites | SatelliteBatch | TextMessage
