"""Map parsed records to MQTT topic suffixes and payloads.

Every function returns an ordered list of ``(topic_suffix, payload)`` pairs.
The suffix is appended to the configured base topic by the sink; payloads
are plain strings.

Topic namespace::

    TME, DTE                  UTC time (HH:MM:SS) and date (dd.mm.YYYY)
    LAT, LNG, ALT             position in decimal degrees, altitude in meters
    CRS                       course over ground, degrees true
    SPD, SPD_KPH, SPD_KTS     ground speed in km/h (SPD, SPD_KPH) and knots
    QTY                       GGA fix quality code
    GLL_TME, GLL_LAT, GLL_LNG GLL time and position
    SAT/GLOBAL/...            satellites in view and receiver status
    SAT/VEHICLES/{PRN}[/...]  per-satellite descriptor and fix type
    TXT                       receiver text messages
"""

import datetime

from gpsmqtt.nmea.txt import is_buffer_warning
from gpsmqtt.nmea.types import (
    ActiveSatellites,
    FixRecord,
    NMEARecord,
    SatelliteRecord,
    SatelliteView,
    SentenceKind,
    TextMessage,
)

Publication = tuple[str, str]

KNOTS_TO_KILOMETERS_PER_HOUR = 1.852

_SPEED_DECIMALS = 3
_MISSING = "-"


def knots_to_kilometers_per_hour(knots: float) -> float:
    """Convert a speed in knots to km/h.

    Example:
        >>> knots_to_kilometers_per_hour(10.0)
        18.52
    """
    return knots * KNOTS_TO_KILOMETERS_PER_HOUR


def format_time(value: datetime.time) -> str:
    return value.strftime("%H:%M:%S")


def format_date(value: datetime.date) -> str:
    return value.strftime("%d.%m.%Y")


def _optional(topic: str, value: object) -> list[Publication]:
    if value is None:
        return []
    return [(topic, str(value))]


def _speed_publications(record: FixRecord) -> list[Publication]:
    """SPD, SPD_KTS and SPD_KPH for a record, deriving km/h from knots if needed."""
    kilometers_per_hour = record.speed_kilometers_per_hour
    if kilometers_per_hour is None and record.speed_knots is not None:
        kilometers_per_hour = round(
            knots_to_kilometers_per_hour(record.speed_knots), _SPEED_DECIMALS
        )

    return (
        _optional("SPD", kilometers_per_hour)
        + _optional("SPD_KTS", record.speed_knots)
        + _optional("SPD_KPH", kilometers_per_hour)
    )


def _time_publication(topic: str, record: FixRecord) -> list[Publication]:
    if record.time is None:
        return []
    return [(topic, format_time(record.time))]


def map_fix_record(record: FixRecord) -> list[Publication]:
    """Publications for a GGA, RMC, VTG or GLL record.

    A void RMC fix still publishes its time and date, but not its position,
    speed or course. A void GLL fix publishes only its time.
    """
    publications: list[Publication] = []

    match record.kind:
        case SentenceKind.GGA:
            publications += _time_publication("TME", record)
            publications += _optional("LAT", record.latitude_degrees)
            publications += _optional("LNG", record.longitude_degrees)
            publications += _optional("ALT", record.altitude_meters)
            if record.fix_quality is not None:
                publications.append(("QTY", str(int(record.fix_quality))))

        case SentenceKind.RMC:
            publications += _time_publication("TME", record)
            if record.date is not None:
                publications.append(("DTE", format_date(record.date)))
            if record.valid:
                publications += _optional("LAT", record.latitude_degrees)
                publications += _optional("LNG", record.longitude_degrees)
                publications += _speed_publications(record)
                publications += _optional("CRS", record.course_degrees)

        case SentenceKind.VTG:
            publications += _optional("CRS", record.course_degrees)
            publications += _speed_publications(record)

        case SentenceKind.GLL:
            publications += _time_publication("GLL_TME", record)
            if record.valid is not False:
                publications += _optional("GLL_LAT", record.latitude_degrees)
                publications += _optional("GLL_LNG", record.longitude_degrees)

    return publications


def map_active_satellites(active: ActiveSatellites) -> list[Publication]:
    """``SAT/VEHICLES/{PRN}/FIX_TYPE`` for every satellite used in the fix."""
    label = active.fix_dimension.label
    return [(f"SAT/VEHICLES/{prn}/FIX_TYPE", label) for prn in active.prns]


def describe_satellite(satellite: SatelliteRecord) -> str:
    """Human-readable descriptor published for one satellite.

    Example:
        >>> describe_satellite(SatelliteRecord(7, Constellation.GPS, 79, 45, 42, True))
        'PRN: 7, Type: GPS, Elevation: 79, Azimuth: 45, SNR: 42, In View: true'
    """

    def show(value: int | None) -> str:
        return _MISSING if value is None else str(value)

    return (
        f"PRN: {satellite.prn}, "
        f"Type: {satellite.constellation.value}, "
        f"Elevation: {show(satellite.elevation_degrees)}, "
        f"Azimuth: {show(satellite.azimuth_degrees)}, "
        f"SNR: {show(satellite.snr_db)}, "
        f"In View: {str(satellite.in_view).lower()}"
    )


def map_satellite_view(view: SatelliteView) -> list[Publication]:
    """Publications for a completed GSV cycle.

    Order: the satellite count, the known receiver status values, then one
    descriptor per satellite in ascending PRN order.
    """
    publications: list[Publication] = []
    publications += _optional("SAT/GLOBAL/NUM", view.satellites_in_view)
    publications += _optional("SAT/GLOBAL/ANTSTATUS", view.antenna_status)
    publications += _optional("SAT/GLOBAL/PF", view.feature_flags)
    publications += _optional("SAT/GLOBAL/GNSS_OTP", view.gnss_config)

    for prn in sorted(view.satellites):
        publications.append(
            (f"SAT/VEHICLES/{prn}", describe_satellite(view.satellites[prn]))
        )
    return publications


def map_text_message(message: TextMessage) -> list[Publication]:
    """``TXT`` with the text verbatim, plus ``SAT/GLOBAL/<key>`` for status lines.

    The u-blox transmit-buffer warning produces nothing.
    """
    if is_buffer_warning(message) or not message.text:
        return []

    publications = [("TXT", message.text)]
    if message.status is not None:
        key, value = message.status
        publications += _optional(f"SAT/GLOBAL/{key}", value or None)
    return publications


def map_record(record: NMEARecord | SatelliteView | None) -> list[Publication]:
    """Publications for any record the pipeline hands out.

    A raw ``SatelliteBatch`` maps to nothing; only completed views are
    published.
    """
    match record:
        case FixRecord():
            return map_fix_record(record)
        case ActiveSatellites():
            return map_active_satellites(record)
        case SatelliteView():
            return map_satellite_view(record)
        case TextMessage():
            return map_text_message(record)
        case _:
            return []
