"""Helper factories for server tests."""

from gpsmqtt.nmea import append_checksum

GGA = "$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47"
GGA_TOPICS = ["TME", "LAT", "LNG", "ALT", "QTY"]


def wire(*sentences: str) -> bytes:
    return b"".join(sentence.encode() + b"\r\n" for sentence in sentences)


def make_vtg(speed_knots: float, speed_kilometers_per_hour: float) -> str:
    return append_checksum(
        f"GPVTG,054.7,T,034.4,M,{speed_knots},N,{speed_kilometers_per_hour},K,A"
    )
