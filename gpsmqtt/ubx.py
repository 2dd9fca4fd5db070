"""u-blox UBX command frames.

Only one command is needed: UBX-CFG-RATE, which sets how often the receiver
computes a navigation solution (and therefore how often it emits NMEA).

UBX Frame Format:
    B5 62 | class | id | length (uint16 LE) | payload | CK_A CK_B
    sync    1 byte  1 byte                    length    8-bit Fletcher over
                                              bytes     class..payload

CFG-RATE payload (6 bytes, little-endian):
    measRate  uint16  measurement period in ms (100 = 10 Hz)
    navRate   uint16  measurement cycles per navigation solution
    timeRef   uint16  0=UTC, 1=GPS time

The receiver answers with UBX-ACK-ACK or UBX-ACK-NAK. The answer is not read;
the command is sent once at startup and its effect shows up as a faster
sentence rate.
"""

import logging
import struct
from typing import Protocol

logger = logging.getLogger(__name__)

SYNC_CHARS = b"\xb5\x62"

CFG_CLASS = 0x06
CFG_RATE_ID = 0x08

TIME_REFERENCE_UTC = 0
TIME_REFERENCE_GPS = 1


class CommandPort(Protocol):
    def write(self, data: bytes) -> object: ...


def ubx_checksum(data: bytes) -> bytes:
    """8-bit Fletcher checksum over class, id, length and payload.

    Example:
        >>> ubx_checksum(bytes.fromhex("06 08 06 00 64 00 01 00 01 00"))
        b'z\\x12'
    """
    ck_a, ck_b = 0, 0
    for byte in data:
        ck_a = (ck_a + byte) & 0xFF
        ck_b = (ck_b + ck_a) & 0xFF
    return bytes([ck_a, ck_b])


def build_ubx_frame(message_class: int, message_id: int, payload: bytes = b"") -> bytes:
    """Wrap ``payload`` in a complete UBX frame with sync chars and checksum."""
    body = struct.pack("<BBH", message_class, message_id, len(payload)) + payload
    return SYNC_CHARS + body + ubx_checksum(body)


def build_rate_command(
    measurement_period_ms: int = 100,
    navigation_rate: int = 1,
    time_reference: int = TIME_REFERENCE_GPS,
) -> bytes:
    """Build a UBX-CFG-RATE frame.

    The default switches the receiver to 10 Hz:
    ``B5 62 06 08 06 00 64 00 01 00 01 00 7A 12``.

    Raises:
        ValueError: If a value does not fit its uint16 field or the period
            is zero.
    """
    if measurement_period_ms < 1:
        raise ValueError("measurement_period_ms must be positive")
    try:
        payload = struct.pack(
            "<HHH", measurement_period_ms, navigation_rate, time_reference
        )
    except struct.error as e:
        raise ValueError(f"CFG-RATE value out of range: {e}") from e
    return build_ubx_frame(CFG_CLASS, CFG_RATE_ID, payload)


def send_rate_command(port: CommandPort, measurement_period_ms: int = 100) -> bytes:
    """Write a CFG-RATE command to ``port`` once and return the frame sent.

    No acknowledgement is awaited.
    """
    frame = build_rate_command(measurement_period_ms)
    port.write(frame)
    logger.info(
        "Sent UBX-CFG-RATE (%d ms measurement period): %s",
        measurement_period_ms,
        frame.hex(" ").upper(),
    )
    return frame
