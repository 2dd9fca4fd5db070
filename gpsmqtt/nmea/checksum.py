"""NMEA checksum validation.

NMEA 0183 sentences use a simple XOR checksum for data integrity verification.
The checksum is calculated over all characters between '$' and '*' (exclusive),
then represented as a two-digit hexadecimal number after the '*'.

Example sentence structure:
    $GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47
    ^                         checksum content                    ^^
    start                                                      checksum (0x47)

The checksum field is optional in NMEA 0183. Sentences without one cannot be
verified; ``SentenceValidator`` lets them through and counts them separately.
"""

import logging
import string
from enum import Enum

logger = logging.getLogger(__name__)


class ChecksumStatus(Enum):
    """Outcome of checking one sentence."""

    VALID = "valid"
    MISMATCH = "mismatch"
    MISSING = "missing"
    MALFORMED = "malformed"


def _extract_checksum_parts(sentence: str) -> tuple[str, str | None] | None:
    """Extract the payload content and provided checksum from an NMEA sentence.

    NMEA sentences follow the format: $<content>[*<checksum>]
    The checksum delimiter is the LAST '*' in the sentence, so a corrupted
    body character that happens to become '*' still ends up inside the
    checksummed content.

    Returns:
        ``(content, checksum_hex)``, ``(content, None)`` when the sentence has
        no checksum field, or None if the sentence does not start with '$'.

    Example:
        >>> _extract_checksum_parts("$GNGGA,123519*7F")
        ('GNGGA,123519', '7F')
        >>> _extract_checksum_parts("$GNGLL,4916.45,N")
        ('GNGLL,4916.45,N', None)
    """
    if not sentence.startswith("$"):
        return None

    end = sentence.rfind("*")
    if end == -1:
        return sentence[1:], None

    return sentence[1:end], sentence[end + 1 :]


def calculate_checksum(content: str) -> int:
    """Calculate the XOR checksum of a content string.

    The NMEA checksum algorithm XORs the ASCII value of each character
    in the content.

    Args:
        content: The string between '$' and '*' (exclusive)

    Returns:
        Integer checksum value (0-255)
    """
    result = 0
    for character in content:
        result ^= ord(character)
    return result


def append_checksum(content: str) -> str:
    """Build a complete sentence from its content.

    Example:
        >>> append_checksum("GPGSV,1,1,00")
        '$GPGSV,1,1,00*79'
    """
    return f"${content}*{calculate_checksum(content):02X}"


def _classify(sentence: str) -> tuple[ChecksumStatus, str | None]:
    """Return the checksum status and the sentence content (None if malformed)."""
    parts = _extract_checksum_parts(sentence)
    if parts is None:
        return ChecksumStatus.MALFORMED, None

    content, provided = parts
    if provided is None:
        return ChecksumStatus.MISSING, content

    if len(provided) != 2 or not all(c in string.hexdigits for c in provided):
        return ChecksumStatus.MALFORMED, content
    expected = int(provided, 16)

    if calculate_checksum(content) != expected:
        return ChecksumStatus.MISMATCH, content
    return ChecksumStatus.VALID, content


def verify_checksum(sentence: str) -> ChecksumStatus:
    """Classify the checksum of an NMEA sentence.

    Args:
        sentence: NMEA sentence, with or without trailing whitespace.

    Returns:
        VALID if the provided checksum matches (case-insensitive hex),
        MISMATCH if it does not, MISSING if the sentence has no checksum
        field, MALFORMED if the sentence lacks '$' or the checksum is not
        exactly two hex digits.
    """
    status, _ = _classify(sentence.strip())
    return status


def validate_checksum(sentence: str) -> bool:
    """Validate the checksum of an NMEA sentence.

    Strict variant: a sentence without a checksum is not valid here.

    Example:
        >>> validate_checksum("$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47")
        True
        >>> validate_checksum("$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*FF")
        False
    """
    return verify_checksum(sentence) is ChecksumStatus.VALID


class SentenceValidator:
    """Checks framed sentences and keeps diagnostic counters.

    Sentences with a matching checksum are accepted. Sentences without a
    checksum field are passed through as unverified. Everything else is
    rejected. ``check`` never raises, so a corrupted sentence cannot stop
    the read loop.
    """

    def __init__(self) -> None:
        self.accepted = 0
        self.unverified = 0
        self.rejected = 0

    def check(self, sentence: str) -> str | None:
        """Return the sentence content between '$' and '*', or None if rejected."""
        sentence = sentence.strip()
        status, content = _classify(sentence)

        if status is ChecksumStatus.VALID:
            self.accepted += 1
        elif status is ChecksumStatus.MISSING:
            self.unverified += 1
        else:
            self.rejected += 1
            logger.debug("Dropping sentence (%s checksum): %r", status.value, sentence)
            return None

        return content
