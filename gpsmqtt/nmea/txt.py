"""TXT sentence parser.

TXT (Text Transmission) carries free-form receiver messages. u-blox receivers
use it at startup to report the antenna supervisor state, the enabled
feature flags and the GNSS configuration stored in OTP memory.

TXT Sentence Format:
    $GNTXT,01,01,02,ANTSTATUS=OK*25
           |  |  |  |
           |  |  |  +-- Text (may itself contain commas)
           |  |  +-- Message type (00=error, 01=warning, 02=notice, 07=user)
           |  +-- Message number
           +-- Total number of messages
"""

import logging

from gpsmqtt.nmea.fields import parse_int_field, parse_string_field
from gpsmqtt.nmea.types import TextMessage

logger = logging.getLogger(__name__)

_MINIMUM_FIELD_COUNT = 5

# u-blox status prefixes and the key each one is reported under
STATUS_PREFIXES = {
    "ANTSTATUS=": "ANTSTATUS",
    "PF=": "PF",
    "GNSS OTP=": "GNSS_OTP",
}

# Emitted by u-blox firmware when its output buffer overflows
_BUFFER_WARNING = "txbuf alloc"


def parse_status_text(text: str) -> tuple[str, str] | None:
    """Recognize a u-blox status line.

    Example:
        >>> parse_status_text("ANTSTATUS=OK")
        ('ANTSTATUS', 'OK')
        >>> parse_status_text("u-blox AG - www.u-blox.com") is None
        True
    """
    for prefix, key in STATUS_PREFIXES.items():
        if text.startswith(prefix):
            return key, text[len(prefix) :]
    return None


def is_buffer_warning(message: TextMessage) -> bool:
    """True for the transmit-buffer warning, which is never published."""
    return _BUFFER_WARNING in message.text


def _build_text_message(fields: list[str]) -> TextMessage:
    text = ",".join(fields[4:])
    return TextMessage(
        total_messages=parse_int_field(fields[1]),
        message_number=parse_int_field(fields[2]),
        message_type=parse_string_field(fields[3]),
        text=text,
        status=parse_status_text(text),
    )


def parse_txt(fields: list[str]) -> TextMessage | None:
    """Parse the fields of a validated TXT sentence.

    Returns:
        TextMessage with the text kept verbatim, or None if malformed.
    """
    if len(fields) < _MINIMUM_FIELD_COUNT:
        logger.debug("Dropping TXT with %d fields", len(fields))
        return None

    try:
        return _build_text_message(fields)
    except (ValueError, IndexError) as error:
        logger.debug("Dropping unparsable TXT %r: %s", fields, error)
        return None
