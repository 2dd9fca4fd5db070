"""Sentence framing for a raw NMEA byte stream.

Serial reads return whatever bytes happen to be in the UART buffer, so a
sentence is routinely split across two reads. ``SentenceFramer`` keeps the
unterminated tail between calls and only emits complete lines.

Framing rules:
    - The terminator is ``\\n``; a preceding ``\\r`` is removed.
    - A candidate sentence starts at the LAST '$' on the line. Bytes before it
      are the remains of a sentence that was cut off (e.g. at startup).
    - Lines without '$' are dropped.
    - Lines longer than ``max_sentence_length`` bytes are dropped whole. The
      framer skips everything up to the next terminator, so the result does
      not depend on how the input was chunked.
"""

import logging
from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)

# NMEA limits sentences to 82 characters, but u-blox TXT and proprietary
# messages can be longer. Anything beyond this is line noise.
DEFAULT_MAX_SENTENCE_LENGTH = 1024

_TERMINATOR = b"\n"


class SentenceFramer:
    """Turn successive byte chunks into candidate sentence strings.

    Example:
        >>> framer = SentenceFramer()
        >>> framer.feed(b"$GPGSV,1,1,00*79\\r\\n$GPG")
        ['$GPGSV,1,1,00*79']
        >>> framer.feed(b"LL,4916.45,N,12311.12,W,225444,A\\r\\n")
        ['$GPGLL,4916.45,N,12311.12,W,225444,A']
    """

    def __init__(self, max_sentence_length: int = DEFAULT_MAX_SENTENCE_LENGTH) -> None:
        if max_sentence_length < 1:
            raise ValueError("max_sentence_length must be positive")
        self.max_sentence_length = max_sentence_length
        self.overflows = 0
        self._buffer = bytearray()
        self._discarding = False

    @property
    def pending(self) -> int:
        """Number of buffered bytes waiting for a terminator."""
        return len(self._buffer)

    def feed(self, data: bytes) -> list[str]:
        """Buffer ``data`` and return every sentence it completes, in order."""
        sentences: list[str] = []
        start = 0
        while True:
            end = data.find(_TERMINATOR, start)
            if end == -1:
                break
            self._append(data[start:end])
            line = bytes(self._buffer)
            discarding = self._discarding
            self._buffer.clear()
            self._discarding = False
            if not discarding:
                sentence = _extract_sentence(line)
                if sentence is not None:
                    sentences.append(sentence)
            start = end + 1

        self._append(data[start:])
        return sentences

    def flush(self) -> int:
        """Discard the unterminated fragment and return how many bytes it held."""
        dropped = len(self._buffer)
        self._buffer.clear()
        self._discarding = False
        return dropped

    def frame_stream(
        self,
        read: Callable[[int], bytes],
        chunk_size: int = 256,
    ) -> Iterator[str]:
        """Yield sentences from a ``read(size) -> bytes`` callable, indefinitely.

        An empty read is treated as a timeout and simply retried; exceptions
        raised by ``read`` propagate to the caller.
        """
        while True:
            yield from self.feed(read(chunk_size))

    def _append(self, chunk: bytes) -> None:
        if self._discarding or not chunk:
            return
        if len(self._buffer) + len(chunk) > self.max_sentence_length:
            self.overflows += 1
            logger.warning(
                "Discarding line longer than %d bytes", self.max_sentence_length
            )
            self._buffer.clear()
            self._discarding = True
            return
        self._buffer.extend(chunk)


def _extract_sentence(line: bytes) -> str | None:
    """Decode one terminated line and cut it down to the sentence it carries."""
    text = line.decode("ascii", errors="replace").rstrip("\r")
    start = text.rfind("$")
    if start == -1:
        return None
    return text[start:]
