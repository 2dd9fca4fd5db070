"""From raw receiver bytes to topic publications.

``NMEAPipeline`` chains the stages::

    bytes -> SentenceFramer -> SentenceValidator -> dispatch
          -> SatelliteAggregator (GSV only) -> topics.map_record

It performs no I/O. The caller reads bytes from the receiver and hands the
resulting publications to whatever sinks it has, which keeps the pipeline
usable both for the live serial bridge and for replaying recorded logs.
"""

import logging
from dataclasses import dataclass

from gpsmqtt.gnss.satellites import SatelliteAggregator
from gpsmqtt.gnss.topics import Publication, map_record
from gpsmqtt.nmea.checksum import SentenceValidator
from gpsmqtt.nmea.dispatcher import dispatch, identify_sentence_kind
from gpsmqtt.nmea.framer import DEFAULT_MAX_SENTENCE_LENGTH, SentenceFramer
from gpsmqtt.nmea.types import (
    NMEARecord,
    SatelliteBatch,
    SatelliteView,
    SentenceKind,
    TextMessage,
)

logger = logging.getLogger(__name__)


@dataclass
class PipelineStats:
    """Snapshot of the diagnostic counters of every stage.

    Attributes:
        sentences: Framed candidate sentences.
        accepted: Sentences with a matching checksum.
        unverified: Sentences without a checksum, passed through.
        rejected: Sentences dropped for a bad or malformed checksum.
        unknown: Sentences of a kind that is not parsed.
        parse_failures: Sentences of a known kind whose fields did not parse.
        overflows: Lines dropped for exceeding the maximum sentence length.
        discarded_cycles: Incomplete GSV cycles thrown away.
        publications: Topic/payload pairs produced.
    """

    sentences: int = 0
    accepted: int = 0
    unverified: int = 0
    rejected: int = 0
    unknown: int = 0
    parse_failures: int = 0
    overflows: int = 0
    discarded_cycles: int = 0
    publications: int = 0


class NMEAPipeline:
    """Stateful sentence processing for one receiver.

    Not thread-safe; one pipeline belongs to the thread reading the receiver.

    Args:
        max_sentence_length: Longest line the framer accepts, in bytes.

    Example:
        >>> pipeline = NMEAPipeline()
        >>> publications = pipeline.feed(b"$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47\\r\\n")
        >>> [topic for topic, _ in publications]
        ['TME', 'LAT', 'LNG', 'ALT', 'QTY']
    """

    def __init__(self, max_sentence_length: int = DEFAULT_MAX_SENTENCE_LENGTH) -> None:
        self.framer = SentenceFramer(max_sentence_length)
        self.validator = SentenceValidator()
        self.aggregator = SatelliteAggregator()
        self._sentences = 0
        self._unknown = 0
        self._parse_failures = 0
        self._publications = 0

    @property
    def stats(self) -> PipelineStats:
        return PipelineStats(
            sentences=self._sentences,
            accepted=self.validator.accepted,
            unverified=self.validator.unverified,
            rejected=self.validator.rejected,
            unknown=self._unknown,
            parse_failures=self._parse_failures,
            overflows=self.framer.overflows,
            discarded_cycles=self.aggregator.discarded_cycles,
            publications=self._publications,
        )

    def feed(self, data: bytes) -> list[Publication]:
        """Process a chunk of receiver bytes and return its publications in order."""
        publications: list[Publication] = []
        for sentence in self.framer.feed(data):
            publications += self.process_sentence(sentence)
        return publications

    def process_sentence(self, sentence: str) -> list[Publication]:
        """Process one framed sentence (starting with '$')."""
        self._sentences += 1

        content = self.validator.check(sentence)
        if content is None:
            return []

        fields = content.split(",")
        if identify_sentence_kind(fields[0]) is SentenceKind.UNKNOWN:
            self._unknown += 1
            logger.debug("Ignoring unsupported sentence %r", fields[0])
            return []

        record = dispatch(fields)
        if record is None:
            self._parse_failures += 1
            return []

        publications = map_record(self._aggregate(record))
        self._publications += len(publications)
        return publications

    def _aggregate(self, record: NMEARecord) -> NMEARecord | SatelliteView | None:
        """Route GSV batches and receiver status through the aggregator."""
        if isinstance(record, SatelliteBatch):
            return self.aggregator.add(record)
        if isinstance(record, TextMessage):
            self.aggregator.update_status(record)
        return record

    def reset(self) -> None:
        """Forget buffered bytes and any partial GSV cycle."""
        self.framer.flush()
        self.aggregator.reset()
