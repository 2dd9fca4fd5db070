"""Reassemble multi-sentence GSV cycles into a satellites-in-view snapshot.

A receiver tracking more than four satellites reports them over several GSV
sentences (``1 of N`` ... ``N of N``). Publishing each sentence on its own
would make the per-satellite topics flicker, so the aggregator collects a
whole cycle and only hands out the finished ``SatelliteView``.

State machine::

    EMPTY --(message 1 of N, N > 1)--> ACCUMULATING
    ACCUMULATING --(next message k < N)--> ACCUMULATING
    ACCUMULATING --(message N of N)--> EMPTY, view returned
    EMPTY --(message 1 of 1)--> EMPTY, view returned
    any --(message 1 of N)--> starts a new cycle, partial one discarded
    any --(out-of-sequence message)--> EMPTY, partial one discarded

The u-blox status fields (antenna status, feature flags, GNSS OTP
configuration) arrive in TXT sentences rather than GSV. The latest values
are kept across cycles and attached to every completed view.
"""

import logging
from enum import Enum

from gpsmqtt.nmea.types import SatelliteBatch, SatelliteRecord, SatelliteView, TextMessage

logger = logging.getLogger(__name__)


class AggregatorState(Enum):
    EMPTY = "empty"
    ACCUMULATING = "accumulating"


class SatelliteAggregator:
    """Collects GSV batches until a cycle is complete.

    One aggregator is shared by all talkers. Multi-constellation receivers
    finish one talker's cycle before starting the next, so each talker's
    cycle completes on its own.

    Example:
        >>> aggregator = SatelliteAggregator()
        >>> aggregator.add(first_of_two) is None
        True
        >>> view = aggregator.add(second_of_two)
        >>> sorted(view.satellites)
        [1, 2, 12, 14, 15, 17, 22, 30]
    """

    def __init__(self) -> None:
        self.discarded_cycles = 0
        self._antenna_status: str | None = None
        self._feature_flags: str | None = None
        self._gnss_config: str | None = None
        self._total_messages = 0
        self._next_message = 0
        self._satellites_in_view: int | None = None
        self._satellites: dict[int, SatelliteRecord] = {}

    @property
    def state(self) -> AggregatorState:
        if self._next_message == 0:
            return AggregatorState.EMPTY
        return AggregatorState.ACCUMULATING

    def reset(self) -> None:
        """Drop any partially collected cycle."""
        self._total_messages = 0
        self._next_message = 0
        self._satellites_in_view = None
        self._satellites = {}

    def _discard(self, reason: str) -> None:
        if self.state is AggregatorState.ACCUMULATING:
            self.discarded_cycles += 1
            logger.debug(
                "Discarding partial GSV cycle (%d of %d received): %s",
                self._next_message - 1,
                self._total_messages,
                reason,
            )
        self.reset()

    def add(self, batch: SatelliteBatch) -> SatelliteView | None:
        """Add one GSV batch.

        Returns:
            The completed SatelliteView when ``batch`` is the last message of
            its cycle, otherwise None.
        """
        if batch.message_number == 1:
            self._discard("new cycle started")
            self._total_messages = batch.total_messages
            self._next_message = 1
        elif (
            batch.message_number != self._next_message
            or batch.total_messages != self._total_messages
        ):
            self._discard(
                f"got message {batch.message_number} of {batch.total_messages}"
            )
            return None

        if batch.satellites_in_view is not None:
            self._satellites_in_view = batch.satellites_in_view
        for satellite in batch.satellites:
            self._satellites[satellite.prn] = satellite

        if batch.message_number < batch.total_messages:
            self._next_message += 1
            return None

        view = SatelliteView(
            satellites_in_view=self._satellites_in_view,
            satellites=self._satellites,
            antenna_status=self._antenna_status,
            feature_flags=self._feature_flags,
            gnss_config=self._gnss_config,
        )
        self.reset()
        return view

    def update_status(self, message: TextMessage) -> None:
        """Record a u-blox status value from a TXT message, if it carries one."""
        if message.status is None:
            return

        key, value = message.status
        if key == "ANTSTATUS":
            self._antenna_status = value
        elif key == "PF":
            self._feature_flags = value
        elif key == "GNSS_OTP":
            self._gnss_config = value
