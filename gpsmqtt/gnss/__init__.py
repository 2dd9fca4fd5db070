"""GNSS module: serial reading, satellite aggregation and topic mapping."""

from gpsmqtt.gnss.pipeline import NMEAPipeline, PipelineStats
from gpsmqtt.gnss.reader import GNSSReader
from gpsmqtt.gnss.satellites import AggregatorState, SatelliteAggregator
from gpsmqtt.gnss.topics import Publication, knots_to_kilometers_per_hour, map_record

__all__ = [
    "AggregatorState",
    "GNSSReader",
    "NMEAPipeline",
    "PipelineStats",
    "Publication",
    "SatelliteAggregator",
    "knots_to_kilometers_per_hour",
    "map_record",
]
