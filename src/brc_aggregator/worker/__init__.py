"""Segment aggregation workers."""

from brc_aggregator.worker.aggregate import SegmentResult, aggregate_segment, iter_segment_lines

__all__ = ["SegmentResult", "aggregate_segment", "iter_segment_lines"]
