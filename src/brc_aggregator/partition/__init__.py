"""Input partitioning into line-aligned segments."""

from brc_aggregator.partition.segments import plan_segments, realign_boundaries
from brc_aggregator.partition.types import BUFFER_SIZE, Segment

__all__ = ["BUFFER_SIZE", "Segment", "plan_segments", "realign_boundaries"]
