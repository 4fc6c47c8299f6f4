"""Folding worker accumulators into the sharded store."""

from brc_aggregator.records.types import LocalAccumulator
from brc_aggregator.store.sharded import ShardedResultStore


def merge_accumulator(store: ShardedResultStore, accumulator: LocalAccumulator) -> int:
    """
    Merge every (key, statistics) pair of a finished accumulator into the store.

    Ownership of each Statistics object passes to the store; the accumulator
    must not be used afterwards. Returns the number of keys merged.
    """
    for key, stats in accumulator.items():
        store.combine(key, stats)
    return len(accumulator)
