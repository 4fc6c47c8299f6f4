"""Sharded result storage and accumulator merging."""

from brc_aggregator.store.merge import merge_accumulator
from brc_aggregator.store.sharded import Shard, ShardedResultStore

__all__ = ["Shard", "ShardedResultStore", "merge_accumulator"]
