import logging
import os
import time
from dataclasses import dataclass
from itertools import repeat
from pathlib import Path

from brc_aggregator.partition import Segment, plan_segments
from brc_aggregator.records.types import Statistics
from brc_aggregator.report import format_report
from brc_aggregator.solver.execution import (
    BRC_EXECUTOR_ENV,
    describe_executor,
    get_executor_class,
    is_gil_enabled,
    merges_in_worker,
)
from brc_aggregator.store import ShardedResultStore, merge_accumulator
from brc_aggregator.worker import SegmentResult, aggregate_segment

logger = logging.getLogger(__name__)

# Startup defaults: one segment per worker, shards kept well above the worker
# count so a merge rarely waits on another worker's lock.
DEFAULT_WORKERS = 16
DEFAULT_SHARDS = 32


@dataclass
class ScanStats:
    """Line counters summed over every segment of a run."""

    lines_read: int = 0
    empty_lines: int = 0
    malformed_lines: int = 0
    keys_merged: int = 0

    def add(self, result: SegmentResult, keys_merged: int) -> None:
        self.lines_read += result.lines_read
        self.empty_lines += result.empty_lines
        self.malformed_lines += result.malformed_lines
        self.keys_merged += keys_merged


def scan_and_merge(
    input_path: str,
    segment: Segment,
    store: ShardedResultStore,
) -> tuple[SegmentResult, int]:
    """Aggregate one segment and merge its accumulator straight into `store`."""
    result = aggregate_segment(input_path, segment)
    keys_merged = merge_accumulator(store, result.accumulator)
    # The store now owns every Statistics object.
    result.accumulator = {}
    return result, keys_merged


def solve(
    input_path: str,
    workers: int = DEFAULT_WORKERS,
    shards: int = DEFAULT_SHARDS,
    executor: str | None = None,
) -> dict[bytes, Statistics]:
    """
    Compute per-key min/sum/count/max statistics for the input file.

    Three phases:
    1. Partition the file into `workers` line-aligned segments
    2. Aggregate every segment in parallel and merge into a sharded store
    3. Drain the store into a single mapping once every worker has joined

    I/O errors abort the run and propagate; malformed lines are skipped.
    """
    total_start = time.perf_counter()
    input_file = Path(input_path)
    input_path = str(input_file.resolve())

    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    if shards < 1:
        raise ValueError(f"shards must be >= 1, got {shards}")

    executor_class = get_executor_class(executor)
    executor_name = describe_executor(executor_class)

    gil_status = "enabled" if is_gil_enabled() else "disabled"
    executor_override = os.environ.get(BRC_EXECUTOR_ENV, "")
    override_info = f", {BRC_EXECUTOR_ENV}={executor_override}" if executor_override else ""

    logger.info(
        f"Starting: file={input_file.name}, workers={workers}, shards={shards}, "
        f"executor={executor_name}, GIL={gil_status}{override_info}"
    )

    # Phase 1: partition into line-aligned segments.
    t1_start = time.perf_counter()
    segments = plan_segments(input_path, workers)
    t1 = time.perf_counter() - t1_start

    empty_segments = sum(1 for segment in segments if segment.is_empty)
    logger.info(
        "Partition done: %d segments (%d empty) in %.2fs", len(segments), empty_segments, t1
    )
    for index, segment in enumerate(segments):
        logger.debug("Segment %d: [%d, %d)", index, segment.start, segment.end)

    # Phase 2: aggregate segments and merge into the sharded store.
    t2_start = time.perf_counter()
    store = ShardedResultStore(shards)
    stats = ScanStats()

    if executor_class is None:
        for segment in segments:
            stats.add(*scan_and_merge(input_path, segment, store))
    elif merges_in_worker(executor_class):
        with executor_class(max_workers=workers) as pool:
            for result, keys_merged in pool.map(
                scan_and_merge, repeat(input_path), segments, repeat(store)
            ):
                stats.add(result, keys_merged)
    else:
        # Process workers return their accumulators; merging happens here.
        with executor_class(max_workers=workers) as pool:
            for result in pool.map(aggregate_segment, repeat(input_path), segments):
                keys_merged = merge_accumulator(store, result.accumulator)
                stats.add(result, keys_merged)

    t2 = time.perf_counter() - t2_start

    if stats.malformed_lines > 0:
        logger.warning(
            "Aggregation: %d malformed lines skipped (read=%d, empty=%d)",
            stats.malformed_lines,
            stats.lines_read,
            stats.empty_lines,
        )

    logger.info(
        "Aggregation done: %d lines, %d partial keys merged in %.2fs",
        stats.lines_read,
        stats.keys_merged,
        t2,
    )

    total_passes = t1 + t2
    if total_passes > 0:
        logger.debug(
            "Timing breakdown: Partition=%.2fs (%.0f%%), Aggregation=%.2fs (%.0f%%)",
            t1,
            100 * t1 / total_passes,
            t2,
            100 * t2 / total_passes,
        )

    # Phase 3: every worker has joined, so the store is read-only from here.
    results = store.snapshot()
    total_time = time.perf_counter() - total_start
    logger.info("Result: %d distinct keys (total %.2fs)", len(results), total_time)
    return results


def main_solve(
    input_path: str,
    workers: int = DEFAULT_WORKERS,
    shards: int = DEFAULT_SHARDS,
    executor: str | None = None,
) -> None:
    """Main entry point that prints the summary to stdout."""
    results = solve(input_path, workers=workers, shards=shards, executor=executor)
    print(format_report(results))
