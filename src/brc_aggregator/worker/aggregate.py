"""Per-segment aggregation into a worker-private accumulator."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import BinaryIO

from brc_aggregator.partition.types import BUFFER_SIZE, Segment
from brc_aggregator.records.accumulate import accumulate
from brc_aggregator.records.parse import parse_record_line
from brc_aggregator.records.types import LocalAccumulator


@dataclass
class SegmentResult:
    """Accumulator and line counters produced by one segment scan."""

    accumulator: LocalAccumulator = field(default_factory=dict)
    lines_read: int = 0
    empty_lines: int = 0
    malformed_lines: int = 0


def iter_segment_lines(handle: BinaryIO, segment: Segment) -> Iterator[bytes]:
    """
    Yield the raw lines whose first byte lies in [segment.start, segment.end).

    Segment boundaries are line-aligned, so the scan stops exactly at
    `segment.end`; a final line without a terminator is still yielded.
    """
    if segment.is_empty:
        return

    handle.seek(segment.start)
    remaining = segment.size
    for raw_line in handle:
        yield raw_line
        remaining -= len(raw_line)
        if remaining <= 0:
            break


def aggregate_segment(input_path: str, segment: Segment) -> SegmentResult:
    """
    Aggregate one segment of the input file.

    Each call opens its own handle, so concurrent calls never share file
    position. Lines the parser rejects are skipped and counted.
    """
    result = SegmentResult()
    if segment.is_empty:
        return result

    accumulator = result.accumulator
    with open(input_path, "rb", buffering=BUFFER_SIZE) as handle:
        for raw_line in iter_segment_lines(handle, segment):
            result.lines_read += 1
            parsed = parse_record_line(raw_line)
            if parsed is None:
                if raw_line.strip():
                    result.malformed_lines += 1
                else:
                    result.empty_lines += 1
                continue

            key, value = parsed
            accumulate(accumulator, key, value)

    return result
