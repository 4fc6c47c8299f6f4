"""Line-aligned partitioning of the input file into per-worker segments."""

import os
from typing import BinaryIO

from brc_aggregator.partition.types import BUFFER_SIZE, Segment


def realign_boundaries(handle: BinaryIO, size: int, workers: int) -> list[int]:
    """
    Compute `workers + 1` line-aligned boundaries over a file of `size` bytes.

    Each interior boundary starts at its naive offset `i * size // workers` and
    scans forward to just past the next line terminator, or to EOF when the
    remaining bytes hold no terminator. A scan never starts before the previous
    boundary, so boundaries are non-decreasing.
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    boundaries = [0]
    for i in range(1, workers):
        naive = max(i * size // workers, boundaries[-1])
        if naive >= size:
            boundaries.append(size)
            continue

        # readline() stops just past the terminator, or at EOF.
        handle.seek(naive)
        handle.readline()
        boundaries.append(min(handle.tell(), size))

    boundaries.append(size)
    return boundaries


def plan_segments(input_path: str, workers: int) -> list[Segment]:
    """
    Split the input file into exactly `workers` contiguous segments.

    Every line, including an unterminated final line, starts in exactly one
    segment. When there are fewer lines than workers, the surplus segments are
    empty. I/O errors propagate to the caller.
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    size = os.path.getsize(input_path)
    with open(input_path, "rb", buffering=BUFFER_SIZE) as handle:
        boundaries = realign_boundaries(handle, size, workers)

    return [Segment(start, end) for start, end in zip(boundaries, boundaries[1:])]
