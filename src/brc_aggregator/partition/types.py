"""Shared constants and metadata structures for partitioning."""

from dataclasses import dataclass

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024


@dataclass(frozen=True, slots=True)
class Segment:
    """Half-open, line-aligned byte range [start, end) of the input file."""

    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end
