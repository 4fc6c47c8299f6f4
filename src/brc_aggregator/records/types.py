"""Shared type definitions for record aggregation."""

from dataclasses import dataclass
from typing import TypeAlias

# Field separator between key and value.
DELIMITER = b";"

Record: TypeAlias = tuple[bytes, float]


@dataclass(slots=True)
class Statistics:
    """Running min/max/sum/count for one key. Mean is derived at report time."""

    minimum: float
    maximum: float
    total: float
    count: int

    @classmethod
    def from_value(cls, value: float) -> "Statistics":
        return cls(value, value, value, 1)

    def add(self, value: float) -> None:
        """Fold one observation into the running statistics."""
        self.total += value
        self.count += 1
        if value < self.minimum:
            self.minimum = value
        if value > self.maximum:
            self.maximum = value

    def combine(self, other: "Statistics") -> None:
        """
        Fold another partial result for the same key into this one.

        Associative and commutative, so partial results may be combined in any
        order and grouping.
        """
        self.total += other.total
        self.count += other.count
        if other.minimum < self.minimum:
            self.minimum = other.minimum
        if other.maximum > self.maximum:
            self.maximum = other.maximum

    @property
    def mean(self) -> float:
        return self.total / self.count


LocalAccumulator: TypeAlias = dict[bytes, Statistics]
