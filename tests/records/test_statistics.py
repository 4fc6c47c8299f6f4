"""Tests for per-key statistics and local accumulation."""

import random

from brc_aggregator.records.accumulate import accumulate, build_accumulator
from brc_aggregator.records.types import Statistics


def _as_tuple(stats: Statistics) -> tuple[float, float, float, int]:
    return stats.minimum, stats.maximum, stats.total, stats.count


class TestStatistics:
    """Test cases for the Statistics fold and combine rules."""

    def test_from_value_initializes_all_fields(self) -> None:
        stats = Statistics.from_value(4.5)
        assert _as_tuple(stats) == (4.5, 4.5, 4.5, 1)
        assert stats.mean == 4.5

    def test_add_tracks_min_max_total_count(self) -> None:
        stats = Statistics.from_value(2.0)
        for value in (5.0, -1.0, 3.0):
            stats.add(value)
        assert _as_tuple(stats) == (-1.0, 5.0, 9.0, 4)
        assert stats.mean == 2.25

    def test_combine_merges_partial_results(self) -> None:
        left = Statistics(1.0, 4.0, 10.0, 4)
        right = Statistics(-2.0, 3.0, 2.0, 2)
        left.combine(right)
        assert _as_tuple(left) == (-2.0, 4.0, 12.0, 6)

    def test_combine_is_order_and_grouping_independent(self) -> None:
        """Any grouping and merge order of the same values gives the same result."""
        rng = random.Random(42)
        # Halves are exact in binary, so sums do not depend on addition order.
        values = [rng.randint(-999, 999) / 2 for _ in range(500)]

        expected = Statistics.from_value(values[0])
        for value in values[1:]:
            expected.add(value)

        for groups in (1, 2, 3, 7, 16, 64):
            shuffled = values[:]
            rng.shuffle(shuffled)
            cuts = sorted(rng.sample(range(1, len(shuffled)), groups - 1))
            bounds = [0, *cuts, len(shuffled)]

            partials = []
            for start, end in zip(bounds, bounds[1:]):
                partial = Statistics.from_value(shuffled[start])
                for value in shuffled[start + 1 : end]:
                    partial.add(value)
                partials.append(partial)

            rng.shuffle(partials)
            combined = partials[0]
            for partial in partials[1:]:
                combined.combine(partial)

            assert _as_tuple(combined) == _as_tuple(expected)


class TestAccumulate:
    """Test cases for the worker-private accumulator."""

    def test_new_key_is_initialized(self) -> None:
        accumulator: dict[bytes, Statistics] = {}
        accumulate(accumulator, b"A", 3.0)
        assert _as_tuple(accumulator[b"A"]) == (3.0, 3.0, 3.0, 1)

    def test_existing_key_is_updated(self) -> None:
        accumulator: dict[bytes, Statistics] = {}
        accumulate(accumulator, b"A", 3.0)
        accumulate(accumulator, b"A", 1.0)
        accumulate(accumulator, b"B", 7.0)
        assert _as_tuple(accumulator[b"A"]) == (1.0, 3.0, 4.0, 2)
        assert _as_tuple(accumulator[b"B"]) == (7.0, 7.0, 7.0, 1)

    def test_build_accumulator_from_records(self) -> None:
        accumulator = build_accumulator([(b"A", 1.0), (b"B", 2.0), (b"A", 3.0)])
        assert set(accumulator) == {b"A", b"B"}
        assert accumulator[b"A"].mean == 2.0
