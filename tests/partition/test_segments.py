"""Tests for line-aligned segment planning."""

import io
import random
from collections import Counter
from pathlib import Path

import pytest

from brc_aggregator.partition import Segment, plan_segments, realign_boundaries
from brc_aggregator.worker import iter_segment_lines


def _write(tmp_path: Path, content: bytes) -> str:
    path = tmp_path / "measurements.txt"
    path.write_bytes(content)
    return str(path)


def _lines_by_segment(input_path: str, segments: list[Segment]) -> list[list[bytes]]:
    with open(input_path, "rb") as handle:
        return [list(iter_segment_lines(handle, segment)) for segment in segments]


class TestPlanSegments:
    """Test cases for plan_segments."""

    def test_returns_requested_number_of_contiguous_segments(self, tmp_path: Path) -> None:
        """Test that segments tile [0, size) without gaps or overlap."""
        content = b"".join(f"K{i};{i}.0\n".encode() for i in range(100))
        input_path = _write(tmp_path, content)

        segments = plan_segments(input_path, 7)

        assert len(segments) == 7
        assert segments[0].start == 0
        assert segments[-1].end == len(content)
        for left, right in zip(segments, segments[1:]):
            assert left.end == right.start
            assert left.start <= left.end

    def test_boundaries_follow_line_terminators(self, tmp_path: Path) -> None:
        """Test that every interior boundary sits right after a newline."""
        content = b"".join(f"Key{i:03d};{i % 50}.5\n".encode() for i in range(300))
        input_path = _write(tmp_path, content)

        for segment in plan_segments(input_path, 9)[1:]:
            if 0 < segment.start < len(content):
                assert content[segment.start - 1 : segment.start] == b"\n"

    def test_every_line_is_covered_exactly_once(self, tmp_path: Path) -> None:
        """Test exhaustiveness and disjointness for many worker counts."""
        rng = random.Random(7)
        lines = [
            f"id{i};{'x' * rng.randint(0, 40)}\n".encode() for i in range(257)
        ]
        content = b"".join(lines)
        input_path = _write(tmp_path, content)

        for workers in (1, 2, 3, 5, 8, 16, 64, 256, 257, 300, 1000):
            segments = plan_segments(input_path, workers)
            seen = [
                line for chunk in _lines_by_segment(input_path, segments) for line in chunk
            ]
            assert Counter(seen) == Counter(lines), f"workers={workers}"

    def test_more_workers_than_lines_yields_empty_segments(self, tmp_path: Path) -> None:
        content = b"A;1.0\nB;2.0\n"
        input_path = _write(tmp_path, content)

        segments = plan_segments(input_path, 8)

        assert len(segments) == 8
        assert sum(1 for segment in segments if not segment.is_empty) <= 2
        assert sum(segment.size for segment in segments) == len(content)

    def test_unterminated_last_line_belongs_to_last_nonempty_segment(
        self, tmp_path: Path
    ) -> None:
        content = b"A;1.0\nB;2.0\nC;3.0"
        input_path = _write(tmp_path, content)

        for workers in (1, 2, 3, 4):
            segments = plan_segments(input_path, workers)
            chunks = _lines_by_segment(input_path, segments)
            flat = [line for chunk in chunks for line in chunk]
            assert flat == [b"A;1.0\n", b"B;2.0\n", b"C;3.0"]

    def test_empty_file(self, tmp_path: Path) -> None:
        input_path = _write(tmp_path, b"")
        segments = plan_segments(input_path, 4)
        assert segments == [Segment(0, 0)] * 4

    def test_rejects_non_positive_worker_count(self, tmp_path: Path) -> None:
        input_path = _write(tmp_path, b"A;1.0\n")
        with pytest.raises(ValueError):
            plan_segments(input_path, 0)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            plan_segments(str(tmp_path / "missing.txt"), 4)


class TestRealignBoundaries:
    """Test cases for realign_boundaries on an open handle."""

    def test_scans_forward_only(self) -> None:
        content = b"AAAA;1\nB;2\nCCCCCCCC;3\n"
        handle = io.BytesIO(content)

        boundaries = realign_boundaries(handle, len(content), 2)

        # Naive midpoint 11 is the first byte of "CCCCCCCC;3", so the scan
        # runs forward to the end of that line.
        assert boundaries == [0, len(content), len(content)]

    def test_naive_offset_inside_line(self) -> None:
        content = b"AAAA;1\nB;2\nC;3\n"
        handle = io.BytesIO(content)

        boundaries = realign_boundaries(handle, len(content), 3)

        assert boundaries == [0, 7, 11, 15]

    def test_boundaries_are_non_decreasing(self) -> None:
        content = b"x" * 100 + b";1\nA;2\n"
        handle = io.BytesIO(content)

        boundaries = realign_boundaries(handle, len(content), 10)

        assert boundaries == sorted(boundaries)
        assert boundaries[0] == 0
        assert boundaries[-1] == len(content)
