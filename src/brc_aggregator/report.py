"""Formatting of the final per-key summary."""

from collections.abc import Mapping

from brc_aggregator.records.types import Statistics


def format_statistics(key: bytes, stats: Statistics) -> str:
    return f"{key.decode('utf-8')}={stats.minimum:.1f}/{stats.mean:.1f}/{stats.maximum:.1f}"


def format_report(results: Mapping[bytes, Statistics]) -> str:
    """
    Render results as `{key=min/mean/max, ...}`.

    Keys are sorted by byte value before decoding.
    """
    entries = (format_statistics(key, results[key]) for key in sorted(results))
    return "{" + ", ".join(entries) + "}"
