"""Worker-private accumulation of parsed records."""

from collections.abc import Iterable

from brc_aggregator.records.types import LocalAccumulator, Record, Statistics


def accumulate(accumulator: LocalAccumulator, key: bytes, value: float) -> None:
    """Fold one value into the accumulator entry for `key`, creating it if new."""
    stats = accumulator.get(key)
    if stats is None:
        accumulator[key] = Statistics.from_value(value)
    else:
        stats.add(value)


def build_accumulator(records: Iterable[Record]) -> LocalAccumulator:
    accumulator: LocalAccumulator = {}
    for key, value in records:
        accumulate(accumulator, key, value)
    return accumulator
