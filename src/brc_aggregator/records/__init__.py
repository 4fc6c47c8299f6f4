"""Record parsing and per-key statistics."""

from brc_aggregator.records.accumulate import accumulate, build_accumulator
from brc_aggregator.records.parse import iter_records, parse_record_line
from brc_aggregator.records.types import LocalAccumulator, Record, Statistics

__all__ = [
    "LocalAccumulator",
    "Record",
    "Statistics",
    "accumulate",
    "build_accumulator",
    "iter_records",
    "parse_record_line",
]
