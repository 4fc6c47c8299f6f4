"""Parsing utilities for `key;value` record lines."""

import math
from collections.abc import Iterable, Iterator

from brc_aggregator.records.types import DELIMITER, Record


def parse_record_line(raw_line: bytes) -> Record | None:
    """
    Parse one raw line into a (key, value) record.

    Splits on the first delimiter only. Returns None for empty lines, lines
    without a delimiter, empty fields, keys that are not valid UTF-8, and
    non-numeric or non-finite values.
    """
    # Only trailing whitespace is stripped; leading whitespace stays in the key.
    line = raw_line.rstrip()
    if not line:
        return None

    parts = line.split(DELIMITER, 1)
    if len(parts) != 2:
        return None

    key, raw_value = parts
    if not key or not raw_value or b"_" in raw_value:
        return None

    try:
        value = float(raw_value)
    except ValueError:
        return None

    if not math.isfinite(value):
        return None

    try:
        key.decode("utf-8")
    except UnicodeDecodeError:
        return None

    return key, value


def iter_records(lines: Iterable[bytes]) -> Iterator[Record]:
    """Yield parsed records from raw lines, skipping invalid records."""
    for raw_line in lines:
        parsed = parse_record_line(raw_line)
        if parsed is not None:
            yield parsed
