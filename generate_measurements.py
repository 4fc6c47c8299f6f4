#!/usr/bin/env python3
"""
Synthetic measurements generator for aggregation benchmarks.

Writes a newline-delimited `station;temperature` file. Each station gets a
mean temperature drawn once, and every row samples around that mean, so the
output has realistic spread per key. Temperatures are written with one
decimal digit, as in the classic one-billion-row-challenge input.
"""

import argparse
import random
import sys

# Large buffer for efficient streaming writes
BUFFER_SIZE = 1024 * 1024  # 1MB

# Valid measurement range.
MIN_TEMPERATURE = -99.9
MAX_TEMPERATURE = 99.9


def generate_stations(num_stations: int, rng: random.Random) -> list[tuple[str, float]]:
    """
    Build station names with a per-station mean temperature.

    Names are zero-padded so that byte order and numeric order agree.
    """
    return [
        (f"Station_{i:05d}", round(rng.uniform(-30.0, 40.0), 1))
        for i in range(num_stations)
    ]


def generate_measurements(
    output_path: str,
    num_rows: int,
    num_stations: int,
    stddev: float,
    seed: int,
) -> int:
    """
    Generate a synthetic measurements file.

    Streams output line-by-line to avoid memory issues.

    Args:
        output_path: Path to output file.
        num_rows: Number of measurement lines to write.
        num_stations: Number of distinct station keys.
        stddev: Standard deviation of samples around each station mean.
        seed: Random seed for reproducibility.

    Returns:
        Total number of lines written.
    """
    rng = random.Random(seed)
    stations = generate_stations(num_stations, rng)
    total_lines = 0

    with open(output_path, "w", encoding="utf-8", buffering=BUFFER_SIZE) as f:
        for row in range(num_rows):
            name, mean = stations[rng.randrange(num_stations)]
            temperature = min(MAX_TEMPERATURE, max(MIN_TEMPERATURE, rng.gauss(mean, stddev)))
            f.write(f"{name};{temperature:.1f}\n")
            total_lines += 1

            # Progress indicator every 10M rows
            if (row + 1) % 10_000_000 == 0:
                print(f"  Generated {row + 1:,}/{num_rows:,} rows...", file=sys.stderr)

    return total_lines


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic station;temperature measurements file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 10M rows over 413 stations
  python generate_measurements.py --out data/measurements.txt --rows 10000000

  # Many keys, to stress the sharded store
  python generate_measurements.py --out data/many_keys.txt --rows 10000000 --stations 10000
""",
    )

    parser.add_argument(
        "--out",
        required=True,
        help="Output file path",
    )
    parser.add_argument(
        "--rows",
        type=int,
        default=1_000_000,
        help="Number of measurement rows (default: 1000000)",
    )
    parser.add_argument(
        "--stations",
        type=int,
        default=413,
        help="Number of distinct stations (default: 413)",
    )
    parser.add_argument(
        "--stddev",
        type=float,
        default=10.0,
        help="Spread of samples around each station mean (default: 10.0)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=1,
        help="Random seed for reproducibility (default: 1)",
    )

    args = parser.parse_args()

    # Validate
    if args.rows < 0:
        parser.error("--rows must be non-negative")
    if args.stations < 1:
        parser.error("--stations must be at least 1")
    if args.stddev < 0:
        parser.error("--stddev must be non-negative")

    # Approximate line length: ~20 chars
    approx_size_mb = (args.rows * 20) / (1024 * 1024)

    print("=" * 60, file=sys.stderr)
    print("Synthetic Measurements Generator", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"Output: {args.out}", file=sys.stderr)
    print(f"Rows: {args.rows:,}", file=sys.stderr)
    print(f"Stations: {args.stations:,}", file=sys.stderr)
    print(f"Stddev: {args.stddev}", file=sys.stderr)
    print(f"Seed: {args.seed}", file=sys.stderr)
    print(f"Estimated size: ~{approx_size_mb:.1f} MB", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(file=sys.stderr)

    print("Generating...", file=sys.stderr)
    total_lines = generate_measurements(
        output_path=args.out,
        num_rows=args.rows,
        num_stations=args.stations,
        stddev=args.stddev,
        seed=args.seed,
    )

    print(file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"Done! Wrote {total_lines:,} lines to {args.out}", file=sys.stderr)
    print("=" * 60, file=sys.stderr)


if __name__ == "__main__":
    main()
