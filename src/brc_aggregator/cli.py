"""Command-line interface for the BRC aggregator."""

import argparse
import logging
import sys

from brc_aggregator.solver.execution import EXECUTOR_MODES
from brc_aggregator.solver.solve import DEFAULT_SHARDS, DEFAULT_WORKERS, main_solve

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Send diagnostics to stderr so stdout carries only the summary line."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="brc-aggregator",
        description="Compute per-key min/mean/max over a key;value measurements file.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the input file (semicolon-delimited: Key;Value)",
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help=f"Number of segments scanned in parallel (default: {DEFAULT_WORKERS})",
    )

    parser.add_argument(
        "--shards",
        type=int,
        default=DEFAULT_SHARDS,
        help=f"Number of lock shards in the result store (default: {DEFAULT_SHARDS})",
    )

    parser.add_argument(
        "--executor",
        choices=sorted(EXECUTOR_MODES),
        default=None,
        help="Execution mode (default: BRC_EXECUTOR env var, else auto by GIL status)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging based on --log-level
    log_level = getattr(logging, args.log_level)
    configure_logging(log_level)

    if args.workers < 1:
        parser.error(f"--workers must be >= 1, got {args.workers}")
    if args.shards < 1:
        parser.error(f"--shards must be >= 1, got {args.shards}")

    try:
        main_solve(
            input_path=args.input_file,
            workers=args.workers,
            shards=args.shards,
            executor=args.executor,
        )
    except OSError as exc:
        logger.error("Aborting: cannot read %s: %s", args.input_file, exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
