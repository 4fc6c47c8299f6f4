"""BRC Aggregator - Per-key min/mean/max over large `key;value` files."""

from brc_aggregator.solver.solve import main_solve, solve

__all__ = ["solve", "main_solve"]
