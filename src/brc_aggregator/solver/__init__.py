"""Run orchestration and execution policy."""

from brc_aggregator.solver.solve import DEFAULT_SHARDS, DEFAULT_WORKERS, main_solve, solve

__all__ = ["DEFAULT_SHARDS", "DEFAULT_WORKERS", "main_solve", "solve"]
