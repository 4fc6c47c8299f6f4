"""Execution policy and executor selection utilities."""

import logging
import os
import sys
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import TypeAlias

ExecutorClass: TypeAlias = type[ThreadPoolExecutor] | type[ProcessPoolExecutor] | None

logger = logging.getLogger(__name__)

# Environment variable to override executor selection.
BRC_EXECUTOR_ENV = "BRC_EXECUTOR"

# "serial" maps to None: segments run inline in the calling thread.
EXECUTOR_MODES: dict[str, ExecutorClass] = {
    "threads": ThreadPoolExecutor,
    "processes": ProcessPoolExecutor,
    "serial": None,
}


def is_gil_enabled() -> bool:
    """True unless running on a free-threaded build with the GIL switched off."""
    # sys._is_gil_enabled only exists on 3.13+.
    gil_check = getattr(sys, "_is_gil_enabled", None)
    return True if gil_check is None else gil_check()


def get_executor_class(mode: str | None = None) -> ExecutorClass:
    """
    Select the executor used to scan segments.

    Priority:
    1. Explicit `mode` argument ("threads", "processes", or "serial")
    2. BRC_EXECUTOR env var override (same values)
    3. Auto-select based on GIL status (disabled -> threads, enabled -> processes)

    An unknown explicit mode raises ValueError; an unknown env value is logged
    and ignored.
    """
    if mode is not None:
        try:
            return EXECUTOR_MODES[mode.lower()]
        except KeyError:
            raise ValueError(
                f"executor must be one of {sorted(EXECUTOR_MODES)}, got {mode!r}"
            ) from None

    executor_override = os.environ.get(BRC_EXECUTOR_ENV, "").lower()
    if executor_override in EXECUTOR_MODES:
        return EXECUTOR_MODES[executor_override]
    if executor_override:
        logger.warning("Ignoring unknown %s=%s", BRC_EXECUTOR_ENV, executor_override)

    if is_gil_enabled():
        return ProcessPoolExecutor
    return ThreadPoolExecutor


def describe_executor(executor_class: ExecutorClass) -> str:
    """Name the mode in EXECUTOR_MODES that selects `executor_class`."""
    for name, candidate in EXECUTOR_MODES.items():
        if candidate is executor_class:
            return name
    raise ValueError(f"unknown executor class: {executor_class!r}")


def merges_in_worker(executor_class: ExecutorClass) -> bool:
    """
    True when workers share the parent's memory and can merge into the store.

    Process workers cannot reach the parent's locks, so their accumulators are
    shipped back and merged by the parent as they arrive.
    """
    return executor_class is not ProcessPoolExecutor
