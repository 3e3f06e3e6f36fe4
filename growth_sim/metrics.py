"""Metrics and analysis utilities for the Cash-Cycle Growth Simulator.

Functions for turning simulation results into arrays, chart series and
summary statistics.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

import numpy as np

from growth_sim.models import SimulationResult

if TYPE_CHECKING:
    from growth_sim.simulator import StrategyComparison

SCHEDULE_COLUMNS = (
    "day_offset",
    "capital",
    "debt",
    "revenue",
    "profit",
    "fee_amount",
    "new_capital",
)


def schedule_columns(result: SimulationResult) -> dict[str, np.ndarray]:
    """Split a schedule into one array per column.

    Args:
        result: Simulation result

    Returns:
        Dictionary mapping column names to arrays (empty when unprofitable)
    """
    columns = {}
    for name in SCHEDULE_COLUMNS:
        dtype = np.int64 if name == "day_offset" else np.float64
        columns[name] = np.array(
            [getattr(record, name) for record in result.schedule], dtype=dtype
        )
    return columns


def revenue_ratios(result: SimulationResult) -> np.ndarray:
    """Revenue of each row relative to the cycle-1 revenue."""
    if not result.profitable:
        return np.array([], dtype=np.float64)
    return schedule_columns(result)["revenue"] / result.initial_revenue


def _round_half_up(value: float, decimals: int = 1) -> float:
    scale = 10**decimals
    return float(np.floor(value * scale + 0.5) / scale)


def speedup_factor(
    with_leverage: SimulationResult, without_leverage: SimulationResult
) -> float | None:
    """How many times faster the leveraged run reaches the target.

    Args:
        with_leverage: Result of the leveraged run
        without_leverage: Result of the unleveraged run

    Returns:
        None if the leveraged run is unprofitable, infinity if only the
        unleveraged run is unprofitable, otherwise the ratio of days to
        target rounded half-up to one decimal
    """
    if not with_leverage.profitable:
        return None
    if not without_leverage.profitable:
        return math.inf
    return _round_half_up(
        without_leverage.days_to_target / with_leverage.days_to_target
    )


def _revenue_at(result: SimulationResult, idx: int) -> float:
    if 0 <= idx < len(result.schedule):
        return result.schedule[idx].revenue
    return np.nan


def chart_series(
    with_leverage: SimulationResult, without_leverage: SimulationResult
) -> dict[str, np.ndarray]:
    """Build revenue series for plotting both strategies side by side.

    When both runs are profitable, the series start at a synthetic zero point
    and follow the unleveraged schedule's day offsets. When only the leveraged
    run is profitable, points are indexed by cycle count and the unleveraged
    series is a straight loss line. Otherwise there is nothing to plot.

    Returns:
        Dictionary with arrays ``x``, ``y_with`` and ``y_without``; missing
        leveraged values past the end of its schedule are NaN
    """
    if with_leverage.profitable and without_leverage.profitable:
        n = len(without_leverage.schedule)
        x = np.zeros(n + 1)
        y_with = np.zeros(n + 1)
        y_without = np.zeros(n + 1)
        for idx, record in enumerate(without_leverage.schedule):
            x[idx + 1] = record.day_offset
            y_without[idx + 1] = record.revenue
            y_with[idx + 1] = _revenue_at(with_leverage, idx)
        return {"x": x, "y_with": y_with, "y_without": y_without}

    if with_leverage.profitable:
        n = len(with_leverage.schedule) * 2
        x = np.arange(n, dtype=np.float64)
        y_with = np.array(
            [0.0 if idx == 0 else _revenue_at(with_leverage, idx - 1) for idx in range(n)]
        )
        y_without = without_leverage.loss_per_cycle * x
        return {"x": x, "y_with": y_with, "y_without": y_without}

    empty = np.array([], dtype=np.float64)
    return {"x": empty, "y_with": empty.copy(), "y_without": empty.copy()}


def _run_summary(result: SimulationResult) -> dict[str, Any]:
    if not result.profitable:
        return {
            "profitable": False,
            "loss_per_cycle": result.loss_per_cycle,
        }
    return {
        "profitable": True,
        "days_to_target": result.days_to_target,
        "cycles": len(result.schedule),
        "initial_revenue": result.initial_revenue,
        "final_revenue": result.schedule[-1].revenue,
        "final_revenue_ratio": result.final_revenue_ratio,
    }


def summary(comparison: StrategyComparison) -> dict[str, Any]:
    """Generate summary statistics for a leveraged/unleveraged comparison.

    Args:
        comparison: Both simulation runs

    Returns:
        Dictionary with per-strategy statistics and the speedup factor
    """
    return {
        "with_leverage": _run_summary(comparison.with_leverage),
        "without_leverage": _run_summary(comparison.without_leverage),
        "speedup": speedup_factor(
            comparison.with_leverage, comparison.without_leverage
        ),
    }
