"""Display helpers for simulation results.

Currency values are shown in whole units, axis labels abbreviated with
K/M/B suffixes.
"""

from __future__ import annotations

import math
import re

import numpy as np

from growth_sim.models import SimulationResult

TABLE_HEADERS = ("Days", "Capital", "Debt", "Revenue", "Profit", "Fee", "New Capital")

_SUFFIXES = ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K"))


def _shortest(value: float) -> str:
    """Shortest round-trip text, spelled the way a browser prints numbers."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if 1e-6 <= abs(value) < 1e21:
        return np.format_float_positional(value, trim="-")
    # 1e-07 -> 1e-7
    return re.sub(r"e([+-])0*(\d)", r"e\1\2", repr(value))


def format_currency(value: float) -> str:
    """Format a value as whole currency units with thousands separators.

    Fractions are truncated toward zero: 12345.9 -> "$12,345".
    """
    return f"${int(value):,}"


def format_number(value: float) -> str:
    """Abbreviate a currency value for chart axes.

    Examples: 999 -> "$999", 1500 -> "$1.5K", 2500000 -> "$2.5M".
    """
    for threshold, suffix in _SUFFIXES:
        if abs(value) > threshold:
            return f"${_shortest(value / threshold)}{suffix}"
    return f"${_shortest(value)}"


def format_days(days: int | None) -> str:
    """Days to target, or a dash when the run is unprofitable."""
    if days is None:
        return "–d"
    return f"{days}d"


def format_speedup(factor: float | None) -> str:
    if factor is None:
        return "–x"
    if math.isinf(factor):
        return "∞x"
    return f"{_shortest(factor)}x"


def format_schedule_table(result: SimulationResult) -> str:
    """Render a schedule as a fixed-width text table.

    Args:
        result: Simulation result

    Returns:
        Table text, or a notice with the loss per cycle when unprofitable
    """
    if not result.profitable:
        return (
            "Project is unprofitable! Try increasing margin or lowering withdrawals.\n"
            f"Loss per cycle: {format_currency(result.loss_per_cycle)}"
        )

    rows = [TABLE_HEADERS]
    for record in result.schedule:
        rows.append(
            (
                str(record.day_offset),
                format_currency(record.capital),
                format_currency(record.debt),
                format_currency(record.revenue),
                format_currency(record.profit),
                format_currency(record.fee_amount),
                format_currency(record.new_capital),
            )
        )

    widths = [max(len(row[col]) for row in rows) for col in range(len(TABLE_HEADERS))]
    lines = []
    for i, row in enumerate(rows):
        lines.append("  ".join(cell.rjust(width) for cell, width in zip(row, widths)))
        if i == 0:
            lines.append("  ".join("-" * width for width in widths))
    return "\n".join(lines)
