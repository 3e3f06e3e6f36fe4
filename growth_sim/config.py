"""Default parameters and parameter loading for the Cash-Cycle Growth Simulator."""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any, Mapping

from growth_sim.errors import InvalidParameterError
from growth_sim.models import SimulationParameters

DEFAULT_PARAMETERS: dict[str, Any] = {
    "initial_capital": 10_000.0,
    "target_multiple": 10.0,
    "debt_percentage": 0.75,  # share of each project financed with debt
    "profit_margin": 0.2,
    "sales_to_purchase_price_ratio": 3.0,
    "fee_rate": 0.05,  # cost of debt as share of nominal, per cycle
    "withdrawals_per_month": 1_000.0,
    "cash_conversion_cycle": 150,
}

# Typical input ranges (inclusive); values outside still simulate
INPUT_RANGES: dict[str, tuple[float, float]] = {
    "initial_capital": (1_000.0, 100_000.0),
    "target_multiple": (1.0, 20.0),
    "debt_percentage": (0.0, 0.99),
    "profit_margin": (0.0, 0.5),
    "sales_to_purchase_price_ratio": (1.5, 10.0),
    "fee_rate": (0.0, 0.2),
    "withdrawals_per_month": (0.0, 10_000.0),
    "cash_conversion_cycle": (30, 360),
}

PARAMETER_NAMES = tuple(f.name for f in fields(SimulationParameters))


def out_of_range_fields(values: Mapping[str, Any]) -> list[str]:
    """List the fields whose values fall outside INPUT_RANGES."""
    outside = []
    for name, (low, high) in INPUT_RANGES.items():
        value = values.get(name)
        if value is not None and not low <= value <= high:
            outside.append(name)
    return outside


def load_parameter_file(path: str | Path) -> dict[str, Any]:
    """Load parameter overrides from a JSON object.

    Args:
        path: Path to a JSON file such as ``{"initial_capital": 25000}``

    Returns:
        Dictionary of overrides

    Raises:
        InvalidParameterError: If the file is not a UTF-8 JSON object or names an
            unknown parameter
    """
    with open(path, encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise InvalidParameterError("config", f"invalid JSON in {path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise InvalidParameterError("config", f"{path} is not UTF-8: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidParameterError("config", f"{path} must contain a JSON object")

    unknown = sorted(set(data) - set(PARAMETER_NAMES))
    if unknown:
        raise InvalidParameterError("config", f"unknown parameters: {', '.join(unknown)}")
    return data


def build_parameters(
    overrides: Mapping[str, Any] | None = None, with_leverage: bool = True
) -> SimulationParameters:
    """Merge defaults and overrides into validated parameters."""
    values: dict[str, Any] = {"with_leverage": with_leverage, **DEFAULT_PARAMETERS}
    if overrides:
        unknown = sorted(set(overrides) - set(PARAMETER_NAMES))
        if unknown:
            raise InvalidParameterError(
                "config", f"unknown parameters: {', '.join(unknown)}"
            )
        values.update(overrides)
    return SimulationParameters(**values)
