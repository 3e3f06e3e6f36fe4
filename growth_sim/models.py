"""Data models for the Cash-Cycle Growth Simulator.

Contains SimulationParameters, CycleRecord and SimulationResult with basic validation.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np

from growth_sim.errors import InvalidParameterError

_FLOAT_FIELDS = (
    "initial_capital",
    "target_multiple",
    "debt_percentage",
    "profit_margin",
    "sales_to_purchase_price_ratio",
    "fee_rate",
    "withdrawals_per_month",
)


def _check_finite(name: str, value: Any) -> float:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(name, f"must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidParameterError(name, f"must be finite, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class SimulationParameters:
    """The nine scalar inputs of one simulation run."""

    with_leverage: bool
    initial_capital: float
    target_multiple: float
    debt_percentage: float
    profit_margin: float
    sales_to_purchase_price_ratio: float
    fee_rate: float
    withdrawals_per_month: float
    cash_conversion_cycle: int

    def __post_init__(self) -> None:
        """Validate every field against its domain."""
        if not isinstance(self.with_leverage, bool):
            raise InvalidParameterError(
                "with_leverage", f"must be a bool, got {self.with_leverage!r}"
            )

        if _check_finite("initial_capital", self.initial_capital) <= 0:
            raise InvalidParameterError("initial_capital", "must be positive")
        if _check_finite("target_multiple", self.target_multiple) < 1:
            raise InvalidParameterError("target_multiple", "must be at least 1")

        debt_percentage = _check_finite("debt_percentage", self.debt_percentage)
        if not 0 <= debt_percentage < 1:
            raise InvalidParameterError("debt_percentage", "must be in [0, 1)")

        profit_margin = _check_finite("profit_margin", self.profit_margin)
        if not 0 <= profit_margin <= 1:
            raise InvalidParameterError("profit_margin", "must be in [0, 1]")

        ratio = _check_finite(
            "sales_to_purchase_price_ratio", self.sales_to_purchase_price_ratio
        )
        if ratio <= 0:
            raise InvalidParameterError(
                "sales_to_purchase_price_ratio", "must be positive"
            )

        if _check_finite("fee_rate", self.fee_rate) < 0:
            raise InvalidParameterError("fee_rate", "must be non-negative")
        if _check_finite("withdrawals_per_month", self.withdrawals_per_month) < 0:
            raise InvalidParameterError("withdrawals_per_month", "must be non-negative")

        cycle = _check_finite("cash_conversion_cycle", self.cash_conversion_cycle)
        if not cycle.is_integer():
            raise InvalidParameterError(
                "cash_conversion_cycle", "must be a whole number of days"
            )
        if cycle <= 0:
            raise InvalidParameterError("cash_conversion_cycle", "must be positive")
        # Frozen dataclass: store plain floats and a plain int cycle length
        for name in _FLOAT_FIELDS:
            object.__setattr__(self, name, float(getattr(self, name)))
        object.__setattr__(self, "cash_conversion_cycle", int(cycle))


@dataclass(frozen=True)
class CycleRecord:
    """One row of a growth schedule."""

    day_offset: int
    capital: float
    debt: float
    revenue: float
    profit: float
    fee_amount: float
    new_capital: float


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of one simulation run.

    Either unprofitable (only ``loss_per_cycle`` is set) or profitable with a
    non-empty schedule, the cycle-1 revenue and the days needed to reach the
    target multiple.
    """

    profitable: bool
    loss_per_cycle: float | None = None
    schedule: tuple[CycleRecord, ...] = field(default_factory=tuple)
    initial_revenue: float | None = None
    days_to_target: int | None = None

    def __post_init__(self) -> None:
        """Reject inconsistent combinations of fields."""
        if self.profitable:
            if not self.schedule:
                raise ValueError("Profitable result must have a non-empty schedule")
            if self.initial_revenue is None or self.days_to_target is None:
                raise ValueError(
                    "Profitable result needs initial_revenue and days_to_target"
                )
            if self.loss_per_cycle is not None:
                raise ValueError("Profitable result cannot carry loss_per_cycle")
        else:
            if self.loss_per_cycle is None:
                raise ValueError("Unprofitable result needs loss_per_cycle")
            if self.schedule:
                raise ValueError("Unprofitable result cannot carry a schedule")

    @classmethod
    def unprofitable(cls, loss_per_cycle: float) -> SimulationResult:
        return cls(profitable=False, loss_per_cycle=loss_per_cycle)

    @classmethod
    def growth(
        cls,
        schedule: list[CycleRecord],
        initial_revenue: float,
        days_to_target: int,
    ) -> SimulationResult:
        return cls(
            profitable=True,
            schedule=tuple(schedule),
            initial_revenue=initial_revenue,
            days_to_target=days_to_target,
        )

    @property
    def final_revenue_ratio(self) -> float | None:
        """Revenue of the last row relative to the cycle-1 revenue."""
        if not self.profitable:
            return None
        return self.schedule[-1].revenue / self.initial_revenue

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        if not self.profitable:
            return {"profitable": False, "loss_per_cycle": self.loss_per_cycle}
        return {
            "profitable": True,
            "initial_revenue": self.initial_revenue,
            "days_to_target": self.days_to_target,
            "schedule": [asdict(record) for record in self.schedule],
        }
