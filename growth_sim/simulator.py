"""Simulation engine for the Cash-Cycle Growth Simulator.

Contains the per-cycle financial model and the loop that grows capital
cycle by cycle until the target revenue multiple is reached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from growth_sim.errors import ComputationLimitExceeded, InvalidParameterError
from growth_sim.models import CycleRecord, SimulationParameters, SimulationResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_CYCLES = 10_000
DAYS_PER_MONTH = 30


class CycleModel:
    """Per-cycle financial formulas for one set of parameters.

    Every quantity except the withdrawal is a function of the capital at the
    start of the cycle. Without leverage, debt and fees are always zero.
    """

    def __init__(self, params: SimulationParameters) -> None:
        self.params = params
        self.leverage_factor = 1 / (1 - params.debt_percentage)
        self.withdrawal_per_cycle = (
            params.withdrawals_per_month * params.cash_conversion_cycle / DAYS_PER_MONTH
        )

    def debt(self, capital: float) -> float:
        if not self.params.with_leverage:
            return 0.0
        return (self.leverage_factor - 1) * capital

    def investment(self, capital: float) -> float:
        return capital + self.debt(capital)

    def fee_amount(self, capital: float) -> float:
        return self.params.fee_rate * self.debt(capital)

    def revenue(self, capital: float) -> float:
        return self.params.sales_to_purchase_price_ratio * self.investment(capital)

    def profit(self, capital: float) -> float:
        return self.params.profit_margin * self.revenue(capital) - self.fee_amount(
            capital
        )

    def new_capital(self, capital: float) -> float:
        return capital + self.profit(capital) - self.withdrawal_per_cycle

    def record(self, capital: float, cycle: int) -> CycleRecord:
        """Build the schedule row for ``cycle`` (1-based) starting at ``capital``."""
        return CycleRecord(
            day_offset=self.params.cash_conversion_cycle * cycle,
            capital=capital,
            debt=self.debt(capital),
            revenue=self.revenue(capital),
            profit=self.profit(capital),
            fee_amount=self.fee_amount(capital),
            new_capital=self.new_capital(capital),
        )


def simulate(
    params: SimulationParameters, max_cycles: int = DEFAULT_MAX_CYCLES
) -> SimulationResult:
    """Grow capital cycle by cycle until revenue reaches the target multiple.

    Args:
        params: Validated simulation parameters
        max_cycles: Maximum number of cycles run before the target is reached

    Returns:
        An unprofitable result as soon as a cycle's profit cannot cover the
        withdrawals, otherwise the full schedule. The schedule ends with one
        row at or past the target.

    Raises:
        InvalidParameterError: If max_cycles is not a positive integer or the
            first-cycle revenue is not positive
        ComputationLimitExceeded: If the target is not reached within max_cycles
    """
    if isinstance(max_cycles, bool) or not isinstance(max_cycles, int) or max_cycles < 1:
        raise InvalidParameterError("max_cycles", "must be a positive integer")

    model = CycleModel(params)
    capital = params.initial_capital
    initial_revenue = model.revenue(capital)
    if not initial_revenue > 0:
        raise InvalidParameterError(
            "initial_capital", "first-cycle revenue must be positive"
        )

    logger.debug(
        "Simulating with_leverage=%s capital=%s target=%sx",
        params.with_leverage,
        capital,
        params.target_multiple,
    )

    schedule: list[CycleRecord] = []
    cycles = 0
    while model.revenue(capital) / initial_revenue < params.target_multiple:
        profit = model.profit(capital)
        if profit <= model.withdrawal_per_cycle:
            loss = profit - model.withdrawal_per_cycle
            logger.debug("Unprofitable after %d cycles, loss per cycle %s", cycles, loss)
            return SimulationResult.unprofitable(loss)
        if cycles >= max_cycles:
            raise ComputationLimitExceeded(max_cycles, cycles)
        cycles += 1
        schedule.append(model.record(capital, cycles))
        capital = model.new_capital(capital)

    # One more row at or past the target, without the profitability check
    cycles += 1
    schedule.append(model.record(capital, cycles))

    days = params.cash_conversion_cycle * cycles
    logger.debug("Target reached in %d cycles (%d days)", cycles, days)
    return SimulationResult.growth(schedule, initial_revenue, days)


@dataclass(frozen=True)
class StrategyComparison:
    """Leveraged and unleveraged runs of otherwise identical parameters."""

    with_leverage: SimulationResult
    without_leverage: SimulationResult

    @property
    def speedup(self) -> float | None:
        from growth_sim.metrics import speedup_factor

        return speedup_factor(self.with_leverage, self.without_leverage)


def compare_strategies(
    params: SimulationParameters, max_cycles: int = DEFAULT_MAX_CYCLES
) -> StrategyComparison:
    """Run the simulation with and without leverage.

    Only ``with_leverage`` differs between the two runs.
    """
    return StrategyComparison(
        with_leverage=simulate(replace(params, with_leverage=True), max_cycles),
        without_leverage=simulate(replace(params, with_leverage=False), max_cycles),
    )
