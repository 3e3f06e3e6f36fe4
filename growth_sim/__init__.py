"""Cash-Cycle Growth Simulator

A small, deterministic model of how fast a purchase-and-resell business grows
its revenue with and without debt financing.
"""

from growth_sim.errors import (
    ComputationLimitExceeded,
    GrowthSimError,
    InvalidParameterError,
)
from growth_sim.models import CycleRecord, SimulationParameters, SimulationResult
from growth_sim.simulator import StrategyComparison, compare_strategies, simulate

__version__ = "0.1.0"

__all__ = [
    "ComputationLimitExceeded",
    "CycleRecord",
    "GrowthSimError",
    "InvalidParameterError",
    "SimulationParameters",
    "SimulationResult",
    "StrategyComparison",
    "compare_strategies",
    "simulate",
]
