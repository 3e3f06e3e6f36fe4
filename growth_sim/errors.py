"""Exceptions raised by the Cash-Cycle Growth Simulator."""

from __future__ import annotations


class GrowthSimError(Exception):
    """Base class for simulator errors."""


class InvalidParameterError(GrowthSimError, ValueError):
    """A simulation parameter is outside its domain."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


class ComputationLimitExceeded(GrowthSimError, RuntimeError):
    """The simulation ran more cycles than the configured limit."""

    def __init__(self, max_cycles: int, cycles: int) -> None:
        self.max_cycles = max_cycles
        self.cycles = cycles
        super().__init__(
            f"Target not reached after {cycles} cycles (limit {max_cycles})"
        )
