"""Shared fixtures for growth_sim tests."""

import pytest

from growth_sim.models import SimulationParameters


@pytest.fixture
def make_params():
    """Factory for parameters based on the default scenario."""

    def _make(**overrides):
        values = {
            "with_leverage": True,
            "initial_capital": 10000.0,
            "target_multiple": 10.0,
            "debt_percentage": 0.75,
            "profit_margin": 0.2,
            "sales_to_purchase_price_ratio": 3.0,
            "fee_rate": 0.05,
            "withdrawals_per_month": 1000.0,
            "cash_conversion_cycle": 150,
        }
        values.update(overrides)
        return SimulationParameters(**values)

    return _make
