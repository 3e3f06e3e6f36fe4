"""Tests for metrics module."""

import math

import numpy as np
import pytest

from growth_sim.metrics import (
    chart_series,
    revenue_ratios,
    schedule_columns,
    speedup_factor,
    summary,
)
from growth_sim.models import SimulationResult
from growth_sim.simulator import compare_strategies, simulate


def test_schedule_columns(make_params):
    """Test schedule split into column arrays."""
    result = simulate(make_params())
    columns = schedule_columns(result)

    np.testing.assert_array_equal(columns["day_offset"], [150, 300, 450, 600])
    np.testing.assert_allclose(
        columns["capital"], [10000.0, 27500.0, 84375.0, 269218.75]
    )
    np.testing.assert_allclose(columns["debt"], 3 * columns["capital"])
    assert columns["revenue"].dtype == np.float64


def test_schedule_columns_unprofitable():
    """Test unprofitable results give empty columns."""
    columns = schedule_columns(SimulationResult.unprofitable(-1.0))

    assert all(len(values) == 0 for values in columns.values())


def test_revenue_ratios(make_params):
    """Test ratios start at one and end past the target."""
    ratios = revenue_ratios(simulate(make_params(with_leverage=False)))

    assert ratios[0] == pytest.approx(1.0)
    assert ratios[-1] >= 10
    assert np.all(ratios[:-1] < 10)
    assert np.all(np.diff(ratios) > 0)


def test_revenue_ratios_unprofitable():
    """Test unprofitable results have no ratios."""
    assert len(revenue_ratios(SimulationResult.unprofitable(-1.0))) == 0


def test_speedup_factor(make_params):
    """Test speedup for both profitable runs."""
    with_lev = simulate(make_params())
    without_lev = simulate(make_params(with_leverage=False))

    assert speedup_factor(with_lev, without_lev) == 2.5


def test_speedup_factor_rounds_half_up(make_params):
    """Test speedup rounds to one decimal."""
    with_lev = SimulationResult.growth(
        list(simulate(make_params()).schedule), 1.0, days_to_target=400
    )
    without_lev = SimulationResult.growth(
        list(simulate(make_params()).schedule), 1.0, days_to_target=1000
    )

    assert speedup_factor(with_lev, without_lev) == 2.5

    without_lev = SimulationResult.growth(
        list(simulate(make_params()).schedule), 1.0, days_to_target=1010
    )
    assert speedup_factor(with_lev, without_lev) == 2.5  # 2.525

    without_lev = SimulationResult.growth(
        list(simulate(make_params()).schedule), 1.0, days_to_target=1030
    )
    assert speedup_factor(with_lev, without_lev) == 2.6  # 2.575


def test_speedup_factor_unprofitable(make_params):
    """Test speedup is undefined or infinite when a run is unprofitable."""
    profitable = simulate(make_params())
    unprofitable = SimulationResult.unprofitable(-100.0)

    assert speedup_factor(unprofitable, profitable) is None
    assert speedup_factor(unprofitable, unprofitable) is None
    assert math.isinf(speedup_factor(profitable, unprofitable))


def test_chart_series_both_profitable(make_params):
    """Test series follow the unleveraged schedule from a zero point."""
    comparison = compare_strategies(make_params())
    series = chart_series(comparison.with_leverage, comparison.without_leverage)

    assert len(series["x"]) == 11
    np.testing.assert_array_equal(series["x"][:4], [0, 150, 300, 450])
    assert series["x"][-1] == 1500
    assert series["y_with"][0] == 0
    assert series["y_without"][0] == 0
    np.testing.assert_allclose(
        series["y_with"][1:5], [120000.0, 330000.0, 1012500.0, 3230625.0]
    )
    assert np.all(np.isnan(series["y_with"][5:]))
    assert series["y_without"][1] == pytest.approx(30000.0)


def test_chart_series_only_leveraged_profitable(make_params):
    """Test the unleveraged series is a loss line indexed by cycle."""
    comparison = compare_strategies(make_params(withdrawals_per_month=2000.0))
    assert comparison.with_leverage.profitable
    assert not comparison.without_leverage.profitable

    series = chart_series(comparison.with_leverage, comparison.without_leverage)

    np.testing.assert_array_equal(series["x"], np.arange(8))
    assert series["y_with"][0] == 0
    np.testing.assert_allclose(
        series["y_with"][1:5], [120000.0, 270000.0, 757500.0, 2341875.0]
    )
    assert np.all(np.isnan(series["y_with"][5:]))
    np.testing.assert_allclose(series["y_without"], -4000.0 * np.arange(8))


def test_chart_series_leveraged_unprofitable(make_params):
    """Test there is nothing to plot when the leveraged run fails."""
    comparison = compare_strategies(make_params(withdrawals_per_month=10000.0))
    series = chart_series(comparison.with_leverage, comparison.without_leverage)

    assert all(len(values) == 0 for values in series.values())


def test_summary(make_params):
    """Test summary of the default comparison."""
    stats = summary(compare_strategies(make_params()))

    assert stats["speedup"] == 2.5
    assert stats["with_leverage"]["days_to_target"] == 600
    assert stats["with_leverage"]["cycles"] == 4
    assert stats["without_leverage"]["days_to_target"] == 1500
    assert stats["without_leverage"]["final_revenue_ratio"] >= 10


def test_summary_unprofitable(make_params):
    """Test summary reports the loss per cycle."""
    stats = summary(compare_strategies(make_params(withdrawals_per_month=2000.0)))

    assert stats["speedup"] == math.inf
    assert stats["without_leverage"] == {
        "profitable": False,
        "loss_per_cycle": pytest.approx(-4000.0),
    }
