"""Command-line interface for the Cash-Cycle Growth Simulator.

Runs the leveraged and unleveraged simulations for one set of parameters and
prints the headline, both schedules and optionally a JSON document.
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from typing import Any

from growth_sim.config import (
    DEFAULT_PARAMETERS,
    build_parameters,
    load_parameter_file,
    out_of_range_fields,
)
from growth_sim.errors import GrowthSimError
from growth_sim.formatting import format_days, format_schedule_table, format_speedup
from growth_sim.logging_config import VALID_LOG_LEVELS, configure_logging
from growth_sim.metrics import summary
from growth_sim.simulator import DEFAULT_MAX_CYCLES, StrategyComparison, compare_strategies

logger = logging.getLogger(__name__)

# flag -> (parameter name, type, help)
PARAMETER_FLAGS = {
    "--initial-capital": ("initial_capital", float, "Starting equity"),
    "--target-multiple": ("target_multiple", float, "Revenue multiple to reach"),
    "--debt-percentage": (
        "debt_percentage",
        float,
        "Fraction of each project financed with debt, in [0, 1)",
    ),
    "--profit-margin": ("profit_margin", float, "Fraction of revenue kept as profit"),
    "--sales-ratio": (
        "sales_to_purchase_price_ratio",
        float,
        "Ratio of sales price to purchase price",
    ),
    "--fee": ("fee_rate", float, "Cost of debt per cycle as fraction of nominal"),
    "--withdrawals": ("withdrawals_per_month", float, "Cash withdrawn per month"),
    "--cycle": ("cash_conversion_cycle", int, "Cash conversion cycle in days"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cash-Cycle Growth Simulator: debt-financed vs. unfinanced growth"
    )

    for flag, (dest, type_, help_text) in PARAMETER_FLAGS.items():
        parser.add_argument(
            flag,
            dest=dest,
            type=type_,
            default=None,
            help=f"{help_text} (default: {DEFAULT_PARAMETERS[dest]})",
        )

    parser.add_argument(
        "--config", default=None, help="JSON file with parameter overrides"
    )
    parser.add_argument(
        "--max-cycles",
        type=int,
        default=DEFAULT_MAX_CYCLES,
        help="Maximum cycles per run before giving up",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=sorted(VALID_LOG_LEVELS),
        default=None,
        help="Log level (default: LOG_LEVEL environment variable or INFO)",
    )
    parser.add_argument(
        "--json", action="store_true", help="Also print results as JSON"
    )
    return parser


def collect_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Merge the config file and explicit flags; flags win."""
    overrides: dict[str, Any] = {}
    if args.config:
        overrides.update(load_parameter_file(args.config))
    for dest, _, _ in PARAMETER_FLAGS.values():
        value = getattr(args, dest)
        if value is not None:
            overrides[dest] = value
    return overrides


def print_report(
    comparison: StrategyComparison, target_multiple: float, debt_percentage: float
) -> None:
    """Print headline figures and both schedules."""
    print("Cash-Cycle Growth Simulator Results")
    print("=" * 40)
    print(
        f"Achieve your target revenue {format_speedup(comparison.speedup)} faster "
        f"by using {round(debt_percentage * 100)}% of debt financing"
    )
    print(
        f"With financing: {format_days(comparison.with_leverage.days_to_target)} "
        f"to {target_multiple:g}x of initial revenue"
    )
    print(
        f"Without financing: {format_days(comparison.without_leverage.days_to_target)} "
        f"to {target_multiple:g}x of initial revenue"
    )
    print()

    print("With Financing:")
    print(format_schedule_table(comparison.with_leverage))
    print()

    print("Without Financing:")
    print(format_schedule_table(comparison.without_leverage))


def json_summary(comparison: StrategyComparison) -> dict[str, Any]:
    """Summary with an infinite speedup written as null plus a flag."""
    stats = summary(comparison)
    speedup = stats["speedup"]
    stats["speedup_unbounded"] = speedup is not None and math.isinf(speedup)
    if stats["speedup_unbounded"]:
        stats["speedup"] = None
    return stats


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        overrides = collect_overrides(args)
        params = build_parameters(overrides, with_leverage=True)
        for name in out_of_range_fields(overrides):
            logger.warning("%s=%s is outside the typical input range", name, overrides[name])
        comparison = compare_strategies(params, max_cycles=args.max_cycles)
    except (GrowthSimError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print_report(comparison, params.target_multiple, params.debt_percentage)

    if args.json:
        results = {
            "parameters": {
                name: value
                for name, value in vars(params).items()
                if name != "with_leverage"
            },
            "results": {
                "with_leverage": comparison.with_leverage.to_dict(),
                "without_leverage": comparison.without_leverage.to_dict(),
            },
            "summary": json_summary(comparison),
        }
        print("\n" + "=" * 40)
        print("JSON Output:")
        print(json.dumps(results, indent=2, allow_nan=False))

    return 0


if __name__ == "__main__":
    sys.exit(main())
