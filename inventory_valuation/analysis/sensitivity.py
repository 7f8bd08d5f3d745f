"""
Sensitivity analysis for inventory valuation.

This module provides tools to generate 2D sensitivity tables that show how a
valuation metric (adjusted value by default) varies across stock age and
current market value, keeping every other fact fixed.

CLI Usage:
  python -m inventory_valuation.analysis.sensitivity \\
      --facts position.json \\
      --ages 2,4.5,9,15 \\
      --market-values 6000,9000,12000
"""

import argparse
import logging
from dataclasses import fields, replace
from pathlib import Path
from typing import Optional

import pandas as pd

from inventory_valuation.domain.types import InventoryFacts, ValuationResult
from inventory_valuation.formatting import format_amount
from inventory_valuation.run import evaluate, load_facts
from inventory_valuation.scenarios.config import SCENARIO_PRESETS
from inventory_valuation.scenarios.config import ScenarioConfig
from inventory_valuation.scenarios.registry import apply_scenario

logger = logging.getLogger(__name__)

METRICS = tuple(
    f.name for f in fields(ValuationResult) if f.name not in ('method', 'diag'))

# Representative ages for the four default reserve bands.
DEFAULT_AGES = [2.0, 4.5, 9.0, 15.0]


class SensitivityTableBuilder:
  """
  Build 2D sensitivity tables for inventory valuation.

  Varies age in months and current market value while keeping cost, landed
  cost percentages, deductions, method and reserve table fixed.
  """

  def __init__(
      self,
      facts: InventoryFacts,
      base_config: Optional[ScenarioConfig] = None,
  ):
    """
    Initialize sensitivity table builder.

    Args:
        facts: Base inventory facts
        base_config: Optional scenario applied to the facts first
    """
    self.base_config = base_config
    self.facts = (apply_scenario(facts, base_config)
                  if base_config is not None else facts)

    logger.info('Initialized SensitivityTableBuilder')
    logger.info('  Original cost: %s',
                format_amount(self.facts.original_cost, self.facts.currency))
    logger.info('  Method: %s', self.facts.valuation_method.value)

  def build(
      self,
      age_months: list[float],
      market_values: list[float],
      metric: str = 'adjusted_inventory_value',
  ) -> pd.DataFrame:
    """
    Build 2D sensitivity table.

    Args:
        age_months: Ages to evaluate (e.g., [2, 4.5, 9, 15])
        market_values: Current market values to evaluate
        metric: ValuationResult field to tabulate

    Returns:
        DataFrame with ages as index, market values as columns, and the
        metric as cell values

    Raises:
        ValueError: If either axis is empty
        KeyError: If metric is not a ValuationResult metric
    """
    if not age_months:
      raise ValueError('age_months cannot be empty')
    if not market_values:
      raise ValueError('market_values cannot be empty')
    if metric not in METRICS:
      raise KeyError(f"Unknown metric: '{metric}'. Available: {list(METRICS)}")

    logger.info('Building sensitivity table: %d x %d (%s)', len(age_months),
                len(market_values), metric)

    data_rows = []
    for age in age_months:
      row_data = []
      for market_value in market_values:
        result = evaluate(
            replace(self.facts, age_months=age,
                    current_market_value=market_value))
        row_data.append(getattr(result, metric))
      data_rows.append(row_data)

    df = pd.DataFrame(data_rows, index=list(age_months),
                      columns=list(market_values))
    df.index.name = 'Age (months)'
    df.columns.name = 'Market Value'
    return df


def _parse_float_list(s: str) -> list[float]:
  """Parse comma-separated float list."""
  return [float(x.strip()) for x in s.split(',')]


def main() -> None:
  """CLI entrypoint for sensitivity analysis."""
  parser = argparse.ArgumentParser(
      description='Inventory valuation sensitivity analysis',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog=__doc__)

  parser.add_argument('--facts',
                      type=Path,
                      help='JSON facts file (default: sample position)')
  parser.add_argument('--scenario',
                      type=str,
                      choices=sorted(SCENARIO_PRESETS),
                      help='Scenario preset')
  parser.add_argument('--ages',
                      type=str,
                      help='Comma-separated ages in months (e.g., 2,4.5,9)')
  parser.add_argument('--market-values',
                      type=str,
                      help='Comma-separated market values')
  parser.add_argument('--metric',
                      type=str,
                      default='adjusted_inventory_value',
                      choices=METRICS)
  parser.add_argument('--output', type=Path, help='Output CSV path (optional)')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')

  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )

  facts = load_facts(args.facts) if args.facts else InventoryFacts.sample()
  config = SCENARIO_PRESETS[args.scenario]() if args.scenario else None

  if args.ages:
    ages = _parse_float_list(args.ages)
  else:
    ages = DEFAULT_AGES
    logger.warning('No ages specified, using default: %s', ages)

  if args.market_values:
    market_values = _parse_float_list(args.market_values)
  else:
    base = facts.current_market_value
    market_values = [base * 0.5, base * 0.75, base, base * 1.25]
    logger.warning('No market values specified, using: %s', market_values)

  builder = SensitivityTableBuilder(facts, config)
  table = builder.build(ages, market_values, metric=args.metric)

  currency = builder.facts.currency
  is_percent = args.metric.endswith(('percent', 'margin', 'impact'))
  logger.info('\n%s', '=' * 80)
  logger.info('Sensitivity: %s (%s method)', args.metric,
              builder.facts.valuation_method.value)
  logger.info('=' * 80)
  logger.info('\n%s', table.to_string(
      float_format=(lambda x: f'{x:.1f}%') if is_percent else
      (lambda x: format_amount(x, currency))))
  logger.info('=' * 80)

  if args.output:
    table.to_csv(args.output)
    logger.info('Saved to: %s', args.output)


if __name__ == '__main__':
  main()
