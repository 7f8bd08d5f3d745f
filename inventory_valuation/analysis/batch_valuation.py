'''
Batch valuation for many inventory positions under one scenario.

This module provides tools to:
1. Load an inventory table (one SKU per row) from CSV or Parquet
2. Value every position under the same scenario
3. Export results to CSV for further analysis

Input columns are InventoryFacts field names (snake_case or camelCase).
Missing numeric columns are treated as zero and blank cells coerce to zero.

Usage (CLI):
  python -m inventory_valuation.analysis.batch_valuation \
    --input data/inventory.csv \
    --scenario default \
    --output results/inventory_valuation.csv \
    -v

Usage (Python API):
  from inventory_valuation.analysis.batch_valuation import batch_valuation
  from inventory_valuation.analysis.batch_valuation import facts_from_frame
  from inventory_valuation.analysis.batch_valuation import load_inventory_table
  from inventory_valuation.scenarios.config import ScenarioConfig

  items = facts_from_frame(load_inventory_table(Path('inventory.csv')))
  df = batch_valuation(items, config=ScenarioConfig.default())
  df.to_csv('results.csv', index=False)
'''

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from inventory_valuation.domain.types import InventoryFacts, ValuationResult
from inventory_valuation.domain.validation import coerce_facts_dict
from inventory_valuation.domain.validation import NUMERIC_FIELDS
from inventory_valuation.domain.validation import validate_facts
from inventory_valuation.formatting import format_amount
from inventory_valuation.run import run_valuation
from inventory_valuation.scenarios.config import SCENARIO_PRESETS
from inventory_valuation.scenarios.config import ScenarioConfig

logger = logging.getLogger(__name__)

_CAMEL_COLUMNS = {
    'originalCost': 'original_cost',
    'ageMonths': 'age_months',
    'currentMarketValue': 'current_market_value',
    'freightPercent': 'freight_percent',
    'laborPercent': 'labor_percent',
    'overheadPercent': 'overhead_percent',
    'costsIncluded': 'costs_included',
    'costToComplete': 'cost_to_complete',
    'costToSell': 'cost_to_sell',
    'valuationMethod': 'valuation_method',
}

_FACT_COLUMNS = set(NUMERIC_FIELDS) | {
    'costs_included', 'valuation_method', 'currency', 'sku'
}


def load_inventory_table(path: Path) -> pd.DataFrame:
  '''
  Load an inventory table from CSV or Parquet.

  Raises:
    FileNotFoundError: If the file does not exist
    ValueError: If the file type is not supported
  '''
  if not path.exists():
    raise FileNotFoundError(f'Inventory table not found: {path}')

  suffix = path.suffix.lower()
  if suffix == '.csv':
    return pd.read_csv(path, dtype={'sku': str})
  if suffix == '.parquet':
    return pd.read_parquet(path)
  raise ValueError(f'Unsupported inventory table format: {path.suffix}. '
                   'Use .csv or .parquet')


def facts_from_frame(df: pd.DataFrame) -> List[InventoryFacts]:
  '''
  Convert an inventory table into facts, one per row.

  Unknown columns are ignored. Missing numeric columns are zero rather than
  the single-position sample defaults.

  Raises:
    ValueError: If a row names an unknown valuation method
  '''
  frame = df.rename(columns=_CAMEL_COLUMNS)
  items: List[InventoryFacts] = []

  for record in frame.to_dict(orient='records'):
    raw: Dict[str, Any] = {name: 0.0 for name in NUMERIC_FIELDS}
    raw['costs_included'] = False
    raw.update({k: v for k, v in record.items() if k in _FACT_COLUMNS})
    items.append(InventoryFacts.from_dict(coerce_facts_dict(raw)))

  return items


def _result_to_dict(
    index: int,
    facts: InventoryFacts,
    scenario_name: str,
    result: Optional[ValuationResult],
    excluded_reason: Optional[str] = None,
) -> dict:
  '''Flatten one position into a DataFrame row.'''
  row: Dict[str, Any] = {
      'row': index,
      'sku': facts.sku,
      'scenario': scenario_name,
      'original_cost': facts.original_cost,
      'age_months': facts.age_months,
      'current_market_value': facts.current_market_value,
      'excluded_reason': excluded_reason,
  }
  if result is not None:
    row.update(result.to_dict())
  return row


def batch_valuation(
    items: Sequence[InventoryFacts],
    config: ScenarioConfig,
    verbose: bool = False,
) -> pd.DataFrame:
  '''
  Value many positions under one scenario.

  Positions that fail validation are not valued; they appear in the output
  with excluded_reason set and NaN metrics.

  Args:
    items: Inventory facts, one per position
    config: ScenarioConfig applied to every position
    verbose: Log each position as it is valued

  Returns:
    DataFrame with columns:
    - row, sku, scenario: Position identity
    - original_cost, age_months, current_market_value: Key inputs
    - excluded_reason: Validation failure codes, or None
    - cost_basis ... margin_impact: ValuationResult metrics
    - method and policy diagnostics

  Raises:
    ValueError: If items is empty
    KeyError: If the scenario names an unknown policy
  '''
  if not items:
    raise ValueError('No inventory positions to value')

  rows = []
  for i, facts in enumerate(items, 1):
    label = facts.sku or f'row {i}'
    reasons = validate_facts(facts)
    if reasons:
      codes = ','.join(r.code for r in reasons)
      logger.warning('Skipping %s: %s', label,
                     '; '.join(r.reason for r in reasons))
      rows.append(_result_to_dict(i, facts, config.name, None, codes))
      continue

    result = run_valuation(facts, config)
    rows.append(_result_to_dict(i, facts, config.name, result))

    if verbose:
      logger.info('[%d/%d] %s: adjusted=%s, write-down=%s, locked=%.1f%%', i,
                  len(items), label,
                  format_amount(result.adjusted_inventory_value,
                                facts.currency),
                  format_amount(result.total_write_down, facts.currency),
                  result.capital_locked_percent)

  return pd.DataFrame(rows)


def summarize(df: pd.DataFrame) -> Dict[str, float]:
  '''
  Portfolio totals over the valued (non-excluded) positions.

  Returns:
    Dictionary with positions, excluded, total_cost_basis,
    total_adjusted_value, total_write_down and capital_locked_percent
  '''
  valued = df[df['excluded_reason'].isna()]
  total_cost = float(valued['cost_basis'].sum()) if len(valued) else 0.0
  total_adjusted = (float(valued['adjusted_inventory_value'].sum())
                    if len(valued) else 0.0)
  total_write_down = total_cost - total_adjusted

  return {
      'positions': float(len(df)),
      'excluded': float(len(df) - len(valued)),
      'total_cost_basis': total_cost,
      'total_adjusted_value': total_adjusted,
      'total_write_down': total_write_down,
      'capital_locked_percent': (total_write_down / total_cost *
                                 100 if total_cost else float('nan')),
  }


def _print_summary(df: pd.DataFrame, currency: str) -> None:
  '''Print summary statistics for batch valuation results.'''
  stats = summarize(df)

  logger.info('')
  logger.info('=' * 70)
  logger.info('Summary Statistics')
  logger.info('=' * 70)
  logger.info('Total positions: %d', stats['positions'])
  logger.info('Excluded: %d', stats['excluded'])
  logger.info('')
  logger.info('Cost Basis:     %s',
              format_amount(stats['total_cost_basis'], currency))
  logger.info('Adjusted Value: %s',
              format_amount(stats['total_adjusted_value'], currency))
  logger.info('Write-Down:     %s',
              format_amount(stats['total_write_down'], currency))
  logger.info('Capital Locked: %.1f%%', stats['capital_locked_percent'])

  valued = df[df['excluded_reason'].isna()]
  if len(valued) > 0:
    logger.info('')
    logger.info('Top 5 write-downs:')
    top5 = valued.nlargest(5, 'total_write_down')
    for _, row in top5.iterrows():
      logger.info('  %s: write-down=%s, locked=%.1f%%',
                  row['sku'] if pd.notna(row['sku']) else f"row {row['row']}",
                  format_amount(row['total_write_down'], currency),
                  row['capital_locked_percent'])

  logger.info('=' * 70)


def main() -> None:
  '''CLI entrypoint for batch valuation.'''
  parser = argparse.ArgumentParser(
      description='Batch valuation for an inventory table',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog=__doc__,
  )

  parser.add_argument('--input',
                      type=Path,
                      required=True,
                      help='Inventory table (.csv or .parquet)')

  parser.add_argument('--scenario',
                      type=str,
                      default='default',
                      help='Scenario name (default: default)')

  parser.add_argument('--scenario-file',
                      type=Path,
                      help='JSON scenario config (overrides --scenario)')

  parser.add_argument('--output',
                      type=Path,
                      required=True,
                      help='Output CSV file path')

  parser.add_argument('--currency',
                      type=str,
                      default='$',
                      help='Currency symbol for the summary (default: $)')

  parser.add_argument('-v',
                      '--verbose',
                      action='store_true',
                      help='Verbose output')

  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )

  if args.scenario_file:
    config = ScenarioConfig.from_json(
        args.scenario_file.read_text(encoding='utf-8'))
  elif args.scenario in SCENARIO_PRESETS:
    config = SCENARIO_PRESETS[args.scenario]()
  else:
    available = ', '.join(SCENARIO_PRESETS.keys())
    raise ValueError(
        f'Unknown scenario: {args.scenario}. Available: {available}')

  items = facts_from_frame(load_inventory_table(args.input))
  logger.info('Loaded %d positions from %s', len(items), args.input)
  logger.info('Using scenario: %s', config.name)
  logger.info('')

  results = batch_valuation(items, config=config, verbose=args.verbose)

  args.output.parent.mkdir(parents=True, exist_ok=True)
  results.to_csv(args.output, index=False)

  logger.info('')
  logger.info('Saved %d results to %s', len(results), args.output)

  _print_summary(results, args.currency)


if __name__ == '__main__':
  main()
