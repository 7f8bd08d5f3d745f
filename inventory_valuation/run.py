'''
Single-position valuation entrypoint.

This module provides the main entry point for valuing inventory. It:
1. Resolves the reserve and method policies named by the facts
2. Runs the pure math engine in strict order
3. Returns ValuationResult with full diagnostics

Usage:
  from inventory_valuation.domain.types import InventoryFacts
  from inventory_valuation.run import evaluate

  result = evaluate(InventoryFacts(original_cost=12000, age_months=8))
  print(f"Adjusted: ${result.adjusted_inventory_value:,.0f}")
'''

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from inventory_valuation.analysis.insights import build_insights
from inventory_valuation.domain.types import InventoryFacts, ValuationResult
from inventory_valuation.domain.validation import coerce_facts_dict
from inventory_valuation.domain.validation import validate_facts
from inventory_valuation.engine.inventory import (
    compute_age_adjusted_value,
    compute_cost_basis,
    compute_margins,
    compute_net_realizable_value,
    compute_write_down,
)
from inventory_valuation.formatting import format_amount, format_percent
from inventory_valuation.policies.reserve import TableReserve
from inventory_valuation.scenarios.config import SCENARIO_PRESETS
from inventory_valuation.scenarios.config import ScenarioConfig
from inventory_valuation.scenarios.registry import apply_scenario
from inventory_valuation.scenarios.registry import create_method_policy

logger = logging.getLogger(__name__)


def evaluate(facts: InventoryFacts) -> ValuationResult:
  '''
  Value one inventory position.

  Pure and deterministic. No validation is performed and nothing is raised
  for degenerate numbers: a zero cost basis or zero market value yields
  inf/nan ratios. Callers wanting strict inputs run
  domain.validation.validate_facts first.

  Args:
    facts: Inventory facts, including method and reserve table

  Returns:
    ValuationResult with all derived metrics and policy diagnostics
  '''
  cost_basis = compute_cost_basis(
      original_cost=facts.original_cost,
      freight_percent=facts.freight_percent,
      labor_percent=facts.labor_percent,
      overhead_percent=facts.overhead_percent,
      costs_included=facts.costs_included,
  )

  net_realizable_value = compute_net_realizable_value(
      current_market_value=facts.current_market_value,
      cost_to_complete=facts.cost_to_complete,
      cost_to_sell=facts.cost_to_sell,
  )

  reserve_result = TableReserve(facts.age_reserve_table).compute(
      facts.age_months)
  age_adjusted_value = compute_age_adjusted_value(cost_basis,
                                                  reserve_result.value)

  method_result = create_method_policy(facts.valuation_method).compute(
      cost_basis=cost_basis,
      net_realizable_value=net_realizable_value,
      age_adjusted_value=age_adjusted_value,
  )
  adjusted_inventory_value = method_result.value

  total_write_down, capital_locked_percent = compute_write_down(
      cost_basis, adjusted_inventory_value)

  original_margin, adjusted_margin, margin_impact = compute_margins(
      selling_price=facts.current_market_value,
      cost_basis=cost_basis,
      adjusted_inventory_value=adjusted_inventory_value,
  )

  diag: Dict[str, Any] = {}
  diag.update(reserve_result.diag)
  diag.update({f'method_{k}': v for k, v in method_result.diag.items()})

  return ValuationResult(
      cost_basis=cost_basis,
      net_realizable_value=net_realizable_value,
      reserve_percent=reserve_result.value,
      age_adjusted_value=age_adjusted_value,
      adjusted_inventory_value=adjusted_inventory_value,
      total_write_down=total_write_down,
      capital_locked_percent=capital_locked_percent,
      original_margin=original_margin,
      adjusted_margin=adjusted_margin,
      margin_impact=margin_impact,
      method=facts.valuation_method,
      diag=diag,
  )


def run_valuation(
    facts: InventoryFacts,
    config: Optional[ScenarioConfig] = None,
) -> ValuationResult:
  '''
  Value a position under an optional scenario.

  Args:
    facts: Inventory facts
    config: ScenarioConfig overriding method, reserve table and currency
      (default: use the facts as given)

  Returns:
    ValuationResult; diag carries the scenario name when one was applied

  Raises:
    KeyError: If the scenario names an unknown policy
  '''
  if config is not None:
    facts = apply_scenario(facts, config)

  result = evaluate(facts)
  if config is not None:
    result.diag['scenario'] = config.name

  logger.debug('%s: method=%s band=%s adjusted=%s', facts.sku or 'position',
               facts.valuation_method.value, result.diag.get('reserve_label'),
               result.adjusted_inventory_value)
  return result


def load_facts(path: Path) -> InventoryFacts:
  '''
  Load facts from a JSON file.

  Raw values are coerced the way the input form does: blank or unparseable
  numbers become zero.

  Raises:
    FileNotFoundError: If the file does not exist
    ValueError: If the JSON is not an object or names an unknown method
  '''
  if not path.exists():
    raise FileNotFoundError(f'Facts file not found: {path}')

  data = json.loads(path.read_text(encoding='utf-8'))
  if not isinstance(data, dict):
    raise ValueError(f'Facts file must contain a JSON object: {path}')
  return InventoryFacts.from_dict(coerce_facts_dict(_snake_keys(data)))


def _snake_keys(data: Dict[str, Any]) -> Dict[str, Any]:
  '''Rename camelCase keys so coercion sees the snake_case field names.'''
  out: Dict[str, Any] = {}
  for key, value in data.items():
    snake = ''.join(f'_{c.lower()}' if c.isupper() else c for c in key)
    out[snake] = value
  return out


_FIELD_FLAGS = (
    ('original_cost', 'Original cost before landed costs'),
    ('age_months', 'Age of the stock in months'),
    ('current_market_value', 'Current resale estimate'),
    ('freight_percent', 'Freight as percent of original cost'),
    ('labor_percent', 'Labor as percent of original cost'),
    ('overhead_percent', 'Overhead as percent of original cost'),
    ('cost_to_complete', 'Cost to complete before sale'),
    ('cost_to_sell', 'Cost to sell'),
)


def _build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(description='Run inventory valuation')
  parser.add_argument('--facts',
                      type=Path,
                      help='JSON file with inventory facts')
  for name, help_text in _FIELD_FLAGS:
    parser.add_argument(f'--{name.replace("_", "-")}',
                        dest=name,
                        type=str,
                        default=None,
                        help=help_text)
  parser.add_argument('--costs-included',
                      action='store_true',
                      default=None,
                      help='Freight, labor and overhead already in cost')
  parser.add_argument('--method',
                      type=str,
                      default=None,
                      help='Valuation method: nrv, age, conservative')
  parser.add_argument('--currency', type=str, default=None)
  parser.add_argument(
      '--scenario',
      type=str,
      default=None,
      choices=sorted(SCENARIO_PRESETS),
      help='Scenario preset (overrides --method)',
  )
  return parser


def _facts_from_args(args: argparse.Namespace) -> InventoryFacts:
  facts = load_facts(args.facts) if args.facts else InventoryFacts.sample()

  overrides: Dict[str, Any] = {}
  for name, _ in _FIELD_FLAGS:
    raw = getattr(args, name)
    if raw is not None:
      overrides[name] = raw
  if args.costs_included:
    overrides['costs_included'] = True
  if args.method:
    overrides['valuation_method'] = args.method
  if args.currency:
    overrides['currency'] = args.currency

  return replace(facts, **coerce_facts_dict(overrides))


def report_lines(facts: InventoryFacts, result: ValuationResult) -> List[str]:
  '''Human-readable report of a valuation, one line per entry.'''
  cur = facts.currency
  lines = [
      f'Method: {result.method.value}',
      f'Reserve band: {result.diag.get("reserve_label")} '
      f'({format_percent(result.reserve_percent, 0)})',
      '',
      'Valuation Result:',
      f'  Cost Basis: {format_amount(result.cost_basis, cur)}',
      f'  Net Realizable Value: '
      f'{format_amount(result.net_realizable_value, cur)}',
      f'  Age-Adjusted Value: {format_amount(result.age_adjusted_value, cur)}',
      f'  Adjusted Inventory Value: '
      f'{format_amount(result.adjusted_inventory_value, cur)}',
      f'  Total Write-Down: {format_amount(result.total_write_down, cur)}',
      f'  Capital Locked: {format_percent(result.capital_locked_percent)}',
      '',
      'Margin Impact:',
      f'  Original Margin: {format_percent(result.original_margin, 2)}',
      f'  Adjusted Margin: {format_percent(result.adjusted_margin, 2)}',
      f'  Impact: {result.margin_impact:+.2f} pts',
  ]

  insights = build_insights(facts, result)
  lines.append('')
  lines.append('Key Insights:')
  lines.extend(f'  - {text}' for text in insights.insights)
  lines.append('')
  lines.append('Recommendations:')
  lines.extend(f'  - {text}' for text in insights.recommendations)
  return lines


def main(argv: Optional[List[str]] = None) -> int:
  '''CLI entrypoint.'''
  args = _build_parser().parse_args(argv)

  try:
    facts = _facts_from_args(args)
  except (FileNotFoundError, ValueError) as e:
    logger.error('%s', e)
    return 2

  reasons = validate_facts(facts)
  if reasons:
    for reason in reasons:
      logger.error('Invalid input (%s): %s', reason.code, reason.reason)
    return 2

  config = None
  if args.scenario:
    config = SCENARIO_PRESETS[args.scenario]()
    facts = apply_scenario(facts, config)
  result = run_valuation(facts)

  separator = '=' * 70
  logger.info('\n%s', separator)
  logger.info('Inventory Valuation%s',
              f' - {facts.sku}' if facts.sku else '')
  if config is not None:
    logger.info('Scenario: %s', config.name)
  logger.info(separator)
  for line in report_lines(facts, result):
    logger.info('%s', line)
  logger.info('%s\n', separator)
  return 0


def cli() -> None:
  '''Console script entrypoint.'''
  logging.basicConfig(
      level=logging.INFO,
      format='%(message)s',
  )
  sys.exit(main())


if __name__ == '__main__':
  cli()
