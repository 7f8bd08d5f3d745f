"""
Caller-side input coercion and validation.

The engine never validates: it turns whatever it is given into numbers,
including inf and nan. Callers that collect facts from forms or files use
these helpers to coerce raw entries and reject positions that cannot be
valued meaningfully before calling the engine.
"""

import re
from math import isnan
from typing import Any, Dict, List, Mapping

from inventory_valuation.domain.types import ExclusionReason
from inventory_valuation.domain.types import InventoryFacts

NUMERIC_FIELDS = (
    'original_cost',
    'age_months',
    'current_market_value',
    'freight_percent',
    'labor_percent',
    'overhead_percent',
    'cost_to_complete',
    'cost_to_sell',
)

_NUMBER_PREFIX = re.compile(
    r'[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')

_TRUE_STRINGS = {'true', 'yes', 'y', '1', 'on'}


def coerce_number(value: Any) -> float:
  """
  Coerce a raw entry to float.

  Numbers pass through. Strings are read by their leading numeric prefix
  (thousands separators allowed), so '12abc' is 12.0. Blank, missing or
  unparseable entries become 0.0.
  """
  if value is None or isinstance(value, bool):
    return 0.0
  if isinstance(value, (int, float)):
    number = float(value)
    return 0.0 if isnan(number) else number
  text = str(value).strip().replace(',', '')
  match = _NUMBER_PREFIX.match(text)
  if match is None:
    return 0.0
  return float(match.group().replace('Infinity', 'inf'))


def coerce_bool(value: Any) -> bool:
  """Coerce a raw checkbox / cell entry to bool."""
  if isinstance(value, bool):
    return value
  if value is None:
    return False
  if isinstance(value, (int, float)):
    return not isnan(value) and value != 0
  return str(value).strip().lower() in _TRUE_STRINGS


def coerce_facts_dict(data: Mapping[str, Any]) -> Dict[str, Any]:
  """
  Coerce a raw mapping (form post, CSV row) into clean facts fields.

  Only keys present in the input are returned, so InventoryFacts defaults
  still apply to anything missing.
  """
  clean: Dict[str, Any] = {}
  for key, value in data.items():
    if key in NUMERIC_FIELDS:
      clean[key] = coerce_number(value)
    elif key == 'costs_included':
      clean[key] = coerce_bool(value)
    elif key in ('valuation_method', 'currency', 'sku'):
      if value is None or (isinstance(value, float) and isnan(value)):
        continue
      text = str(value).strip()
      if text:
        clean[key] = text
    else:
      clean[key] = value
  return clean


def validate_facts(facts: InventoryFacts) -> List[ExclusionReason]:
  """
  Check the preconditions the engine assumes but does not enforce.

  Args:
    facts: Facts about to be valued

  Returns:
    List of ExclusionReason, empty if the facts are valid
  """
  reasons: List[ExclusionReason] = []

  if not facts.original_cost > 0:
    reasons.append(
        ExclusionReason(
            reason='Original cost must be greater than zero',
            code='non_positive_cost',
            details={'original_cost': facts.original_cost},
        ))

  if not facts.current_market_value >= 0:
    reasons.append(
        ExclusionReason(
            reason='Current market value cannot be negative',
            code='negative_market_value',
            details={'current_market_value': facts.current_market_value},
        ))

  if not facts.age_months >= 0:
    reasons.append(
        ExclusionReason(
            reason='Age in months cannot be negative',
            code='negative_age',
            details={'age_months': facts.age_months},
        ))

  for name in ('freight_percent', 'labor_percent', 'overhead_percent',
               'cost_to_complete', 'cost_to_sell'):
    value = getattr(facts, name)
    if not value >= 0:
      reasons.append(
          ExclusionReason(
              reason=f'{name} cannot be negative',
              code='negative_input',
              details={name: value},
          ))

  return reasons
