"""
Policy registry for mapping string names to policy factories.

This enables facts and scenarios to name their method and reserve table as
plain strings (JSON friendly) while still instantiating the correct policy
classes.

To add a new reserve table:
1. Define the bands as a tuple of AgeReserveBand
2. Register a factory here in RESERVE_TABLES

Example:
  QUARTERLY_RESERVES = (
      AgeReserveBand(0, 3, 0, '< 1 quarter'),
      AgeReserveBand(3, None, 20, '> 1 quarter'),
  )
  RESERVE_TABLES['quarterly'] = lambda: TableReserve(QUARTERLY_RESERVES)
"""

from collections.abc import Callable
from dataclasses import replace
from typing import Any, cast

from inventory_valuation.domain.types import AgeReserveBand
from inventory_valuation.domain.types import bands_from_list
from inventory_valuation.domain.types import InventoryFacts
from inventory_valuation.domain.types import ValuationMethod
from inventory_valuation.policies.method import AgeBasedMethod
from inventory_valuation.policies.method import ConservativeMethod
from inventory_valuation.policies.method import MethodPolicy
from inventory_valuation.policies.method import NRVMethod
from inventory_valuation.policies.reserve import TableReserve
from inventory_valuation.scenarios.config import ScenarioConfig

NO_RESERVES = (AgeReserveBand(0, None, 0, 'any age'),)

STRICT_RESERVES = (
    AgeReserveBand(0, 3, 0, '< 3 months'),
    AgeReserveBand(3, 6, 20, '3-6 months'),
    AgeReserveBand(6, 12, 50, '6-12 months'),
    AgeReserveBand(12, 24, 75, '12-24 months'),
    AgeReserveBand(24, None, 100, '> 24 months'),
)

METHOD_POLICIES: dict[str, Callable[[], MethodPolicy]] = {
    ValuationMethod.NRV.value: NRVMethod,
    ValuationMethod.AGE_BASED.value: AgeBasedMethod,
    ValuationMethod.CONSERVATIVE.value: ConservativeMethod,
}

RESERVE_TABLES: dict[str, Callable[[], TableReserve]] = {
    'default': TableReserve,
    'none': lambda: TableReserve(NO_RESERVES),
    'strict': lambda: TableReserve(STRICT_RESERVES),
}

POLICY_REGISTRY = {
    'method': METHOD_POLICIES,
    'reserve_table': RESERVE_TABLES,
}


def create_method_policy(method: Any) -> MethodPolicy:
  """
  Create the method policy for a ValuationMethod or method name.

  Raises:
    KeyError: If the method is not registered
  """
  try:
    key = ValuationMethod.parse(method).value
    factory = METHOD_POLICIES[key]
  except (ValueError, KeyError) as e:
    raise KeyError(f"Unknown method policy: '{method}'. "
                   f'Available: {list(METHOD_POLICIES.keys())}') from e
  return factory()


def create_policies(config: ScenarioConfig) -> dict[str, Any]:
  """
  Create policy instances from scenario configuration.

  Args:
    config: ScenarioConfig with policy names

  Returns:
    Dictionary with instantiated policy objects:
    - method: MethodPolicy
    - reserve: TableReserve

  Raises:
    KeyError: If a policy name is not found in the registry
  """
  method_policy = create_method_policy(config.method)

  custom_table = config.policy_params.get('age_reserve_table')
  if custom_table is not None:
    reserve_policy = TableReserve(bands_from_list(custom_table))
  else:
    try:
      reserve_factory = RESERVE_TABLES[config.reserve_table]
    except KeyError as e:
      raise KeyError(f"Unknown reserve table: '{config.reserve_table}'. "
                     f'Available: {list(RESERVE_TABLES.keys())}') from e
    reserve_policy = reserve_factory()

  return {
      'method': method_policy,
      'reserve': reserve_policy,
  }


def apply_scenario(facts: InventoryFacts,
                   config: ScenarioConfig) -> InventoryFacts:
  """
  Return a copy of facts with the scenario's method, table and currency.

  Raises:
    KeyError: If a policy name is not found in the registry
  """
  policies = create_policies(config)
  changes: dict[str, Any] = {
      'valuation_method': policies['method'].method,
      'age_reserve_table': policies['reserve'].table,
  }
  if config.currency is not None:
    changes['currency'] = config.currency
  return replace(facts, **changes)


def list_policies() -> dict[str, list[str]]:
  """
  List all available policies by category.

  Returns:
    Dictionary mapping category names to list of policy names
  """
  result: dict[str, list[str]] = {}
  for category, policies_dict in POLICY_REGISTRY.items():
    policy_dict = cast(dict[str, object], policies_dict)
    result[category] = list(policy_dict.keys())
  return result
