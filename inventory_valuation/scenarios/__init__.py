"""Scenario configuration and policy registry."""

from inventory_valuation.scenarios.config import SCENARIO_PRESETS
from inventory_valuation.scenarios.config import ScenarioConfig
from inventory_valuation.scenarios.registry import apply_scenario
from inventory_valuation.scenarios.registry import create_method_policy
from inventory_valuation.scenarios.registry import create_policies
from inventory_valuation.scenarios.registry import list_policies
from inventory_valuation.scenarios.registry import POLICY_REGISTRY

__all__ = [
  'ScenarioConfig',
  'SCENARIO_PRESETS',
  'POLICY_REGISTRY',
  'apply_scenario',
  'create_method_policy',
  'create_policies',
  'list_policies',
]
