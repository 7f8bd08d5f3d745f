"""
Scenario configuration for inventory valuation runs.

ScenarioConfig is a serializable (JSON-friendly) configuration class that
specifies which method and reserve table to apply to a set of facts. Batch
runs apply one scenario to every position so results are comparable.
"""

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
import json
from typing import Any


@dataclass
class ScenarioConfig:
  """
  Configuration for a valuation scenario.

  Policy fields are strings that map to factories in the registry. This
  makes the config serializable to JSON for reproducibility.

  Attributes:
    name: Human-readable scenario name
    method: Valuation method name ('nrv', 'age', 'conservative')
    reserve_table: Reserve table name (e.g., 'default', 'none', 'strict')
    currency: Currency symbol for reported amounts; None keeps the facts'
    policy_params: Optional dict of policy-specific parameters. The key
      'age_reserve_table' (list of band dicts) overrides reserve_table.
  """
  name: str = 'default'
  method: str = 'conservative'
  reserve_table: str = 'default'
  currency: str | None = None
  policy_params: dict[str, Any] = field(default_factory=dict)

  @classmethod
  def default(cls) -> 'ScenarioConfig':
    """
    Create default scenario configuration.

    Uses:
      - Conservative method (lowest of cost, NRV, age-adjusted)
      - Default reserve table (0/10/25/50% at 0/3/6/12 months)
    """
    return cls(name='default', method='conservative', reserve_table='default')

  @classmethod
  def nrv_only(cls) -> 'ScenarioConfig':
    """Scenario using lower of cost and NRV, ignoring age."""
    return cls(name='nrv_only', method='nrv', reserve_table='default')

  @classmethod
  def age_only(cls) -> 'ScenarioConfig':
    """Scenario using the age-adjusted value alone."""
    return cls(name='age_only', method='age', reserve_table='default')

  @classmethod
  def strict_reserves(cls) -> 'ScenarioConfig':
    """Conservative method with the strict reserve table."""
    return cls(name='strict_reserves',
               method='conservative',
               reserve_table='strict')

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    return asdict(self)

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'ScenarioConfig':
    """Create from dictionary."""
    return cls(**data)

  @classmethod
  def from_json(cls, json_str: str) -> 'ScenarioConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))


SCENARIO_PRESETS = {
    'default': ScenarioConfig.default,
    'nrv_only': ScenarioConfig.nrv_only,
    'age_only': ScenarioConfig.age_only,
    'strict_reserves': ScenarioConfig.strict_reserves,
}
