import pandas as pd
import pytest

from inventory_valuation.domain.types import AgeReserveBand
from inventory_valuation.domain.types import InventoryFacts
from inventory_valuation.domain.types import ValuationMethod


def _make_facts(method: ValuationMethod, **overrides) -> InventoryFacts:
  """Helper to create facts from the sample position with overrides."""
  base = InventoryFacts.sample()
  values = base.to_dict()
  values.update(overrides)
  values['valuation_method'] = method
  return InventoryFacts.from_dict(values)


@pytest.fixture
def sample_facts() -> InventoryFacts:
  """The sample position: $12,000 cost, 8 months old, $9,000 market."""
  return InventoryFacts.sample()


@pytest.fixture
def fresh_facts() -> InventoryFacts:
  """Young stock with costs already included and a healthy market."""
  return _make_facts(
      ValuationMethod.CONSERVATIVE,
      original_cost=10000,
      age_months=1,
      current_market_value=15000,
      costs_included=True,
      cost_to_complete=0,
      cost_to_sell=500,
  )


@pytest.fixture
def stale_facts() -> InventoryFacts:
  """Two-year-old stock whose market has collapsed below selling costs."""
  return _make_facts(
      ValuationMethod.CONSERVATIVE,
      original_cost=5000,
      age_months=24,
      current_market_value=800,
      freight_percent=0,
      labor_percent=0,
      overhead_percent=0,
      cost_to_complete=200,
      cost_to_sell=900,
  )


@pytest.fixture
def quarterly_table() -> tuple[AgeReserveBand, ...]:
  """Custom two-band reserve table."""
  return (
      AgeReserveBand(0, 3, 0, '< 1 quarter'),
      AgeReserveBand(3, None, 20, '> 1 quarter'),
  )


@pytest.fixture
def inventory_frame() -> pd.DataFrame:
  """Inventory table as it would come out of a CSV export."""
  return pd.DataFrame({
      'sku': ['A-100', 'B-200', 'C-300', 'D-400'],
      'original_cost': [12000, 5000, 0, 2000],
      'age_months': [8, 24, 2, 4],
      'current_market_value': [9000, 800, 100, 2500],
      'freight_percent': [10, 0, 0, 5],
      'labor_percent': [25, 0, 0, 5],
      'overhead_percent': [15, 0, 0, 0],
      'costs_included': [False, False, False, True],
      'cost_to_complete': [1000, 200, 0, 0],
      'cost_to_sell': [500, 900, 0, 100],
  })
