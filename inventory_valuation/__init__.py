'''
Inventory valuation framework with policy-based architecture.

This package values slow-moving inventory: it derives cost basis, net
realizable value and an age-reserve adjusted value, then applies a valuation
method (NRV, age-based or conservative) to get the adjusted carrying value,
write-down, capital locked and margin impact. The method and the reserve table
are independent policies that can be swapped or compared.

Usage:
  from inventory_valuation.domain.types import InventoryFacts
  from inventory_valuation.run import run_valuation
  from inventory_valuation.scenarios.config import ScenarioConfig

  facts = InventoryFacts(original_cost=12000, age_months=8,
                         current_market_value=9000)
  result = run_valuation(facts, config=ScenarioConfig.default())
'''
