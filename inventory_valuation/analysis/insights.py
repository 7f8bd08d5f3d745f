"""
Plain-language insights and recommendations for a valuation.

These are the talking points shown next to the numbers: how much capital is
tied up, how the adjusted value compares to cost, and what to do about it.
"""

from dataclasses import dataclass, field
from typing import List

from inventory_valuation.domain.types import InventoryFacts, ValuationResult
from inventory_valuation.engine.inventory import ieee_divide
from inventory_valuation.formatting import format_amount

URGENT_CAPITAL_LOCKED_PERCENT = 30.0

STANDING_RECOMMENDATIONS = (
    'Review pricing strategy for similar future inventory',
    'Implement age-based monitoring for all inventory items',
)


@dataclass
class Insights:
  '''
  Attributes:
    insights: Observations about the valuation
    recommendations: Suggested actions, most urgent first
  '''
  insights: List[str] = field(default_factory=list)
  recommendations: List[str] = field(default_factory=list)


def build_insights(facts: InventoryFacts, result: ValuationResult) -> Insights:
  """
  Build insights and recommendations for one valuation.

  Positions with more than 30% of capital locked get an urgent
  liquidation recommendation; everything else gets a monitoring one.
  """
  retained = ieee_divide(result.adjusted_inventory_value,
                         result.cost_basis) * 100

  insights = [
      f'You currently have '
      f'{format_amount(result.total_write_down, facts.currency)} '
      f'tied up in slow-moving stock.',
      f'Adjusted value is {retained:.1f}% of your original cost.',
      f'If sold at current market, margin would change by '
      f'{abs(result.margin_impact):.2f} percentage points.',
  ]

  if result.capital_locked_percent > URGENT_CAPITAL_LOCKED_PERCENT:
    lead = 'Consider liquidating or repurposing this inventory urgently'
  else:
    lead = 'Monitor this inventory closely to prevent further devaluation'

  return Insights(insights=insights,
                  recommendations=[lead, *STANDING_RECOMMENDATIONS])
