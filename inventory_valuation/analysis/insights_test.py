from dataclasses import replace

from inventory_valuation.analysis.insights import build_insights
from inventory_valuation.analysis.insights import STANDING_RECOMMENDATIONS
from inventory_valuation.run import evaluate


class TestBuildInsights:
  """Tests for build_insights."""

  def test_sample_position(self, sample_facts):
    """58% capital locked triggers the urgent recommendation."""
    insights = build_insights(sample_facts, evaluate(sample_facts))

    assert insights.insights == [
        'You currently have $10,500 tied up in slow-moving stock.',
        'Adjusted value is 41.7% of your original cost.',
        'If sold at current market, margin would change by 116.67 '
        'percentage points.',
    ]
    assert insights.recommendations[0] == (
        'Consider liquidating or repurposing this inventory urgently')
    assert insights.recommendations[1:] == list(STANDING_RECOMMENDATIONS)

  def test_healthy_position(self, fresh_facts):
    """Nothing locked means monitoring only."""
    insights = build_insights(fresh_facts, evaluate(fresh_facts))

    assert insights.insights[0] == (
        'You currently have $0 tied up in slow-moving stock.')
    assert insights.insights[1] == 'Adjusted value is 100.0% of your original cost.'
    assert insights.recommendations[0] == (
        'Monitor this inventory closely to prevent further devaluation')

  def test_currency_used(self, sample_facts):
    facts = replace(sample_facts, currency='€')
    insights = build_insights(facts, evaluate(facts))

    assert insights.insights[0].startswith('You currently have €10,500')
