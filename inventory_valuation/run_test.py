import json
import logging
import math

import pytest

from inventory_valuation.domain.types import AgeReserveBand
from inventory_valuation.domain.types import InventoryFacts
from inventory_valuation.domain.types import ValuationMethod
from inventory_valuation.run import evaluate
from inventory_valuation.run import load_facts
from inventory_valuation.run import main
from inventory_valuation.run import report_lines
from inventory_valuation.run import run_valuation
from inventory_valuation.scenarios.config import ScenarioConfig


class TestEvaluate:
  """Tests for evaluate."""

  def test_sample_position(self, sample_facts):
    """
    Manual calculation:
    Cost basis: 12000 x (1 + 0.10 + 0.25 + 0.15) = 18000
    NRV: 9000 - 1000 - 500 = 7500
    Age 8 months -> 25% reserve -> 18000 x 0.75 = 13500
    Conservative: min(18000, 7500, 13500) = 7500
    Write-down: 10500, capital locked 58.33%
    """
    result = evaluate(sample_facts)

    assert result.cost_basis == pytest.approx(18000)
    assert result.net_realizable_value == 7500
    assert result.reserve_percent == 25
    assert result.age_adjusted_value == pytest.approx(13500)
    assert result.adjusted_inventory_value == pytest.approx(7500)
    assert result.total_write_down == pytest.approx(10500)
    assert result.capital_locked_percent == pytest.approx(58.33, abs=0.01)
    assert result.method is ValuationMethod.CONSERVATIVE

  def test_sample_margins(self, sample_facts):
    result = evaluate(sample_facts)

    assert result.original_margin == pytest.approx(-100.0)
    assert result.adjusted_margin == pytest.approx(16.667, abs=0.001)
    assert result.margin_impact == pytest.approx(116.667, abs=0.001)

  def test_diagnostics(self, sample_facts):
    result = evaluate(sample_facts)

    assert result.diag['reserve_label'] == '6-12 months'
    assert result.diag['method_method'] == 'conservative'
    assert result.diag['method_binding_value'] == 'net_realizable_value'

  @pytest.mark.parametrize('method,expected', [
      ('nrv', 7500),
      ('age', 13500),
      ('conservative', 7500),
  ])
  def test_method_selection(self, method, expected):
    facts = InventoryFacts(valuation_method=method)

    assert evaluate(facts).adjusted_inventory_value == pytest.approx(expected)

  def test_fresh_stock(self, fresh_facts):
    """Young stock with a strong market is carried at cost."""
    result = evaluate(fresh_facts)

    assert result.cost_basis == 10000
    assert result.reserve_percent == 0
    assert result.adjusted_inventory_value == 10000
    assert result.total_write_down == 0
    assert result.capital_locked_percent == 0

  def test_negative_nrv(self, stale_facts):
    """NRV below zero flows through to a write-down above cost."""
    result = evaluate(stale_facts)

    assert result.net_realizable_value == -300
    assert result.adjusted_inventory_value == -300
    assert result.total_write_down == 5300
    assert result.capital_locked_percent == pytest.approx(106.0)

  def test_custom_reserve_table(self, quarterly_table):
    facts = InventoryFacts(age_months=8,
                           age_reserve_table=quarterly_table,
                           valuation_method='age')

    result = evaluate(facts)

    assert result.reserve_percent == 20
    assert result.adjusted_inventory_value == pytest.approx(14400)

  def test_empty_reserve_table(self):
    """Without bands the age-adjusted value equals cost basis."""
    result = evaluate(InventoryFacts(age_reserve_table=(), valuation_method='age'))

    assert result.reserve_percent == 0
    assert result.age_adjusted_value == pytest.approx(result.cost_basis)

  def test_zero_cost_does_not_raise(self):
    """Degenerate inputs give inf/nan instead of exceptions."""
    facts = InventoryFacts(original_cost=0,
                           current_market_value=0,
                           cost_to_complete=0,
                           cost_to_sell=0)

    result = evaluate(facts)

    assert result.cost_basis == 0
    assert math.isnan(result.capital_locked_percent)
    assert math.isnan(result.original_margin)

  def test_nan_age_gets_no_reserve(self):
    """NaN age matches no band, so the age-adjusted value is cost basis."""
    result = evaluate(InventoryFacts(age_months=math.nan,
                                     valuation_method='age'))

    assert result.reserve_percent == 0
    assert result.age_adjusted_value == pytest.approx(18000)
    assert result.diag['reserve_band_index'] is None

  def test_zero_market_value(self):
    result = evaluate(InventoryFacts(current_market_value=0))

    assert result.original_margin == -math.inf
    assert result.net_realizable_value == -1500

  def test_deterministic(self, sample_facts):
    """Repeated calls give identical results."""
    first = evaluate(sample_facts)
    second = evaluate(sample_facts)

    assert first.to_dict() == second.to_dict()

  @pytest.mark.parametrize('method', list(ValuationMethod))
  @pytest.mark.parametrize('age', [0, 4, 8, 30])
  def test_write_down_identities(self, method, age):
    """Write-down and capital locked follow from the adjusted value."""
    result = evaluate(InventoryFacts(valuation_method=method, age_months=age))

    assert result.total_write_down == (result.cost_basis -
                                       result.adjusted_inventory_value)
    assert result.capital_locked_percent == (result.total_write_down /
                                             result.cost_basis * 100)

  @pytest.mark.parametrize('market_value', [0.5, 3000, 9000, 30000])
  @pytest.mark.parametrize('age', [1, 4, 8, 30])
  def test_conservative_dominance(self, market_value, age):
    base = InventoryFacts(age_months=age, current_market_value=market_value)

    conservative = evaluate(base).adjusted_inventory_value
    nrv = evaluate(InventoryFacts(age_months=age,
                                  current_market_value=market_value,
                                  valuation_method='nrv'))

    assert conservative <= nrv.adjusted_inventory_value
    assert conservative <= nrv.age_adjusted_value


class TestRunValuation:
  """Tests for run_valuation."""

  def test_without_config(self, sample_facts):
    result = run_valuation(sample_facts)

    assert 'scenario' not in result.diag
    assert result.adjusted_inventory_value == pytest.approx(7500)

  def test_scenario_applied(self, sample_facts):
    result = run_valuation(sample_facts, ScenarioConfig.age_only())

    assert result.method is ValuationMethod.AGE_BASED
    assert result.adjusted_inventory_value == pytest.approx(13500)
    assert result.diag['scenario'] == 'age_only'

  def test_strict_reserves(self, sample_facts):
    """Strict table reserves 50% at 8 months."""
    result = run_valuation(
        sample_facts,
        ScenarioConfig(name='strict', method='age', reserve_table='strict'))

    assert result.reserve_percent == 50
    assert result.adjusted_inventory_value == pytest.approx(9000)


class TestLoadFacts:
  """Tests for load_facts."""

  def test_camel_case_json(self, tmp_path):
    path = tmp_path / 'facts.json'
    path.write_text(json.dumps({
        'originalCost': '12,000',
        'ageMonths': 8,
        'currentMarketValue': 9000,
        'costsIncluded': 'false',
        'valuationMethod': 'nrv',
        'ageReserveTable': [{
            'minMonths': 0,
            'maxMonths': None,
            'reservePercent': 30,
            'label': 'flat',
        }],
    }))

    facts = load_facts(path)

    assert facts.original_cost == 12000
    assert facts.costs_included is False
    assert facts.valuation_method is ValuationMethod.NRV
    assert facts.age_reserve_table == (AgeReserveBand(0, None, 30, 'flat'),)

  def test_unparseable_number_becomes_zero(self, tmp_path):
    path = tmp_path / 'facts.json'
    path.write_text(json.dumps({'cost_to_sell': 'n/a'}))

    assert load_facts(path).cost_to_sell == 0

  def test_missing_file(self, tmp_path):
    with pytest.raises(FileNotFoundError, match='Facts file not found'):
      load_facts(tmp_path / 'missing.json')

  def test_not_an_object(self, tmp_path):
    path = tmp_path / 'facts.json'
    path.write_text('[1, 2]')

    with pytest.raises(ValueError, match='must contain a JSON object'):
      load_facts(path)


class TestReportLines:

  def test_contains_formatted_amounts(self, sample_facts):
    lines = report_lines(sample_facts, evaluate(sample_facts))

    assert '  Cost Basis: $18,000' in lines
    assert '  Adjusted Inventory Value: $7,500' in lines
    assert '  Total Write-Down: $10,500' in lines
    assert '  Capital Locked: 58.3%' in lines
    assert any('Consider liquidating' in line for line in lines)


class TestMain:
  """Tests for the CLI entrypoint."""

  def test_sample_run(self, caplog):
    with caplog.at_level(logging.INFO):
      status = main([])

    assert status == 0
    assert 'Adjusted Inventory Value: $7,500' in caplog.text

  def test_flags_override_facts(self, caplog):
    with caplog.at_level(logging.INFO):
      status = main(['--original-cost', '1000', '--costs-included',
                     '--method', 'nrv', '--currency', '€'])

    assert status == 0
    assert 'Cost Basis: €1,000' in caplog.text
    assert 'Method: nrv' in caplog.text

  def test_scenario(self, caplog):
    with caplog.at_level(logging.INFO):
      status = main(['--scenario', 'age_only'])

    assert status == 0
    assert 'Scenario: age_only' in caplog.text
    assert 'Adjusted Inventory Value: $13,500' in caplog.text

  def test_invalid_input(self, caplog):
    with caplog.at_level(logging.ERROR):
      status = main(['--original-cost', 'abc'])

    assert status == 2
    assert 'non_positive_cost' in caplog.text

  def test_unknown_method(self, caplog):
    with caplog.at_level(logging.ERROR):
      status = main(['--method', 'fifo'])

    assert status == 2
    assert 'Unknown valuation method' in caplog.text
