import math

import pytest

from inventory_valuation.domain.types import PolicyOutput
from inventory_valuation.domain.types import ValuationMethod
from inventory_valuation.policies.method import AgeBasedMethod
from inventory_valuation.policies.method import ConservativeMethod
from inventory_valuation.policies.method import NRVMethod


class TestNRVMethod:
  """Tests for NRVMethod policy."""

  def test_nrv_below_cost(self):
    """Lower of cost and NRV."""
    result = NRVMethod().compute(18000, 7500, 13500)

    assert isinstance(result, PolicyOutput)
    assert result.value == 7500
    assert result.diag['method'] == 'nrv'
    assert result.diag['binding_value'] == 'net_realizable_value'

  def test_cost_below_nrv(self):
    """Cost binds when the market is strong; age is ignored."""
    result = NRVMethod().compute(10000, 14500, 2000)

    assert result.value == 10000
    assert result.diag['binding_value'] == 'cost_basis'

  def test_negative_nrv(self):
    """A negative NRV is selected as-is."""
    assert NRVMethod().compute(5000, -300, 2500).value == -300


class TestAgeBasedMethod:
  """Tests for AgeBasedMethod policy."""

  def test_age_adjusted_value_selected(self):
    result = AgeBasedMethod().compute(18000, 7500, 13500)

    assert result.value == 13500
    assert result.diag['method'] == 'age'

  def test_not_compared_against_cost(self):
    """Age-adjusted value is used even above cost basis."""
    assert AgeBasedMethod().compute(100, 50, 150).value == 150


class TestConservativeMethod:
  """Tests for ConservativeMethod policy."""

  def test_lowest_of_three(self):
    result = ConservativeMethod().compute(18000, 7500, 13500)

    assert result.value == 7500
    assert result.diag['method'] == 'conservative'
    assert result.diag['binding_value'] == 'net_realizable_value'

  def test_age_binding(self):
    result = ConservativeMethod().compute(18000, 16000, 13500)

    assert result.value == 13500
    assert result.diag['binding_value'] == 'age_adjusted_value'

  def test_tie_resolves_to_cost(self):
    """Equal candidates give the same value; cost is reported first."""
    result = ConservativeMethod().compute(100, 100, 100)

    assert result.value == 100
    assert result.diag['binding_value'] == 'cost_basis'

  @pytest.mark.parametrize('cost,nrv,age', [
      (18000, 7500, 13500),
      (10000, 14500, 10000),
      (5000, -300, 2500),
      (100, 50, 150),
      (0, 0, 0),
  ])
  def test_dominance(self, cost, nrv, age):
    """Conservative never exceeds the NRV method or the age-adjusted value."""
    conservative = ConservativeMethod().compute(cost, nrv, age).value

    assert conservative <= NRVMethod().compute(cost, nrv, age).value
    assert conservative <= age

  def test_nan_candidate(self):
    """A nan candidate makes the selection nan."""
    result = ConservativeMethod().compute(100, math.nan, 50)

    assert math.isnan(result.value)
    assert result.diag['binding_value'] is None


def test_method_tags():
  """Each policy is tagged with the method it implements."""
  assert NRVMethod.method is ValuationMethod.NRV
  assert AgeBasedMethod.method is ValuationMethod.AGE_BASED
  assert ConservativeMethod.method is ValuationMethod.CONSERVATIVE
