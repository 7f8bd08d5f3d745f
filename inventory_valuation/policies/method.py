'''
Valuation method policies.

A method policy picks the adjusted inventory value from the three candidate
values the engine derives: cost basis, net realizable value (NRV) and the
age-adjusted value.

  NRV          -> lower of cost basis and NRV
  AgeBased     -> age-adjusted value, not compared against cost
  Conservative -> lowest of cost basis, NRV and age-adjusted value
'''

from abc import ABC, abstractmethod
from math import isnan, nan

from inventory_valuation.domain.types import PolicyOutput
from inventory_valuation.domain.types import ValuationMethod


def _lowest(candidates: dict[str, float]) -> tuple[float, str | None]:
  '''
  Minimum of the candidates and the name of the binding one.

  A nan candidate makes the result nan, whatever the other values are.
  Ties resolve to the first candidate in insertion order.
  '''
  if any(isnan(v) for v in candidates.values()):
    return nan, None
  binding = min(candidates, key=candidates.__getitem__)
  return candidates[binding], binding


class MethodPolicy(ABC):
  '''
  Base class for valuation method policies.

  Subclasses implement compute() to return the adjusted inventory value.
  '''

  method: ValuationMethod

  @abstractmethod
  def compute(
      self,
      cost_basis: float,
      net_realizable_value: float,
      age_adjusted_value: float,
  ) -> PolicyOutput[float]:
    '''
    Select the adjusted inventory value.

    Args:
      cost_basis: Capitalized cost
      net_realizable_value: Market value less completion/selling costs
      age_adjusted_value: Cost basis less the age reserve

    Returns:
      PolicyOutput with adjusted inventory value and diagnostics
    '''


class NRVMethod(MethodPolicy):
  '''Lower of cost and net realizable value.'''

  method = ValuationMethod.NRV

  def compute(
      self,
      cost_basis: float,
      net_realizable_value: float,
      age_adjusted_value: float,
  ) -> PolicyOutput[float]:
    value, binding = _lowest({
        'cost_basis': cost_basis,
        'net_realizable_value': net_realizable_value,
    })
    return PolicyOutput(value=value,
                        diag={
                            'method': self.method.value,
                            'binding_value': binding,
                        })


class AgeBasedMethod(MethodPolicy):
  '''Age-adjusted value as-is.'''

  method = ValuationMethod.AGE_BASED

  def compute(
      self,
      cost_basis: float,
      net_realizable_value: float,
      age_adjusted_value: float,
  ) -> PolicyOutput[float]:
    return PolicyOutput(value=age_adjusted_value,
                        diag={
                            'method': self.method.value,
                            'binding_value': 'age_adjusted_value',
                        })


class ConservativeMethod(MethodPolicy):
  '''
  Lower of cost or market, with the age reserve as a third floor.

  The result never exceeds the NRV method result or the age-adjusted value.
  '''

  method = ValuationMethod.CONSERVATIVE

  def compute(
      self,
      cost_basis: float,
      net_realizable_value: float,
      age_adjusted_value: float,
  ) -> PolicyOutput[float]:
    value, binding = _lowest({
        'cost_basis': cost_basis,
        'net_realizable_value': net_realizable_value,
        'age_adjusted_value': age_adjusted_value,
    })
    return PolicyOutput(value=value,
                        diag={
                            'method': self.method.value,
                            'binding_value': binding,
                        })
