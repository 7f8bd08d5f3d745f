"""
Valuation policies for inventory positions.

Each policy computes one step of the valuation (age reserve, method
selection) and returns both a value and diagnostic information.

To add a new policy:
1. Create a new class inheriting from the appropriate base (e.g., MethodPolicy)
2. Implement the compute() method returning PolicyOutput
3. Register in scenarios/registry.py

Example:
  class BracketReserve(AgeReservePolicy):
    def compute(self, age_months: float) -> PolicyOutput[float]:
      reserve = ...  # your calculation
      return PolicyOutput(value=reserve, diag={'reserve_method': 'bracket'})
"""

from inventory_valuation.policies.method import AgeBasedMethod
from inventory_valuation.policies.method import ConservativeMethod
from inventory_valuation.policies.method import MethodPolicy
from inventory_valuation.policies.method import NRVMethod
from inventory_valuation.policies.reserve import AgeReservePolicy
from inventory_valuation.policies.reserve import TableReserve

__all__ = [
  'AgeReservePolicy', 'TableReserve',
  'MethodPolicy', 'NRVMethod', 'AgeBasedMethod', 'ConservativeMethod',
]
