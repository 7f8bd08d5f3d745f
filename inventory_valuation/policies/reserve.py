"""
Age reserve policies.

These policies map the age of an inventory position to a reserve percent,
the write-down applied to cost basis to get the age-adjusted value.
"""

from abc import ABC
from abc import abstractmethod
from typing import Iterable, Optional

from inventory_valuation.domain.types import AgeReserveBand
from inventory_valuation.domain.types import DEFAULT_AGE_RESERVES
from inventory_valuation.domain.types import PolicyOutput


class AgeReservePolicy(ABC):
  """
  Base class for age reserve policies.

  Subclasses implement compute() to return a reserve percent (0-100).
  """

  @abstractmethod
  def compute(self, age_months: float) -> PolicyOutput[float]:
    """
    Compute reserve percent for a position of the given age.

    Args:
      age_months: Months since acquisition

    Returns:
      PolicyOutput with reserve percent and diagnostics
    """


class TableReserve(AgeReservePolicy):
  """
  Step-function reserve from an ordered table of bands.

  Scans the bands in order and returns the reserve of the first band whose
  [min_months, max_months) range contains the age. Tables are expected to be
  ordered and non-overlapping; nothing is checked. If no band matches the
  reserve is 0.
  """

  def __init__(self, table: Optional[Iterable[AgeReserveBand]] = None):
    """
    Initialize table reserve policy.

    Args:
      table: Ordered reserve bands (default: 0/10/25/50% at 0/3/6/12 months)
    """
    self.table = tuple(DEFAULT_AGE_RESERVES if table is None else table)

  def compute(self, age_months: float) -> PolicyOutput[float]:
    """Return the reserve percent of the first matching band."""
    for index, band in enumerate(self.table):
      if band.contains(age_months):
        return PolicyOutput(value=band.reserve_percent,
                            diag={
                                'reserve_method': 'table',
                                'reserve_band_index': index,
                                'reserve_label': band.label,
                            })

    return PolicyOutput(value=0.0,
                        diag={
                            'reserve_method': 'table',
                            'reserve_band_index': None,
                            'reserve_label': None,
                        })
