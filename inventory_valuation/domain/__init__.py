"""Domain types for the inventory valuation framework."""

from inventory_valuation.domain.types import AgeReserveBand
from inventory_valuation.domain.types import DEFAULT_AGE_RESERVES
from inventory_valuation.domain.types import ExclusionReason
from inventory_valuation.domain.types import InventoryFacts
from inventory_valuation.domain.types import PolicyOutput
from inventory_valuation.domain.types import ValuationMethod
from inventory_valuation.domain.types import ValuationResult

__all__ = [
    'AgeReserveBand',
    'DEFAULT_AGE_RESERVES',
    'ExclusionReason',
    'InventoryFacts',
    'PolicyOutput',
    'ValuationMethod',
    'ValuationResult',
]
