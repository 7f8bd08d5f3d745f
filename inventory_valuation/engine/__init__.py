'''Inventory valuation engine with pure math functions.'''

from inventory_valuation.engine.inventory import (
    compute_age_adjusted_value,
    compute_cost_basis,
    compute_margins,
    compute_net_realizable_value,
    compute_write_down,
    ieee_divide,
)

__all__ = [
    'compute_age_adjusted_value',
    'compute_cost_basis',
    'compute_margins',
    'compute_net_realizable_value',
    'compute_write_down',
    'ieee_divide',
]
