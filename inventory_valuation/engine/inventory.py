"""
Pure inventory valuation math.

This module contains pure functions for the valuation arithmetic. No pandas,
no I/O, no validation: degenerate inputs flow through as ordinary floats.
Division follows IEEE-754 (x/0 -> +/-inf, 0/0 -> nan) instead of raising,
so a zero cost basis or zero market value yields inf/nan metrics.

Key functions:
  compute_cost_basis: Original cost plus landed cost percentages
  compute_net_realizable_value: Market value less completion/selling costs
  compute_age_adjusted_value: Cost basis less the age reserve
  compute_write_down: Write-down and capital locked percent
  compute_margins: Original, adjusted and impact margins
"""

from math import copysign, inf, isnan, nan


def ieee_divide(numerator: float, denominator: float) -> float:
  """
  Divide with IEEE-754 semantics for a zero denominator.

  Python raises ZeroDivisionError for float division by zero; this returns
  +/-inf for a non-zero numerator and nan for 0/0 or a nan numerator.
  """
  if denominator != 0 or isnan(denominator):
    return numerator / denominator
  if numerator == 0 or isnan(numerator):
    return nan
  return copysign(inf, numerator) * copysign(1.0, denominator)


def compute_cost_basis(
    original_cost: float,
    freight_percent: float,
    labor_percent: float,
    overhead_percent: float,
    costs_included: bool,
) -> float:
  """
  Compute the capitalized cost of the inventory.

  Args:
    original_cost: Acquisition or production cost
    freight_percent: Freight as percent of original cost
    labor_percent: Labor as percent of original cost
    overhead_percent: Overhead as percent of original cost
    costs_included: If True the percents are already in original_cost

  Returns:
    original_cost when costs_included, else original_cost grossed up by
    freight, labor and overhead
  """
  if costs_included:
    return original_cost

  additional = original_cost * (freight_percent / 100 + labor_percent / 100 +
                                overhead_percent / 100)
  return original_cost + additional


def compute_net_realizable_value(
    current_market_value: float,
    cost_to_complete: float,
    cost_to_sell: float,
) -> float:
  """Market value less completion and selling costs. Not floored at zero."""
  return current_market_value - cost_to_complete - cost_to_sell


def compute_age_adjusted_value(cost_basis: float,
                               reserve_percent: float) -> float:
  """Cost basis after applying the age reserve percent."""
  return cost_basis * (1 - reserve_percent / 100)


def compute_write_down(
    cost_basis: float,
    adjusted_inventory_value: float,
) -> tuple[float, float]:
  """
  Compute write-down and capital locked.

  Args:
    cost_basis: Capitalized cost
    adjusted_inventory_value: Value selected by the valuation method

  Returns:
    Tuple of (total_write_down, capital_locked_percent). The write-down is
    not clamped, so a selected value above cost gives a negative write-down.
  """
  total_write_down = cost_basis - adjusted_inventory_value
  capital_locked_percent = ieee_divide(total_write_down, cost_basis) * 100
  return total_write_down, capital_locked_percent


def compute_margins(
    selling_price: float,
    cost_basis: float,
    adjusted_inventory_value: float,
) -> tuple[float, float, float]:
  """
  Compute gross margins assuming a sale at selling_price.

  Args:
    selling_price: Assumed sale price (the current market value)
    cost_basis: Capitalized cost
    adjusted_inventory_value: Carrying value after write-down

  Returns:
    Tuple of (original_margin, adjusted_margin, margin_impact), all in
    percent / percentage points
  """
  original_margin = ieee_divide(selling_price - cost_basis, selling_price) * 100
  adjusted_margin = ieee_divide(selling_price - adjusted_inventory_value,
                                selling_price) * 100
  margin_impact = adjusted_margin - original_margin
  return original_margin, adjusted_margin, margin_impact
