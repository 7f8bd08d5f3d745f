"""
Display formatting for valuation amounts.

Amounts render like en-US locale output: currency symbol prefix, comma
thousands separators, no decimals, halves rounded away from zero.
"""

from decimal import Decimal, localcontext, ROUND_HALF_UP
from math import isinf, isnan

CURRENCY_SYMBOLS = {
    '$': '$',
    '€': '€',
    '₹': '₹',
    '£': '£',
    '¥': '¥',
    'USD': '$',
    'EUR': '€',
    'INR': '₹',
    'GBP': '£',
    'JPY': '¥',
}


def currency_symbol(currency: str) -> str:
  """Symbol for a currency code or symbol; unknown strings pass through."""
  return CURRENCY_SYMBOLS.get(currency, currency)


def format_amount(value: float, currency: str = '$') -> str:
  """
  Format an amount with currency prefix and thousands separators.

  e.g. 1200000, '$' -> '$1,200,000'; -1200, '$' -> '$-1,200'

  Non-finite values render as '$∞', '$-∞' and '$NaN'.
  """
  symbol = currency_symbol(currency)
  if isnan(value):
    return f'{symbol}NaN'
  if isinf(value):
    return f'{symbol}∞' if value > 0 else f'{symbol}-∞'

  # A float spans up to 309 integer digits; the default context holds 28.
  with localcontext() as ctx:
    ctx.prec = 400
    rounded = Decimal(str(value)).quantize(Decimal('1'),
                                           rounding=ROUND_HALF_UP)
  return f'{symbol}{rounded:,}'


def format_percent(value: float, decimals: int = 1) -> str:
  """e.g. 58.333 -> '58.3%'"""
  if isnan(value):
    return 'NaN%'
  if isinf(value):
    return '∞%' if value > 0 else '-∞%'
  return f'{value:.{decimals}f}%'
