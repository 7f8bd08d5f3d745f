'''
Domain types for inventory valuation.

These dataclasses are the typed interface between the caller, the policies
and the pure math engine. Facts and bands are frozen: a valuation never
mutates its inputs.
'''

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Mapping, Optional, Tuple, TypeVar

T = TypeVar('T')


class ValuationMethod(str, Enum):
  '''
  Policy that selects the final adjusted inventory value.

  Values are the wire names used in JSON facts and scenario configs.
  '''
  NRV = 'nrv'
  AGE_BASED = 'age'
  CONSERVATIVE = 'conservative'

  @classmethod
  def parse(cls, value: Any) -> 'ValuationMethod':
    '''
    Parse a method from its wire value or display name.

    Accepts 'nrv', 'age', 'conservative' as well as 'NRV', 'AgeBased' and
    'Conservative', case-insensitively.

    Raises:
      ValueError: If the value names no known method
    '''
    if isinstance(value, cls):
      return value

    key = str(value).strip().lower().replace('_', '').replace('-', '')
    aliases = {
        'nrv': cls.NRV,
        'age': cls.AGE_BASED,
        'agebased': cls.AGE_BASED,
        'conservative': cls.CONSERVATIVE,
    }
    if key not in aliases:
      raise ValueError(f"Unknown valuation method: '{value}'. "
                       f'Available: {[m.value for m in cls]}')
    return aliases[key]


@dataclass
class PolicyOutput(Generic[T]):
  '''
  Standard output from any policy.

  Every policy returns both a computed value and diagnostic information
  explaining how the value was computed.

  Attributes:
    value: The computed value (type depends on policy)
    diag: Dictionary of diagnostic information
  '''
  value: T
  diag: Dict[str, Any] = field(default_factory=dict)


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
  '''Return the first present key, so snake_case and camelCase both load.'''
  for key in keys:
    if key in data:
      return data[key]
  return default


@dataclass(frozen=True)
class AgeReserveBand:
  '''
  One step of the age reserve table.

  Bands are half-open: [min_months, max_months). A band with
  max_months=None is unbounded above.

  Attributes:
    min_months: Inclusive lower bound on age
    max_months: Exclusive upper bound on age, or None for unbounded
    reserve_percent: Write-down reserve applied to cost basis (0-100)
    label: Human-readable band name
  '''
  min_months: float
  max_months: Optional[float]
  reserve_percent: float
  label: str = ''

  def contains(self, age_months: float) -> bool:
    '''True if age_months falls inside [min_months, max_months); NaN never does.'''
    return age_months >= self.min_months and (self.max_months is None or
                                              age_months < self.max_months)

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)

  @classmethod
  def from_dict(cls, data: Mapping[str, Any]) -> 'AgeReserveBand':
    max_months = _pick(data, 'max_months', 'maxMonths')
    return cls(
        min_months=float(_pick(data, 'min_months', 'minMonths', default=0)),
        max_months=None if max_months is None else float(max_months),
        reserve_percent=float(
            _pick(data, 'reserve_percent', 'reservePercent', default=0)),
        label=str(data.get('label', '')),
    )


DEFAULT_AGE_RESERVES: Tuple[AgeReserveBand, ...] = (
    AgeReserveBand(0, 3, 0, '< 3 months'),
    AgeReserveBand(3, 6, 10, '3-6 months'),
    AgeReserveBand(6, 12, 25, '6-12 months'),
    AgeReserveBand(12, None, 50, '> 12 months'),
)


_FACT_KEYS = {
    'original_cost': 'originalCost',
    'age_months': 'ageMonths',
    'current_market_value': 'currentMarketValue',
    'freight_percent': 'freightPercent',
    'labor_percent': 'laborPercent',
    'overhead_percent': 'overheadPercent',
    'costs_included': 'costsIncluded',
    'cost_to_complete': 'costToComplete',
    'cost_to_sell': 'costToSell',
    'valuation_method': 'valuationMethod',
    'age_reserve_table': 'ageReserveTable',
    'currency': 'currency',
    'sku': 'sku',
}


@dataclass(frozen=True)
class InventoryFacts:
  '''
  Everything known about one inventory position at valuation time.

  Defaults reproduce the sample position used throughout the docs and
  tests: $12,000 of stock aged 8 months with 50% landed costs on top.

  Attributes:
    original_cost: Acquisition or production cost before adjustments
    age_months: Months since acquisition
    current_market_value: Current resale estimate
    freight_percent: Freight as a percent of original cost
    labor_percent: Labor as a percent of original cost
    overhead_percent: Overhead as a percent of original cost
    costs_included: If True, the three percents are already in original_cost
    cost_to_complete: Deduction when estimating realizable value
    cost_to_sell: Deduction when estimating realizable value
    valuation_method: Which derived value becomes the adjusted value
    age_reserve_table: Ordered reserve bands, first match wins
    currency: Display symbol for amounts
    sku: Optional identifier (used by batch runs)
  '''
  original_cost: float = 12000.0
  age_months: float = 8.0
  current_market_value: float = 9000.0
  freight_percent: float = 10.0
  labor_percent: float = 25.0
  overhead_percent: float = 15.0
  costs_included: bool = False
  cost_to_complete: float = 1000.0
  cost_to_sell: float = 500.0
  valuation_method: ValuationMethod = ValuationMethod.CONSERVATIVE
  age_reserve_table: Tuple[AgeReserveBand, ...] = DEFAULT_AGE_RESERVES
  currency: str = '$'
  sku: Optional[str] = None

  def __post_init__(self):
    # Accept plain strings and lists from callers; store canonical forms.
    object.__setattr__(self, 'valuation_method',
                       ValuationMethod.parse(self.valuation_method))
    object.__setattr__(self, 'age_reserve_table',
                       tuple(self.age_reserve_table))

  @classmethod
  def sample(cls) -> 'InventoryFacts':
    '''The default sample position.'''
    return cls()

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to a JSON-friendly dictionary.'''
    return {
        'original_cost': self.original_cost,
        'age_months': self.age_months,
        'current_market_value': self.current_market_value,
        'freight_percent': self.freight_percent,
        'labor_percent': self.labor_percent,
        'overhead_percent': self.overhead_percent,
        'costs_included': self.costs_included,
        'cost_to_complete': self.cost_to_complete,
        'cost_to_sell': self.cost_to_sell,
        'valuation_method': self.valuation_method.value,
        'age_reserve_table': [b.to_dict() for b in self.age_reserve_table],
        'currency': self.currency,
        'sku': self.sku,
    }

  @classmethod
  def from_dict(cls, data: Mapping[str, Any]) -> 'InventoryFacts':
    '''
    Create from a mapping with snake_case or camelCase keys.

    Missing keys take the dataclass defaults. Values are taken as given;
    use domain.validation.coerce_facts_dict first for raw form input.

    Raises:
      ValueError: If valuation_method is not a known method
    '''
    kwargs: Dict[str, Any] = {}
    for name, camel in _FACT_KEYS.items():
      value = _pick(data, name, camel, default=None)
      if value is None:
        continue
      if name == 'age_reserve_table':
        value = tuple(
            b if isinstance(b, AgeReserveBand) else AgeReserveBand.from_dict(b)
            for b in value)
      kwargs[name] = value
    return cls(**kwargs)


@dataclass
class ValuationResult:
  '''
  Derived metrics for one inventory position.

  Attributes:
    cost_basis: Original cost plus landed cost percentages
    net_realizable_value: Market value less completion and selling costs
    reserve_percent: Reserve matched from the age table
    age_adjusted_value: Cost basis less the age reserve
    adjusted_inventory_value: Value selected by the valuation method
    total_write_down: cost_basis - adjusted_inventory_value
    capital_locked_percent: Write-down as a percent of cost basis
    original_margin: Margin at market value on cost basis (percent)
    adjusted_margin: Margin at market value on adjusted value (percent)
    margin_impact: adjusted_margin - original_margin (percentage points)
    method: Valuation method used
    diag: Merged diagnostics from all policies
  '''
  cost_basis: float
  net_realizable_value: float
  reserve_percent: float
  age_adjusted_value: float
  adjusted_inventory_value: float
  total_write_down: float
  capital_locked_percent: float
  original_margin: float
  adjusted_margin: float
  margin_impact: float
  method: ValuationMethod = ValuationMethod.CONSERVATIVE
  diag: Dict[str, Any] = field(default_factory=dict)

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to dictionary for DataFrame creation.'''
    result = {
        'cost_basis': self.cost_basis,
        'net_realizable_value': self.net_realizable_value,
        'reserve_percent': self.reserve_percent,
        'age_adjusted_value': self.age_adjusted_value,
        'adjusted_inventory_value': self.adjusted_inventory_value,
        'total_write_down': self.total_write_down,
        'capital_locked_percent': self.capital_locked_percent,
        'original_margin': self.original_margin,
        'adjusted_margin': self.adjusted_margin,
        'margin_impact': self.margin_impact,
        'method': self.method.value,
    }
    result.update(self.diag)
    return result


@dataclass
class ExclusionReason:
  '''
  Reason why a set of facts was rejected before valuation.

  Attributes:
    reason: Human-readable explanation
    code: Machine-readable code (e.g., 'non_positive_cost')
    details: Additional context
  '''
  reason: str
  code: str
  details: Dict[str, Any] = field(default_factory=dict)


def bands_from_list(rows: List[Mapping[str, Any]]) -> Tuple[AgeReserveBand, ...]:
  '''Build an ordered reserve table from a list of band mappings.'''
  return tuple(AgeReserveBand.from_dict(row) for row in rows)
