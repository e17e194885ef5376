'''
Domain types for the implied growth framework.

These dataclasses provide typed interfaces between the pure engine, the
assumption policies and the analysis layer. None of them is persisted; every
instance lives for a single evaluation.
'''

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar('T')


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


@dataclass(frozen=True)
class ValuationInput:
  '''
  Inputs to the forward valuation function.

  Rates are percentages (15.0 means 15%), profit and value share one
  currency unit.

  Attributes:
    current_profit: Current profit after tax (PAT)
    growth_rate_pct: Assumed profit CAGR over the forecast period
    discount_rate_pct: Cost of equity
    forecast_years: Number of forecast periods
    exit_multiple: Price/profit multiple applied to terminal-year profit
  '''
  current_profit: float
  growth_rate_pct: float
  discount_rate_pct: float
  forecast_years: int
  exit_multiple: float

  @property
  def is_degenerate(self) -> bool:
    '''True when the valuation function yields its zero sentinel.'''
    return (self.current_profit <= 0 or self.exit_multiple <= 0 or
            self.forecast_years <= 0)


class SolverStatus(Enum):
  '''Outcome of a growth solve.'''
  CONVERGED = 'converged'
  EXHAUSTED = 'exhausted'
  DEGENERATE = 'degenerate'


@dataclass(frozen=True)
class SolverResult:
  '''
  Structured result of the bisection growth solver.

  Attributes:
    value: Implied growth rate in percent rounded to 2 dp, None if degenerate
    raw_value: Unrounded midpoint the solver stopped at (nan if degenerate)
    status: Whether the solver converged, ran out of iterations or had
      degenerate inputs
    iterations: Number of valuation evaluations performed
    low: Lower bracket bound when the solver stopped
    high: Upper bracket bound when the solver stopped
    bracket_low: Initial lower bound of the search bracket
    bracket_high: Initial upper bound of the search bracket
  '''
  value: Optional[float]
  raw_value: float
  status: SolverStatus
  iterations: int = 0
  low: float = float('nan')
  high: float = float('nan')
  bracket_low: float = float('nan')
  bracket_high: float = float('nan')

  @property
  def converged(self) -> bool:
    return self.status is SolverStatus.CONVERGED

  @property
  def at_bracket_edge(self) -> bool:
    '''
    True when the answer collapsed onto one end of the initial bracket.

    This is the signature of a root lying outside the bracket: bisection
    keeps moving the same bound until the midpoint reaches the other end.
    '''
    if self.value is None:
      return False
    return (abs(self.raw_value - self.bracket_low) < 0.005 or
            abs(self.raw_value - self.bracket_high) < 0.005)


@dataclass(frozen=True)
class AssumptionSet:
  '''
  Default valuation assumptions for a market-cap band and sector.

  Attributes:
    forecast_years: Explicit forecast horizon
    discount_rate_pct: Cost of equity in percent
    terminal_growth_pct: Long-run growth in percent (informational)
    exit_multiple: Terminal price/profit multiple
    expected_growth_pct: Default expected profit CAGR in percent
    category: Market-cap band label (e.g. 'Large Cap')
  '''
  forecast_years: int
  discount_rate_pct: float
  terminal_growth_pct: float
  exit_multiple: float
  expected_growth_pct: float
  category: str

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to dictionary.'''
    return asdict(self)


class Signal(Enum):
  '''Investment signal derived from the expectation gap.'''
  STRONG_BUY = 'Strong Buy'
  BUY = 'Buy'
  HOLD = 'Hold'
  CAUTION = 'Caution'
  SELL = 'Sell'
  NOT_AVAILABLE = 'N/A'


@dataclass(frozen=True)
class StockSnapshot:
  '''
  Flat market-data record for one security.

  Supplied by whatever loads or fetches market data; the engine only reads
  it.

  Attributes:
    symbol: Exchange symbol
    current_profit: Latest full-year profit after tax
    market_cap: Market capitalization (same unit as profit), 0 if unknown
    price: Current market price per share
    shares_outstanding: Shares outstanding (in the unit that makes
      price * shares comparable to profit)
    name: Company name
    sector: Free-text sector label
  '''
  symbol: str
  current_profit: float
  market_cap: float = 0.0
  price: float = 0.0
  shares_outstanding: float = 0.0
  name: str = ''
  sector: str = ''

  @property
  def effective_market_cap(self) -> float:
    '''Market cap if known, otherwise price times shares outstanding.'''
    if self.market_cap and self.market_cap > 0:
      return self.market_cap
    return self.price * self.shares_outstanding


@dataclass(frozen=True)
class ProjectionYear:
  '''Projected profit for one forecast year.'''
  year: int
  profit: float


@dataclass
class AnalysisResult:
  '''
  Complete reverse-DCF analysis for one security.

  Attributes:
    symbol: Exchange symbol
    name: Company name
    sector: Sector label
    market_cap: Market capitalization used as the solver target
    current_profit: Profit after tax used as the growth base
    assumptions: Effective assumptions (defaults merged with overrides)
    defaults: Default assumptions for the security's band and sector
    solver: Structured solver result
    implied_equity_value: Value implied by the expected growth rate
    expectation_gap: Expected minus implied growth (None in strict mode
      when the implied rate is undefined)
    upside_pct: Implied equity value over market cap, minus one, in percent
    signal: Investment signal
    projections: Year-by-year profit at the implied growth rate
    assumption_diag: How the default assumptions were chosen
  '''
  symbol: str
  name: str
  sector: str
  market_cap: float
  current_profit: float
  assumptions: AssumptionSet
  defaults: AssumptionSet
  solver: SolverResult
  implied_equity_value: float
  expectation_gap: Optional[float]
  upside_pct: float
  signal: Signal
  projections: List[ProjectionYear] = field(default_factory=list)
  assumption_diag: Dict[str, Any] = field(default_factory=dict)

  @property
  def implied_growth_rate(self) -> Optional[float]:
    return self.solver.value

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to a flat dictionary for DataFrame creation.'''
    return {
        'symbol': self.symbol,
        'name': self.name,
        'sector': self.sector,
        'category': self.defaults.category,
        'sector_keyword': self.assumption_diag.get('sector_keyword'),
        'market_cap': self.market_cap,
        'current_profit': self.current_profit,
        'forecast_years': self.assumptions.forecast_years,
        'discount_rate_pct': self.assumptions.discount_rate_pct,
        'exit_multiple': self.assumptions.exit_multiple,
        'expected_growth_pct': self.assumptions.expected_growth_pct,
        'implied_growth_rate': self.solver.value,
        'solver_status': self.solver.status.value,
        'solver_iterations': self.solver.iterations,
        'at_bracket_edge': self.solver.at_bracket_edge,
        'implied_equity_value': self.implied_equity_value,
        'expectation_gap': self.expectation_gap,
        'upside_pct': self.upside_pct,
        'signal': self.signal.value,
    }
