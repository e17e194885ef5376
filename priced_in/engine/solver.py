"""
Bisection solver for the growth rate priced into a market value.

Inverts implied_equity_value: given profit, a target equity value (usually
market capitalization) and the remaining DCF assumptions, find the growth
rate whose implied value matches the target.

Key functions:
  solve_growth: Structured result with status and iteration count
  solve_implied_growth_rate: Plain float or None
"""

from dataclasses import asdict
from dataclasses import dataclass
import logging
from typing import Any, Dict, Optional

from priced_in.domain.types import SolverResult
from priced_in.domain.types import SolverStatus
from priced_in.engine.dcf import implied_equity_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BisectionBracket:
  """
  Search bracket and stopping rule for the growth solver.

  The bracket is not checked for a sign change before iterating. A root
  outside [low, high] makes the solver walk to the nearest bound.

  Attributes:
    low: Lower growth bound in percent
    high: Upper growth bound in percent
    max_iterations: Iteration budget
    relative_tolerance: Accepted |value - target| as a fraction of target
  """
  low: float = -90.0
  high: float = 200.0
  max_iterations: int = 500
  relative_tolerance: float = 1e-5

  def __post_init__(self):
    if self.low >= self.high:
      raise ValueError(
          f'Bracket low ({self.low}) must be below high ({self.high})')
    if self.low <= -100.0:
      raise ValueError(f'Bracket low must be above -100%, got {self.low}')
    if self.max_iterations < 1:
      raise ValueError(
          f'max_iterations must be >= 1, got {self.max_iterations}')
    if self.relative_tolerance <= 0:
      raise ValueError(
          f'relative_tolerance must be > 0, got {self.relative_tolerance}')

  def to_dict(self) -> Dict[str, Any]:
    """Convert to dictionary."""
    return asdict(self)


DEFAULT_BRACKET = BisectionBracket()


def solve_growth(
    current_profit: float,
    target_value: float,
    discount_rate_pct: float,
    forecast_years: float,
    exit_multiple: float,
    bracket: BisectionBracket = DEFAULT_BRACKET,
) -> SolverResult:
  """
  Solve for the growth rate that reproduces a target equity value.

  Implied value is strictly increasing in growth, so bisection narrows the
  bracket toward the target: a value below target raises the lower bound,
  anything else lowers the upper bound.

  Args:
    current_profit: Current profit after tax (PAT)
    target_value: Equity value to reproduce, in the profit's unit
    discount_rate_pct: Discount rate in percent
    forecast_years: Forecast horizon
    exit_multiple: Terminal price/profit multiple
    bracket: Search bracket and stopping rule

  Returns:
    SolverResult. DEGENERATE (value None) when profit, target or multiple is
    non-positive. CONVERGED when the value at a midpoint came within
    tolerance. EXHAUSTED when the budget ran out, with the final bracket
    midpoint as a best-effort value.
  """
  if current_profit <= 0 or target_value <= 0 or exit_multiple <= 0:
    return SolverResult(value=None,
                        raw_value=float('nan'),
                        status=SolverStatus.DEGENERATE,
                        bracket_low=bracket.low,
                        bracket_high=bracket.high)

  low = bracket.low
  high = bracket.high
  tolerance = target_value * bracket.relative_tolerance

  for i in range(1, bracket.max_iterations + 1):
    mid = (low + high) / 2.0
    value = implied_equity_value(current_profit, mid, discount_rate_pct,
                                 forecast_years, exit_multiple)

    if abs(value - target_value) < tolerance:
      return SolverResult(value=round(mid, 2),
                          raw_value=mid,
                          status=SolverStatus.CONVERGED,
                          iterations=i,
                          low=low,
                          high=high,
                          bracket_low=bracket.low,
                          bracket_high=bracket.high)

    if value < target_value:
      low = mid
    else:
      high = mid

  mid = (low + high) / 2.0
  result = SolverResult(value=round(mid, 2),
                        raw_value=mid,
                        status=SolverStatus.EXHAUSTED,
                        iterations=bracket.max_iterations,
                        low=low,
                        high=high,
                        bracket_low=bracket.low,
                        bracket_high=bracket.high)

  logger.debug('Growth solver exhausted %d iterations at %.4f%%',
               bracket.max_iterations, mid)
  if result.at_bracket_edge:
    logger.debug(
        'Implied growth outside [%.1f%%, %.1f%%] '
        '(profit=%s, target=%s, r=%s%%, n=%s, multiple=%s)', bracket.low,
        bracket.high, current_profit, target_value, discount_rate_pct,
        forecast_years, exit_multiple)
  return result


def solve_implied_growth_rate(
    current_profit: float,
    target_value: float,
    discount_rate_pct: float,
    forecast_years: float,
    exit_multiple: float,
    bracket: BisectionBracket = DEFAULT_BRACKET,
) -> Optional[float]:
  """
  Implied growth rate in percent rounded to 2 dp, or None.

  Converged and exhausted solves both return a number; use solve_growth to
  tell them apart.
  """
  return solve_growth(current_profit, target_value, discount_rate_pct,
                      forecast_years, exit_multiple, bracket).value
