'''
Expectation gap and signal classification.

The expectation gap is how much faster (positive) or slower (negative) an
investor expects profit to grow than the market price implies. The signal
buckets that gap.
'''

import math
from typing import Optional

from priced_in.domain.types import Signal

STRONG_BUY_ABOVE = 5.0
BUY_ABOVE = 2.0
SELL_BELOW = -5.0
CAUTION_BELOW = -2.0


def expectation_gap(
    expected_growth_pct: float,
    implied_growth_pct: Optional[float],
    strict: bool = False,
) -> Optional[float]:
  '''
  Expected growth minus market-implied growth, in percentage points.

  Args:
    expected_growth_pct: Investor's expected profit CAGR
    implied_growth_pct: Solver output, None when undefined
    strict: Return None instead of treating an undefined implied rate as 0

  Returns:
    The gap, or None in strict mode when implied growth is undefined
  '''
  if implied_growth_pct is None:
    if strict:
      return None
    implied_growth_pct = 0.0
  return expected_growth_pct - implied_growth_pct


def classify_signal(gap: Optional[float]) -> Signal:
  '''
  Map an expectation gap to a signal.

  Thresholds are strict and checked in order: > 5 Strong Buy, > 2 Buy,
  < -5 Sell, < -2 Caution, otherwise Hold. None or NaN is N/A.
  '''
  if gap is None or math.isnan(gap):
    return Signal.NOT_AVAILABLE
  if gap > STRONG_BUY_ABOVE:
    return Signal.STRONG_BUY
  if gap > BUY_ABOVE:
    return Signal.BUY
  if gap < SELL_BELOW:
    return Signal.SELL
  if gap < CAUTION_BELOW:
    return Signal.CAUTION
  return Signal.HOLD
