"""
Pure DCF math engine for the terminal-multiple model.

This module contains pure functions for DCF calculations. No pandas, no I/O,
just numeric computations. Rates come in as percentages (15.0 means 15%) and
are converted to fractions here and nowhere else.

Key functions:
  implied_equity_value: Main entry point, equity value for a growth rate
  compute_pv_forecast: PV of the forecast-period profit stream
  compute_terminal_value: PV of terminal profit times the exit multiple
  generate_projections: Year-by-year profit schedule
"""

from typing import List, Tuple

from priced_in.domain.types import ProjectionYear
from priced_in.domain.types import ValuationInput

# Below this |r - g| the growing-annuity closed form divides by ~0.
SINGULARITY_THRESHOLD = 1e-4


def compute_pv_forecast(
    current_profit: float,
    g: float,
    r: float,
    n_years: int,
) -> float:
  """
  Compute present value of profits over the forecast period.

  Uses the growing-annuity identity when growth and discount rate are
  apart, and a direct termwise sum when they are within
  SINGULARITY_THRESHOLD of each other.

  Args:
    current_profit: Current profit after tax (PAT)
    g: Growth rate as a fraction
    r: Discount rate as a fraction
    n_years: Number of forecast periods

  Returns:
    Sum of PAT * (1+g)^t / (1+r)^t for t = 1..n
  """
  if abs(r - g) < SINGULARITY_THRESHOLD:
    pv = 0.0
    for t in range(1, n_years + 1):
      pv += current_profit * (1.0 + g)**t / (1.0 + r)**t
    return pv

  compound = (1.0 + g)**n_years * (1.0 + r)**(-n_years)
  return current_profit * (1.0 + g) * (1.0 - compound) / (r - g)


def compute_terminal_value(
    current_profit: float,
    g: float,
    r: float,
    n_years: int,
    exit_multiple: float,
) -> float:
  """
  Compute discounted terminal value using an exit multiple.

  Manual form:
    TV = PAT * (1+g)^n * exit_multiple
    PV = TV / (1+r)^n

  Args:
    current_profit: Current profit after tax (PAT)
    g: Growth rate as a fraction
    r: Discount rate as a fraction
    n_years: Number of periods to discount back
    exit_multiple: Price/profit multiple at the end of the forecast

  Returns:
    Present value of terminal value
  """
  terminal_profit = current_profit * (1.0 + g)**n_years
  return terminal_profit * exit_multiple / (1.0 + r)**n_years


def compute_value_components(
    current_profit: float,
    growth_rate_pct: float,
    discount_rate_pct: float,
    forecast_years: float,
    exit_multiple: float,
) -> Tuple[float, float, float]:
  """
  Compute implied equity value and its two components.

  Args:
    current_profit: Current profit after tax (PAT)
    growth_rate_pct: Profit CAGR in percent
    discount_rate_pct: Discount rate in percent
    forecast_years: Forecast horizon (truncated to whole periods)
    exit_multiple: Terminal price/profit multiple

  Returns:
    Tuple of (total, pv_forecast, pv_terminal). All zero for degenerate
    inputs (non-positive profit, multiple or horizon); all inf when the
    compounding overflows or the discount rate is -100%.
  """
  inputs = ValuationInput(current_profit, growth_rate_pct, discount_rate_pct,
                          forecast_years, exit_multiple)
  return compute_components_for(inputs)


def compute_components_for(
    inputs: ValuationInput) -> Tuple[float, float, float]:
  """Same as compute_value_components, for a ValuationInput."""
  if inputs.is_degenerate:
    return 0.0, 0.0, 0.0

  n_years = int(inputs.forecast_years)
  if n_years < 1:
    return 0.0, 0.0, 0.0

  current_profit = inputs.current_profit
  exit_multiple = inputs.exit_multiple
  g = inputs.growth_rate_pct / 100.0
  r = inputs.discount_rate_pct / 100.0

  try:
    pv_forecast = compute_pv_forecast(current_profit, g, r, n_years)
    pv_terminal = compute_terminal_value(current_profit, g, r, n_years,
                                         exit_multiple)
  except (OverflowError, ZeroDivisionError):
    # 1 + r == 0 leaves nothing to discount by.
    return float('inf'), float('inf'), float('inf')

  return pv_forecast + pv_terminal, pv_forecast, pv_terminal


def implied_equity_value(
    current_profit: float,
    growth_rate_pct: float,
    discount_rate_pct: float,
    forecast_years: float,
    exit_multiple: float,
) -> float:
  """
  Compute the equity value implied by a profit growth assumption.

  Two-stage model: PV of the growing profit stream over the forecast period
  plus PV of terminal-year profit capitalized at the exit multiple.

  Returns 0.0 (no value) rather than raising when profit, exit multiple or
  horizon is non-positive. No rounding is applied.
  """
  total, _, _ = compute_value_components(current_profit, growth_rate_pct,
                                         discount_rate_pct, forecast_years,
                                         exit_multiple)
  return total


def generate_projections(
    current_profit: float,
    growth_rate_pct: float,
    forecast_years: float,
) -> List[ProjectionYear]:
  """Project profit year by year at a constant growth rate."""
  g = growth_rate_pct / 100.0
  return [
      ProjectionYear(year=t, profit=current_profit * (1.0 + g)**t)
      for t in range(1, int(forecast_years) + 1)
  ]
