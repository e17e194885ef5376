"""
Sensitivity analysis for implied growth.

This module provides tools to generate 2D sensitivity tables that show
how the growth rate priced into a market cap varies across different
discount rates and exit multiples.

CLI Usage:
  python -m priced_in.analysis.sensitivity \\
      --profit 1737 --market-cap 93798 \\
      --discount-rates 12,14,15,16 \\
      --exit-multiples 30,40,45,50
"""

import argparse
import logging
import math
from pathlib import Path
from typing import Optional

import pandas as pd

from priced_in.engine.solver import BisectionBracket
from priced_in.engine.solver import DEFAULT_BRACKET
from priced_in.engine.solver import solve_growth
from priced_in.policies.assumptions import find_band
from priced_in.scenarios.registry import list_scenarios
from priced_in.scenarios.registry import resolve_config

logger = logging.getLogger(__name__)


class ImpliedGrowthSensitivity:
  """
  Build 2D sensitivity tables for implied growth.

  Varies discount rate and exit multiple while keeping profit, market cap
  and forecast horizon fixed.
  """

  def __init__(
      self,
      current_profit: float,
      market_cap: float,
      forecast_years: int,
      bracket: BisectionBracket = DEFAULT_BRACKET,
  ):
    """
    Initialize sensitivity table builder.

    Args:
        current_profit: Current profit after tax
        market_cap: Market capitalization the growth must justify
        forecast_years: Forecast horizon
        bracket: Solver bracket used for every cell
    """
    self.current_profit = current_profit
    self.market_cap = market_cap
    self.forecast_years = forecast_years
    self.bracket = bracket

    logger.info('Initialized ImpliedGrowthSensitivity')
    logger.info('  Profit: %.2f', current_profit)
    logger.info('  Market cap: %.2f', market_cap)
    logger.info('  Forecast years: %d', forecast_years)

  def solve(self, discount_rate_pct: float, exit_multiple: float) -> float:
    """Implied growth for one cell, NaN when undefined."""
    result = solve_growth(
        current_profit=self.current_profit,
        target_value=self.market_cap,
        discount_rate_pct=discount_rate_pct,
        forecast_years=self.forecast_years,
        exit_multiple=exit_multiple,
        bracket=self.bracket,
    )
    if result.value is None:
      return math.nan
    if result.at_bracket_edge:
      logger.debug('r=%.2f%%, multiple=%.2f at bracket edge',
                   discount_rate_pct, exit_multiple)
    return result.value

  def build(
      self,
      discount_rates: list[float],
      exit_multiples: list[float],
  ) -> pd.DataFrame:
    """
    Build 2D sensitivity table.

    Args:
        discount_rates: Discount rates in percent (e.g., [12, 14, 16])
        exit_multiples: Exit multiples (e.g., [20, 30, 40])

    Returns:
        DataFrame with discount rates as index, exit multiples as columns,
        and implied growth rates (percent) as cell values
    """
    if not discount_rates:
      raise ValueError('discount_rates cannot be empty')
    if not exit_multiples:
      raise ValueError('exit_multiples cannot be empty')

    logger.info('Building sensitivity table: %d x %d', len(discount_rates),
                len(exit_multiples))

    data_rows = []
    for r in discount_rates:
      data_rows.append([self.solve(r, m) for m in exit_multiples])

    r_labels = [f'{r:.1f}%' for r in discount_rates]
    m_labels = [f'{m:g}x' for m in exit_multiples]

    df = pd.DataFrame(data_rows, index=r_labels, columns=m_labels)
    df.index.name = 'Discount Rate'
    df.columns.name = 'Exit Multiple'

    logger.info('Sensitivity table built successfully')
    return df


def _parse_float_list(s: str) -> list[float]:
  """Parse comma-separated float list."""
  return [float(x.strip()) for x in s.split(',')]


def _frange(start: float, stop: float, step: float) -> list[float]:
  """
  Inclusive float range with rounding.

  Args:
      start: Start value
      stop: Stop value (inclusive)
      step: Step size

  Returns:
      List of floats from start to stop (inclusive)
  """
  if step <= 0:
    raise ValueError('step must be > 0')
  n = int(round((stop - start) / step))
  if n < 0:
    return []
  return [round(start + k * step, 12) for k in range(n + 1)]


def _resolve_axis(
    explicit: Optional[str],
    low: Optional[float],
    high: Optional[float],
    step: float,
    default: list[float],
    label: str,
) -> list[float]:
  if explicit:
    return _parse_float_list(explicit)
  if low is not None and high is not None:
    return _frange(low, high, step)
  logger.warning('No %s specified, using default: %s', label, default)
  return default


def main() -> None:
  """CLI entrypoint for sensitivity analysis."""
  parser = argparse.ArgumentParser(
      description='Implied Growth Sensitivity Analysis',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  # Explicit rates and multiples
  python -m priced_in.analysis.sensitivity \\
      --profit 1737 --market-cap 93798 \\
      --discount-rates 12,14,15,16 \\
      --exit-multiples 30,40,45,50

  # Using range specification
  python -m priced_in.analysis.sensitivity \\
      --profit 1737 --market-cap 93798 \\
      --discount-min 12 --discount-max 18 --discount-step 1 \\
      --multiple-min 20 --multiple-max 50 --multiple-step 5
      """)

  parser.add_argument('--symbol', type=str, default='', help='Label only')
  parser.add_argument('--profit',
                      type=float,
                      required=True,
                      help='Current profit after tax')
  parser.add_argument('--market-cap',
                      type=float,
                      required=True,
                      help='Market capitalization')
  parser.add_argument('--forecast-years',
                      type=int,
                      help='Forecast horizon (default: from market-cap band)')
  parser.add_argument('--scenario',
                      type=str,
                      default='default',
                      choices=list_scenarios(),
                      help='Scenario preset supplying the solver bracket')
  parser.add_argument('--config', type=Path, help='Scenario JSON file')

  # Option 1: Explicit lists
  parser.add_argument('--discount-rates',
                      type=str,
                      help='Comma-separated discount rates in percent')
  parser.add_argument('--exit-multiples',
                      type=str,
                      help='Comma-separated exit multiples')

  # Option 2: Range specification
  parser.add_argument('--discount-min', type=float, help='Minimum rate')
  parser.add_argument('--discount-max', type=float, help='Maximum rate')
  parser.add_argument('--discount-step',
                      type=float,
                      default=1.0,
                      help='Discount rate step (default: 1.0)')

  parser.add_argument('--multiple-min', type=float, help='Minimum multiple')
  parser.add_argument('--multiple-max', type=float, help='Maximum multiple')
  parser.add_argument('--multiple-step',
                      type=float,
                      default=5.0,
                      help='Exit multiple step (default: 5.0)')

  parser.add_argument('--output', type=Path, help='Output CSV path (optional)')

  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')

  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )

  config = resolve_config(args.scenario, args.config)
  logger.info('Using scenario: %s', config.name)

  band = find_band(args.market_cap)
  forecast_years = args.forecast_years or band.forecast_years

  discount_rates = _resolve_axis(args.discount_rates, args.discount_min,
                                 args.discount_max, args.discount_step,
                                 [12.0, 14.0, 16.0], 'discount rates')
  exit_multiples = _resolve_axis(args.exit_multiples, args.multiple_min,
                                 args.multiple_max, args.multiple_step,
                                 [15.0, 20.0, 30.0, 40.0], 'exit multiples')

  logger.info('Discount rates: %s', discount_rates)
  logger.info('Exit multiples: %s', exit_multiples)

  builder = ImpliedGrowthSensitivity(args.profit,
                                     args.market_cap,
                                     forecast_years,
                                     bracket=config.bracket)
  table = builder.build(discount_rates=discount_rates,
                        exit_multiples=exit_multiples)

  print('\n' + '=' * 80)
  print(f'Implied Growth Sensitivity: {args.symbol or "-"}')
  print('=' * 80)
  print(f'\nProfit: {args.profit:,.2f}')
  print(f'Market Cap: {args.market_cap:,.2f}')
  print(f'Category: {band.category}')
  print(f'Forecast Years: {forecast_years}')
  print('\n' + '=' * 80)
  print('Implied Growth Rate (%)')
  print('=' * 80)
  print(table.to_string(float_format=lambda x: f'{x:.2f}%'))
  print('=' * 80 + '\n')

  if args.output:
    table.to_csv(args.output)
    logger.info('Saved to: %s', args.output)


if __name__ == '__main__':
  main()
