'''
Single-stock reverse-DCF entrypoint.

This module provides the main entry point for analysing one security. It:
1. Derives default assumptions from market cap and sector
2. Applies scenario overrides
3. Solves for the growth rate the market cap implies
4. Values the company at the expected growth rate
5. Returns AnalysisResult with gap, upside, signal and projections

Usage:
  from priced_in.domain.types import StockSnapshot
  from priced_in.run import analyze_stock

  result = analyze_stock(
    StockSnapshot(symbol='ABC', current_profit=1737, market_cap=93798,
                  sector='FMCG'),
  )
  print(f'Implied growth: {result.implied_growth_rate}%')
'''

import argparse
import logging
from pathlib import Path
from typing import Optional

from priced_in.domain.types import AnalysisResult
from priced_in.domain.types import StockSnapshot
from priced_in.engine.dcf import generate_projections
from priced_in.engine.dcf import implied_equity_value
from priced_in.engine.solver import solve_growth
from priced_in.policies.signal import classify_signal
from priced_in.policies.signal import expectation_gap
from priced_in.scenarios.config import AssumptionOverrides
from priced_in.scenarios.config import ScenarioConfig
from priced_in.scenarios.registry import create_assumption_policy
from priced_in.scenarios.registry import list_scenarios
from priced_in.scenarios.registry import resolve_config

logger = logging.getLogger(__name__)


def analyze_stock(
    snapshot: StockSnapshot,
    config: Optional[ScenarioConfig] = None,
) -> AnalysisResult:
  '''
  Run the full reverse-DCF analysis for one security.

  Args:
    snapshot: Market data for the security
    config: ScenarioConfig (default: ScenarioConfig.default())

  Returns:
    AnalysisResult with solver diagnostics. Degenerate inputs (loss-making
    company, missing market cap) do not raise; they show up as a
    DEGENERATE solver status.
  '''
  if config is None:
    config = ScenarioConfig.default()

  market_cap = snapshot.effective_market_cap
  policy_output = create_assumption_policy(config).compute(
      market_cap, snapshot.sector)
  defaults = policy_output.value
  assumptions = config.overrides.apply(defaults)
  logger.debug('%s: assumptions %s', snapshot.symbol, policy_output.diag)

  solver = solve_growth(
      current_profit=snapshot.current_profit,
      target_value=market_cap,
      discount_rate_pct=assumptions.discount_rate_pct,
      forecast_years=assumptions.forecast_years,
      exit_multiple=assumptions.exit_multiple,
      bracket=config.bracket,
  )

  value = implied_equity_value(
      snapshot.current_profit,
      assumptions.expected_growth_pct,
      assumptions.discount_rate_pct,
      assumptions.forecast_years,
      assumptions.exit_multiple,
  )

  gap = expectation_gap(assumptions.expected_growth_pct,
                        solver.value,
                        strict=config.strict_gap)
  upside = (value / market_cap - 1.0) * 100.0 if market_cap > 0 else 0.0

  projections = generate_projections(
      snapshot.current_profit,
      solver.value if solver.value is not None else 0.0,
      assumptions.forecast_years,
  )

  if not solver.converged:
    logger.debug('%s: solver status %s after %d iterations', snapshot.symbol,
                 solver.status.value, solver.iterations)

  return AnalysisResult(
      symbol=snapshot.symbol,
      name=snapshot.name,
      sector=snapshot.sector,
      market_cap=market_cap,
      current_profit=snapshot.current_profit,
      assumptions=assumptions,
      defaults=defaults,
      solver=solver,
      implied_equity_value=value,
      expectation_gap=gap,
      upside_pct=upside,
      signal=classify_signal(gap),
      projections=projections,
      assumption_diag=policy_output.diag,
  )


def _log_report(result: AnalysisResult, scenario_name: str) -> None:
  separator = '=' * 70
  logger.info('\n%s', separator)
  logger.info('Reverse DCF - %s', result.symbol or '(unnamed)')
  logger.info('Scenario: %s', scenario_name)
  logger.info(separator)

  a = result.assumptions
  logger.info('\nAssumptions (%s):', result.defaults.category)
  keyword = result.assumption_diag.get('sector_keyword')
  logger.info('  Sector match: %s', keyword or 'none (default multiple)')
  logger.info('  Current profit: %s', f'{result.current_profit:,.2f}')
  logger.info('  Market cap: %s', f'{result.market_cap:,.2f}')
  logger.info('  Forecast years: %d', a.forecast_years)
  logger.info('  Discount rate: %.2f%%', a.discount_rate_pct)
  logger.info('  Exit multiple: %.1fx', a.exit_multiple)
  logger.info('  Expected growth: %.2f%%', a.expected_growth_pct)

  logger.info('\nResult:')
  if result.implied_growth_rate is None:
    logger.info('  Implied growth: N/A')
  else:
    logger.info('  Implied growth: %.2f%% (%s, %d iterations)',
                result.implied_growth_rate, result.solver.status.value,
                result.solver.iterations)
    if result.solver.at_bracket_edge:
      logger.info('  Warning: implied growth is outside the solver bracket')
  logger.info('  Implied equity value: %s',
              f'{result.implied_equity_value:,.2f}')
  if result.expectation_gap is None:
    logger.info('  Expectation gap: N/A')
  else:
    logger.info('  Expectation gap: %+.2f%%', result.expectation_gap)
  logger.info('  Upside: %+.2f%%', result.upside_pct)
  logger.info('  Signal: %s', result.signal.value)

  if result.projections:
    logger.info('\nProjected profit at implied growth:')
    for p in result.projections:
      logger.info('  Year %2d: %s', p.year, f'{p.profit:,.2f}')

  logger.info('%s\n', separator)


def main() -> None:
  '''CLI entrypoint.'''
  parser = argparse.ArgumentParser(
      description='Solve for the profit growth priced into a market cap')
  parser.add_argument('--symbol', type=str, default='', help='Symbol label')
  parser.add_argument('--profit',
                      type=float,
                      required=True,
                      help='Current profit after tax')
  parser.add_argument('--market-cap',
                      type=float,
                      default=0.0,
                      help='Market cap in the same unit as profit')
  parser.add_argument('--price', type=float, default=0.0, help='Share price')
  parser.add_argument('--shares',
                      type=float,
                      default=0.0,
                      help='Shares outstanding (used with --price)')
  parser.add_argument('--sector', type=str, default='', help='Sector label')
  parser.add_argument('--forecast-years', type=int, help='Override horizon')
  parser.add_argument('--discount-rate',
                      type=float,
                      help='Override discount rate (percent)')
  parser.add_argument('--exit-multiple',
                      type=float,
                      help='Override exit multiple')
  parser.add_argument('--expected-growth',
                      type=float,
                      help='Override expected growth (percent)')
  parser.add_argument('--scenario',
                      type=str,
                      default='default',
                      choices=list_scenarios(),
                      help='Scenario preset')
  parser.add_argument('--config',
                      type=Path,
                      help='Scenario JSON file (overrides --scenario)')
  parser.add_argument('-v',
                      '--verbose',
                      action='store_true',
                      help='Verbose output')
  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )

  config = resolve_config(args.scenario, args.config)

  cli_overrides = AssumptionOverrides(
      forecast_years=args.forecast_years,
      discount_rate_pct=args.discount_rate,
      exit_multiple=args.exit_multiple,
      expected_growth_pct=args.expected_growth,
  )
  config.overrides = config.overrides.merged_with(cli_overrides)

  snapshot = StockSnapshot(
      symbol=args.symbol,
      current_profit=args.profit,
      market_cap=args.market_cap,
      price=args.price,
      shares_outstanding=args.shares,
      sector=args.sector,
  )

  result = analyze_stock(snapshot, config)
  _log_report(result, config.name)


if __name__ == '__main__':
  main()
