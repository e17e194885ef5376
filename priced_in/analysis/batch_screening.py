'''
Batch reverse-DCF screening for many securities.

This module provides tools to:
1. Run the reverse DCF for a universe of stocks in parallel
2. Rank them by expectation gap (best opportunities first)
3. Export results to CSV for further analysis

Usage (CLI):
  python -m priced_in.analysis.batch_screening \
    --stocks-file data/stocks.csv \
    --output results/screen.csv \
    --sector pharma --min-market-cap 5000 \
    -v

Usage (Python API):
  from priced_in.analysis.batch_screening import screen_stocks
  from priced_in.scenarios.config import ScenarioConfig

  df = screen_stocks(snapshots, config=ScenarioConfig.default())
  df.to_csv('results.csv', index=False)
'''

import argparse
from concurrent.futures import as_completed
from concurrent.futures import ThreadPoolExecutor
import logging
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd

from priced_in.data_loader import StockDataLoader
from priced_in.domain.types import StockSnapshot
from priced_in.run import analyze_stock
from priced_in.scenarios.config import ScenarioConfig
from priced_in.scenarios.registry import list_scenarios
from priced_in.scenarios.registry import resolve_config

logger = logging.getLogger(__name__)


def filter_snapshots(
    snapshots: Iterable[StockSnapshot],
    sector: Optional[str] = None,
    min_market_cap: Optional[float] = None,
    max_market_cap: Optional[float] = None,
    require_profit: bool = True,
) -> List[StockSnapshot]:
  '''
  Select the screening universe.

  Args:
    snapshots: Candidate securities
    sector: Case-insensitive substring the sector must contain
    min_market_cap: Inclusive lower market-cap bound
    max_market_cap: Inclusive upper market-cap bound
    require_profit: Skip securities with non-positive profit

  Returns:
    Snapshots passing every filter, in input order
  '''
  selected = []
  needle = sector.lower() if sector else None

  for snapshot in snapshots:
    market_cap = snapshot.effective_market_cap
    if require_profit and snapshot.current_profit <= 0:
      continue
    if needle and needle not in (snapshot.sector or '').lower():
      continue
    if min_market_cap is not None and market_cap < min_market_cap:
      continue
    if max_market_cap is not None and market_cap > max_market_cap:
      continue
    selected.append(snapshot)

  return selected


def screen_stocks(
    snapshots: Iterable[StockSnapshot],
    config: Optional[ScenarioConfig] = None,
    concurrency: int = 4,
    verbose: bool = False,
) -> pd.DataFrame:
  '''
  Run the reverse DCF for every snapshot and rank by expectation gap.

  Args:
    snapshots: Securities to analyse
    config: ScenarioConfig shared by every analysis
    concurrency: Worker threads
    verbose: Log each result

  Returns:
    DataFrame with one row per security (AnalysisResult.to_dict() columns
    plus 'error'), sorted by expectation_gap descending with undefined gaps
    and failures last.
  '''
  if config is None:
    config = ScenarioConfig.default()

  snapshots = list(snapshots)
  rows = []

  with ThreadPoolExecutor(max_workers=concurrency) as executor:
    futures = {executor.submit(analyze_stock, s, config): s for s in snapshots}

    for future in as_completed(futures):
      snapshot = futures[future]
      try:
        result = future.result()
      except (ValueError, KeyError, TypeError) as e:
        logger.warning('Failed to analyse %s: %s', snapshot.symbol, e)
        rows.append({'symbol': snapshot.symbol, 'error': str(e)})
        continue

      row = result.to_dict()
      row['error'] = None
      rows.append(row)

      if verbose:
        logger.info('  %s: implied=%s, gap=%s, signal=%s', result.symbol,
                    result.implied_growth_rate, result.expectation_gap,
                    result.signal.value)

  frame = pd.DataFrame(rows)
  if frame.empty:
    return frame
  if 'expectation_gap' not in frame.columns:
    frame['expectation_gap'] = float('nan')

  frame['expectation_gap'] = pd.to_numeric(frame['expectation_gap'])
  return frame.sort_values('expectation_gap',
                           ascending=False,
                           na_position='last',
                           kind='mergesort').reset_index(drop=True)


def _print_summary(df: pd.DataFrame) -> None:
  '''Log summary statistics for screening results.'''
  total = len(df)
  failed = int(df['error'].notna().sum()) if 'error' in df else 0

  logger.info('')
  logger.info('=' * 70)
  logger.info('Summary Statistics')
  logger.info('=' * 70)
  logger.info('Total companies: %d', total)
  logger.info('Failed: %d', failed)

  if 'signal' in df:
    logger.info('')
    logger.info('Signals:')
    for signal, count in df['signal'].value_counts().items():
      logger.info('  %-10s %d', signal, count)

  if 'at_bracket_edge' in df:
    edge = int(df['at_bracket_edge'].fillna(False).astype(bool).sum())
    if edge:
      logger.info('')
      logger.info('Implied growth outside solver bracket: %d', edge)

  ranked = df[df['expectation_gap'].notna()]
  if not ranked.empty:
    logger.info('')
    logger.info('Top 5 by expectation gap:')
    for _, row in ranked.head(5).iterrows():
      implied = row['implied_growth_rate']
      implied = 'N/A' if pd.isna(implied) else f'{implied:.2f}%'
      logger.info('  %s: implied=%s, gap=%+.2f%%, %s', row['symbol'], implied,
                  row['expectation_gap'], row['signal'])

  logger.info('=' * 70)


def main() -> None:
  '''CLI entrypoint for batch screening.'''
  parser = argparse.ArgumentParser(
      description='Reverse-DCF screening for a universe of stocks',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog=__doc__,
  )

  parser.add_argument('--stocks-file',
                      type=Path,
                      required=True,
                      help='CSV or parquet file with stock records')
  parser.add_argument('--output',
                      type=Path,
                      required=True,
                      help='Output CSV file path')
  parser.add_argument('--scenario',
                      type=str,
                      default='default',
                      choices=list_scenarios(),
                      help='Scenario preset (default: default)')
  parser.add_argument('--config',
                      type=Path,
                      help='Scenario JSON file (overrides --scenario)')
  parser.add_argument('--sector',
                      type=str,
                      help='Only sectors containing this text')
  parser.add_argument('--min-market-cap', type=float, help='Minimum mcap')
  parser.add_argument('--max-market-cap', type=float, help='Maximum mcap')
  parser.add_argument('--include-loss-making',
                      action='store_true',
                      help='Keep stocks with non-positive profit')
  parser.add_argument('--concurrency',
                      type=int,
                      default=4,
                      help='Worker threads (default: 4)')
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
  logger.info('Using scenario: %s', config.name)

  loader = StockDataLoader(args.stocks_file)
  snapshots = filter_snapshots(
      loader.load_snapshots(),
      sector=args.sector,
      min_market_cap=args.min_market_cap,
      max_market_cap=args.max_market_cap,
      require_profit=not args.include_loss_making,
  )
  logger.info('Screening %d stocks from %s', len(snapshots),
              args.stocks_file)

  if not snapshots:
    raise ValueError('No stocks left to screen after filtering')

  results = screen_stocks(snapshots,
                          config=config,
                          concurrency=args.concurrency,
                          verbose=args.verbose)

  args.output.parent.mkdir(parents=True, exist_ok=True)
  results.to_csv(args.output, index=False)

  logger.info('')
  logger.info('Saved %d results to %s', len(results), args.output)

  _print_summary(results)


if __name__ == '__main__':
  main()
