"""
Caching loader for flat stock records.

Reads the records a storage or data-acquisition layer exports (CSV or
parquet, one row per security) and turns them into StockSnapshot objects.

Usage:
  loader = StockDataLoader(Path('data/stocks.csv'))
  for snapshot in loader.load_snapshots():
    result = analyze_stock(snapshot)
"""

import logging
import math
from pathlib import Path
from typing import Any, List, Optional

import pandas as pd

from priced_in.domain.types import StockSnapshot

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ('symbol', 'current_profit')
TEXT_COLUMNS = ('name', 'sector')
NUMERIC_COLUMNS = ('current_profit', 'market_cap', 'price',
                   'shares_outstanding')


def _as_float(value: Any) -> float:
  if value is None:
    return 0.0
  value = float(value)
  return 0.0 if math.isnan(value) else value


def _as_text(value: Any) -> str:
  if value is None or (isinstance(value, float) and math.isnan(value)):
    return ''
  return str(value)


class StockDataLoader:
  """
  Cached loader for stock records.

  The file is read once; later calls reuse the cached frame until
  clear_cache() is called.
  """

  def __init__(self, path: Path = Path('data/stocks.csv')):
    """
    Initialize data loader.

    Args:
      path: CSV or parquet file with one row per security
    """
    self.path = path
    self._frame: Optional[pd.DataFrame] = None

  def load_frame(self) -> pd.DataFrame:
    """
    Load, validate and cache stock records.

    Returns:
      DataFrame with numeric columns coerced to float

    Raises:
      FileNotFoundError: If the file does not exist
      ValueError: If the format is unsupported or columns are missing
    """
    if self._frame is not None:
      return self._frame

    if not self.path.exists():
      raise FileNotFoundError(f'Stock records not found: {self.path}')

    suffix = self.path.suffix.lower()
    if suffix == '.csv':
      frame = pd.read_csv(self.path)
    elif suffix == '.parquet':
      frame = pd.read_parquet(self.path)
    else:
      raise ValueError(f'Unsupported stock file format: {self.path.suffix}')

    self._validate(frame)

    for column in NUMERIC_COLUMNS:
      if column in frame.columns:
        frame[column] = pd.to_numeric(frame[column], errors='coerce')
    frame['symbol'] = frame['symbol'].astype(str).str.strip().str.upper()

    logger.debug('Loaded %d stock records from %s', len(frame), self.path)
    self._frame = frame
    return frame

  def load_snapshots(self) -> List[StockSnapshot]:
    """Load records as StockSnapshot objects."""
    frame = self.load_frame()
    return [
        self._row_to_snapshot(row)
        for row in frame.to_dict(orient='records')
    ]

  def clear_cache(self) -> None:
    """Clear cached records."""
    self._frame = None

  @staticmethod
  def _validate(frame: pd.DataFrame) -> None:
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
      raise ValueError(f'Stock records missing columns: {missing}')

    has_market_cap = 'market_cap' in frame.columns
    has_price = ('price' in frame.columns and
                 'shares_outstanding' in frame.columns)
    if not has_market_cap and not has_price:
      raise ValueError('Stock records need market_cap or '
                       'price and shares_outstanding columns')

  @staticmethod
  def _row_to_snapshot(row: dict) -> StockSnapshot:
    return StockSnapshot(
        symbol=row['symbol'],
        current_profit=_as_float(row.get('current_profit')),
        market_cap=_as_float(row.get('market_cap')),
        price=_as_float(row.get('price')),
        shares_outstanding=_as_float(row.get('shares_outstanding')),
        name=_as_text(row.get('name')),
        sector=_as_text(row.get('sector')),
    )
