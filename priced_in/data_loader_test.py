from pathlib import Path
from unittest import mock

import pandas as pd
import pytest

from priced_in.data_loader import StockDataLoader


class TestStockDataLoader:

  def test_initialization(self):
    """Default initialization."""
    loader = StockDataLoader()

    assert loader.path == Path('data/stocks.csv')

  def test_load_csv(self, tmp_path):
    """CSV records become snapshots."""
    path = tmp_path / 'stocks.csv'
    pd.DataFrame({
        'symbol': ['abc', 'XYZ'],
        'name': ['ABC Ltd', 'XYZ Corp'],
        'sector': ['FMCG', None],
        'current_profit': [1737.0, 50.0],
        'market_cap': [93798.0, None],
        'price': [None, 120.0],
        'shares_outstanding': [None, 10.0],
    }).to_csv(path, index=False)

    snapshots = StockDataLoader(path).load_snapshots()

    assert [s.symbol for s in snapshots] == ['ABC', 'XYZ']
    assert snapshots[0].sector == 'FMCG'
    assert snapshots[0].effective_market_cap == 93798.0
    assert snapshots[1].sector == ''
    assert snapshots[1].market_cap == 0.0
    assert snapshots[1].effective_market_cap == pytest.approx(1200.0)

  def test_load_caching(self):
    """Records are cached after first load."""
    loader = StockDataLoader(Path('stocks.parquet'))
    mock_frame = pd.DataFrame({
        'symbol': ['ABC'],
        'current_profit': [10.0],
        'market_cap': [100.0],
    })

    with mock.patch.object(Path, 'exists', return_value=True):
      with mock.patch('pandas.read_parquet',
                      return_value=mock_frame) as mock_read:
        frame1 = loader.load_frame()
        assert mock_read.call_count == 1

        frame2 = loader.load_frame()
        assert mock_read.call_count == 1

        pd.testing.assert_frame_equal(frame1, frame2)

  def test_clear_cache(self):
    """Cache can be cleared and data reloaded."""
    loader = StockDataLoader(Path('stocks.parquet'))
    mock_frame = pd.DataFrame({
        'symbol': ['ABC'],
        'current_profit': [10.0],
        'market_cap': [100.0],
    })

    with mock.patch.object(Path, 'exists', return_value=True):
      with mock.patch('pandas.read_parquet',
                      return_value=mock_frame) as mock_read:
        loader.load_frame()
        loader.clear_cache()
        loader.load_frame()

        assert mock_read.call_count == 2

  def test_missing_file(self, tmp_path):
    """Missing file raises FileNotFoundError."""
    loader = StockDataLoader(tmp_path / 'missing.csv')

    with pytest.raises(FileNotFoundError, match='not found'):
      loader.load_frame()

  def test_unsupported_format(self, tmp_path):
    """Only CSV and parquet are read."""
    path = tmp_path / 'stocks.xlsx'
    path.write_text('x', encoding='utf-8')

    with pytest.raises(ValueError, match='Unsupported'):
      StockDataLoader(path).load_frame()

  def test_missing_profit_column(self, tmp_path):
    """Profit is required."""
    path = tmp_path / 'stocks.csv'
    pd.DataFrame({'symbol': ['ABC'], 'market_cap': [1.0]}).to_csv(path,
                                                                   index=False)

    with pytest.raises(ValueError, match='current_profit'):
      StockDataLoader(path).load_frame()

  def test_missing_market_data_columns(self, tmp_path):
    """Either market cap or price and shares is required."""
    path = tmp_path / 'stocks.csv'
    pd.DataFrame({
        'symbol': ['ABC'],
        'current_profit': [1.0],
        'price': [10.0],
    }).to_csv(path, index=False)

    with pytest.raises(ValueError, match='market_cap'):
      StockDataLoader(path).load_frame()

  def test_non_numeric_profit_coerced(self, tmp_path):
    """Unparseable numbers become 0 profit."""
    path = tmp_path / 'stocks.csv'
    pd.DataFrame({
        'symbol': ['ABC'],
        'current_profit': ['n/a'],
        'market_cap': [100.0],
    }).to_csv(path, index=False)

    snapshot = StockDataLoader(path).load_snapshots()[0]

    assert snapshot.current_profit == 0.0
