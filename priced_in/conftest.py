import pytest

from priced_in.domain.types import StockSnapshot
from priced_in.scenarios.config import AssumptionOverrides
from priced_in.scenarios.config import ScenarioConfig


@pytest.fixture
def reference_snapshot() -> StockSnapshot:
  """Large-cap FMCG company trading at 54x profit."""
  return StockSnapshot(
      symbol='REF',
      name='Reference Consumer Ltd',
      sector='FMCG',
      current_profit=1737.0,
      market_cap=1737.0 * 54.0,
  )


@pytest.fixture
def reference_config() -> ScenarioConfig:
  """Default scenario with 13% expected growth."""
  return ScenarioConfig(
      name='reference',
      overrides=AssumptionOverrides(expected_growth_pct=13.0),
  )


@pytest.fixture
def loss_making_snapshot() -> StockSnapshot:
  """Small cap with negative profit."""
  return StockSnapshot(
      symbol='LOSS',
      name='Loss Maker Ltd',
      sector='Telecom',
      current_profit=-120.0,
      market_cap=1_000.0,
  )


@pytest.fixture
def sample_snapshots() -> list[StockSnapshot]:
  """Mixed universe across bands and sectors."""
  return [
      StockSnapshot(symbol='REF',
                    sector='FMCG',
                    current_profit=1737.0,
                    market_cap=93_798.0),
      StockSnapshot(symbol='CHEAP',
                    sector='Banking',
                    current_profit=5_000.0,
                    market_cap=40_000.0),
      StockSnapshot(symbol='RICH',
                    sector='Indian IT Services',
                    current_profit=100.0,
                    market_cap=12_000.0),
      StockSnapshot(symbol='PRICED',
                    sector='Cement',
                    current_profit=50.0,
                    price=250.0,
                    shares_outstanding=4.0),
      StockSnapshot(symbol='LOSS',
                    sector='Telecom',
                    current_profit=-120.0,
                    market_cap=1_000.0),
  ]
