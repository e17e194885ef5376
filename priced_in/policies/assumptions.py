"""
Default assumption policies.

These policies supply the DCF assumptions (horizon, discount rate, exit
multiple, expected growth) for a security from its market cap and sector.
The tables are immutable tuples evaluated in order; pass different tables
to AssumptionPolicy to experiment with alternatives.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from priced_in.domain.types import AssumptionSet
from priced_in.domain.types import PolicyOutput

TERMINAL_GROWTH_PCT = 4.0
DEFAULT_EXIT_MULTIPLE = 20.0


@dataclass(frozen=True)
class MarketCapBand:
  """
  One market-cap band and its default assumptions.

  Attributes:
    upper_bound: Exclusive upper market-cap bound (None for the last band)
    category: Band label
    forecast_years: Forecast horizon
    discount_rate_pct: Cost of equity in percent
    expected_growth_pct: Default expected profit CAGR in percent
  """
  upper_bound: Optional[float]
  category: str
  forecast_years: int
  discount_rate_pct: float
  expected_growth_pct: float

  def contains(self, market_cap: float) -> bool:
    return self.upper_bound is None or market_cap < self.upper_bound


MARKET_CAP_BANDS: Tuple[MarketCapBand, ...] = (
    MarketCapBand(500.0, 'Micro Cap', 20, 20.0, 25.0),
    MarketCapBand(5_000.0, 'Small Cap', 20, 20.0, 25.0),
    MarketCapBand(20_000.0, 'Mid Cap', 15, 18.0, 18.0),
    MarketCapBand(50_000.0, 'Large-Mid Cap', 15, 16.0, 15.0),
    MarketCapBand(200_000.0, 'Large Cap', 10, 15.0, 12.0),
    MarketCapBand(None, 'Mega Cap', 10, 13.0, 10.0),
)

# Matched by substring on the lower-cased sector, first hit wins. Short
# keywords like 'it' also match inside longer words ('capital', 'utility').
SECTOR_EXIT_MULTIPLES: Tuple[Tuple[str, float], ...] = (
    ('fmcg', 45.0),
    ('it', 22.0),
    ('information technology', 22.0),
    ('pharma', 30.0),
    ('pharmaceutical', 30.0),
    ('healthcare', 30.0),
    ('bank', 15.0),
    ('banking', 15.0),
    ('nbfc', 20.0),
    ('financial', 18.0),
    ('insurance', 35.0),
    ('auto', 20.0),
    ('automobile', 20.0),
    ('chemical', 25.0),
    ('capital goods', 25.0),
    ('cement', 25.0),
    ('construction', 18.0),
    ('consumer durable', 35.0),
    ('consumer', 30.0),
    ('diversified', 20.0),
    ('energy', 12.0),
    ('fertilizer', 15.0),
    ('infrastructure', 15.0),
    ('logistics', 25.0),
    ('media', 25.0),
    ('entertainment', 25.0),
    ('metal', 12.0),
    ('mining', 12.0),
    ('oil', 10.0),
    ('gas', 10.0),
    ('petroleum', 10.0),
    ('power', 10.0),
    ('utility', 10.0),
    ('real estate', 15.0),
    ('realty', 15.0),
    ('retail', 40.0),
    ('sugar', 15.0),
    ('telecom', 20.0),
    ('textile', 15.0),
    ('tourism', 25.0),
    ('hotel', 25.0),
    ('hospitality', 25.0),
    ('trading', 12.0),
    ('manufacturing', 22.0),
    ('technology', 30.0),
    ('software', 25.0),
)


def find_band(
    market_cap: float,
    bands: Sequence[MarketCapBand] = MARKET_CAP_BANDS,
) -> MarketCapBand:
  """Return the first band whose upper bound exceeds market_cap."""
  for band in bands:
    if band.contains(market_cap):
      return band
  raise ValueError(f'No market-cap band covers {market_cap}; '
                   'the last band must have upper_bound=None')


def match_sector_multiple(
    sector: Optional[str],
    sector_multiples: Sequence[Tuple[str, float]] = SECTOR_EXIT_MULTIPLES,
    default_multiple: float = DEFAULT_EXIT_MULTIPLE,
) -> Tuple[float, Optional[str]]:
  """
  Look up the exit multiple for a free-text sector label.

  Args:
    sector: Sector label, any case; None or empty uses the default
    sector_multiples: Ordered (keyword, multiple) pairs
    default_multiple: Multiple when nothing matches

  Returns:
    Tuple of (exit_multiple, matched_keyword). matched_keyword is None when
    the default was used.
  """
  if sector:
    label = sector.lower()
    for keyword, multiple in sector_multiples:
      if keyword in label:
        return multiple, keyword
  return default_multiple, None


def default_assumptions(
    market_cap: float,
    sector: Optional[str],
    sector_multiples: Sequence[Tuple[str, float]] = SECTOR_EXIT_MULTIPLES,
    bands: Sequence[MarketCapBand] = MARKET_CAP_BANDS,
) -> AssumptionSet:
  """Default assumption set for a market cap and sector label."""
  policy = AssumptionPolicy(bands=bands, sector_multiples=sector_multiples)
  return policy.compute(market_cap, sector).value


class AssumptionPolicy:
  """
  Market-cap band and sector lookup with diagnostics.

  Band and sector lookup in the PolicyOutput convention so callers can
  see which band and sector keyword produced the defaults.
  """

  def __init__(
      self,
      bands: Sequence[MarketCapBand] = MARKET_CAP_BANDS,
      sector_multiples: Sequence[Tuple[str, float]] = SECTOR_EXIT_MULTIPLES,
      default_multiple: float = DEFAULT_EXIT_MULTIPLE,
      terminal_growth_pct: float = TERMINAL_GROWTH_PCT,
  ):
    """
    Initialize assumption policy.

    Args:
      bands: Ordered market-cap bands, last one unbounded
      sector_multiples: Ordered (keyword, exit multiple) pairs
      default_multiple: Exit multiple when no sector keyword matches
      terminal_growth_pct: Terminal growth reported in the assumption set
    """
    self.bands = tuple(bands)
    self.sector_multiples = tuple(sector_multiples)
    self.default_multiple = default_multiple
    self.terminal_growth_pct = terminal_growth_pct

  def compute(
      self,
      market_cap: float,
      sector: Optional[str],
  ) -> PolicyOutput[AssumptionSet]:
    """Return default assumptions and how they were chosen."""
    band = find_band(market_cap, self.bands)
    exit_multiple, keyword = match_sector_multiple(sector,
                                                   self.sector_multiples,
                                                   self.default_multiple)
    assumptions = AssumptionSet(
        forecast_years=band.forecast_years,
        discount_rate_pct=band.discount_rate_pct,
        terminal_growth_pct=self.terminal_growth_pct,
        exit_multiple=exit_multiple,
        expected_growth_pct=band.expected_growth_pct,
        category=band.category,
    )
    return PolicyOutput(value=assumptions,
                        diag={
                            'assumption_method': 'band_sector_lookup',
                            'category': band.category,
                            'band_upper_bound': band.upper_bound,
                            'sector_keyword': keyword,
                            'default_multiple_used': keyword is None,
                        })
