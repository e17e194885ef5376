"""
Policies for choosing DCF assumptions and interpreting results.

Each policy supplies one ingredient around the pure engine: default
assumptions for a market-cap band and sector, or the signal derived from the
gap between expected and implied growth.

To try a different assumption table:
  policy = AssumptionPolicy(sector_multiples=(('software', 35.0),))
  result = policy.compute(market_cap=12_000, sector='Software')
"""

from priced_in.policies.assumptions import AssumptionPolicy
from priced_in.policies.assumptions import default_assumptions
from priced_in.policies.assumptions import MARKET_CAP_BANDS
from priced_in.policies.assumptions import MarketCapBand
from priced_in.policies.assumptions import SECTOR_EXIT_MULTIPLES
from priced_in.policies.signal import classify_signal
from priced_in.policies.signal import expectation_gap

__all__ = [
  'AssumptionPolicy', 'MarketCapBand', 'default_assumptions',
  'MARKET_CAP_BANDS', 'SECTOR_EXIT_MULTIPLES',
  'classify_signal', 'expectation_gap',
]
