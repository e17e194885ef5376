'''
Reverse-DCF analysis utilities.

Note: To avoid RuntimeWarning when using -m flag, import directly:
  from priced_in.analysis.batch_screening import screen_stocks
  from priced_in.analysis.sensitivity import ImpliedGrowthSensitivity
'''

__all__ = [
    'filter_snapshots',
    'screen_stocks',
    'ImpliedGrowthSensitivity',
]

# Direct imports for convenience (may cause RuntimeWarning with -m flag)
from priced_in.analysis.batch_screening import filter_snapshots
from priced_in.analysis.batch_screening import screen_stocks
from priced_in.analysis.sensitivity import ImpliedGrowthSensitivity
