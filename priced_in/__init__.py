'''
Reverse-DCF engine for the growth rate priced into a market cap.

This package inverts a two-stage DCF (explicit forecast plus exit multiple)
to find the profit growth a stock's market cap implies, and compares it
with the growth a band-and-sector assumption table expects. Assumptions,
the solver bracket and gap handling are configured per scenario.

Usage:
  from priced_in.domain.types import StockSnapshot
  from priced_in.scenarios.config import ScenarioConfig
  from priced_in.run import analyze_stock

  snapshot = StockSnapshot(symbol='ABC', sector='FMCG',
                           current_profit=1737.0, market_cap=93798.0)
  result = analyze_stock(snapshot, ScenarioConfig.default())
'''
