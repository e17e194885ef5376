'''Reverse-DCF engine with pure math functions.'''

from priced_in.engine.dcf import (
    compute_components_for,
    compute_pv_forecast,
    compute_terminal_value,
    compute_value_components,
    generate_projections,
    implied_equity_value,
)
from priced_in.engine.solver import (
    BisectionBracket,
    DEFAULT_BRACKET,
    solve_growth,
    solve_implied_growth_rate,
)

__all__ = [
    'BisectionBracket',
    'DEFAULT_BRACKET',
    'compute_components_for',
    'compute_pv_forecast',
    'compute_terminal_value',
    'compute_value_components',
    'generate_projections',
    'implied_equity_value',
    'solve_growth',
    'solve_implied_growth_rate',
]
