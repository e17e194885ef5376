"""Domain types for the implied growth framework."""

from priced_in.domain.types import AnalysisResult
from priced_in.domain.types import AssumptionSet
from priced_in.domain.types import PolicyOutput
from priced_in.domain.types import ProjectionYear
from priced_in.domain.types import Signal
from priced_in.domain.types import SolverResult
from priced_in.domain.types import SolverStatus
from priced_in.domain.types import StockSnapshot
from priced_in.domain.types import ValuationInput

__all__ = [
    'AnalysisResult',
    'AssumptionSet',
    'PolicyOutput',
    'ProjectionYear',
    'Signal',
    'SolverResult',
    'SolverStatus',
    'StockSnapshot',
    'ValuationInput',
]
