"""
Scenario configuration for reverse-DCF analysis.

ScenarioConfig is a serializable (JSON-friendly) configuration class that
specifies assumption overrides, the solver bracket and how undefined implied
growth is treated when computing the expectation gap.
"""

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
from dataclasses import replace
import json
from pathlib import Path
from typing import Any, Optional, Tuple

from priced_in.domain.types import AssumptionSet
from priced_in.engine.solver import BisectionBracket
from priced_in.policies.assumptions import DEFAULT_EXIT_MULTIPLE


@dataclass(frozen=True)
class AssumptionOverrides:
  """
  User-supplied assumptions that replace the band/sector defaults.

  Fields left as None keep the default. A 0 is a real override, not a
  missing value.

  Attributes:
    forecast_years: Forecast horizon
    discount_rate_pct: Cost of equity in percent
    terminal_growth_pct: Terminal growth in percent
    exit_multiple: Terminal price/profit multiple
    expected_growth_pct: Expected profit CAGR in percent
  """
  forecast_years: Optional[int] = None
  discount_rate_pct: Optional[float] = None
  terminal_growth_pct: Optional[float] = None
  exit_multiple: Optional[float] = None
  expected_growth_pct: Optional[float] = None

  def apply(self, defaults: AssumptionSet) -> AssumptionSet:
    """Return defaults with every non-None override applied."""
    changes = {
        f.name: getattr(self, f.name)
        for f in fields(self)
        if getattr(self, f.name) is not None
    }
    return replace(defaults, **changes)

  def merged_with(self, other: 'AssumptionOverrides') -> 'AssumptionOverrides':
    """Return a copy where every non-None field of other wins."""
    changes = {
        f.name: getattr(other, f.name)
        for f in fields(other)
        if getattr(other, f.name) is not None
    }
    return replace(self, **changes)

  def is_empty(self) -> bool:
    return all(getattr(self, f.name) is None for f in fields(self))


@dataclass
class ScenarioConfig:
  """
  Configuration for a reverse-DCF scenario.

  Attributes:
    name: Human-readable scenario name
    overrides: Assumptions that replace the band/sector defaults
    bracket: Growth solver bracket and stopping rule
    strict_gap: Leave the expectation gap undefined (signal N/A) when the
      implied growth rate is undefined, instead of treating it as 0%
    sector_multiples: Ordered (keyword, exit multiple) pairs replacing the
      built-in sector table, None keeps it
    default_exit_multiple: Exit multiple when no sector keyword matches
  """
  name: str = 'default'
  overrides: AssumptionOverrides = field(default_factory=AssumptionOverrides)
  bracket: BisectionBracket = field(default_factory=BisectionBracket)
  strict_gap: bool = False
  sector_multiples: Optional[Tuple[Tuple[str, float], ...]] = None
  default_exit_multiple: float = DEFAULT_EXIT_MULTIPLE

  @classmethod
  def default(cls) -> 'ScenarioConfig':
    """
    Create default scenario configuration.

    Uses:
      - Band/sector defaults with no overrides
      - Bisection over [-90%, 200%], 500 iterations, 1e-5 tolerance
      - Undefined implied growth counted as 0% in the gap
    """
    return cls(name='default')

  @classmethod
  def conservative(cls) -> 'ScenarioConfig':
    """Scenario with a 15% cost of equity and a 15x exit multiple."""
    return cls(
        name='conservative',
        overrides=AssumptionOverrides(discount_rate_pct=15.0,
                                      exit_multiple=15.0),
    )

  @classmethod
  def strict(cls) -> 'ScenarioConfig':
    """Scenario that reports N/A for loss-making or unpriced stocks."""
    return cls(name='strict', strict_gap=True)

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    return asdict(self)

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'ScenarioConfig':
    """Create from dictionary."""
    data = dict(data)
    overrides = data.pop('overrides', None) or {}
    bracket = data.pop('bracket', None) or {}
    sector_multiples = data.pop('sector_multiples', None)
    if sector_multiples is not None:
      sector_multiples = tuple(
          (str(keyword), float(multiple))
          for keyword, multiple in sector_multiples)
    return cls(
        overrides=AssumptionOverrides(**overrides),
        bracket=BisectionBracket(**bracket),
        sector_multiples=sector_multiples,
        **data,
    )

  @classmethod
  def from_json(cls, json_str: str) -> 'ScenarioConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))


def load_config_from_file(config_path: Path) -> ScenarioConfig:
  """Load ScenarioConfig from a JSON file."""
  if not config_path.exists():
    raise FileNotFoundError(f'Scenario config not found: {config_path}')
  with open(config_path, 'r', encoding='utf-8') as f:
    return ScenarioConfig.from_dict(json.load(f))
