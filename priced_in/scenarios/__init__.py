"""Scenario configuration and preset registry."""

from priced_in.scenarios.config import AssumptionOverrides
from priced_in.scenarios.config import load_config_from_file
from priced_in.scenarios.config import ScenarioConfig
from priced_in.scenarios.registry import create_assumption_policy
from priced_in.scenarios.registry import create_config
from priced_in.scenarios.registry import list_scenarios
from priced_in.scenarios.registry import resolve_config
from priced_in.scenarios.registry import SCENARIO_PRESETS

__all__ = [
  'AssumptionOverrides',
  'ScenarioConfig',
  'SCENARIO_PRESETS',
  'create_assumption_policy',
  'create_config',
  'list_scenarios',
  'load_config_from_file',
  'resolve_config',
]
