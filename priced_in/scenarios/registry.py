"""
Scenario registry for mapping preset names to configurations.

CLIs accept a scenario name; this module turns it into a ScenarioConfig and
builds the assumption policy the configuration describes.

To add a preset:
1. Add a classmethod on ScenarioConfig returning the configuration
2. Register it in SCENARIO_PRESETS
"""

from collections.abc import Callable
from pathlib import Path
from typing import Optional

from priced_in.policies.assumptions import AssumptionPolicy
from priced_in.policies.assumptions import SECTOR_EXIT_MULTIPLES
from priced_in.scenarios.config import load_config_from_file
from priced_in.scenarios.config import ScenarioConfig

SCENARIO_PRESETS: dict[str, Callable[[], ScenarioConfig]] = {
    'default': ScenarioConfig.default,
    'conservative': ScenarioConfig.conservative,
    'strict': ScenarioConfig.strict,
}


def create_config(name: str) -> ScenarioConfig:
  """
  Create a scenario configuration from a preset name.

  Raises:
    KeyError: If the preset name is not registered
  """
  try:
    factory = SCENARIO_PRESETS[name]
  except KeyError as e:
    raise KeyError(f"Unknown scenario: '{name}'. "
                   f'Available: {list(SCENARIO_PRESETS.keys())}') from e
  return factory()


def resolve_config(
    scenario: str = 'default',
    config_path: Optional[Path] = None,
) -> ScenarioConfig:
  """Config file if given, otherwise the named preset."""
  if config_path is not None:
    return load_config_from_file(config_path)
  return create_config(scenario)


def list_scenarios() -> list[str]:
  """List registered preset names."""
  return list(SCENARIO_PRESETS.keys())


def create_assumption_policy(config: ScenarioConfig) -> AssumptionPolicy:
  """
  Build the band/sector assumption policy for a scenario.

  Args:
    config: ScenarioConfig whose sector table (if any) replaces the default

  Returns:
    AssumptionPolicy using the built-in market-cap bands
  """
  sector_multiples = config.sector_multiples
  if sector_multiples is None:
    sector_multiples = SECTOR_EXIT_MULTIPLES
  return AssumptionPolicy(
      sector_multiples=sector_multiples,
      default_multiple=config.default_exit_multiple,
  )
