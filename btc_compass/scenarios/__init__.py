"""Scenario configuration and policy registry."""

from btc_compass.scenarios.config import ScenarioConfig
from btc_compass.scenarios.registry import create_policies
from btc_compass.scenarios.registry import get_scenario
from btc_compass.scenarios.registry import list_policies
from btc_compass.scenarios.registry import POLICY_REGISTRY

__all__ = [
  'ScenarioConfig',
  'POLICY_REGISTRY',
  'create_policies',
  'get_scenario',
  'list_policies',
]
