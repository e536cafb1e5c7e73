"""
Policy registry for mapping string names to policy factories.

This enables scenarios to be configured with string names (JSON friendly)
while still instantiating the correct policy classes.

To add a new policy:
1. Implement the policy class in the appropriate module
   (e.g., policies/volatility.py)
2. Add a factory function here that creates the policy instance
3. Register it in the appropriate registry dictionary

Example:
  # In scenarios/registry.py
  VOLATILITY_POLICIES['decaying_fast'] = lambda: DecayingSigma(
      base_sigma=0.5, decay_rate=0.2, reference_day=5800)
"""

from collections.abc import Callable
from typing import Any, cast, TypedDict

from btc_compass.policies.regime import RegimePolicy
from btc_compass.policies.regime import ThresholdRegime
from btc_compass.policies.risk import FixedRiskWeights
from btc_compass.policies.risk import RiskWeightingPolicy
from btc_compass.policies.stages import default_ladders
from btc_compass.policies.stages import StageLadder
from btc_compass.policies.volatility import ConstantSigma
from btc_compass.policies.volatility import DecayingSigma
from btc_compass.policies.volatility import VolatilityPolicy
from btc_compass.scenarios.config import ScenarioConfig


class PolicyBundle(TypedDict):
  volatility: VolatilityPolicy
  risk_weights: RiskWeightingPolicy
  regime: RegimePolicy
  stages: dict[str, StageLadder]


VOLATILITY_POLICIES: dict[str, Callable[[], VolatilityPolicy]] = {
    'decaying':
        lambda: DecayingSigma(base_sigma=0.5, decay_rate=0.12,
                              reference_day=5800),
    'constant':
        lambda: ConstantSigma(sigma=0.5),
}

RISK_WEIGHT_POLICIES: dict[str, Callable[[], RiskWeightingPolicy]] = {
    'balanced':
        lambda: FixedRiskWeights(price_weight=0.6, sentiment_weight=0.2,
                                 on_chain_weight=0.2),
    'price_heavy':
        lambda: FixedRiskWeights(price_weight=0.7, sentiment_weight=0.15,
                                 on_chain_weight=0.15),
}

REGIME_POLICIES: dict[str, Callable[[], RegimePolicy]] = {
    'threshold_35_70': lambda: ThresholdRegime(low=35, high=70),
    'threshold_35_65': lambda: ThresholdRegime(low=35, high=65),
}

POLICY_REGISTRY = {
    'volatility': VOLATILITY_POLICIES,
    'risk_weights': RISK_WEIGHT_POLICIES,
    'regime': REGIME_POLICIES,
}

SCENARIOS: dict[str, Callable[[], ScenarioConfig]] = {
    'default': ScenarioConfig.default,
    'price_heavy': ScenarioConfig.price_heavy,
    'early_sell': ScenarioConfig.early_sell,
    'constant_sigma': ScenarioConfig.constant_sigma,
}


def create_policies(config: ScenarioConfig) -> PolicyBundle:
  """
  Create policy instances from scenario configuration.

  Args:
    config: ScenarioConfig with policy names

  Returns:
    PolicyBundle with instantiated policy objects:
    - volatility: VolatilityPolicy
    - risk_weights: RiskWeightingPolicy
    - regime: RegimePolicy
    - stages: StageLadder per indicator

  Raises:
    KeyError: If a policy name is not found in the registry
  """
  try:
    volatility_factory = VOLATILITY_POLICIES[config.volatility]
  except KeyError as e:
    raise KeyError(f"Unknown volatility policy: '{config.volatility}'. "
                   f'Available: {list(VOLATILITY_POLICIES.keys())}') from e

  try:
    risk_factory = RISK_WEIGHT_POLICIES[config.risk_weights]
  except KeyError as e:
    raise KeyError(f"Unknown risk_weights policy: '{config.risk_weights}'. "
                   f'Available: {list(RISK_WEIGHT_POLICIES.keys())}') from e

  try:
    regime_factory = REGIME_POLICIES[config.regime]
  except KeyError as e:
    raise KeyError(f"Unknown regime policy: '{config.regime}'. "
                   f'Available: {list(REGIME_POLICIES.keys())}') from e

  return {
      'volatility': volatility_factory(),
      'risk_weights': risk_factory(),
      'regime': regime_factory(),
      'stages': default_ladders(),
  }


def get_scenario(name: str) -> ScenarioConfig:
  """
  Look up a preset scenario by name.

  Raises:
    KeyError: If the scenario name is unknown
  """
  try:
    return SCENARIOS[name]()
  except KeyError as e:
    raise KeyError(f"Unknown scenario: '{name}'. "
                   f'Available: {list(SCENARIOS.keys())}') from e


def list_policies() -> dict[str, list[str]]:
  """
  List all available policies by category.

  Returns:
    Dictionary mapping category names to list of policy names
  """
  result: dict[str, list[str]] = {}
  for category, policies_dict in POLICY_REGISTRY.items():
    policy_dict = cast(dict[str, Any], policies_dict)
    result[category] = list(policy_dict.keys())
  return result
