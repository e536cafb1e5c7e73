"""
Policies for the swappable parts of the fair value model.

Each policy computes one component (band sigma, risk weighting, regime,
stage) and returns both a value and diagnostic information.

To add a new policy:
1. Create a new class inheriting from the appropriate base
   (e.g., VolatilityPolicy)
2. Implement the compute() method returning PolicyOutput
3. Register in scenarios/registry.py

Example:
  class FlatBeforeHalving(VolatilityPolicy):
    def compute(self, days: int) -> PolicyOutput[float]:
      sigma = ...  # your calculation
      return PolicyOutput(value=sigma, diag={'sigma_method': 'flat'})
"""

from btc_compass.policies.regime import RegimePolicy
from btc_compass.policies.regime import ThresholdRegime
from btc_compass.policies.risk import FixedRiskWeights
from btc_compass.policies.risk import RiskWeightingPolicy
from btc_compass.policies.stages import StageLadder
from btc_compass.policies.volatility import ConstantSigma
from btc_compass.policies.volatility import DecayingSigma
from btc_compass.policies.volatility import VolatilityPolicy

__all__ = [
    'VolatilityPolicy', 'DecayingSigma', 'ConstantSigma',
    'RiskWeightingPolicy', 'FixedRiskWeights',
    'RegimePolicy', 'ThresholdRegime',
    'StageLadder',
]
