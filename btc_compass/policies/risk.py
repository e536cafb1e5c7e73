'''
Composite risk weighting policies.

These policies combine the price, sentiment and on-chain sub-scores (each
already clamped to [0, 100]) into a single risk percentage.
'''

from abc import ABC, abstractmethod
import math

from btc_compass.domain.types import PolicyOutput
from btc_compass.engine.indicators import clamp


class RiskWeightingPolicy(ABC):
  '''
  Base class for risk weighting policies.

  Subclasses implement compute() to blend the three sub-scores.
  '''

  @abstractmethod
  def compute(
      self,
      price_risk: float,
      sentiment_risk: float,
      on_chain_risk: float,
  ) -> PolicyOutput[float]:
    '''
    Compute composite risk percentage.

    Args:
      price_risk: Oscillator sub-score in [0, 100]
      sentiment_risk: Sentiment sub-score in [0, 100]
      on_chain_risk: On-chain sub-score in [0, 100]

    Returns:
      PolicyOutput with risk percent in [0, 100]
    '''


class FixedRiskWeights(RiskWeightingPolicy):
  '''
  Fixed convex weighting of the sub-scores.

  Weights must sum to 1.0 so the result stays within [0, 100].
  '''

  def __init__(
      self,
      price_weight: float = 0.6,
      sentiment_weight: float = 0.2,
      on_chain_weight: float = 0.2,
  ):
    '''
    Initialize fixed weighting.

    Args:
      price_weight: Weight of the oscillator sub-score (default: 0.6)
      sentiment_weight: Weight of the sentiment sub-score (default: 0.2)
      on_chain_weight: Weight of the on-chain sub-score (default: 0.2)

    Raises:
      ValueError: If weights are negative or do not sum to 1.0
    '''
    weights = (price_weight, sentiment_weight, on_chain_weight)
    if any(w < 0 for w in weights):
      raise ValueError(f'Risk weights must be non-negative, got {weights}')
    if not math.isclose(sum(weights), 1.0, abs_tol=1e-9):
      raise ValueError(f'Risk weights must sum to 1.0, got {sum(weights)}')
    self.price_weight = price_weight
    self.sentiment_weight = sentiment_weight
    self.on_chain_weight = on_chain_weight

  def compute(
      self,
      price_risk: float,
      sentiment_risk: float,
      on_chain_risk: float,
  ) -> PolicyOutput[float]:
    '''Compute weighted risk percentage.'''
    risk = ((price_risk * self.price_weight) +
            (sentiment_risk * self.sentiment_weight) +
            (on_chain_risk * self.on_chain_weight))
    return PolicyOutput(value=clamp(risk),
                        diag={
                            'risk_method': 'fixed_weights',
                            'price_weight': self.price_weight,
                            'sentiment_weight': self.sentiment_weight,
                            'on_chain_weight': self.on_chain_weight,
                        })
