"""
Regime classification policies.

Map a composite risk percentage onto one of the three market regimes.
Classification has no memory: the same risk always yields the same regime.
"""

from abc import ABC
from abc import abstractmethod

from btc_compass.domain.types import PolicyOutput
from btc_compass.domain.types import Regime


class RegimePolicy(ABC):
  """Base class for regime classification policies."""

  @abstractmethod
  def compute(self, risk_percent: float) -> PolicyOutput[Regime]:
    """
    Classify a risk percentage.

    Args:
      risk_percent: Composite risk in [0, 100]

    Returns:
      PolicyOutput with the regime and diagnostics
    """


class ThresholdRegime(RegimePolicy):
  """
  Two-threshold partition of the risk range.

  risk < low -> ACCUMULATE, risk > high -> SELL, otherwise STABLE. Both
  thresholds belong to STABLE.
  """

  def __init__(self, low: float = 35.0, high: float = 70.0):
    """
    Initialize threshold regime policy.

    Args:
      low: Upper (exclusive) bound of ACCUMULATE (default: 35)
      high: Lower (exclusive) bound of SELL (default: 70)

    Raises:
      ValueError: If low > high
    """
    if low > high:
      raise ValueError(f'Regime thresholds inverted: low={low} > high={high}')
    self.low = low
    self.high = high

  def compute(self, risk_percent: float) -> PolicyOutput[Regime]:
    """Classify by thresholds."""
    if risk_percent < self.low:
      regime = Regime.ACCUMULATE
    elif risk_percent > self.high:
      regime = Regime.SELL
    else:
      regime = Regime.STABLE

    return PolicyOutput(value=regime,
                        diag={
                            'regime_method': 'threshold',
                            'low_threshold': self.low,
                            'high_threshold': self.high,
                        })
