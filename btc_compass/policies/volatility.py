"""
Volatility (sigma) policies.

These policies determine the half-width of the fair value band in log space
for a given asset age.
"""

from abc import ABC
from abc import abstractmethod

from btc_compass.domain.types import PolicyOutput
from btc_compass.engine.curves import dynamic_sigma


class VolatilityPolicy(ABC):
  """
  Base class for band volatility policies.

  Subclasses implement compute() to return sigma for a day count.
  """

  @abstractmethod
  def compute(self, days: int) -> PolicyOutput[float]:
    """
    Compute band sigma.

    Args:
      days: Effective day count since genesis

    Returns:
      PolicyOutput with sigma and diagnostics
    """


class DecayingSigma(VolatilityPolicy):
  """
  Sigma that decays as the asset matures.

  Constant at base_sigma until reference_day, then shrinks as a power law.
  """

  def __init__(
      self,
      base_sigma: float = 0.5,
      decay_rate: float = 0.12,
      reference_day: int = 5800,
  ):
    """
    Initialize decaying sigma policy.

    Args:
      base_sigma: Sigma up to the maturity threshold (default: 0.5)
      decay_rate: Power-law decay exponent (default: 0.12)
      reference_day: Maturity threshold in days (default: 5800)
    """
    self.base_sigma = base_sigma
    self.decay_rate = decay_rate
    self.reference_day = reference_day

  def compute(self, days: int) -> PolicyOutput[float]:
    """Compute maturity-adjusted sigma."""
    sigma = dynamic_sigma(days, self.base_sigma, self.decay_rate,
                          self.reference_day)
    return PolicyOutput(value=sigma,
                        diag={
                            'sigma_method': 'decaying',
                            'base_sigma': self.base_sigma,
                            'decay_rate': self.decay_rate,
                            'reference_day': self.reference_day,
                            'matured': days > self.reference_day,
                        })


class ConstantSigma(VolatilityPolicy):
  """Fixed band width regardless of asset age."""

  def __init__(self, sigma: float = 0.5):
    self.sigma = sigma

  def compute(self, days: int) -> PolicyOutput[float]:
    """Return fixed sigma."""
    return PolicyOutput(value=self.sigma,
                        diag={
                            'sigma_method': 'constant',
                            'base_sigma': self.sigma,
                        })
