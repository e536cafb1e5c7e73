"""
Scenario configuration for the fair value model.

ScenarioConfig is an immutable, serializable (JSON-friendly) configuration
class holding every calibration constant of the model, plus the names of the
policies used for band sigma, risk weighting and regime classification.
"""

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import replace
import json
import math
from typing import Any

import pandas as pd


@dataclass(frozen=True)
class ScenarioConfig:
  """
  Configuration for a model scenario.

  Dates are ISO strings and policies are registry names, which keeps the
  config serializable to JSON for reproducibility.

  Attributes:
    name: Human-readable scenario name
    genesis_date: Origin of the day count
    halving_date: Reference halving date for the cycle wave phase
    a_std: Standard power-law scale
    b_std: Standard power-law exponent
    a_decay: Decaying power-law scale
    b_decay: Decaying power-law exponent
    cycle_period: Halving cycle length in days
    cycle_amplitude: Peak deviation of the cycle wave from 1.0
    w_decaying: Blend weight of the decaying curve
    w_cycle: Blend weight of the cycle curve
    w_standard: Blend weight of the standard curve
    on_chain_scale: Oscillator multiplier for the on-chain proxy
    on_chain_offset: Offset of the on-chain proxy
    price_risk_offset: Oscillator value mapping to 0 price risk (negated)
    price_risk_span: Oscillator range mapping onto 0..100 price risk
    on_chain_risk_ceiling: On-chain proxy mapping to 100 on-chain risk
    volatility: Volatility policy name (e.g., 'decaying', 'constant')
    risk_weights: Risk weighting policy name (e.g., 'balanced')
    regime: Regime policy name (e.g., 'threshold_35_70')
  """
  name: str = 'default'
  genesis_date: str = '2009-01-03'
  halving_date: str = '2024-04-20'
  a_std: float = 1.48e-17
  b_std: float = 5.78
  a_decay: float = 1.48e-15
  b_decay: float = 5.25
  cycle_period: int = 1460
  cycle_amplitude: float = 0.15
  w_decaying: float = 0.4
  w_cycle: float = 0.3
  w_standard: float = 0.3
  on_chain_scale: float = 6.5
  on_chain_offset: float = 2.5
  price_risk_offset: float = 0.5
  price_risk_span: float = 1.0
  on_chain_risk_ceiling: float = 6.0
  volatility: str = 'decaying'
  risk_weights: str = 'balanced'
  regime: str = 'threshold_35_70'

  def __post_init__(self):
    if not math.isclose(sum(self.blend_weights), 1.0, abs_tol=1e-9):
      raise ValueError(
          f'Blend weights must sum to 1.0, got {sum(self.blend_weights)}')
    if any(w < 0 for w in self.blend_weights):
      raise ValueError(
          f'Blend weights must be non-negative, got {self.blend_weights}')
    if self.a_std <= 0 or self.a_decay <= 0:
      raise ValueError(
          f'Power-law scales must be positive, got a_std={self.a_std}, '
          f'a_decay={self.a_decay}')
    if not 0 <= self.cycle_amplitude < 1:
      raise ValueError(
          f'cycle_amplitude must be within [0, 1), got {self.cycle_amplitude}')
    if self.cycle_period <= 0:
      raise ValueError(f'cycle_period must be positive, got {self.cycle_period}')
    if self.price_risk_span <= 0 or self.on_chain_risk_ceiling <= 0:
      raise ValueError('Risk span and ceiling must be positive')

  @property
  def blend_weights(self) -> tuple[float, float, float]:
    """Blend weights in (decaying, cycle, standard) order."""
    return (self.w_decaying, self.w_cycle, self.w_standard)

  @property
  def genesis(self) -> pd.Timestamp:
    return pd.Timestamp(self.genesis_date)

  @property
  def halving(self) -> pd.Timestamp:
    return pd.Timestamp(self.halving_date)

  @classmethod
  def default(cls) -> 'ScenarioConfig':
    """
    Create default scenario configuration.

    Uses:
      - Genesis 2009-01-03, halving reference 2024-04-20
      - Standard curve 1.48e-17 * d^5.78, decaying curve 1.48e-15 * d^5.25
      - 1460-day cycle wave with 15% amplitude
      - Blend 40% decaying / 30% cycle / 30% standard
      - Sigma 0.5 decaying after day 5800
      - Risk weights 60/20/20, regime thresholds 35/70
    """
    return cls()

  @classmethod
  def price_heavy(cls) -> 'ScenarioConfig':
    """Historical variant weighting price risk at 70%."""
    return cls(name='price_heavy', risk_weights='price_heavy')

  @classmethod
  def early_sell(cls) -> 'ScenarioConfig':
    """Historical variant flagging SELL above 65."""
    return cls(name='early_sell', regime='threshold_35_65')

  @classmethod
  def constant_sigma(cls) -> 'ScenarioConfig':
    """Band without maturity decay."""
    return cls(name='constant_sigma', volatility='constant')

  def with_overrides(self, **changes: Any) -> 'ScenarioConfig':
    """Copy with some fields replaced (validated again)."""
    return replace(self, **changes)

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    return asdict(self)

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'ScenarioConfig':
    """Create from dictionary."""
    return cls(**data)

  @classmethod
  def from_json(cls, json_str: str) -> 'ScenarioConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))
