'''
Domain types for the fair value model.

These dataclasses are the value objects passed between the engine, the
policies and the callers. None of them is ever mutated after construction.
'''

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

import pandas as pd

T = TypeVar('T')


@dataclass
class PolicyOutput(Generic[T]):
  '''
  Standard output from any policy.

  Every policy returns both a computed value and diagnostic information
  explaining how the value was computed.

  Attributes:
    value: The computed value (type depends on policy)
    diag: Dictionary of diagnostic information
  '''
  value: T
  diag: Dict[str, Any] = field(default_factory=dict)


class Regime(str, Enum):
  '''Discrete market state derived from the composite risk score.'''
  ACCUMULATE = 'ACCUMULATE'
  STABLE = 'STABLE'
  SELL = 'SELL'


@dataclass(frozen=True)
class ModelCurveSet:
  '''
  Output of the valuation engine for one date.

  Attributes:
    standard: Slow power-law curve (USD)
    decaying: Faster power-law curve (USD)
    cycle: Standard curve modulated by the halving wave (USD)
    weighted: Blended fair value (USD)
    upper: Fair value scaled by exp(sigma)
    lower: Fair value scaled by exp(-sigma)
    days: Effective day count used for exponentiation (>= 1)
    sigma: Band half-width in log space
  '''
  standard: float
  decaying: float
  cycle: float
  weighted: float
  upper: float
  lower: float
  days: int
  sigma: float

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to dictionary for DataFrame creation.'''
    return {
        'days': self.days,
        'standard': self.standard,
        'decaying': self.decaying,
        'cycle': self.cycle,
        'weighted': self.weighted,
        'upper': self.upper,
        'lower': self.lower,
        'sigma': self.sigma,
    }


@dataclass(frozen=True)
class Observation:
  '''
  External market snapshot.

  Attributes:
    price: Observed spot price in USD (non-positive disables the oscillator)
    timestamp: Time of the observation
    sentiment_index: Fear & greed reading in [0, 100]
  '''
  price: float
  timestamp: pd.Timestamp
  sentiment_index: int = 50

  def __post_init__(self):
    if not 0 <= self.sentiment_index <= 100:
      raise ValueError(
          f'sentiment_index must be within [0, 100], got {self.sentiment_index}')
    if int(self.sentiment_index) != self.sentiment_index:
      raise ValueError(
          f'sentiment_index must be a whole number, got {self.sentiment_index}')
    object.__setattr__(self, 'sentiment_index', int(self.sentiment_index))
    object.__setattr__(self, 'timestamp', pd.Timestamp(self.timestamp))


@dataclass(frozen=True)
class IndicatorSet:
  '''
  Derived risk assessment for one observation.

  Attributes:
    oscillator: ln(price / fair value), 0 when price is unusable
    on_chain_proxy: Affine remap of the oscillator onto an MVRV-like scale
    price_risk: Oscillator sub-score in [0, 100]
    sentiment_risk: Sentiment sub-score in [0, 100]
    on_chain_risk: On-chain sub-score in [0, 100]
    risk_percent: Weighted composite risk in [0, 100]
    regime: Market regime for risk_percent
  '''
  oscillator: float
  on_chain_proxy: float
  price_risk: float
  sentiment_risk: float
  on_chain_risk: float
  risk_percent: float
  regime: Regime

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to dictionary for DataFrame creation.'''
    return {
        'oscillator': self.oscillator,
        'on_chain_proxy': self.on_chain_proxy,
        'price_risk': self.price_risk,
        'sentiment_risk': self.sentiment_risk,
        'on_chain_risk': self.on_chain_risk,
        'risk_percent': self.risk_percent,
        'regime': self.regime.value,
    }


@dataclass(frozen=True)
class Stage:
  '''
  Position of a value on a labelled indicator ladder.

  Attributes:
    rank: 1 for the bottom stage, counting upward
    label: Human-readable stage name
    threshold: Lower (exclusive) bound of the stage as declared on the ladder
  '''
  rank: int
  label: str
  threshold: float

  @property
  def is_bottom(self) -> bool:
    return self.rank == 1


@dataclass(frozen=True)
class Assessment:
  '''
  Complete evaluation of one observation.

  Attributes:
    observation: The observation that was evaluated
    curves: Model curves at the observation timestamp
    indicators: Derived indicators
    stages: Stage per ladder name ('oscillator', 'sentiment', 'on_chain')
  '''
  observation: Observation
  curves: ModelCurveSet
  indicators: IndicatorSet
  stages: Dict[str, Stage] = field(default_factory=dict)

  @property
  def deviation(self) -> float:
    '''Observed price minus fair value (USD).'''
    return self.observation.price - self.curves.weighted

  def to_dict(self, diag: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    '''Flatten to a single row.'''
    row: Dict[str, Any] = {
        'timestamp': self.observation.timestamp,
        'price': self.observation.price,
        'sentiment_index': self.observation.sentiment_index,
    }
    row.update(self.curves.to_dict())
    row.update(self.indicators.to_dict())
    row.update({f'{k}_stage': v.label for k, v in self.stages.items()})
    if diag:
      row.update(diag)
    return row
