'''
Short-term flow analysis over an indicator snapshot log.

Compares the latest snapshot with the one a fixed number of samples earlier
(an hour back at the default 5-minute interval) and labels the direction of
each indicator.
'''

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence

from btc_compass.analysis.snapshots import IndicatorSnapshot


class Trend(str, Enum):
  RISING = 'RISING'
  FALLING = 'FALLING'
  STEADY = 'STEADY'


class Stance(str, Enum):
  AGGRESSIVE = 'AGGRESSIVE'
  DEFENSIVE = 'DEFENSIVE'
  AWAIT_REVERSAL = 'AWAIT_REVERSAL'


TREND_LABELS: Dict[str, Dict[Trend, str]] = {
    'oscillator': {
        Trend.RISING: 'Expanding upward',
        Trend.FALLING: 'Converging downward',
        Trend.STEADY: 'Holding steady',
    },
    'on_chain': {
        Trend.RISING: 'Profitability accelerating',
        Trend.FALLING: 'Profitability fading',
        Trend.STEADY: 'Balanced',
    },
    'sentiment': {
        Trend.RISING: 'Greed flowing in',
        Trend.FALLING: 'Fear spreading',
        Trend.STEADY: 'Neutral mood',
    },
}

STANCE_LABELS: Dict[Stance, str] = {
    Stance.AGGRESSIVE: 'Aggressive expansion zone',
    Stance.DEFENSIVE: 'Conservative defense zone',
    Stance.AWAIT_REVERSAL: 'Awaiting trend reversal',
}


@dataclass(frozen=True)
class FlowAnalysis:
  '''
  Direction of each indicator over the lookback window.

  Attributes:
    oscillator_delta: Change in oscillator
    on_chain_delta: Change in on-chain proxy
    sentiment_delta: Change in sentiment index
    oscillator_trend: Direction of the oscillator
    on_chain_trend: Direction of the on-chain proxy
    sentiment_trend: Direction of sentiment
    stance: Combined reading of oscillator and on-chain direction
  '''
  oscillator_delta: float
  on_chain_delta: float
  sentiment_delta: float
  oscillator_trend: Trend
  on_chain_trend: Trend
  sentiment_trend: Trend
  stance: Stance

  def describe(self) -> Dict[str, str]:
    '''Human-readable label per indicator plus the stance.'''
    return {
        'oscillator': TREND_LABELS['oscillator'][self.oscillator_trend],
        'on_chain': TREND_LABELS['on_chain'][self.on_chain_trend],
        'sentiment': TREND_LABELS['sentiment'][self.sentiment_trend],
        'stance': STANCE_LABELS[self.stance],
    }


def classify_trend(delta: float, tolerance: float) -> Trend:
  '''RISING above +tolerance, FALLING below -tolerance, else STEADY.'''
  if delta > tolerance:
    return Trend.RISING
  if delta < -tolerance:
    return Trend.FALLING
  return Trend.STEADY


def analyze_flow(
    snapshots: Sequence[IndicatorSnapshot],
    lookback: int = 12,
    oscillator_tolerance: float = 0.005,
    on_chain_tolerance: float = 0.03,
    sentiment_tolerance: float = 5,
) -> Optional[FlowAnalysis]:
  '''
  Analyze indicator flow between the latest and an earlier snapshot.

  Args:
    snapshots: Snapshot log, oldest first
    lookback: Number of samples between the compared snapshots
    oscillator_tolerance: Dead band for the oscillator trend
    on_chain_tolerance: Dead band for the on-chain trend
    sentiment_tolerance: Dead band for the sentiment trend

  Returns:
    FlowAnalysis, or None if the log has no snapshot lookback samples back
  '''
  if lookback < 1:
    raise ValueError(f'lookback must be >= 1, got {lookback}')
  if len(snapshots) <= lookback:
    return None

  current = snapshots[-1]
  earlier = snapshots[-1 - lookback]

  osc_delta = current.oscillator - earlier.oscillator
  on_chain_delta = current.on_chain_proxy - earlier.on_chain_proxy
  sentiment_delta = float(current.sentiment_index - earlier.sentiment_index)

  if osc_delta > 0 and on_chain_delta > 0:
    stance = Stance.AGGRESSIVE
  elif osc_delta < 0 and on_chain_delta < 0:
    stance = Stance.DEFENSIVE
  else:
    stance = Stance.AWAIT_REVERSAL

  return FlowAnalysis(
      oscillator_delta=osc_delta,
      on_chain_delta=on_chain_delta,
      sentiment_delta=sentiment_delta,
      oscillator_trend=classify_trend(osc_delta, oscillator_tolerance),
      on_chain_trend=classify_trend(on_chain_delta, on_chain_tolerance),
      sentiment_trend=classify_trend(sentiment_delta, sentiment_tolerance),
      stance=stance,
  )
