'''
Intraday indicator snapshots.

A snapshot log samples the indicators every few minutes. This module only
computes entries; storing the log is the caller's concern.

Usage:
  snapshots = extend_snapshots([], intraday, now, sentiment_index=55)
  ...  # later, with fresh intraday prices
  snapshots = extend_snapshots(snapshots, intraday, now, sentiment_index=57)
'''

from dataclasses import dataclass
import logging
from typing import Any, List, Optional, Sequence

import pandas as pd

from btc_compass.domain.types import Assessment
from btc_compass.domain.types import Observation
from btc_compass.domain.types import Regime
from btc_compass.engine.calendar import to_timestamp
from btc_compass.memo import ModelMemo
from btc_compass.run import assess
from btc_compass.scenarios.config import ScenarioConfig

logger = logging.getLogger(__name__)

SNAPSHOT_INTERVAL = pd.Timedelta(minutes=5)
MAX_SNAPSHOTS = 144


@dataclass(frozen=True)
class IndicatorSnapshot:
  '''
  Indicators at one sample time.

  Attributes:
    timestamp: Sample time (naive UTC)
    price: Price used for the sample
    fair: Model fair value at the sample time
    oscillator: ln(price / fair)
    sentiment_index: Sentiment reading used
    on_chain_proxy: On-chain proxy score
    risk_percent: Composite risk
    regime: Regime at the sample time
  '''
  timestamp: pd.Timestamp
  price: float
  fair: float
  oscillator: float
  sentiment_index: int
  on_chain_proxy: float
  risk_percent: float
  regime: Regime

  @classmethod
  def from_assessment(cls, result: Assessment) -> 'IndicatorSnapshot':
    return cls(
        timestamp=result.observation.timestamp,
        price=result.observation.price,
        fair=result.curves.weighted,
        oscillator=result.indicators.oscillator,
        sentiment_index=result.observation.sentiment_index,
        on_chain_proxy=result.indicators.on_chain_proxy,
        risk_percent=result.indicators.risk_percent,
        regime=result.indicators.regime,
    )


def _naive_prices(intraday: pd.Series) -> pd.Series:
  '''Sorted intraday prices on a naive UTC index.'''
  index = pd.DatetimeIndex(pd.to_datetime(intraday.index, format='ISO8601'))
  if index.tz is not None:
    index = index.tz_convert('UTC').tz_localize(None)
  prices = pd.Series(intraday.to_numpy(dtype=float), index=index)
  return prices.sort_index()


def _closest_price(prices: pd.Series, target: pd.Timestamp) -> float:
  '''Price nearest to target; the earlier point wins a tie.'''
  distance = abs(prices.index - target)
  return float(prices.iloc[int(distance.argmin())])


def extend_snapshots(
    snapshots: Sequence[IndicatorSnapshot],
    intraday: pd.Series,
    now: Any,
    sentiment_index: int,
    config: Optional[ScenarioConfig] = None,
    memo: Optional[ModelMemo] = None,
    interval: pd.Timedelta = SNAPSHOT_INTERVAL,
    max_snapshots: int = MAX_SNAPSHOTS,
) -> List[IndicatorSnapshot]:
  '''
  Backfill the snapshot log up to now.

  With no prior snapshots, the log is seeded from the last max_snapshots
  intraday points. Otherwise one snapshot is added for every whole interval
  elapsed since the latest snapshot, priced at the intraday point closest
  to that interval's time.

  Args:
    snapshots: Existing log, oldest first
    intraday: Recent prices indexed by timestamp
    now: Current time
    sentiment_index: Sentiment reading applied to every new snapshot
    config: ScenarioConfig (ignored when memo is given)
    memo: Caller-owned memo to reuse across calls
    interval: Sampling interval
    max_snapshots: Maximum log length kept

  Returns:
    New log, oldest first, at most max_snapshots long
  '''
  existing = list(snapshots)
  if intraday.empty:
    return existing[-max_snapshots:]
  if interval <= pd.Timedelta(0):
    raise ValueError(f'interval must be positive, got {interval}')

  if memo is None:
    memo = ModelMemo(config)

  prices = _naive_prices(intraday)

  def _snapshot(ts: pd.Timestamp, price: float) -> IndicatorSnapshot:
    obs = Observation(price=price, timestamp=ts,
                      sentiment_index=sentiment_index)
    return IndicatorSnapshot.from_assessment(assess(obs, memo=memo))

  if not existing:
    seed = prices.iloc[-max_snapshots:]
    logger.debug('Seeding %d snapshots from intraday prices', len(seed))
    return [_snapshot(ts, price) for ts, price in seed.items()]

  last_ts = to_timestamp(existing[-1].timestamp)
  gap = to_timestamp(now) - last_ts
  if gap < interval:
    return existing[-max_snapshots:]

  missing = gap // interval
  first = max(1, missing - max_snapshots + 1)
  backfills = []
  for i in range(first, missing + 1):
    target = last_ts + i * interval
    backfills.append(_snapshot(target, _closest_price(prices, target)))

  logger.debug('Backfilled %d of %d missing snapshots', len(backfills),
               missing)
  return (existing + backfills)[-max_snapshots:]
