"""
Caller-owned memo table for dense model evaluation.

Chart series evaluate the model once per day over many years, often more
than once per render. The memo keys results by the raw day count since
genesis, so any two timestamps on the same UTC day share an entry.

Usage:
  memo = ModelMemo(ScenarioConfig.default())
  for day in pd.date_range('2017-07-01', '2026-01-01'):
    curves = memo.get(day)
"""

from typing import Any, Dict, Optional

from btc_compass.domain.types import ModelCurveSet
from btc_compass.engine.calendar import days_between
from btc_compass.engine.calendar import to_timestamp
from btc_compass.run import evaluate_model
from btc_compass.scenarios.config import ScenarioConfig
from btc_compass.scenarios.registry import create_policies


class ModelMemo:
  """
  Memoized evaluate_model for one scenario.

  Holds no global state; discard the instance to drop the cache.
  """

  def __init__(self, config: Optional[ScenarioConfig] = None):
    """
    Initialize memo.

    Args:
      config: ScenarioConfig every cached entry is evaluated with
    """
    self.config = config or ScenarioConfig.default()
    self.policies = create_policies(self.config)
    self._table: Dict[int, ModelCurveSet] = {}
    self.hits = 0
    self.misses = 0

  def get(self, date: Any) -> ModelCurveSet:
    """
    Return curves for date, evaluating on first use of its day.

    Returns:
      Same ModelCurveSet evaluate_model(date, config) would return
    """
    ts = to_timestamp(date)
    key = days_between(ts, self.config.genesis)
    cached = self._table.get(key)
    if cached is not None:
      self.hits += 1
      return cached

    self.misses += 1
    curves = evaluate_model(ts, self.config, self.policies)
    self._table[key] = curves
    return curves

  def clear(self) -> None:
    """Drop all cached entries."""
    self._table.clear()
    self.hits = 0
    self.misses = 0

  def __len__(self) -> int:
    return len(self._table)

  def __contains__(self, date: Any) -> bool:
    return days_between(date, self.config.genesis) in self._table
