"""
Pure indicator math.

Turns an observed price and a model fair value into the oscillator, the
on-chain proxy score and the clamped risk sub-scores. Weighting and regime
classification are policies (see btc_compass.policies).
"""

from math import isfinite
from math import log


def clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
  """Clamp value into [lo, hi]."""
  return max(lo, min(hi, value))


def compute_oscillator(price: float, fair_value: float) -> float:
  """
  Natural-log deviation of observed price from fair value.

  Positive means overpriced, negative underpriced. Falls back to 0 for a
  non-positive or non-finite price (or fair value) instead of propagating
  -inf/nan from the logarithm.
  """
  if not (isfinite(price) and isfinite(fair_value)):
    return 0.0
  if price <= 0 or fair_value <= 0:
    return 0.0
  return log(price / fair_value)


def compute_on_chain_proxy(
    oscillator: float,
    scale: float = 6.5,
    offset: float = 2.5,
) -> float:
  """Affine remap of the oscillator onto an MVRV Z-score-like scale."""
  return (oscillator * scale) + offset


def compute_price_risk(
    oscillator: float,
    offset: float = 0.5,
    span: float = 1.0,
) -> float:
  """
  Oscillator sub-score.

  An oscillator of -offset maps to 0 and -offset + span maps to 100.
  """
  return clamp(((oscillator + offset) / span) * 100)


def compute_on_chain_risk(on_chain_proxy: float, ceiling: float = 6.0) -> float:
  """On-chain sub-score: proxy / ceiling as a clamped percentage."""
  return clamp((on_chain_proxy / ceiling) * 100)


def compute_sentiment_risk(sentiment_index: float) -> float:
  """Sentiment index is already a 0-100 score."""
  return clamp(float(sentiment_index))
