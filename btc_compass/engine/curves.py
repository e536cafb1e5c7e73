"""
Pure fair value math engine.

This module contains pure functions for the power-law curves, the halving
cycle wave and the volatility band. No pandas, no I/O, just numeric
computations over day counts. Date handling lives in engine.calendar.

Key functions:
  compute_fair_value: Main entry point, returns all curve values for a day
  power_law: A * days^B price curve
  cycle_wave: Sinusoidal multiplier phase-locked to a halving date
  dynamic_sigma: Maturity-dependent band half-width
  compute_band: Multiplicative upper/lower envelope
"""

from collections.abc import Sequence
from math import exp
from math import isfinite
from math import pi
from math import sin


def power_law(a: float, b: float, days: float) -> float:
  """
  Evaluate a power-law price curve.

  Args:
    a: Scale coefficient
    b: Exponent
    days: Asset age in days

  Returns:
    a * days**b, or nan if days <= 0 (fractional power undefined)
  """
  if not isfinite(days) or days <= 0:
    return float('nan')
  return a * days**b


def cycle_position(cycle_days: int, period: int) -> int:
  """Fold a signed day offset into [0, period)."""
  return ((cycle_days % period) + period) % period


def cycle_wave(cycle_days: int, period: int, amplitude: float) -> float:
  """
  Compute the halving cycle multiplier.

  Args:
    cycle_days: Signed day offset from the reference halving date
    period: Cycle length in days
    amplitude: Peak deviation from 1.0

  Returns:
    1 + amplitude * sin(2*pi*pos/period)
  """
  pos = cycle_position(cycle_days, period)
  return 1.0 + amplitude * sin((2.0 * pi * pos) / period)


def blend(
    decaying: float,
    cycle: float,
    standard: float,
    weights: Sequence[float],
) -> float:
  """
  Convex combination of the three curves.

  Args:
    decaying: Decaying-exponent curve value
    cycle: Cycle-adjusted curve value
    standard: Standard curve value
    weights: (w_decaying, w_cycle, w_standard)

  Returns:
    Weighted fair value
  """
  w_decaying, w_cycle, w_standard = weights
  return (decaying * w_decaying) + (cycle * w_cycle) + (standard * w_standard)


def dynamic_sigma(
    days: float,
    base_sigma: float,
    decay_rate: float,
    reference_day: float,
) -> float:
  """
  Band half-width that shrinks once the asset passes a maturity threshold.

  sigma = base_sigma * (reference_day / max(reference_day, days))**decay_rate

  Equal to base_sigma up to reference_day, strictly decreasing after it.
  """
  return base_sigma * (reference_day / max(reference_day, days))**decay_rate


def compute_band(weighted: float, sigma: float) -> tuple[float, float]:
  """
  Compute the log-symmetric band around fair value.

  Returns:
    Tuple of (upper, lower)
  """
  return weighted * exp(sigma), weighted * exp(-sigma)


def compute_fair_value(
    days: int,
    cycle_days: int,
    a_std: float,
    b_std: float,
    a_decay: float,
    b_decay: float,
    cycle_period: int,
    cycle_amplitude: float,
    weights: Sequence[float],
) -> tuple[float, float, float, float]:
  """
  Compute all fair value curves for one day.

  Args:
    days: Day count since genesis (must be >= 1)
    cycle_days: Signed day count since the reference halving
    a_std: Standard curve scale
    b_std: Standard curve exponent
    a_decay: Decaying curve scale
    b_decay: Decaying curve exponent
    cycle_period: Halving cycle length in days
    cycle_amplitude: Cycle wave amplitude
    weights: Blend weights (decaying, cycle, standard)

  Returns:
    Tuple of (standard, decaying, cycle, weighted):
    - standard: Slow power-law curve
    - decaying: Faster power-law curve
    - cycle: standard * wave
    - weighted: Blend of the three
    All nan if days < 1.
  """
  if days < 1:
    return float('nan'), float('nan'), float('nan'), float('nan')

  standard = power_law(a_std, b_std, days)
  decaying = power_law(a_decay, b_decay, days)
  cycle = standard * cycle_wave(cycle_days, cycle_period, cycle_amplitude)
  weighted = blend(decaying, cycle, standard, weights)
  return standard, decaying, cycle, weighted
