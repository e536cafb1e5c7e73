import math

import pytest

from btc_compass.engine.curves import blend
from btc_compass.engine.curves import compute_band
from btc_compass.engine.curves import compute_fair_value
from btc_compass.engine.curves import cycle_position
from btc_compass.engine.curves import cycle_wave
from btc_compass.engine.curves import dynamic_sigma
from btc_compass.engine.curves import power_law

A_STD = 1.48e-17
B_STD = 5.78
A_DECAY = 1.48e-15
B_DECAY = 5.25
WEIGHTS = (0.4, 0.3, 0.3)


class TestPowerLaw:
  """Tests for power_law function."""

  def test_standard_curve_day_5000(self):
    """Standard curve at day 5000 is A * 5000^B, in the tens of thousands."""
    value = power_law(A_STD, B_STD, 5000)

    assert value == pytest.approx(A_STD * 5000**B_STD, rel=1e-12)
    assert 30_000 < value < 40_000

  def test_day_one(self):
    """Day 1 reduces to the scale coefficient."""
    assert power_law(A_STD, B_STD, 1) == pytest.approx(A_STD)

  def test_non_positive_days(self):
    """Fractional powers of non-positive ages are undefined."""
    assert math.isnan(power_law(A_STD, B_STD, 0))
    assert math.isnan(power_law(A_STD, B_STD, -10))

  def test_monotonic_growth(self):
    """Curve grows with age."""
    values = [power_law(A_DECAY, B_DECAY, d) for d in (100, 1000, 5000, 9000)]

    for i in range(len(values) - 1):
      assert values[i] < values[i + 1]


class TestCycleWave:
  """Tests for cycle_position and cycle_wave functions."""

  def test_position_negative_offset(self):
    """Negative offsets fold into [0, period)."""
    assert cycle_position(-1, 1460) == 1459
    assert cycle_position(-1460, 1460) == 0
    assert cycle_position(-3000, 1460) == 1380

  def test_position_positive_offset(self):
    assert cycle_position(0, 1460) == 0
    assert cycle_position(1461, 1460) == 1

  def test_wave_at_reference(self):
    """Wave is exactly 1.0 on the reference halving."""
    assert cycle_wave(0, 1460, 0.15) == 1.0

  def test_wave_peak_and_trough(self):
    """Quarter and three-quarter cycle hit +/- amplitude."""
    assert cycle_wave(365, 1460, 0.15) == pytest.approx(1.15)
    assert cycle_wave(1095, 1460, 0.15) == pytest.approx(0.85)

  def test_periodicity(self):
    """Wave repeats every 1460 days, before and after the reference."""
    for offset in (-5000, -731, -1, 0, 17, 900, 4000):
      assert cycle_wave(offset, 1460, 0.15) == cycle_wave(
          offset + 1460, 1460, 0.15)

  def test_wave_bounds(self):
    """Wave stays within 1 +/- amplitude."""
    for offset in range(-1460, 1460, 37):
      assert 0.85 - 1e-12 <= cycle_wave(offset, 1460, 0.15) <= 1.15 + 1e-12


class TestBlend:
  """Tests for blend function."""

  def test_weights_sum_to_one(self):
    """Canonical blend weights sum to 1.0."""
    assert sum(WEIGHTS) == pytest.approx(1.0)

  def test_equal_inputs(self):
    """Convex blend of equal values returns that value."""
    assert blend(100.0, 100.0, 100.0, WEIGHTS) == pytest.approx(100.0)

  def test_weighting(self):
    """Manual calculation: 0.4*10 + 0.3*20 + 0.3*30 = 19."""
    assert blend(10.0, 20.0, 30.0, WEIGHTS) == pytest.approx(19.0)


class TestDynamicSigma:
  """Tests for dynamic_sigma function."""

  def test_constant_before_reference(self):
    """Sigma is exactly base_sigma up to the reference day."""
    for days in (1, 1000, 5000, 5799, 5800):
      assert dynamic_sigma(days, 0.5, 0.12, 5800) == 0.5

  def test_strictly_decreasing_after_reference(self):
    """Sigma shrinks once the asset passes the maturity threshold."""
    values = [
        dynamic_sigma(d, 0.5, 0.12, 5800)
        for d in (5800, 5801, 6000, 8000, 12000, 20000)
    ]

    for i in range(len(values) - 1):
      assert values[i] > values[i + 1]

  def test_decay_formula(self):
    """Manual calculation at twice the reference day."""
    expected = 0.5 * (0.5**0.12)
    assert dynamic_sigma(11600, 0.5, 0.12, 5800) == pytest.approx(expected)


class TestComputeBand:
  """Tests for compute_band function."""

  def test_band_ordering(self):
    upper, lower = compute_band(50_000.0, 0.5)

    assert lower < 50_000.0 < upper

  def test_log_symmetric(self):
    """Band is symmetric in log space around fair value."""
    upper, lower = compute_band(50_000.0, 0.4)

    assert math.log(upper / 50_000.0) == pytest.approx(0.4)
    assert math.log(50_000.0 / lower) == pytest.approx(0.4)
    assert upper * lower == pytest.approx(50_000.0**2)

  def test_zero_sigma(self):
    upper, lower = compute_band(123.0, 0.0)

    assert upper == lower == 123.0


class TestComputeFairValue:
  """Tests for compute_fair_value function."""

  def test_components(self):
    """Curves are consistent with the individual functions."""
    standard, decaying, cycle, weighted = compute_fair_value(
        days=5000,
        cycle_days=-586,
        a_std=A_STD,
        b_std=B_STD,
        a_decay=A_DECAY,
        b_decay=B_DECAY,
        cycle_period=1460,
        cycle_amplitude=0.15,
        weights=WEIGHTS,
    )

    assert standard == pytest.approx(power_law(A_STD, B_STD, 5000))
    assert decaying == pytest.approx(power_law(A_DECAY, B_DECAY, 5000))
    assert cycle == pytest.approx(standard * cycle_wave(-586, 1460, 0.15))
    assert weighted == pytest.approx(0.4 * decaying + 0.3 * cycle +
                                     0.3 * standard)

  def test_all_positive(self):
    """All curves are positive for any day >= 1."""
    for days in (1, 2, 10, 365, 5000, 20000):
      values = compute_fair_value(days, days - 5586, A_STD, B_STD, A_DECAY,
                                  B_DECAY, 1460, 0.15, WEIGHTS)
      assert all(v > 0 for v in values)

  def test_invalid_days(self):
    """Day counts below 1 return nan."""
    values = compute_fair_value(0, -5586, A_STD, B_STD, A_DECAY, B_DECAY, 1460,
                                0.15, WEIGHTS)

    assert all(math.isnan(v) for v in values)
