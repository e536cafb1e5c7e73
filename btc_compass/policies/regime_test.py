import pytest

from btc_compass.domain.types import PolicyOutput
from btc_compass.domain.types import Regime
from btc_compass.policies.regime import ThresholdRegime


class TestThresholdRegime:
  """Tests for ThresholdRegime policy."""

  def test_basic_usage(self):
    policy = ThresholdRegime(low=35, high=70)
    result = policy.compute(50.0)

    assert isinstance(result, PolicyOutput)
    assert result.value == Regime.STABLE
    assert result.diag['regime_method'] == 'threshold'
    assert result.diag['high_threshold'] == 70

  def test_boundaries_are_stable(self):
    """Both thresholds themselves classify as STABLE."""
    policy = ThresholdRegime(low=35, high=70)

    assert policy.compute(34.999).value == Regime.ACCUMULATE
    assert policy.compute(35.0).value == Regime.STABLE
    assert policy.compute(70.0).value == Regime.STABLE
    assert policy.compute(70.001).value == Regime.SELL

  def test_totality(self):
    """Every risk in [0, 100] maps to exactly one regime, in order."""
    policy = ThresholdRegime(low=35, high=65)
    order = [Regime.ACCUMULATE, Regime.STABLE, Regime.SELL]
    previous = 0

    for i in range(0, 1001):
      regime = policy.compute(i / 10).value
      assert regime in order
      assert order.index(regime) >= previous
      previous = order.index(regime)

    assert policy.compute(0.0).value == Regime.ACCUMULATE
    assert policy.compute(100.0).value == Regime.SELL

  def test_stateless(self):
    """Alternating inputs flip regimes with no hysteresis."""
    policy = ThresholdRegime(low=35, high=70)
    values = [69.9, 70.1, 69.9, 70.1]

    regimes = [policy.compute(v).value for v in values]

    assert regimes == [Regime.STABLE, Regime.SELL, Regime.STABLE, Regime.SELL]

  def test_inverted_thresholds(self):
    with pytest.raises(ValueError, match='inverted'):
      ThresholdRegime(low=70, high=35)
