import pytest

from btc_compass.domain.types import PolicyOutput
from btc_compass.policies.volatility import ConstantSigma
from btc_compass.policies.volatility import DecayingSigma


class TestDecayingSigma:
  """Tests for DecayingSigma policy."""

  def test_basic_usage(self):
    policy = DecayingSigma()
    result = policy.compute(4000)

    assert isinstance(result, PolicyOutput)
    assert result.value == 0.5
    assert result.diag['sigma_method'] == 'decaying'
    assert result.diag['matured'] is False

  def test_at_reference_day(self):
    """Sigma is still the base value on the reference day itself."""
    result = DecayingSigma().compute(5800)

    assert result.value == 0.5
    assert result.diag['matured'] is False

  def test_after_reference_day(self):
    result = DecayingSigma().compute(7000)

    assert result.value < 0.5
    assert result.value == pytest.approx(0.5 * (5800 / 7000)**0.12)
    assert result.diag['matured'] is True

  def test_custom_parameters(self):
    policy = DecayingSigma(base_sigma=0.8, decay_rate=1.0, reference_day=1000)
    result = policy.compute(2000)

    assert result.value == pytest.approx(0.4)
    assert result.diag['reference_day'] == 1000


class TestConstantSigma:
  """Tests for ConstantSigma policy."""

  def test_ignores_age(self):
    policy = ConstantSigma(sigma=0.3)

    assert policy.compute(1).value == 0.3
    assert policy.compute(20000).value == 0.3
    assert policy.compute(1).diag['sigma_method'] == 'constant'
