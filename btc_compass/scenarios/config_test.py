import dataclasses

import pandas as pd
import pytest

from btc_compass.scenarios.config import ScenarioConfig


class TestScenarioConfig:
  """Tests for ScenarioConfig dataclass."""

  def test_default_constants(self):
    config = ScenarioConfig.default()

    assert config.genesis == pd.Timestamp('2009-01-03')
    assert config.halving == pd.Timestamp('2024-04-20')
    assert config.a_std == 1.48e-17
    assert config.b_std == 5.78
    assert config.a_decay == 1.48e-15
    assert config.b_decay == 5.25
    assert config.cycle_period == 1460
    assert config.blend_weights == (0.4, 0.3, 0.3)

  def test_blend_weights_sum_to_one(self):
    assert sum(ScenarioConfig.default().blend_weights) == pytest.approx(1.0)

  def test_presets(self):
    assert ScenarioConfig.price_heavy().risk_weights == 'price_heavy'
    assert ScenarioConfig.early_sell().regime == 'threshold_35_65'
    assert ScenarioConfig.constant_sigma().volatility == 'constant'

  def test_immutable(self):
    config = ScenarioConfig.default()

    with pytest.raises(dataclasses.FrozenInstanceError):
      config.b_std = 6.0  # type: ignore[misc]

  def test_bad_blend_weights(self):
    with pytest.raises(ValueError, match='Blend weights must sum to 1.0'):
      ScenarioConfig(w_decaying=0.5)

  def test_negative_blend_weight(self):
    with pytest.raises(ValueError, match='non-negative'):
      ScenarioConfig(w_decaying=1.2, w_cycle=-0.1, w_standard=-0.1)

  def test_bad_cycle_period(self):
    with pytest.raises(ValueError, match='cycle_period'):
      ScenarioConfig(cycle_period=0)

  def test_bad_power_law_scale(self):
    """Negative scales would invert the band."""
    with pytest.raises(ValueError, match='Power-law scales must be positive'):
      ScenarioConfig(a_std=-1.48e-17)

    with pytest.raises(ValueError, match='Power-law scales must be positive'):
      ScenarioConfig(a_decay=0.0)

  def test_bad_cycle_amplitude(self):
    """Amplitudes of 1 or more let the cycle curve reach zero or below."""
    with pytest.raises(ValueError, match='cycle_amplitude'):
      ScenarioConfig(cycle_amplitude=1.5)

    with pytest.raises(ValueError, match='cycle_amplitude'):
      ScenarioConfig(cycle_amplitude=1.0)

    with pytest.raises(ValueError, match='cycle_amplitude'):
      ScenarioConfig(cycle_amplitude=-0.1)

  def test_zero_cycle_amplitude(self):
    assert ScenarioConfig(cycle_amplitude=0.0).cycle_amplitude == 0.0

  def test_with_overrides(self):
    config = ScenarioConfig.default().with_overrides(name='wide',
                                                     cycle_amplitude=0.3)

    assert config.name == 'wide'
    assert config.cycle_amplitude == 0.3
    assert config.a_std == 1.48e-17

  def test_overrides_validated(self):
    with pytest.raises(ValueError):
      ScenarioConfig.default().with_overrides(w_cycle=0.9)

  def test_json_roundtrip(self):
    config = ScenarioConfig.early_sell()

    assert ScenarioConfig.from_json(config.to_json()) == config

  def test_to_dict(self):
    d = ScenarioConfig.default().to_dict()

    assert d['genesis_date'] == '2009-01-03'
    assert d['volatility'] == 'decaying'
    assert d['w_decaying'] == 0.4
