'''
Bitcoin fair value model with policy-based architecture.

This package evaluates a composite fair value for bitcoin (two power-law
curves blended with a halving-cycle wave), a maturity-adjusted band around
it, and risk indicators for an observed price. Every function is pure; no
network or storage I/O happens here.

Usage:
  from btc_compass.domain.types import Observation
  from btc_compass.run import assess
  from btc_compass.scenarios.config import ScenarioConfig

  config = ScenarioConfig.default()
  obs = Observation(price=95000.0, timestamp='2025-01-01', sentiment_index=70)
  result = assess(obs, config)
'''
