'''
Fair value model entrypoint.

This module provides the main entry points for evaluating the model. It:
1. Resolves a date to day counts (genesis and reference halving)
2. Applies policies from the scenario configuration
3. Runs the pure curve and indicator math
4. Returns immutable value objects

Usage:
  from btc_compass.run import evaluate_model, derive_indicators
  from btc_compass.domain.types import Observation

  curves = evaluate_model('2025-01-01')
  obs = Observation(price=95000.0, timestamp='2025-01-01', sentiment_index=70)
  indicators = derive_indicators(obs, curves)
  print(f'Fair: ${curves.weighted:,.0f} Regime: {indicators.regime.value}')
'''

import argparse
import logging
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING

import pandas as pd

from btc_compass.domain.types import (
    Assessment,
    IndicatorSet,
    ModelCurveSet,
    Observation,
)
from btc_compass.engine.calendar import days_between
from btc_compass.engine.calendar import to_timestamp
from btc_compass.engine.curves import compute_band
from btc_compass.engine.curves import compute_fair_value
from btc_compass.engine.indicators import compute_on_chain_proxy
from btc_compass.engine.indicators import compute_on_chain_risk
from btc_compass.engine.indicators import compute_oscillator
from btc_compass.engine.indicators import compute_price_risk
from btc_compass.engine.indicators import compute_sentiment_risk
from btc_compass.scenarios.config import ScenarioConfig
from btc_compass.scenarios.registry import create_policies
from btc_compass.scenarios.registry import get_scenario
from btc_compass.scenarios.registry import PolicyBundle
from btc_compass.scenarios.registry import SCENARIOS

if TYPE_CHECKING:
  from btc_compass.memo import ModelMemo

logger = logging.getLogger(__name__)

# Power laws are undefined for non-positive ages; earlier dates use day 1.
MIN_DAYS = 1


def evaluate_model(
    date: Any,
    config: Optional[ScenarioConfig] = None,
    policies: Optional[PolicyBundle] = None,
) -> ModelCurveSet:
  '''
  Evaluate all model curves and the band at a date.

  Args:
    date: Anything pd.Timestamp accepts; naive values are taken as UTC
    config: ScenarioConfig (default: ScenarioConfig.default())
    policies: Pre-created policies for config (created if omitted)

  Returns:
    ModelCurveSet with standard, decaying, cycle, weighted, upper, lower
  '''
  if config is None:
    config = ScenarioConfig.default()
  if policies is None:
    policies = create_policies(config)

  ts = to_timestamp(date)
  raw_days = days_between(ts, config.genesis)
  days = max(raw_days, MIN_DAYS)
  if days != raw_days:
    logger.debug('%s is %d days from genesis, clamped to day %d', ts.date(),
                 raw_days, days)

  cycle_days = days_between(ts, config.halving)
  standard, decaying, cycle, weighted = compute_fair_value(
      days=days,
      cycle_days=cycle_days,
      a_std=config.a_std,
      b_std=config.b_std,
      a_decay=config.a_decay,
      b_decay=config.b_decay,
      cycle_period=config.cycle_period,
      cycle_amplitude=config.cycle_amplitude,
      weights=config.blend_weights,
  )

  sigma = policies['volatility'].compute(days).value
  upper, lower = compute_band(weighted, sigma)

  return ModelCurveSet(
      standard=standard,
      decaying=decaying,
      cycle=cycle,
      weighted=weighted,
      upper=upper,
      lower=lower,
      days=days,
      sigma=sigma,
  )


def derive_indicators(
    observation: Observation,
    curves: ModelCurveSet,
    config: Optional[ScenarioConfig] = None,
    policies: Optional[PolicyBundle] = None,
) -> IndicatorSet:
  '''
  Derive oscillator, on-chain proxy, risk and regime for an observation.

  Args:
    observation: Observed price and sentiment
    curves: Model curves contemporaneous with the observation
    config: ScenarioConfig (default: ScenarioConfig.default())
    policies: Pre-created policies for config (created if omitted)

  Returns:
    IndicatorSet with risk_percent in [0, 100] and its regime
  '''
  if config is None:
    config = ScenarioConfig.default()
  if policies is None:
    policies = create_policies(config)

  oscillator = compute_oscillator(observation.price, curves.weighted)
  on_chain_proxy = compute_on_chain_proxy(oscillator,
                                          scale=config.on_chain_scale,
                                          offset=config.on_chain_offset)

  price_risk = compute_price_risk(oscillator,
                                  offset=config.price_risk_offset,
                                  span=config.price_risk_span)
  sentiment_risk = compute_sentiment_risk(observation.sentiment_index)
  on_chain_risk = compute_on_chain_risk(on_chain_proxy,
                                        ceiling=config.on_chain_risk_ceiling)

  risk_result = policies['risk_weights'].compute(price_risk, sentiment_risk,
                                                 on_chain_risk)
  regime_result = policies['regime'].compute(risk_result.value)

  return IndicatorSet(
      oscillator=oscillator,
      on_chain_proxy=on_chain_proxy,
      price_risk=price_risk,
      sentiment_risk=sentiment_risk,
      on_chain_risk=on_chain_risk,
      risk_percent=risk_result.value,
      regime=regime_result.value,
  )


def assess(
    observation: Observation,
    config: Optional[ScenarioConfig] = None,
    policies: Optional[PolicyBundle] = None,
    memo: Optional['ModelMemo'] = None,
) -> Assessment:
  '''
  Evaluate the model at the observation time and derive all indicators.

  Args:
    observation: Observed price and sentiment
    config: ScenarioConfig (default: ScenarioConfig.default())
    policies: Pre-created policies for config (created if omitted)
    memo: Optional caller-owned memo; supplies config and policies when
      they are omitted

  Returns:
    Assessment with curves, indicators and stage per ladder

  Raises:
    ValueError: If config differs from the config the memo was built for
  '''
  if memo is not None:
    if config is not None and config != memo.config:
      raise ValueError(
          f"Memo was built for scenario '{memo.config.name}', "
          f"got config '{config.name}'")
    config = memo.config
    if policies is None:
      policies = memo.policies
  if config is None:
    config = ScenarioConfig.default()
  if policies is None:
    policies = create_policies(config)

  if memo is not None:
    curves = memo.get(observation.timestamp)
  else:
    curves = evaluate_model(observation.timestamp, config, policies)
  indicators = derive_indicators(observation, curves, config, policies)

  ladders = policies['stages']
  stages = {
      'oscillator': ladders['oscillator'].compute(indicators.oscillator).value,
      'sentiment':
          ladders['sentiment'].compute(observation.sentiment_index).value,
      'on_chain': ladders['on_chain'].compute(indicators.on_chain_proxy).value,
  }

  return Assessment(
      observation=observation,
      curves=curves,
      indicators=indicators,
      stages=stages,
  )


def load_config(
    scenario: str = 'default',
    config_json: Optional[Path] = None,
) -> ScenarioConfig:
  '''
  Resolve a ScenarioConfig from a preset name or a JSON file.

  Raises:
    FileNotFoundError: If config_json does not exist
    KeyError: If the scenario name is unknown
  '''
  if config_json is not None:
    if not config_json.exists():
      raise FileNotFoundError(f'Scenario config not found: {config_json}')
    return ScenarioConfig.from_json(config_json.read_text(encoding='utf-8'))
  return get_scenario(scenario)


def main() -> None:
  '''CLI entrypoint.'''
  parser = argparse.ArgumentParser(description='Evaluate the fair value model')
  parser.add_argument('--date',
                      type=str,
                      default=None,
                      help='Evaluation date (YYYY-MM-DD, default: today UTC)')
  parser.add_argument('--price',
                      type=float,
                      default=None,
                      help='Observed price in USD (enables indicators)')
  parser.add_argument('--sentiment',
                      type=int,
                      default=50,
                      help='Fear & greed index 0-100 (default: 50)')
  parser.add_argument(
      '--scenario',
      type=str,
      default='default',
      choices=list(SCENARIOS.keys()),
      help='Scenario preset',
  )
  parser.add_argument('--config-json',
                      type=Path,
                      default=None,
                      help='Path to a ScenarioConfig JSON file')
  args = parser.parse_args()

  config = load_config(args.scenario, args.config_json)
  date = pd.Timestamp(args.date) if args.date else pd.Timestamp.now(tz='UTC')
  date = to_timestamp(date)

  separator = '=' * 70
  logger.info('\n%s', separator)
  logger.info('Fair Value Model - %s', date.date())
  logger.info('Scenario: %s', config.name)
  logger.info(separator)

  if args.price is None:
    curves = evaluate_model(date, config)
    _log_curves(curves)
    logger.info('%s\n', separator)
    return

  observation = Observation(price=args.price,
                            timestamp=date,
                            sentiment_index=args.sentiment)
  result = assess(observation, config)
  _log_curves(result.curves)

  ind = result.indicators
  logger.info('\nIndicators:')
  logger.info('  Price: $%s (deviation $%s)', f'{observation.price:,.0f}',
              f'{result.deviation:+,.0f}')
  logger.info('  Oscillator: %+.4f  [%s]', ind.oscillator,
              result.stages['oscillator'].label)
  logger.info('  Sentiment: %d  [%s]', observation.sentiment_index,
              result.stages['sentiment'].label)
  logger.info('  On-chain proxy: %.2f  [%s]', ind.on_chain_proxy,
              result.stages['on_chain'].label)
  logger.info('  Risk: %.1f%% -> %s', ind.risk_percent, ind.regime.value)
  logger.info('%s\n', separator)


def _log_curves(curves: ModelCurveSet) -> None:
  logger.info('\nModel Curves (day %d):', curves.days)
  logger.info('  Standard: $%s', f'{curves.standard:,.0f}')
  logger.info('  Decaying: $%s', f'{curves.decaying:,.0f}')
  logger.info('  Cycle: $%s', f'{curves.cycle:,.0f}')
  logger.info('  Fair Value: $%s', f'{curves.weighted:,.0f}')
  logger.info('  Band: $%s - $%s (sigma %.3f)', f'{curves.lower:,.0f}',
              f'{curves.upper:,.0f}', curves.sigma)


if __name__ == '__main__':
  logging.basicConfig(
      level=logging.INFO,
      format='%(message)s',
  )
  main()
