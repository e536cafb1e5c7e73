'''
Long-horizon model projections.

Evaluates the model a fixed number of calendar years past an as-of date,
the "growth projection" table of the dashboard.

CLI Usage:
  python -m btc_compass.analysis.projections --as-of 2025-01-01 \\
      --years 3,5,7,10,15
'''

import argparse
import logging
from typing import Any, Optional, Sequence

import pandas as pd

from btc_compass.engine.calendar import to_timestamp
from btc_compass.run import evaluate_model
from btc_compass.scenarios.config import ScenarioConfig
from btc_compass.scenarios.registry import create_policies
from btc_compass.scenarios.registry import get_scenario
from btc_compass.scenarios.registry import SCENARIOS

logger = logging.getLogger(__name__)

DEFAULT_HORIZONS = (3, 5, 7, 10, 15)


def horizon_projections(
    as_of: Optional[Any] = None,
    years: Sequence[int] = DEFAULT_HORIZONS,
    config: Optional[ScenarioConfig] = None,
) -> pd.DataFrame:
  '''
  Project the model to each horizon.

  Args:
    as_of: Base date (default: today UTC)
    years: Horizons in calendar years
    config: ScenarioConfig (default: ScenarioConfig.default())

  Returns:
    DataFrame with label ('3Y'), date (YYYY-MM-DD) and model curve columns,
    one row per horizon in the given order
  '''
  if config is None:
    config = ScenarioConfig.default()
  if not years:
    raise ValueError('years cannot be empty')

  policies = create_policies(config)
  base = to_timestamp(as_of if as_of is not None else pd.Timestamp.now(tz='UTC'))

  rows = []
  for y in years:
    date = base + pd.DateOffset(years=y)
    curves = evaluate_model(date, config, policies)
    row = {'label': f'{y}Y', 'date': date.strftime('%Y-%m-%d')}
    row.update(curves.to_dict())
    rows.append(row)

  return pd.DataFrame(rows)


def main() -> None:
  '''CLI entrypoint.'''
  parser = argparse.ArgumentParser(description='Project the fair value model')
  parser.add_argument('--as-of',
                      type=str,
                      default=None,
                      help='Base date (YYYY-MM-DD, default: today UTC)')
  parser.add_argument('--years',
                      type=str,
                      default=','.join(str(y) for y in DEFAULT_HORIZONS),
                      help='Comma-separated horizons in years')
  parser.add_argument('--scenario',
                      type=str,
                      default='default',
                      choices=list(SCENARIOS.keys()),
                      help='Scenario preset')
  args = parser.parse_args()

  years = [int(y.strip()) for y in args.years.split(',') if y.strip()]
  table = horizon_projections(args.as_of, years, get_scenario(args.scenario))

  logger.info('\nGrowth Projection (%s):', args.scenario)
  for _, row in table.iterrows():
    logger.info('  %4s  %s  fair $%s  band $%s - $%s', row['label'],
                row['date'], f"{row['weighted']:,.0f}", f"{row['lower']:,.0f}",
                f"{row['upper']:,.0f}")


if __name__ == '__main__':
  logging.basicConfig(
      level=logging.INFO,
      format='%(message)s',
  )
  main()
