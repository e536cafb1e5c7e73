"""
Dense model series for price charts.

This module provides tools to:
1. Forward-fill sparse closing prices into a daily history
2. Evaluate the model over a date range
3. Build the chart frame (history with band, then a forward projection)

CLI Usage:
  python -m btc_compass.analysis.series \\
      --history-csv data/btc_daily.csv \\
      --start-date 2017-07-01 \\
      --projection-days 365 \\
      --output output/chart_series.csv
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from btc_compass.engine.calendar import to_timestamp
from btc_compass.memo import ModelMemo
from btc_compass.scenarios.config import ScenarioConfig
from btc_compass.scenarios.registry import get_scenario
from btc_compass.scenarios.registry import SCENARIOS

logger = logging.getLogger(__name__)

CHART_START_DATE = '2017-07-01'
CHART_COLUMNS = ['timestamp', 'price', 'fair', 'upper', 'lower']


def _normalize_index(series: pd.Series) -> pd.Series:
  """Day-resolution naive index, sorted, last value wins on duplicates."""
  index = pd.DatetimeIndex(pd.to_datetime(series.index, format='ISO8601'))
  if index.tz is not None:
    index = index.tz_convert('UTC').tz_localize(None)
  normalized = pd.Series(series.to_numpy(dtype=float), index=index.normalize())
  normalized = normalized[~normalized.index.duplicated(keep='last')]
  return normalized.sort_index()


def fill_daily_history(
    points: pd.Series,
    start_date: Optional[Any] = None,
) -> pd.Series:
  """
  Forward-fill sparse closes into one price per day.

  Days before the first point take the first known price.

  Args:
    points: Prices indexed by date (weekly and daily closes may be mixed)
    start_date: First day of the output (default: first point)

  Returns:
    Daily price series from start_date to the last point
  """
  if points.empty:
    return pd.Series(dtype=float)

  points = _normalize_index(points)
  start = to_timestamp(start_date).normalize() if start_date else points.index[0]
  days = pd.date_range(start, points.index[-1], freq='D')
  if days.empty:
    return pd.Series(dtype=float)

  combined = points.reindex(points.index.union(days)).ffill().bfill()
  return combined.reindex(days)


def evaluate_range(
    start: Any,
    end: Any,
    freq: str = 'D',
    config: Optional[ScenarioConfig] = None,
    memo: Optional[ModelMemo] = None,
) -> pd.DataFrame:
  """
  Evaluate the model at every step of a date range.

  Args:
    start: First date
    end: Last date (inclusive)
    freq: pandas frequency string (e.g., 'D', 'W')
    config: ScenarioConfig (ignored when memo is given)
    memo: Caller-owned memo to reuse across calls

  Returns:
    DataFrame indexed by date with one column per ModelCurveSet field
  """
  if memo is None:
    memo = ModelMemo(config)

  dates = pd.date_range(to_timestamp(start), to_timestamp(end), freq=freq)
  rows = [memo.get(d).to_dict() for d in dates]
  frame = pd.DataFrame(rows, index=dates)
  frame.index.name = 'date'
  return frame


def build_chart_series(
    history: pd.Series,
    start_date: Any = CHART_START_DATE,
    projection_days: int = 365,
    config: Optional[ScenarioConfig] = None,
    memo: Optional[ModelMemo] = None,
) -> pd.DataFrame:
  """
  Build the price chart frame.

  Historical rows on or after start_date carry the observed price; after the
  last history date, projection_days daily rows carry the model only
  (price is NaN).

  Args:
    history: Daily prices indexed by date
    start_date: First date shown on the chart
    projection_days: Number of days projected past the last price
    config: ScenarioConfig (ignored when memo is given)
    memo: Caller-owned memo to reuse across calls

  Returns:
    DataFrame with columns timestamp, price, fair, upper, lower
  """
  if history.empty:
    return pd.DataFrame(columns=CHART_COLUMNS)
  if projection_days < 0:
    raise ValueError(f'projection_days must be >= 0, got {projection_days}')

  if memo is None:
    memo = ModelMemo(config)

  history = _normalize_index(history)
  last_date = history.index[-1]
  visible = history[history.index >= to_timestamp(start_date)]

  rows = []
  for date, price in visible.items():
    curves = memo.get(date)
    rows.append({
        'timestamp': date,
        'price': price,
        'fair': curves.weighted,
        'upper': curves.upper,
        'lower': curves.lower,
    })

  for i in range(1, projection_days + 1):
    date = last_date + pd.Timedelta(days=i)
    curves = memo.get(date)
    rows.append({
        'timestamp': date,
        'price': float('nan'),
        'fair': curves.weighted,
        'upper': curves.upper,
        'lower': curves.lower,
    })

  logger.debug('Chart series: %d history rows, %d projected rows',
               len(visible), projection_days)
  return pd.DataFrame(rows, columns=CHART_COLUMNS)


def load_history_csv(path: Path) -> pd.Series:
  """
  Load a date,price CSV into a price series.

  Raises:
    FileNotFoundError: If the file does not exist
    ValueError: If the date or price column is missing
  """
  if not path.exists():
    raise FileNotFoundError(f'History CSV not found: {path}')

  frame = pd.read_csv(path)
  missing = {'date', 'price'} - set(frame.columns)
  if missing:
    raise ValueError(f'History CSV {path} missing columns: {sorted(missing)}')
  return pd.Series(frame['price'].to_numpy(dtype=float),
                   index=pd.to_datetime(frame['date'], format='ISO8601'))


def main() -> None:
  """CLI entrypoint."""
  parser = argparse.ArgumentParser(
      description='Build fair value chart series from price history')
  parser.add_argument('--history-csv',
                      type=Path,
                      required=True,
                      help='CSV with date and price columns')
  parser.add_argument('--start-date',
                      type=str,
                      default=CHART_START_DATE,
                      help=f'First chart date (default: {CHART_START_DATE})')
  parser.add_argument('--projection-days',
                      type=int,
                      default=365,
                      help='Days projected past the last price (default: 365)')
  parser.add_argument('--fill-daily',
                      action='store_true',
                      help='Forward-fill sparse prices to daily first')
  parser.add_argument('--scenario',
                      type=str,
                      default='default',
                      choices=list(SCENARIOS.keys()),
                      help='Scenario preset')
  parser.add_argument('--output',
                      type=Path,
                      required=True,
                      help='Output CSV path')
  args = parser.parse_args()

  history = load_history_csv(args.history_csv)
  if args.fill_daily:
    history = fill_daily_history(history)

  memo = ModelMemo(get_scenario(args.scenario))
  series = build_chart_series(history,
                              start_date=args.start_date,
                              projection_days=args.projection_days,
                              memo=memo)

  args.output.parent.mkdir(parents=True, exist_ok=True)
  series.to_csv(args.output, index=False)
  logger.info('Wrote %d rows to %s (%d model evaluations)', len(series),
              args.output, len(memo))


if __name__ == '__main__':
  logging.basicConfig(
      level=logging.INFO,
      format='%(message)s',
  )
  main()
