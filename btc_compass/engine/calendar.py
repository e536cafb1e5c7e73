'''Date resolution for the engine: everything becomes a naive UTC day.'''

from typing import Any

import pandas as pd

ONE_DAY = pd.Timedelta(days=1)


def to_timestamp(value: Any) -> pd.Timestamp:
  '''
  Coerce a date-like value to a naive UTC Timestamp.

  Accepts strings, date, datetime and Timestamp. Timezone-aware inputs are
  converted to UTC first; naive inputs are taken as UTC.

  Raises:
    ValueError: If the value cannot be parsed as a date
  '''
  ts = pd.Timestamp(value)
  if ts is pd.NaT:
    raise ValueError(f'Cannot resolve date from {value!r}')
  if ts.tzinfo is not None:
    ts = ts.tz_convert('UTC').tz_localize(None)
  return ts


def days_between(date: Any, origin: Any) -> int:
  '''Whole days from origin to date, floored (negative before origin).'''
  return int((to_timestamp(date) - to_timestamp(origin)) // ONE_DAY)
