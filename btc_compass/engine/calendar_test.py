import datetime

import pandas as pd
import pytest

from btc_compass.engine.calendar import days_between
from btc_compass.engine.calendar import to_timestamp


class TestToTimestamp:
  """Tests for to_timestamp function."""

  def test_accepts_common_types(self):
    expected = pd.Timestamp('2024-04-20')

    assert to_timestamp('2024-04-20') == expected
    assert to_timestamp(datetime.date(2024, 4, 20)) == expected
    assert to_timestamp(datetime.datetime(2024, 4, 20)) == expected
    assert to_timestamp(expected) == expected

  def test_tz_aware_converted_to_utc(self):
    """Aware timestamps become naive UTC."""
    ts = to_timestamp(pd.Timestamp('2024-04-20 09:00', tz='Asia/Seoul'))

    assert ts.tzinfo is None
    assert ts == pd.Timestamp('2024-04-20 00:00')

  def test_unresolvable(self):
    with pytest.raises(ValueError):
      to_timestamp(None)


class TestDaysBetween:
  """Tests for days_between function."""

  def test_halving_reference_day(self):
    """2024-04-20 is day 5586 after 2009-01-03."""
    assert days_between('2024-04-20', '2009-01-03') == 5586

  def test_same_day(self):
    assert days_between('2009-01-03', '2009-01-03') == 0

  def test_floors_partial_days(self):
    """Time of day does not add a day."""
    assert days_between('2009-01-04 23:59', '2009-01-03') == 1

  def test_before_origin(self):
    """Negative before the origin, floored toward -inf."""
    assert days_between('2009-01-02', '2009-01-03') == -1
    assert days_between('2009-01-02 12:00', '2009-01-03') == -1
