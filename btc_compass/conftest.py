import pandas as pd
import pytest

from btc_compass.memo import ModelMemo
from btc_compass.scenarios.config import ScenarioConfig
from btc_compass.scenarios.registry import create_policies
from btc_compass.scenarios.registry import PolicyBundle


@pytest.fixture
def default_config() -> ScenarioConfig:
  return ScenarioConfig.default()


@pytest.fixture
def default_policies(default_config: ScenarioConfig) -> PolicyBundle:
  return create_policies(default_config)


@pytest.fixture
def memo(default_config: ScenarioConfig) -> ModelMemo:
  return ModelMemo(default_config)


@pytest.fixture
def intraday_prices() -> pd.Series:
  """200 five-minute prices rising by $1 per sample."""
  index = pd.date_range('2025-01-01 00:00', periods=200, freq='5min')
  return pd.Series([95000.0 + i for i in range(200)], index=index)
