"""Domain types for the fair value model."""

from btc_compass.domain.types import Assessment
from btc_compass.domain.types import IndicatorSet
from btc_compass.domain.types import ModelCurveSet
from btc_compass.domain.types import Observation
from btc_compass.domain.types import PolicyOutput
from btc_compass.domain.types import Regime
from btc_compass.domain.types import Stage

__all__ = [
    'Assessment',
    'IndicatorSet',
    'ModelCurveSet',
    'Observation',
    'PolicyOutput',
    'Regime',
    'Stage',
]
