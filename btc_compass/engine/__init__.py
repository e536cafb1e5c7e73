'''Fair value engine with pure math functions.'''

from btc_compass.engine.curves import (
    compute_band,
    compute_fair_value,
    cycle_wave,
    dynamic_sigma,
    power_law,
)
from btc_compass.engine.indicators import (
    compute_on_chain_proxy,
    compute_oscillator,
)

__all__ = [
    'compute_band',
    'compute_fair_value',
    'compute_on_chain_proxy',
    'compute_oscillator',
    'cycle_wave',
    'dynamic_sigma',
    'power_law',
]
