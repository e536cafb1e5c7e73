'''
Dashboard analysis utilities built on the model engine.

Note: To avoid RuntimeWarning when using -m flag, import directly:
  from btc_compass.analysis.series import build_chart_series
  from btc_compass.analysis.projections import horizon_projections
'''

__all__ = [
    'analyze_flow',
    'build_chart_series',
    'evaluate_range',
    'extend_snapshots',
    'fill_daily_history',
    'horizon_projections',
]

# Direct imports for convenience (may cause RuntimeWarning with -m flag)
from btc_compass.analysis.flow import analyze_flow
from btc_compass.analysis.projections import horizon_projections
from btc_compass.analysis.series import build_chart_series
from btc_compass.analysis.series import evaluate_range
from btc_compass.analysis.series import fill_daily_history
from btc_compass.analysis.snapshots import extend_snapshots
