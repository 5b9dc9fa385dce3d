# BE/macro_bias/indicators/trend.py
"""
Reading-over-reading trend for a single indicator.

A relative change under 1% is "Estable". Otherwise the direction decides,
inverted for series where a lower print is the better outcome (inflation,
unemployment, jobless claims).
"""

from __future__ import annotations

from typing import Optional

from ..config import IndicatorConfig, load_indicator_config
from ..models import IndicatorTrend

STABLE_BAND = 0.01


def calculate_trend(
    series: str,
    current: Optional[float],
    previous: Optional[float],
    config: Optional[IndicatorConfig] = None,
) -> Optional[IndicatorTrend]:
    if current is None or previous is None:
        return None

    change = current - previous
    pct = abs(change / previous) if previous != 0 else abs(change)
    if pct < STABLE_BAND:
        return IndicatorTrend.STABLE

    cfg = config or load_indicator_config()
    lower_better = (series or "").upper() in cfg.lower_is_better
    improving = change < 0 if lower_better else change > 0
    return IndicatorTrend.IMPROVING if improving else IndicatorTrend.DETERIORATING
