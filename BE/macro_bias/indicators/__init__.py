"""
Indicator-level rules.

- posture_of(series, value)              -> Hawkish | Neutral | Dovish
- calculate_trend(series, curr, prev)    -> Mejora | Empeora | Estable | None

The aggregator lives in `macro_bias.indicators.diagnostic` and is re-exported
from the top-level package.
"""

from .posture import posture_of, coerce_posture, risk_lean, usd_lean
from .trend import calculate_trend

__all__ = [
    "posture_of",
    "coerce_posture",
    "risk_lean",
    "usd_lean",
    "calculate_trend",
]
