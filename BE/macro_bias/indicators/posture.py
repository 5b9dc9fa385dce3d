# BE/macro_bias/indicators/posture.py
"""
Per-series posture rules (Hawkish / Neutral / Dovish).

Bands come from `indicators.yml`:
  normal  : value < low → Dovish, low ≤ value ≤ high → Neutral, value > high → Hawkish
  inverse : value > high → Dovish, low ≤ value ≤ high → Neutral, value < low → Hawkish

Series without a band, and missing readings, are Neutral.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from ..config import IndicatorConfig, load_indicator_config
from ..models import IndicatorPosture


def posture_of(series: str, value: Optional[float], config: Optional[IndicatorConfig] = None) -> IndicatorPosture:
    if value is None or not np.isfinite(value):
        return IndicatorPosture.NEUTRAL
    cfg = config or load_indicator_config()
    band = cfg.postures.get((series or "").upper())
    if band is None:
        return IndicatorPosture.NEUTRAL

    if band.inverse:
        if value > band.high:
            return IndicatorPosture.DOVISH
        if value >= band.low:
            return IndicatorPosture.NEUTRAL
        return IndicatorPosture.HAWKISH

    if value < band.low:
        return IndicatorPosture.DOVISH
    if value <= band.high:
        return IndicatorPosture.NEUTRAL
    return IndicatorPosture.HAWKISH


def coerce_posture(raw: Any) -> Optional[IndicatorPosture]:
    """Provider-supplied posture string → enum, or None when unrecognized."""
    if isinstance(raw, IndicatorPosture):
        return raw
    if not isinstance(raw, str):
        return None
    wanted = raw.strip().lower()
    for p in IndicatorPosture:
        if p.value.lower() == wanted:
            return p
    return None


def risk_lean(posture: IndicatorPosture) -> int:
    """Contribution to the risk score: easing (Dovish) is risk-supportive."""
    if posture is IndicatorPosture.DOVISH:
        return 1
    if posture is IndicatorPosture.HAWKISH:
        return -1
    return 0


def usd_lean(posture: IndicatorPosture) -> int:
    """Contribution to USD strength: tightening (Hawkish) supports the dollar."""
    return -risk_lean(posture)
