# BE/macro_bias/utils/format.py
"""
Presentation helpers shared by cards, CSV export and notification digests.

These are pure display transforms: they never feed back into a validated row.
"""

from __future__ import annotations

import math
from typing import Optional, Union

from ..models import ActionFinal, CurrencyPosture, TrendFinal

MISSING = "—"

_POSTURE_ES = {
    CurrencyPosture.BULLISH: "fuerte",
    CurrencyPosture.BEARISH: "débil",
    CurrencyPosture.NEUTRAL: "neutral",
}


def format_signed_two_decimals(value: Optional[float]) -> str:
    """+0.42 / -0.42 / +0.00; None and non-finite values render as an em dash."""
    if value is None:
        return MISSING
    try:
        v = float(value)
    except (TypeError, ValueError):
        return MISSING
    if not math.isfinite(v):
        return MISSING
    # round first so -0.001 does not render as "-0.00"
    v = round(v, 2)
    if v == 0:
        v = 0.0
    return f"{v:+.2f}"


def display_trend(trend: Union[TrendFinal, str]) -> str:
    """Neutral is shown as Rango; every other trend keeps its label."""
    value = trend.value if isinstance(trend, TrendFinal) else str(trend)
    if value == TrendFinal.NEUTRAL.value:
        return TrendFinal.RANGO.value
    return value


def display_action(action: Union[ActionFinal, str]) -> str:
    return action.value if isinstance(action, ActionFinal) else str(action)


def usd_label(posture: CurrencyPosture) -> str:
    """Spanish label used inside rationale strings, e.g. 'USD fuerte'."""
    return f"USD {_POSTURE_ES.get(posture, 'neutral')}"
