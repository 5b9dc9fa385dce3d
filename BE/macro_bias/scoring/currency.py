# BE/macro_bias/scoring/currency.py
"""
Bias classifier: USD strength posture and growth × inflation quadrant.

usd_bias
    Weighted USD lean over USD-denominated items with a reading and a positive
    weight, lean(Hawkish)=+1, lean(Dovish)=-1:
        S = Σ lean·w / Σ w
        S >  band → Bullish
        S < -band → Bearish
        otherwise → Neutral   (an exactly balanced set is always Neutral)

macro_quadrant
    growth    = mean of the configured growth series readings
    inflation = mean of the configured inflation series readings
        inflation > 3.0 and growth > 2.0 → recalentamiento
        inflation > 3.0 and growth < 1.0 → estanflacion
        inflation < 2.5 and growth < 1.0 → desaceleracion
        both axes without data           → neutral
        anything else                    → expansion
    An axis with no data cannot satisfy a condition that names it.

currency_scores / pair_macro_score
    Per-currency sum of lean·w (same lean as usd_bias), currency taken from the
    provider-key prefix. Only currencies with a scored item appear. The pair
    score is base − quote, None when either side is unscored.
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..config import BiasPolicy, IndicatorConfig, load_indicator_config, load_policy
from ..indicators.posture import usd_lean
from ..models import CurrencyPosture, IndicatorItem, Quadrant
from ..symbols import split_pair


def usd_score(items: Iterable[IndicatorItem], config: Optional[IndicatorConfig] = None) -> float:
    cfg = config or load_indicator_config()
    valid = [
        i for i in items
        if i.value is not None and i.weight > 0 and cfg.currency_for(i.original_key or i.key) == "USD"
    ]
    if not valid:
        return 0.0
    w = np.array([i.weight for i in valid], dtype="float64")
    lean = np.array([usd_lean(i.posture) for i in valid], dtype="float64")
    return float(np.dot(lean, w) / w.sum())


def usd_bias(
    items: Iterable[IndicatorItem],
    *,
    config: Optional[IndicatorConfig] = None,
    policy: Optional[BiasPolicy] = None,
) -> CurrencyPosture:
    band = (policy or load_policy()).usd_neutral_band
    s = usd_score(items, config)
    if s > band:
        return CurrencyPosture.BULLISH
    if s < -band:
        return CurrencyPosture.BEARISH
    return CurrencyPosture.NEUTRAL


def _axis_mean(items: Sequence[IndicatorItem], series: Tuple[str, ...]) -> Optional[float]:
    vals = [i.value for i in items if i.key in series and i.value is not None]
    if not vals:
        return None
    return float(np.mean(vals))


def quadrant_axes(
    items: Iterable[IndicatorItem], config: Optional[IndicatorConfig] = None
) -> Tuple[Optional[float], Optional[float]]:
    """(growth, inflation) axis readings; None where no series reported."""
    cfg = config or load_indicator_config()
    seq = list(items)
    return _axis_mean(seq, cfg.growth_series), _axis_mean(seq, cfg.inflation_series)


def macro_quadrant(
    items: Iterable[IndicatorItem],
    *,
    config: Optional[IndicatorConfig] = None,
    policy: Optional[BiasPolicy] = None,
) -> Quadrant:
    pol = policy or load_policy()
    growth, inflation = quadrant_axes(items, config)
    if growth is None and inflation is None:
        return Quadrant.NEUTRAL

    infl_high = inflation is not None and inflation > pol.inflation_high
    infl_low = inflation is not None and inflation < pol.inflation_low
    growth_high = growth is not None and growth > pol.growth_high
    growth_low = growth is not None and growth < pol.growth_low

    if infl_high and growth_high:
        return Quadrant.OVERHEATING
    if infl_high and growth_low:
        return Quadrant.STAGFLATION
    if infl_low and growth_low:
        return Quadrant.SLOWDOWN
    return Quadrant.EXPANSION


def currency_scores(items: Iterable[IndicatorItem], config: Optional[IndicatorConfig] = None) -> Dict[str, float]:
    cfg = config or load_indicator_config()
    out: Dict[str, float] = {}
    for i in items:
        if i.value is None or not i.weight > 0:
            continue
        ccy = cfg.currency_for(i.original_key or i.key)
        out[ccy] = out.get(ccy, 0.0) + usd_lean(i.posture) * float(i.weight)
    return out


def pair_macro_score(symbol: str, scores: Mapping[str, float]) -> Optional[float]:
    base, quote = split_pair(symbol)
    if not base or not quote or base not in scores or quote not in scores:
        return None
    return float(scores[base] - scores[quote])
