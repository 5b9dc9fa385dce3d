# BE/macro_bias/scoring/confidence.py
"""
Confidence level (Alta / Media / Baja) for a tactical row.

Base level from the distance of the regime score to zero:
    |score| ≥ thr·alta_factor  → Alta
    |score| ≥ thr·media_factor → Alta, or Media when USD is Neutral
    otherwise                  → Media
Points: Alta 2, Media 1, Baja 0, then
    +1  |corr 12m| ≥ strong_corr
    +1  recent macro surprise among the instrument's priority indicators
    -1  the action is a range call (no directional agreement)
Points ≥ alta_points → Alta, ≥ media_points → Media, else Baja.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Sequence

from ..config import BiasPolicy, load_policy
from ..models import ActionFinal, ConfidenceLevel, CurrencyPosture, IndicatorItem, IndicatorPosture

_POINTS = {ConfidenceLevel.ALTA: 2, ConfidenceLevel.MEDIA: 1, ConfidenceLevel.BAJA: 0}


class Surprise(str, Enum):
    POSITIVE = "pos"
    NEGATIVE = "neg"
    NONE = "none"


def confidence_from(
    score: float, usd: CurrencyPosture, *, threshold: Optional[float] = None, policy: Optional[BiasPolicy] = None
) -> ConfidenceLevel:
    pol = policy or load_policy()
    thr = pol.regime_threshold if threshold is None else float(threshold)
    dist = abs(score)
    if dist >= thr * pol.alta_factor:
        return ConfidenceLevel.ALTA
    if dist >= thr * pol.media_factor:
        return ConfidenceLevel.MEDIA if usd is CurrencyPosture.NEUTRAL else ConfidenceLevel.ALTA
    return ConfidenceLevel.MEDIA


def detect_recent_surprise(
    items: Iterable[IndicatorItem], keys: Sequence[str], *, min_net: int = 2
) -> Surprise:
    """Net hawkish vs dovish count among `keys` (series or provider keys)."""
    wanted = {k.upper() for k in keys}
    if not wanted:
        return Surprise.NONE
    postures = [
        i.posture for i in items
        if i.value is not None and (i.key.upper() in wanted or i.original_key.upper() in wanted)
    ]
    hawk = sum(1 for p in postures if p is IndicatorPosture.HAWKISH)
    dov = sum(1 for p in postures if p is IndicatorPosture.DOVISH)
    if hawk - dov >= min_net:
        return Surprise.POSITIVE
    if dov - hawk >= min_net:
        return Surprise.NEGATIVE
    return Surprise.NONE


def confidence_advanced(
    base: ConfidenceLevel,
    corr12: Optional[float],
    surprise: Surprise,
    action: ActionFinal,
    *,
    policy: Optional[BiasPolicy] = None,
) -> ConfidenceLevel:
    pol = policy or load_policy()
    points = _POINTS[base]
    if corr12 is not None and abs(corr12) >= pol.strong_corr:
        points += 1
    if surprise is not Surprise.NONE:
        points += 1
    if action is ActionFinal.RANGO_TACTICO:
        points -= 1
    if points >= pol.alta_points:
        return ConfidenceLevel.ALTA
    if points >= pol.media_points:
        return ConfidenceLevel.MEDIA
    return ConfidenceLevel.BAJA
