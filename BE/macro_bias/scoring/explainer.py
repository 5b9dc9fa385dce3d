# BE/macro_bias/scoring/explainer.py
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from ..indicators.posture import risk_lean
from ..models import ActionFinal, IndicatorItem, IndicatorPosture


_POSTURE_LABELS = {
    IndicatorPosture.HAWKISH: "hawkish",
    IndicatorPosture.DOVISH: "dovish",
    IndicatorPosture.NEUTRAL: "neutral",
}

NO_DRIVERS = "sin drivers dominantes"


def _top_contributors(items: Iterable[IndicatorItem], k: int = 2) -> List[Tuple[IndicatorItem, float]]:
    # impact = weight x lean; neutral or missing readings carry none
    scored = [
        (it, it.weight * risk_lean(it.posture))
        for it in items
        if it.value is not None and it.posture is not IndicatorPosture.NEUTRAL and it.weight > 0
    ]
    ranked = sorted(scored, key=lambda kv: (-abs(kv[1]), kv[0].label))
    return ranked[:k]


def dominant_drivers(
    items: Sequence[IndicatorItem], priority: Sequence[str] = (), k: int = 2
) -> List[IndicatorItem]:
    """Top-k contributing items, looking at the instrument's priority series first."""
    wanted = {p.upper() for p in priority}
    if wanted:
        preferred = [i for i in items if i.key.upper() in wanted or i.original_key.upper() in wanted]
        tops = _top_contributors(preferred, k)
        if tops:
            return [it for it, _ in tops]
    return [it for it, _ in _top_contributors(items, k)]


def explain_row(
    *,
    driver: str,
    action: ActionFinal,
    items: Sequence[IndicatorItem],
    priority: Sequence[str] = (),
    k: int = 2,
) -> str:
    """
    One-line rationale, e.g.
    "USD fuerte ⇒ Buscar ventas · Claves: Core PCE (hawkish), Nóminas (hawkish)"
    """
    tops = dominant_drivers(items, priority, k)
    if tops:
        keys = ", ".join(f"{it.label} ({_POSTURE_LABELS[it.posture]})" for it in tops)
        tail = f"Claves: {keys}"
    else:
        tail = NO_DRIVERS
    return f"{driver} ⇒ {action.value} · {tail}"
