# BE/macro_bias/scoring/regime.py
"""
Macro risk regime (RISK ON / RISK OFF / Mixed) from weighted indicator postures.

score = Σ lean·w / Σ w over items that have a reading and a positive weight,
with lean(Dovish)=+1, lean(Neutral)=0, lean(Hawkish)=-1, so score ∈ [-1, +1].

Mapping (ties inclusive toward the risk side):
  score ≥ +threshold → RISK ON
  score ≤ -threshold → RISK OFF
  otherwise          → Mixed
An empty or zero-weight universe scores 0.0 and is therefore Mixed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from ..config import load_policy
from ..indicators.posture import risk_lean
from ..models import IndicatorItem, Regime


@dataclass(frozen=True)
class WeightedScore:
    score: float
    count: int
    used_weight: float


def weighted_score(items: Iterable[IndicatorItem]) -> WeightedScore:
    valid = [i for i in items if i.value is not None and i.weight > 0]
    if not valid:
        return WeightedScore(0.0, 0, 0.0)
    w = np.array([i.weight for i in valid], dtype="float64")
    lean = np.array([risk_lean(i.posture) for i in valid], dtype="float64")
    total = float(w.sum())
    if total <= 0.0:
        return WeightedScore(0.0, 0, 0.0)
    return WeightedScore(float(np.dot(lean, w) / total), len(valid), total)


def diagnose_regime(score: float, threshold: Optional[float] = None) -> Regime:
    thr = load_policy().regime_threshold if threshold is None else float(threshold)
    if not np.isfinite(score):
        return Regime.MIXED
    if score >= thr:
        return Regime.RISK_ON
    if score <= -thr:
        return Regime.RISK_OFF
    return Regime.MIXED
