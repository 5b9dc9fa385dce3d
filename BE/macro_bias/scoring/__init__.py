"""
Signal fusion → bias

Exports a small, stable surface the rest of the package can call:

- weighted_score(...) / diagnose_regime(...)  -> regime from indicator postures
- usd_bias(...) / macro_quadrant(...)         -> currency posture and quadrant
- currency_scores(...) / pair_macro_score(...) -> per-currency macro lean
- confidence_from(...) / confidence_advanced(...) -> Alta | Media | Baja
- explain_row(...)                            -> human-readable rationale
"""

from .regime import WeightedScore, weighted_score, diagnose_regime
from .currency import usd_bias, usd_score, macro_quadrant, quadrant_axes, currency_scores, pair_macro_score
from .confidence import Surprise, confidence_from, confidence_advanced, detect_recent_surprise
from .explainer import explain_row, dominant_drivers

__all__ = [
    "WeightedScore",
    "weighted_score",
    "diagnose_regime",
    "usd_bias",
    "usd_score",
    "macro_quadrant",
    "quadrant_axes",
    "currency_scores",
    "pair_macro_score",
    "Surprise",
    "confidence_from",
    "confidence_advanced",
    "detect_recent_surprise",
    "explain_row",
    "dominant_drivers",
]
