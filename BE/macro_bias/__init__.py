"""
macro_bias
──────────
Macro indicators → risk regime → per-instrument tactical bias.

This namespace exposes the stable surface used by API handlers and jobs:
• config: YAML/JSON tables (aliases, weights, posture bands, policy, universe)
• ingest: provider rows → typed indicator items and correlation map
• indicators: posture and trend rules, diagnostic aggregator
• scoring: regime, USD posture, macro quadrant, confidence, rationale
• strategy: tactical table builder, row validator, CSV export
• persistence: TTL cache for computed snapshots
• utils: logging, IO, display formatting

Import conveniences:
    from macro_bias import compute_bias, diagnose, build_tactical_table
"""

from __future__ import annotations

from .models import (
    ActionFinal,
    BiasSnapshot,
    ConfidenceLevel,
    ConfigError,
    CorrelationView,
    CurrencyPosture,
    Diagnosis,
    IndicatorItem,
    IndicatorPosture,
    MacroBiasError,
    Quadrant,
    Regime,
    TacticalBiasRow,
    TrendFinal,
)
from .symbols import normalize, variants, is_whitelisted
from .ingest import build_correlation_map, parse_indicator, parse_indicators
from .indicators.diagnostic import diagnose
from .scoring import usd_bias, macro_quadrant
from .strategy import (
    BiasValidationError,
    build_tactical_table,
    rows_to_csv,
    rows_to_frame,
    validate,
    validate_rows,
)
from .persistence import BiasCache, horizon_key
from .utils.format import format_signed_two_decimals
from .engine import compute_bias

__all__ = [
    "ActionFinal",
    "BiasSnapshot",
    "ConfidenceLevel",
    "ConfigError",
    "CorrelationView",
    "CurrencyPosture",
    "Diagnosis",
    "IndicatorItem",
    "IndicatorPosture",
    "MacroBiasError",
    "Quadrant",
    "Regime",
    "TacticalBiasRow",
    "TrendFinal",
    "normalize",
    "variants",
    "is_whitelisted",
    "build_correlation_map",
    "parse_indicator",
    "parse_indicators",
    "diagnose",
    "usd_bias",
    "macro_quadrant",
    "BiasValidationError",
    "build_tactical_table",
    "rows_to_csv",
    "rows_to_frame",
    "validate",
    "validate_rows",
    "BiasCache",
    "horizon_key",
    "format_signed_two_decimals",
    "compute_bias",
]
