# BE/macro_bias/models.py
"""
models.py
─────────
Typed entities shared by every stage of the bias pipeline.

Enums carry the exact string values consumers see (Spanish labels for the
tactical table, provider-style labels for regimes). Dataclasses are frozen:
rows and items are created once per computation and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class MacroBiasError(Exception):
    """Base class for errors raised by macro_bias."""


class ConfigError(MacroBiasError):
    """Raised by strict config accessors when a file is present but unusable."""


# ────────────────────────────────────────────────────────────
# Enums
# ────────────────────────────────────────────────────────────
class IndicatorPosture(str, Enum):
    HAWKISH = "Hawkish"
    NEUTRAL = "Neutral"
    DOVISH = "Dovish"


class Regime(str, Enum):
    RISK_ON = "RISK ON"
    RISK_OFF = "RISK OFF"
    MIXED = "Mixed"


class CurrencyPosture(str, Enum):
    BULLISH = "Bullish"
    BEARISH = "Bearish"
    NEUTRAL = "Neutral"


class Quadrant(str, Enum):
    OVERHEATING = "recalentamiento"
    STAGFLATION = "estanflacion"
    SLOWDOWN = "desaceleracion"
    EXPANSION = "expansion"
    NEUTRAL = "neutral"


class IndicatorTrend(str, Enum):
    IMPROVING = "Mejora"
    DETERIORATING = "Empeora"
    STABLE = "Estable"


class TrendFinal(str, Enum):
    ALCISTA = "Alcista"
    BAJISTA = "Bajista"
    NEUTRAL = "Neutral"
    RANGO = "Rango"


class ActionFinal(str, Enum):
    BUSCAR_COMPRAS = "Buscar compras"
    BUSCAR_VENTAS = "Buscar ventas"
    RANGO_TACTICO = "Rango/táctico"


class ConfidenceLevel(str, Enum):
    ALTA = "Alta"
    MEDIA = "Media"
    BAJA = "Baja"


# ────────────────────────────────────────────────────────────
# Entities
# ────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class IndicatorItem:
    """One normalized macro reading. `key` is the canonical series id."""
    key: str
    label: str
    value: Optional[float]
    unit: str
    date: Optional[str]
    weight: float
    posture: IndicatorPosture
    original_key: str = ""
    category: str = "other"
    value_previous: Optional[float] = None
    date_previous: Optional[str] = None
    trend: Optional[IndicatorTrend] = None

    @property
    def has_value(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class CorrelationView:
    """Correlation context of one instrument against its reference benchmark."""
    pair: str
    ref: str
    c12: Optional[float]
    c6: Optional[float]
    c3: Optional[float]
    last_updated: Optional[str] = None


@dataclass(frozen=True)
class TacticalPair:
    symbol: str
    type: str
    yahoo_symbol: Optional[str] = None


@dataclass(frozen=True)
class TacticalBiasRow:
    """
    Per-instrument recommendation.

    Rows straight from the builder may carry `None` correlations; rows that
    passed `strategy.validator.validate` always carry finite floats.
    """
    symbol: str
    trend_final: TrendFinal
    action_final: ActionFinal
    confidence_level: ConfidenceLevel
    motivo_macro: str
    corr_ref: str
    corr_12m: Optional[float]
    corr_3m: Optional[float]

    def as_dict(self) -> Dict[str, object]:
        return {
            "symbol": self.symbol,
            "trend_final": self.trend_final.value,
            "action_final": self.action_final.value,
            "confidence_level": self.confidence_level.value,
            "motivo_macro": self.motivo_macro,
            "corr_ref": self.corr_ref,
            "corr_12m": self.corr_12m,
            "corr_3m": self.corr_3m,
        }


@dataclass(frozen=True)
class DiagnosisCounts:
    total: int
    with_value: int
    nulls: int


@dataclass(frozen=True)
class Diagnosis:
    regime: Regime
    items: Tuple[IndicatorItem, ...]
    score: float
    threshold: float
    counts: DiagnosisCounts
    last_updated: str = ""
    improving: int = 0
    deteriorating: int = 0
    currency_scores: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class BiasSnapshot:
    """Everything one computation produces, ready for collaborators."""
    diagnosis: Diagnosis
    usd_posture: CurrencyPosture
    quadrant: Quadrant
    rows: Tuple[TacticalBiasRow, ...]
    failures: Tuple[Tuple[str, Tuple[str, ...]], ...] = field(default_factory=tuple)

    @property
    def regime(self) -> Regime:
        return self.diagnosis.regime

    def symbols(self) -> List[str]:
        return [r.symbol for r in self.rows]
