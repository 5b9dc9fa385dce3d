# BE/macro_bias/config.py
"""
config.py
─────────
Central configuration layer:
• Loads the indicator catalogue (`data/indicators.yml`)
• Loads policy thresholds (`data/policy.yml`)
• Loads the tactical instrument universe (`data/tactical_pairs.json`)

The data directory defaults to `macro_bias/data` and can be redirected with
the MACRO_BIAS_DATA_DIR environment variable or an explicit `data_dir`.
Missing files never raise: callers get built-in defaults and a warning.
Loaders are memoized; call `reset_config_cache()` after editing files.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from .models import ConfigError, TacticalPair
from .utils.io import read_json, read_yaml

LOG = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────
# Paths & file loading
# ────────────────────────────────────────────────────────────
def _package_data_dir() -> Path:
    return Path(__file__).resolve().parent / "data"


def data_dir(override: Optional[str | Path] = None) -> Path:
    """Resolve the config directory: explicit override > env > packaged data."""
    if override:
        return Path(override).expanduser().resolve()
    env = os.getenv("MACRO_BIAS_DATA_DIR")
    if env:
        return Path(env).expanduser().resolve()
    return _package_data_dir()


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML file, returning {} when it is missing or unreadable."""
    if not path.exists():
        LOG.warning("Config file not found: %s (using defaults)", path)
        return {}
    try:
        return read_yaml(path)
    except Exception as e:
        LOG.error("Error loading YAML file %s: %s", path, e)
        return {}


# ────────────────────────────────────────────────────────────
# Indicator catalogue
# ────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class PostureBand:
    low: float
    high: float
    inverse: bool = False


@dataclass(frozen=True)
class IndicatorConfig:
    aliases: Mapping[str, str] = field(default_factory=dict)
    weights: Mapping[str, float] = field(default_factory=dict)
    postures: Mapping[str, PostureBand] = field(default_factory=dict)
    categories: Mapping[str, str] = field(default_factory=dict)
    category_order: Tuple[str, ...] = ()
    labels: Mapping[str, str] = field(default_factory=dict)
    lower_is_better: FrozenSet[str] = frozenset()
    currencies: Mapping[str, str] = field(default_factory=dict)
    growth_series: Tuple[str, ...] = ("GDPC1", "INDPRO")
    inflation_series: Tuple[str, ...] = ("PCEPI", "PCEPILFE")

    def series_for(self, key: str) -> str:
        """Provider key -> canonical series id (upper-cased when unknown)."""
        k = (key or "").strip()
        return self.aliases.get(k) or self.aliases.get(k.lower()) or k.upper()

    def weight_for(self, series: str) -> float:
        return float(self.weights.get(series, 0.0))

    def category_for(self, series: str) -> str:
        return self.categories.get(series, "Otros")

    def category_rank(self, category: str) -> int:
        try:
            return self.category_order.index(category)
        except ValueError:
            return len(self.category_order)

    def currency_for(self, key: str) -> str:
        k = (key or "").lower()
        for prefix, ccy in self.currencies.items():
            if k.startswith(prefix.lower()):
                return ccy
        return "USD"

    def label_for(self, key: str, series: str, label: str) -> str:
        return self.labels.get(key) or self.labels.get(series) or label


def _parse_postures(raw: Mapping[str, Any]) -> Dict[str, PostureBand]:
    out: Dict[str, PostureBand] = {}
    for series, band in (raw or {}).items():
        if not isinstance(band, Mapping):
            LOG.warning("Ignoring posture band for %s: expected mapping", series)
            continue
        try:
            out[str(series).upper()] = PostureBand(
                low=float(band["low"]),
                high=float(band["high"]),
                inverse=bool(band.get("inverse", False)),
            )
        except (KeyError, TypeError, ValueError) as e:
            LOG.warning("Ignoring posture band for %s: %s", series, e)
    return out


def indicator_config_from_dict(raw: Mapping[str, Any]) -> IndicatorConfig:
    quadrant = raw.get("quadrant") or {}
    defaults = IndicatorConfig()
    return IndicatorConfig(
        aliases={str(k).lower(): str(v).upper() for k, v in (raw.get("aliases") or {}).items()},
        weights={str(k).upper(): float(v) for k, v in (raw.get("weights") or {}).items()},
        postures=_parse_postures(raw.get("postures") or {}),
        categories={str(k).upper(): str(v) for k, v in (raw.get("categories") or {}).items()},
        category_order=tuple(raw.get("category_order") or ()),
        labels={str(k): str(v) for k, v in (raw.get("labels") or {}).items()},
        lower_is_better=frozenset(str(s).upper() for s in (raw.get("lower_is_better") or ())),
        currencies={str(k): str(v).upper() for k, v in (raw.get("currencies") or {}).items()},
        growth_series=tuple(str(s).upper() for s in quadrant.get("growth", defaults.growth_series)),
        inflation_series=tuple(str(s).upper() for s in quadrant.get("inflation", defaults.inflation_series)),
    )


@lru_cache(maxsize=8)
def _indicator_config(directory: str) -> IndicatorConfig:
    return indicator_config_from_dict(_load_yaml(Path(directory) / "indicators.yml"))


def load_indicator_config(data_dir_override: Optional[str | Path] = None) -> IndicatorConfig:
    return _indicator_config(str(data_dir(data_dir_override)))


# ────────────────────────────────────────────────────────────
# Policy thresholds
# ────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class BiasPolicy:
    regime_threshold: float = 0.3
    usd_neutral_band: float = 0.05
    inflation_high: float = 3.0
    inflation_low: float = 2.5
    growth_high: float = 2.0
    growth_low: float = 1.0
    alta_factor: float = 1.2
    media_factor: float = 0.7
    strong_corr: float = 0.5
    surprise_min_net: int = 2
    alta_points: int = 3
    media_points: int = 1
    default_ref: str = "DXY"
    pro_cyclical: FrozenSet[str] = frozenset({"EUR", "GBP", "AUD", "NZD", "CAD"})
    safe_haven: FrozenSet[str] = frozenset({"JPY", "CHF"})
    pair_score_band: float = 0.05
    pair_priority: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def priority_for(self, symbol: str) -> Tuple[str, ...]:
        return tuple(self.pair_priority.get(symbol, ()))


def policy_from_dict(raw: Mapping[str, Any]) -> BiasPolicy:
    d = BiasPolicy()
    regime = raw.get("regime") or {}
    usd = raw.get("usd") or {}
    quad = raw.get("quadrant") or {}
    conf = raw.get("confidence") or {}
    corr = raw.get("correlation") or {}
    fx = raw.get("fx") or {}
    try:
        policy = BiasPolicy(
            regime_threshold=float(regime.get("threshold", d.regime_threshold)),
            usd_neutral_band=float(usd.get("neutral_band", d.usd_neutral_band)),
            inflation_high=float(quad.get("inflation_high", d.inflation_high)),
            inflation_low=float(quad.get("inflation_low", d.inflation_low)),
            growth_high=float(quad.get("growth_high", d.growth_high)),
            growth_low=float(quad.get("growth_low", d.growth_low)),
            alta_factor=float(conf.get("alta_factor", d.alta_factor)),
            media_factor=float(conf.get("media_factor", d.media_factor)),
            strong_corr=float(conf.get("strong_corr", d.strong_corr)),
            surprise_min_net=int(conf.get("surprise_min_net", d.surprise_min_net)),
            alta_points=int(conf.get("alta_points", d.alta_points)),
            media_points=int(conf.get("media_points", d.media_points)),
            default_ref=str(corr.get("default_ref", d.default_ref)),
            pro_cyclical=frozenset(str(c).upper() for c in fx.get("pro_cyclical", d.pro_cyclical)),
            safe_haven=frozenset(str(c).upper() for c in fx.get("safe_haven", d.safe_haven)),
            pair_score_band=float(fx.get("pair_score_band", d.pair_score_band)),
            pair_priority={
                str(sym).upper(): tuple(str(k).upper() for k in keys or ())
                for sym, keys in (raw.get("pair_priority") or {}).items()
            },
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid policy configuration: {e}") from e
    if not 0.0 <= policy.regime_threshold <= 1.0:
        raise ConfigError(f"regime.threshold must be within [0, 1], got {policy.regime_threshold}")
    if policy.usd_neutral_band < 0.0:
        raise ConfigError(f"usd.neutral_band must be >= 0, got {policy.usd_neutral_band}")
    if policy.pair_score_band < 0.0:
        raise ConfigError(f"fx.pair_score_band must be >= 0, got {policy.pair_score_band}")
    return policy


@lru_cache(maxsize=8)
def _policy(directory: str) -> BiasPolicy:
    raw = _load_yaml(Path(directory) / "policy.yml")
    try:
        return policy_from_dict(raw)
    except ConfigError as e:
        LOG.error("%s (using defaults)", e)
        return BiasPolicy()


def load_policy(data_dir_override: Optional[str | Path] = None) -> BiasPolicy:
    return _policy(str(data_dir(data_dir_override)))


# ────────────────────────────────────────────────────────────
# Tactical universe
# ────────────────────────────────────────────────────────────
@lru_cache(maxsize=8)
def _tactical_pairs(directory: str) -> Tuple[TacticalPair, ...]:
    path = Path(directory) / "tactical_pairs.json"
    try:
        raw = read_json(path, default=None)
    except Exception as e:
        LOG.error("Failed to load %s: %s", path, e)
        return ()
    if raw is None:
        LOG.warning("Tactical universe not found: %s", path)
        return ()
    if not isinstance(raw, list):
        LOG.error("Tactical universe %s must be a JSON list", path)
        return ()

    out: List[TacticalPair] = []
    for entry in raw:
        if not isinstance(entry, Mapping) or not entry.get("symbol"):
            LOG.debug("Skipping malformed tactical pair entry: %r", entry)
            continue
        out.append(
            TacticalPair(
                symbol=str(entry["symbol"]).upper(),
                type=str(entry.get("type") or "fx"),
                yahoo_symbol=entry.get("yahoo_symbol"),
            )
        )
    return tuple(out)


def load_tactical_pairs(data_dir_override: Optional[str | Path] = None) -> List[TacticalPair]:
    return list(_tactical_pairs(str(data_dir(data_dir_override))))


def reset_config_cache() -> None:
    """Drop memoized config (tests, hot reload)."""
    _indicator_config.cache_clear()
    _policy.cache_clear()
    _tactical_pairs.cache_clear()
