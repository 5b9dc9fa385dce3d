# BE/macro_bias/strategy/tactical.py
"""
Tactical bias table: regime + USD posture + quadrant + correlations → one row
per tactical instrument.

Design:
• The universe (default: data/tactical_pairs.json) bounds the output; each
  whitelisted instrument yields exactly one row, whatever the regime.
• Direction by instrument type:
    fx, USD quote (EURUSD)  : USD Bullish → sell, Bearish → buy, Neutral → range
    fx, USD base (USDJPY)   : USD Bullish → buy,  Bearish → sell, Neutral → range
    fx cross (EURJPY)       : a per-currency macro score gap beyond
                              fx.pair_score_band decides (base − quote > 0 →
                              buy); otherwise RISK ON favours pro-cyclical over
                              safe-haven currencies, RISK OFF the reverse; same
                              bloc or Mixed → range
    commodity/metal (XAU)   : slowdown/stagflation quadrant → buy, else
                              USD Bullish → sell, else range
    crypto, index           : RISK ON → buy, RISK OFF → sell, Mixed → range
• trend_final mirrors the action; Neutral is kept (display maps it to Rango).
• Correlations: first matching symbol variant wins; none → DXY with no figures.
• Confidence and rationale: scoring.confidence / scoring.explainer.

Pure function of its inputs: no I/O beyond memoized config reads.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from ..config import BiasPolicy, IndicatorConfig, load_policy, load_tactical_pairs
from ..models import (
    ActionFinal,
    CorrelationView,
    CurrencyPosture,
    IndicatorItem,
    Quadrant,
    Regime,
    TacticalBiasRow,
    TacticalPair,
    TrendFinal,
)
from ..scoring.confidence import confidence_advanced, confidence_from, detect_recent_surprise
from ..scoring.currency import currency_scores as score_currencies
from ..scoring.currency import macro_quadrant, pair_macro_score
from ..scoring.explainer import explain_row
from ..symbols import is_whitelisted, normalize, ordered_variants, split_pair
from ..utils.format import format_signed_two_decimals, usd_label

LOG = logging.getLogger(__name__)

UniverseEntry = Union[str, TacticalPair]

_BUY = ActionFinal.BUSCAR_COMPRAS
_SELL = ActionFinal.BUSCAR_VENTAS
_RANGE = ActionFinal.RANGO_TACTICO

_TREND_FOR_ACTION = {
    _BUY: TrendFinal.ALCISTA,
    _SELL: TrendFinal.BAJISTA,
    _RANGE: TrendFinal.NEUTRAL,
}


def trend_from_action(action: ActionFinal) -> TrendFinal:
    return _TREND_FOR_ACTION[action]


# ────────────────────────────────────────────────────────────────────────────
# Universe
# ────────────────────────────────────────────────────────────────────────────

def infer_type(symbol: str) -> str:
    canon = normalize(symbol)
    if canon.startswith(("XAU", "XAG", "XPT")):
        return "commodity"
    if canon.endswith(("USDT", "USDC")):
        return "crypto"
    base, quote = split_pair(canon)
    if base and quote:
        return "fx"
    return "index"


def resolve_universe(universe: Optional[Iterable[UniverseEntry]] = None) -> List[TacticalPair]:
    """
    Canonical, de-duplicated, whitelisted instruments in input order.
    Entries outside the whitelist/tactical list are dropped with a warning.
    """
    configured = load_tactical_pairs()
    tactical_symbols = [p.symbol for p in configured]
    entries: Iterable[UniverseEntry] = configured if universe is None else universe

    out: List[TacticalPair] = []
    seen = set()
    for entry in entries:
        if isinstance(entry, TacticalPair):
            canon, kind = normalize(entry.symbol), entry.type
        else:
            canon, kind = normalize(entry), ""
        if not canon or canon in seen:
            continue
        if not is_whitelisted(canon, tactical_symbols):
            LOG.warning("Skipping non-whitelisted instrument %r", entry)
            continue
        seen.add(canon)
        out.append(TacticalPair(symbol=canon, type=kind or infer_type(canon)))
    return out


# ────────────────────────────────────────────────────────────────────────────
# Direction rules (each returns (action, driver text))
# ────────────────────────────────────────────────────────────────────────────

def _fx_usd(base: str, quote: str, usd: CurrencyPosture) -> Tuple[ActionFinal, str]:
    usd_is_base = base == "USD"
    if usd is CurrencyPosture.NEUTRAL:
        return _RANGE, usd_label(usd)
    side = "USD base" if usd_is_base else "USD cotizada"
    bullish = usd is CurrencyPosture.BULLISH
    if usd_is_base:
        action = _BUY if bullish else _SELL
    else:
        action = _SELL if bullish else _BUY
    return action, f"{usd_label(usd)} ({side})"


def _bloc(ccy: str, policy: BiasPolicy) -> str:
    if ccy in policy.pro_cyclical:
        return "pro-cíclica"
    if ccy in policy.safe_haven:
        return "refugio"
    return "neutral"


def _fx_cross(
    base: str,
    quote: str,
    regime: Regime,
    policy: BiasPolicy,
    pair_score: Optional[float] = None,
) -> Tuple[ActionFinal, str]:
    if pair_score is not None and abs(pair_score) > policy.pair_score_band:
        driver = f"Diferencial macro {base} vs {quote} {format_signed_two_decimals(pair_score)}"
        return (_BUY if pair_score > 0 else _SELL), driver
    b, q = _bloc(base, policy), _bloc(quote, policy)
    driver = f"{regime.value} · {base} {b} vs {quote} {q}"
    if regime is Regime.MIXED or b == q or "neutral" in (b, q):
        return _RANGE, driver
    base_favoured = (b == "pro-cíclica") == (regime is Regime.RISK_ON)
    return (_BUY if base_favoured else _SELL), driver


def _commodity(usd: CurrencyPosture, quadrant: Quadrant) -> Tuple[ActionFinal, str]:
    if quadrant in (Quadrant.SLOWDOWN, Quadrant.STAGFLATION):
        return _BUY, f"{quadrant.value} y {usd_label(usd)}"
    if usd is CurrencyPosture.BULLISH:
        return _SELL, usd_label(usd)
    return _RANGE, usd_label(usd)


def _risk_asset(regime: Regime) -> Tuple[ActionFinal, str]:
    if regime is Regime.RISK_ON:
        return _BUY, regime.value
    if regime is Regime.RISK_OFF:
        return _SELL, regime.value
    return _RANGE, f"Régimen {regime.value}"


def direction_for(
    pair: TacticalPair,
    regime: Regime,
    usd: CurrencyPosture,
    quadrant: Quadrant,
    policy: BiasPolicy,
    scores: Optional[Mapping[str, float]] = None,
) -> Tuple[ActionFinal, str]:
    kind = pair.type.lower()
    if kind in ("fx", "forex"):
        base, quote = split_pair(pair.symbol)
        if not base or not quote:
            return _RANGE, usd_label(usd)
        if "USD" in (base, quote):
            return _fx_usd(base, quote, usd)
        return _fx_cross(base, quote, regime, policy, pair_macro_score(pair.symbol, scores or {}))
    if kind in ("commodity", "metal"):
        return _commodity(usd, quadrant)
    return _risk_asset(regime)


# ────────────────────────────────────────────────────────────────────────────
# Correlations
# ────────────────────────────────────────────────────────────────────────────

def lookup_correlation(symbol: str, correlation_map: Optional[Mapping[str, CorrelationView]]) -> Optional[CorrelationView]:
    if not correlation_map:
        return None
    for v in ordered_variants(symbol):
        if v in correlation_map:
            return correlation_map[v]
    return None


def _finite_or_none(v: Any) -> Optional[float]:
    if v is None:
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f if np.isfinite(f) else None


def normalize_signals(extra_signals: Optional[Mapping[str, Any]]) -> Dict[str, Tuple[str, ...]]:
    """
    Canonical symbol → indicator keys. A single key string counts as one key;
    None values, blank symbols and non-iterable values are ignored.
    """
    out: Dict[str, Tuple[str, ...]] = {}
    for raw_symbol, keys in (extra_signals or {}).items():
        symbol = normalize(raw_symbol)
        if not symbol or keys is None:
            continue
        if isinstance(keys, str):
            keys = (keys,)
        try:
            out[symbol] = tuple(str(k) for k in keys if k)
        except TypeError:
            LOG.debug("Ignoring extra signals for %s: %r is not a key list", symbol, keys)
    return out


# ────────────────────────────────────────────────────────────────────────────
# Public API
# ────────────────────────────────────────────────────────────────────────────

def build_tactical_table(
    items: Sequence[IndicatorItem],
    regime: Regime,
    usd_posture: CurrencyPosture,
    score: float,
    extra_signals: Optional[Mapping[str, Any]] = None,
    correlation_map: Optional[Mapping[str, CorrelationView]] = None,
    *,
    universe: Optional[Iterable[UniverseEntry]] = None,
    quadrant: Optional[Quadrant] = None,
    policy: Optional[BiasPolicy] = None,
    config: Optional[IndicatorConfig] = None,
    currency_scores: Optional[Mapping[str, float]] = None,
) -> List[TacticalBiasRow]:
    """
    Candidate rows, one per resolved universe instrument.

    extra_signals maps a symbol (any surface form) to the indicator keys that
    drive its surprise check and rationale, overriding policy.yml.
    currency_scores defaults to the per-currency scores of `items`.
    """
    pol = policy or load_policy()
    items = list(items or ())
    quad = quadrant or macro_quadrant(items, config=config, policy=pol)
    scores = score_currencies(items, config) if currency_scores is None else currency_scores
    s = _finite_or_none(score) or 0.0
    base_conf = confidence_from(s, usd_posture, policy=pol)
    overrides = normalize_signals(extra_signals)

    rows: List[TacticalBiasRow] = []
    for pair in resolve_universe(universe):
        action, driver = direction_for(pair, regime, usd_posture, quad, pol, scores)
        priority = overrides.get(pair.symbol, pol.priority_for(pair.symbol))
        surprise = detect_recent_surprise(items, priority, min_net=pol.surprise_min_net)

        view = lookup_correlation(pair.symbol, correlation_map)
        c12 = _finite_or_none(view.c12) if view else None
        c3 = _finite_or_none(view.c3) if view else None

        rows.append(
            TacticalBiasRow(
                symbol=pair.symbol,
                trend_final=trend_from_action(action),
                action_final=action,
                confidence_level=confidence_advanced(base_conf, c12, surprise, action, policy=pol),
                motivo_macro=explain_row(driver=driver, action=action, items=items, priority=priority),
                corr_ref=(view.ref if view and view.ref else pol.default_ref),
                corr_12m=c12,
                corr_3m=c3,
            )
        )
    return rows
