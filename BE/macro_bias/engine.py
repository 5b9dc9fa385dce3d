# BE/macro_bias/engine.py
"""
engine.py
─────────
One call from raw provider payloads to a validated bias snapshot.

    indicators ─► diagnose ─► (regime, items, score)
                     │
                     ├─► usd_bias / macro_quadrant
    correlations ─► build_correlation_map
                     │
                     └─► build_tactical_table ─► validate_rows ─► BiasSnapshot

Rows that fail validation are logged at ERROR and reported in
`BiasSnapshot.failures`; the remaining rows are returned. Missing or partial
data never raises.

With a `BiasCache`, snapshots are shared per horizon bucket, universe and
extra_signals (or per explicit `cache_key`):

    cache = BiasCache(default_ttl=900)
    snap = compute_bias(indicators, correlations, cache=cache)
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Iterable, List, Mapping, Optional

from .config import BiasPolicy, IndicatorConfig, load_indicator_config, load_policy
from .indicators.diagnostic import diagnose
from .ingest.correlations import build_correlation_map
from .models import BiasSnapshot
from .persistence.cache import BiasCache, horizon_key
from .scoring.currency import macro_quadrant, usd_bias
from .strategy.tactical import UniverseEntry, build_tactical_table, normalize_signals, resolve_universe
from .strategy.validator import validate_rows
from .utils.logging import get_logger

LOG = get_logger("macro_bias.engine")


def _compute(
    indicators: Any,
    correlations: Any,
    *,
    universe: Optional[Iterable[UniverseEntry]],
    extra_signals: Optional[Mapping[str, Any]],
    policy: BiasPolicy,
    config: IndicatorConfig,
) -> BiasSnapshot:
    diag = diagnose(indicators, config=config, threshold=policy.regime_threshold)
    usd = usd_bias(diag.items, config=config, policy=policy)
    quadrant = macro_quadrant(diag.items, config=config, policy=policy)
    corr_map = build_correlation_map(correlations)

    LOG.info(
        "Regime %s (score %.3f, %d/%d with value) · USD %s · %s",
        diag.regime.value, diag.score, diag.counts.with_value, diag.counts.total, usd.value, quadrant.value,
    )

    candidates = build_tactical_table(
        diag.items,
        diag.regime,
        usd,
        diag.score,
        extra_signals,
        corr_map,
        universe=universe,
        quadrant=quadrant,
        policy=policy,
        config=config,
        currency_scores=diag.currency_scores,
    )
    rows, failures = validate_rows(candidates)
    for f in failures:
        LOG.error("Dropped tactical row %s: %s", f.symbol or "?", "; ".join(f.errors))

    return BiasSnapshot(
        diagnosis=diag,
        usd_posture=usd,
        quadrant=quadrant,
        rows=tuple(rows),
        failures=tuple((f.symbol, f.errors) for f in failures),
    )


def default_cache_key(
    universe: Optional[List[UniverseEntry]],
    extra_signals: Optional[Mapping[str, Any]],
    ttl: int,
    now: Optional[float] = None,
) -> str:
    """
    "bias:<SYMBOLS>:<signals digest>:<bucket>". Two calls share a snapshot only
    when they resolve to the same instruments and priority overrides.
    """
    symbols = "-".join(p.symbol for p in resolve_universe(universe))
    signals = json.dumps(sorted(normalize_signals(extra_signals).items()), ensure_ascii=False)
    digest = hashlib.sha256(signals.encode("utf-8")).hexdigest()[:12]
    return horizon_key(f"bias:{symbols}:{digest}", ttl, now=now)


def compute_bias(
    indicators: Any,
    correlations: Any = None,
    *,
    universe: Optional[Iterable[UniverseEntry]] = None,
    extra_signals: Optional[Mapping[str, Any]] = None,
    cache: Optional[BiasCache] = None,
    cache_key: Optional[str] = None,
    policy: Optional[BiasPolicy] = None,
    config: Optional[IndicatorConfig] = None,
) -> BiasSnapshot:
    pol = policy or load_policy()
    cfg = config or load_indicator_config()
    universe_list = list(universe) if universe is not None else None

    def run() -> BiasSnapshot:
        return _compute(
            indicators,
            correlations,
            universe=universe_list,
            extra_signals=extra_signals,
            policy=pol,
            config=cfg,
        )

    if cache is None:
        return run()
    key = cache_key or default_cache_key(universe_list, extra_signals, cache.default_ttl)
    return cache.get_or_compute(key, run)
