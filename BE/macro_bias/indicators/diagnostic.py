# BE/macro_bias/indicators/diagnostic.py
"""
Macro diagnostic aggregator: raw indicator snapshot → (regime, items).

Steps
-----
1) Parse every raw row through the ingestion boundary; malformed rows are
   skipped.
2) De-duplicate by provider key (the later row wins), then by label: two
   items whose labels match ignoring case and spacing are one item. On a label
   collision the item with a reading wins, then the heavier weight, then the
   first seen.
3) Sort by category order, weight (desc), label.
4) Weighted score → regime (see scoring.regime).
5) Per-currency macro scores (see scoring.currency).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..config import IndicatorConfig, load_indicator_config, load_policy
from ..ingest.indicators import parse_indicators
from ..models import Diagnosis, DiagnosisCounts, IndicatorItem, IndicatorTrend
from ..scoring.currency import currency_scores
from ..scoring.regime import diagnose_regime, weighted_score

LOG = logging.getLogger(__name__)


def label_key(label: str) -> str:
    """Structural identity of a label: case- and whitespace-insensitive."""
    return " ".join((label or "").split()).casefold()


def _prefer(current: IndicatorItem, challenger: IndicatorItem) -> IndicatorItem:
    if current.has_value != challenger.has_value:
        return current if current.has_value else challenger
    if challenger.weight > current.weight:
        return challenger
    return current


def dedupe_items(items: List[IndicatorItem]) -> List[IndicatorItem]:
    by_key: Dict[str, IndicatorItem] = {}
    for it in items:
        by_key[it.original_key] = it

    by_label: Dict[str, IndicatorItem] = {}
    for it in by_key.values():
        lk = label_key(it.label)
        if lk in by_label:
            kept = _prefer(by_label[lk], it)
            dropped = it if kept is by_label[lk] else by_label[lk]
            LOG.debug("Duplicate label %r: keeping %s, dropping %s", it.label, kept.original_key, dropped.original_key)
            by_label[lk] = kept
        else:
            by_label[lk] = it
    return list(by_label.values())


def diagnose(
    raw_indicators: Any,
    *,
    config: Optional[IndicatorConfig] = None,
    threshold: Optional[float] = None,
) -> Diagnosis:
    cfg = config or load_indicator_config()
    thr = load_policy().regime_threshold if threshold is None else float(threshold)

    parsed, rejected = parse_indicators(raw_indicators, cfg)
    if rejected:
        LOG.debug("Skipped %d malformed indicator row(s): %s", len(rejected), sorted({r.reason for r in rejected}))

    items = dedupe_items(parsed)
    items.sort(key=lambda i: (cfg.category_rank(i.category), -i.weight, i.label))

    ws = weighted_score(items)
    regime = diagnose_regime(ws.score, thr)

    with_value = sum(1 for i in items if i.has_value)
    dates = sorted(i.date for i in items if i.date)
    return Diagnosis(
        regime=regime,
        items=tuple(items),
        score=ws.score,
        threshold=thr,
        counts=DiagnosisCounts(total=len(items), with_value=with_value, nulls=len(items) - with_value),
        last_updated=dates[-1] if dates else "",
        improving=sum(1 for i in items if i.trend is IndicatorTrend.IMPROVING),
        deteriorating=sum(1 for i in items if i.trend is IndicatorTrend.DETERIORATING),
        currency_scores=currency_scores(items, cfg),
    )
