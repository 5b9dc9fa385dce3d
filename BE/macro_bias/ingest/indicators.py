# BE/macro_bias/ingest/indicators.py
"""
Ingestion boundary for raw indicator rows.

Upstream rows are loosely typed dicts:
    {"key": "corepce_yoy", "label": "Core PCE YoY", "value": 2.9, "unit": "%",
     "date": "2025-09-01", "weight": 0.06, "posture": "Hawkish",
     "value_previous": 2.8, "date_previous": "2025-08-01"}

`parse_indicator` maps one row to a tagged result: `ParsedIndicator` carrying
a frozen `IndicatorItem`, or `RejectedIndicator` with the reason. Nothing past
this module sees a raw dict.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np

from ..config import IndicatorConfig, load_indicator_config
from ..indicators.posture import coerce_posture, posture_of
from ..indicators.trend import calculate_trend
from ..models import IndicatorItem, IndicatorPosture


@dataclass(frozen=True)
class ParsedIndicator:
    item: IndicatorItem
    ok: bool = True


@dataclass(frozen=True)
class RejectedIndicator:
    reason: str
    raw: Any = None
    ok: bool = False


IndicatorParseResult = Union[ParsedIndicator, RejectedIndicator]


def _num(v: Any) -> Optional[float]:
    if v is None or isinstance(v, bool):
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f if np.isfinite(f) else None


def _text(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def parse_indicator(raw: Any, config: Optional[IndicatorConfig] = None) -> IndicatorParseResult:
    if not isinstance(raw, Mapping):
        return RejectedIndicator("not a mapping", raw)
    key = raw.get("key")
    if not isinstance(key, str) or not key.strip():
        return RejectedIndicator("missing key", raw)

    cfg = config or load_indicator_config()
    original_key = key.strip()
    series = cfg.series_for(original_key)
    value = _num(raw.get("value"))

    weight = _num(raw.get("weight"))
    if weight is None or weight < 0:
        weight = cfg.weight_for(series)

    # a posture without a reading carries no lean
    posture = coerce_posture(raw.get("posture")) if value is not None else None
    if posture is None:
        posture = posture_of(series, value, cfg) if value is not None else IndicatorPosture.NEUTRAL

    value_previous = _num(raw.get("value_previous"))
    label = _text(raw.get("label")) or original_key
    item = IndicatorItem(
        key=series,
        label=cfg.label_for(original_key, series, label),
        value=value,
        unit=_text(raw.get("unit")) or "",
        date=_text(raw.get("date")),
        weight=float(weight),
        posture=posture,
        original_key=original_key,
        category=cfg.category_for(series),
        value_previous=value_previous,
        date_previous=_text(raw.get("date_previous")),
        trend=calculate_trend(series, value, value_previous, cfg),
    )
    return ParsedIndicator(item)


def parse_indicators(
    rows: Any, config: Optional[IndicatorConfig] = None
) -> Tuple[List[IndicatorItem], List[RejectedIndicator]]:
    """Split a raw snapshot into parsed items and rejections (input order kept)."""
    items: List[IndicatorItem] = []
    rejected: List[RejectedIndicator] = []
    if rows is None:
        return items, rejected
    if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
        return items, [RejectedIndicator("snapshot is not a sequence of rows", rows)]
    for row in rows:
        result = parse_indicator(row, config)
        if isinstance(result, ParsedIndicator):
            items.append(result.item)
        else:
            rejected.append(result)
    return items, rejected
