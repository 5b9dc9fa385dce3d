# BE/macro_bias/ingest/correlations.py
"""
Correlation bridge: raw provider rows → canonical-keyed correlation lookup.

Raw rows look like
    {"activo": "EURUSD", "corr12": -0.81, "corr6": -0.77, "corr3": -0.64}
    {"pair": "eur/usd", "corr12m": "-0.81", "ref": "DXY"}

The resulting `CorrelationMap` stores one view per canonical instrument and
resolves any surface form of the symbol at lookup time, so "EUR/USD",
"eurusd" and "EURUSD" all return the same view object.

Correlation data is advisory: malformed rows are skipped and any unexpected
failure yields an empty map.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional

import numpy as np

from ..models import CorrelationView
from ..symbols import normalize, ordered_variants

LOG = logging.getLogger(__name__)

DEFAULT_REF = "DXY"

_SYMBOL_KEYS = ("activo", "pair", "symbol", "par")
_C12_KEYS = ("corr12", "corr12m", "corr_12m", "c12")
_C6_KEYS = ("corr6", "corr6m", "corr_6m", "c6")
_C3_KEYS = ("corr3", "corr3m", "corr_3m", "c3")
_UPDATED_KEYS = ("last_updated", "lastUpdated", "updated_at", "date")


def _num(v: Any) -> Optional[float]:
    """Finite float or None. Never NaN, never raises."""
    if v is None or isinstance(v, bool):
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f if np.isfinite(f) else None


def _first(row: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for k in keys:
        if k in row and row[k] is not None:
            return row[k]
    return None


class CorrelationMap(Mapping[str, CorrelationView]):
    """
    Read-only mapping keyed by canonical symbol.

    Item access, `in` and `get` accept any surface form of a symbol; iteration
    and `len` reflect the canonical entries only.
    """

    def __init__(self, views: Optional[Mapping[str, CorrelationView]] = None) -> None:
        self._store: Dict[str, CorrelationView] = {}
        for k, v in (views or {}).items():
            canon = normalize(k)
            if canon:
                self._store[canon] = v

    def __getitem__(self, key: str) -> CorrelationView:
        return self._store[normalize(key)]

    def __contains__(self, key: object) -> bool:
        return normalize(key) in self._store

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def lookup(self, symbol: str) -> Optional[CorrelationView]:
        """Walk the symbol's variants; the first registered one wins."""
        for v in ordered_variants(symbol):
            if v in self:
                return self[v]
        return None

    def __repr__(self) -> str:
        return f"CorrelationMap({sorted(self._store)})"


def parse_correlation_row(row: Any) -> Optional[CorrelationView]:
    """One raw row → view, or None when the row lacks a usable symbol."""
    if not isinstance(row, Mapping):
        return None
    raw_symbol = _first(row, _SYMBOL_KEYS)
    canon = normalize(raw_symbol)
    if not canon:
        return None
    ref = _first(row, ("ref", "corr_ref", "benchmark"))
    ref_s = str(ref).strip() if ref is not None else ""
    updated = _first(row, _UPDATED_KEYS)
    return CorrelationView(
        pair=canon,
        ref=ref_s or DEFAULT_REF,
        c12=_num(_first(row, _C12_KEYS)),
        c6=_num(_first(row, _C6_KEYS)),
        c3=_num(_first(row, _C3_KEYS)),
        last_updated=str(updated) if updated is not None else None,
    )


def build_correlation_map(raw_rows: Any) -> CorrelationMap:
    """
    Build the lookup from a raw correlation snapshot.

    Later rows for the same canonical symbol replace earlier ones.
    """
    if raw_rows is None:
        return CorrelationMap()
    try:
        views: Dict[str, CorrelationView] = {}
        skipped = 0
        for row in raw_rows:
            view = parse_correlation_row(row)
            if view is None:
                skipped += 1
                continue
            views[view.pair] = view
        if skipped:
            LOG.debug("Correlation bridge skipped %d malformed row(s)", skipped)
        return CorrelationMap(views)
    except Exception as e:
        LOG.warning("Correlation map build failed, continuing without correlations: %s", e)
        return CorrelationMap()
