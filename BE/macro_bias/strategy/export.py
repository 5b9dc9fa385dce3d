# BE/macro_bias/strategy/export.py
"""
Tabular export of validated tactical rows (CSV column contract).
"""

from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from ..models import TacticalBiasRow
from ..utils.format import display_trend

CSV_COLUMNS: List[str] = [
    "symbol",
    "trend_final",
    "action_final",
    "confidence_level",
    "motivo_macro",
    "corr_ref",
    "corr_12m",
    "corr_3m",
]


def rows_to_frame(rows: Iterable[TacticalBiasRow], *, display: bool = False) -> pd.DataFrame:
    """
    One line per row, columns in CSV order. With `display=True` the trend
    column shows Neutral as Rango; the rows themselves are untouched.
    """
    records = [r.as_dict() for r in rows]
    df = pd.DataFrame.from_records(records, columns=CSV_COLUMNS)
    if display and not df.empty:
        df["trend_final"] = df["trend_final"].map(display_trend)
    return df


def rows_to_csv(rows: Iterable[TacticalBiasRow], *, display: bool = False) -> str:
    return rows_to_frame(rows, display=display).to_csv(index=False, float_format="%.2f")
