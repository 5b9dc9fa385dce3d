"""Shared fixtures for macro_bias tests."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import pytest

from macro_bias.config import BiasPolicy, load_indicator_config, load_tactical_pairs, reset_config_cache
from macro_bias.models import IndicatorItem, IndicatorPosture


@pytest.fixture(autouse=True)
def _packaged_config(monkeypatch: pytest.MonkeyPatch):
    """Every test starts from the packaged data dir and a cold config cache."""
    monkeypatch.delenv("MACRO_BIAS_DATA_DIR", raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture
def policy() -> BiasPolicy:
    return BiasPolicy()


@pytest.fixture
def indicator_config():
    return load_indicator_config()


@pytest.fixture
def universe_size() -> int:
    return len(load_tactical_pairs())


@pytest.fixture
def make_item() -> Callable[..., IndicatorItem]:
    def _make(
        key: str,
        value: Optional[float] = 1.0,
        posture: IndicatorPosture = IndicatorPosture.NEUTRAL,
        weight: float = 1.0,
        label: Optional[str] = None,
        original_key: Optional[str] = None,
    ) -> IndicatorItem:
        return IndicatorItem(
            key=key,
            label=label or key,
            value=value,
            unit="%",
            date="2025-09-01",
            weight=weight,
            posture=posture,
            original_key=original_key or key.lower(),
        )

    return _make


@pytest.fixture
def risk_on_rows() -> List[Dict[str, Any]]:
    """Raw provider snapshot where every reading eases (all Dovish)."""
    return [
        {"key": "t10y2y", "label": "Curva 10Y-2Y", "value": 1.4, "unit": "pp", "date": "2025-09-30", "posture": "Dovish"},
        {"key": "payems_delta", "label": "Nóminas no agrícolas", "value": 50, "unit": "k", "date": "2025-09-05"},
        {"key": "corepce_yoy", "label": "Core PCE YoY", "value": 2.1, "unit": "%", "date": "2025-08-31"},
        {"key": "pce_yoy", "label": "PCE YoY", "value": 2.0, "unit": "%", "date": "2025-08-31"},
        {"key": "unrate", "label": "Tasa de desempleo", "value": 4.8, "unit": "%", "date": "2025-09-05"},
    ]


@pytest.fixture
def correlation_rows() -> List[Dict[str, Any]]:
    return [
        {"activo": "EURUSD", "corr12": -0.81, "corr6": -0.77, "corr3": -0.64},
        {"pair": "usd/jpy", "corr12m": "0.55", "corr3m": 0.40, "ref": "DXY"},
        {"symbol": "XAUUSD", "corr12": float("nan"), "corr3": -0.2},
    ]
