"""End-to-end tests for the compute_bias facade."""

from __future__ import annotations

import logging
import math

import pytest

import macro_bias
from macro_bias import engine
from macro_bias.models import (
    ActionFinal,
    CurrencyPosture,
    Regime,
    TacticalBiasRow,
    TrendFinal,
    ConfidenceLevel,
)
from macro_bias.persistence.cache import BiasCache


class TestComputeBias:
    def test_full_flow(self, risk_on_rows, correlation_rows, universe_size) -> None:
        snap = macro_bias.compute_bias(risk_on_rows, correlation_rows)
        assert snap.regime is Regime.RISK_ON
        assert snap.usd_posture is CurrencyPosture.BEARISH
        assert len(snap.rows) == universe_size
        assert snap.failures == ()

        rows = {r.symbol: r for r in snap.rows}
        assert rows["EURUSD"].action_final is ActionFinal.BUSCAR_COMPRAS
        assert rows["USDJPY"].action_final is ActionFinal.BUSCAR_VENTAS
        assert rows["SPX"].action_final is ActionFinal.BUSCAR_COMPRAS
        assert rows["EURUSD"].corr_12m == pytest.approx(-0.81)
        # validated rows never carry missing or non-finite correlations
        for r in snap.rows:
            assert math.isfinite(r.corr_12m) and math.isfinite(r.corr_3m)

    def test_missing_inputs_never_raise(self, universe_size) -> None:
        snap = macro_bias.compute_bias(None, None)
        assert snap.regime is Regime.MIXED
        assert snap.usd_posture is CurrencyPosture.NEUTRAL
        assert len(snap.rows) == universe_size
        assert all(r.corr_ref == "DXY" and r.corr_12m == 0.0 for r in snap.rows)

    def test_custom_universe(self, risk_on_rows) -> None:
        snap = macro_bias.compute_bias(risk_on_rows, universe=["eur/usd", "BTCUSDT", "FOOBAR"])
        assert snap.symbols() == ["EURUSD", "BTCUSDT"]

    def test_cache_shares_snapshot(self, risk_on_rows) -> None:
        cache = BiasCache(default_ttl=60)
        first = macro_bias.compute_bias(risk_on_rows, cache=cache, cache_key="bias:test")
        second = macro_bias.compute_bias([], cache=cache, cache_key="bias:test")
        assert second is first

    def test_default_cache_key_separates_universe_and_signals(self, risk_on_rows, universe_size) -> None:
        cache = BiasCache(default_ttl=10**9)
        narrow = macro_bias.compute_bias(risk_on_rows, universe=["EURUSD"], cache=cache)
        full = macro_bias.compute_bias(risk_on_rows, cache=cache)
        assert narrow.symbols() == ["EURUSD"]
        assert len(full.rows) == universe_size

        tuned = macro_bias.compute_bias(risk_on_rows, extra_signals={"SPX": ["PCEPILFE"]}, cache=cache)
        assert tuned is not full
        assert macro_bias.compute_bias(risk_on_rows, extra_signals={"spx": "PCEPILFE"}, cache=cache) is tuned
        assert macro_bias.compute_bias(risk_on_rows, universe=["eur/usd"], cache=cache) is narrow

    def test_default_cache_key_shape(self) -> None:
        key = engine.default_cache_key(["EURUSD", "spx"], None, 900, now=1800)
        assert key.startswith("bias:EURUSD-SPX:")
        assert key.endswith(":2")
        assert key == engine.default_cache_key(["eur/usd", "SPX"], {}, 900, now=2000)
        assert key != engine.default_cache_key(["EURUSD", "SPX"], {"SPX": ["VIXCLS"]}, 900, now=1800)

    def test_invalid_rows_are_reported(self, monkeypatch, risk_on_rows, caplog) -> None:
        bad = TacticalBiasRow(
            symbol="EURUSD",
            trend_final=TrendFinal.ALCISTA,
            action_final=ActionFinal.BUSCAR_COMPRAS,
            confidence_level=ConfidenceLevel.MEDIA,
            motivo_macro="x",
            corr_ref="DXY",
            corr_12m=float("nan"),
            corr_3m=0.1,
        )
        good = TacticalBiasRow(**{**bad.__dict__, "symbol": "SPX", "corr_12m": 0.3})
        monkeypatch.setattr(engine, "build_tactical_table", lambda *a, **k: [bad, good])

        with caplog.at_level(logging.ERROR, logger="macro_bias.engine"):
            snap = macro_bias.compute_bias(risk_on_rows)

        assert snap.symbols() == ["SPX"]
        assert snap.failures[0][0] == "EURUSD"
        assert any("corr_12m" in e for e in snap.failures[0][1])
        assert "Dropped tactical row EURUSD" in caplog.text
