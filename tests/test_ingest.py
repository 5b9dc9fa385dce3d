"""Tests for the indicator ingestion boundary and per-series rules."""

from __future__ import annotations

import pytest

from macro_bias.indicators.posture import coerce_posture, posture_of, risk_lean, usd_lean
from macro_bias.indicators.trend import calculate_trend
from macro_bias.ingest.indicators import (
    ParsedIndicator,
    RejectedIndicator,
    parse_indicator,
    parse_indicators,
)
from macro_bias.models import IndicatorPosture, IndicatorTrend


class TestPostureRules:
    @pytest.mark.parametrize(
        "series, value, expected",
        [
            ("PCEPILFE", 2.4, IndicatorPosture.DOVISH),
            ("PCEPILFE", 2.5, IndicatorPosture.NEUTRAL),
            ("PCEPILFE", 3.0, IndicatorPosture.NEUTRAL),
            ("PCEPILFE", 3.1, IndicatorPosture.HAWKISH),
            ("UNRATE", 4.6, IndicatorPosture.DOVISH),
            ("UNRATE", 4.0, IndicatorPosture.NEUTRAL),
            ("UNRATE", 3.8, IndicatorPosture.HAWKISH),
            ("NFCI", 0.4, IndicatorPosture.DOVISH),
            ("VIXCLS", 12.0, IndicatorPosture.HAWKISH),
            ("PAYEMS", 300.0, IndicatorPosture.HAWKISH),
        ],
    )
    def test_bands(self, series, value, expected, indicator_config) -> None:
        assert posture_of(series, value, indicator_config) is expected

    def test_unknown_series_and_missing_value(self, indicator_config) -> None:
        assert posture_of("NOPE", 99.0, indicator_config) is IndicatorPosture.NEUTRAL
        assert posture_of("PCEPI", None, indicator_config) is IndicatorPosture.NEUTRAL

    def test_coerce(self) -> None:
        assert coerce_posture(" hawkish ") is IndicatorPosture.HAWKISH
        assert coerce_posture("Dovish") is IndicatorPosture.DOVISH
        assert coerce_posture("bullish") is None
        assert coerce_posture(1) is None

    def test_leans(self) -> None:
        assert risk_lean(IndicatorPosture.DOVISH) == 1
        assert risk_lean(IndicatorPosture.HAWKISH) == -1
        assert usd_lean(IndicatorPosture.HAWKISH) == 1
        assert usd_lean(IndicatorPosture.NEUTRAL) == 0


class TestTrend:
    def test_stable_inside_band(self, indicator_config) -> None:
        assert calculate_trend("PAYEMS", 100.5, 100.0, indicator_config) is IndicatorTrend.STABLE

    def test_higher_is_better(self, indicator_config) -> None:
        assert calculate_trend("PAYEMS", 200.0, 150.0, indicator_config) is IndicatorTrend.IMPROVING
        assert calculate_trend("PAYEMS", 100.0, 150.0, indicator_config) is IndicatorTrend.DETERIORATING

    def test_lower_is_better(self, indicator_config) -> None:
        assert calculate_trend("UNRATE", 4.0, 4.3, indicator_config) is IndicatorTrend.IMPROVING
        assert calculate_trend("PCEPI", 3.0, 2.5, indicator_config) is IndicatorTrend.DETERIORATING

    def test_zero_previous(self, indicator_config) -> None:
        assert calculate_trend("T10Y2Y", 0.5, 0.0, indicator_config) is IndicatorTrend.IMPROVING

    def test_missing_reading(self, indicator_config) -> None:
        assert calculate_trend("PAYEMS", None, 100.0, indicator_config) is None
        assert calculate_trend("PAYEMS", 100.0, None, indicator_config) is None


class TestParseIndicator:
    def test_alias_weight_and_category(self) -> None:
        result = parse_indicator({"key": "corepce_yoy", "label": "Core PCE", "value": "2.9", "date": "2025-08-31"})
        assert isinstance(result, ParsedIndicator) and result.ok
        item = result.item
        assert item.key == "PCEPILFE"
        assert item.original_key == "corepce_yoy"
        assert item.value == pytest.approx(2.9)
        assert item.weight == pytest.approx(0.06)
        assert item.category == "Precios / Inflación"
        assert item.posture is IndicatorPosture.NEUTRAL

    def test_row_weight_and_posture_win(self) -> None:
        item = parse_indicator({"key": "unrate", "value": 4.2, "weight": 0.5, "posture": "Hawkish"}).item
        assert item.weight == pytest.approx(0.5)
        assert item.posture is IndicatorPosture.HAWKISH

    @pytest.mark.parametrize("bad_weight", [-1, "heavy", float("nan")])
    def test_invalid_weight_falls_back(self, bad_weight) -> None:
        item = parse_indicator({"key": "unrate", "value": 4.2, "weight": bad_weight}).item
        assert item.weight == pytest.approx(0.06)

    def test_missing_value_is_neutral(self) -> None:
        item = parse_indicator({"key": "unrate", "value": None, "posture": "Hawkish"}).item
        assert item.value is None
        assert item.posture is IndicatorPosture.NEUTRAL
        assert not item.has_value

    def test_label_override(self) -> None:
        item = parse_indicator({"key": "gdp_yoy", "label": "GDP", "value": 2.0}).item
        assert item.key == "GDPC1"
        assert item.label == "PIB Interanual (GDP YoY)"

    def test_trend_from_previous(self) -> None:
        item = parse_indicator({"key": "unrate", "value": 4.0, "value_previous": 4.3}).item
        assert item.trend is IndicatorTrend.IMPROVING

    @pytest.mark.parametrize("raw", [None, "unrate", 3, {"label": "no key"}, {"key": "  "}])
    def test_rejections(self, raw) -> None:
        result = parse_indicator(raw)
        assert isinstance(result, RejectedIndicator)
        assert not result.ok


class TestParseIndicators:
    def test_splits_items_and_rejections(self) -> None:
        items, rejected = parse_indicators([{"key": "unrate", "value": 4.2}, None, {"label": "x"}])
        assert [i.key for i in items] == ["UNRATE"]
        assert len(rejected) == 2

    def test_none_snapshot(self) -> None:
        assert parse_indicators(None) == ([], [])

    @pytest.mark.parametrize("snapshot", ["rows", {"key": "unrate"}, 12])
    def test_non_sequence_snapshot(self, snapshot) -> None:
        items, rejected = parse_indicators(snapshot)
        assert items == []
        assert len(rejected) == 1
