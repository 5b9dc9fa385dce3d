"""Tests for the macro diagnostic aggregator."""

from __future__ import annotations

import pytest

from macro_bias.indicators.diagnostic import dedupe_items, diagnose, label_key
from macro_bias.models import IndicatorPosture, IndicatorTrend, Regime


def _row(key: str, value, posture: str = "Neutral", weight: float = 1.0, label=None, **extra):
    row = {"key": key, "label": label or key, "value": value, "posture": posture, "weight": weight}
    row.update(extra)
    return row


class TestLabels:
    def test_label_key(self) -> None:
        assert label_key("  Core  PCE ") == label_key("core pce")

    def test_no_duplicate_labels(self) -> None:
        diag = diagnose(
            [
                _row("a1", 1.0, label="Inflación PCE"),
                _row("a2", 2.0, label="inflación  pce"),
                _row("a3", 3.0, label="Nóminas"),
            ]
        )
        labels = [label_key(i.label) for i in diag.items]
        assert len(labels) == len(set(labels)) == 2

    def test_label_collision_prefers_reading(self) -> None:
        diag = diagnose([_row("a1", None, label="PMI"), _row("a2", 51.0, label="PMI")])
        assert len(diag.items) == 1
        assert diag.items[0].original_key == "a2"

    def test_label_collision_prefers_weight(self) -> None:
        diag = diagnose([_row("a1", 1.0, weight=0.1, label="PMI"), _row("a2", 1.0, weight=0.4, label="PMI")])
        assert diag.items[0].original_key == "a2"

    def test_label_collision_keeps_first_on_tie(self) -> None:
        diag = diagnose([_row("a1", 1.0, label="PMI"), _row("a2", 1.0, label="PMI")])
        assert diag.items[0].original_key == "a1"

    def test_gdp_aliases_stay_distinct(self) -> None:
        diag = diagnose([{"key": "gdp_yoy", "value": 2.0}, {"key": "gdp_qoq", "value": 3.1}])
        assert sorted(i.original_key for i in diag.items) == ["gdp_qoq", "gdp_yoy"]
        assert {i.key for i in diag.items} == {"GDPC1"}


class TestDedupe:
    def test_same_provider_key_last_wins(self, make_item) -> None:
        first = make_item("UNRATE", value=4.1, original_key="unrate", label="Paro")
        second = make_item("UNRATE", value=4.3, original_key="unrate", label="Paro")
        assert dedupe_items([first, second]) == [second]


class TestOrdering:
    def test_category_then_weight_then_label(self) -> None:
        diag = diagnose(
            [
                {"key": "pce_yoy", "label": "PCE", "value": 2.7},
                {"key": "unrate", "label": "Paro", "value": 4.2},
                {"key": "payems_delta", "label": "Nóminas", "value": 150},
                {"key": "t10y2y", "label": "Curva", "value": 0.5},
                {"key": "mystery", "label": "Otra cosa", "value": 1.0},
            ]
        )
        assert [i.key for i in diag.items] == ["T10Y2Y", "PAYEMS", "UNRATE", "PCEPI", "MYSTERY"]


class TestRegime:
    @pytest.mark.parametrize(
        "postures, expected",
        [
            (["Dovish", "Neutral"], Regime.RISK_ON),       # score  0.5 == thr
            (["Hawkish", "Neutral"], Regime.RISK_OFF),     # score -0.5 == -thr
            (["Dovish", "Hawkish"], Regime.MIXED),         # score 0
            (["Dovish", "Dovish"], Regime.RISK_ON),
            (["Neutral", "Neutral"], Regime.MIXED),
        ],
    )
    def test_boundaries_inclusive(self, postures, expected) -> None:
        rows = [_row(f"x{i}", 1.0, p, label=f"X{i}") for i, p in enumerate(postures)]
        diag = diagnose(rows, threshold=0.5)
        assert diag.regime is expected
        assert diag.threshold == 0.5

    def test_just_inside_mixed(self) -> None:
        rows = [_row("x0", 1.0, "Dovish", weight=0.49, label="A"), _row("x1", 1.0, "Neutral", weight=0.51, label="B")]
        assert diagnose(rows, threshold=0.5).regime is Regime.MIXED

    def test_zero_weight_is_mixed(self) -> None:
        rows = [_row("x0", 1.0, "Dovish", weight=0.0, label="A"), _row("x1", 1.0, "Dovish", weight=0.0, label="B")]
        diag = diagnose(rows)
        assert diag.score == 0.0
        assert diag.regime is Regime.MIXED

    def test_empty_snapshot(self) -> None:
        diag = diagnose([])
        assert diag.items == ()
        assert diag.regime is Regime.MIXED
        assert diag.counts.total == 0

    def test_missing_values_do_not_count(self) -> None:
        rows = [_row("x0", None, "Hawkish", label="A"), _row("x1", 1.0, "Dovish", label="B")]
        diag = diagnose(rows, threshold=0.3)
        assert diag.score == pytest.approx(1.0)
        assert diag.regime is Regime.RISK_ON

    def test_all_dovish_snapshot(self, risk_on_rows) -> None:
        diag = diagnose(risk_on_rows)
        assert all(i.posture is IndicatorPosture.DOVISH for i in diag.items)
        assert diag.regime is Regime.RISK_ON


class TestMetadata:
    def test_counts_and_last_updated(self) -> None:
        diag = diagnose(
            [
                {"key": "unrate", "label": "Paro", "value": 4.0, "value_previous": 4.3, "date": "2025-09-05"},
                {"key": "pce_yoy", "label": "PCE", "value": 3.0, "value_previous": 2.5, "date": "2025-08-31"},
                {"key": "icsa", "label": "Solicitudes", "value": None, "date": "2025-10-02"},
                None,
            ]
        )
        assert diag.counts.total == 3
        assert diag.counts.with_value == 2
        assert diag.counts.nulls == 1
        assert diag.last_updated == "2025-10-02"
        assert diag.improving == 1
        assert diag.deteriorating == 1
        assert {i.trend for i in diag.items if i.has_value} == {IndicatorTrend.IMPROVING, IndicatorTrend.DETERIORATING}

    def test_currency_scores(self, risk_on_rows) -> None:
        rows = risk_on_rows + [_row("eu_hicp_yoy", 3.5, "Hawkish", weight=0.1, label="HICP zona euro")]
        diag = diagnose(rows)
        assert diag.currency_scores["EUR"] == pytest.approx(0.1)
        assert diag.currency_scores["USD"] < 0
        assert diagnose([]).currency_scores == {}
