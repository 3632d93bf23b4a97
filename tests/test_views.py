"""
Unit tests for footprint/views.py
"""
import pytest

from footprint.calculations import ActivityRow, aggregate
from footprint.constants import EMISSIONS_NODE_LABEL
from footprint.views import breakdown_table, build_views, chart_series, kpis, sankey_links


@pytest.fixture
def report():
    return aggregate([
        ActivityRow("Electricity", 100, "kWh"),
        ActivityRow("Transport", 1.111, "km"),
        ActivityRow("Diesel", 50, "L"),
    ])


class TestChartSeries:

    def test_ranked_labels_and_rounded_values(self, report):
        series = chart_series(report)
        assert series["labels"] == ["Diesel", "Electricity", "Transport"]
        assert series["values"] == pytest.approx([134.0, 82.0, 0.17])

    def test_empty_report(self):
        assert chart_series(aggregate([])) == {"labels": [], "values": []}


class TestSankeyLinks:

    def test_nodes_in_first_seen_order_plus_emissions_node(self, report):
        feed = sankey_links(report)
        assert feed["nodes"] == ["Electricity", "Transport", "Diesel", EMISSIONS_NODE_LABEL]
        assert feed["source"] == [0, 1, 2]
        assert feed["target"] == [3, 3, 3]
        assert feed["value"] == [82, 0, 134]

    def test_empty_report_has_only_emissions_node(self):
        feed = sankey_links(aggregate([]))
        assert feed["nodes"] == [EMISSIONS_NODE_LABEL]
        assert feed["value"] == []


class TestBreakdownTable:

    def test_rows_in_first_seen_order(self, report):
        table = breakdown_table(report)
        assert [r["activity"] for r in table] == ["Electricity", "Transport", "Diesel"]
        assert table[1] == {
            "activity": "Transport",
            "quantity": pytest.approx(1.111),
            "unit": "km",
            "emission": pytest.approx(0.17),
        }

    def test_report_itself_stays_unrounded(self, report):
        breakdown_table(report)
        assert report.aggregates["Transport"].emission == pytest.approx(1.111 * 0.15)


class TestKpis:

    def test_top_source(self, report):
        cards = kpis(report)
        assert cards["top_source"] == "Diesel"
        assert cards["top_source_emission"] == 134
        assert cards["total_emission"] == pytest.approx(216.17)
        assert cards["category_count"] == 3

    def test_empty_report(self):
        cards = kpis(aggregate([]))
        assert cards["top_source"] is None
        assert cards["top_source_emission"] is None
        assert cards["category_count"] == 0


def test_build_views_contains_every_view(report):
    views = build_views(report)
    assert set(views) == {"kpis", "chart", "sankey", "table"}
