"""
Unit tests for footprint/recommendations.py
"""
import pytest

from footprint.calculations import ActivityRow, CategoryAggregate, aggregate
from footprint.constants import (
    MSG_ELECTRICITY,
    MSG_FUEL,
    MSG_HIGH,
    MSG_LOW,
    MSG_MODERATE,
    MSG_SEVERE,
    MSG_WASTE,
)
from footprint.recommendations import follow_up_messages, magnitude_message, suggest


def _aggs(**emissions):
    return {name: CategoryAggregate(unit="kg", emission=value) for name, value in emissions.items()}


# ─────────────────────────────────────────────────────────────────────────────
# 1. Magnitude tier
# ─────────────────────────────────────────────────────────────────────────────

class TestMagnitudeTier:

    @pytest.mark.parametrize("total, expected", [
        (600_000, MSG_SEVERE),
        (500_000.01, MSG_SEVERE),
        (500_000, MSG_HIGH),
        (100_000.5, MSG_HIGH),
        (100_000, MSG_MODERATE),
        (20_000.01, MSG_MODERATE),
        (20_000, MSG_LOW),
        (0, MSG_LOW),
    ])
    def test_thresholds(self, total, expected):
        assert magnitude_message(total) == expected

    def test_scenario_c_only_severe_tier(self):
        result = suggest(600_000, {})
        assert result == [MSG_SEVERE]


# ─────────────────────────────────────────────────────────────────────────────
# 2. Top contributor
# ─────────────────────────────────────────────────────────────────────────────

class TestTopContributor:

    def test_empty_aggregates_only_magnitude(self):
        assert suggest(0, {}) == [MSG_LOW]

    def test_scenario_b_blank_row(self):
        report = aggregate([ActivityRow("", 100, "kWh")])
        assert suggest(report.total_emission, report.aggregates) == [MSG_LOW]

    def test_names_largest_category_with_rounded_emission(self, scenario_a_rows):
        report = aggregate(scenario_a_rows)
        result = suggest(report.total_emission, report.aggregates)
        assert result[0] == MSG_LOW
        assert result[1] == (
            "Top contributor: Diesel (134 kg CO₂e). Consider targeted measures for Diesel."
        )
        assert result[2:] == [MSG_FUEL]

    def test_emission_rounds_half_up(self):
        result = suggest(10.5, _aggs(Rainwater=10.5))
        assert "(11 kg CO₂e)" in result[1]

    def test_tie_picks_first_seen_category(self):
        result = suggest(20, _aggs(Boilers=10.0, Chillers=10.0))
        assert result[1].startswith("Top contributor: Boilers ")

    def test_tie_order_from_rows(self):
        rows = [ActivityRow("Steam Line B", 5, "kg"), ActivityRow("Steam Line A", 5, "kg")]
        report = aggregate(rows)
        result = suggest(report.total_emission, report.aggregates)
        assert result[1].startswith("Top contributor: Steam Line B ")


# ─────────────────────────────────────────────────────────────────────────────
# 3. Keyword follow-ups
# ─────────────────────────────────────────────────────────────────────────────

class TestFollowUps:

    def test_electricity_follow_up(self):
        result = suggest(100, _aggs(**{"Electricity (Dyehouse)": 100.0}))
        assert result[-1] == MSG_ELECTRICITY
        assert len(result) == 3

    def test_fuel_follow_up_for_diesel(self):
        result = suggest(100, _aggs(**{"Diesel Generator": 100.0}))
        assert result[-1] == MSG_FUEL

    def test_fuel_follow_up_for_fuel_keyword(self):
        assert follow_up_messages("Boiler FUEL oil") == [MSG_FUEL]

    def test_waste_follow_up(self):
        assert follow_up_messages("TextileWaste") == [MSG_WASTE]

    def test_no_follow_up(self):
        result = suggest(100, _aggs(Rainwater=100.0))
        assert len(result) == 2
        assert result[1].startswith("Top contributor: Rainwater")

    def test_multiple_follow_ups_fire_in_fixed_order(self):
        assert follow_up_messages("Waste-fuel electric kiln") == [MSG_ELECTRICITY, MSG_FUEL, MSG_WASTE]

    def test_only_top_category_is_inspected(self):
        result = suggest(300, _aggs(Rainwater=200.0, Electricity=100.0))
        assert MSG_ELECTRICITY not in result

    def test_tier_and_follow_ups_combined(self):
        result = suggest(150_000, _aggs(Electricity=150_000.0))
        assert result == [
            MSG_HIGH,
            "Top contributor: Electricity (150000 kg CO₂e). Consider targeted measures for Electricity.",
            MSG_ELECTRICITY,
        ]

    def test_always_returns_at_least_one_message(self):
        assert len(suggest(-5, {})) == 1
