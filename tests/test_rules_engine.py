import pytest

from data import Thresholds
from farm_model import FarmParameters, derive_parameters
from rules_engine import feed_reduction_scenario, generate_suggestions


def make_params(**overrides):
    values = dict(
        concentrate_feed_kg_per_day=8.08,
        nitrogen_rate_kg_per_ha_per_year=180.0,
        emissions_kg_co2e_per_day=1.39,
        milk_yield_liters_per_lactation=8750,
        cost_per_litre=0.30,
        protein_efficiency_percent=14.3,
        nitrogen_efficiency_percent=17.6,
    )
    values.update(overrides)
    return FarmParameters(**values)


def test_no_rule_fires_at_thresholds():
    params = make_params(
        emissions_kg_co2e_per_day=1.5,
        nitrogen_efficiency_percent=15.0,
        protein_efficiency_percent=12.0,
        cost_per_litre=0.35,
    )
    assert generate_suggestions(params) == []


def test_all_rules_fire_in_fixed_order():
    params = make_params(
        concentrate_feed_kg_per_day=12.0,
        emissions_kg_co2e_per_day=1.59,
        nitrogen_efficiency_percent=13.2,
        protein_efficiency_percent=11.0,
        cost_per_litre=0.42,
    )
    suggestions = generate_suggestions(params)
    assert [s.category for s in suggestions] == ["emission", "nitrogen", "protein", "cost"]
    assert [s.priority for s in suggestions] == ["high", "medium", "medium", "high"]


def test_emission_suggestion_quantifies_feed_cut():
    params = derive_parameters(12, 180, 0.35)
    emission = generate_suggestions(params)[0]
    assert emission.category == "emission"
    assert "10.80 kg/day" in emission.message
    assert emission.impact.startswith("Approximately 3.8%")


def test_feed_reduction_scenario():
    reduced, pct = feed_reduction_scenario(12.0, 1.59)
    assert reduced == 10.8
    assert pct == 3.8


def test_cost_suggestion_embeds_cost_and_threshold():
    suggestions = generate_suggestions(make_params(cost_per_litre=0.42))
    assert len(suggestions) == 1
    cost = suggestions[0]
    assert "0.42" in cost.message
    assert "0.35" in cost.message
    assert cost.impact == "Potential saving of 0.07 per litre"


def test_custom_thresholds():
    strict = Thresholds(cost_threshold=0.25)
    suggestions = generate_suggestions(make_params(cost_per_litre=0.30), strict)
    assert [s.category for s in suggestions] == ["cost"]


@pytest.mark.parametrize(
    "overrides, category",
    [
        ({"nitrogen_efficiency_percent": 14.9}, "nitrogen"),
        ({"protein_efficiency_percent": 11.9}, "protein"),
    ],
)
def test_fixed_text_rules(overrides, category):
    suggestions = generate_suggestions(make_params(**overrides))
    assert [s.category for s in suggestions] == [category]
    assert suggestions[0].priority == "medium"
