"""
Rule-based (expert) engine for farm optimization suggestions.

This module contains pure functions to:
- Estimate the emission saving of a 10% concentrate feed reduction
- Check each indicator against its advisory threshold
- Produce the ordered list of suggestions for a FarmParameters snapshot

Rules are evaluated in a fixed order (emission, nitrogen, protein, cost) and
every rule that fires appends one suggestion; the list is never sorted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from data import THRESHOLDS, Thresholds
from farm_model import FarmParameters, emissions, round1, round2


FEED_REDUCTION_FACTOR = 0.9


@dataclass(frozen=True)
class Suggestion:
    category: str
    message: str
    impact: str
    priority: str


def feed_reduction_scenario(feed: float, current_emissions: float) -> Tuple[float, float]:
    """
    Estimate the effect of cutting concentrate feed by 10%.

    Parameters
    ----------
    feed : float
        Current concentrate feed rate (kg/day).
    current_emissions : float
        Current emissions (kg CO2e/day); must be positive.

    Returns
    -------
    tuple
        (reduced_feed, reduction_percent)
    """
    reduced_feed = round2(feed * FEED_REDUCTION_FACTOR)
    hypothetical = emissions(reduced_feed)
    reduction_pct = round1(100 * (current_emissions - hypothetical) / current_emissions)
    return reduced_feed, reduction_pct


def emission_rule(params: FarmParameters, thresholds: Thresholds) -> Optional[Suggestion]:
    current = params.emissions_kg_co2e_per_day
    if not current > thresholds.emission_threshold:
        return None
    reduced_feed, reduction_pct = feed_reduction_scenario(
        params.concentrate_feed_kg_per_day, current
    )
    return Suggestion(
        category="emission",
        message=(
            f"Emissions of {current:.2f} kg CO2e/day exceed the "
            f"{thresholds.emission_threshold:.2f} threshold. Consider reducing "
            f"concentrate feed by 10% to {reduced_feed:.2f} kg/day."
        ),
        impact=f"Approximately {reduction_pct:.1f}% reduction in daily emissions",
        priority="high",
    )


def nitrogen_rule(params: FarmParameters, thresholds: Thresholds) -> Optional[Suggestion]:
    if not params.nitrogen_efficiency_percent < thresholds.nitrogen_efficiency_floor:
        return None
    return Suggestion(
        category="nitrogen",
        message=(
            "Nitrogen use efficiency is low. Split fertiliser applications and "
            "match rates to grass growth to reduce surplus nitrogen."
        ),
        impact="Improved nitrogen efficiency and lower leaching losses",
        priority="medium",
    )


def protein_rule(params: FarmParameters, thresholds: Thresholds) -> Optional[Suggestion]:
    if not params.protein_efficiency_percent < thresholds.protein_efficiency_floor:
        return None
    return Suggestion(
        category="protein",
        message=(
            "Protein efficiency is low. Review the crude protein content of the "
            "ration and consider lower-protein concentrates."
        ),
        impact="Better protein utilisation and reduced nitrogen excretion",
        priority="medium",
    )


def cost_rule(params: FarmParameters, thresholds: Thresholds) -> Optional[Suggestion]:
    cost = params.cost_per_litre
    if not cost > thresholds.cost_threshold:
        return None
    return Suggestion(
        category="cost",
        message=(
            f"Cost per litre ({cost:.2f}) is above the target of "
            f"{thresholds.cost_threshold:.2f}. Review feed purchasing and "
            "concentrate feeding levels."
        ),
        impact=f"Potential saving of {cost - thresholds.cost_threshold:.2f} per litre",
        priority="high",
    )


RULES = (emission_rule, nitrogen_rule, protein_rule, cost_rule)


def generate_suggestions(
    params: FarmParameters,
    thresholds: Thresholds = THRESHOLDS,
) -> List[Suggestion]:
    """
    Evaluate every advisory rule in order and collect the ones that fire.

    Parameters
    ----------
    params : FarmParameters
        Current indicators.
    thresholds : Thresholds, optional
        Advisory thresholds, by default THRESHOLDS.

    Returns
    -------
    list[Suggestion]
        Suggestions in rule order; empty when no rule fires.
    """
    suggestions: List[Suggestion] = []
    for rule in RULES:
        suggestion = rule(params, thresholds)
        if suggestion is not None:
            suggestions.append(suggestion)
    return suggestions
