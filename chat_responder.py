"""Keyword responder for free-text questions about the current indicators."""

from __future__ import annotations

from typing import Callable, List, Tuple

from data import THRESHOLDS, Thresholds
from farm_model import FarmParameters

FALLBACK_RESPONSE = (
    "I can help with questions about emissions, milk yield and cost per litre. "
    "Try asking about one of those."
)


def _emission_answer(params: FarmParameters, thresholds: Thresholds) -> str:
    current = params.emissions_kg_co2e_per_day
    status = "above" if current > thresholds.emission_threshold else "within"
    return (
        f"Current emissions are {current:.2f} kg CO2e per day, {status} the "
        f"{thresholds.emission_threshold:.2f} threshold. Concentrate feed at "
        f"{params.concentrate_feed_kg_per_day:g} kg/day is the main driver."
    )


def _yield_answer(params: FarmParameters, thresholds: Thresholds) -> str:
    current = params.milk_yield_liters_per_lactation
    gap = thresholds.target_yield - current
    if gap > 0:
        position = f"{gap} L below"
    elif gap < 0:
        position = f"{-gap} L above"
    else:
        position = "exactly on"
    return (
        f"Projected milk yield is {current} L per lactation, "
        f"{position} the target of {thresholds.target_yield} L."
    )


def _cost_answer(params: FarmParameters, thresholds: Thresholds) -> str:
    current = params.cost_per_litre
    status = "above" if current > thresholds.cost_threshold else "within"
    return (
        f"Cost per litre is {current:.2f}, {status} the target of "
        f"{thresholds.cost_threshold:.2f}."
    )


# Ordered by priority: first match wins
KEYWORD_ANSWERS: List[Tuple[str, Callable[[FarmParameters, Thresholds], str]]] = [
    ("emission", _emission_answer),
    ("yield", _yield_answer),
    ("cost", _cost_answer),
]


def respond(query: str, params: FarmParameters, thresholds: Thresholds = THRESHOLDS) -> str:
    """
    Answer a free-text query by case-insensitive keyword match.

    The caller rejects blank queries before calling this.
    """
    text = query.lower()
    for keyword, answer in KEYWORD_ANSWERS:
        if keyword in text:
            return answer(params, thresholds)
    return FALLBACK_RESPONSE
