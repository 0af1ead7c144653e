"""
Parameter model: derives farm indicators from the three control inputs.

Every indicator is a linear first-order sensitivity around a fixed baseline
(see data.py). The functions here are pure; the same inputs always give the
same FarmParameters.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from data import (
    BASE_EMISSIONS,
    BASE_FEED_KG,
    BASE_MILK_YIELD,
    BASE_NITROGEN_EFFICIENCY,
    BASE_NITROGEN_RATE,
    BASE_PROTEIN_EFFICIENCY,
    DAYS_PER_YEAR,
    DOMAINS,
    THRESHOLDS,
    Thresholds,
)


class InvalidInputError(ValueError):
    """A control value is non-numeric, outside its domain, or not positive."""

    def __init__(self, control: str, value: object, reason: str) -> None:
        super().__init__(f"{control}={value!r}: {reason}")
        self.control = control
        self.value = value
        self.reason = reason


class DegenerateComputationError(InvalidInputError):
    """The feed value produced a milk yield <= 0, so cost per litre is undefined."""


@dataclass(frozen=True)
class FarmParameters:
    concentrate_feed_kg_per_day: float
    nitrogen_rate_kg_per_ha_per_year: float
    emissions_kg_co2e_per_day: float
    milk_yield_liters_per_lactation: int
    cost_per_litre: float
    protein_efficiency_percent: float
    nitrogen_efficiency_percent: float


def _round_half_up(value: float, ndigits: int = 0) -> float:
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def round2(value: float) -> float:
    return _round_half_up(value, 2)


def round1(value: float) -> float:
    return _round_half_up(value, 1)


def emissions(feed: float) -> float:
    """Daily emissions (kg CO2e/day) for a concentrate feed rate (kg/day)."""
    return round2(BASE_EMISSIONS + 0.05 * (feed - BASE_FEED_KG))


def milk_yield(feed: float) -> int:
    """Milk yield (litres per lactation) for a concentrate feed rate."""
    return int(_round_half_up(BASE_MILK_YIELD + 100 * (feed - BASE_FEED_KG)))


def cost_per_litre(
    feed: float,
    yield_litres: float,
    feed_cost_per_kg: float,
    thresholds: Thresholds = THRESHOLDS,
) -> float:
    """
    Cost per litre of milk.

    Parameters
    ----------
    feed : float
        Concentrate feed rate (kg/day).
    yield_litres : float
        Milk yield per lactation, from milk_yield().
    feed_cost_per_kg : float
        Unit cost of concentrate feed.
    thresholds : Thresholds, optional
        Supplies the fixed base cost per litre.

    Returns
    -------
    float
        Cost per litre rounded to 2 decimals.

    Raises
    ------
    DegenerateComputationError
        If yield_litres <= 0.
    """
    if yield_litres <= 0:
        raise DegenerateComputationError(
            "concentrate_feed", feed, f"derived milk yield {yield_litres} is not positive"
        )
    feed_cost_per_year = feed * feed_cost_per_kg * DAYS_PER_YEAR
    return round2(thresholds.base_cost + feed_cost_per_year / yield_litres)


def protein_efficiency(feed: float) -> float:
    return round1(BASE_PROTEIN_EFFICIENCY - 0.1 * (feed - BASE_FEED_KG))


def nitrogen_efficiency(nitrogen_rate: float) -> float:
    return round1(BASE_NITROGEN_EFFICIENCY - 0.02 * (nitrogen_rate - BASE_NITROGEN_RATE))


def validate_control(control: str, value: object) -> float:
    """
    Check a raw control value and return it as a float.

    Feed and nitrogen rate must lie inside DOMAINS; feed cost must be
    strictly positive. Booleans and non-finite numbers are rejected.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(control, value, "not a number")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidInputError(control, value, "not a finite number")

    if control == "feed_cost":
        if number <= 0:
            raise InvalidInputError(control, value, "must be strictly positive")
        return number

    if control not in DOMAINS:
        raise InvalidInputError(control, value, "unknown control")
    lo, hi = DOMAINS[control]
    if not (lo <= number <= hi):
        raise InvalidInputError(control, value, f"outside [{lo:g}, {hi:g}]")
    return number


def derive_parameters(
    feed: float,
    nitrogen_rate: float,
    feed_cost_per_kg: float,
    thresholds: Thresholds = THRESHOLDS,
) -> FarmParameters:
    """Compute a full FarmParameters snapshot from the three control inputs."""
    yield_litres = milk_yield(feed)
    return FarmParameters(
        concentrate_feed_kg_per_day=float(feed),
        nitrogen_rate_kg_per_ha_per_year=float(nitrogen_rate),
        emissions_kg_co2e_per_day=emissions(feed),
        milk_yield_liters_per_lactation=yield_litres,
        cost_per_litre=cost_per_litre(feed, yield_litres, feed_cost_per_kg, thresholds),
        protein_efficiency_percent=protein_efficiency(feed),
        nitrogen_efficiency_percent=nitrogen_efficiency(nitrogen_rate),
    )
