"""
Static reference data for the dairy decision-support model.

This module contains:
- Baseline reference points the indicator formulas vary around
- DOMAINS: valid ranges for each control input
- Thresholds / THRESHOLDS: advisory thresholds and the target yield
- Chart defaults (y-axis domains, canvas size, month labels)
- Seed values used when a new session starts
"""

from __future__ import annotations

from dataclasses import dataclass

# Baselines (first-order sensitivity model reference point)
BASE_FEED_KG = 8.08
BASE_NITROGEN_RATE = 180.0
BASE_EMISSIONS = 1.39
BASE_MILK_YIELD = 8750
BASE_PROTEIN_EFFICIENCY = 14.3
BASE_NITROGEN_EFFICIENCY = 17.6

DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class Thresholds:
    """Advisory thresholds, fixed for the life of the process."""

    base_cost: float = 0.25
    emission_threshold: float = 1.5
    cost_threshold: float = 0.35
    target_yield: int = 9000
    nitrogen_efficiency_floor: float = 15.0
    protein_efficiency_floor: float = 12.0


THRESHOLDS = Thresholds()

# Control input domains (inclusive). Feed cost has no upper bound but must be > 0.
DOMAINS = {
    "concentrate_feed": (0.0, 20.0),
    "nitrogen_rate": (0.0, 500.0),
}

CONTROL_LABELS = {
    "concentrate_feed": "Concentrate feed",
    "nitrogen_rate": "Nitrogen rate",
    "feed_cost": "Feed cost",
}

# Chart y-domains: (min, max)
MILK_YIELD_DOMAIN = (8000.0, 9500.0)
COST_DOMAIN = (0.25, 0.50)

HISTORY_CAPACITY = 4

MONTH_LABELS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

# Session seed
SEED_CONTROLS = {
    "concentrate_feed": BASE_FEED_KG,
    "nitrogen_rate": BASE_NITROGEN_RATE,
    "feed_cost": 0.35,
}

SEED_HISTORY = [
    {"label": "Jan", "milk_yield": 8600, "target": 9000, "cost": 0.38},
    {"label": "Feb", "milk_yield": 8680, "target": 9000, "cost": 0.37},
    {"label": "Mar", "milk_yield": 8720, "target": 9000, "cost": 0.37},
    {"label": "Apr", "milk_yield": 8750, "target": 9000, "cost": 0.37},
]

WELCOME_MESSAGE = (
    "Welcome to the dairy emissions and cost advisor. Adjust concentrate feed, "
    "nitrogen rate or feed cost to see how your indicators respond, or ask about "
    "emissions, yield or cost."
)

__all__ = [
    "BASE_FEED_KG",
    "BASE_NITROGEN_RATE",
    "BASE_EMISSIONS",
    "BASE_MILK_YIELD",
    "BASE_PROTEIN_EFFICIENCY",
    "BASE_NITROGEN_EFFICIENCY",
    "DAYS_PER_YEAR",
    "Thresholds",
    "THRESHOLDS",
    "DOMAINS",
    "CONTROL_LABELS",
    "MILK_YIELD_DOMAIN",
    "COST_DOMAIN",
    "HISTORY_CAPACITY",
    "MONTH_LABELS",
    "SEED_CONTROLS",
    "SEED_HISTORY",
    "WELCOME_MESSAGE",
]
