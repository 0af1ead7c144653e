"""
Scenario sweep over the control inputs.

This module evaluates the parameter model and the suggestion rules on a
grid of concentrate feed x nitrogen rate values at a fixed feed cost, giving
one row per scenario with:
- the derived indicators
- the categories of the advisories that fire

The output CSV is useful for reviewing where each advisory threshold is crossed.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from data import DOMAINS, SEED_CONTROLS
from farm_model import derive_parameters
from rules_engine import generate_suggestions


def generate_rows(
    feed_steps: int = 21,
    nitrogen_steps: int = 11,
    feed_cost_per_kg: float = SEED_CONTROLS["feed_cost"],
) -> list[dict[str, Any]]:
    """
    Generate one row per (feed, nitrogen rate) scenario.

    Parameters
    ----------
    feed_steps : int, optional
        Number of evenly spaced feed values across its domain, by default 21.
    nitrogen_steps : int, optional
        Number of evenly spaced nitrogen rates across its domain, by default 11.
    feed_cost_per_kg : float, optional
        Feed unit cost used for every scenario.

    Returns
    -------
    list[dict[str, Any]]
        List of row dictionaries containing inputs, indicators and advisories.
    """
    feeds = np.linspace(*DOMAINS["concentrate_feed"], num=feed_steps)
    rates = np.linspace(*DOMAINS["nitrogen_rate"], num=nitrogen_steps)
    rows: list[dict[str, Any]] = []

    for feed in feeds:
        for rate in rates:
            params = derive_parameters(float(feed), float(rate), feed_cost_per_kg)
            suggestions = generate_suggestions(params)
            rows.append({
                "concentrate_feed": round(float(feed), 2),
                "nitrogen_rate": round(float(rate), 1),
                "feed_cost_per_kg": feed_cost_per_kg,

                "emissions": params.emissions_kg_co2e_per_day,
                "milk_yield": params.milk_yield_liters_per_lactation,
                "cost_per_litre": params.cost_per_litre,
                "protein_efficiency": params.protein_efficiency_percent,
                "nitrogen_efficiency": params.nitrogen_efficiency_percent,

                "advisories": ",".join(s.category for s in suggestions),
                "high_priority_count": sum(1 for s in suggestions if s.priority == "high"),
            })

    return rows


def sweep_frame(**kwargs: Any) -> pd.DataFrame:
    return pd.DataFrame(generate_rows(**kwargs))


def main() -> None:
    """
    Run the default sweep and write it to scenario_sweep.csv.
    """
    df = sweep_frame()
    df.to_csv("scenario_sweep.csv", index=False, encoding="utf-8")
    print("Saved sweep: scenario_sweep.csv rows=", len(df))


if __name__ == "__main__":
    main()
