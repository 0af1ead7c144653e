"""
Session controller: owns the current indicators, message log, trend history
and suggestions, and applies control and query events to them.

Each control event runs to completion in a fixed order: recompute the
indicators, append an alert to the log, append a history point, recompute
the suggestions. A rejected event leaves every piece of state untouched.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from chat_responder import respond
from data import (
    CONTROL_LABELS,
    MONTH_LABELS,
    SEED_CONTROLS,
    SEED_HISTORY,
    THRESHOLDS,
    WELCOME_MESSAGE,
    Thresholds,
)
from farm_model import FarmParameters, InvalidInputError, derive_parameters, validate_control
from history import ChartPoint, HistoryBuffer
from logging_config import get_logger
from rules_engine import Suggestion, generate_suggestions

logger = get_logger(__name__)

CONTROL_UNITS = {
    "concentrate_feed": "kg/day",
    "nitrogen_rate": "kg N/ha/yr",
    "feed_cost": "per kg",
}

# (attribute, label, unit, decimals); decimals=0 means integer formatting
INDICATOR_FORMATS = [
    ("emissions_kg_co2e_per_day", "emissions", " kg CO2e/day", 2),
    ("milk_yield_liters_per_lactation", "milk yield", " L", 0),
    ("cost_per_litre", "cost per litre", "", 2),
    ("protein_efficiency_percent", "protein efficiency", "%", 1),
    ("nitrogen_efficiency_percent", "nitrogen efficiency", "%", 1),
]


@dataclass(frozen=True)
class LogEntry:
    kind: str
    text: str


@dataclass(frozen=True)
class SessionSnapshot:
    parameters: FarmParameters
    feed_cost_per_kg: float
    messages: Tuple[LogEntry, ...]
    suggestions: Tuple[Suggestion, ...]
    history: Tuple[ChartPoint, ...]
    pending_query: str


def describe_change(
    control: str,
    value: float,
    old: FarmParameters,
    new: FarmParameters,
) -> str:
    """Build the alert text listing old -> new and the delta for every indicator."""
    parts: List[str] = []
    for attr, label, unit, decimals in INDICATOR_FORMATS:
        before = getattr(old, attr)
        after = getattr(new, attr)
        if decimals == 0:
            parts.append(f"{label} {before} -> {after}{unit} ({after - before:+d})")
        else:
            parts.append(
                f"{label} {before:.{decimals}f} -> {after:.{decimals}f}{unit} "
                f"({after - before:+.{decimals}f})"
            )
    header = f"{CONTROL_LABELS[control]} changed to {value:g} {CONTROL_UNITS[control]}"
    return f"{header}: " + "; ".join(parts)


class SessionController:
    """
    Single-session state machine; every event is processed synchronously.

    Events and snapshots are serialized on one lock, so callers on several
    threads (e.g. a threaded web server) still see each event applied whole.
    """

    def __init__(
        self,
        thresholds: Thresholds = THRESHOLDS,
        controls: Optional[Mapping[str, float]] = None,
        history: Optional[Iterable[ChartPoint]] = None,
    ) -> None:
        """
        Raises
        ------
        InvalidInputError
            If a seeded control value is outside its domain.
        """
        self.thresholds = thresholds
        self._lock = threading.Lock()
        seed = dict(SEED_CONTROLS)
        if controls:
            seed.update(controls)
        self._controls: Dict[str, float] = {
            name: validate_control(name, value) for name, value in seed.items()
        }
        self._parameters = self._derive(self._controls)

        if history is None:
            history = [ChartPoint(**row) for row in SEED_HISTORY]
        self._history = HistoryBuffer(history)
        self._next_label = len(self._history)

        self._messages: List[LogEntry] = [LogEntry("info", WELCOME_MESSAGE)]
        self._suggestions: List[Suggestion] = generate_suggestions(self._parameters, thresholds)
        self.pending_query = ""

    def _derive(self, controls: Mapping[str, float]) -> FarmParameters:
        return derive_parameters(
            controls["concentrate_feed"],
            controls["nitrogen_rate"],
            controls["feed_cost"],
            self.thresholds,
        )

    @property
    def parameters(self) -> FarmParameters:
        return self._parameters

    @property
    def feed_cost_per_kg(self) -> float:
        return self._controls["feed_cost"]

    def set_concentrate_feed(self, value: object) -> Optional[FarmParameters]:
        return self._apply_control("concentrate_feed", value)

    def set_nitrogen_rate(self, value: object) -> Optional[FarmParameters]:
        return self._apply_control("nitrogen_rate", value)

    def set_feed_cost_per_kg(self, value: object) -> Optional[FarmParameters]:
        return self._apply_control("feed_cost", value)

    def set_control(self, control: str, value: object) -> Optional[FarmParameters]:
        """Dispatch by control name; unknown names are rejected like bad values."""
        if control not in CONTROL_LABELS:
            logger.warning("Rejected change to unknown control %r", control)
            return None
        return self._apply_control(control, value)

    def _apply_control(self, control: str, value: object) -> Optional[FarmParameters]:
        with self._lock:
            try:
                number = validate_control(control, value)
                controls = dict(self._controls)
                controls[control] = number
                updated = self._derive(controls)
            except InvalidInputError as exc:
                logger.warning("Rejected %s change to %r: %s", control, value, exc.reason)
                return None

            previous = self._parameters
            self._controls = controls
            self._parameters = updated
            self._messages.append(
                LogEntry("alert", describe_change(control, number, previous, updated))
            )
            self._history.append(self._next_point(updated))
            self._suggestions = generate_suggestions(updated, self.thresholds)

        logger.info(
            "%s set to %s; %d suggestion(s) active",
            control, number, len(self._suggestions),
        )
        return updated

    def _next_point(self, params: FarmParameters) -> ChartPoint:
        label = MONTH_LABELS[self._next_label % len(MONTH_LABELS)]
        self._next_label += 1
        return ChartPoint(
            label=label,
            milk_yield=params.milk_yield_liters_per_lactation,
            target=self.thresholds.target_yield,
            cost=params.cost_per_litre,
        )

    def set_pending_query(self, text: str) -> None:
        with self._lock:
            self.pending_query = text

    def submit_query(self, text: Optional[str] = None) -> None:
        """
        Answer a query and append it and the response to the log.

        Uses the pending query text when none is given. Blank queries are
        ignored.
        """
        with self._lock:
            query = self.pending_query if text is None else text
            if not query or not query.strip():
                return
            answer = respond(query, self._parameters, self.thresholds)
            self._messages.append(LogEntry("query", query))
            self._messages.append(LogEntry("response", answer))
            self.pending_query = ""
        logger.debug("Answered query %r", query)

    def get_snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot(
                parameters=self._parameters,
                feed_cost_per_kg=self._controls["feed_cost"],
                messages=tuple(self._messages),
                suggestions=tuple(self._suggestions),
                history=self._history.points(),
                pending_query=self.pending_query,
            )
