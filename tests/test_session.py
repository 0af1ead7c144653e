import sys
import threading

import pytest

from data import MONTH_LABELS, WELCOME_MESSAGE, Thresholds
from farm_model import InvalidInputError
from session import SessionController


@pytest.fixture
def session():
    return SessionController()


def test_initial_state(session):
    snap = session.get_snapshot()
    assert snap.parameters.milk_yield_liters_per_lactation == 8750
    assert snap.parameters.nitrogen_rate_kg_per_ha_per_year == 180
    assert snap.parameters.nitrogen_efficiency_percent == 17.6
    assert snap.feed_cost_per_kg == 0.35
    assert [(m.kind, m.text) for m in snap.messages] == [("info", WELCOME_MESSAGE)]
    assert [p.label for p in snap.history] == ["Jan", "Feb", "Mar", "Apr"]
    assert [s.category for s in snap.suggestions] == ["cost"]
    assert snap.pending_query == ""


def test_feed_change_runs_full_update(session):
    updated = session.set_concentrate_feed(10)
    assert updated is not None
    assert updated.milk_yield_liters_per_lactation == 8942
    assert updated.cost_per_litre == 0.39

    snap = session.get_snapshot()
    assert snap.parameters == updated
    alert = snap.messages[-1]
    assert alert.kind == "alert"
    assert alert.text.startswith("Concentrate feed changed to 10 kg/day")
    assert "emissions 1.39 -> 1.49 kg CO2e/day (+0.10)" in alert.text
    assert "milk yield 8750 -> 8942 L (+192)" in alert.text
    assert "protein efficiency 14.3 -> 14.1% (-0.2)" in alert.text

    assert [p.label for p in snap.history] == ["Feb", "Mar", "Apr", "May"]
    last = snap.history[-1]
    assert (last.milk_yield, last.target, last.cost) == (8942, 9000, 0.39)


def test_change_keeps_untouched_controls(session):
    session.set_nitrogen_rate(400)
    updated = session.set_feed_cost_per_kg(0.20)
    assert updated.nitrogen_rate_kg_per_ha_per_year == 400
    assert updated.nitrogen_efficiency_percent == 13.2
    assert session.feed_cost_per_kg == 0.20


def test_suggestions_recomputed(session):
    session.set_feed_cost_per_kg(0.20)
    assert session.get_snapshot().suggestions == ()

    session.set_concentrate_feed(12)
    categories = [s.category for s in session.get_snapshot().suggestions]
    assert categories == ["emission"]


@pytest.mark.parametrize(
    "setter, value",
    [
        ("set_feed_cost_per_kg", -1),
        ("set_feed_cost_per_kg", 0),
        ("set_concentrate_feed", 25),
        ("set_concentrate_feed", float("nan")),
        ("set_nitrogen_rate", 600),
        ("set_nitrogen_rate", "lots"),
    ],
)
def test_invalid_input_leaves_state_untouched(session, setter, value):
    before = session.get_snapshot()
    assert getattr(session, setter)(value) is None
    assert session.get_snapshot() == before


def test_unknown_control_rejected(session):
    before = session.get_snapshot()
    assert session.set_control("stocking_rate", 2) is None
    assert session.get_snapshot() == before


def test_history_labels_cycle_through_months(session):
    for i in range(9):
        session.set_nitrogen_rate(100 + i)
    history = session.get_snapshot().history
    assert len(history) == 4
    assert [p.label for p in history] == ["Oct", "Nov", "Dec", MONTH_LABELS[0]]


def test_query_appends_query_then_response(session):
    session.set_pending_query("How are my emissions?")
    session.submit_query()
    snap = session.get_snapshot()
    assert [m.kind for m in snap.messages[-2:]] == ["query", "response"]
    assert snap.messages[-2].text == "How are my emissions?"
    assert "1.39" in snap.messages[-1].text
    assert snap.pending_query == ""


def test_explicit_query_text(session):
    session.submit_query("yield?")
    assert session.get_snapshot().messages[-1].text.startswith("Projected milk yield")


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_query_is_ignored(session, text):
    session.set_pending_query(text)
    before = session.get_snapshot()
    session.submit_query()
    assert session.get_snapshot() == before


def test_query_does_not_touch_history(session):
    session.submit_query("cost")
    assert len(session.get_snapshot().history) == 4


def test_seeded_controls_are_validated():
    with pytest.raises(InvalidInputError):
        SessionController(controls={"feed_cost": -1})
    with pytest.raises(InvalidInputError):
        SessionController(controls={"nitrogen_rate": 600})


def test_custom_seed_and_thresholds():
    session = SessionController(
        thresholds=Thresholds(cost_threshold=0.40),
        controls={"nitrogen_rate": 250},
    )
    assert session.parameters.nitrogen_efficiency_percent == 16.2
    assert session.get_snapshot().suggestions == ()


def test_concurrent_changes_are_applied_whole():
    old_interval = sys.getswitchinterval()
    sys.setswitchinterval(1e-6)
    try:
        for _ in range(200):
            session = SessionController()
            barrier = threading.Barrier(2)

            def change(setter, value):
                barrier.wait()
                setter(value)

            threads = [
                threading.Thread(target=change, args=(session.set_concentrate_feed, 10)),
                threading.Thread(target=change, args=(session.set_nitrogen_rate, 400)),
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

            snap = session.get_snapshot()
            assert snap.parameters.concentrate_feed_kg_per_day == 10
            assert snap.parameters.nitrogen_rate_kg_per_ha_per_year == 400
            assert [m.kind for m in snap.messages] == ["info", "alert", "alert"]
            assert [p.label for p in snap.history][-2:] == ["May", "Jun"]
    finally:
        sys.setswitchinterval(old_interval)
