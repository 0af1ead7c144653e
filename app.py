from __future__ import annotations

from dataclasses import asdict
from typing import Any

from flask import Flask, jsonify, request

from chart_projector import CanvasConfig, project_chart, points_outside_domain
from config import AppConfig
from data import CONTROL_LABELS
from logging_config import get_logger, setup_logging
from session import SessionController

app = Flask(__name__)
logger = get_logger(__name__)

SESSION = SessionController()


def _parse_float(form: Any, name: str) -> float:
    raw = form.get(name, "")
    if raw is None or raw == "":
        raise ValueError(f"missing {name}")
    return float(raw)


def _snapshot_payload(session: SessionController) -> dict[str, Any]:
    snap = session.get_snapshot()
    return dict(
        parameters=asdict(snap.parameters),
        feed_cost_per_kg=snap.feed_cost_per_kg,
        messages=[asdict(m) for m in snap.messages],
        suggestions=[asdict(s) for s in snap.suggestions],
        history=[asdict(p) for p in snap.history],
        pending_query=snap.pending_query,
        thresholds=asdict(session.thresholds),
    )


@app.route("/api/snapshot")
def snapshot():
    return jsonify(_snapshot_payload(SESSION))


@app.route("/api/controls/<control>", methods=["POST"])
def set_control(control: str):
    if control not in CONTROL_LABELS:
        return jsonify(ok=False, warning=f"Unknown control: {control}"), 404

    try:
        value = _parse_float(request.form, "value")
    except ValueError:
        return jsonify(ok=False, warning="Value must be a number."), 400

    updated = SESSION.set_control(control, value)
    if updated is None:
        return jsonify(ok=False, warning=f"Value {value:g} is not valid for {control}."), 422

    return jsonify(ok=True, **_snapshot_payload(SESSION))


@app.route("/api/query", methods=["POST"])
def query():
    text = request.form.get("query")
    if text is not None:
        SESSION.set_pending_query(text)
    SESSION.submit_query()
    return jsonify(_snapshot_payload(SESSION))


@app.route("/api/chart")
def chart():
    canvas = CanvasConfig()
    try:
        if "width" in request.args:
            canvas = CanvasConfig(
                width=_parse_float(request.args, "width"),
                height=_parse_float(request.args, "height"),
                padding=_parse_float(request.args, "padding"),
            )
    except ValueError:
        return jsonify(ok=False, warning="Canvas width, height and padding must be numbers."), 400

    points = SESSION.get_snapshot().history
    geometry = project_chart(points, canvas)
    return jsonify(geometry=asdict(geometry), warnings=points_outside_domain(points))


if __name__ == "__main__":
    config = AppConfig.load()
    setup_logging(config.log_level)
    logger.info("Starting dairy advisor (debug=%s)", config.debug)
    app.run(debug=config.debug)
