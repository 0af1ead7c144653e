"""
Chart projection: turns a history of chart points into plot geometry.

The geometry is plain data (coordinates, SVG path strings, markers, labels)
so any rendering layer can draw it. Values outside the fixed y-domains are
projected as-is, not clamped; use points_outside_domain() to flag them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence, Tuple

from data import COST_DOMAIN, MILK_YIELD_DOMAIN
from history import ChartPoint

MARKER_RADIUS = 3
LABEL_OFFSET = 15
LEGEND_OFFSET = 10


@dataclass(frozen=True)
class CanvasConfig:
    width: float = 500
    height: float = 300
    padding: float = 40


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class Series:
    name: str
    points: Tuple[Tuple[float, float], ...]
    path: str
    dashed: bool = False


@dataclass(frozen=True)
class Marker:
    series: str
    x: float
    y: float
    radius: float = MARKER_RADIUS


@dataclass(frozen=True)
class Label:
    text: str
    x: float
    y: float


@dataclass(frozen=True)
class ChartGeometry:
    canvas: CanvasConfig
    x_positions: Tuple[float, ...]
    y_axis: Line
    x_axis: Line
    series: Dict[str, Series] = field(default_factory=dict)
    markers: Tuple[Marker, ...] = ()
    labels: Tuple[Label, ...] = ()
    legend_origin: Tuple[float, float] = (0.0, 0.0)


def x_scale(count: int, canvas: CanvasConfig) -> Callable[[int], float]:
    """Evenly spaced x positions; a single point sits at the left interior edge."""
    x_range = canvas.width - 2 * canvas.padding
    step = x_range / (count - 1) if count > 1 else 0.0

    def scale(index: int) -> float:
        return canvas.padding + index * step

    return scale


def y_scale(domain: Tuple[float, float], canvas: CanvasConfig) -> Callable[[float], float]:
    """Linear map of domain onto the interior height; larger values map higher up."""
    y_min, y_max = domain
    y_range = canvas.height - 2 * canvas.padding

    def scale(value: float) -> float:
        return canvas.height - canvas.padding - ((value - y_min) / (y_max - y_min)) * y_range

    return scale


def _fmt(value: float) -> str:
    # Fixed point, 3 decimals, trailing zeros dropped; never exponent notation
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def line_path(coords: Sequence[Tuple[float, float]]) -> str:
    parts: List[str] = []
    for i, (x, y) in enumerate(coords):
        command = "M" if i == 0 else "L"
        parts.append(f"{command} {_fmt(x)} {_fmt(y)}")
    return " ".join(parts)


def project_chart(points: Sequence[ChartPoint], canvas: CanvasConfig = CanvasConfig()) -> ChartGeometry:
    """
    Project chart points onto a canvas.

    Parameters
    ----------
    points : Sequence[ChartPoint]
        History in display order; must not be empty.
    canvas : CanvasConfig, optional
        Canvas size and padding, by default 500 x 300 with 40 padding.

    Returns
    -------
    ChartGeometry
        Axis lines, the milk_yield / target / cost series, per-point markers
        and x-axis labels.
    """
    if not points:
        raise ValueError("cannot project an empty point sequence")

    sx = x_scale(len(points), canvas)
    sy_yield = y_scale(MILK_YIELD_DOMAIN, canvas)
    sy_cost = y_scale(COST_DOMAIN, canvas)

    xs = tuple(sx(i) for i in range(len(points)))
    yield_coords = tuple((x, sy_yield(p.milk_yield)) for x, p in zip(xs, points))
    target_coords = tuple((x, sy_yield(p.target)) for x, p in zip(xs, points))
    cost_coords = tuple((x, sy_cost(p.cost)) for x, p in zip(xs, points))

    series = {
        "milk_yield": Series("milk_yield", yield_coords, line_path(yield_coords)),
        "target": Series("target", target_coords, line_path(target_coords), dashed=True),
        "cost": Series("cost", cost_coords, line_path(cost_coords)),
    }

    markers: List[Marker] = []
    for (x, y_yield), (_, y_cost) in zip(yield_coords, cost_coords):
        markers.append(Marker("milk_yield", x, y_yield))
        markers.append(Marker("cost", x, y_cost))

    baseline = canvas.height - canvas.padding
    labels = tuple(Label(p.label, x, baseline + LABEL_OFFSET) for x, p in zip(xs, points))

    return ChartGeometry(
        canvas=canvas,
        x_positions=xs,
        y_axis=Line(canvas.padding, canvas.padding, canvas.padding, baseline),
        x_axis=Line(canvas.padding, baseline, canvas.width - canvas.padding, baseline),
        series=series,
        markers=tuple(markers),
        labels=labels,
        legend_origin=(canvas.padding, canvas.padding - LEGEND_OFFSET),
    )


def points_outside_domain(points: Sequence[ChartPoint]) -> List[str]:
    """Describe every value that falls outside the fixed chart y-domains."""
    warnings: List[str] = []
    y_lo, y_hi = MILK_YIELD_DOMAIN
    c_lo, c_hi = COST_DOMAIN
    for p in points:
        for name, value in (("milk_yield", p.milk_yield), ("target", p.target)):
            if not (y_lo <= value <= y_hi):
                warnings.append(f"{p.label}: {name} {value:g} outside [{y_lo:g}, {y_hi:g}]")
        if not (c_lo <= p.cost <= c_hi):
            warnings.append(f"{p.label}: cost {p.cost:g} outside [{c_lo:g}, {c_hi:g}]")
    return warnings
