"""Bounded trend history for the milk yield / cost chart."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterable, Iterator, Tuple

from data import HISTORY_CAPACITY


@dataclass(frozen=True)
class ChartPoint:
    label: str
    milk_yield: float
    target: float
    cost: float


class HistoryBuffer:
    """
    Fixed-size window of chart points, oldest evicted first.

    Appending to a full buffer keeps the last (capacity - 1) points in their
    original order and adds the new one at the end.
    """

    def __init__(self, points: Iterable[ChartPoint] = (), capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._points: Deque[ChartPoint] = deque(maxlen=capacity)
        for point in points:
            self._points.append(point)

    def append(self, point: ChartPoint) -> None:
        self._points.append(point)

    def points(self) -> Tuple[ChartPoint, ...]:
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[ChartPoint]:
        return iter(tuple(self._points))
