from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any

from phoenix_dash.domain.models import MetricPoint
from phoenix_dash.view.document import Document

WINDOW_MAX = 60


@dataclass(frozen=True)
class SeriesSpec:
    key: str
    label: str
    color: str
    dashed: bool = False


class TimeSeries:
    """Bounded FIFO window of labels with one aligned value column per series.

    Every append writes the label and all columns together, so eviction of the
    oldest point keeps indices aligned across series.
    """

    def __init__(self, keys: tuple[str, ...], window: int = WINDOW_MAX):
        if window < 1:
            raise ValueError("window must be >= 1")
        self.window = window
        self.labels: deque[str] = deque(maxlen=window)
        self.columns: dict[str, deque[float | None]] = {k: deque(maxlen=window) for k in keys}

    def __len__(self) -> int:
        return len(self.labels)

    def append(self, label: str, values: dict[str, float | None]) -> None:
        missing = set(self.columns) - set(values)
        if missing:
            raise KeyError(f"missing series values: {sorted(missing)}")
        self.labels.append(label)
        for key, column in self.columns.items():
            column.append(values[key])

    def points(self, key: str) -> list[MetricPoint]:
        return [MetricPoint(label, value) for label, value in zip(self.labels, self.columns[key])]


@dataclass(frozen=True)
class Dataset:
    spec: SeriesSpec
    data: tuple[float | None, ...]

    def segments(self) -> list[list[tuple[int, float]]]:
        """Runs of consecutive non-null points; a null splits the line into a gap."""
        runs: list[list[tuple[int, float]]] = []
        current: list[tuple[int, float]] = []
        for i, v in enumerate(self.data):
            if v is None:
                if current:
                    runs.append(current)
                    current = []
                continue
            current.append((i, v))
        if current:
            runs.append(current)
        return runs


@dataclass(frozen=True)
class ChartFrame:
    labels: tuple[str, ...]
    datasets: tuple[Dataset, ...]
    begin_at_zero: bool = False
    legend: bool = False
    animate: bool = False

    def dataset(self, key: str) -> Dataset:
        for ds in self.datasets:
            if ds.spec.key == key:
                return ds
        raise KeyError(key)

    def bounds(self) -> tuple[float, float] | None:
        values = [v for ds in self.datasets for v in ds.data if v is not None]
        if not values:
            return None
        return min(values), max(values)

    def polylines(self, width: float, height: float):
        """SVG polyline point strings per dataset, one string per non-null run."""
        bounds = self.bounds()
        out: list[tuple[SeriesSpec, list[str]]] = []
        if bounds is None:
            return [(ds.spec, []) for ds in self.datasets]
        lo, hi = bounds
        if self.begin_at_zero:
            lo = min(0.0, lo)
        span = (hi - lo) or 1.0
        step = width / max(1, len(self.labels) - 1)
        for ds in self.datasets:
            lines = []
            for run in ds.segments():
                pts = [f"{i * step:.1f},{height - ((v - lo) / span) * height:.1f}" for i, v in run]
                if len(pts) == 1:
                    pts.append(pts[0])
                lines.append(" ".join(pts))
            out.append((ds.spec, lines))
        return out

    def to_dict(self) -> dict[str, Any]:
        return {
            "labels": list(self.labels),
            "datasets": [{"label": ds.spec.label, "data": list(ds.data)} for ds in self.datasets],
            "animation": self.animate,
        }


class ChartView:
    """One chart component: owns its TimeSeries and redraws into one element."""

    def __init__(
        self,
        element_id: str,
        series: tuple[SeriesSpec, ...],
        *,
        window: int = WINDOW_MAX,
        begin_at_zero: bool = False,
        legend: bool = False,
    ):
        self.element_id = element_id
        self.series = series
        self.begin_at_zero = begin_at_zero
        self.legend = legend
        self.buffer = TimeSeries(tuple(s.key for s in series), window=window)

    def frame(self) -> ChartFrame:
        return ChartFrame(
            labels=tuple(self.buffer.labels),
            datasets=tuple(Dataset(s, tuple(self.buffer.columns[s.key])) for s in self.series),
            begin_at_zero=self.begin_at_zero,
            legend=self.legend,
        )

    def push(self, document: Document, label: str, **values: float | None) -> ChartFrame:
        """Append one point to every series and redraw without animation."""
        el = document.get(self.element_id)
        self.buffer.append(label, values)
        frame = self.frame()
        el.chart = frame
        return frame


def activity_chart(window: int = WINDOW_MAX) -> ChartView:
    return ChartView(
        "chart-activity",
        (SeriesSpec("orders_per_min", "Orders/Min", "#3b82f6"),),
        window=window,
        begin_at_zero=True,
    )


def price_chart(window: int = WINDOW_MAX) -> ChartView:
    return ChartView(
        "chart-price",
        (
            SeriesSpec("price", "Price", "#22c55e"),
            SeriesSpec("entry", "Entry Cost", "#f59e0b", dashed=True),
        ),
        window=window,
        legend=True,
    )
