from .charts import ChartFrame, ChartView, SeriesSpec, TimeSeries, WINDOW_MAX, activity_chart, price_chart
from .document import Document, Element, Node
from .renderers import render_events, render_stats, render_status, render_trades

__all__ = [
    "ChartFrame",
    "ChartView",
    "SeriesSpec",
    "TimeSeries",
    "WINDOW_MAX",
    "activity_chart",
    "price_chart",
    "Document",
    "Element",
    "Node",
    "render_events",
    "render_stats",
    "render_status",
    "render_trades",
]
