from .errors import BackendError, DashboardError, MalformedPayloadError, MissingElementError
from .models import EventRecord, MetricPoint, ProcessStatus, StatsSnapshot, TradeRecord

__all__ = [
    "BackendError",
    "DashboardError",
    "MalformedPayloadError",
    "MissingElementError",
    "EventRecord",
    "MetricPoint",
    "ProcessStatus",
    "StatsSnapshot",
    "TradeRecord",
]
