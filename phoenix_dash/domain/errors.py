from __future__ import annotations


class DashboardError(Exception):
    """Base class for failures a fetch-and-render tick is allowed to swallow."""


class BackendError(DashboardError):
    """Transport failure or non-2xx answer from the monitored backend."""

    def __init__(self, message: str, *, status: int | None = None, url: str = ""):
        super().__init__(message)
        self.status = status
        self.url = url


class MalformedPayloadError(DashboardError):
    pass


class MissingElementError(DashboardError):
    def __init__(self, element_id: str):
        super().__init__(f"element #{element_id} not found")
        self.element_id = element_id
