from .backend import BackendApi
from .http_service import HttpService

__all__ = ["BackendApi", "HttpService"]
