from .base import ExtractedRecord, HttpResponse, SourceError, Transport
from .http_api import HttpTransport
from .ny_open_data import EXTRACTORS, get_extractor

__all__ = [
    "EXTRACTORS",
    "ExtractedRecord",
    "HttpResponse",
    "HttpTransport",
    "SourceError",
    "Transport",
    "get_extractor",
]
