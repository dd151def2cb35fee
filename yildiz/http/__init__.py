"""
HTTP Client Module

Request executor for the Yildiz API with connection reuse and
optional timing instrumentation.
"""

from .client import (
    PREFIX_HEADER,
    SUPPORTED_METHODS,
    HttpClient,
    HttpResponse,
    RequestDescriptor,
)
from .timing import TimingCollector, TimingPhases, TimingRecord

__all__ = [
    "PREFIX_HEADER",
    "SUPPORTED_METHODS",
    "HttpClient",
    "HttpResponse",
    "RequestDescriptor",
    "TimingCollector",
    "TimingPhases",
    "TimingRecord",
]
