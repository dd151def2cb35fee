"""
Yildiz client.

HTTP client for the Yildiz graph service.
"""

from .client import YildizClient
from .config import ClientConfig, TenantContext
from .http import HttpClient, HttpResponse, TimingRecord
from .schemas import (
    StatusMismatchException,
    TransportException,
    UnexpectedStatusException,
    YildizException,
)

__version__ = "0.1.0"

__all__ = [
    "YildizClient",
    "ClientConfig",
    "TenantContext",
    "HttpClient",
    "HttpResponse",
    "TimingRecord",
    "StatusMismatchException",
    "TransportException",
    "UnexpectedStatusException",
    "YildizException",
]
