"""
Schemas for the Yildiz client: error taxonomy, request payloads and
lookup results.
"""

# Error models and exceptions
from .errors import (
    NO_ERROR_MESSAGE,
    ErrorCodes,
    StatusMismatchException,
    TransportException,
    UnexpectedStatusException,
    YildizError,
    YildizException,
)

# Request payloads
from .payloads import (
    EdgeKeyPayload,
    EdgePayload,
    NodePayload,
    Payload,
    RawQueryPayload,
    ShortestPathPayload,
    TranslatedEdgeInfoPayload,
    TranslationPayload,
    UpsertRelationPayload,
)

# Lookup results
from .results import Absent, Failed, Found, LookupResult, interpret_lookup, unwrap

__all__ = [
    # Errors
    "NO_ERROR_MESSAGE",
    "ErrorCodes",
    "StatusMismatchException",
    "TransportException",
    "UnexpectedStatusException",
    "YildizError",
    "YildizException",
    # Payloads
    "EdgeKeyPayload",
    "EdgePayload",
    "NodePayload",
    "Payload",
    "RawQueryPayload",
    "ShortestPathPayload",
    "TranslatedEdgeInfoPayload",
    "TranslationPayload",
    "UpsertRelationPayload",
    # Results
    "Absent",
    "Failed",
    "Found",
    "LookupResult",
    "interpret_lookup",
    "unwrap",
]
