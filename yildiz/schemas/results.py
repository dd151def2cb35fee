"""
Lookup results.

Fetch, delete and mutate-by-key operations distinguish three outcomes:
the entity was found, the server confirmed it is absent (404), or the
call failed with some other status.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from .errors import UnexpectedStatusException

if TYPE_CHECKING:
    from yildiz.http import HttpResponse


@dataclass(frozen=True)
class Found:
    body: Any


@dataclass(frozen=True)
class Absent:
    pass


@dataclass(frozen=True)
class Failed:
    error: UnexpectedStatusException


LookupResult = Union[Found, Absent, Failed]


def interpret_lookup(response: "HttpResponse") -> LookupResult:
    """Map a response onto Found (200), Absent (404) or Failed (anything else)."""
    if response.status_code == 200:
        return Found(response.body)
    if response.status_code == 404:
        return Absent()
    return Failed(UnexpectedStatusException(response.status_code, response=response))


def unwrap(result: LookupResult) -> Any:
    """Return the body for Found, None for Absent, raise for Failed."""
    if isinstance(result, Found):
        return result.body
    if isinstance(result, Absent):
        return None
    raise result.error
