"""
Common test fixtures shared by all modules.

Provides factory functions for client configuration and for clients wired
to an in-memory httpx transport, so no test needs a network.
"""

import json
from typing import Any, Callable, Optional

import httpx

from yildiz.client import YildizClient
from yildiz.config import ClientConfig
from yildiz.http import HttpClient


TEST_PREFIX = "test_prefix"
TEST_TOKEN = "secret-token"
TEST_HOST = "yildiz.test"
TEST_PORT = 3058


# =============================================================================
# Config Factory
# =============================================================================

def make_config(**overrides: Any) -> ClientConfig:
    """Create a ClientConfig pointing at the fake test host."""
    data = {
        "prefix": TEST_PREFIX,
        "host": TEST_HOST,
        "port": TEST_PORT,
    }
    data.update(overrides)
    return ClientConfig(**data)


# =============================================================================
# Recording Transport
# =============================================================================

Responder = Callable[[httpx.Request], httpx.Response]


class RecordingHandler:
    """
    MockTransport handler that keeps every request it receives.

    Without a responder it answers 200 with an empty JSON object.
    """

    def __init__(self, responder: Optional[Responder] = None) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.responder is not None:
            return self.responder(request)
        return httpx.Response(200, json={})

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


def respond_with(status_code: int, **kwargs: Any) -> Responder:
    """Responder that always returns the same response."""
    def _respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, **kwargs)
    return _respond


def make_http_client(
    handler: Optional[RecordingHandler] = None,
    **overrides: Any,
) -> tuple[HttpClient, RecordingHandler]:
    """Create an HttpClient backed by a MockTransport."""
    handler = handler or RecordingHandler()
    client = HttpClient(make_config(**overrides), transport=httpx.MockTransport(handler))
    return client, handler


def make_yildiz_client(
    handler: Optional[RecordingHandler] = None,
    **overrides: Any,
) -> tuple[YildizClient, RecordingHandler]:
    """Create a YildizClient backed by a MockTransport."""
    handler = handler or RecordingHandler()
    client = YildizClient(make_config(**overrides), transport=httpx.MockTransport(handler))
    return client, handler


class CountingTransport(httpx.MockTransport):
    """MockTransport that counts how often it is closed."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        super().__init__(handler)
        self.close_calls = 0

    def close(self) -> None:
        self.close_calls += 1
