"""
HTTP Client

Single-attempt request executor for the Yildiz API. Injects the tenant
headers, reuses pooled connections and enforces an optional expected
status code.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from yildiz.config import (
    POOL_KEEPALIVE_EXPIRY_S,
    POOL_MAX_CONNECTIONS,
    POOL_MAX_KEEPALIVE_CONNECTIONS,
    ClientConfig,
)
from yildiz.http.timing import TimingCollector, TimingRecord
from yildiz.schemas.errors import (
    NO_ERROR_MESSAGE,
    StatusMismatchException,
    TransportException,
)

logger = logging.getLogger(__name__)

PREFIX_HEADER = "x-yildiz-prefix"
SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")

POOL_LIMITS = httpx.Limits(
    max_connections=POOL_MAX_CONNECTIONS,
    max_keepalive_connections=POOL_MAX_KEEPALIVE_CONNECTIONS,
    keepalive_expiry=POOL_KEEPALIVE_EXPIRY_S,
)
NO_REUSE_LIMITS = httpx.Limits(max_keepalive_connections=0)


@dataclass
class RequestDescriptor:
    """A fully resolved request, built fresh for every call."""
    path: str
    method: str
    url: str
    headers: httpx.Headers
    content: Optional[bytes]
    timeout_ms: int
    use_pool: bool


@dataclass
class HttpResponse:
    """
    Normalized response from the Yildiz API.

    ``body`` holds the parsed JSON document, the raw text when the payload
    is not JSON, or None for an empty payload.
    """
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    timing: Optional[TimingRecord] = None
    method: str = "GET"
    url: str = ""
    text: str = ""

    @property
    def ok(self) -> bool:
        """Check if request was successful (2xx status)."""
        return 200 <= self.status_code < 300


def parse_body(text: str) -> Any:
    """Parse a response payload, keeping the raw text when it is not JSON."""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


def server_error_message(response: HttpResponse) -> str:
    """Best-effort error text for a response that failed the status check."""
    body = response.body
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    if response.status_code == 500 and response.text:
        return response.text
    return NO_ERROR_MESSAGE


class HttpClient:
    """
    Transport for the Yildiz API.

    Usage:
        with HttpClient(ClientConfig(host="yildiz.local")) as http:
            response = http.execute("/node/123")
            if response.status_code == 200:
                node = response.body

    The client is safe to share between threads: the connection pool
    synchronizes checkout internally and every call builds its own headers
    and body.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            config: Endpoint, tenant and behaviour settings
            transport: Optional httpx transport used instead of the network.
                The client owns it: it is kept open across calls and
                closed once by close().
        """
        self.config = config or ClientConfig()
        self.tenant = self.config.tenant
        self._transport = transport
        self._pool: Optional[httpx.Client] = None
        self._closed = False

        if not self.config.disable_connection_reuse:
            self._pool = httpx.Client(
                transport=transport or httpx.HTTPTransport(limits=POOL_LIMITS),
            )

        logger.debug(f"{self.config.base_url} via prefix = {self.tenant.prefix}.")

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def reuses_connections(self) -> bool:
        """Whether the next request will go through the shared pool."""
        return self._pool is not None

    def build_request(
        self,
        path: str,
        *,
        method: str = "GET",
        headers: Optional[dict[str, str]] = None,
        body: Any = None,
        timeout_ms: Optional[int] = None,
    ) -> RequestDescriptor:
        """Resolve URL, headers, payload and timeout for one call."""
        if not isinstance(path, str) or not path:
            raise ValueError("path must be a non-empty string")
        if not path.startswith("/"):
            path = "/" + path

        method = str(method).upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        if timeout_ms is not None and (
            isinstance(timeout_ms, bool) or not isinstance(timeout_ms, int) or timeout_ms <= 0
        ):
            raise ValueError(f"Invalid timeout: {timeout_ms!r}")

        use_pool = self._pool is not None

        # Case-insensitive, so caller spellings of the managed headers are replaced
        request_headers = httpx.Headers(headers or {})
        request_headers["content-type"] = "application/json"
        request_headers[PREFIX_HEADER] = self.tenant.prefix
        if self.tenant.auth_token:
            request_headers["authorization"] = self.tenant.auth_token
        if not use_pool:
            request_headers["connection"] = "close"

        if body is None:
            content = None
        elif isinstance(body, bytes):
            content = body
        elif isinstance(body, str):
            content = body.encode("utf-8")
        else:
            content = json.dumps(body).encode("utf-8")

        return RequestDescriptor(
            path=path,
            method=method,
            url=f"{self.config.base_url}{path}",
            headers=request_headers,
            content=content,
            timeout_ms=timeout_ms if timeout_ms is not None else self.config.default_timeout_ms,
            use_pool=use_pool,
        )

    def execute(
        self,
        path: str,
        *,
        method: str = "GET",
        headers: Optional[dict[str, str]] = None,
        body: Any = None,
        timeout_ms: Optional[int] = None,
        expected_status: Optional[int] = None,
    ) -> HttpResponse:
        """
        Make exactly one request to the Yildiz API.

        Args:
            path: Request path relative to the configured origin
            method: HTTP method (GET, POST, PUT, DELETE)
            headers: Additional headers
            body: Request payload; anything but str/bytes is sent as JSON
            timeout_ms: Request timeout, defaults to the configured timeout
            expected_status: Status code the response must carry, None for no check

        Returns:
            HttpResponse with status, headers, parsed body and optional timing

        Raises:
            TransportException: the request did not complete
            StatusMismatchException: the status differs from expected_status
        """
        if expected_status is not None and (
            isinstance(expected_status, bool)
            or not isinstance(expected_status, int)
            or not 100 <= expected_status <= 599
        ):
            raise ValueError(f"Invalid expected status code: {expected_status!r}")

        descriptor = self.build_request(
            path,
            method=method,
            headers=headers,
            body=body,
            timeout_ms=timeout_ms,
        )
        response = self._dispatch(descriptor)

        if expected_status is not None and response.status_code != expected_status:
            raise StatusMismatchException(
                status_code=response.status_code,
                expected_status=expected_status,
                server_message=server_error_message(response),
                response=response,
            )

        return response

    def _dispatch(self, descriptor: RequestDescriptor) -> HttpResponse:
        collector = TimingCollector() if self.config.enable_timing_instrumentation else None
        extensions = {"trace": collector} if collector is not None else None
        timeout = httpx.Timeout(descriptor.timeout_ms / 1000.0)

        pool = self._pool
        try:
            if descriptor.use_pool and pool is not None:
                raw = self._send(pool, descriptor, timeout, extensions)
            elif self._transport is not None:
                # Not closed here: a supplied transport is released by close()
                client = httpx.Client(transport=self._transport)
                raw = self._send(client, descriptor, timeout, extensions)
            else:
                with httpx.Client(transport=httpx.HTTPTransport(limits=NO_REUSE_LIMITS)) as client:
                    raw = self._send(client, descriptor, timeout, extensions)
        except httpx.RequestError as e:
            logger.warning(f"{descriptor.method} -> {descriptor.url} failed: {e!r}")
            raise TransportException(
                str(e) or type(e).__name__,
                method=descriptor.method,
                url=descriptor.url,
                cause=e,
                timed_out=isinstance(e, httpx.TimeoutException),
            ) from e

        logger.debug(
            f"dispatched: {descriptor.method} -> {descriptor.url} "
            f"returned as: {raw.status_code}"
        )

        text = raw.text
        return HttpResponse(
            status_code=raw.status_code,
            headers=dict(raw.headers),
            body=parse_body(text),
            timing=collector.to_record() if collector is not None else None,
            method=descriptor.method,
            url=descriptor.url,
            text=text,
        )

    @staticmethod
    def _send(
        client: httpx.Client,
        descriptor: RequestDescriptor,
        timeout: httpx.Timeout,
        extensions: Optional[dict[str, Any]],
    ) -> httpx.Response:
        return client.request(
            descriptor.method,
            descriptor.url,
            headers=descriptor.headers,
            content=descriptor.content,
            timeout=timeout,
            extensions=extensions,
        )

    def close(self) -> None:
        """Release the connection pool. Safe to call more than once."""
        if self._pool is not None:
            self._pool.close()
            self._pool = None
        elif self._transport is not None and not self._closed:
            self._transport.close()
        self._closed = True

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
