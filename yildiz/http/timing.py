"""
Request timing instrumentation.

Collects the low-level phase events httpx emits through its ``trace``
request extension and turns them into a TimingRecord.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class TimingPhases:
    """
    Per-phase durations in milliseconds.

    A phase the transport did not report is None. On a reused keep-alive
    connection there is no connect phase, so ``connect`` is 0.
    DNS resolution happens inside the TCP connect and is not reported
    separately.
    """
    dns: Optional[float] = None
    connect: Optional[float] = None
    send: Optional[float] = None
    wait: Optional[float] = None
    first_byte: Optional[float] = None
    download: Optional[float] = None
    total: Optional[float] = None


@dataclass
class TimingRecord:
    """Timing of a single dispatched request."""
    started_at: float
    total_elapsed_ms: float
    connect_start_offset_ms: Optional[float] = None
    phases: TimingPhases = field(default_factory=TimingPhases)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _elapsed_ms(start: Optional[float], end: Optional[float]) -> Optional[float]:
    if start is None or end is None:
        return None
    return round((end - start) * 1000.0, 3)


class TimingCollector:
    """
    Trace callback for one request.

    Usage:
        collector = TimingCollector()
        client.request("GET", url, extensions={"trace": collector})
        collector.finish()
        record = collector.to_record()
    """

    def __init__(self) -> None:
        self.started_at = time.time() * 1000.0
        self._start = time.perf_counter()
        self._end: Optional[float] = None
        self.events: dict[str, float] = {}

    def __call__(self, event_name: str, info: dict[str, Any]) -> None:
        # Events look like "connection.connect_tcp.started" or
        # "http11.receive_response_headers.complete"; keep the first timestamp.
        self.events.setdefault(event_name, time.perf_counter())

    def _first(self, *suffixes: str) -> Optional[float]:
        for name, stamp in self.events.items():
            if name.endswith(suffixes):
                return stamp
        return None

    def _last(self, *suffixes: str) -> Optional[float]:
        found = None
        for name, stamp in self.events.items():
            if name.endswith(suffixes):
                found = stamp if found is None else max(found, stamp)
        return found

    def finish(self) -> None:
        if self._end is None:
            self._end = time.perf_counter()

    def to_record(self) -> TimingRecord:
        self.finish()

        connect_start = self._first("connect_tcp.started", "connect_unix_socket.started")
        connect_end = self._last(
            "connect_tcp.complete",
            "connect_unix_socket.complete",
            "start_tls.complete",
        )
        send_start = self._first("send_request_headers.started")
        send_end = self._last("send_request_headers.complete", "send_request_body.complete")
        headers_done = self._first("receive_response_headers.complete")
        download_start = self._first("receive_response_body.started")
        download_end = self._last("receive_response_body.complete")

        # Time spent waiting for a pooled or new socket before connecting/sending
        socket_ready = connect_start if connect_start is not None else send_start
        phases = TimingPhases(
            dns=None,
            connect=_elapsed_ms(connect_start, connect_end) if connect_start is not None
            else (0.0 if send_start is not None else None),
            send=_elapsed_ms(send_start, send_end),
            wait=_elapsed_ms(self._start, socket_ready),
            first_byte=_elapsed_ms(send_end, headers_done),
            download=_elapsed_ms(download_start, download_end),
            total=_elapsed_ms(self._start, self._end),
        )
        return TimingRecord(
            started_at=self.started_at,
            total_elapsed_ms=_elapsed_ms(self._start, self._end) or 0.0,
            connect_start_offset_ms=_elapsed_ms(self._start, connect_start),
            phases=phases,
        )
