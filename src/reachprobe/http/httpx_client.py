# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from ..config import ProbeSettings, load_probe_settings
from ..errors import categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse, PhaseTimings

logger = logging.getLogger(__name__)


class PhaseRecorder:
    """
    Collects connection phase durations from httpcore ``trace`` events.

    Durations of repeated phases (one per redirect hop) are summed.
    """

    def __init__(self) -> None:
        self._started: dict[str, float] = {}
        self.tcp_ms = 0.0
        self.tls_ms = 0.0
        self.saw_response = False

    async def __call__(self, event_name: str, info: dict[str, Any]) -> None:  # noqa: ARG002
        now = time.perf_counter()
        prefix, _, rest = event_name.partition(".")
        phase, _, stage = rest.rpartition(".")

        if stage == "started":
            self._started[phase] = now
            return
        if stage != "complete":
            return

        started = self._started.pop(phase, None)
        if started is None:
            return
        elapsed_ms = (now - started) * 1000.0
        if prefix == "connection" and phase == "connect_tcp":
            self.tcp_ms += elapsed_ms
        elif prefix == "connection" and phase == "start_tls":
            self.tls_ms += elapsed_ms
        elif phase == "receive_response_headers":
            self.saw_response = True

    def to_phases(self) -> PhaseTimings | None:
        if not self.saw_response:
            return None
        return PhaseTimings(tcp_ms=self.tcp_ms, tls_ms=self.tls_ms)


class HttpxClient(HttpClient):
    """
    Async httpx client wrapper.

    Without an injected ``httpx.AsyncClient`` every request opens its own
    short-lived client, so each check pays for a cold DNS/TCP/TLS setup and no
    connection is shared between locations.
    """

    def __init__(self, settings: ProbeSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_probe_settings()
        self._client = client

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    async def request(self, request: HttpRequest) -> HttpResponse:
        if self._client is not None:
            return await self._send(self._client, request)
        async with self._new_client() as client:
            return await self._send(client, request)

    async def _send(self, client: httpx.AsyncClient, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        recorder = PhaseRecorder()

        try:
            async with client.stream(
                request.method,
                request.url,
                headers=headers,
                timeout=timeout,
                follow_redirects=request.allow_redirects,
                extensions={"trace": recorder},
            ) as resp:
                if request.first_chunk_only:
                    # aiter_bytes also replays a body the transport already buffered
                    async for chunk in resp.aiter_bytes():
                        if chunk:
                            break

            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                url=str(resp.url),
                phases=recorder.to_phases(),
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("%s %s failed: %s", request.method, request.url, exc)
            return HttpResponse(
                ok=False,
                error_message=str(exc) or type(exc).__name__,
                error_category=categorize_exception(exc),
            )

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
