# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Adapters that satisfy the HttpClient protocol without a network."""

from __future__ import annotations

import asyncio

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests.

    Responses are keyed by ``(method, url)`` first and by ``url`` second. An
    optional per-key delay simulates slow vantage points.
    """

    def __init__(
        self,
        responses: dict[str, HttpResponse] | None = None,
        *,
        delays: dict[str, float] | None = None,
    ):
        self._responses: dict[str, HttpResponse] = dict(responses or {})
        self._delays: dict[str, float] = dict(delays or {})
        self.requests: list[HttpRequest] = []

    def add(self, url: str, response: HttpResponse, *, method: str | None = None, delay: float | None = None) -> None:
        key = f"{method.upper()} {url}" if method else url
        self._responses[key] = response
        if delay is not None:
            self._delays[key] = delay

    def _lookup(self, request: HttpRequest) -> tuple[str | None, HttpResponse | None]:
        for key in (f"{request.method.upper()} {request.url}", request.url):
            if key in self._responses:
                return key, self._responses[key]
        return None, None

    async def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        key, response = self._lookup(request)
        delay = self._delays.get(key or request.url)
        if delay:
            await asyncio.sleep(delay)
        if response is not None:
            return response
        return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")

    async def aclose(self) -> None:
        return None
