# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe engine: concurrent per-location checks against one target."""

from __future__ import annotations

import asyncio
import logging
import math
import time
from collections.abc import Callable, Sequence
from datetime import timedelta

from ..config import ProbeSettings, load_probe_settings
from ..errors import ErrorCategory, InvalidInputError, categorize_exception
from ..http.client import HttpClient, create_default_http_client
from ..http.models import HttpRequest, HttpResponse
from ..http.url import normalize_target_url
from ..locations import Location, LocationRegistry, load_location_registry
from ..models.probe import ZERO_TIMING, Outcome, ProbeRequest, ProbeResult
from .classify import classify_failure, classify_status, head_rejected
from .timing import derive_breakdown, elapsed_ms

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Location], HttpClient]
TimeoutArg = float | int | timedelta


def _as_registry(locations: Sequence[Location] | None) -> LocationRegistry:
    if locations is None:
        return load_location_registry()
    if isinstance(locations, LocationRegistry):
        return locations
    return LocationRegistry(locations)


class ProbeEngine:
    """
    Runs one check per location, concurrently, and returns results in registry order.

    Per-location failures never propagate: they become ``ProbeResult`` values.
    Only an invalid target (or timeout argument) raises ``InvalidInputError``.
    ``client_factory`` selects an HttpClient per location, for deployments where
    each vantage point has its own egress.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        locations: Sequence[Location] | None = None,
        settings: ProbeSettings | None = None,
        client_factory: ClientFactory | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.locations = _as_registry(locations)
        self.client_factory = client_factory

    def _resolve_timeout(self, timeout: TimeoutArg | None) -> float:
        if timeout is None:
            return self.settings.timeout
        if isinstance(timeout, timedelta):
            timeout = timeout.total_seconds()
        try:
            value = float(timeout)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Timeout must be a number of seconds, got {timeout!r}") from exc
        if not math.isfinite(value) or value <= 0:
            raise InvalidInputError(f"Timeout must be positive and finite, got {timeout!r}")
        return value

    def _client_for(self, location: Location) -> HttpClient:
        if self.client_factory is None:
            return self.http_client
        return self.client_factory(location)

    async def probe(
        self,
        target_url: str,
        locations: Sequence[Location] | None = None,
        timeout: TimeoutArg | None = None,
    ) -> list[ProbeResult]:
        url = normalize_target_url(target_url)
        check_timeout = self._resolve_timeout(timeout)
        registry = self.locations if locations is None else _as_registry(locations)

        requests = [ProbeRequest(target_url=url, location=location, timeout=check_timeout) for location in registry]
        logger.debug("Probing %s from %d locations (timeout=%.1fs)", url, len(requests), check_timeout)

        semaphore = asyncio.Semaphore(self.settings.max_concurrency)
        results = await asyncio.gather(*(self._guarded_check(semaphore, request) for request in requests))
        return list(results)

    async def _guarded_check(self, semaphore: asyncio.Semaphore, request: ProbeRequest) -> ProbeResult:
        async with semaphore:
            try:
                return await self.check(request)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Check from %s raised unexpectedly: %s", request.location.code, exc)
                category = categorize_exception(exc)
                return self._failure(request, classify_failure(category), category, str(exc) or type(exc).__name__)

    async def check(self, request: ProbeRequest) -> ProbeResult:
        """Run a single location's check; the timeout bounds only this check."""
        client = self._client_for(request.location)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        started = time.perf_counter()
        try:
            response = await asyncio.wait_for(self._round_trip(client, request, timeout), timeout=timeout)
        except asyncio.TimeoutError:
            logger.info("%s: check of %s timed out after %.1fs", request.location.code, request.target_url, timeout)
            return self._failure(request, Outcome.TIMEOUT, ErrorCategory.TIMEOUT, f"Check exceeded {timeout:g}s timeout")
        finished = time.perf_counter()

        if not response.ok or response.status_code is None:
            category = response.error_category or ErrorCategory.UNKNOWN_ERROR
            outcome = classify_failure(category)
            logger.info("%s: %s for %s (%s)", request.location.code, outcome.value, request.target_url, response.error_message)
            return self._failure(request, outcome, category, response.error_message)

        timing = derive_breakdown(
            elapsed_ms(started, finished),
            response.phases,
            simulate=self.settings.simulate_breakdown,
        )
        outcome = classify_status(response.status_code)
        if outcome is not Outcome.SUCCESS:
            logger.info("%s: HTTP %s from %s", request.location.code, response.status_code, request.target_url)
        return ProbeResult.from_timing(
            request.location,
            outcome,
            timing,
            status_code=response.status_code,
            final_url=response.url,
        )

    async def _round_trip(self, client: HttpClient, request: ProbeRequest, timeout: float) -> HttpResponse:
        http_request = HttpRequest(
            url=request.target_url,
            method=request.method,
            timeout=timeout,
            allow_redirects=self.settings.allow_redirects,
        )
        response = await client.request(http_request)
        if self.settings.head_fallback_get and http_request.method == "HEAD" and response.ok and head_rejected(response.status_code):
            logger.debug("%s: HEAD rejected with %s, retrying as GET", request.location.code, response.status_code)
            fallback = HttpRequest(
                url=request.target_url,
                method="GET",
                timeout=timeout,
                allow_redirects=self.settings.allow_redirects,
                first_chunk_only=True,
            )
            response = await client.request(fallback)
        return response

    @staticmethod
    def _failure(
        request: ProbeRequest,
        outcome: Outcome,
        category: ErrorCategory | None,
        message: str | None,
    ) -> ProbeResult:
        return ProbeResult.from_timing(
            request.location,
            outcome,
            ZERO_TIMING,
            status_code=None,
            error_category=category,
            error_message=message,
        )


def probe(
    target_url: str,
    locations: Sequence[Location] | None = None,
    timeout: TimeoutArg | None = None,
    *,
    http_client: HttpClient | None = None,
    settings: ProbeSettings | None = None,
) -> list[ProbeResult]:
    """Synchronous convenience wrapper around ``ProbeEngine.probe``."""
    normalize_target_url(target_url)
    engine = ProbeEngine(http_client=http_client, locations=locations, settings=settings)
    return asyncio.run(engine.probe(target_url, timeout=timeout))


__all__ = ["ClientFactory", "ProbeEngine", "TimeoutArg", "probe"]
