# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level reachprobe facade."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from contextlib import suppress

from .config import ProbeSettings, load_probe_settings
from .http.client import HttpClient, create_default_http_client
from .http.url import normalize_target_url
from .locations import Location, LocationRegistry, load_location_registry
from .models import ProbeResult
from .probing.engine import ClientFactory, ProbeEngine, TimeoutArg


class ReachProbe:
    """
    Convenience wrapper that wires settings, HTTP client and location registry
    into a ProbeEngine.

    ``check`` is for synchronous callers (CLI, scripts); ``acheck`` for code
    already running inside an event loop.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        settings: ProbeSettings | None = None,
        locations: Sequence[Location] | None = None,
        client_factory: ClientFactory | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.locations = locations if isinstance(locations, LocationRegistry) else (
            LocationRegistry(locations) if locations is not None else load_location_registry()
        )
        self.engine = ProbeEngine(
            self.http_client,
            self.locations,
            settings=self.settings,
            client_factory=client_factory,
        )

    async def acheck(self, url: str, *, timeout: TimeoutArg | None = None) -> list[ProbeResult]:
        return await self.engine.probe(url, timeout=timeout)

    def check(self, url: str, *, timeout: TimeoutArg | None = None) -> list[ProbeResult]:
        normalize_target_url(url)
        return asyncio.run(self.acheck(url, timeout=timeout))

    async def aclose(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "aclose"):
                await self.http_client.aclose()

    def close(self) -> None:
        asyncio.run(self.aclose())

    def __enter__(self) -> ReachProbe:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()

    async def __aenter__(self) -> ReachProbe:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()
