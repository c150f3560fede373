# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Framework-agnostic check endpoint.

Serverless or web handlers extract the ``url`` query parameter, await
``handle_check`` and copy the returned status, headers and JSON body into
their own response type.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from .errors import InvalidInputError
from .probing.engine import TimeoutArg
from .runtime import ReachProbe

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


@dataclass
class CheckResponse:
    status: int
    body: Any
    headers: dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))

    def json(self) -> str:
        return json.dumps(self.body)


async def handle_check(
    url_param: str | None,
    *,
    timeout: TimeoutArg | None = None,
    legacy: bool = False,
    prober: ReachProbe | None = None,
) -> CheckResponse:
    """Probe ``url_param`` from every configured location and build the response."""
    if not url_param or not str(url_param).strip():
        return CheckResponse(400, {"error": "URL parameter is missing"})

    try:
        prober = prober or ReachProbe()
        results = await prober.acheck(url_param, timeout=timeout)
    except InvalidInputError as exc:
        return CheckResponse(400, {"error": str(exc)})
    except Exception as exc:  # noqa: BLE001
        logger.exception("Check of %s failed", url_param)
        return CheckResponse(500, {"error": "Failed to check URL", "details": str(exc)})

    body = [r.to_legacy_dict() if legacy else r.to_dict() for r in results]
    return CheckResponse(200, body, {**JSON_HEADERS, **CORS_HEADERS})


__all__ = ["CheckResponse", "handle_check"]
