# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the probe engine."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ErrorCategory

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "HEAD"
    headers: Headers | None = None
    timeout: float | None = None
    allow_redirects: bool = True
    first_chunk_only: bool = False


@dataclass
class PhaseTimings:
    """
    Connection phase durations reported by the transport, in milliseconds.

    ``dns_ms`` is None when name resolution is not observable separately from
    the TCP connect (it is then included in ``tcp_ms``). Time to first byte is
    not carried here: it is whatever remains of the total.
    """

    tcp_ms: float = 0.0
    tls_ms: float = 0.0
    dns_ms: float | None = None


@dataclass
class HttpResponse:
    """Normalized HTTP response; transport faults are reported with ok=False."""

    ok: bool
    status_code: int | None = None
    url: str | None = None
    error_message: str | None = None
    error_category: ErrorCategory | None = None
    phases: PhaseTimings | None = None
