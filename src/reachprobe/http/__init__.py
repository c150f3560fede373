# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .httpx_client import HttpxClient, PhaseRecorder
from .models import Headers, HttpRequest, HttpResponse, PhaseTimings
from .url import normalize_target_url

__all__ = [
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "PhaseRecorder",
    "PhaseTimings",
    "StubHttpClient",
    "create_default_http_client",
    "normalize_target_url",
]
