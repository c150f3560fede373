# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
reachprobe package entrypoint.

This package checks a URL's reachability and latency from several logical
locations at once and reports a uniform result record per location. HTTP
behavior is abstracted behind an injectable async client interface, and
results are modeled with typed dataclasses so boundaries (CLI, serverless
handlers, tests) can serialize them as they see fit.
"""

from .config import ProbeSettings, load_probe_settings
from .errors import ConfigurationError, ErrorCategory, InvalidInputError, ReachProbeError
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .locations import DEFAULT_LOCATIONS, Location, LocationRegistry, load_location_registry
from .log import setup_logging
from .models import Outcome, ProbeRequest, ProbeResult, TimingSource
from .probing import ProbeEngine, probe
from .runtime import ReachProbe
from .version import __version__

__all__ = [
    "ConfigurationError",
    "DEFAULT_LOCATIONS",
    "ErrorCategory",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "InvalidInputError",
    "Location",
    "LocationRegistry",
    "Outcome",
    "ProbeEngine",
    "ProbeRequest",
    "ProbeResult",
    "ProbeSettings",
    "ReachProbe",
    "ReachProbeError",
    "StubHttpClient",
    "TimingSource",
    "create_default_http_client",
    "load_location_registry",
    "load_probe_settings",
    "probe",
    "setup_logging",
    "__version__",
]
