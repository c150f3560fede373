# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for reachprobe."""

from ..http.models import Headers, HttpRequest, HttpResponse, PhaseTimings
from ..locations import Location
from .probe import ZERO_TIMING, Outcome, ProbeRequest, ProbeResult, TimingBreakdown, TimingSource

__all__ = [
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "Location",
    "Outcome",
    "PhaseTimings",
    "ProbeRequest",
    "ProbeResult",
    "TimingBreakdown",
    "TimingSource",
    "ZERO_TIMING",
]
