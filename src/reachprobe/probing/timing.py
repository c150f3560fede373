# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Timing breakdown derivation.

HTTP clients generally expose only the total round trip. When no genuine
phase timings are available the breakdown is *simulated* from fixed shares of
the total and tagged ``TimingSource.SIMULATED``; it is an approximation for
display, not a measurement. In every mode ``ttfb_ms`` absorbs the rounding
remainder so the four phases sum to ``total_ms`` exactly.
"""

from __future__ import annotations

import math

from ..http.models import PhaseTimings
from ..models.probe import TimingBreakdown, TimingSource

DNS_SHARE = 0.10
TCP_SHARE = 0.15
TLS_SHARE = 0.20


def round_ms(value: float) -> int:
    """Round half up to a non-negative integer millisecond count."""
    if value <= 0:
        return 0
    return int(math.floor(value + 0.5))


def elapsed_ms(started: float, finished: float) -> int:
    return round_ms((finished - started) * 1000.0)


def simulate_breakdown(total_ms: int) -> TimingBreakdown:
    total = max(0, int(total_ms))
    dns = round_ms(total * DNS_SHARE)
    tcp = round_ms(total * TCP_SHARE)
    tls = round_ms(total * TLS_SHARE)
    ttfb = max(0, total - dns - tcp - tls)
    return TimingBreakdown(total_ms=total, dns_ms=dns, tcp_ms=tcp, tls_ms=tls, ttfb_ms=ttfb, source=TimingSource.SIMULATED)


def measured_breakdown(total_ms: int, phases: PhaseTimings) -> TimingBreakdown:
    """
    Fit transport-reported phases into ``total_ms``.

    Phases are clipped in reverse connection order (TLS, then TCP, then DNS)
    if timer skew makes them exceed the total.
    """
    total = max(0, int(total_ms))
    dns = round_ms(phases.dns_ms or 0.0)
    tcp = round_ms(phases.tcp_ms)
    tls = round_ms(phases.tls_ms)

    overflow = dns + tcp + tls - total
    if overflow > 0:
        cut = min(tls, overflow)
        tls -= cut
        overflow -= cut
    if overflow > 0:
        cut = min(tcp, overflow)
        tcp -= cut
        overflow -= cut
    if overflow > 0:
        dns -= min(dns, overflow)

    ttfb = total - dns - tcp - tls
    return TimingBreakdown(total_ms=total, dns_ms=dns, tcp_ms=tcp, tls_ms=tls, ttfb_ms=ttfb, source=TimingSource.MEASURED)


def derive_breakdown(total_ms: int, phases: PhaseTimings | None = None, *, simulate: bool = True) -> TimingBreakdown:
    """Prefer measured phases, then the simulated split, then total-as-TTFB."""
    if phases is not None:
        return measured_breakdown(total_ms, phases)
    if simulate:
        return simulate_breakdown(total_ms)
    total = max(0, int(total_ms))
    return TimingBreakdown(total_ms=total, ttfb_ms=total, source=TimingSource.NONE)


__all__ = [
    "DNS_SHARE",
    "TCP_SHARE",
    "TLS_SHARE",
    "derive_breakdown",
    "elapsed_ms",
    "measured_breakdown",
    "round_ms",
    "simulate_breakdown",
]
