# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe request/result models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import ErrorCategory
from ..locations import Location


class Outcome(str, Enum):
    SUCCESS = "Success"
    HTTP_ERROR = "HttpError"
    NETWORK_FAILURE = "NetworkFailure"
    TIMEOUT = "Timeout"

    @property
    def is_up(self) -> bool:
        return self is Outcome.SUCCESS


class TimingSource(str, Enum):
    """Where a result's phase breakdown came from."""

    MEASURED = "measured"
    SIMULATED = "simulated"
    NONE = "none"


@dataclass(frozen=True)
class TimingBreakdown:
    total_ms: int = 0
    dns_ms: int = 0
    tcp_ms: int = 0
    tls_ms: int = 0
    ttfb_ms: int = 0
    source: TimingSource = TimingSource.NONE


ZERO_TIMING = TimingBreakdown()


@dataclass(frozen=True)
class ProbeRequest:
    target_url: str
    location: Location
    method: str = "HEAD"
    timeout: float | None = None


@dataclass(frozen=True)
class ProbeResult:
    location: str
    outcome: Outcome
    status_code: int | None = None
    total_ms: int = 0
    dns_ms: int = 0
    tcp_ms: int = 0
    tls_ms: int = 0
    ttfb_ms: int = 0
    timing_source: TimingSource = TimingSource.NONE
    code: str | None = None
    error_category: ErrorCategory | None = None
    error_message: str | None = None
    final_url: str | None = None

    @classmethod
    def from_timing(
        cls,
        location: Location,
        outcome: Outcome,
        timing: TimingBreakdown,
        **kwargs: Any,
    ) -> ProbeResult:
        return cls(
            location=location.display_name,
            code=location.code,
            outcome=outcome,
            total_ms=timing.total_ms,
            dns_ms=timing.dns_ms,
            tcp_ms=timing.tcp_ms,
            tls_ms=timing.tls_ms,
            ttfb_ms=timing.ttfb_ms,
            timing_source=timing.source,
            **kwargs,
        )

    @property
    def is_up(self) -> bool:
        return self.outcome.is_up

    def to_dict(self) -> dict[str, Any]:
        return {
            "location": self.location,
            "code": self.code,
            "outcome": self.outcome.value,
            "statusCode": self.status_code,
            "totalMs": self.total_ms,
            "dnsMs": self.dns_ms,
            "tcpMs": self.tcp_ms,
            "tlsMs": self.tls_ms,
            "ttfbMs": self.ttfb_ms,
            "timingSource": self.timing_source.value,
            "errorCategory": self.error_category.value if self.error_category else None,
            "error": self.error_message,
            "finalUrl": self.final_url,
        }

    def to_legacy_dict(self) -> dict[str, Any]:
        """Shape emitted by the original edge function; failures report status "Error"."""
        failed = self.outcome in (Outcome.NETWORK_FAILURE, Outcome.TIMEOUT)
        return {
            "location": self.location,
            "status": "Error" if failed or self.status_code is None else self.status_code,
            "total": self.total_ms,
            "dns": self.dns_ms,
            "tcp": self.tcp_ms,
            "tls": self.tls_ms,
            "firstByte": self.ttfb_ms,
        }
