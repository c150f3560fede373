# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

import asyncio
import socket
import ssl as ssl_module
from enum import Enum
from typing import Optional

import httpx


class ReachProbeError(Exception):
    """Base class for errors raised to reachprobe callers."""


class InvalidInputError(ReachProbeError, ValueError):
    """The probe target is missing, empty or not an HTTP(S) URL."""


class ConfigurationError(ReachProbeError):
    """Deployment configuration (locations, settings) is unusable."""


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


_DNS_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "getaddrinfo failed",
    "no address associated",
)


def _looks_like_dns_failure(exc: BaseException) -> bool:
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, (socket.gaierror, socket.herror)):
            return True
        message = str(current).lower()
        if any(marker in message for marker in _DNS_MARKERS):
            return True
        current = current.__cause__ or current.__context__
    return False


def _looks_like_tls_failure(exc: BaseException) -> bool:
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, (ssl_module.SSLError, ssl_module.CertificateError)):
            return True
        current = current.__cause__ or current.__context__
    return False


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    httpx wraps socket and ssl errors, so the cause chain is inspected before
    falling back to the generic connection bucket.
    """
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return ErrorCategory.TIMEOUT

    if _looks_like_tls_failure(exc):
        return ErrorCategory.SSL_ERROR

    if _looks_like_dns_failure(exc):
        return ErrorCategory.DNS_ERROR

    if isinstance(
        exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)
    ):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: Optional[ErrorCategory]) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Check exceeded its timeout",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Network error during check",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Check failed due to network error")
