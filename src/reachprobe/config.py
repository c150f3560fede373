# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for reachprobe."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"reachprobe/{__version__} (+multi-location reachability probe)"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ProbeSettings:
    """Probe and HTTP client defaults."""

    timeout: float = 10.0
    max_concurrency: int = 8
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    head_fallback_get: bool = True
    simulate_breakdown: bool = True

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("REACHPROBE_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        max_concurrency = _int_env("REACHPROBE_MAX_CONCURRENCY", cls.max_concurrency)
        if max_concurrency <= 0:
            max_concurrency = cls.max_concurrency
        return cls(
            timeout=timeout,
            max_concurrency=max_concurrency,
            user_agent=os.getenv("REACHPROBE_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("REACHPROBE_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("REACHPROBE_HTTP_VERIFY_SSL", cls.verify_ssl),
            head_fallback_get=_bool_env("REACHPROBE_HEAD_FALLBACK_GET", cls.head_fallback_get),
            simulate_breakdown=_bool_env("REACHPROBE_SIMULATE_BREAKDOWN", cls.simulate_breakdown),
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()
