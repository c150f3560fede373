# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for probe targets."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from ..errors import InvalidInputError

DEFAULT_SCHEME = "https"
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_ALLOWED_SCHEMES = {"http", "https"}


def has_scheme(url: str) -> bool:
    return bool(_SCHEME_RE.match(url))


def normalize_target_url(target_url: str | None) -> str:
    """
    Return an absolute http(s) URL for a probe target.

    Bare hosts get ``https://`` prepended:
      example.com -> https://example.com
    """
    raw = str(target_url or "").strip()
    if not raw:
        raise InvalidInputError("Target URL is missing")

    url = raw if has_scheme(raw) else f"{DEFAULT_SCHEME}://{raw}"
    parts = urlsplit(url)
    if parts.scheme.lower() not in _ALLOWED_SCHEMES:
        raise InvalidInputError(f"Unsupported URL scheme: {parts.scheme}")
    if not parts.netloc:
        raise InvalidInputError(f"Target URL has no host: {raw}")
    return url


__all__ = ["DEFAULT_SCHEME", "has_scheme", "normalize_target_url"]
