# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Outcome classification for individual checks."""

from __future__ import annotations

from ..errors import ErrorCategory
from ..models.probe import Outcome

# [200, 400) counts as "up"; redirects are followed, so a final 3xx is still reachable.
SUCCESS_STATUS_MIN = 200
SUCCESS_STATUS_MAX = 400

# Servers that refuse HEAD outright.
HEAD_REJECTED_STATUSES = frozenset({405, 501})


def classify_status(status_code: int) -> Outcome:
    if SUCCESS_STATUS_MIN <= status_code < SUCCESS_STATUS_MAX:
        return Outcome.SUCCESS
    return Outcome.HTTP_ERROR


def classify_failure(category: ErrorCategory | None) -> Outcome:
    if category == ErrorCategory.TIMEOUT:
        return Outcome.TIMEOUT
    return Outcome.NETWORK_FAILURE


def head_rejected(status_code: int | None) -> bool:
    return status_code in HEAD_REJECTED_STATUSES


__all__ = [
    "HEAD_REJECTED_STATUSES",
    "SUCCESS_STATUS_MAX",
    "SUCCESS_STATUS_MIN",
    "classify_failure",
    "classify_status",
    "head_rejected",
]
