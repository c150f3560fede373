# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe engine, outcome classification and timing derivation."""

from .classify import classify_failure, classify_status
from .engine import ProbeEngine, probe
from .timing import derive_breakdown, simulate_breakdown

__all__ = [
    "ProbeEngine",
    "classify_failure",
    "classify_status",
    "derive_breakdown",
    "probe",
    "simulate_breakdown",
]
