# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""reachprobe CLI."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence

from ..config import ProbeSettings, load_probe_settings
from ..errors import ConfigurationError, InvalidInputError, error_category_to_reason
from ..http import create_default_http_client, normalize_target_url
from ..locations import LocationRegistry, parse_locations
from ..log import setup_logging
from ..models import Outcome, ProbeResult, TimingSource
from ..runtime import ReachProbe

EXIT_OK = 0
EXIT_DEGRADED = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check a site's reachability and latency from several locations")
    parser.add_argument("url", help="Target URL or bare hostname (https:// is assumed)")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of a table",
    )
    parser.add_argument(
        "--legacy",
        action="store_true",
        help="With --json, emit the original {location,status,total,dns,tcp,tls,firstByte} shape",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-location timeout in seconds",
    )
    parser.add_argument(
        "--location",
        action="append",
        default=None,
        metavar="NAME=CODE",
        help="Probe location (repeatable); replaces the configured registry",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to REACHPROBE_LOG_LEVEL or WARNING)",
    )
    return parser


def _print_json(results: Sequence[ProbeResult], *, legacy: bool) -> None:
    payload = [r.to_legacy_dict() if legacy else r.to_dict() for r in results]
    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")


def _pretty_print(url: str, results: Sequence[ProbeResult]) -> None:
    print(f"[reachprobe] {url}")
    width = max((len(r.location) for r in results), default=8)
    print(f"{'Location':<{width}}  {'Outcome':<14} {'Status':>6} {'Total':>7} {'DNS':>6} {'TCP':>6} {'TLS':>6} {'TTFB':>6}")
    for r in results:
        status = str(r.status_code) if r.status_code is not None else "-"
        print(
            f"{r.location:<{width}}  {r.outcome.value:<14} {status:>6} "
            f"{r.total_ms:>5}ms {r.dns_ms:>4}ms {r.tcp_ms:>4}ms {r.tls_ms:>4}ms {r.ttfb_ms:>4}ms"
        )
        detail = ": ".join(part for part in (error_category_to_reason(r.error_category), r.error_message) if part)
        if detail:
            print(f"{'':<{width}}  ! {detail}")
    if any(r.timing_source == TimingSource.SIMULATED for r in results):
        print("Note: DNS/TCP/TLS/TTFB are simulated from fixed shares of the total, not measured.")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: ProbeSettings = load_probe_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    try:
        locations = LocationRegistry(parse_locations(";".join(args.location))) if args.location else None
    except ConfigurationError as exc:
        parser.error(str(exc))

    http_client = create_default_http_client(settings)
    try:
        with ReachProbe(http_client, settings=settings, locations=locations) as prober:
            results = prober.check(args.url, timeout=args.timeout)
    except InvalidInputError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID

    if args.json:
        _print_json(results, legacy=args.legacy)
    else:
        _pretty_print(normalize_target_url(args.url), results)

    return EXIT_OK if all(r.outcome is Outcome.SUCCESS for r in results) else EXIT_DEGRADED


if __name__ == "__main__":
    raise SystemExit(main())
