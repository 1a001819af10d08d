# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpprobe CLI."""

from __future__ import annotations

import argparse
import json
import sys

from ..config import ProbeSettings, load_probe_settings
from ..errors import ProbeConfigurationError, error_category_to_reason
from ..log import setup_logging
from ..models.probe import HealthStatus, ProbeResult
from ..runtime import check_url

EXIT_CODES: dict[HealthStatus, int] = {
    HealthStatus.HEALTHY: 0,
    HealthStatus.DEGRADED: 1,
    HealthStatus.UNHEALTHY: 2,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Probe an HTTP endpoint once and report healthy/degraded/unhealthy")
    parser.add_argument("url", help="Target URL to GET")
    parser.add_argument("--description", help="Label for the checked dependency (default: URL host)")
    parser.add_argument(
        "--degradation-threshold",
        type=float,
        metavar="MS",
        help="Report degraded when a successful response takes longer than this",
    )
    parser.add_argument(
        "--cancellation-threshold",
        type=float,
        metavar="MS",
        help="Abort the request and report unhealthy after this long",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-friendly summary",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("--log-level", help="Logging level (default: HTTPPROBE_LOG_LEVEL or WARNING)")
    return parser


def _print_json(result: ProbeResult) -> None:
    json.dump(result.to_dict(), sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(result: ProbeResult) -> None:
    print(f"[httpprobe] Status: {result.status.value}")
    print(result.message)
    print(f"URL: {result.url}")
    print(f"Elapsed: {result.elapsed_ms} ms")
    if result.http_status_code is not None:
        print(f"HTTP status: {result.http_status_code}")
    if result.error_kind is not None:
        reason = error_category_to_reason(result.error_kind)
        detail = f" ({result.error_type}: {result.error_message})" if result.error_type else ""
        print(f"Error: {result.error_kind.value} - {reason}{detail}")


def _apply_overrides(settings: ProbeSettings, args: argparse.Namespace) -> ProbeSettings:
    if args.degradation_threshold is not None:
        settings.degradation_threshold_ms = args.degradation_threshold
    if args.cancellation_threshold is not None:
        settings.cancellation_threshold_ms = args.cancellation_threshold
    if args.ignore_ssl_errors:
        settings.verify_ssl = False
    return settings


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings = _apply_overrides(load_probe_settings(), args)
    try:
        result = check_url(args.url, description=args.description, settings=settings)
    except ProbeConfigurationError as exc:
        parser.error(str(exc))

    if args.json:
        _print_json(result)
    else:
        _pretty_print(result)

    return EXIT_CODES[result.status]


if __name__ == "__main__":
    raise SystemExit(main())
