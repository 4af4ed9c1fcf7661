# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""optclient CLI: fetch one URL with the configured client and print the body."""

from __future__ import annotations

import argparse
import sys

from ..client import Client
from ..errors import ClientError, error_category_to_reason
from ..log import setup_logging
from ..options import (
    ConfigOption,
    env_options,
    use_insecure_transport,
    with_timeout,
    with_user_agent,
    without_redirects,
)

EXIT_OK = 0
EXIT_REQUEST_FAILED = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="optclient", description="Fetch a URL and print the response body")
    parser.add_argument("url", help="URL to fetch")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds (default: 30)")
    parser.add_argument("--user-agent", help="User-Agent header value")
    parser.add_argument(
        "--no-redirects",
        action="store_true",
        help="Return redirect responses instead of following them",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument(
        "--show-status",
        action="store_true",
        help="Print the status line and redirect location to stderr",
    )
    parser.add_argument("--log-level", help="Logging level (default: OPTCLIENT_LOG_LEVEL or WARNING)")
    return parser


def options_from_args(args: argparse.Namespace) -> list[ConfigOption]:
    """Environment options first, then flags, so flags win."""
    options = env_options()
    if args.timeout is not None:
        options.append(with_timeout(args.timeout))
    if args.user_agent is not None:
        options.append(with_user_agent(args.user_agent))
    if args.no_redirects:
        options.append(without_redirects())
    if args.insecure:
        options.append(use_insecure_transport())
    return options


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        with Client(*options_from_args(args)) as client, client.get(args.url) as response:
            if args.show_status:
                print(f"HTTP {response.status_code}", file=sys.stderr)
                location = response.header("location")
                if location:
                    print(f"Location: {location}", file=sys.stderr)
            sys.stdout.write(response.text)
    except ClientError as exc:
        print(f"error: {error_category_to_reason(exc.category)}: {exc}", file=sys.stderr)
        return EXIT_REQUEST_FAILED

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
