"""CLI entrypoint for Geo-6 forward and reverse geocoding."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from geo6.common.config_loader import ProviderConfig, load_provider_config
from geo6.common.constants import EXIT_HARD_FAIL, EXIT_NO_RESULTS, EXIT_SUCCESS
from geo6.common.errors import GeocoderError
from geo6.common.http import HttpClient
from geo6.common.logging import build_logger, log_event
from geo6.common.models import AddressCollection, GeocodeQuery, ReverseQuery
from geo6.provider.geo6 import Geo6Provider


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", default="./config/geo6.yml")
    parser.add_argument("--overlay-config", default=None)
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    commands = parser.add_subparsers(dest="command", required=True)

    geocode = commands.add_parser("geocode", help="address to coordinates")
    geocode.add_argument("text", nargs="?", default="")
    geocode.add_argument("--street-name", default=None)
    geocode.add_argument("--street-number", default=None)
    geocode.add_argument("--postal-code", default=None)
    geocode.add_argument("--locality", default=None)
    geocode.add_argument("--locale", default=None)
    geocode.add_argument("--limit", type=int, default=None)

    reverse = commands.add_parser("reverse", help="coordinates to nearest address")
    reverse.add_argument("latitude", type=float)
    reverse.add_argument("longitude", type=float)
    reverse.add_argument("--radius", type=float, default=None)
    reverse.add_argument("--locale", default=None)
    reverse.add_argument("--limit", type=int, default=None)
    return parser.parse_args(argv)


def build_query(args: argparse.Namespace, config: ProviderConfig) -> GeocodeQuery | ReverseQuery:
    locale = args.locale or config.default_locale
    limit = config.limit if args.limit is None else args.limit
    if args.command == "reverse":
        return ReverseQuery(
            latitude=args.latitude,
            longitude=args.longitude,
            radius=args.radius,
            locale=locale,
            limit=limit,
        )
    return GeocodeQuery(
        text=args.text,
        street_name=args.street_name,
        street_number=args.street_number,
        postal_code=args.postal_code,
        locality=args.locality,
        locale=locale,
        limit=limit,
    )


def run_command(args: argparse.Namespace, http_client: HttpClient | None = None, out=None) -> int:
    out = out or sys.stdout
    logger = build_logger(args.log_level, Path(args.log_file) if args.log_file else None)
    overlay = Path(args.overlay_config) if args.overlay_config else None

    owns_client = http_client is None
    try:
        config = load_provider_config(Path(args.config), overlay_path=overlay)
        query = build_query(args, config)
        client = http_client or HttpClient(
            timeout=config.timeout,
            retry=config.retry,
            rate_limit_per_sec=config.rate_limit_per_sec,
        )
        try:
            provider = Geo6Provider.from_config(config, http_client=client)
            if isinstance(query, ReverseQuery):
                results: AddressCollection = provider.reverse(query)
            else:
                results = provider.geocode(query)
        finally:
            if owns_client:
                client.close()
    except GeocoderError as exc:
        log_event(logger, str(exc), event="COMMAND_FAIL", status="error", error_code=exc.error_code)
        print(json.dumps({"error": exc.error_code, "message": str(exc)}, ensure_ascii=False), file=sys.stderr)
        return EXIT_HARD_FAIL

    json.dump(results.to_list(), out, ensure_ascii=False, indent=2)
    out.write("\n")
    if results.is_empty():
        return EXIT_NO_RESULTS
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    return run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
