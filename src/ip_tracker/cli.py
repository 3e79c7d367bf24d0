"""CLI helpers for operating the IP tracker."""

import argparse
import asyncio
import json
import sys
from datetime import UTC, datetime

import aiohttp

from ip_tracker.adapters.config import AppConfig
from ip_tracker.adapters.web.app import create_notification_service
from ip_tracker.application.services import parse_notification_request, resolve_client_identity
from ip_tracker.domain.exceptions import ConfigurationError, DeliveryError, InvalidFieldError
from ip_tracker.domain.models import NotificationRequest, ResolvedIdentity
from ip_tracker.main import configure_logging
from ip_tracker.main import main as serve_main


def parse_header_arguments(raw_headers: list[str]) -> dict[str, str]:
    """Parse ``Name: value`` strings into a header mapping.

    Raises:
        ValueError: An entry has no colon or an empty name.
    """
    headers: dict[str, str] = {}
    for raw in raw_headers:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"Invalid header {raw!r}, expected 'Name: value'")
        headers.setdefault(name.strip().lower(), value.strip())
    return headers


def print_identity(identity: ResolvedIdentity, as_json: bool = False) -> None:
    """Print a resolved identity."""
    if as_json:
        print(json.dumps(identity.to_payload(), indent=2))
        return

    print(f"IP:         {identity.ip}")
    print(f"User agent: {identity.user_agent}")
    print(f"Referer:    {identity.referer}")
    print(f"Timestamp:  {identity.timestamp}")
    print()
    print("Headers:")
    for name, value in identity.raw_headers.model_dump(by_alias=True).items():
        print(f"  {name}: {value if value is not None else '-'}")


async def send_notification(config: AppConfig, request: NotificationRequest) -> None:
    """Send one alert with the configured credentials."""
    async with aiohttp.ClientSession() as session:
        service = create_notification_service(config, session)
        await service.notify(request)


def _cmd_resolve(args: argparse.Namespace) -> int:
    try:
        headers = parse_header_arguments(args.header or [])
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    print_identity(resolve_client_identity(headers), as_json=args.json)
    return 0


def _cmd_notify(args: argparse.Namespace) -> int:
    timestamp = args.timestamp or datetime.now(UTC).isoformat()
    try:
        request = parse_notification_request(
            {"ip": args.ip, "userAgent": args.user_agent, "timestamp": timestamp}
        )
    except InvalidFieldError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    config = AppConfig()
    configure_logging(config.log_level)
    try:
        asyncio.run(send_notification(config, request))
    except (ConfigurationError, DeliveryError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print("Notification sent.")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="ip-tracker",
        description="Resolve client IPs and send IP tracker alerts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ip-tracker serve
  ip-tracker resolve -H "X-Forwarded-For: 203.0.113.7, 10.0.0.1" --json
  ip-tracker notify 203.0.113.7 --user-agent "curl/8.0"
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("serve", help="Start the HTTP service")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve an IP from request headers")
    resolve_parser.add_argument(
        "-H",
        "--header",
        action="append",
        help="Request header as 'Name: value' (repeatable)",
    )
    resolve_parser.add_argument("--json", action="store_true", help="Output as JSON")

    notify_parser = subparsers.add_parser("notify", help="Send one alert to Telegram")
    notify_parser.add_argument("ip", help="IP address to report")
    notify_parser.add_argument("--user-agent", default="ip-tracker-cli", help="User agent to report")
    notify_parser.add_argument(
        "--timestamp", help="ISO-8601 timestamp (defaults to the current time)"
    )

    args = parser.parse_args(argv)

    if args.command == "serve":
        asyncio.run(serve_main())
        return 0
    if args.command == "resolve":
        return _cmd_resolve(args)
    if args.command == "notify":
        return _cmd_notify(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
