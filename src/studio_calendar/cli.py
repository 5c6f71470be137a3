"""CLI for studio-calendar - OAuth setup and manual event operations.

Usage:
    studio-calendar status                     # Show configuration and token status
    studio-calendar auth-url                   # Print (and open) the consent URL
    studio-calendar exchange <code>            # Exchange an authorization code
    studio-calendar list [-n 10]               # List upcoming events
    studio-calendar get <event-id>             # Show one event as JSON
    studio-calendar create --summary ... --start ... --end ...
    studio-calendar delete <event-id>          # Delete and notify attendees
    studio-calendar check <start> <end>        # Check whether a slot is free
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import webbrowser


def _get_client():
    """Create a client from configuration."""
    from studio_calendar.calendar import CalendarClient

    return CalendarClient.from_env()


def cmd_status() -> int:
    """Show configuration and token status."""
    from studio_calendar.config import get_config_status
    from studio_calendar.google import CredentialsNotFoundError, GoogleOAuth

    status = get_config_status()

    print("=" * 60)
    print("STUDIO-CALENDAR STATUS")
    print("=" * 60)
    print()
    print(f".env file     : {status['env_file']} {'[x]' if status['env_file_exists'] else '[ ]'}")
    print(f"Client ID     : {'[x]' if status['client_id'] else '[ ]'}")
    print(f"Client secret : {'[x]' if status['client_secret'] else '[ ]'}")
    print(f"Refresh token : {'[x]' if status['refresh_token'] else '[ ]'}")
    print(f"Redirect URI  : {status['redirect_uri']}")
    print(f"Time zone     : {status['time_zone']}")
    print()

    try:
        auth = GoogleOAuth.from_settings()
    except CredentialsNotFoundError as e:
        print(f"Error: {e}")
        return 1

    info = auth.get_token_info()
    if info["status"] == "no_token":
        print("No token - run 'studio-calendar auth-url' then 'studio-calendar exchange <code>'")
        return 1

    print(f"Token status  : {info['status']}")
    print(f"Refresh token : {'yes' if info['has_refresh_token'] else 'no'}")
    return 0


def cmd_auth_url(no_browser: bool = False) -> int:
    """Print the consent URL."""
    from studio_calendar.google import CredentialsNotFoundError

    try:
        client = _get_client()
    except CredentialsNotFoundError as e:
        print(f"Error: {e}")
        return 1

    url = client.get_authorization_url()
    print(f"Authorization URL:\n{url}\n")
    print("After granting access, run: studio-calendar exchange <code>")

    if not no_browser:
        webbrowser.open(url)
    return 0


def cmd_exchange(code: str) -> int:
    """Exchange an authorization code and print the refresh token."""
    try:
        client = _get_client()
        tokens = client.exchange_code_for_tokens(code)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    refresh_token = tokens.get("refresh_token")
    if not refresh_token:
        print("No refresh token returned; revoke access and authorize again.")
        return 1

    print("Authorization successful. Add this line to .env:")
    print()
    print(f"GOOGLE_REFRESH_TOKEN={refresh_token}")
    return 0


def cmd_list(max_results: int) -> int:
    """List upcoming events."""
    from studio_calendar.calendar import Event

    try:
        items = _get_client().list_upcoming_events(max_results)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    if not items:
        print("No upcoming events")
        return 0

    for item in items:
        event = Event.from_api(item)
        when = event.start.isoformat() if event.start else "?"
        location = f" @ {event.location}" if event.location else ""
        print(f"{when}  {event.summary}{location}  [{event.id}]")
    return 0


def cmd_get(event_id: str) -> int:
    """Print one event as JSON."""
    try:
        event = _get_client().get_event(event_id)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    print(json.dumps(event, indent=2))
    return 0


def cmd_create(args: argparse.Namespace) -> int:
    """Create an event."""
    from studio_calendar.calendar import EventInput

    event_input = EventInput(
        summary=args.summary,
        start_date_time=args.start,
        end_date_time=args.end,
        description=args.description,
        location=args.location,
        attendees=args.attendee or [],
        time_zone=args.time_zone,
    )

    try:
        event = _get_client().create_event(event_input)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    print(f"Created event {event.get('id')}")
    if event.get("htmlLink"):
        print(f"  {event['htmlLink']}")
    return 0


def cmd_delete(event_id: str) -> int:
    """Delete an event."""
    try:
        _get_client().delete_event(event_id)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    print(f"Deleted event {event_id}")
    return 0


def cmd_check(start: str, end: str) -> int:
    """Check whether a slot is free."""
    try:
        available = _get_client().check_availability(start, end)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    print("available" if available else "busy")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="studio-calendar",
        description="Google Calendar booking client",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # status command
    subparsers.add_parser("status", help="Show configuration and token status")

    # auth-url command
    auth_parser = subparsers.add_parser("auth-url", help="Print the OAuth consent URL")
    auth_parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Don't open browser automatically",
    )

    # exchange command
    exchange_parser = subparsers.add_parser("exchange", help="Exchange an authorization code")
    exchange_parser.add_argument("code", help="Code from the OAuth callback")

    # list command
    list_parser = subparsers.add_parser("list", help="List upcoming events")
    list_parser.add_argument(
        "-n",
        "--max-results",
        type=int,
        default=10,
        help="Maximum number of events (default: 10)",
    )

    # get command
    get_parser = subparsers.add_parser("get", help="Show an event")
    get_parser.add_argument("event_id", help="Event ID")

    # create command
    create_parser = subparsers.add_parser("create", help="Create an event")
    create_parser.add_argument("--summary", required=True, help="Event title")
    create_parser.add_argument("--start", required=True, help="Start, ISO 8601")
    create_parser.add_argument("--end", required=True, help="End, ISO 8601")
    create_parser.add_argument("--description", help="Event description")
    create_parser.add_argument("--location", help="Event location")
    create_parser.add_argument(
        "--attendee",
        action="append",
        help="Attendee email (repeatable)",
    )
    create_parser.add_argument("--time-zone", help="IANA time zone (default: from config)")

    # delete command
    delete_parser = subparsers.add_parser("delete", help="Delete an event")
    delete_parser.add_argument("event_id", help="Event ID")

    # check command
    check_parser = subparsers.add_parser("check", help="Check whether a slot is free")
    check_parser.add_argument("start", help="Range start, ISO 8601")
    check_parser.add_argument("end", help="Range end, ISO 8601")

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "status":
        return cmd_status()
    elif args.command == "auth-url":
        return cmd_auth_url(args.no_browser)
    elif args.command == "exchange":
        return cmd_exchange(args.code)
    elif args.command == "list":
        return cmd_list(args.max_results)
    elif args.command == "get":
        return cmd_get(args.event_id)
    elif args.command == "create":
        return cmd_create(args)
    elif args.command == "delete":
        return cmd_delete(args.event_id)
    elif args.command == "check":
        return cmd_check(args.start, args.end)

    return 0


if __name__ == "__main__":
    sys.exit(main())
