"""CLI for galendar - upcoming events from Google Calendar.

Usage:
    galendar                 # Events of the primary calendar
    galendar <calendar>      # Events of the calendar closest to <calendar>
"""

from __future__ import annotations

import argparse
import sys
import webbrowser


def login(client) -> int:
    """Interactive Google OAuth login."""
    from galendar.google import TokenError

    auth = client.auth
    print("Galendar needs read access to your calendars.")
    print("A browser window will open for Google consent.")
    print("After granting access, copy the redirect URL back here.\n")

    url = auth.get_authorization_url()
    print(f"Authorization URL:\n{url}\n")
    webbrowser.open(url)

    redirect_url = input("Paste redirect URL: ").strip()
    if not redirect_url:
        print("No URL provided; aborting.", file=sys.stderr)
        return 1

    try:
        auth.fetch_token(redirect_url)
    except TokenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Token saved to: {auth.token_path}\n")
    return 0


def cmd_query(calendar: str) -> int:
    """Print upcoming events for a calendar."""
    from galendar.calendar import CalendarClient
    from galendar.exceptions import GalendarError
    from galendar.google import AuthorizationRequired, GoogleAuthError
    from galendar.query import run_query
    from galendar.terminal import TerminalWriter

    writer = TerminalWriter()

    try:
        client = CalendarClient()
        try:
            run_query(client, calendar, writer)
        except AuthorizationRequired:
            if login(client) != 0:
                return 1
            run_query(client, calendar, writer)
    except (GalendarError, GoogleAuthError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    from galendar.config import configure_logging

    parser = argparse.ArgumentParser(
        prog="galendar",
        description="Show the next 48 hours of a Google Calendar",
    )
    parser.add_argument(
        "calendar",
        nargs="?",
        default="",
        help="Calendar name; the closest calendar ID is used (default: primary)",
    )

    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    configure_logging()
    return cmd_query(args.calendar)


if __name__ == "__main__":
    sys.exit(main())
