"""Google Calendar API client with OAuth authentication.

Usage:
    from galendar.calendar import CalendarClient

    # Initialize (requires OAuth authorization)
    client = CalendarClient()

    # List calendar IDs
    calendar_ids = client.list_calendar_ids()

    # List events in a window
    events = client.list_events("primary", time_min, time_max)

OAuth Setup:
    1. Download OAuth credentials from Google Cloud Console
    2. Save them as ~/.credentials/galendar_client_secret.json
    3. Run galendar once and follow the authorization prompt
"""

from __future__ import annotations

from galendar.calendar.base import BaseCalendarProvider
from galendar.calendar.client import Calendar, CalendarClient

__all__ = ["BaseCalendarProvider", "CalendarClient", "Calendar"]
