"""Google Calendar API client implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from googleapiclient.errors import HttpError

from galendar.calendar.base import BaseCalendarProvider
from galendar.config import MAX_RESULTS
from galendar.exceptions import CalendarAPIError
from galendar.google import GoogleOAuth
from galendar.google.exceptions import AuthorizationRequired
from galendar.models import Event

logger = logging.getLogger(__name__)


@dataclass
class Calendar:
    """Represents a Google Calendar."""

    id: str
    summary: str
    description: str | None = None
    primary: bool = False
    time_zone: str | None = None


class CalendarClient(BaseCalendarProvider):
    """Google Calendar API client with OAuth authentication.

    Usage:
        client = CalendarClient()

        # List calendars
        calendars = client.list_calendars()

        # List events
        events = client.list_events("primary", time_min, time_max)

    Note:
        Requires OAuth authorization. Running galendar without a token
        starts the authorization prompt.
    """

    def __init__(
        self,
        scopes: list[str] | None = None,
        auth: GoogleOAuth | None = None,
    ) -> None:
        """Initialize Calendar client.

        Args:
            scopes: OAuth scopes. Defaults to ["calendar_readonly"].
            auth: Preconfigured OAuth manager. Created on first use otherwise.
        """
        self._scopes = scopes or ["calendar_readonly"]
        self._auth = auth
        self._service: Any = None

    @property
    def auth(self) -> GoogleOAuth:
        """OAuth manager used to authorize API calls."""
        if self._auth is None:
            self._auth = GoogleOAuth(scopes=self._scopes)
        return self._auth

    def _get_service(self) -> Any:
        """Get or create Calendar API service."""
        if self._service is None:
            if not self.auth.is_authorized():
                raise AuthorizationRequired(
                    self.auth.get_authorization_url(),
                    "Calendar API requires OAuth authorization.",
                )
            self._service = self.auth.build_service("calendar", "v3")
        return self._service

    def _execute(self, request: Any, what: str) -> dict[str, Any]:
        try:
            return request.execute()
        except HttpError as e:
            raise CalendarAPIError(
                f"Unable to retrieve {what}: {e}", status_code=e.resp.status
            ) from e

    # =========================================================================
    # Calendars
    # =========================================================================

    def list_calendars(self) -> list[Calendar]:
        """List all calendars.

        Returns:
            List of Calendar objects.
        """
        service = self._get_service()
        results = self._execute(service.calendarList().list(), "the calendar list")
        items = results.get("items", [])

        return [self._parse_calendar(item) for item in items]

    def list_calendar_ids(self) -> list[str]:
        return [calendar.id for calendar in self.list_calendars()]

    def _parse_calendar(self, data: dict) -> Calendar:
        """Parse calendar from API response."""
        return Calendar(
            id=data["id"],
            summary=data.get("summary", ""),
            description=data.get("description"),
            primary=data.get("primary", False),
            time_zone=data.get("timeZone"),
        )

    # =========================================================================
    # Events
    # =========================================================================

    def list_events(
        self,
        calendar_id: str,
        time_min: datetime,
        time_max: datetime,
        max_results: int = MAX_RESULTS,
    ) -> list[Event]:
        """List events in a calendar.

        Args:
            calendar_id: Calendar ID or "primary" for the main calendar.
            time_min: Start of time range.
            time_max: End of time range.
            max_results: Maximum number of events to return.

        Returns:
            List of Event objects sorted by start time.
        """
        service = self._get_service()

        request = service.events().list(
            calendarId=calendar_id,
            timeMin=self._format_datetime(time_min),
            timeMax=self._format_datetime(time_max),
            maxResults=max_results,
            showDeleted=False,
            singleEvents=True,
            orderBy="startTime",
        )
        results = self._execute(request, f"events for calendar {calendar_id}")
        items = results.get("items", [])
        logger.info(f"Fetched {len(items)} events from {calendar_id}")

        return [Event.from_api(item) for item in items]

    def _format_datetime(self, dt: datetime) -> str:
        """Format datetime for API."""
        return dt.isoformat() + "Z" if dt.tzinfo is None else dt.isoformat()
