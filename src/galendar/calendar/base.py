"""
Abstract base class for calendar providers.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from galendar.models import Event


class BaseCalendarProvider(ABC):
    """Source of calendar IDs and events for an authenticated user."""

    @abstractmethod
    def list_calendar_ids(self) -> list[str]:
        """
        List the IDs of every calendar the user can read.

        Returns:
            Calendar IDs in provider order.
        """
        pass

    @abstractmethod
    def list_events(
        self,
        calendar_id: str,
        time_min: datetime,
        time_max: datetime,
        max_results: int = 10,
    ) -> list[Event]:
        """
        List events overlapping [time_min, time_max).

        Args:
            calendar_id: Calendar ID or "primary".
            time_min: Start of the window, timezone-aware.
            time_max: End of the window, timezone-aware.
            max_results: Maximum number of events to return.

        Returns:
            Events sorted by start time.

        Raises:
            MalformedEventTime: If an event's time cannot be parsed.
            CalendarAPIError: If the provider rejects the request.
        """
        pass
