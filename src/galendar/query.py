"""Look up a calendar by name and print its upcoming events."""

from __future__ import annotations

import logging
from datetime import datetime

from galendar.calendar.base import BaseCalendarProvider
from galendar.config import DEFAULT_CALENDAR, LOOKAHEAD, MAX_RESULTS
from galendar.exceptions import NoMatchingCalendar
from galendar.presenter import render
from galendar.resolver import is_fuzzy_match, resolve
from galendar.terminal import TerminalWriter

logger = logging.getLogger(__name__)


def find_calendar(provider: BaseCalendarProvider, calendar: str) -> str:
    """Resolve a calendar name against the provider's calendars.

    Raises:
        NoMatchingCalendar: If no calendar resembles ``calendar``.
    """
    if not calendar:
        return DEFAULT_CALENDAR

    calendar_ids = provider.list_calendar_ids()
    logger.info(f"Matching {calendar!r} against {len(calendar_ids)} calendars")

    calendar_id = resolve(calendar, calendar_ids)
    if not calendar_id:
        raise NoMatchingCalendar(calendar)
    return calendar_id


def run_query(
    provider: BaseCalendarProvider,
    calendar: str,
    writer: TerminalWriter,
    now: datetime | None = None,
) -> str:
    """Print the events of the next 48 hours for a calendar.

    Args:
        provider: Authenticated calendar provider.
        calendar: Calendar name as typed by the user, or "" for primary.
        writer: Output for notices and event lines.
        now: Current time. Defaults to the local time.

    Returns:
        The calendar ID that was queried.
    """
    now = now or datetime.now().astimezone()

    calendar_id = find_calendar(provider, calendar)
    if is_fuzzy_match(calendar, calendar_id):
        writer.write_notice(f"No exact match for {calendar}, but found {calendar_id}")
        writer.blank()

    events = provider.list_events(calendar_id, now, now + LOOKAHEAD, max_results=MAX_RESULTS)
    writer.write_lines(render(calendar_id, events, now))
    return calendar_id
