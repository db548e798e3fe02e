"""Turn calendar events into styled output lines.

Each timed event line is made of an optional prefix and a body:

    Happening now: Sync @ Room 4 10:00-12:00
    ^ prefix       ^ body

The prefix is styled by when the event happens relative to now, the body by
the user's response status. Writers map styles to colors.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from enum import Enum

from galendar.models import Event, RenderedLine, Segment, Style

logger = logging.getLogger(__name__)

NO_EVENTS = "No upcoming events found."


class EventClass(Enum):
    """When an event happens relative to the current time."""

    ALL_DAY = "all_day"
    HAPPENING_NOW = "happening_now"
    TODAY = "today"
    NOT_TODAY = "not_today"


PREFIXES = {
    EventClass.HAPPENING_NOW: Segment("Happening now: ", Style.AFFIRMATIVE),
    EventClass.NOT_TODAY: Segment("Not today: ", Style.CAUTION),
}


def format_time(t: datetime) -> str:
    return t.strftime("%H:%M")


def format_event(summary: str, start: datetime, end: datetime, location: str | None) -> str:
    """Format a timed event as "summary @ location HH:MM-HH:MM"."""
    return f"{summary} @ {location or '-'} {format_time(start)}-{format_time(end)}"


def status_style(response_status: str) -> Style:
    if response_status == "accepted":
        return Style.AFFIRMATIVE
    if response_status == "declined":
        return Style.ALERT
    return Style.CAUTION


def classify(event: Event, now: datetime) -> EventClass:
    """Classify an event against the current time.

    An event that has started is "happening now" even once its end has
    passed; the events listing is bounded below by now, so ended events are
    not expected here.
    """
    if event.is_all_day:
        return EventClass.ALL_DAY
    if now >= event.start:
        return EventClass.HAPPENING_NOW
    if event.start.astimezone(now.tzinfo).date() == now.date():
        return EventClass.TODAY
    return EventClass.NOT_TODAY


def render_event(event: Event, now: datetime) -> RenderedLine:
    event_class = classify(event, now)
    if event_class is EventClass.ALL_DAY:
        return RenderedLine.plain(f"Full-day: {event.summary} ({event.start.isoformat()})")

    body = Segment(
        format_event(event.summary, event.start, event.end, event.location),
        status_style(event.response_status),
    )
    prefix = PREFIXES.get(event_class)
    return RenderedLine((prefix, body) if prefix else (body,))


def render(calendar_id: str, events: Sequence[Event], now: datetime) -> list[RenderedLine]:
    """Render events in the order given.

    Args:
        calendar_id: Calendar the events were read from.
        events: Events sorted by start time.
        now: Current time, timezone-aware.

    Returns:
        One line per event, or a single alert line when there are none.
    """
    logger.debug(f"Rendering {len(events)} events for {calendar_id}")
    if not events:
        return [RenderedLine.plain(NO_EVENTS, Style.ALERT)]
    return [render_event(event, now) for event in events]
