"""Show upcoming Google Calendar events in the terminal.

Usage:
    from galendar import render, resolve

    calendar_id = resolve("work", ["primary", "work@group.calendar.google.com"])
    for line in render(calendar_id, events, now):
        print(line.text)
"""

from galendar.exceptions import GalendarError, MalformedEventTime, NoMatchingCalendar
from galendar.models import Attendee, Event, RenderedLine, Segment, Style
from galendar.presenter import render
from galendar.resolver import resolve, similarity

__version__ = "0.1.0"

__all__ = [
    "Attendee",
    "Event",
    "GalendarError",
    "MalformedEventTime",
    "NoMatchingCalendar",
    "RenderedLine",
    "Segment",
    "Style",
    "render",
    "resolve",
    "similarity",
]
