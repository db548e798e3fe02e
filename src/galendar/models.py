"""Event and rendering data types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from galendar.exceptions import MalformedEventTime

DEFAULT_RESPONSE_STATUS = "accepted"


class Style(Enum):
    """Semantic style of a piece of output, mapped to a color by the writer."""

    PLAIN = "plain"
    AFFIRMATIVE = "affirmative"
    ALERT = "alert"
    CAUTION = "caution"


@dataclass(frozen=True)
class Segment:
    """A run of text sharing one style."""

    text: str
    style: Style = Style.PLAIN


@dataclass(frozen=True)
class RenderedLine:
    """One line of output made of styled segments."""

    segments: tuple[Segment, ...]

    @classmethod
    def plain(cls, text: str, style: Style = Style.PLAIN) -> RenderedLine:
        """Build a line holding a single segment."""
        return cls((Segment(text, style),))

    @property
    def text(self) -> str:
        """Line text without any styling."""
        return "".join(segment.text for segment in self.segments)


@dataclass(frozen=True)
class Attendee:
    """An event attendee as seen by the authenticated user."""

    is_self: bool = False
    response_status: str = "needsAction"


@dataclass
class Event:
    """Represents a calendar event.

    ``start`` and ``end`` are plain dates for all-day events and
    timezone-aware datetimes otherwise.
    """

    summary: str
    start: date | datetime
    end: date | datetime
    location: str | None = None
    attendees: list[Attendee] = field(default_factory=list)

    @property
    def is_all_day(self) -> bool:
        """Check if event is all-day (no time component)."""
        return not isinstance(self.start, datetime)

    @property
    def response_status(self) -> str:
        """Response status of the self attendee, "accepted" when absent."""
        for attendee in self.attendees:
            if attendee.is_self:
                return attendee.response_status
        return DEFAULT_RESPONSE_STATUS

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Event:
        """Parse event from a Calendar API event resource.

        Raises:
            MalformedEventTime: If a timed start or end is not an RFC 3339
                timestamp with an offset.
        """
        summary = data.get("summary", "")
        start = _parse_event_time(data.get("start", {}), summary)
        end = _parse_event_time(data.get("end", {}), summary)

        attendees = [
            Attendee(
                is_self=bool(item.get("self", False)),
                response_status=item.get("responseStatus", "needsAction"),
            )
            for item in data.get("attendees", [])
        ]

        return cls(
            summary=summary,
            start=start,
            end=end,
            location=data.get("location"),
            attendees=attendees,
        )


def parse_timestamp(value: str, summary: str = "") -> datetime:
    """Parse an RFC 3339 timestamp, keeping its offset."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError, AttributeError) as e:
        raise MalformedEventTime(str(value), summary) from e

    if parsed.tzinfo is None:
        raise MalformedEventTime(value, summary)
    return parsed


def _parse_event_time(data: dict[str, Any], summary: str) -> date | datetime:
    if data.get("dateTime"):
        return parse_timestamp(data["dateTime"], summary)

    # All-day events only carry a civil date
    value = data.get("date")
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise MalformedEventTime(str(value), summary) from e
