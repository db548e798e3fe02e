"""galendar exceptions."""


class GalendarError(Exception):
    """Base exception for galendar errors."""

    pass


class NoMatchingCalendar(GalendarError):
    """Raised when no known calendar resembles the requested name."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"No matching calendar from the provided calendar: {query}")


class MalformedEventTime(GalendarError):
    """Raised when an event's start or end time cannot be parsed."""

    def __init__(self, value: str, summary: str = ""):
        self.value = value
        self.summary = summary
        super().__init__(f"Failed to parse event's time: {value!r} (event: {summary!r})")


class CalendarAPIError(GalendarError):
    """Raised when the Calendar API returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
