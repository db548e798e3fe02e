"""Tests for the calendar query flow."""

import io
from datetime import date, datetime, timedelta, timezone

import pytest

from galendar.calendar.base import BaseCalendarProvider
from galendar.exceptions import NoMatchingCalendar
from galendar.models import Event
from galendar.query import find_calendar, run_query
from galendar.terminal import TerminalWriter

NOW = datetime(2024, 1, 2, 9, 0, tzinfo=timezone.utc)


class FakeProvider(BaseCalendarProvider):
    """In-memory calendar provider recording its calls."""

    def __init__(self, calendar_ids=None, events=None):
        self.calendar_ids = calendar_ids or []
        self.events = events or []
        self.list_calls = 0
        self.event_calls = []

    def list_calendar_ids(self):
        self.list_calls += 1
        return list(self.calendar_ids)

    def list_events(self, calendar_id, time_min, time_max, max_results=10):
        self.event_calls.append((calendar_id, time_min, time_max, max_results))
        return list(self.events)


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def writer(output):
    return TerminalWriter(output, color=False)


class TestFindCalendar:
    """Test calendar lookup against a provider."""

    def test_empty_name_skips_provider(self):
        """Should use primary without listing calendars."""
        provider = FakeProvider(["work"])
        assert find_calendar(provider, "") == "primary"
        assert provider.list_calls == 0

    def test_fuzzy_name(self):
        """Should resolve a name against the provider's calendars."""
        provider = FakeProvider(["myCale", "notYours"])
        assert find_calendar(provider, "myCalendar") == "myCale"

    def test_no_match_raises(self):
        """Should raise NoMatchingCalendar naming the query."""
        provider = FakeProvider(["myCale", "notYours"])
        with pytest.raises(NoMatchingCalendar, match="heyYou") as exc_info:
            find_calendar(provider, "heyYou")
        assert exc_info.value.query == "heyYou"

    def test_no_calendars_raises(self):
        """Should raise when the provider has no calendars."""
        with pytest.raises(NoMatchingCalendar):
            find_calendar(FakeProvider([]), "work")


class TestRunQuery:
    """Test the full query flow."""

    def test_queries_48_hour_window(self, writer):
        """Should ask for at most ten events in [now, now + 48h)."""
        provider = FakeProvider()
        run_query(provider, "", writer, now=NOW)
        assert provider.event_calls == [("primary", NOW, NOW + timedelta(hours=48), 10)]

    def test_no_events(self, writer, output):
        """Should print the no events line."""
        run_query(FakeProvider(), "", writer, now=NOW)
        assert output.getvalue() == "No upcoming events found.\n"

    def test_prints_events(self, writer, output):
        """Should print one line per event."""
        events = [
            Event(
                summary="Sync",
                start=datetime(2024, 1, 2, 10, 0, tzinfo=timezone.utc),
                end=datetime(2024, 1, 2, 12, 0, tzinfo=timezone.utc),
                location="",
            ),
            Event(summary="Standup", start=date(2024, 1, 2), end=date(2024, 1, 3)),
        ]
        run_query(FakeProvider(events=events), "", writer, now=NOW)
        assert output.getvalue() == "Sync @ - 10:00-12:00\nFull-day: Standup (2024-01-02)\n"

    def test_fuzzy_match_notice(self, writer, output):
        """Should announce which calendar was picked for an inexact name."""
        provider = FakeProvider(["myCale", "notYours"])
        calendar_id = run_query(provider, "myCalendar", writer, now=NOW)

        assert calendar_id == "myCale"
        assert provider.event_calls[0][0] == "myCale"
        assert output.getvalue().startswith(
            "No exact match for myCalendar, but found myCale\n\nNo upcoming events found.\n"
        )

    def test_exact_match_no_notice(self, writer, output):
        """Should not announce an exact match."""
        run_query(FakeProvider(["work", "home"]), "work", writer, now=NOW)
        assert output.getvalue() == "No upcoming events found.\n"

    def test_no_match_fetches_nothing(self, writer):
        """Should stop before fetching events when no calendar matches."""
        provider = FakeProvider(["myCale", "notYours"])
        with pytest.raises(NoMatchingCalendar):
            run_query(provider, "heyYou", writer, now=NOW)
        assert provider.event_calls == []

    def test_defaults_to_aware_now(self, writer):
        """Should use the current local time when none is given."""
        provider = FakeProvider()
        run_query(provider, "", writer)
        _, time_min, time_max, _ = provider.event_calls[0]
        assert time_min.tzinfo is not None
        assert time_max - time_min == timedelta(hours=48)
