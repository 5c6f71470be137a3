"""Google Calendar client for booking appointments.

Create, read, update and delete events on the primary calendar, with OAuth
2.0 authentication.

Usage:
    from studio_calendar.calendar import CalendarClient, EventInput

    client = CalendarClient.from_env()

    # Check a slot and book it
    if client.check_availability("2026-01-25T10:00:00+02:00", "2026-01-25T11:00:00+02:00"):
        event = client.create_event(
            EventInput(
                summary="Consultation",
                start_date_time="2026-01-25T10:00:00",
                end_date_time="2026-01-25T11:00:00",
            )
        )

OAuth Setup:
    1. Set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET in .env
    2. Authorize: studio-calendar auth-url, then studio-calendar exchange <code>
    3. Store the printed refresh token as GOOGLE_REFRESH_TOKEN
"""

from __future__ import annotations

from studio_calendar.calendar.backend import EventsBackend, GoogleEventsBackend
from studio_calendar.calendar.client import CalendarClient
from studio_calendar.calendar.models import Event, EventInput

__all__ = [
    "CalendarClient",
    "EventInput",
    "Event",
    "EventsBackend",
    "GoogleEventsBackend",
]
