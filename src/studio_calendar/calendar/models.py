"""Event shapes exchanged with the Calendar API."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from studio_calendar.config import DEFAULT_TIME_ZONE

# Reminder overrides applied to every booked event (minutes before start)
REMINDER_OVERRIDES = [
    {"method": "email", "minutes": 24 * 60},
    {"method": "popup", "minutes": 60},
]

# Banana yellow
APPOINTMENT_COLOR_ID = "5"


@dataclass
class EventInput:
    """Simplified event details.

    Start and end are ISO 8601 date-time strings and are sent to the API
    untouched, together with `time_zone`. Without a time zone the client's
    default applies.
    """

    summary: str
    start_date_time: str
    end_date_time: str
    description: str | None = None
    location: str | None = None
    attendees: list[str] = field(default_factory=list)
    time_zone: str | None = None

    def to_body(
        self,
        color_id: str | None = None,
        default_time_zone: str = DEFAULT_TIME_ZONE,
    ) -> dict[str, Any]:
        """Build the Calendar API event resource.

        Args:
            color_id: Event color to set, or None to leave it out.
            default_time_zone: Zone used when the input carries none.

        Returns:
            Request body for events.insert / events.update.
        """
        time_zone = self.time_zone or default_time_zone
        body: dict[str, Any] = {
            "summary": self.summary,
            "description": self.description,
            "location": self.location,
            "start": {"dateTime": self.start_date_time, "timeZone": time_zone},
            "end": {"dateTime": self.end_date_time, "timeZone": time_zone},
            "attendees": [{"email": email} for email in self.attendees],
            "reminders": {
                "useDefault": False,
                "overrides": [dict(override) for override in REMINDER_OVERRIDES],
            },
        }
        if color_id is not None:
            body["colorId"] = color_id

        # Unset fields are omitted rather than sent as null
        return {key: value for key, value in body.items() if value is not None}


@dataclass
class Event:
    """Read-only view of a Google Calendar event."""

    id: str
    summary: str
    start: datetime | None = None
    end: datetime | None = None
    description: str | None = None
    location: str | None = None
    status: str = "confirmed"
    html_link: str | None = None
    attendees: list[str] | None = None

    @classmethod
    def from_api(cls, data: dict) -> Event:
        """Parse event from API response."""
        attendees = None
        if data.get("attendees"):
            attendees = [a.get("email", "") for a in data["attendees"]]

        return cls(
            id=data["id"],
            summary=data.get("summary", ""),
            start=_parse_when(data.get("start", {})),
            end=_parse_when(data.get("end", {})),
            description=data.get("description"),
            location=data.get("location"),
            status=data.get("status", "confirmed"),
            html_link=data.get("htmlLink"),
            attendees=attendees,
        )


def _parse_when(when: dict) -> datetime | None:
    """Parse a start/end object, timed or all-day."""
    if "dateTime" in when:
        with contextlib.suppress(ValueError):
            return datetime.fromisoformat(when["dateTime"].replace("Z", "+00:00"))
    elif "date" in when:
        with contextlib.suppress(ValueError):
            return datetime.fromisoformat(when["date"])
    return None
