"""Google Calendar API client implementation."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from studio_calendar.calendar.backend import EventsBackend, GoogleEventsBackend
from studio_calendar.calendar.models import APPOINTMENT_COLOR_ID, EventInput
from studio_calendar.config import DEFAULT_TIME_ZONE, Settings
from studio_calendar.google import GoogleOAuth

logger = logging.getLogger(__name__)

PRIMARY_CALENDAR = "primary"


class CalendarClient:
    """Google Calendar client for the primary calendar.

    Wraps an OAuth credential holder and an events backend. Responses are
    returned exactly as the API sends them; API errors are logged and
    re-raised unchanged.

    Usage:
        client = CalendarClient.from_env()

        # First run: authorize and keep the refresh token
        print(client.get_authorization_url())
        tokens = client.exchange_code_for_tokens(code)

        event = client.create_event(
            EventInput(
                summary="Consultation",
                start_date_time="2026-01-25T10:00:00",
                end_date_time="2026-01-25T11:00:00",
                attendees=["client@example.com"],
            )
        )
    """

    def __init__(
        self,
        auth: GoogleOAuth,
        backend: EventsBackend | None = None,
        default_time_zone: str = DEFAULT_TIME_ZONE,
    ) -> None:
        """Initialize Calendar client.

        Args:
            auth: Credential holder shared with the backend.
            backend: Events backend. Defaults to the Google API.
            default_time_zone: Zone for events created without one.
        """
        self.auth = auth
        self.backend = backend if backend is not None else GoogleEventsBackend(auth)
        self.default_time_zone = default_time_zone

    @classmethod
    def from_env(cls, settings: Settings | None = None) -> CalendarClient:
        """Create a client from environment configuration."""
        settings = settings or Settings.from_env()
        return cls(
            GoogleOAuth.from_settings(settings),
            default_time_zone=settings.time_zone,
        )

    # =========================================================================
    # Authorization
    # =========================================================================

    def get_authorization_url(self) -> str:
        """Consent URL requesting offline calendar access."""
        return self.auth.get_authorization_url()

    def exchange_code_for_tokens(self, code: str) -> dict[str, Any]:
        """Exchange an authorization code for tokens.

        The returned token set becomes the active credential.

        Args:
            code: Authorization code from the OAuth callback.

        Returns:
            Token dict (access_token, refresh_token, expires_at, scope, token_type).
        """
        try:
            return self.auth.fetch_token(code)
        except Exception as e:
            logger.error(f"Error getting tokens: {e}")
            raise

    def set_credentials(self, tokens: dict[str, Any]) -> None:
        """Set stored tokens as the active credential."""
        self.auth.set_credentials(tokens)

    def is_authorized(self) -> bool:
        """Check if any token is held. Operations never check this."""
        return self.auth.is_authorized()

    # =========================================================================
    # Events
    # =========================================================================

    def create_event(self, event: EventInput) -> dict[str, Any]:
        """Create an event and notify attendees.

        Args:
            event: Event details.

        Returns:
            Created event resource.
        """
        try:
            return self.backend.insert(
                calendarId=PRIMARY_CALENDAR,
                body=event.to_body(
                    color_id=APPOINTMENT_COLOR_ID,
                    default_time_zone=self.default_time_zone,
                ),
                sendUpdates="all",
            )
        except Exception as e:
            logger.error(f"Error creating calendar event: {e}")
            raise

    def get_event(self, event_id: str) -> dict[str, Any]:
        """Get an event by ID."""
        try:
            return self.backend.get(calendarId=PRIMARY_CALENDAR, eventId=event_id)
        except Exception as e:
            logger.error(f"Error getting calendar event: {e}")
            raise

    def update_event(self, event_id: str, event: EventInput) -> dict[str, Any]:
        """Replace an event and notify attendees.

        The event color is left out, so the stored color is kept as is.

        Args:
            event_id: Event ID to update.
            event: New event details.

        Returns:
            Updated event resource.
        """
        try:
            return self.backend.update(
                calendarId=PRIMARY_CALENDAR,
                eventId=event_id,
                body=event.to_body(default_time_zone=self.default_time_zone),
                sendUpdates="all",
            )
        except Exception as e:
            logger.error(f"Error updating calendar event: {e}")
            raise

    def delete_event(self, event_id: str) -> None:
        """Delete an event and send cancellations to attendees."""
        try:
            self.backend.delete(
                calendarId=PRIMARY_CALENDAR,
                eventId=event_id,
                sendUpdates="all",
            )
        except Exception as e:
            logger.error(f"Error deleting calendar event: {e}")
            raise

    def list_upcoming_events(self, max_results: int = 10) -> list[dict[str, Any]]:
        """List events from now on, earliest first.

        Recurring events are expanded into their instances.

        Args:
            max_results: Maximum number of events to return.

        Returns:
            List of event resources, empty if there are none.
        """
        try:
            response = self.backend.list(
                calendarId=PRIMARY_CALENDAR,
                timeMin=_now_rfc3339(),
                maxResults=max_results,
                singleEvents=True,
                orderBy="startTime",
            )
        except Exception as e:
            logger.error(f"Error listing calendar events: {e}")
            raise

        items = (response or {}).get("items") or []
        return items[:max_results]

    def check_availability(self, start_date_time: str, end_date_time: str) -> bool:
        """Check whether no event falls within a time range.

        Any event in the range counts as a conflict, whatever its status or
        transparency.

        Args:
            start_date_time: Range start, ISO 8601.
            end_date_time: Range end (exclusive), ISO 8601.

        Returns:
            True if the slot is free.
        """
        try:
            response = self.backend.list(
                calendarId=PRIMARY_CALENDAR,
                timeMin=start_date_time,
                timeMax=end_date_time,
                singleEvents=True,
            )
        except Exception as e:
            logger.error(f"Error checking availability: {e}")
            raise

        return not (response or {}).get("items")


def _now_rfc3339() -> str:
    """Current UTC time, e.g. 2026-01-25T10:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
