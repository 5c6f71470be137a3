"""Calendar events backends.

`CalendarClient` only needs the five `events` calls, so it talks to them
through `EventsBackend`. `GoogleEventsBackend` forwards to googleapiclient;
tests use an in-memory implementation.
"""

from __future__ import annotations

from typing import Any, Protocol

from studio_calendar.google import GoogleOAuth


class EventsBackend(Protocol):
    """The `events` resource of the Calendar API.

    Every method takes the API's own keyword parameters (calendarId, eventId,
    body, sendUpdates, ...) and returns the decoded response body.
    """

    def insert(self, **params: Any) -> dict[str, Any]: ...

    def get(self, **params: Any) -> dict[str, Any]: ...

    def update(self, **params: Any) -> dict[str, Any]: ...

    def delete(self, **params: Any) -> None: ...

    def list(self, **params: Any) -> dict[str, Any]: ...


class GoogleEventsBackend:
    """`EventsBackend` over the Calendar v3 discovery client."""

    def __init__(self, auth: GoogleOAuth) -> None:
        self._auth = auth
        self._service: Any = None
        self._revision = -1

    def _events(self) -> Any:
        """Get the events resource, rebuilding the service after a token change."""
        if self._service is None or self._revision != self._auth.revision:
            self._service = self._auth.build_service("calendar", "v3")
            self._revision = self._auth.revision
        return self._service.events()

    def insert(self, **params: Any) -> dict[str, Any]:
        return self._events().insert(**params).execute()

    def get(self, **params: Any) -> dict[str, Any]:
        return self._events().get(**params).execute()

    def update(self, **params: Any) -> dict[str, Any]:
        return self._events().update(**params).execute()

    def delete(self, **params: Any) -> None:
        self._events().delete(**params).execute()

    def list(self, **params: Any) -> dict[str, Any]:
        return self._events().list(**params).execute()
