"""Shared fixtures: an in-memory events backend and a configured client."""

import itertools
import json
from datetime import datetime
from unittest.mock import patch

import httplib2
import pytest
import requests
from googleapiclient.errors import HttpError

from studio_calendar.calendar import CalendarClient
from studio_calendar.google import GoogleOAuth


def http_error(status: int, message: str) -> HttpError:
    """Build the HttpError googleapiclient raises for a failed call."""
    resp = httplib2.Response({"status": status})
    content = json.dumps({"error": {"code": status, "message": message}}).encode("utf-8")
    return HttpError(resp, content, uri="https://www.googleapis.com/calendar/v3/")


def token_response(status: int, payload: dict) -> requests.Response:
    """Build the response the OAuth token endpoint sends back."""
    resp = requests.Response()
    resp.status_code = status
    resp.headers["Content-Type"] = "application/json"
    resp.encoding = "utf-8"
    resp._content = json.dumps(payload).encode("utf-8")
    return resp


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class FakeEventsBackend:
    """In-memory stand-in for the Calendar API `events` resource."""

    def __init__(self):
        self.events: dict[str, dict] = {}
        self.calls: list[tuple[str, dict]] = []
        self.fail_with: HttpError | None = None
        self._ids = itertools.count(1)

    def _record(self, op: str, params: dict):
        self.calls.append((op, params))
        if self.fail_with is not None:
            raise self.fail_with

    def _lookup(self, params: dict) -> dict:
        event = self.events.get(params["eventId"])
        if event is None:
            raise http_error(404, "Not Found")
        return event

    def insert(self, **params):
        self._record("insert", params)
        event = dict(params["body"], id=f"evt{next(self._ids)}", status="confirmed")
        self.events[event["id"]] = event
        return dict(event)

    def get(self, **params):
        self._record("get", params)
        return dict(self._lookup(params))

    def update(self, **params):
        self._record("update", params)
        current = self._lookup(params)
        event = dict(params["body"], id=current["id"], status=current["status"])
        self.events[event["id"]] = event
        return dict(event)

    def delete(self, **params):
        self._record("delete", params)
        self._lookup(params)
        del self.events[params["eventId"]]

    def list(self, **params):
        self._record("list", params)
        time_min = _parse(params["timeMin"]) if params.get("timeMin") else None
        time_max = _parse(params["timeMax"]) if params.get("timeMax") else None

        items = []
        for event in self.events.values():
            start = _parse(event["start"]["dateTime"])
            end = _parse(event["end"]["dateTime"])
            if time_min is not None and end <= time_min:
                continue
            if time_max is not None and start >= time_max:
                continue
            items.append(dict(event))

        if params.get("orderBy") == "startTime":
            items.sort(key=lambda e: _parse(e["start"]["dateTime"]))
        if params.get("maxResults") is not None:
            items = items[: params["maxResults"]]

        # The API leaves out "items" when nothing matches
        return {"items": items} if items else {"kind": "calendar#events"}

    def last_call(self, op: str) -> dict:
        return [params for name, params in self.calls if name == op][-1]


@pytest.fixture
def auth():
    """Credential holder with test client configuration."""
    return GoogleOAuth(
        client_id="test-client-id.apps.googleusercontent.com",
        client_secret="test-client-secret",
        refresh_token="test-refresh-token",
    )


@pytest.fixture
def backend():
    return FakeEventsBackend()


@pytest.fixture
def client(auth, backend):
    return CalendarClient(auth, backend=backend)


@pytest.fixture
def token_endpoint():
    """Patch the HTTP transport under the authlib session.

    Set `return_value` to the response the token endpoint should send; the
    mock records the outgoing request.
    """
    with patch.object(requests.Session, "request") as request:
        request.return_value = token_response(
            200,
            {
                "access_token": "new-access-token",
                "refresh_token": "new-refresh-token",
                "token_type": "Bearer",
                "expires_in": 3599,
                "scope": "https://www.googleapis.com/auth/calendar",
            },
        )
        yield request
