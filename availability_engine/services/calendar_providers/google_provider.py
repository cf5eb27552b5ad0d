"""Google Calendar busy-time provider."""

from datetime import datetime, timezone
import logging
from typing import Any, Dict, List, Optional

import httpx

from ...core.config import settings
from ...core.exceptions import ExternalCalendarException
from ...schemas.external_calendar import RawCalendarEvent
from .base import ExternalCalendarProvider

logger = logging.getLogger(__name__)

MAX_PAGES = 20


def _parse_event_time(value: Optional[Dict[str, Any]]) -> Optional[datetime]:
    # All-day events only carry "date"; they have no instant and are left empty
    if not value or not value.get("dateTime"):
        return None
    raw = value["dateTime"]
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        logger.debug("Unparseable Google Calendar dateTime %r", value.get("dateTime"))
        return None


def _rfc3339(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class GoogleCalendarProvider(ExternalCalendarProvider):
    def __init__(
        self,
        access_token: str,
        calendar_id: str = "primary",
        name: str = "google",
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.name = name
        self.access_token = access_token
        self.calendar_id = calendar_id
        self.base_url = settings.google_calendar_api_base
        self.timeout = settings.external_calendar_timeout_seconds
        self._transport = transport

    def list_busy_events(self, range_start: datetime, range_end: datetime) -> List[RawCalendarEvent]:
        params: Dict[str, Any] = {
            "timeMin": _rfc3339(range_start),
            "timeMax": _rfc3339(range_end),
            "singleEvents": "true",
            "orderBy": "startTime",
            "maxResults": 250,
        }
        headers = {"Authorization": f"Bearer {self.access_token}"}
        url = f"{self.base_url}/calendars/{self.calendar_id}/events"
        events: List[RawCalendarEvent] = []

        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            for _ in range(MAX_PAGES):
                try:
                    resp = client.get(url, params=params, headers=headers)
                except httpx.HTTPError as exc:
                    raise ExternalCalendarException(self.name, f"request failed: {exc}") from exc

                if resp.status_code == 401:
                    raise ExternalCalendarException(self.name, "credentials expired or revoked")
                if resp.status_code != 200:
                    raise ExternalCalendarException(self.name, f"unexpected status {resp.status_code}")

                try:
                    data = resp.json()
                except ValueError as exc:
                    raise ExternalCalendarException(self.name, "invalid JSON response") from exc

                events.extend(self._parse_item(item) for item in data.get("items", []))

                page_token = data.get("nextPageToken")
                if not page_token:
                    break
                params["pageToken"] = page_token
            else:
                logger.warning(f"Google Calendar {self.calendar_id}: stopped after {MAX_PAGES} pages")

        return events

    def _parse_item(self, item: Dict[str, Any]) -> RawCalendarEvent:
        return RawCalendarEvent(
            id=str(item.get("id", "")),
            start=_parse_event_time(item.get("start")),
            end=_parse_event_time(item.get("end")),
            status=item.get("status"),
            transparency=item.get("transparency"),
            summary=item.get("summary"),
        )
