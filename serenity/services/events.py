"""Agenda of personal reminders.

Events live in the events collection, one document per reminder, and are
always read through a userId equality query.
"""

import datetime
import logging
from collections import defaultdict

from serenity.auth.session import Session
from serenity.models.schemas import DATE_FORMAT, Event, EventDraft, EventGroup
from serenity.store.base import DocumentStore, QueryCallback, Subscription

logger = logging.getLogger(__name__)

EVENTS_COLLECTION = "events"
NO_EVENTS = "Sin eventos"

# Spanish names, independent of the process locale
WEEKDAYS = ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]
MONTHS = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]


class EventValidationError(ValueError):
    """Raised when an event payload is rejected."""


class EventNotFoundError(LookupError):
    """Raised when an event does not exist or belongs to another user."""


def long_date(day: datetime.date) -> str:
    """Format a date like "Miércoles, 29 de marzo"."""
    text = f"{WEEKDAYS[day.weekday()]}, {day.day} de {MONTHS[day.month - 1]}"
    return text[:1].upper() + text[1:]


def date_label(date_string: str) -> str:
    """Header label for a stored yyyy-MM-dd date, or the raw string if unparsable."""
    try:
        return long_date(datetime.datetime.strptime(date_string, DATE_FORMAT).date())
    except ValueError:
        return date_string


def today_label(today: datetime.date | None = None) -> str:
    return long_date(today or datetime.date.today())


def group_by_date(events: list[Event]) -> list[EventGroup]:
    """Group events by identical date string, headers sorted ascending.

    Within a group events keep their input order.
    """
    grouped: dict[str, list[Event]] = defaultdict(list)
    for event in events:
        grouped[event.date].append(event)
    return [
        EventGroup(date=date_string, label=date_label(date_string), events=grouped[date_string])
        for date_string in sorted(grouped)
    ]


def first_event_text(events: list[Event]) -> str:
    """Summary of the earliest event for the home screen."""
    if not events:
        return NO_EVENTS
    event = min(events, key=lambda e: e.date)
    return f"{event.title} - {event.date}"


def events_from_snapshot(documents: list[tuple[str, dict]]) -> list[Event]:
    return [Event.model_validate({**data, "id": doc_id}) for doc_id, data in documents]


class EventService:
    """CRUD and live query over the signed-in user's events."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def list_events(self, session: Session) -> list[Event]:
        documents = await self._store.where_equal(EVENTS_COLLECTION, "userId", session.uid)
        return events_from_snapshot(documents)

    def watch(self, session: Session, callback: QueryCallback) -> Subscription:
        """Subscribe to the user's events; the callback receives raw documents."""
        return self._store.watch_query(EVENTS_COLLECTION, "userId", session.uid, callback)

    async def save(self, session: Session, event_id: str | None, draft: EventDraft) -> Event:
        """Create (event_id None) or overwrite one of the user's events.

        Raises:
            EventValidationError: If the title is blank.
            EventNotFoundError: When editing an event that is missing or not owned.
        """
        title = draft.title.strip()
        if not title:
            raise EventValidationError("Event title is required")

        if event_id is None:
            event_id = self._store.new_id(EVENTS_COLLECTION)
        else:
            await self._owned(session, event_id)

        event = Event(
            id=event_id,
            userId=session.uid,
            date=draft.date.strftime(DATE_FORMAT),
            title=title,
        )
        await self._store.set(EVENTS_COLLECTION, event_id, event.model_dump())
        logger.info(f"Saved event {event_id} for {session.uid}")
        return event

    async def delete(self, session: Session, event_id: str) -> None:
        if not event_id or not event_id.strip():
            raise EventValidationError("Event id is required")
        await self._owned(session, event_id)
        await self._store.delete(EVENTS_COLLECTION, event_id)
        logger.info(f"Deleted event {event_id} for {session.uid}")

    async def _owned(self, session: Session, event_id: str) -> dict:
        data = await self._store.get(EVENTS_COLLECTION, event_id)
        if data is None or data.get("userId") != session.uid:
            raise EventNotFoundError(f"Event {event_id} not found")
        return data
