"""Agenda endpoints: event CRUD, grouped view and the live agenda stream."""

import logging

from fastapi import APIRouter, HTTPException, Response, status
from fastapi.responses import StreamingResponse

from serenity.api.deps import ServicesDep, SessionDep
from serenity.api.streaming import sse_response, watch_stream
from serenity.models.schemas import AgendaView, Event, EventDraft
from serenity.services.events import (
    EventNotFoundError,
    EventValidationError,
    events_from_snapshot,
    first_event_text,
    group_by_date,
    today_label,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


def agenda_view(events: list[Event]) -> AgendaView:
    return AgendaView(
        today=today_label(),
        first_event=first_event_text(events),
        groups=group_by_date(events),
    )


@router.get("", response_model=list[Event])
async def list_events(session: SessionDep, services: ServicesDep) -> list[Event]:
    return await services.events.list_events(session)


@router.get("/grouped", response_model=AgendaView)
async def grouped_events(session: SessionDep, services: ServicesDep) -> AgendaView:
    """Events grouped under date headers, earliest first."""
    return agenda_view(await services.events.list_events(session))


@router.get("/stream")
async def stream_events(session: SessionDep, services: ServicesDep) -> StreamingResponse:
    """Live agenda as Server-Sent Events."""
    return sse_response(
        watch_stream(
            lambda callback: services.events.watch(session, callback),
            lambda documents: agenda_view(events_from_snapshot(documents)),
        )
    )


@router.post("", response_model=Event, status_code=status.HTTP_201_CREATED)
async def create_event(
    draft: EventDraft, session: SessionDep, services: ServicesDep
) -> Event:
    try:
        return await services.events.save(session, None, draft)
    except EventValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.put("/{event_id}", response_model=Event)
async def update_event(
    event_id: str, draft: EventDraft, session: SessionDep, services: ServicesDep
) -> Event:
    try:
        return await services.events.save(session, event_id, draft)
    except EventValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except EventNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: str, session: SessionDep, services: ServicesDep) -> Response:
    try:
        await services.events.delete(session, event_id)
    except EventValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except EventNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
